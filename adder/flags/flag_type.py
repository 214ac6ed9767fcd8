# Adder CLI Framework — (c) 2025 rtj.dev LLC — MIT Licensed
"""
Defines `FlagType`, the enum describing how a flag's raw command line text is
turned into a Python value and whether the flag may be repeated.

Supports alias coercion for shorthand or config-friendly values so flags can be
declared with either the canonical type name or a Pythonic spelling.

Exports:
    - FlagType: Enum of supported flag value types.

Example:
    FlagType("bool")         → FlagType.BOOL
    FlagType("str")          → FlagType.STRING (via alias)
    FlagType("string_slice") → FlagType.STRING_SLICE (via alias)
"""
from __future__ import annotations

from datetime import datetime
from enum import Enum
from typing import Any


class FlagType(Enum):
    """
    The value type of a flag.

    Members:
        BOOL: True/false switch, set to "true" when given without a value.
        STRING: A single string.
        INT: A single integer.
        FLOAT: A single float.
        COUNT: Integer incremented on every occurrence (`-vvv`).
        DATETIME: A date or datetime parsed with dateutil.
        STRING_SLICE: Repeatable, each occurrence may hold comma separated values.
        STRING_ARRAY: Repeatable, each occurrence holds exactly one value.
        INT_SLICE: Repeatable integers, comma separated.
        FLOAT_SLICE: Repeatable floats, comma separated.

    Aliases:
        - "str" → "string"
        - "boolean" → "bool"
        - "integer" → "int"
        - "string_slice", "list" → "stringSlice"
        - "string_array" → "stringArray"
    """

    BOOL = "bool"
    STRING = "string"
    INT = "int"
    FLOAT = "float"
    COUNT = "count"
    DATETIME = "datetime"
    STRING_SLICE = "stringSlice"
    STRING_ARRAY = "stringArray"
    INT_SLICE = "intSlice"
    FLOAT_SLICE = "floatSlice"

    @classmethod
    def choices(cls) -> list[FlagType]:
        """Return a list of all flag types."""
        return list(cls)

    @classmethod
    def _get_alias(cls, value: str) -> str:
        aliases = {
            "str": "string",
            "boolean": "bool",
            "integer": "int",
            "list": "stringslice",
            "string_slice": "stringslice",
            "string_array": "stringarray",
            "int_slice": "intslice",
            "float_slice": "floatslice",
        }
        return aliases.get(value, value)

    @classmethod
    def _missing_(cls, value: object) -> FlagType:
        if not isinstance(value, str):
            raise ValueError(f"Invalid {cls.__name__}: {value!r}")
        normalized = value.strip().lower()
        alias = cls._get_alias(normalized)
        for member in cls:
            if member.value.lower() == alias:
                return member
        valid = ", ".join(member.value for member in cls)
        raise ValueError(f"Invalid {cls.__name__}: '{value}'. Must be one of: {valid}")

    @property
    def is_repeatable(self) -> bool:
        """Slice and array flags keep being offered after they were set."""
        return self.value.endswith(("Slice", "Array"))

    @property
    def splits_on_comma(self) -> bool:
        return self.value.endswith("Slice")

    @property
    def element_type(self) -> type:
        return {
            FlagType.BOOL: bool,
            FlagType.INT: int,
            FlagType.COUNT: int,
            FlagType.INT_SLICE: int,
            FlagType.FLOAT: float,
            FlagType.FLOAT_SLICE: float,
            FlagType.DATETIME: datetime,
        }.get(self, str)

    @property
    def no_opt_default(self) -> str | None:
        """Value used when the flag is present on the command line without one."""
        if self is FlagType.BOOL:
            return "true"
        if self is FlagType.COUNT:
            return "+1"
        return None

    def zero_value(self) -> Any:
        if self.is_repeatable:
            return []
        return {
            FlagType.BOOL: False,
            FlagType.STRING: "",
            FlagType.INT: 0,
            FlagType.COUNT: 0,
            FlagType.FLOAT: 0.0,
        }.get(self)

    def __str__(self) -> str:
        """Return the string representation of the flag type."""
        return self.value
