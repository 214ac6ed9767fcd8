# Adder CLI Framework — (c) 2025 rtj.dev LLC — MIT Licensed
"""
Defines the `Flag` dataclass, the metadata and current value of one named
command line option.

A flag knows its long name, an optional single-character shorthand, its
`FlagType`, a default, its usage text and the typed annotations attached to it.
While arguments are parsed it also tracks its current value and whether it was
`changed`, meaning it appeared on the command line (or was set programmatically)
rather than holding its default.

Flag objects are shared: a persistent flag declared on a parent command is the
same object in every descendant's merged flag set, so `changed` is visible from
all of them.
"""
from __future__ import annotations

import copy
import csv
from dataclasses import dataclass, field
from typing import Any

from adder.exceptions import FlagDefinitionError, FlagError
from adder.flags.annotations import (
    DirFilter,
    ExtensionFilter,
    FlagAnnotation,
    Required,
    SetByFramework,
    serialize_annotations,
)
from adder.flags.flag_type import FlagType
from adder.flags.utils import coerce_value, split_csv


@dataclass
class Flag:
    """
    Represents a command line flag.

    Attributes:
        name (str): Long name, used as `--name`.
        shorthand (str): Optional one-letter name, used as `-s`.
        type (FlagType): How values are parsed.
        default (Any): Value held until the flag is set.
        usage (str): One-line help text, also the completion description.
        no_opt_default (str | None): Value used when the flag is given without one.
        hidden (bool): Hide from help and from flag-name completion.
        deprecated (str): Deprecation message; deprecated flags are not suggested.
        annotations (list[FlagAnnotation]): Typed metadata.
        value (Any): Current value.
        changed (bool): Whether the flag was set since the last reset.
    """

    name: str
    shorthand: str = ""
    type: FlagType = FlagType.STRING
    default: Any = None
    usage: str = ""
    no_opt_default: str | None = None
    hidden: bool = False
    deprecated: str = ""
    annotations: list[FlagAnnotation] = field(default_factory=list)
    value: Any = None
    changed: bool = False

    def __post_init__(self):
        self.type = FlagType(self.type)
        if not self.name or self.name.startswith("-"):
            raise FlagDefinitionError(f"invalid flag name: {self.name!r}")
        if len(self.shorthand) > 1:
            raise FlagDefinitionError(
                f'"{self.shorthand}" shorthand is more than one ASCII character'
            )
        if self.default is None:
            self.default = self.type.zero_value()
        elif self.type.is_repeatable:
            self.default = list(self.default)
        if self.no_opt_default is None:
            self.no_opt_default = self.type.no_opt_default
        self.value = copy.copy(self.default)

    @property
    def repeatable(self) -> bool:
        return self.type.is_repeatable

    @property
    def expects_value(self) -> bool:
        """True when the flag consumes the next argument if none is attached."""
        return self.no_opt_default is None

    @property
    def display_name(self) -> str:
        if self.shorthand:
            return f"-{self.shorthand}, --{self.name}"
        return f"--{self.name}"

    @property
    def default_text(self) -> str:
        if self.repeatable:
            return "[" + ",".join(str(item) for item in self.default) + "]"
        if self.default is None:
            return ""
        if isinstance(self.default, bool):
            return str(self.default).lower()
        return str(self.default)

    def set(self, raw: str) -> None:
        """Parse `raw` according to the flag type and mark the flag changed."""
        element_type = self.type.element_type
        try:
            if self.type is FlagType.COUNT:
                value = self.value + 1 if raw == "+1" else int(raw)
            elif self.repeatable:
                parts = split_csv(raw) if self.type.splits_on_comma else [raw]
                items = [coerce_value(part, element_type) for part in parts]
                value = self.value + items if self.changed else items
            else:
                value = coerce_value(raw, element_type)
        except (ValueError, TypeError, csv.Error) as error:
            raise FlagError(
                f'invalid argument "{raw}" for "{self.display_name}" flag: {error}'
            ) from error
        self.value = value
        self.changed = True

    def reset(self) -> None:
        self.value = copy.copy(self.default)
        self.changed = False

    def annotate(self, annotation: FlagAnnotation) -> None:
        if annotation not in self.annotations:
            self.annotations.append(annotation)

    def get_annotations(self, kind: type) -> list[Any]:
        return [annotation for annotation in self.annotations if type(annotation) is kind]

    @property
    def is_required(self) -> bool:
        return bool(self.get_annotations(Required))

    @property
    def is_set_by_framework(self) -> bool:
        return bool(self.get_annotations(SetByFramework))

    @property
    def extension_filter(self) -> ExtensionFilter | None:
        filters = self.get_annotations(ExtensionFilter)
        return filters[-1] if filters else None

    @property
    def dir_filter(self) -> DirFilter | None:
        filters = self.get_annotations(DirFilter)
        return filters[-1] if filters else None

    def annotation_map(self) -> dict[str, list[str]]:
        return serialize_annotations(self.annotations)
