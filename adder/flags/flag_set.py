# Adder CLI Framework — (c) 2025 rtj.dev LLC — MIT Licensed
"""
Defines `FlagSet`, an ordered collection of `Flag` objects and the POSIX/GNU
style parser that sets them from a list of command line arguments.

Supported syntax:
- `--name=value` and `--name value`
- `--name` for flags with a no-option default (bool, count)
- `-s value`, `-svalue` and `-s=value`
- Bundled shorthands such as `-abc`, where all but the last take no value
- `--` stops flag parsing; everything after it is positional
- Positional arguments may be interspersed with flags unless disabled

After `parse()` the positional arguments are available as `FlagSet.args`, and
`args_len_at_dash` records how many positionals preceded a `--` (or -1).
"""
from __future__ import annotations

from datetime import datetime
from typing import Any, Iterator

from adder.exceptions import FlagDefinitionError, FlagError
from adder.flags.annotations import FlagAnnotation
from adder.flags.flag import Flag
from adder.flags.flag_type import FlagType
from adder.logger import logger


class FlagSet:
    """A named set of flags and the parser for them.

    Iteration yields flags sorted by name.
    """

    def __init__(self, name: str = "", interspersed: bool = True):
        self.name = name
        self.interspersed = interspersed
        self._flags: dict[str, Flag] = {}
        self._shorthands: dict[str, Flag] = {}
        self.args: list[str] = []
        self.args_len_at_dash: int = -1
        self.parsed: bool = False
        self.deprecation_notices: list[str] = []

    def __iter__(self) -> Iterator[Flag]:
        return iter(sorted(self._flags.values(), key=lambda flag: flag.name))

    def __len__(self) -> int:
        return len(self._flags)

    def __contains__(self, name: object) -> bool:
        return name in self._flags

    def __repr__(self) -> str:
        return f"FlagSet(name={self.name!r}, flags={list(self._flags)})"

    def add_flag(self, flag: Flag) -> Flag:
        if flag.name in self._flags:
            raise FlagDefinitionError(f"{self.name} flag redefined: {flag.name}")
        if flag.shorthand:
            used = self._shorthands.get(flag.shorthand)
            if used is not None:
                raise FlagDefinitionError(
                    f'unable to redefine "{flag.shorthand}" shorthand in '
                    f'"{self.name}" flagset: it\'s already used for "{used.name}" flag'
                )
            self._shorthands[flag.shorthand] = flag
        self._flags[flag.name] = flag
        return flag

    def add(
        self,
        name: str,
        shorthand: str = "",
        type: FlagType | str = FlagType.STRING,
        default: Any = None,
        usage: str = "",
        **kwargs: Any,
    ) -> Flag:
        return self.add_flag(
            Flag(
                name=name,
                shorthand=shorthand,
                type=FlagType(type),
                default=default,
                usage=usage,
                **kwargs,
            )
        )

    def add_bool(self, name: str, shorthand: str = "", default: bool = False, usage: str = "") -> Flag:
        return self.add(name, shorthand, FlagType.BOOL, default, usage)

    def add_string(self, name: str, shorthand: str = "", default: str = "", usage: str = "") -> Flag:
        return self.add(name, shorthand, FlagType.STRING, default, usage)

    def add_int(self, name: str, shorthand: str = "", default: int = 0, usage: str = "") -> Flag:
        return self.add(name, shorthand, FlagType.INT, default, usage)

    def add_float(self, name: str, shorthand: str = "", default: float = 0.0, usage: str = "") -> Flag:
        return self.add(name, shorthand, FlagType.FLOAT, default, usage)

    def add_count(self, name: str, shorthand: str = "", usage: str = "") -> Flag:
        return self.add(name, shorthand, FlagType.COUNT, 0, usage)

    def add_datetime(
        self, name: str, shorthand: str = "", default: datetime | None = None, usage: str = ""
    ) -> Flag:
        return self.add(name, shorthand, FlagType.DATETIME, default, usage)

    def add_string_slice(
        self, name: str, shorthand: str = "", default: list[str] | None = None, usage: str = ""
    ) -> Flag:
        return self.add(name, shorthand, FlagType.STRING_SLICE, default, usage)

    def add_string_array(
        self, name: str, shorthand: str = "", default: list[str] | None = None, usage: str = ""
    ) -> Flag:
        return self.add(name, shorthand, FlagType.STRING_ARRAY, default, usage)

    def add_int_slice(
        self, name: str, shorthand: str = "", default: list[int] | None = None, usage: str = ""
    ) -> Flag:
        return self.add(name, shorthand, FlagType.INT_SLICE, default, usage)

    def add_flag_set(self, other: FlagSet | None) -> None:
        """Add every flag of `other` whose name is not already present."""
        if other is None:
            return
        for flag in other:
            if flag.name not in self._flags:
                self.add_flag(flag)

    def lookup(self, name: str) -> Flag | None:
        return self._flags.get(name)

    def shorthand_lookup(self, shorthand: str) -> Flag | None:
        if not shorthand:
            return None
        if len(shorthand) > 1:
            raise FlagDefinitionError(
                f"can not look up shorthand which is more than one ASCII character: {shorthand!r}"
            )
        return self._shorthands.get(shorthand)

    def get(self, name: str) -> Any:
        flag = self.lookup(name)
        if flag is None:
            raise FlagError(f"flag accessed but not defined: {name}")
        return flag.value

    def set(self, name: str, value: str) -> None:
        flag = self.lookup(name)
        if flag is None:
            raise FlagError(f"no such flag -{name}")
        flag.set(value)

    def changed(self, name: str) -> bool:
        flag = self.lookup(name)
        return flag is not None and flag.changed

    def annotate(self, name: str, annotation: FlagAnnotation) -> Flag:
        flag = self.lookup(name)
        if flag is None:
            raise FlagDefinitionError(f"no such flag -{name}")
        flag.annotate(annotation)
        return flag

    def changed_flags(self) -> list[Flag]:
        return [flag for flag in self if flag.changed]

    def has_flags(self) -> bool:
        return bool(self._flags)

    def has_available_flags(self) -> bool:
        return any(not flag.hidden for flag in self._flags.values())

    def reset(self) -> None:
        for flag in self._flags.values():
            flag.reset()
        self.args = []
        self.args_len_at_dash = -1
        self.parsed = False
        self.deprecation_notices = []

    def parse(self, arguments: list[str]) -> None:
        """Parse `arguments`, setting flags and collecting positionals in `args`.

        Raises:
            FlagError: On unknown flags, missing or invalid values.
        """
        self.parsed = True
        self.args = []
        self.args_len_at_dash = -1
        remaining = list(arguments)
        while remaining:
            argument = remaining.pop(0)
            if len(argument) < 2 or not argument.startswith("-"):
                self.args.append(argument)
                if not self.interspersed:
                    self.args.extend(remaining)
                    return
                continue

            if argument == "--":
                self.args_len_at_dash = len(self.args)
                self.args.extend(remaining)
                return

            if argument.startswith("--"):
                self._parse_long(argument, remaining)
            else:
                self._parse_short(argument, remaining)

    def _parse_long(self, argument: str, remaining: list[str]) -> None:
        body = argument[2:]
        if not body or body[0] in "-=":
            raise FlagError(f"bad flag syntax: {argument}")
        name, has_value, value = body.partition("=")
        flag = self.lookup(name)
        if flag is None:
            raise FlagError(f"unknown flag: --{name}")
        if has_value:
            self._set(flag, value)
        elif not flag.expects_value:
            self._set(flag, flag.no_opt_default)
        elif remaining:
            self._set(flag, remaining.pop(0))
        else:
            raise FlagError(f"flag needs an argument: {argument}")

    def _parse_short(self, argument: str, remaining: list[str]) -> None:
        shorthands = argument[1:]
        while shorthands:
            char = shorthands[0]
            flag = self.shorthand_lookup(char)
            if flag is None:
                raise FlagError(f"unknown shorthand flag: {char!r} in -{shorthands}")
            if len(shorthands) > 2 and shorthands[1] == "=":
                self._set(flag, shorthands[2:])
                shorthands = ""
            elif not flag.expects_value:
                self._set(flag, flag.no_opt_default)
                shorthands = shorthands[1:]
            elif len(shorthands) > 1:
                self._set(flag, shorthands[1:])
                shorthands = ""
            elif remaining:
                self._set(flag, remaining.pop(0))
                shorthands = ""
            else:
                raise FlagError(f"flag needs an argument: {char!r} in -{shorthands}")

    def _set(self, flag: Flag, value: str | None) -> None:
        flag.set(value or "")
        if flag.deprecated:
            notice = f"Flag --{flag.name} has been deprecated, {flag.deprecated}"
            logger.debug("[FlagSet:%s] %s", self.name, notice)
            self.deprecation_notices.append(notice)
