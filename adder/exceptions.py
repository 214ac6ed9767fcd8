# Adder CLI Framework — (c) 2025 rtj.dev LLC — MIT Licensed
"""
Defines all custom exception classes used in the Adder CLI framework.

These exceptions provide structured error handling for common failure cases,
including malformed command trees, flag parsing problems, positional argument
validation, required flags and flag-group constraints.

All exceptions inherit from `AdderError`, the base exception for the framework.

Exception Hierarchy:
- AdderError
    ├── CommandTreeError
    ├── FlagError
    ├── FlagDefinitionError
    ├── FlagGroupDefinitionError
    ├── FlagGroupError
    ├── RequiredFlagError
    ├── UnknownCommandError
    ├── InvalidArgCountError
    └── InvalidArgValueError

Definition errors (`CommandTreeError`, `FlagDefinitionError`,
`FlagGroupDefinitionError`) signal programmer mistakes and are raised as soon
as the offending registration happens. The others are user-facing and are
reported by `Command.execute_async()` before being re-raised.
"""
from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from adder.command import Command


class AdderError(Exception):
    """Base exception for the Adder framework."""


class CommandTreeError(AdderError):
    """Exception raised when the command tree is assembled incorrectly."""


class FlagError(AdderError):
    """Exception raised when command line flags cannot be parsed."""


class FlagDefinitionError(AdderError):
    """Exception raised when a flag is declared or referenced incorrectly."""


class FlagGroupDefinitionError(AdderError):
    """Exception raised when a flag group names a flag that was never declared."""


class FlagGroupError(AdderError):
    """Exception raised when the set flags violate a flag group constraint."""

    def __init__(self, message: str, group: list[str], flags: list[str]):
        super().__init__(message)
        self.group = group
        self.flags = flags


class RequiredFlagError(AdderError):
    """Exception raised when required flags were not set."""

    def __init__(self, missing: list[str]):
        names = ", ".join(f'"{name}"' for name in missing)
        super().__init__(f"required flag(s) {names} not set")
        self.missing = missing


class UnknownCommandError(AdderError):
    """Exception raised when a positional token does not name a known sub-command."""

    def __init__(self, cmd: Command, name: str, suggestions: str = ""):
        super().__init__(
            f'unknown command "{name}" for "{cmd.command_path}"{suggestions}'
        )
        self.cmd = cmd
        self.name = name


class InvalidArgCountError(AdderError):
    """Exception raised when the number of positional arguments is not accepted."""

    def __init__(
        self,
        args: list[str],
        at_least: int | None = None,
        at_most: int | None = None,
    ):
        count = len(args)
        if at_least is not None and at_most is not None and at_least == at_most:
            message = f"accepts {at_least} arg(s), received {count}"
        elif at_least is not None and at_most is not None:
            message = f"accepts between {at_least} and {at_most} arg(s), received {count}"
        elif at_least is not None:
            message = f"requires at least {at_least} arg(s), only received {count}"
        else:
            message = f"accepts at most {at_most} arg(s), received {count}"
        super().__init__(message)
        self.received = list(args)
        self.at_least = at_least
        self.at_most = at_most


class InvalidArgValueError(AdderError):
    """Exception raised when a positional argument is not one of the valid values."""

    def __init__(self, cmd: Command, arg: str, suggestions: str = ""):
        super().__init__(
            f'invalid argument "{arg}" for "{cmd.command_path}"{suggestions}'
        )
        self.cmd = cmd
        self.arg = arg
