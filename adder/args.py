# Adder CLI Framework — (c) 2025 rtj.dev LLC — MIT Licensed
"""
Positional argument validators.

A validator is any callable `(cmd, args) -> None` that raises an `AdderError`
when `args` is not acceptable for `cmd`. Assign one to `Command.args`:

    Command(use="get NAME", args=exact_args(1), run=get)

Count validators raise `InvalidArgCountError`; completion uses that to decide
whether a command still accepts another positional argument.
"""
from __future__ import annotations

from typing import TYPE_CHECKING, Callable

from adder.exceptions import (
    AdderError,
    InvalidArgCountError,
    InvalidArgValueError,
    UnknownCommandError,
)

if TYPE_CHECKING:
    from adder.command import Command

PositionalArgs = Callable[["Command", list[str]], None]


def legacy_args(cmd: Command, args: list[str]) -> None:
    """Default validation when a command declares no validator.

    Commands without sub-commands accept anything. The root command rejects
    positional tokens when it has sub-commands, since they must have been a
    mistyped sub-command name.
    """
    if not cmd.has_sub_commands():
        return
    if not cmd.has_parent() and args:
        raise UnknownCommandError(cmd, args[0], cmd.find_suggestions(args[0]))


def no_args(cmd: Command, args: list[str]) -> None:
    """Reject any positional argument."""
    if args:
        raise UnknownCommandError(cmd, args[0])


def only_valid_args(cmd: Command, args: list[str]) -> None:
    """Accept only values listed in `valid_args` or `arg_aliases`."""
    if not cmd.valid_args:
        return
    valid = [entry.split("\t", 1)[0] for entry in cmd.valid_args]
    valid.extend(cmd.arg_aliases)
    for arg in args:
        if arg not in valid:
            raise InvalidArgValueError(cmd, arg, cmd.find_suggestions(arg))


def arbitrary_args(cmd: Command, args: list[str]) -> None:
    """Accept anything."""
    return None


def minimum_n_args(n: int) -> PositionalArgs:
    def validator(cmd: Command, args: list[str]) -> None:
        if len(args) < n:
            raise InvalidArgCountError(args, at_least=n)

    return validator


def maximum_n_args(n: int) -> PositionalArgs:
    def validator(cmd: Command, args: list[str]) -> None:
        if len(args) > n:
            raise InvalidArgCountError(args, at_most=n)

    return validator


def exact_args(n: int) -> PositionalArgs:
    def validator(cmd: Command, args: list[str]) -> None:
        if len(args) != n:
            raise InvalidArgCountError(args, at_least=n, at_most=n)

    return validator


def range_args(minimum: int, maximum: int) -> PositionalArgs:
    def validator(cmd: Command, args: list[str]) -> None:
        if len(args) < minimum or len(args) > maximum:
            raise InvalidArgCountError(args, at_least=minimum, at_most=maximum)

    return validator


def match_all(*validators: PositionalArgs) -> PositionalArgs:
    """Run every validator in order; the first failure wins."""

    def validator(cmd: Command, args: list[str]) -> None:
        for check in validators:
            check(cmd, args)

    return validator


def accepts_more_args(cmd: Command, args: list[str], candidate: str) -> bool:
    """Whether `cmd` could take `candidate` as one more positional argument.

    Only exceeding the maximum argument count is a refusal: too few arguments
    or a partially typed value that is not (yet) valid do not suppress
    suggestions. A value check that rejects `candidate` is retried with the
    first valid argument in its place, so it cannot hide the count check of a
    later validator in `match_all`.
    """
    if cmd.args is None:
        return True
    stand_ins = [candidate]
    if cmd.valid_args:
        stand_ins.append(cmd.valid_args[0].split("\t", 1)[0])
    for stand_in in stand_ins:
        try:
            cmd.args(cmd, [*args, stand_in])
        except InvalidArgCountError as error:
            return error.at_most is None or len(error.received) <= error.at_most
        except UnknownCommandError:
            return False
        except InvalidArgValueError:
            continue
        except AdderError:
            return True
        return True
    return True
