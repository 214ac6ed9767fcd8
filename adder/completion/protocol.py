# Adder CLI Framework — (c) 2025 rtj.dev LLC — MIT Licensed
"""
The line protocol spoken between shell scripts and the hidden completion command.

Each candidate is written on its own line as `value` or `value<TAB>description`.
Only the first line of a multi-line candidate is kept and surrounding
whitespace is trimmed. The last line is `:<n>` where `n` is the decimal value
of the `ShellCompDirective` bits.

    alpha\tFirst thing
    beta
    :4
"""
from __future__ import annotations

from typing import TYPE_CHECKING, Iterable, TextIO

from adder.completion.active_help import active_help_enabled
from adder.completion.directive import Completion, CompletionResult, ShellCompDirective
from adder.config import get_env_config
from adder.flags.utils import coerce_bool
from adder.logger import logger
from adder.utils import first_line

if TYPE_CHECKING:
    from adder.command import Command

DESCRIPTIONS_SUFFIX = "COMPLETION_DESCRIPTIONS"


def format_completion(completion: str | Completion, include_descriptions: bool = True) -> str:
    completion = Completion.parse(completion)
    line = str(completion) if include_descriptions else completion.value
    return first_line(line).strip()


def encode(
    completions: Iterable[str | Completion],
    directive: ShellCompDirective | int,
    include_descriptions: bool = True,
    include_active_help: bool = True,
) -> str:
    """Render candidates and the directive in the wire format."""
    lines = []
    for completion in completions:
        completion = Completion.parse(completion)
        if completion.is_active_help and not include_active_help:
            continue
        lines.append(format_completion(completion, include_descriptions))
    lines.append(f":{int(directive)}")
    return "\n".join(lines) + "\n"


def decode(text: str) -> tuple[list[Completion], ShellCompDirective]:
    """Parse wire output back into candidates and the directive.

    Raises:
        ValueError: If the final directive line is missing or malformed.
    """
    lines = text.rstrip("\n").split("\n")
    last = lines.pop() if lines else ""
    if not last.startswith(":"):
        raise ValueError(f"missing directive line in completion output: {last!r}")
    try:
        directive = ShellCompDirective(int(last[1:]))
    except ValueError as error:
        raise ValueError(f"invalid completion directive: {last!r}") from error
    return [Completion.parse(line) for line in lines if line], directive


def descriptions_enabled(cmd: Command, requested: bool = True) -> bool:
    """Whether descriptions should be sent, given the request kind and environment.

    `<PROG>_COMPLETION_DESCRIPTIONS` (falling back to
    `ADDER_COMPLETION_DESCRIPTIONS`) may turn descriptions off when they were
    requested. Values that do not parse as booleans are ignored.
    """
    if not requested:
        return False
    raw = get_env_config(cmd.root.name, DESCRIPTIONS_SUFFIX)
    try:
        return coerce_bool(raw)
    except ValueError:
        return True


def write_result(
    cmd: Command, result: CompletionResult, out: TextIO, requested_descriptions: bool = True
) -> None:
    """Encode `result` for the program of `cmd` and write it to `out`."""
    target = result.command or cmd
    include_descriptions = descriptions_enabled(cmd, requested_descriptions)
    include_active_help = active_help_enabled(target)
    out.write(
        encode(
            result.completions,
            result.directive,
            include_descriptions=include_descriptions,
            include_active_help=include_active_help,
        )
    )
    logger.debug(
        "[completion] %d candidate(s), directive %s",
        len(result.completions),
        result.directive.describe(),
    )
