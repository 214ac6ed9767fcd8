# Adder CLI Framework — (c) 2025 rtj.dev LLC — MIT Licensed
"""
Core completion types.

- `ShellCompDirective`: bit flags telling the shell how to treat the suggestions.
- `Completion`: one suggested value with an optional description.
- `CompletionResult`: what the engine produced for one request.
- `CompletionFunc`: the callback contract for dynamic argument and flag value
  completion.

Callbacks may return plain strings; a string of the form `"value\\tdescription"`
is split into value and description by `Completion.parse()`.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from enum import IntFlag
from typing import TYPE_CHECKING, Protocol, Sequence, runtime_checkable

if TYPE_CHECKING:
    from adder.command import Command

ACTIVE_HELP_MARKER = "_activeHelp_ "


class ShellCompDirective(IntFlag):
    """
    Instructions for the shell, encoded as the trailing `:<n>` of the protocol.

    Members:
        DEFAULT: No special behavior; the shell may fall back to file completion.
        ERROR: Completion failed; the shell should show nothing.
        NO_SPACE: Do not add a space after the single completion.
        NO_FILE_COMP: Do not fall back to file completion when nothing matched.
        FILTER_FILE_EXT: The completions are file extensions to filter files by.
        FILTER_DIRS: Complete directories only, inside the single completion if given.
        KEEP_ORDER: Present completions in the order given instead of sorting them.
    """

    DEFAULT = 0
    ERROR = 1
    NO_SPACE = 2
    NO_FILE_COMP = 4
    FILTER_FILE_EXT = 8
    FILTER_DIRS = 16
    KEEP_ORDER = 32

    def describe(self) -> str:
        """Human readable list of the set bits, for logs."""
        names = [
            member.name
            for member in ShellCompDirective
            if member.value and self & member.value
        ]
        return ", ".join(names) if names else "DEFAULT"


@dataclass(frozen=True)
class Completion:
    """A suggested value and its optional one-line description."""

    value: str
    description: str = ""

    @classmethod
    def parse(cls, item: str | Completion) -> Completion:
        if isinstance(item, Completion):
            return item
        value, _, description = str(item).partition("\t")
        return cls(value, description)

    @property
    def is_active_help(self) -> bool:
        return self.value.startswith(ACTIVE_HELP_MARKER)

    def __str__(self) -> str:
        if self.description:
            return f"{self.value}\t{self.description}"
        return self.value


@dataclass
class CompletionResult:
    """The engine's answer: the resolved command, suggestions and directive."""

    command: Command | None
    completions: list[Completion] = field(default_factory=list)
    directive: ShellCompDirective = ShellCompDirective.DEFAULT

    @property
    def values(self) -> list[str]:
        return [completion.value for completion in self.completions]


@runtime_checkable
class CompletionFunc(Protocol):
    def __call__(
        self, cmd: Command, args: list[str], to_complete: str
    ) -> tuple[Sequence[str | Completion], ShellCompDirective]: ...


def fixed_completions(
    choices: Sequence[str | Completion],
    directive: ShellCompDirective = ShellCompDirective.NO_FILE_COMP,
) -> CompletionFunc:
    """Build a callback that always offers `choices`."""

    def complete(cmd: Command, args: list[str], to_complete: str):
        return list(choices), directive

    return complete


def no_file_completions(cmd: Command, args: list[str], to_complete: str):
    """Callback that offers nothing and disables file completion."""
    return [], ShellCompDirective.NO_FILE_COMP
