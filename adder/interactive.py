# Adder CLI Framework — (c) 2025 rtj.dev LLC — MIT Licensed
"""
Step-wise interactive front end for a command tree.

`run_interactive()` walks the tree one level at a time, asking the user to pick
a sub-command until a leaf (or a runnable command the user stops at) is
reached, then asks for each visible flag and for positional arguments. The
answers are checked with the flags' own parsers and assembled into an argument
vector that can be passed to `Command.execute()`:

    argv = await run_interactive(root)
    await root.execute_async(argv)

Prompts use Prompt Toolkit with fuzzy word completion fed by the completion
engine, so flag values offer the same suggestions as shell completion.
`select` and `ask` may be replaced, e.g. in tests or for other front ends.
"""
from __future__ import annotations

import shlex
from typing import Awaitable, Callable

from prompt_toolkit import PromptSession
from prompt_toolkit.completion import Completer, FuzzyWordCompleter, PathCompleter
from prompt_toolkit.validation import Validator
from rich.table import Table

from adder.args import accepts_more_args
from adder.command import Command
from adder.completion.directive import ShellCompDirective
from adder.completion.engine import get_completions
from adder.console import console
from adder.default_commands import COMPLETION_COMMAND
from adder.exceptions import FlagError
from adder.flags import Flag
from adder.logger import logger

SelectCommand = Callable[[Command, list[Command]], Awaitable["Command | None"]]
AskValue = Callable[[str, Completer | None], Awaitable[str]]


def selectable_commands(cmd: Command) -> list[Command]:
    return [
        sub
        for sub in cmd.commands
        if sub.is_available_command() and sub.name != COMPLETION_COMMAND
    ]


def _choice_validator(names: list[str], allow_empty: bool) -> Validator:
    def validate(text: str) -> bool:
        if not text.strip():
            return allow_empty
        return text.strip() in names

    message = f"Invalid input. Choices: {{{', '.join(names)}}}."
    if allow_empty:
        message += " Leave empty to stop here."
    return Validator.from_callable(validate, error_message=message)


def _commands_table(cmd: Command, choices: list[Command]) -> Table:
    table = Table(title=cmd.command_path, show_header=False, box=None)
    table.add_column(style="command", no_wrap=True)
    table.add_column()
    for sub in choices:
        table.add_row(sub.name, sub.short)
    return table


async def prompt_for_command(
    cmd: Command, choices: list[Command], session: PromptSession | None = None
) -> Command | None:
    """Ask for one of `choices`; an empty answer stops at `cmd` when it is runnable."""
    session = session or PromptSession()
    names = [sub.name for sub in choices]
    console.print(_commands_table(cmd, choices))
    selected = await session.prompt_async(
        "Select a command > ",
        completer=FuzzyWordCompleter(names),
        validator=_choice_validator(names, allow_empty=cmd.runnable()),
    )
    selected = selected.strip()
    if not selected:
        return None
    return next(sub for sub in choices if sub.name == selected)


async def prompt_for_value(
    message: str, completer: Completer | None = None, session: PromptSession | None = None
) -> str:
    session = session or PromptSession()
    return await session.prompt_async(message, completer=completer)


def value_completer(root: Command, path: list[str], flag: Flag) -> Completer | None:
    """Build a Prompt Toolkit completer for the value of `flag`."""
    result = get_completions(root, [*path, f"--{flag.name}", ""])
    if result.directive & ShellCompDirective.ERROR:
        return None
    if result.directive & (ShellCompDirective.FILTER_FILE_EXT | ShellCompDirective.FILTER_DIRS):
        only_directories = bool(result.directive & ShellCompDirective.FILTER_DIRS)
        return PathCompleter(only_directories=only_directories)
    values = [value for value in result.values if value]
    if values:
        return FuzzyWordCompleter(values)
    return None


def interactive_flags(cmd: Command) -> list[Flag]:
    """Flags offered for input: local then inherited, skipping hidden and built-in ones."""
    flags: list[Flag] = []
    for flag_set in (cmd.local_flags(), cmd.inherited_flags()):
        for flag in flag_set:
            if flag.hidden or flag.deprecated or flag.is_set_by_framework:
                continue
            flags.append(flag)
    return flags


def _flag_prompt(flag: Flag) -> str:
    label = f"--{flag.name}"
    if flag.usage:
        label += f" ({flag.usage})"
    if flag.is_required:
        label += " [required]"
    elif flag.repeatable:
        label += " [empty to finish]"
    elif flag.default_text:
        label += f" [{flag.default_text}]"
    return f"{label} > "


def _check_value(flag: Flag, value: str) -> bool:
    try:
        flag.set(value)
    except FlagError as error:
        console.print(str(error), style="error", markup=False)
        return False
    return True


async def _ask_flag(root: Command, path: list[str], flag: Flag, ask: AskValue) -> list[str]:
    completer = value_completer(root, path, flag)
    values: list[str] = []
    while True:
        answer = (await ask(_flag_prompt(flag), completer)).strip()
        if not answer:
            if flag.is_required and not values:
                console.print(f'Flag "--{flag.name}" is required.', style="warning")
                continue
            return values
        if not _check_value(flag, answer):
            continue
        values.append(answer)
        if not flag.repeatable:
            return values


async def run_interactive(
    root: Command,
    select: SelectCommand | None = None,
    ask: AskValue | None = None,
) -> list[str]:
    """Interactively build an argument vector for `root`.

    Returns the words after the program name: the selected command path, one
    `--name=value` entry per answered flag value, and the positional arguments.
    """
    select = select or prompt_for_command
    ask = ask or prompt_for_value
    root.init_default_help_cmd()

    cmd = root
    path: list[str] = []
    while True:
        choices = [sub for sub in selectable_commands(cmd) if sub is not cmd.help_command]
        if not choices:
            break
        selected = await select(cmd, choices)
        if selected is None:
            break
        cmd = selected
        path.append(cmd.name)
    logger.debug("[interactive] Selected '%s'", cmd.command_path)

    root.reset_flags()
    argv = list(path)
    for flag in interactive_flags(cmd):
        for value in await _ask_flag(root, path, flag, ask):
            argv.append(f"--{flag.name}={value}")
    root.reset_flags()

    if accepts_more_args(cmd, [], ""):
        sub_names = {name for sub in cmd.commands for name in (sub.name, *sub.aliases)}
        result = get_completions(root, [*path, ""])
        values = [
            value
            for value in result.values
            if value not in sub_names and not value.startswith("-")
        ]
        completer = FuzzyWordCompleter(values) if values else None
        answer = await ask("Arguments > ", completer)
        argv.extend(shlex.split(answer))
    logger.debug("[interactive] Built argv %r", argv)
    return argv
