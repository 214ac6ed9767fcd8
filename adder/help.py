# Adder CLI Framework — (c) 2025 rtj.dev LLC — MIT Licensed
"""
Rich-based help and usage rendering for commands.

Layout:
    <long or short description>

    Usage:
      <use line>
      <command path> [command]

    Aliases / Examples / Available Commands (grouped by group title)
    Flags / Global Flags
"""
from __future__ import annotations

from typing import TYPE_CHECKING

from rich.console import Console
from rich.table import Table
from rich.text import Text

from adder.flags import Flag, FlagSet, FlagType
from adder.utils import first_line

if TYPE_CHECKING:
    from adder.command import Command


def _flag_table(flags: FlagSet) -> Table:
    table = Table.grid(padding=(0, 3))
    table.add_column(style="flag", no_wrap=True)
    table.add_column()
    for flag in flags:
        if flag.hidden:
            continue
        table.add_row(Text(_flag_signature(flag)), Text(_flag_usage(flag)))
    return table


def _flag_signature(flag: Flag) -> str:
    signature = f"-{flag.shorthand}, --{flag.name}" if flag.shorthand else f"    --{flag.name}"
    if flag.expects_value:
        signature += f" {flag.type}"
    return signature


def _flag_usage(flag: Flag) -> str:
    usage = flag.usage
    shows_default = flag.type not in (FlagType.BOOL, FlagType.COUNT) and flag.default not in (
        None,
        "",
        [],
        0,
        0.0,
    )
    if shows_default:
        default = flag.default_text
        if flag.type is FlagType.STRING:
            default = f'"{default}"'
        usage += f" (default {default})"
    return usage


def _commands_table(commands: list[Command]) -> Table:
    table = Table.grid(padding=(0, 3))
    table.add_column(style="command", no_wrap=True)
    table.add_column()
    for cmd in commands:
        table.add_row(Text(cmd.name), Text(first_line(cmd.short)))
    return table


def render_usage(cmd: Command, console: Console) -> None:
    """Print the usage section of `cmd`."""
    console.print("Usage:", style="heading")
    if cmd.runnable():
        console.print(Text(f"  {cmd.use_line}"))
    if cmd.has_available_sub_commands():
        console.print(Text(f"  {cmd.command_path} [command]"))

    if cmd.aliases:
        console.print()
        console.print("Aliases:", style="heading")
        console.print(Text("  " + ", ".join([cmd.name, *cmd.aliases])))

    if cmd.example:
        console.print()
        console.print("Examples:", style="heading")
        console.print(Text(cmd.example))

    available = [sub for sub in cmd.commands if sub.is_available_command() or sub is cmd.help_command]
    if available:
        if cmd.groups:
            for group in cmd.groups:
                members = [sub for sub in available if sub.group_id == group.id]
                if members:
                    console.print()
                    console.print(group.title, style="heading")
                    console.print(_commands_table(members))
            ungrouped = [sub for sub in available if not sub.group_id]
            if ungrouped:
                console.print()
                console.print("Additional Commands:", style="heading")
                console.print(_commands_table(ungrouped))
        else:
            console.print()
            console.print("Available Commands:", style="heading")
            console.print(_commands_table(available))

    local_flags = cmd.local_flags()
    if local_flags.has_available_flags():
        console.print()
        console.print("Flags:", style="heading")
        console.print(_flag_table(local_flags))

    inherited_flags = cmd.inherited_flags()
    if inherited_flags.has_available_flags():
        console.print()
        console.print("Global Flags:", style="heading")
        console.print(_flag_table(inherited_flags))

    if cmd.has_available_sub_commands():
        console.print()
        console.print(
            Text(f'Use "{cmd.command_path} [command] --help" for more information about a command.')
        )


def render_help(cmd: Command, console: Console) -> None:
    """Print the description followed by the usage of `cmd`."""
    description = (cmd.long or cmd.short).strip()
    if description:
        console.print(Text(description))
        console.print()
    render_usage(cmd, console)
