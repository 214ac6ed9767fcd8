# Adder CLI Framework — (c) 2025 rtj.dev LLC — MIT Licensed
"""command.py

Defines the Command class for Adder.

Commands form a tree rooted at the program's root command. Each command owns:

- Its identity: `use` line (first word is the name), aliases, descriptions
- Local and persistent flags (persistent flags are inherited by descendants)
- Positional argument validation and static/dynamic argument completion
- Run hooks (persistent pre/post hooks, pre/post hooks and the run function),
  which may be plain functions or coroutines
- Flag groups and per-flag value completion callbacks

Executing the root resolves the target command from the argument vector,
parses its flags, validates arguments, required flags and flag groups, and
runs its hooks. The hidden `__complete` command turns the same command tree
into a completion service for shell scripts.
"""
from __future__ import annotations

import asyncio
import sys
import threading
from dataclasses import dataclass
from typing import Any, Callable, TextIO

from pydantic import BaseModel, ConfigDict, Field, PrivateAttr, field_validator

from adder.args import PositionalArgs, legacy_args
from adder.completion.directive import CompletionFunc
from adder.completion.options import CompletionOptions
from adder.config import DispatchOptions
from adder.console import get_console
from adder.exceptions import AdderError, CommandTreeError, FlagDefinitionError, RequiredFlagError
from adder.flag_groups import register_flag_group, validate_flag_groups
from adder.flags import (
    DependsOn,
    DependsOnAny,
    DirFilter,
    ExtensionFilter,
    Flag,
    FlagSet,
    MutuallyExclusive,
    OneRequired,
    Required,
    RequiredTogether,
    SetByFramework,
)
from adder.help import render_help, render_usage
from adder.logger import logger
from adder.signals import HelpSignal, VersionSignal
from adder.utils import ensure_async, levenshtein_distance


@dataclass
class Group:
    """A titled section of sub-commands in help output."""

    id: str
    title: str


class Command(BaseModel):
    """
    Represents one command of a command line program.

    Attributes:
        use (str): One-line usage; the first word is the command name.
        aliases (list[str]): Alternative names.
        suggest_for (list[str]): Mistyped names this command should be suggested for.
        short (str): Short description, shown in listings and completions.
        long (str): Long description, shown in help.
        example (str): Usage examples.
        group_id (str): Id of the parent's group this command is listed under.
        valid_args (list[str]): Static positional values, optionally "value\\tdescription".
        valid_args_function (CompletionFunc | None): Dynamic positional completion.
        args (PositionalArgs | None): Positional argument validator.
        arg_aliases (list[str]): Extra accepted values, completed only as a fallback.
        deprecated (str): Deprecation notice; deprecated commands are hidden.
        hidden (bool): Hide from listings and completion.
        version (str): Version string; adds a `--version` flag.
        persistent_pre_run, pre_run, run, post_run, persistent_post_run:
            Hooks called as `hook(cmd, args)`; sync or async.
        error_prefix (str): Prefix of printed error messages; inherited, "Error:" by default.
        silence_errors (bool): Do not print errors.
        silence_usage (bool): Do not print usage after an error.
        disable_flag_parsing (bool): Pass all arguments through as positionals.
        disable_suggestions (bool): Do not suggest commands for unknown names.
        suggestions_minimum_distance (int): Levenshtein distance for suggestions.
        traverse_children (bool): Parse flags on every command on the path.
        completion_options (CompletionOptions): Completion behavior.
        dispatch_options (DispatchOptions): Program-wide dispatch behavior;
            only the root's value is consulted.
    """

    use: str = ""
    aliases: list[str] = Field(default_factory=list)
    suggest_for: list[str] = Field(default_factory=list)
    short: str = ""
    long: str = ""
    example: str = ""
    group_id: str = ""
    valid_args: list[str] = Field(default_factory=list)
    valid_args_function: Callable[..., Any] | None = None
    args: Callable[..., Any] | None = None
    arg_aliases: list[str] = Field(default_factory=list)
    deprecated: str = ""
    hidden: bool = False
    version: str = ""
    persistent_pre_run: Callable[..., Any] | None = None
    pre_run: Callable[..., Any] | None = None
    run: Callable[..., Any] | None = None
    post_run: Callable[..., Any] | None = None
    persistent_post_run: Callable[..., Any] | None = None
    error_prefix: str = ""
    silence_errors: bool = False
    silence_usage: bool = False
    disable_flag_parsing: bool = False
    disable_suggestions: bool = False
    suggestions_minimum_distance: int = 2
    traverse_children: bool = False
    completion_options: CompletionOptions = Field(default_factory=CompletionOptions)
    dispatch_options: DispatchOptions = Field(default_factory=DispatchOptions)

    _parent: Command | None = PrivateAttr(default=None)
    _commands: list[Command] = PrivateAttr(default_factory=list)
    _groups: list[Group] = PrivateAttr(default_factory=list)
    _flags: FlagSet = PrivateAttr(default_factory=FlagSet)
    _pflags: FlagSet = PrivateAttr(default_factory=FlagSet)
    _parents_pflags: FlagSet = PrivateAttr(default_factory=FlagSet)
    _flag_completion_funcs: dict[str, tuple[Flag, CompletionFunc]] = PrivateAttr(
        default_factory=dict
    )
    _flag_completion_lock: threading.Lock = PrivateAttr(default_factory=threading.Lock)
    _merge_lock: threading.RLock = PrivateAttr(default_factory=threading.RLock)
    _help_command: Command | None = PrivateAttr(default=None)
    _called_as: str = PrivateAttr(default="")
    _args: list[str] | None = PrivateAttr(default=None)
    _out: TextIO | None = PrivateAttr(default=None)
    _err: TextIO | None = PrivateAttr(default=None)

    model_config = ConfigDict(arbitrary_types_allowed=True)

    @field_validator(
        "persistent_pre_run", "pre_run", "run", "post_run", "persistent_post_run", mode="before"
    )
    @classmethod
    def wrap_callable_as_async(cls, hook: Any) -> Any:
        if hook is None:
            return None
        if callable(hook):
            return ensure_async(hook)
        raise TypeError("Run hooks must be callables")

    def model_post_init(self, _: Any) -> None:
        self._flags.name = self.name
        self._pflags.name = self.name
        self._parents_pflags.name = self.name

    def __eq__(self, other: object) -> bool:
        return self is other

    def __hash__(self) -> int:
        return id(self)

    def __repr__(self) -> str:
        return f"Command(use={self.use!r})"

    # ---- identity -------------------------------------------------------------------

    @property
    def name(self) -> str:
        words = self.use.split()
        return words[0] if words else ""

    @property
    def called_as(self) -> str:
        return self._called_as

    @property
    def options(self) -> DispatchOptions:
        return self.root.dispatch_options

    @property
    def command_path(self) -> str:
        if self._parent is not None:
            return f"{self._parent.command_path} {self.name}"
        return self.name

    @property
    def use_line(self) -> str:
        words = self.use.split(" ", 1)
        use_line = self.command_path
        if len(words) > 1:
            use_line += " " + words[1]
        if self.has_available_flags() and "[flags]" not in use_line:
            use_line += " [flags]"
        return use_line

    def _name_matches(self, expected: str, actual: str) -> bool:
        if self.options.case_insensitive:
            return expected.lower() == actual.lower()
        return expected == actual

    def has_alias(self, name: str) -> bool:
        return any(self._name_matches(alias, name) for alias in self.aliases)

    def _has_name_or_alias_prefix(self, prefix: str) -> bool:
        if self.options.case_insensitive:
            prefix = prefix.lower()
        for candidate in (self.name, *self.aliases):
            if self.options.case_insensitive:
                candidate = candidate.lower()
            if candidate.startswith(prefix):
                return True
        return False

    def runnable(self) -> bool:
        return self.run is not None

    def is_available_command(self) -> bool:
        """Whether the command should be listed: not hidden, deprecated or the help command."""
        if self.deprecated or self.hidden:
            return False
        if self._parent is not None and self._parent._help_command is self:
            return False
        return self.runnable() or self.has_available_sub_commands()

    # ---- tree -----------------------------------------------------------------------

    @property
    def parent(self) -> Command | None:
        return self._parent

    def has_parent(self) -> bool:
        return self._parent is not None

    @property
    def root(self) -> Command:
        cmd = self
        while cmd._parent is not None:
            cmd = cmd._parent
        return cmd

    @property
    def help_command(self) -> Command | None:
        return self._help_command

    @property
    def commands(self) -> list[Command]:
        if self.options.command_sorting:
            return sorted(self._commands, key=lambda cmd: cmd.name)
        return list(self._commands)

    def all_commands(self) -> list[Command]:
        return list(self._commands)

    def has_sub_commands(self) -> bool:
        return bool(self._commands)

    def has_available_sub_commands(self) -> bool:
        return any(cmd.is_available_command() for cmd in self._commands)

    def add_command(self, *cmds: Command) -> None:
        """Attach sub-commands.

        Raises:
            CommandTreeError: If a command is added to itself, already has a
                parent, or shares its name with an existing sibling.
        """
        for cmd in cmds:
            if cmd is self:
                raise CommandTreeError("Command can't be a child of itself")
            if cmd._parent is not None:
                raise CommandTreeError(
                    f"Command '{cmd.name}' already belongs to '{cmd._parent.command_path}'"
                )
            if any(sibling.name == cmd.name for sibling in self._commands):
                raise CommandTreeError(
                    f"Command '{self.command_path}' already has a sub-command named '{cmd.name}'"
                )
            cmd._parent = self
            self._commands.append(cmd)
            logger.debug("[Command:%s] Added sub-command '%s'", self.name, cmd.name)

    def remove_command(self, *cmds: Command) -> None:
        for cmd in cmds:
            if cmd in self._commands:
                self._commands.remove(cmd)
                cmd._parent = None

    @property
    def groups(self) -> list[Group]:
        return list(self._groups)

    def add_group(self, *groups: Group) -> None:
        self._groups.extend(groups)

    def contains_group(self, group_id: str) -> bool:
        return any(group.id == group_id for group in self._groups)

    def check_command_groups(self) -> None:
        for sub in self._commands:
            if sub.group_id and not self.contains_group(sub.group_id):
                raise CommandTreeError(
                    f"group id '{sub.group_id}' is not defined for subcommand '{sub.command_path}'"
                )
            sub.check_command_groups()

    # ---- flags ----------------------------------------------------------------------

    def flags(self) -> FlagSet:
        """The command's full flag set: local flags, plus inherited ones once merged."""
        return self._flags

    def persistent_flags(self) -> FlagSet:
        """Flags declared here and inherited by every descendant."""
        return self._pflags

    def _update_parents_pflags(self) -> None:
        with self._merge_lock:
            parent = self._parent
            while parent is not None:
                self._parents_pflags.add_flag_set(parent._pflags)
                parent = parent._parent

    def merge_persistent_flags(self) -> None:
        with self._merge_lock:
            self._update_parents_pflags()
            self._flags.add_flag_set(self._pflags)
            self._flags.add_flag_set(self._parents_pflags)

    def local_flags(self) -> FlagSet:
        """Flags declared on this command, persistent or not."""
        self.merge_persistent_flags()
        local = FlagSet(self.name)
        for flag in self._flags:
            if self._parents_pflags.lookup(flag.name) is not flag:
                local.add_flag(flag)
        return local

    def inherited_flags(self) -> FlagSet:
        """Persistent flags of ancestors that are not shadowed locally."""
        local = self.local_flags()
        inherited = FlagSet(self.name)
        for flag in self._parents_pflags:
            if local.lookup(flag.name) is None:
                inherited.add_flag(flag)
        return inherited

    def non_inherited_flags(self) -> FlagSet:
        return self.local_flags()

    def local_non_persistent_flags(self) -> FlagSet:
        result = FlagSet(self.name)
        for flag in self.local_flags():
            if self._pflags.lookup(flag.name) is None:
                result.add_flag(flag)
        return result

    def has_available_flags(self) -> bool:
        self.merge_persistent_flags()
        return self._flags.has_available_flags()

    def flag(self, name: str) -> Flag | None:
        flag = self._flags.lookup(name) or self._pflags.lookup(name)
        if flag is None:
            self._update_parents_pflags()
            flag = self._parents_pflags.lookup(name)
        return flag

    def parse_flags(self, args: list[str]) -> None:
        if self.disable_flag_parsing:
            return
        self.merge_persistent_flags()
        self._flags.parse(args)
        for notice in self._flags.deprecation_notices:
            self.print_err(notice)

    def reset_flags(self) -> None:
        """Reset every flag of this command and its descendants to its default."""
        self._flags.reset()
        self._pflags.reset()
        for cmd in self._commands:
            cmd.reset_flags()

    def init_default_help_flag(self) -> None:
        self.merge_persistent_flags()
        if self._flags.lookup("help") is not None:
            return
        shorthand = "" if self._flags.shorthand_lookup("h") else "h"
        flag = self._flags.add_bool("help", shorthand, usage=f"help for {self.name or 'this command'}")
        flag.annotate(SetByFramework())

    def init_default_version_flag(self) -> None:
        if not self.version:
            return
        self.merge_persistent_flags()
        if self._flags.lookup("version") is not None:
            return
        usage = f"version for {self.name}" if self.name else "version for this command"
        shorthand = "" if self._flags.shorthand_lookup("v") else "v"
        flag = self._flags.add_bool("version", shorthand, usage=usage)
        flag.annotate(SetByFramework())

    def _annotate(self, flags: FlagSet, name: str, annotation: Any) -> None:
        if flags.lookup(name) is None:
            raise FlagDefinitionError(f'no such flag "{name}" on command "{self.command_path}"')
        flags.annotate(name, annotation)

    def mark_flag_required(self, name: str) -> None:
        self._annotate(self._flags, name, Required())

    def mark_persistent_flag_required(self, name: str) -> None:
        self._annotate(self._pflags, name, Required())

    def mark_flag_filename(self, name: str, *extensions: str) -> None:
        self._annotate(self._flags, name, ExtensionFilter(tuple(extensions)))

    def mark_persistent_flag_filename(self, name: str, *extensions: str) -> None:
        self._annotate(self._pflags, name, ExtensionFilter(tuple(extensions)))

    def mark_flag_dirname(self, name: str, subdir: str | None = None) -> None:
        self._annotate(self._flags, name, DirFilter(subdir))

    def mark_persistent_flag_dirname(self, name: str, subdir: str | None = None) -> None:
        self._annotate(self._pflags, name, DirFilter(subdir))

    def mark_flags_required_together(self, *names: str) -> None:
        self.merge_persistent_flags()
        register_flag_group(self._flags, RequiredTogether, names)

    def mark_flags_mutually_exclusive(self, *names: str) -> None:
        self.merge_persistent_flags()
        register_flag_group(self._flags, MutuallyExclusive, names)

    def mark_flags_one_required(self, *names: str) -> None:
        self.merge_persistent_flags()
        register_flag_group(self._flags, OneRequired, names)

    def mark_flags_depending_on(self, name: str, *dependents: str) -> None:
        """Setting any of `dependents` requires `name` to be set."""
        self.merge_persistent_flags()
        register_flag_group(self._flags, DependsOn, (name, *dependents))

    def mark_flag_depends_on_any(self, name: str, *others: str) -> None:
        """Setting `name` requires at least one of `others` to be set."""
        self.merge_persistent_flags()
        register_flag_group(self._flags, DependsOnAny, (name, *others))

    def register_flag_completion_func(self, flag_name: str, func: CompletionFunc) -> None:
        """Register the value completion callback for a flag visible on this command.

        Registering again for the same flag replaces the earlier callback. Safe
        to call from several threads while the program is being set up.
        """
        with self._merge_lock:
            flag = self.flag(flag_name)
        if flag is None:
            raise FlagDefinitionError(
                f"register_flag_completion_func: flag '{flag_name}' does not exist"
            )
        with self._flag_completion_lock:
            self._flag_completion_funcs[flag_name] = (flag, func)

    def get_flag_completion_func(self, flag_name: str) -> CompletionFunc | None:
        flag = self.flag(flag_name)
        if flag is None:
            return None
        cmd: Command | None = self
        while cmd is not None:
            with cmd._flag_completion_lock:
                entry = cmd._flag_completion_funcs.get(flag_name)
            if entry is not None and entry[0] is flag:
                return entry[1]
            cmd = cmd._parent
        return None

    # ---- resolution -----------------------------------------------------------------

    def _has_no_opt_default(self, name: str, flags: FlagSet) -> bool:
        flag = flags.lookup(name)
        return flag is not None and not flag.expects_value

    def _short_has_no_opt_default(self, name: str, flags: FlagSet) -> bool:
        if not name:
            return False
        flag = flags.shorthand_lookup(name[:1])
        return flag is not None and not flag.expects_value

    def _takes_separate_value(self, arg: str, flags: FlagSet) -> bool:
        if "=" in arg:
            return False
        if arg.startswith("--"):
            return not self._has_no_opt_default(arg[2:], flags)
        return (
            arg.startswith("-")
            and len(arg) == 2
            and not self._short_has_no_opt_default(arg[1:], flags)
        )

    def strip_flags(self, args: list[str]) -> list[str]:
        """Return the positional words of `args`, skipping flags and their values."""
        if not args:
            return args
        self.merge_persistent_flags()
        flags = self._flags
        commands = []
        remaining = list(args)
        while remaining:
            arg = remaining.pop(0)
            if arg == "--":
                break
            if self._takes_separate_value(arg, flags):
                if len(remaining) <= 1:
                    break
                remaining.pop(0)
                continue
            if arg and not arg.startswith("-"):
                commands.append(arg)
        return commands

    def args_minus_first_x(self, args: list[str], x: str) -> list[str]:
        """Remove the first positional occurrence of `x` from `args`."""
        if not args:
            return args
        self.merge_persistent_flags()
        flags = self._flags
        position = 0
        while position < len(args):
            arg = args[position]
            if arg == "--":
                break
            if self._takes_separate_value(arg, flags):
                position += 2
                continue
            if not arg.startswith("-") and arg == x:
                return args[:position] + args[position + 1 :]
            position += 1
        return args

    def find_next(self, name: str) -> Command | None:
        """Find the direct sub-command for `name`.

        An exact name or alias match wins. Otherwise, with prefix matching
        enabled, a prefix shared by exactly one sub-command resolves to it.
        """
        matches = []
        for cmd in self._commands:
            if self._name_matches(cmd.name, name) or cmd.has_alias(name):
                cmd._called_as = name
                return cmd
            if self.options.prefix_matching and cmd._has_name_or_alias_prefix(name):
                matches.append(cmd)
        if len(matches) == 1:
            matches[0]._called_as = matches[0].name
            return matches[0]
        return None

    def find(self, args: list[str]) -> tuple[Command, list[str]]:
        """Resolve the target command for `args`.

        Returns the command and the arguments left for it.

        Raises:
            AdderError: If the command does not accept the remaining positionals
                and declares no validator of its own.
        """
        cmd = self
        remaining = list(args)
        while True:
            words = cmd.strip_flags(remaining)
            if not words:
                break
            found = cmd.find_next(words[0])
            if found is None:
                break
            remaining = cmd.args_minus_first_x(remaining, words[0])
            cmd = found
        if cmd.args is None:
            legacy_args(cmd, cmd.strip_flags(remaining))
        return cmd, remaining

    def traverse(self, args: list[str]) -> tuple[Command, list[str]]:
        """Resolve the target command, parsing each ancestor's flags on the way."""
        cmd = self
        args = list(args)
        while True:
            self_flags: list[str] = []
            in_flag = False
            cmd.merge_persistent_flags()
            for index, arg in enumerate(args):
                if arg.startswith("--") and "=" not in arg:
                    in_flag = not cmd._has_no_opt_default(arg[2:], cmd._flags)
                    self_flags.append(arg)
                    continue
                if (
                    arg.startswith("-")
                    and "=" not in arg
                    and len(arg) == 2
                    and not cmd._short_has_no_opt_default(arg[1:], cmd._flags)
                ):
                    in_flag = True
                    self_flags.append(arg)
                    continue
                if in_flag:
                    in_flag = False
                    self_flags.append(arg)
                    continue
                if (len(arg) >= 3 and arg.startswith("--")) or (
                    len(arg) >= 2 and arg[0] == "-" and arg[1] != "-"
                ):
                    self_flags.append(arg)
                    continue
                found = cmd.find_next(arg)
                if found is None:
                    return cmd, args
                cmd.parse_flags(self_flags)
                cmd = found
                args = args[index + 1 :]
                break
            else:
                return cmd, args

    def suggestions_for(self, typed_name: str) -> list[str]:
        suggestions = []
        for cmd in self._commands:
            if not cmd.is_available_command():
                continue
            distance = levenshtein_distance(typed_name, cmd.name, ignore_case=True)
            by_distance = distance <= self.suggestions_minimum_distance
            by_prefix = cmd.name.lower().startswith(typed_name.lower())
            if by_distance or by_prefix:
                suggestions.append(cmd.name)
            for explicit in cmd.suggest_for:
                if explicit.lower() == typed_name.lower():
                    suggestions.append(cmd.name)
        return suggestions

    def find_suggestions(self, typed_name: str) -> str:
        if self.disable_suggestions:
            return ""
        suggestions = self.suggestions_for(typed_name)
        if not suggestions:
            return ""
        lines = "".join(f"\t{suggestion}\n" for suggestion in suggestions)
        return f"\n\nDid you mean this?\n{lines}"

    # ---- validation -----------------------------------------------------------------

    def validate_args(self, args: list[str]) -> None:
        validator: PositionalArgs = self.args or legacy_args
        validator(self, args)

    def validate_required_flags(self) -> None:
        if self.disable_flag_parsing:
            return
        missing = [flag.name for flag in self.flags() if flag.is_required and not flag.changed]
        if missing:
            raise RequiredFlagError(sorted(missing))

    def validate_flag_groups(self) -> None:
        if self.disable_flag_parsing:
            return
        validate_flag_groups(self.flags())

    # ---- output ---------------------------------------------------------------------

    def set_out(self, out: TextIO | None) -> None:
        self._out = out

    def set_err(self, err: TextIO | None) -> None:
        self._err = err

    def set_args(self, args: list[str] | None) -> None:
        self._args = args

    def out_or_stdout(self) -> TextIO:
        cmd: Command | None = self
        while cmd is not None:
            if cmd._out is not None:
                return cmd._out
            cmd = cmd._parent
        return sys.stdout

    def err_or_stderr(self) -> TextIO:
        cmd: Command | None = self
        while cmd is not None:
            if cmd._err is not None:
                return cmd._err
            cmd = cmd._parent
        return sys.stderr

    def resolved_error_prefix(self) -> str:
        cmd: Command | None = self
        while cmd is not None:
            if cmd.error_prefix:
                return cmd.error_prefix
            cmd = cmd._parent
        return "Error:"

    def print_out(self, message: str) -> None:
        get_console(self.out_or_stdout()).print(message, markup=False)

    def print_err(self, message: str, style: str | None = None) -> None:
        get_console(self.err_or_stderr()).print(message, markup=False, style=style)

    def help(self) -> None:
        render_help(self, get_console(self.out_or_stdout()))

    def usage(self) -> None:
        render_usage(self, get_console(self.err_or_stderr()))

    # ---- default commands -----------------------------------------------------------

    def init_default_help_cmd(self) -> None:
        from adder.default_commands import build_help_command

        if not self.has_sub_commands():
            return
        if self._help_command is None:
            self._help_command = build_help_command(self)
        self.remove_command(self._help_command)
        self.add_command(self._help_command)

    def init_default_completion_cmd(self, args: list[str]) -> None:
        from adder.default_commands import add_completion_command

        add_completion_command(self, args)

    def _init_complete_cmd(self, args: list[str]) -> None:
        from adder.default_commands import COMPLETE_REQUEST, build_complete_command

        complete_cmd = next(
            (cmd for cmd in self._commands if cmd.name == COMPLETE_REQUEST), None
        )
        if complete_cmd is None:
            complete_cmd = build_complete_command()
            self.add_command(complete_cmd)
        try:
            target, _ = self.find(args)
        except AdderError:
            target = None
        if target is None or target.name != COMPLETE_REQUEST:
            self.remove_command(complete_cmd)

    # ---- execution ------------------------------------------------------------------

    async def _run_hooks(self, args: list[str]) -> None:
        chain: list[Command] = []
        cmd: Command | None = self
        while cmd is not None:
            chain.append(cmd)
            cmd = cmd._parent
        traverse_hooks = self.options.traverse_run_hooks

        for cmd in reversed(chain) if traverse_hooks else chain:
            if cmd.persistent_pre_run is not None:
                await cmd.persistent_pre_run(self, args)
                if not traverse_hooks:
                    break
        if self.pre_run is not None:
            await self.pre_run(self, args)

        self.validate_required_flags()
        self.validate_flag_groups()

        await self.run(self, args)

        if self.post_run is not None:
            await self.post_run(self, args)
        for cmd in chain:
            if cmd.persistent_post_run is not None:
                await cmd.persistent_post_run(self, args)
                if not traverse_hooks:
                    break

    async def _execute(self, args: list[str]) -> None:
        if self.deprecated:
            self.print_out(f'Command "{self.name}" is deprecated, {self.deprecated}')

        self.init_default_help_flag()
        self.init_default_version_flag()
        self.parse_flags(args)

        help_flag = self.flags().lookup("help")
        if help_flag is not None and help_flag.is_set_by_framework and help_flag.value is True:
            raise HelpSignal()
        version_flag = self.flags().lookup("version")
        if (
            version_flag is not None
            and version_flag.is_set_by_framework
            and version_flag.value is True
        ):
            raise VersionSignal()

        if not self.runnable():
            raise HelpSignal()

        positional = list(args) if self.disable_flag_parsing else list(self.flags().args)
        self.validate_args(positional)
        logger.debug("[Command:%s] Running with args %r", self.command_path, positional)
        await self._run_hooks(positional)

    def _report(self, cmd: Command, error: AdderError) -> None:
        if not (cmd.silence_errors or self.silence_errors):
            self.print_err(f"{cmd.resolved_error_prefix()} {error}", style="error")
        if not (cmd.silence_usage or self.silence_usage):
            cmd.usage()

    async def execute_async(self, args: list[str] | None = None) -> Command:
        """Resolve and run the command for `args` (default: `sys.argv[1:]`).

        Returns the command that ran. User-facing errors are printed, unless
        silenced, and re-raised.
        """
        if self._parent is not None:
            return await self.root.execute_async(args)

        if args is None:
            args = self._args if self._args is not None else sys.argv[1:]
        args = list(args)

        self.init_default_help_cmd()
        self.init_default_completion_cmd(args)
        self._init_complete_cmd(args)
        self.check_command_groups()

        try:
            if self.traverse_children:
                cmd, flags = self.traverse(args)
            else:
                cmd, flags = self.find(args)
        except AdderError as error:
            if not self.silence_errors:
                self.print_err(f"{self.resolved_error_prefix()} {error}", style="error")
                self.print_err(f"Run '{self.command_path} --help' for usage.")
            raise

        try:
            await cmd._execute(flags)
        except HelpSignal:
            cmd.help()
        except VersionSignal:
            cmd.print_out(f"{cmd.name} version {cmd.version}")
        except AdderError as error:
            self._report(cmd, error)
            raise
        return cmd

    def execute(self, args: list[str] | None = None) -> Command:
        """Synchronous entry point: run `execute_async()` in a new event loop."""
        return asyncio.run(self.execute_async(args))
