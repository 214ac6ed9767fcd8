# Adder CLI Framework — (c) 2025 rtj.dev LLC — MIT Licensed
"""
The completion engine.

Given the words typed after the program name, the last one being the partial
word under the cursor (empty when a new word is starting), `get_completions()`
works out what could come next:

1. Resolve the target command from the earlier words (`find`, or `traverse`
   when the root traverses children).
2. Decide whether the partial word is a flag value (`--flag=`, `-f=`, or a
   previous word naming a flag that takes a value).
3. Parse the earlier words as flags. Flag-name completion is off after a bare
   `--`, or after the first positional when interspersed flags are disabled.
4. Offer, depending on the position:
   - a flag value: the flag's filter annotation or its registered callback,
   - a flag name: required (or group-promoted) flags first, otherwise every
     flag that is not hidden, deprecated or already set (repeatable flags stay),
   - a positional: sub-commands, required flags, static `valid_args`, then the
     command's `valid_args_function`.

Candidates are filtered by the typed prefix, deduplicated keeping the first
occurrence, and returned in production order. The engine never raises and
never writes anything: an unresolvable request yields an empty result with the
ERROR directive.
"""
from __future__ import annotations

from typing import TYPE_CHECKING, Iterable

from adder.args import accepts_more_args
from adder.completion.directive import Completion, CompletionResult, ShellCompDirective
from adder.exceptions import AdderError, FlagError
from adder.flag_groups import CompletionAdjustments, adjust_for_completion
from adder.flags import Flag
from adder.logger import logger

if TYPE_CHECKING:
    from adder.command import Command


def get_completions(root: Command, args: list[str]) -> CompletionResult:
    """Compute completions for `args` against the tree rooted at `root`."""
    args = list(args) or [""]
    to_complete = args[-1]
    trimmed = args[:-1]
    try:
        result = _get_completions(root, trimmed, to_complete)
    except AdderError as error:
        logger.debug("[completion] Request %r failed: %s", args, error)
        return CompletionResult(None, [], ShellCompDirective.ERROR)
    logger.debug(
        "[completion] Resolved %r to '%s' with directive %s",
        args,
        result.command.command_path if result.command else "",
        result.directive.describe(),
    )
    return result


def _is_flag_arg(arg: str) -> bool:
    return (len(arg) >= 3 and arg.startswith("--")) or (
        len(arg) >= 2 and arg[0] == "-" and arg[1] != "-"
    )


def find_flag(cmd: Command, name: str) -> Flag | None:
    """Look up a flag by long name, or by shorthand when `name` is one letter."""
    flags = cmd.flags()
    if len(name) == 1:
        short = flags.shorthand_lookup(name) or cmd.inherited_flags().shorthand_lookup(name)
        if short is None:
            return None
        name = short.name
    return cmd.flag(name)


def check_if_flag_completion(
    cmd: Command, args: list[str], last_arg: str
) -> tuple[Flag | None, list[str], str, FlagError | None]:
    """Detect whether `last_arg` is the value of a flag.

    Returns the flag (or None), the arguments left to parse, the text left to
    complete, and an error when a flag value is being completed for an unknown
    flag.
    """
    if cmd.disable_flag_parsing:
        return None, args, last_arg, None

    flag_name = ""
    trimmed = args
    with_equal = False
    original_last_arg = last_arg

    if last_arg.startswith("-"):
        index = last_arg.find("=")
        if index < 0:
            return None, args, last_arg, None
        if last_arg[:index].startswith("--"):
            flag_name = last_arg[2:index]
        else:
            flag_name = last_arg[index - 1 : index]
        last_arg = last_arg[index + 1 :]
        with_equal = True

    if not flag_name and args:
        previous = args[-1]
        if _is_flag_arg(previous) and "=" not in previous:
            flag_name = previous[2:] if previous.startswith("--") else previous[-1]
            trimmed = args[:-1]

    if not flag_name:
        return None, trimmed, last_arg, None

    flag = find_flag(cmd, flag_name)
    if flag is None:
        return (
            None,
            args,
            original_last_arg,
            FlagError(f'subcommand "{cmd.name}" does not support flag "{flag_name}"'),
        )

    if not with_equal and not flag.expects_value:
        return None, args, last_arg, None

    return flag, trimmed, last_arg, None


def _non_completable(flag: Flag, adjustments: CompletionAdjustments) -> bool:
    return flag.hidden or bool(flag.deprecated) or flag.name in adjustments.hidden


def flag_name_completions(
    flag: Flag, to_complete: str, adjustments: CompletionAdjustments
) -> list[Completion]:
    if _non_completable(flag, adjustments):
        return []
    completions = []
    long_name = f"--{flag.name}"
    if long_name.startswith(to_complete):
        completions.append(Completion(long_name, flag.usage))
    short_name = f"-{flag.shorthand}"
    if flag.shorthand and short_name.startswith(to_complete):
        completions.append(Completion(short_name, flag.usage))
    return completions


def _required_flag_completions(
    cmd: Command, to_complete: str, adjustments: CompletionAdjustments
) -> list[Completion]:
    completions: list[Completion] = []
    for flag in _visible_flags(cmd):
        required = flag.is_required or flag.name in adjustments.promoted
        if required and not flag.changed:
            completions.extend(flag_name_completions(flag, to_complete, adjustments))
    return completions


def _visible_flags(cmd: Command) -> Iterable[Flag]:
    yield from cmd.inherited_flags()
    yield from cmd.non_inherited_flags()


def _dedupe(completions: Iterable[Completion]) -> list[Completion]:
    seen: set[str] = set()
    unique = []
    for completion in completions:
        if completion.value in seen:
            continue
        seen.add(completion.value)
        unique.append(completion)
    return unique


def _filter_prefix(items: Iterable[str | Completion], prefix: str) -> list[Completion]:
    matches = []
    for item in items:
        completion = Completion.parse(item)
        if completion.is_active_help or completion.value.startswith(prefix):
            matches.append(completion)
    return matches


def _default_directive(cmd: Command) -> ShellCompDirective | None:
    current: Command | None = cmd
    while current is not None:
        if current.completion_options.default_directive is not None:
            return current.completion_options.default_directive
        current = current.parent
    return None


def _get_completions(root: Command, trimmed: list[str], to_complete: str) -> CompletionResult:
    root.reset_flags()
    if root.traverse_children:
        final_cmd, final_args = root.traverse(trimmed)
    else:
        final_cmd, final_args = root.find(trimmed)

    final_cmd.merge_persistent_flags()
    if not final_cmd.disable_flag_parsing:
        final_cmd.init_default_help_flag()
        final_cmd.init_default_version_flag()

    flag, final_args, to_complete, flag_error = check_if_flag_completion(
        final_cmd, final_args, to_complete
    )

    flags = final_cmd.flags()
    flag_completion = True
    if not final_cmd.disable_flag_parsing:
        flags.parse(final_args)
        if flags.args_len_at_dash >= 0 or (not flags.interspersed and flags.args):
            flag_completion = False

    if flag_error is not None and flag_completion:
        raise flag_error

    for name in ("help", "version"):
        builtin = flags.lookup(name)
        if builtin is not None and builtin.is_set_by_framework and builtin.changed:
            return CompletionResult(final_cmd, [], ShellCompDirective.NO_FILE_COMP)

    if not final_cmd.disable_flag_parsing:
        final_args = list(flags.args)

    if flag is not None and flag_completion:
        extension_filter = flag.extension_filter
        if extension_filter is not None:
            return CompletionResult(
                final_cmd,
                [Completion(ext) for ext in extension_filter.extensions],
                ShellCompDirective.FILTER_FILE_EXT,
            )
        dir_filter = flag.dir_filter
        if dir_filter is not None:
            return CompletionResult(
                final_cmd,
                [Completion(dir_filter.subdir)] if dir_filter.subdir else [],
                ShellCompDirective.FILTER_DIRS,
            )

    adjustments = adjust_for_completion(flags)
    completions: list[Completion] = []
    directive = ShellCompDirective.DEFAULT

    if (
        flag is None
        and to_complete.startswith("-")
        and "=" not in to_complete
        and flag_completion
    ):
        completions = _required_flag_completions(final_cmd, to_complete, adjustments)
        if not completions:
            for candidate in _visible_flags(final_cmd):
                if not candidate.changed or candidate.repeatable:
                    completions.extend(
                        flag_name_completions(candidate, to_complete, adjustments)
                    )
        directive = ShellCompDirective.NO_FILE_COMP
        if not final_cmd.disable_flag_parsing:
            return CompletionResult(final_cmd, _dedupe(completions), directive)

    listed_sub_commands = False
    if flag is None:
        found_local_non_persistent = False
        if not root.traverse_children:
            found_local_non_persistent = any(
                candidate.changed for candidate in final_cmd.local_non_persistent_flags()
            )

        if not final_args and not found_local_non_persistent:
            for sub in final_cmd.commands:
                if not (sub.is_available_command() or sub is final_cmd.help_command):
                    continue
                listed_sub_commands = True
                directive = ShellCompDirective.NO_FILE_COMP
                if sub.name.startswith(to_complete):
                    completions.append(Completion(sub.name, sub.short))
                else:
                    completions.extend(
                        Completion(alias, sub.short)
                        for alias in sub.aliases
                        if alias.startswith(to_complete)
                    )

        completions.extend(_required_flag_completions(final_cmd, to_complete, adjustments))

        positional_open = accepts_more_args(final_cmd, final_args, to_complete)
        if final_cmd.valid_args:
            if positional_open and (final_cmd.args is not None or not final_args):
                matches = _filter_prefix(final_cmd.valid_args, to_complete)
                if not matches:
                    matches = _filter_prefix(final_cmd.arg_aliases, to_complete)
                completions.extend(matches)
            return CompletionResult(
                final_cmd, _dedupe(completions), ShellCompDirective.NO_FILE_COMP
            )
        if not positional_open:
            return CompletionResult(
                final_cmd, _dedupe(completions), ShellCompDirective.NO_FILE_COMP
            )

    if flag is not None and flag_completion:
        completion_func = final_cmd.get_flag_completion_func(flag.name)
    else:
        completion_func = final_cmd.valid_args_function

    if completion_func is not None:
        items, func_directive = completion_func(final_cmd, final_args, to_complete)
        completions.extend(_filter_prefix(items, to_complete))
        directive = ShellCompDirective(func_directive)
        if listed_sub_commands:
            directive |= ShellCompDirective.NO_FILE_COMP
    elif flag is None and not listed_sub_commands:
        default_directive = _default_directive(final_cmd)
        if default_directive is not None:
            directive = default_directive

    return CompletionResult(final_cmd, _dedupe(completions), directive)
