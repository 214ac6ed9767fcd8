# Adder CLI Framework — (c) 2025 rtj.dev LLC — MIT Licensed
"""
Flag-group constraints.

Groups are declared on a command with `Command.mark_flags_required_together()`,
`mark_flags_mutually_exclusive()`, `mark_flags_one_required()`,
`mark_flags_depending_on()` and `mark_flag_depends_on_any()`. Each member flag
receives a typed group annotation naming the full group; the group structure is
derived from those annotations on demand, so groups inherited through persistent
flags behave exactly like local ones.

A group only applies to a command when every one of its member flags is visible
in that command's merged flag set.

Two consumers share the derivation:
- `validate_flag_groups()` runs before a command executes and raises
  `FlagGroupError` on the first violation, scanning groups of each kind in
  sorted group-key order and reporting flag names sorted.
- `adjust_for_completion()` computes which flags completion should surface as
  if required and which it should hide, without mutating any flag.
"""
from __future__ import annotations

from dataclasses import dataclass, field

from adder.exceptions import FlagGroupDefinitionError, FlagGroupError
from adder.flags import (
    DependsOn,
    DependsOnAny,
    FlagSet,
    MutuallyExclusive,
    OneRequired,
    RequiredTogether,
)
from adder.flags.annotations import GROUP_KINDS, GroupAnnotation
from adder.logger import logger


@dataclass
class CompletionAdjustments:
    """Flags to treat as required, and flags to hide, while completing."""

    promoted: set[str] = field(default_factory=set)
    hidden: set[str] = field(default_factory=set)


def register_flag_group(
    flags: FlagSet, kind: type[GroupAnnotation], names: list[str] | tuple[str, ...]
) -> GroupAnnotation:
    """Annotate every member of a new group.

    Raises:
        FlagGroupDefinitionError: If a member is not declared in `flags`, or the
            group has too few members.
    """
    minimum = 2 if issubclass(kind, DependsOn) else 1
    if len(names) < minimum:
        raise FlagGroupDefinitionError(
            f"a {kind.__name__} group needs at least {minimum} flag(s), got {list(names)}"
        )
    for name in names:
        if flags.lookup(name) is None:
            raise FlagGroupDefinitionError(
                f'failed to find flag "{name}" and mark it as being part of a '
                f"{kind.__name__} group"
            )
    annotation = kind.create(list(names))
    for name in names:
        flags.annotate(name, annotation)
    logger.debug("[flag_groups] Registered %s group [%s]", kind.__name__, annotation.group_key)
    return annotation


def collect_groups(flags: FlagSet, kind: type[GroupAnnotation]) -> dict[str, dict[str, bool]]:
    """Map each applicable group of `kind` to its members' changed state.

    Member order within each mapping follows the group definition.
    """
    groups: dict[str, dict[str, bool]] = {}
    skipped: set[str] = set()
    for flag in flags:
        for annotation in flag.get_annotations(kind):
            key = annotation.group_key
            if key in groups or key in skipped:
                continue
            members = [flags.lookup(name) for name in annotation.members]
            if any(member is None for member in members):
                skipped.add(key)
                continue
            groups[key] = {member.name: member.changed for member in members}
    return groups


def _names(names) -> str:
    return "[" + " ".join(names) + "]"


def validate_flag_groups(flags: FlagSet) -> None:
    """Raise `FlagGroupError` if the changed flags violate any group."""
    checks = {
        RequiredTogether: _check_required_together,
        OneRequired: _check_one_required,
        MutuallyExclusive: _check_mutually_exclusive,
        DependsOn: _check_depends_on,
        DependsOnAny: _check_depends_on_any,
    }
    for kind in GROUP_KINDS:
        groups = collect_groups(flags, kind)
        for key in sorted(groups):
            checks[kind](key, groups[key])


def _check_required_together(key: str, status: dict[str, bool]) -> None:
    set_names = [name for name, is_set in status.items() if is_set]
    if not set_names or len(set_names) == len(status):
        return
    missing = sorted(name for name, is_set in status.items() if not is_set)
    raise FlagGroupError(
        f"if any flags in the group {_names(key.split(' '))} are set they must all "
        f"be set; missing {_names(missing)}",
        group=key.split(" "),
        flags=missing,
    )


def _check_one_required(key: str, status: dict[str, bool]) -> None:
    if any(status.values()):
        return
    raise FlagGroupError(
        f"at least one of the flags in the group {_names(key.split(' '))} is required",
        group=key.split(" "),
        flags=sorted(status),
    )


def _check_mutually_exclusive(key: str, status: dict[str, bool]) -> None:
    set_names = sorted(name for name, is_set in status.items() if is_set)
    if len(set_names) < 2:
        return
    raise FlagGroupError(
        f"if any flags in the group {_names(key.split(' '))} are set none of the "
        f"others can be; {_names(set_names)} were all set",
        group=key.split(" "),
        flags=set_names,
    )


def _check_depends_on(key: str, status: dict[str, bool]) -> None:
    special, *others = key.split(" ")
    if status[special]:
        return
    set_names = sorted(name for name in others if status[name])
    if not set_names:
        return
    raise FlagGroupError(
        f'if any flags in {_names(others)} are set, flag "{special}" must also be '
        f"set; {_names(set_names)} were set",
        group=key.split(" "),
        flags=set_names,
    )


def _check_depends_on_any(key: str, status: dict[str, bool]) -> None:
    special, *others = key.split(" ")
    if not status[special] or any(status[name] for name in others):
        return
    raise FlagGroupError(
        f'flag "{special}" requires at least one of the flags {_names(others)} to be set',
        group=key.split(" "),
        flags=[special],
    )


def adjust_for_completion(flags: FlagSet) -> CompletionAdjustments:
    """Work out how groups reshape flag-name suggestions.

    - A required-together group with any member set promotes all members.
    - A one-required group with no member set promotes all members.
    - A mutually-exclusive group with a member set hides the other members,
      except repeatable ones.
    - A depends-on group with a dependent set promotes the flag they depend on.
    - A depends-on-any group whose first flag is set promotes the others while
      none of them is set.
    """
    adjustments = CompletionAdjustments()

    for status in collect_groups(flags, RequiredTogether).values():
        if any(status.values()):
            adjustments.promoted.update(status)

    for status in collect_groups(flags, OneRequired).values():
        if not any(status.values()):
            adjustments.promoted.update(status)

    for status in collect_groups(flags, MutuallyExclusive).values():
        for set_name in [name for name, is_set in status.items() if is_set]:
            for name in status:
                if name == set_name:
                    continue
                flag = flags.lookup(name)
                if flag is not None and not flag.repeatable:
                    adjustments.hidden.add(name)

    for key, status in collect_groups(flags, DependsOn).items():
        special, *others = key.split(" ")
        if not status[special] and any(status[name] for name in others):
            adjustments.promoted.add(special)

    for key, status in collect_groups(flags, DependsOnAny).items():
        special, *others = key.split(" ")
        if status[special] and not any(status[name] for name in others):
            adjustments.promoted.update(others)

    return adjustments
