# Adder CLI Framework — (c) 2025 rtj.dev LLC — MIT Licensed
"""
Typed flag annotations.

Every piece of metadata the framework attaches to a flag is one small frozen
dataclass per concern: required markers, file and directory completion
filters, the "set by the framework" marker, and flag-group membership. Flags
carry a list of these values, and the completion engine and the flag-group
validator pattern-match on their types.

For interoperability with tooling that reads the classic string-keyed
annotation map, `serialize_annotations()` and `deserialize_annotations()`
convert to and from `dict[str, list[str]]` using the stable keys defined below.
Group annotations serialize as one space-joined entry per group.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import ClassVar, Union

REQUIRED_FLAG = "adder_annotation_one_required_flag"
FILENAME_EXTENSIONS = "adder_annotation_filename_extensions"
SUBDIRS_IN_DIR = "adder_annotation_subdirs_in_dir"
FLAG_SET_BY_ADDER = "adder_annotation_flag_set_by_adder"
REQUIRED_TOGETHER = "adder_annotation_required_if_others_set"
ONE_REQUIRED = "adder_annotation_one_required"
MUTUALLY_EXCLUSIVE = "adder_annotation_mutually_exclusive"
DEPENDS_ON = "adder_annotation_depends_on"
DEPENDS_ON_ANY = "adder_annotation_depends_on_any"


@dataclass(frozen=True)
class Required:
    """The flag must be set before the command runs."""

    key: ClassVar[str] = REQUIRED_FLAG

    def to_values(self) -> list[str]:
        return ["true"]


@dataclass(frozen=True)
class ExtensionFilter:
    """Complete the flag's value with files having one of `extensions`."""

    extensions: tuple[str, ...] = ()
    key: ClassVar[str] = FILENAME_EXTENSIONS

    def to_values(self) -> list[str]:
        return list(self.extensions)


@dataclass(frozen=True)
class DirFilter:
    """Complete the flag's value with directories, optionally inside `subdir`."""

    subdir: str | None = None
    key: ClassVar[str] = SUBDIRS_IN_DIR

    def to_values(self) -> list[str]:
        return [self.subdir] if self.subdir else []


@dataclass(frozen=True)
class SetByFramework:
    """Marks the built-in help and version flags."""

    key: ClassVar[str] = FLAG_SET_BY_ADDER

    def to_values(self) -> list[str]:
        return ["true"]


@dataclass(frozen=True)
class GroupAnnotation:
    """Base class for flag-group membership; `members` is the full group."""

    members: tuple[str, ...]
    key: ClassVar[str] = ""

    @property
    def group_key(self) -> str:
        return " ".join(self.members)

    def to_values(self) -> list[str]:
        return [self.group_key]

    @classmethod
    def create(cls, names: list[str] | tuple[str, ...]) -> GroupAnnotation:
        return cls(tuple(sorted(names)))


@dataclass(frozen=True)
class RequiredTogether(GroupAnnotation):
    """If any member is set, all members must be set."""

    key: ClassVar[str] = REQUIRED_TOGETHER


@dataclass(frozen=True)
class OneRequired(GroupAnnotation):
    """At least one member must be set."""

    key: ClassVar[str] = ONE_REQUIRED


@dataclass(frozen=True)
class MutuallyExclusive(GroupAnnotation):
    """At most one member may be set."""

    key: ClassVar[str] = MUTUALLY_EXCLUSIVE


@dataclass(frozen=True)
class DependsOn(GroupAnnotation):
    """The first member must be set whenever any of the others is set."""

    key: ClassVar[str] = DEPENDS_ON

    @property
    def special(self) -> str:
        return self.members[0]

    @property
    def others(self) -> tuple[str, ...]:
        return self.members[1:]

    @classmethod
    def create(cls, names: list[str] | tuple[str, ...]) -> GroupAnnotation:
        special, *others = names
        return cls((special, *sorted(others)))


@dataclass(frozen=True)
class DependsOnAny(DependsOn):
    """When the first member is set, at least one of the others must be set."""

    key: ClassVar[str] = DEPENDS_ON_ANY


FlagAnnotation = Union[
    Required,
    ExtensionFilter,
    DirFilter,
    SetByFramework,
    RequiredTogether,
    OneRequired,
    MutuallyExclusive,
    DependsOn,
    DependsOnAny,
]

GROUP_KINDS: tuple[type[GroupAnnotation], ...] = (
    RequiredTogether,
    OneRequired,
    MutuallyExclusive,
    DependsOn,
    DependsOnAny,
)


def serialize_annotations(annotations: list[FlagAnnotation]) -> dict[str, list[str]]:
    """Render typed annotations as the string-keyed annotation map."""
    mapping: dict[str, list[str]] = {}
    for annotation in annotations:
        values = mapping.setdefault(annotation.key, [])
        values.extend(annotation.to_values())
    return mapping


def deserialize_annotations(mapping: dict[str, list[str]]) -> list[FlagAnnotation]:
    """Parse a string-keyed annotation map back into typed annotations.

    Unknown keys are ignored.
    """
    annotations: list[FlagAnnotation] = []
    for key, values in mapping.items():
        if key == REQUIRED_FLAG:
            if values and values[0] == "true":
                annotations.append(Required())
        elif key == FILENAME_EXTENSIONS:
            annotations.append(ExtensionFilter(tuple(values)))
        elif key == SUBDIRS_IN_DIR:
            annotations.append(DirFilter(values[0] if values else None))
        elif key == FLAG_SET_BY_ADDER:
            annotations.append(SetByFramework())
        else:
            for kind in GROUP_KINDS:
                if kind.key == key:
                    annotations.extend(kind(tuple(value.split(" "))) for value in values)
                    break
    return annotations
