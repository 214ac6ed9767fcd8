"""
Adder CLI Framework

Copyright (c) 2025 rtj.dev LLC.
Licensed under the MIT License. See LICENSE file for details.
"""

from .annotations import (
    DependsOn,
    DependsOnAny,
    DirFilter,
    ExtensionFilter,
    FlagAnnotation,
    MutuallyExclusive,
    OneRequired,
    Required,
    RequiredTogether,
    SetByFramework,
    deserialize_annotations,
    serialize_annotations,
)
from .flag import Flag
from .flag_set import FlagSet
from .flag_type import FlagType

__all__ = [
    "DependsOn",
    "DependsOnAny",
    "DirFilter",
    "ExtensionFilter",
    "Flag",
    "FlagAnnotation",
    "FlagSet",
    "FlagType",
    "MutuallyExclusive",
    "OneRequired",
    "Required",
    "RequiredTogether",
    "SetByFramework",
    "deserialize_annotations",
    "serialize_annotations",
]
