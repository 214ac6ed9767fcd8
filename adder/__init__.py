"""
Adder CLI Framework

Copyright (c) 2025 rtj.dev LLC.
Licensed under the MIT License. See LICENSE file for details.
"""

import logging

from .args import (
    arbitrary_args,
    exact_args,
    match_all,
    maximum_n_args,
    minimum_n_args,
    no_args,
    only_valid_args,
    range_args,
)
from .command import Command, Group
from .completer import AdderCompleter
from .completion import CompletionOptions, ShellCompDirective
from .config import DispatchOptions
from .flags import Flag, FlagSet, FlagType

logger = logging.getLogger("adder")


__all__ = [
    "AdderCompleter",
    "Command",
    "CompletionOptions",
    "DispatchOptions",
    "Flag",
    "FlagSet",
    "FlagType",
    "Group",
    "ShellCompDirective",
    "arbitrary_args",
    "exact_args",
    "match_all",
    "maximum_n_args",
    "minimum_n_args",
    "no_args",
    "only_valid_args",
    "range_args",
]
