"""
Adder CLI Framework

Copyright (c) 2025 rtj.dev LLC.
Licensed under the MIT License. See LICENSE file for details.
"""

from .active_help import (
    append_active_help,
    active_help_enabled,
    get_active_help_config,
)
from .directive import (
    ACTIVE_HELP_MARKER,
    Completion,
    CompletionFunc,
    CompletionResult,
    ShellCompDirective,
    fixed_completions,
    no_file_completions,
)
from .engine import get_completions
from .options import CompletionOptions
from .protocol import decode, descriptions_enabled, encode, write_result

__all__ = [
    "ACTIVE_HELP_MARKER",
    "Completion",
    "CompletionFunc",
    "CompletionOptions",
    "CompletionResult",
    "ShellCompDirective",
    "active_help_enabled",
    "append_active_help",
    "decode",
    "descriptions_enabled",
    "encode",
    "fixed_completions",
    "get_active_help_config",
    "get_completions",
    "no_file_completions",
    "write_result",
]
