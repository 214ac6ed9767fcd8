# Adder CLI Framework — (c) 2025 rtj.dev LLC — MIT Licensed
"""
Configuration for Adder command trees.

`DispatchOptions` holds the dispatch switches that apply to a whole program.
It lives on the root command and every descendant consults the root's copy,
so two programs built in the same process never share settings.

Environment configuration is read through `get_env_config()`: a per-program
variable named after the root command (`<PROG>_<SUFFIX>`) is consulted first,
then the global `ADDER_<SUFFIX>` variable.
"""
from __future__ import annotations

import os
import re

from pydantic import BaseModel, ConfigDict

GLOBAL_ENV_PREFIX = "ADDER"


class DispatchOptions(BaseModel):
    """
    Program-wide dispatch behavior.

    Attributes:
        prefix_matching (bool): Resolve a sub-command from an unambiguous prefix.
        case_insensitive (bool): Match sub-command names and aliases ignoring case.
        command_sorting (bool): List sub-commands sorted by name.
        traverse_run_hooks (bool): Run the persistent hooks of every ancestor
            instead of only the nearest one.
    """

    prefix_matching: bool = False
    case_insensitive: bool = False
    command_sorting: bool = True
    traverse_run_hooks: bool = False

    model_config = ConfigDict(validate_assignment=True)


def config_env_var(name: str, suffix: str) -> str:
    """Build `<NAME>_<SUFFIX>`, upper-cased, with non-alphanumerics mapped to `_`."""
    return re.sub(r"[^A-Z0-9_]", "_", f"{name}_{suffix}".upper())


def get_env_config(program: str, suffix: str) -> str:
    value = os.getenv(config_env_var(program, suffix), "")
    if not value:
        value = os.getenv(config_env_var(GLOBAL_ENV_PREFIX, suffix), "")
    return value
