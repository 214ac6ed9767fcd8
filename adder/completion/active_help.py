# Adder CLI Framework — (c) 2025 rtj.dev LLC — MIT Licensed
"""
Active help: short hints shown to the user while completing, instead of
candidates to insert.

A completion callback adds a hint with `append_active_help()`. Hints travel in
the candidate list as entries carrying the active-help marker prefix and are
dropped by the encoder when the user disabled them.

Users control hints with two environment variables:
- `ADDER_ACTIVE_HELP=0` disables hints for every program.
- `<PROG>_ACTIVE_HELP` holds the program's own setting; `0` disables hints,
  any other value is passed through to callbacks via `get_active_help_config()`.
"""
from __future__ import annotations

import os
from typing import TYPE_CHECKING, Sequence

from adder.completion.directive import ACTIVE_HELP_MARKER, Completion
from adder.config import GLOBAL_ENV_PREFIX, config_env_var

if TYPE_CHECKING:
    from adder.command import Command

ACTIVE_HELP_SUFFIX = "ACTIVE_HELP"
ACTIVE_HELP_DISABLED = "0"


def append_active_help(
    completions: Sequence[str | Completion], message: str
) -> list[str | Completion]:
    """Return `completions` with an active-help hint appended."""
    return [*completions, Completion(ACTIVE_HELP_MARKER + message)]


def active_help_env_var(cmd: Command) -> str:
    return config_env_var(cmd.root.name, ACTIVE_HELP_SUFFIX)


def get_active_help_config(cmd: Command) -> str:
    """Return the active-help setting for `cmd`'s program.

    The global variable set to "0" wins over any per-program value.
    """
    if os.getenv(config_env_var(GLOBAL_ENV_PREFIX, ACTIVE_HELP_SUFFIX)) == ACTIVE_HELP_DISABLED:
        return ACTIVE_HELP_DISABLED
    return os.getenv(active_help_env_var(cmd), "")


def active_help_enabled(cmd: Command) -> bool:
    return get_active_help_config(cmd) != ACTIVE_HELP_DISABLED
