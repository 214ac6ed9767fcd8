# Adder CLI Framework — (c) 2025 rtj.dev LLC — MIT Licensed
"""Per-command completion settings."""
from __future__ import annotations

from pydantic import BaseModel

from adder.completion.directive import ShellCompDirective


class CompletionOptions(BaseModel):
    """
    Controls the default `completion` command and completion fallbacks.

    These are read from the root command, except `default_directive` which is
    looked up from the resolved command towards the root.

    Attributes:
        disable_default_cmd (bool): Do not add the `completion` command.
        disable_no_desc_flag (bool): Do not add `--no-descriptions` to the
            shell sub-commands.
        disable_descriptions (bool): Generate scripts that request completions
            without descriptions.
        hidden_default_cmd (bool): Add the `completion` command but hide it.
        default_directive (ShellCompDirective | None): Directive used for
            positional completion when no callback or static value applies.
    """

    disable_default_cmd: bool = False
    disable_no_desc_flag: bool = False
    disable_descriptions: bool = False
    hidden_default_cmd: bool = False
    default_directive: ShellCompDirective | None = None
