# Adder CLI Framework — (c) 2025 rtj.dev LLC — MIT Licensed
"""
Built-in commands synthesized by `Command.execute_async()`.

- `help [command]`: renders help for any command in the tree.
- `__complete` (hidden): answers shell completion requests with the line
  protocol. `__complete_no_desc` / `__completeNoDesc` request the same output
  without descriptions.
- `completion <shell>`: writes the completion script for bash, zsh, fish,
  PowerShell or nushell.
"""
from __future__ import annotations

from typing import Callable, TextIO

from adder.args import minimum_n_args, no_args
from adder.command import Command
from adder.completion.directive import ShellCompDirective, no_file_completions
from adder.completion.engine import get_completions
from adder.completion.protocol import write_result
from adder.completion.scripts import (
    COMPLETE_NO_DESC_REQUEST,
    COMPLETE_REQUEST,
    write_bash_completion,
    write_fish_completion,
    write_nushell_completion,
    write_powershell_completion,
    write_zsh_completion,
)
from adder.exceptions import AdderError
from adder.logger import logger

COMPLETION_COMMAND = "completion"
NO_DESCRIPTIONS_FLAG = "no-descriptions"
NO_DESC_ALIASES = (COMPLETE_NO_DESC_REQUEST, "__completeNoDesc")

ScriptWriter = Callable[[Command, TextIO, bool], None]


def _help_completions(cmd: Command, args: list[str], to_complete: str):
    try:
        target, _ = cmd.root.find(args)
    except AdderError:
        return [], ShellCompDirective.NO_FILE_COMP
    completions = []
    for sub in target.commands:
        if sub.is_available_command() or sub is target.help_command:
            if sub.name.startswith(to_complete):
                completions.append(f"{sub.name}\t{sub.short}")
    return completions, ShellCompDirective.NO_FILE_COMP


def _run_help(cmd: Command, args: list[str]) -> None:
    root = cmd.root
    try:
        target, _ = root.find(args)
    except AdderError:
        cmd.print_out(f"Unknown help topic {' '.join(args)!r}")
        root.usage()
        return
    target.init_default_help_flag()
    target.init_default_version_flag()
    target.help()


def build_help_command(root: Command) -> Command:
    name = root.name or "this program"
    return Command(
        use="help [command]",
        short="Help about any command",
        long=(
            "Help provides help for any command in the application.\n"
            f"Simply type {name} help [path to command] for full details."
        ),
        valid_args_function=_help_completions,
        run=_run_help,
    )


def _run_complete(cmd: Command, args: list[str]) -> None:
    root = cmd.root
    if root.all_commands() == [cmd]:
        # A root whose only child is this command must resolve as a leaf.
        root.remove_command(cmd)
    result = get_completions(root, args)
    out = (result.command or root).out_or_stdout()
    requested = cmd.called_as not in NO_DESC_ALIASES
    if root.completion_options.disable_descriptions:
        requested = False
    write_result(root, result, out, requested_descriptions=requested)


def build_complete_command() -> Command:
    return Command(
        use=f"{COMPLETE_REQUEST} [command-line]",
        aliases=list(NO_DESC_ALIASES),
        short="Request shell completion choices for the specified command-line",
        long=(
            f"{COMPLETE_REQUEST} is a special command that is used by the shell completion "
            "logic to request completion choices for the specified command-line."
        ),
        hidden=True,
        disable_flag_parsing=True,
        args=minimum_n_args(1),
        run=_run_complete,
    )


def _script_command(
    shell: str,
    label: str,
    writer: ScriptWriter,
    program: str,
    with_no_desc_flag: bool,
    descriptions: bool,
) -> Command:
    def run(cmd: Command, args: list[str]) -> None:
        include_descriptions = descriptions
        if with_no_desc_flag and cmd.flags().get(NO_DESCRIPTIONS_FLAG):
            include_descriptions = False
        logger.debug("[completion] Writing %s script for '%s'", shell, cmd.root.name)
        writer(cmd.root, cmd.out_or_stdout(), include_descriptions)

    script_cmd = Command(
        use=shell,
        short=f"Generate the autocompletion script for {label}",
        long=(
            f"Generate the autocompletion script for {label}.\n\n"
            "Load it in the current shell session with the shell's own mechanism, "
            "for example:\n\n"
            f"\t{SOURCE_HINTS[shell].replace('PROG', program)}"
        ),
        args=no_args,
        valid_args_function=no_file_completions,
        run=run,
    )
    if with_no_desc_flag:
        script_cmd.flags().add_bool(
            NO_DESCRIPTIONS_FLAG, usage="disable completion descriptions"
        )
    return script_cmd


SOURCE_HINTS = {
    "bash": "source <(PROG completion bash)",
    "zsh": "source <(PROG completion zsh)",
    "fish": "PROG completion fish | source",
    "powershell": "PROG completion powershell | Out-String | Invoke-Expression",
    "nushell": "PROG completion nushell | save --force PROG-completion.nu",
}


SHELLS: dict[str, tuple[str, ScriptWriter]] = {
    "bash": ("bash", write_bash_completion),
    "zsh": ("zsh", write_zsh_completion),
    "fish": ("fish", write_fish_completion),
    "powershell": ("powershell", write_powershell_completion),
    "nushell": ("nushell", write_nushell_completion),
}


def add_completion_command(root: Command, args: list[str]) -> Command | None:
    """Attach the default `completion` command to `root` when appropriate.

    Nothing is added when disabled through `completion_options`, when the
    program already has a command (or alias) named `completion`, or when the
    root has no sub-commands and `completion` is not the command being called.
    """
    options = root.completion_options
    if options.disable_default_cmd:
        return None
    for cmd in root.all_commands():
        if cmd.name == COMPLETION_COMMAND or cmd.has_alias(COMPLETION_COMMAND):
            return None
    if not root.has_sub_commands() and (not args or args[0] != COMPLETION_COMMAND):
        return None

    with_no_desc_flag = not options.disable_no_desc_flag and not options.disable_descriptions
    descriptions = not options.disable_descriptions
    program = root.name or "the program"
    completion_cmd = Command(
        use=COMPLETION_COMMAND,
        short="Generate the autocompletion script for the specified shell",
        long=(
            f"Generate the autocompletion script for {program} for the specified shell.\n"
            "See each sub-command's help for details on how to use the generated script."
        ),
        args=no_args,
        valid_args_function=no_file_completions,
        hidden=options.hidden_default_cmd,
    )
    for shell, (label, writer) in SHELLS.items():
        completion_cmd.add_command(
            _script_command(shell, label, writer, program, with_no_desc_flag, descriptions)
        )
    root.add_command(completion_cmd)
    return completion_cmd

