#!/usr/bin/env python
"""
Build the argument vector step by step, then run it.

Sub-commands, flag values and positional arguments are offered with the same
suggestions shell completion would give.
"""
import asyncio

from adder import Command, ShellCompDirective
from adder.interactive import run_interactive
from adder.utils import setup_logging

setup_logging(program="gitish")


def remotes(cmd: Command, args: list[str], to_complete: str):
    return ["origin\tDefault remote", "upstream\tProject remote"], ShellCompDirective.NO_FILE_COMP


def show(cmd: Command, args: list[str]) -> None:
    cmd.print_out(f"{cmd.command_path}: args={args} branch={cmd.flags().get('branch')}")


root = Command(use="gitish", short="A git-like demo")
remote = Command(use="remote", short="Manage remotes")
fetch = Command(use="fetch [REMOTE]", short="Fetch from a remote", valid_args_function=remotes, run=show)
fetch.flags().add_string("branch", "b", default="main", usage="Branch to fetch")
fetch.register_flag_completion_func(
    "branch",
    lambda cmd, args, to_complete: (["main", "develop", "release"], ShellCompDirective.NO_FILE_COMP),
)
remote.add_command(Command(use="list", short="List remotes", run=show))
root.add_command(remote, fetch)


async def main() -> None:
    argv = await run_interactive(root)
    await root.execute_async(argv)


if __name__ == "__main__":
    asyncio.run(main())
