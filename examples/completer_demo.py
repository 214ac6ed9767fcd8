#!/usr/bin/env python
"""
An in-process shell for a command tree, with Prompt Toolkit completion backed
by the completion engine.
"""
import asyncio
import shlex

from prompt_toolkit import PromptSession

from adder import AdderCompleter, Command
from adder.exceptions import AdderError
from adder.logger import logger


def greet(cmd: Command, args: list[str]) -> None:
    name = args[0] if args else "world"
    cmd.print_out(f"{cmd.flags().get('greeting')}, {name}!")


root = Command(use="hello", short="Greeting shell")
greet_cmd = Command(use="greet [NAME]", short="Greet someone", valid_args=["alice", "bob"], run=greet)
greet_cmd.flags().add_string("greeting", "g", default="Hello", usage="Greeting to use")
root.add_command(greet_cmd)


async def main() -> None:
    session = PromptSession(completer=AdderCompleter(root))
    while True:
        try:
            text = await session.prompt_async("hello> ")
        except (EOFError, KeyboardInterrupt):
            return
        if text.strip() in ("exit", "quit"):
            return
        try:
            await root.execute_async(shlex.split(text))
        except AdderError as error:
            logger.debug("Command %r failed: %s", text, error)
        finally:
            root.reset_flags()


if __name__ == "__main__":
    asyncio.run(main())
