# Adder CLI Framework — (c) 2025 rtj.dev LLC — MIT Licensed
"""Console helpers for Adder CLI applications."""
from typing import TextIO

from rich.console import Console
from rich.theme import Theme

adder_theme = Theme(
    {
        "heading": "bold",
        "command": "bold cyan",
        "flag": "cyan",
        "error": "bold red",
        "warning": "yellow",
        "muted": "dim",
    }
)

console = Console(theme=adder_theme)


def get_console(file: TextIO) -> Console:
    """Return a themed console writing to `file` with no soft wrapping."""
    return Console(file=file, theme=adder_theme, soft_wrap=True, highlight=False)
