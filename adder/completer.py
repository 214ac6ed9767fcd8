# Adder CLI Framework — (c) 2025 rtj.dev LLC — MIT Licensed
"""
Provides `AdderCompleter`, a Prompt Toolkit completer backed by the same
completion engine that serves shell completion scripts.

The text before the cursor is tokenized with `shlex`; the words typed so far
and the partial word under the cursor are handed to `get_completions()` and
the result is mapped to Prompt Toolkit completions:

- Candidates are sorted unless the directive asks to keep their order
- Descriptions are shown as completion meta text
- Active help messages are not inserted
- `Error` yields nothing
- File extension and directory filters, and an empty `Default` result, fall
  back to path completion
"""
from __future__ import annotations

import os
import shlex
from typing import TYPE_CHECKING, Iterable

from prompt_toolkit.completion import CompleteEvent, Completer, Completion, PathCompleter
from prompt_toolkit.document import Document

from adder.completion.directive import ShellCompDirective
from adder.completion.engine import get_completions
from adder.logger import logger

if TYPE_CHECKING:
    from adder.command import Command


class AdderCompleter(Completer):
    """
    Prompt Toolkit completer for the command line of an Adder program.

    The input is the argument vector without the program name, e.g.
    `remote add --name `.

    Args:
        root (Command): Root of the command tree to complete against.
    """

    def __init__(self, root: Command):
        self.root = root
        root.init_default_help_cmd()

    def get_completions(
        self, document: Document, complete_event: CompleteEvent
    ) -> Iterable[Completion]:
        text = document.text_before_cursor
        try:
            tokens = shlex.split(text)
        except ValueError:
            return
        cursor_at_end_of_token = not text or text.endswith((" ", "\t"))
        if cursor_at_end_of_token:
            tokens.append("")
        stub = tokens[-1]

        result = get_completions(self.root, tokens)
        directive = result.directive
        logger.debug("[AdderCompleter] %r -> %s", tokens, directive.describe())
        if directive & ShellCompDirective.ERROR:
            return

        if directive & ShellCompDirective.FILTER_FILE_EXT:
            extensions = tuple(f".{value.lstrip('.')}" for value in result.values)
            yield from self._path_completions(
                stub,
                complete_event,
                PathCompleter(
                    file_filter=lambda name: os.path.isdir(name) or name.endswith(extensions)
                ),
            )
            return
        if directive & ShellCompDirective.FILTER_DIRS:
            base = result.values[0] if result.values else None
            yield from self._path_completions(
                stub,
                complete_event,
                PathCompleter(
                    only_directories=True,
                    get_paths=(lambda: [base]) if base else None,
                ),
            )
            return

        candidates = [
            completion for completion in result.completions if not completion.is_active_help
        ]
        if not candidates:
            if directive == ShellCompDirective.DEFAULT:
                yield from self._path_completions(stub, complete_event, PathCompleter())
            return

        if not directive & ShellCompDirective.KEEP_ORDER:
            candidates.sort(key=lambda completion: completion.value)
        for completion in candidates:
            yield Completion(
                self._ensure_quote(completion.value),
                start_position=-len(stub),
                display=completion.value,
                display_meta=completion.description or None,
            )

    def _path_completions(
        self, stub: str, complete_event: CompleteEvent, completer: PathCompleter
    ) -> Iterable[Completion]:
        yield from completer.get_completions(Document(stub, len(stub)), complete_event)

    def _ensure_quote(self, text: str) -> str:
        """Quote suggestions containing whitespace so they stay one token."""
        if " " in text or "\t" in text:
            return f'"{text}"'
        return text
