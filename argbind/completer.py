# Argbind CLI Parser — (c) 2025 rtj.dev LLC — MIT Licensed
"""
Provides `ArgbindCompleter`, a Prompt Toolkit completer backed by a command tree.

It completes:
- Subcommand names (e.g. `build`, `help`)
- Option and flag names of the current command (e.g. `--format`, `-v`)
- Choices of the option being given a value (e.g. `--format j` -> `json`)
- Positional choices

Candidates come from `argbind.parser.completion.complete()`, the same function that
answers `tool ---completion -- ...`, so interactive prompts and shell completion
always agree.
"""
from __future__ import annotations

import os
import shlex
from typing import Iterable

from prompt_toolkit.completion import CompleteEvent, Completer, Completion
from prompt_toolkit.document import Document

from argbind.parser.command import CommandNode
from argbind.parser.command_parser import CommandParser
from argbind.parser.completion import complete


class ArgbindCompleter(Completer):
    """
    Prompt Toolkit completer for the arguments of a command tree.

    The input buffer holds the words after the program name. When the cursor sits
    right after whitespace, an empty word is completed.

    Args:
        root (CommandParser | CommandNode): The parser or tree to complete against.
    """

    def __init__(self, root: CommandParser | CommandNode):
        self.root = root.root if isinstance(root, CommandParser) else root

    def get_completions(
        self, document: Document, complete_event: CompleteEvent
    ) -> Iterable[Completion]:
        text = document.text_before_cursor
        try:
            words = shlex.split(text)
        except ValueError:
            return
        cursor_at_end_of_token = not text or text.endswith((" ", "\t"))
        stub = "" if cursor_at_end_of_token else words[-1]
        if cursor_at_end_of_token:
            words.append("")
        suggestions = complete(self.root, words)
        yield from self._yield_lcp_completions(suggestions, stub)

    def _ensure_quote(self, text: str) -> str:
        """Quote a completion containing whitespace so it stays one word."""
        if " " in text or "\t" in text:
            return f'"{text}"'
        return text

    def _yield_lcp_completions(
        self, suggestions: list[str], stub: str
    ) -> Iterable[Completion]:
        """
        Yield completions for `stub`.

        A single match is inserted whole. When several matches share a prefix
        longer than the stub, that prefix is offered first (except for flags).
        """
        matches = [suggestion for suggestion in suggestions if suggestion.startswith(stub)]
        if not matches:
            return

        lcp = os.path.commonprefix(matches)
        if len(matches) > 1 and len(lcp) > len(stub) and not lcp.startswith("-"):
            yield Completion(lcp, start_position=-len(stub), display=lcp)
        for match in matches:
            yield Completion(
                self._ensure_quote(match), start_position=-len(stub), display=match
            )
