# argtree — (c) 2025 rtj.dev LLC — MIT Licensed
"""
Provides `ArgumentCompleter`, a Prompt Toolkit completer driven by an argtree
`ArgumentParser`.

The input buffer is split with `shlex` and handed to
`ArgumentParser.suggest_next()`, which knows which options are still unused,
whether a command may still be chosen and which command's parser owns the rest of
the line. Suggestions that contain whitespace are quoted.
"""

from __future__ import annotations

import os
import shlex
from typing import TYPE_CHECKING, Iterable

from prompt_toolkit.completion import Completer, Completion
from prompt_toolkit.document import Document

if TYPE_CHECKING:
    from argtree.parser import ArgumentParser


class ArgumentCompleter(Completer):
    """
    Prompt Toolkit completer for input parsed by an `ArgumentParser`.

    Args:
        parser (ArgumentParser): The parser whose schema drives the suggestions.
    """

    def __init__(self, parser: ArgumentParser):
        self.parser = parser

    def get_completions(self, document: Document, complete_event) -> Iterable[Completion]:
        """
        Compute completions for the text before the cursor.

        Yields nothing while a quote is left open.
        """
        text = document.text_before_cursor
        try:
            tokens = shlex.split(text)
        except ValueError:
            return
        cursor_at_end_of_token = text.endswith((" ", "\t")) or not tokens

        stub = "" if cursor_at_end_of_token else tokens[-1]
        suggestions = self.parser.suggest_next(tokens, cursor_at_end_of_token)
        yield from self._yield_lcp_completions(suggestions, stub)

    def _ensure_quote(self, text: str) -> str:
        if " " in text or "\t" in text:
            return f'"{text}"'
        return text

    def _yield_lcp_completions(
        self, suggestions: list[str], stub: str
    ) -> Iterable[Completion]:
        """
        Yield every suggestion matching `stub`.

        When several command names share a prefix longer than the stub, that prefix
        is offered first so a single TAB extends the input.
        """
        matches = [s for s in suggestions if s.startswith(stub)]
        if len(matches) > 1:
            lcp = os.path.commonprefix(matches)
            if len(lcp) > len(stub) and not lcp.startswith("-"):
                yield Completion(lcp, start_position=-len(stub), display=lcp)
        for match in matches:
            yield Completion(
                self._ensure_quote(match), start_position=-len(stub), display=match
            )
