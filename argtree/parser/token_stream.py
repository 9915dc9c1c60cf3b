# argtree — (c) 2025 rtj.dev LLC — MIT Licensed
"""
Defines `TokenStream`, a peekable cursor over command-line tokens.

The parser looks at a token with `peek()` and only calls `next()` once the token
has been handled, so a failure leaves the offending token unconsumed. A command
hands the same stream to its sub-parser; whatever the sub-parser leaves behind is
picked up again by the parent.
"""
from __future__ import annotations

from typing import Iterator, Sequence

from argtree.exceptions import ParserUsageError


class TokenStream(Iterator[str]):
    """
    Peekable iterator over a sequence of string tokens.

    Args:
        tokens (Sequence[str]): The tokens to iterate over.
        offset (int): Index of the first token to yield.
    """

    def __init__(self, tokens: Sequence[str], offset: int = 0) -> None:
        if tokens is None:
            raise ParserUsageError("tokens must be a sequence of strings, got None")
        if isinstance(tokens, str):
            raise ParserUsageError(
                "tokens must be a sequence of strings, not a single string"
            )
        self._tokens: tuple[str, ...] = tuple(tokens)
        for token in self._tokens:
            if not isinstance(token, str):
                raise ParserUsageError(
                    f"tokens must be strings, got {type(token).__name__}: {token!r}"
                )
        if not 0 <= offset <= len(self._tokens):
            raise ParserUsageError(
                f"offset {offset} is out of range for {len(self._tokens)} tokens"
            )
        self._position: int = offset

    @property
    def position(self) -> int:
        """Index of the next token."""
        return self._position

    def has_next(self) -> bool:
        return self._position < len(self._tokens)

    def peek(self) -> str:
        """Return the next token without consuming it."""
        if not self.has_next():
            raise StopIteration
        return self._tokens[self._position]

    def __next__(self) -> str:
        token = self.peek()
        self._position += 1
        return token

    def __iter__(self) -> TokenStream:
        return self

    def __len__(self) -> int:
        """Number of tokens not consumed yet."""
        return len(self._tokens) - self._position

    def remaining(self) -> list[str]:
        """Return the unconsumed tokens without consuming them."""
        return list(self._tokens[self._position :])

    def __repr__(self) -> str:
        return f"TokenStream(position={self._position}, remaining={self.remaining()!r})"
