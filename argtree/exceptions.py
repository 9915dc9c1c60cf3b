# argtree — (c) 2025 rtj.dev LLC — MIT Licensed
"""
Defines all custom exception classes raised by argtree.

Declaration mistakes surface while a parser is being built, caller mistakes surface
before a parse starts, and everything that goes wrong while classifying tokens is an
`ArgumentParseError` carrying the offending token or declaration.

All exceptions inherit from `ArgTreeError`, the base exception for the package.

Exception Hierarchy:
- ArgTreeError
    ├── SchemaError
    ├── ParserUsageError
    └── ArgumentParseError
            ├── MissingArgumentError
            ├── MissingOptionValueError
            ├── UnexpectedOptionValueError
            ├── InvalidOptionFormatError
            └── UnknownArgumentError

The parser never catches or downgrades an `ArgumentParseError`; presenting it is up
to the caller (see `argtree.__main__` for an example).
"""
from __future__ import annotations

from typing import TYPE_CHECKING, Any, Iterable

if TYPE_CHECKING:
    from argtree.parser.argument import Option


class ArgTreeError(Exception):
    """Base exception for argtree."""


class SchemaError(ArgTreeError):
    """Exception raised when a parser declaration is invalid."""


class ParserUsageError(ArgTreeError):
    """Exception raised when a parse entry point is called with invalid input."""


class ArgumentParseError(ArgTreeError):
    """Base exception for failures while parsing command-line tokens."""


class MissingArgumentError(ArgumentParseError):
    """Exception raised when mandatory items are still unsatisfied after parsing."""

    def __init__(self, missing: Iterable[Any]) -> None:
        self.missing: tuple[Any, ...] = tuple(missing)
        names = ", ".join(item.display_name for item in self.missing)
        plural = "s" if len(self.missing) > 1 else ""
        super().__init__(f"Missing argument{plural}: {names}")

    @property
    def names(self) -> list[str]:
        """Return the plain names of the missing items."""
        return [item.name for item in self.missing]


class MissingOptionValueError(ArgumentParseError):
    """Exception raised when an option expecting a value was given none."""

    def __init__(self, option: Option) -> None:
        self.option = option
        if option.long_key and not option.key:
            hint = f" Use --{option.long_key}=<{option.name}>."
        else:
            hint = ""
        super().__init__(f"Missing value for option {option.display_name}.{hint}")


class UnexpectedOptionValueError(ArgumentParseError):
    """Exception raised when a value was attached to a flag-only option."""

    def __init__(self, option: Option, token: str) -> None:
        self.option = option
        self.token = token
        super().__init__(
            f"Option {option.display_name} does not take a value, got '{token}'"
        )


class InvalidOptionFormatError(ArgumentParseError):
    """Exception raised when a value-taking option is not last in a combined token."""

    def __init__(self, token: str, key: str) -> None:
        self.token = token
        self.key = key
        super().__init__(
            f"Invalid token '{token}': option -{key} expects a value and must be "
            "the last letter of the token"
        )


class UnknownArgumentError(ArgumentParseError):
    """Exception raised when a token matches no declared option, command or position."""

    def __init__(self, token: str) -> None:
        self.token = token
        super().__init__(f"Unknown argument: '{token}'")
