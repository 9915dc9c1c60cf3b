"""
argtree

Copyright (c) 2025 rtj.dev LLC.
Licensed under the MIT License. See LICENSE file for details.
"""

from .argument import (
    ESCAPE_KEY,
    NO_KEY,
    ArgumentKind,
    Command,
    CommandGroup,
    Option,
    Positional,
)
from .argument_parser import DEFAULT_HELP_ARGS, ArgumentParser
from .builder import ArgumentParserBuilder
from .model import ArgumentModel, ParsedOption
from .parser_types import Arity
from .schema import Schema
from .session import ParseSession
from .token_stream import TokenStream

__all__ = [
    "ArgumentKind",
    "ArgumentModel",
    "ArgumentParser",
    "ArgumentParserBuilder",
    "Arity",
    "Command",
    "CommandGroup",
    "DEFAULT_HELP_ARGS",
    "ESCAPE_KEY",
    "NO_KEY",
    "Option",
    "ParsedOption",
    "ParseSession",
    "Positional",
    "Schema",
    "TokenStream",
]
