# argtree — (c) 2025 rtj.dev LLC — MIT Licensed
"""
This module implements `ArgumentParser`, the engine that turns a sequence of raw
command-line tokens into an `ArgumentModel` according to a `Schema`.

Every token is inspected with one token of lookahead and only consumed once it has
been handled. A token is classified as:
- a plain token, if the escape switch `--` was already seen or it does not start
  with `-`. Plain tokens select a command of the still open command group, or fill
  the next positional (any number of them in variable-arity mode);
- a long option, `--name` or `--name=value`;
- a short option or a group of combined short options, `-a` or `-abc`. Only the
  last letter of a group may take a value, which is then the following token;
- the bare option `-`.

A matched command hands the shared `TokenStream` to its own parser, which consumes
as much as it can. A parser created with `ignore_unknown=True` stops at the first
token it cannot place and leaves it on the stream. For a command's parser that
means the parent continues with the token; at the top level the remaining tokens
are dropped.

Public Interface:
- `parse_args(args, offset=0)`: Parse tokens into an `ArgumentModel`.
- `syntax()`: Return the one-line syntax, e.g. `<file> [-v] [run | get]`.
- `print_usage(file=None)`: Print the syntax and per-item descriptions with rich.
- `is_help(args)` / `print_usage_if_help_requested(args)`: First-token help triggers.
- `suggest_next(args)`: Lenient completion candidates for the next token.

Example Usage:
    parser = (
        ArgumentParserBuilder()
        .add_argument("source")
        .add_option("v", "verbose")
        .add_option("o", "out", expects_value=True)
        .build()
    )
    model = parser.parse_args(["-vo", "build", "src"])
    model.get_option_value("o")          # "build"
    model.get_argument_value("source")   # "src"
"""
from __future__ import annotations

from typing import IO, Iterable, Sequence

from rich.console import Console
from rich.markup import escape

from argtree.console import argtree_theme, console
from argtree.exceptions import (
    ArgumentParseError,
    InvalidOptionFormatError,
    MissingOptionValueError,
    ParserUsageError,
    UnexpectedOptionValueError,
    UnknownArgumentError,
)
from argtree.logger import logger
from argtree.parser.argument import NO_KEY, Command, CommandGroup, Option, Positional
from argtree.parser.model import ArgumentModel
from argtree.parser.parser_types import OptionState
from argtree.parser.schema import Declaration, Schema
from argtree.parser.session import ParseSession
from argtree.parser.token_stream import TokenStream

DEFAULT_HELP_ARGS: tuple[str, ...] = ("--help", "-h")


class _UnrecognizedToken(Exception):
    """Raised internally when this parser cannot place the next token."""

    def __init__(self, token: str) -> None:
        super().__init__(token)
        self.token = token


class ArgumentParser:
    """
    Parses command-line tokens against an immutable `Schema`.

    The parser itself holds no per-parse state, so one instance may be reused for
    any number of parses, including concurrent ones.

    Args:
        schema (Schema): What this parser accepts.
        ignore_unknown (bool): Stop quietly at the first token that cannot be
            placed instead of raising `UnknownArgumentError`.
        help_args (Iterable[str]): First tokens that count as a help request.
    """

    def __init__(
        self,
        schema: Schema,
        ignore_unknown: bool = False,
        help_args: Iterable[str] = DEFAULT_HELP_ARGS,
    ) -> None:
        self.schema = schema
        self.ignore_unknown = ignore_unknown
        self.help_args = help_args

    @property
    def help_args(self) -> tuple[str, ...]:
        return self._help_args

    @help_args.setter
    def help_args(self, help_args: Iterable[str]) -> None:
        if isinstance(help_args, str):
            help_args = (help_args,)
        self._help_args = tuple(help_args)

    def parse_args(
        self, args: Sequence[str] | TokenStream, offset: int = 0
    ) -> ArgumentModel:
        """
        Parse tokens into an `ArgumentModel`.

        Args:
            args (Sequence[str] | TokenStream): The tokens, or a stream positioned
                at the first token to parse. A stream is left positioned after the
                last token this parser consumed.
            offset (int): Index of the first token to parse in a plain sequence.

        Returns:
            ArgumentModel: The validated, immutable result.

        Raises:
            ParserUsageError: If `args` is None, contains non-string tokens or the
                offset is out of range.
            ArgumentParseError: If the tokens do not match the schema.
        """
        if isinstance(args, TokenStream):
            if offset:
                raise ParserUsageError("offset cannot be combined with a TokenStream")
            stream = args
        else:
            stream = TokenStream(args, offset)

        session = self.schema.fork()
        logger.debug("Parsing %d token(s) against '%s'", len(stream), self)
        try:
            while stream.has_next():
                self._consume(stream, session)
        except _UnrecognizedToken as unrecognized:
            if not self.ignore_unknown:
                raise UnknownArgumentError(unrecognized.token) from None
            logger.debug(
                "Stopping at unknown token '%s', leaving %s",
                unrecognized.token,
                stream.remaining(),
            )
        return session.build()

    def _consume(self, stream: TokenStream, session: ParseSession) -> None:
        token = stream.peek()
        if session.escaped or not token.startswith("-"):
            self._dispatch(token, stream, session)
        else:
            self._resolve_option(token, stream, session)

    def _dispatch(self, token: str, stream: TokenStream, session: ParseSession) -> None:
        if session.expects_command(token):
            next(stream)
            command = session.command(token)
            logger.debug(
                "Delegating %d token(s) to command '%s'", len(stream), command.name
            )
            result = command.parser.parse_args(stream)
            session.record_command(command.name, result)
            return
        if not session.assign_positional(token):
            raise _UnrecognizedToken(token)
        next(stream)

    def _resolve_option(
        self, token: str, stream: TokenStream, session: ParseSession
    ) -> None:
        if len(token) > 2 and token[1] == "-":
            state = self._resolve_long(token, session)
        elif len(token) >= 2:
            state = self._resolve_short(token, session)
        else:
            state = session.option(NO_KEY)
            if state is None:
                raise _UnrecognizedToken(token)
            state.present = True
        next(stream)

        if state is session.options[self.schema.escape_slot]:
            logger.debug("Escape switch seen, treating remaining tokens as plain")
        if state.awaiting_value:
            if not stream.has_next():
                raise MissingOptionValueError(state.declaration)
            state.set_value(next(stream))

    def _resolve_long(self, token: str, session: ParseSession) -> OptionState:
        name, separator, value = token[2:].partition("=")
        state = session.long_option(name)
        if state is None:
            raise _UnrecognizedToken(token)
        if not separator:
            if state.declaration.expects_value:
                raise MissingOptionValueError(state.declaration)
        elif value:
            if not state.declaration.expects_value:
                raise UnexpectedOptionValueError(state.declaration, token)
            state.set_value(value)
        state.present = True
        return state

    def _resolve_short(self, token: str, session: ParseSession) -> OptionState:
        # Keys before an unknown one stay present when the rest is handed back.
        keys = token[1:]
        for position, key in enumerate(keys):
            state = session.option(key)
            if state is None:
                raise _UnrecognizedToken(token)
            state.present = True
            if state.declaration.expects_value and position < len(keys) - 1:
                raise InvalidOptionFormatError(token, key)
        return state

    def declarations(self) -> list[Declaration]:
        """Return the declared positionals, options and commands in declaration order."""
        return self.schema.declarations()

    @staticmethod
    def _usage_entry(item: Positional | Option | CommandGroup) -> str:
        if isinstance(item, CommandGroup):
            text = item.name
        else:
            text = item.full_name
        return text if item.mandatory else f"[{text}]"

    def syntax(self) -> str:
        """
        Return the one-line syntax of this parser.

        Mandatory items are bare and optional items bracketed, in declaration order,
        e.g. `<Intensity> [<Muttermilch>] [-t <loong>] [--verbose] [--format=<format>]`.
        """
        return " ".join(self._usage_entry(item) for item in self.schema.usage_items())

    def print_usage(self, file: IO[str] | None = None) -> None:
        """
        Print the syntax line followed by every declared item and its description.

        Args:
            file (IO[str] | None): Where to write; the shared console if omitted.
        """
        target = console if file is None else Console(file=file, theme=argtree_theme)
        target.print(f"[bold]usage:[/bold] [argtree.syntax]{escape(self.syntax())}[/]")
        declarations = self.declarations()
        if not declarations:
            return
        target.print()
        for item in declarations:
            name = item.full_name
            description = item.description or ""
            if description and len(name) > 30:
                description = f"\n{'':<33}{description}"
            target.print(
                f"  [argtree.name]{escape(f'{name:<30}')}[/] "
                f"[argtree.description]{escape(description)}[/]"
            )

    def is_help(self, args: Sequence[str]) -> bool:
        """Return True if the first token is one of `help_args`."""
        return bool(args) and args[0] in self.help_args

    def print_usage_if_help_requested(
        self, args: Sequence[str], file: IO[str] | None = None
    ) -> bool:
        """Print usage if the first token asks for help; return whether it did."""
        if self.is_help(args):
            self.print_usage(file)
            return True
        return False

    def suggest_next(
        self, args: Sequence[str], cursor_at_end_of_token: bool = False
    ) -> list[str]:
        """
        Suggest completions for the next token based on the tokens typed so far.

        Tokens that cannot be placed are skipped instead of raising, so this can be
        called on any partial input.

        Args:
            args (Sequence[str]): Tokens typed so far.
            cursor_at_end_of_token (bool): True if the last token is complete (the
                input ends with whitespace); otherwise the last token is treated as
                a prefix to complete.

        Returns:
            list[str]: Sorted candidates starting with the prefix.
        """
        tokens = list(args)
        partial = bool(tokens) and not cursor_at_end_of_token
        prefix = tokens.pop() if partial else ""

        session = self.schema.fork()
        stream = TokenStream(tokens)
        while stream.has_next():
            token = stream.peek()
            plain = session.escaped or not token.startswith("-")
            if plain and session.expects_command(token):
                next(stream)
                command: Command = session.command(token)
                remaining = stream.remaining()
                if partial:
                    remaining.append(prefix)
                return command.parser.suggest_next(
                    remaining, cursor_at_end_of_token=not partial
                )
            try:
                self._consume(stream, session)
            except MissingOptionValueError:
                if not stream.has_next():
                    return []
                next(stream)
            except (ArgumentParseError, _UnrecognizedToken):
                next(stream)

        suggestions: list[str] = []
        if not session.escaped:
            for state in session.options[: self.schema.declared_option_count]:
                if not state.present:
                    suggestions.extend(state.declaration.spellings)
        if session.commands is not None and not session.commands.satisfied:
            suggestions.extend(session.commands.commands)
        return sorted(
            suggestion for suggestion in suggestions if suggestion.startswith(prefix)
        )

    def __str__(self) -> str:
        return self.syntax()

    def __repr__(self) -> str:
        return (
            f"ArgumentParser(syntax={self.syntax()!r}, "
            f"ignore_unknown={self.ignore_unknown}, help_args={self.help_args!r})"
        )
