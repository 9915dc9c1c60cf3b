# argtree — (c) 2025 rtj.dev LLC — MIT Licensed
"""
Defines `ArgumentParserBuilder`, the fluent interface for declaring a parser.

Every `add_*` call takes the next declaration index from one counter shared by
positionals, options and commands, so the order of the calls is the order used in
the syntax line and in error messages.

Example:
    parser = (
        ArgumentParserBuilder()
        .add_argument("source", description="File to read")
        .add_option("v", "verbose")
        .add_option(long_key="format", expects_value=True)
        .add_command("run", run_parser)
        .add_command("get")
        .set_commands_mandatory()
        .build()
    )
"""
from __future__ import annotations

from dataclasses import dataclass

from argtree.exceptions import SchemaError
from argtree.parser.argument import NO_KEY, Command, CommandGroup, Option, Positional
from argtree.parser.argument_parser import DEFAULT_HELP_ARGS, ArgumentParser
from argtree.parser.parser_types import Arity
from argtree.parser.schema import Schema


@dataclass
class _PendingCommand:
    index: int
    name: str
    parser: ArgumentParser
    description: str | None


def default_command_parser() -> ArgumentParser:
    """Parser for a command declared without one: accepts nothing, ignores the rest."""
    return ArgumentParser(Schema.build(), ignore_unknown=True)


class ArgumentParserBuilder:
    """Accumulates declarations and builds an immutable `ArgumentParser`."""

    def __init__(self) -> None:
        self._index: int = 0
        self._positionals: list[Positional] = []
        self._options: list[Option] = []
        self._commands: list[_PendingCommand] = []
        self._arity: Arity = Arity.FIXED
        self._commands_mandatory: bool = False
        self._ignore_unknown: bool = False
        self._help_args: tuple[str, ...] = DEFAULT_HELP_ARGS

    def _next_index(self) -> int:
        index = self._index
        self._index += 1
        return index

    def add_argument(
        self,
        name: str,
        *,
        mandatory: bool = True,
        description: str | None = None,
    ) -> ArgumentParserBuilder:
        """Declare the next positional argument."""
        if not isinstance(name, str) or not name:
            raise SchemaError("Positional name must be a non-empty string")
        if any(positional.name == name for positional in self._positionals):
            raise SchemaError(f"Positional '{name}' is declared more than once")
        self._positionals.append(
            Positional(
                index=self._next_index(),
                name=name,
                mandatory=mandatory,
                description=description,
            )
        )
        return self

    def add_option(
        self,
        key: str = NO_KEY,
        long_key: str | None = None,
        *,
        expects_value: bool = False,
        mandatory: bool = False,
        description: str | None = None,
    ) -> ArgumentParserBuilder:
        """
        Declare an option.

        Args:
            key (str): A single character used as `-k`, or `NO_KEY`. With neither a
                key nor a long key the option is the bare `-`.
            long_key (str | None): At least two characters, used as `--long_key`.
            expects_value (bool): Whether the option takes a value. A short option
                takes the following token, a long option must use `--long=value`.
            mandatory (bool): Whether the option must be given.
            description (str | None): Help text.
        """
        if not isinstance(key, str) or len(key) > 1:
            raise SchemaError(f"Option key must be a single character, got {key!r}")
        if key.isspace() or key == "=":
            raise SchemaError(f"Invalid option key {key!r}")
        if long_key is not None:
            if not isinstance(long_key, str) or len(long_key) < 2:
                raise SchemaError(
                    f"Long key must be at least two characters, got {long_key!r}"
                )
            if long_key.startswith("-") or "=" in long_key:
                raise SchemaError(
                    f"Long key {long_key!r} must not start with '-' or contain '='"
                )
            if any(char.isspace() for char in long_key):
                raise SchemaError(f"Long key {long_key!r} must not contain whitespace")
        option = Option(
            index=self._next_index(),
            key=key,
            long_key=long_key,
            expects_value=expects_value,
            mandatory=mandatory,
            description=description,
        )
        for declared in self._options:
            if (key or not long_key) and (declared.key or not declared.long_key):
                if declared.key == key:
                    raise SchemaError(
                        f"Option key '{option.display_name}' is declared more than once"
                    )
            if long_key and declared.long_key == long_key:
                raise SchemaError(f"Long key '--{long_key}' is declared more than once")
        self._options.append(option)
        return self

    def add_command(
        self,
        name: str,
        parser: ArgumentParser | None = None,
        *,
        description: str | None = None,
    ) -> ArgumentParserBuilder:
        """
        Declare a command of this parser's command group.

        Args:
            name (str): Token that selects the command.
            parser (ArgumentParser | None): Parser for the tokens after the command.
                Defaults to an empty parser that ignores unknown tokens, which hands
                everything back to this parser.
            description (str | None): Help text.
        """
        if not isinstance(name, str) or not name or name.startswith("-"):
            raise SchemaError(
                f"Command name must be a non-empty string not starting with '-', "
                f"got {name!r}"
            )
        if any(command.name == name for command in self._commands):
            raise SchemaError(f"Command '{name}' is declared more than once")
        if parser is not None and not isinstance(parser, ArgumentParser):
            raise SchemaError(
                f"Parser for command '{name}' must be an ArgumentParser, "
                f"got {type(parser).__name__}"
            )
        self._commands.append(
            _PendingCommand(
                index=self._next_index(),
                name=name,
                parser=parser or default_command_parser(),
                description=description,
            )
        )
        return self

    def variable_arity(self) -> ArgumentParserBuilder:
        """Accept any number of plain tokens instead of named positionals."""
        self._arity = Arity.VARIABLE
        return self

    def set_commands_mandatory(self, mandatory: bool = True) -> ArgumentParserBuilder:
        self._commands_mandatory = mandatory
        return self

    def set_ignore_unknown(self, ignore_unknown: bool = True) -> ArgumentParserBuilder:
        self._ignore_unknown = ignore_unknown
        return self

    def set_help_args(self, *help_args: str) -> ArgumentParserBuilder:
        self._help_args = help_args
        return self

    def build(self) -> ArgumentParser:
        """
        Build the parser.

        Raises:
            SchemaError: If the declarations are inconsistent.
        """
        commands = None
        if self._commands:
            commands = CommandGroup.of(
                (
                    Command(
                        index=pending.index,
                        name=pending.name,
                        parser=pending.parser,
                        description=pending.description,
                        mandatory=self._commands_mandatory,
                    )
                    for pending in self._commands
                ),
                mandatory=self._commands_mandatory,
            )
        schema = Schema.build(
            positionals=self._positionals,
            options=self._options,
            commands=commands,
            arity=self._arity,
        )
        return ArgumentParser(
            schema,
            ignore_unknown=self._ignore_unknown,
            help_args=self._help_args,
        )
