# argtree — (c) 2025 rtj.dev LLC — MIT Licensed
"""
Defines `ArgumentModel`, the immutable result of a successful parse.

The model holds:
- the positional values by name in declaration order, or, in variable-arity mode,
  the flat list of every plain token seen;
- only the options that were actually given, reachable by key and by long key
  (both lookups return the same `ParsedOption`);
- the matched command, if any, together with its own nested `ArgumentModel`.

Option lookups take either form of key: a single character (or `NO_KEY`) is looked
up as a key, anything longer as a long key.

Example:
    model = parser.parse_args(["-v", "--out=build", "src"])
    model.get_argument_value("source")   # "src"
    model.is_option_present("verbose")   # True, same option as "v"
    model.get_option_value("out")        # "build"
"""
from __future__ import annotations

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any, Iterator, Mapping


@dataclass(frozen=True)
class ParsedOption:
    """An option that was present in the parsed tokens."""

    key: str
    long_key: str | None = None
    value: str | None = None

    @property
    def name(self) -> str:
        if self.long_key:
            return self.long_key
        return self.key or "-"


def _is_short(key: str) -> bool:
    return len(key) <= 1


@dataclass(frozen=True)
class ArgumentModel:
    """
    Queryable, immutable parse result.

    Attributes:
        arguments (Mapping[str, str | None] | None): Positional values by name, or
            None in variable-arity mode.
        var_args (tuple[str, ...] | None): Plain tokens in variable-arity mode.
        options (Mapping[str, ParsedOption]): Present options by key.
        long_options (Mapping[str, ParsedOption]): Present options by long key.
        command_name (str | None): Name of the matched command.
        command (ArgumentModel | None): Result of the matched command's parser.
    """

    arguments: Mapping[str, str | None] | None = None
    var_args: tuple[str, ...] | None = None
    options: Mapping[str, ParsedOption] = field(
        default_factory=lambda: MappingProxyType({})
    )
    long_options: Mapping[str, ParsedOption] = field(
        default_factory=lambda: MappingProxyType({})
    )
    command_name: str | None = None
    command: ArgumentModel | None = None

    @property
    def is_variable_arity(self) -> bool:
        return self.var_args is not None

    @property
    def plain_arguments(self) -> list[str]:
        """Return the positional values in declaration order."""
        return list(self)

    def __iter__(self) -> Iterator[str]:
        if self.var_args is not None:
            return iter(self.var_args)
        assert self.arguments is not None
        return (value for value in self.arguments.values() if value is not None)

    def get_argument_value(self, name: str) -> str | None:
        """Return the value of the positional `name`, or None if it was not given."""
        if self.arguments is None:
            return None
        return self.arguments.get(name)

    def is_argument_present(self, name: str) -> bool:
        return self.get_argument_value(name) is not None

    def get_option(self, key: str) -> ParsedOption | None:
        """Return the parsed option for a key or long key, if it was present."""
        if _is_short(key):
            return self.options.get(key)
        return self.long_options.get(key)

    def get_option_value(self, key: str) -> str | None:
        """Return the value of the option `key` (key or long key), if any."""
        option = self.get_option(key)
        return option.value if option else None

    def is_option_present(self, key: str) -> bool:
        return self.get_option(key) is not None

    def get_command_value(self, name: str) -> ArgumentModel | None:
        """Return the nested result of command `name`, or None if it was not given."""
        if self.command_name == name:
            return self.command
        return None

    def is_command_present(self, name: str) -> bool:
        return self.command_name == name and self.command is not None

    @property
    def parsed_options(self) -> list[ParsedOption]:
        """Return each present option once, whether reachable by key, long key or both."""
        seen: dict[int, ParsedOption] = {}
        for option in [*self.options.values(), *self.long_options.values()]:
            seen.setdefault(id(option), option)
        return list(seen.values())

    def to_dict(self) -> dict[str, Any]:
        """Convert the model into plain, JSON-serializable data."""
        data: dict[str, Any] = {
            "options": {
                option.name: option.value if option.value is not None else True
                for option in self.parsed_options
            },
        }
        if self.var_args is not None:
            data["arguments"] = list(self.var_args)
        else:
            data["arguments"] = dict(self.arguments or {})
        if self.command_name is not None and self.command is not None:
            data["command"] = {
                "name": self.command_name,
                "result": self.command.to_dict(),
            }
        return data
