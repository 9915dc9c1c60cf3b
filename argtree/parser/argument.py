# argtree — (c) 2025 rtj.dev LLC — MIT Licensed
"""
Defines the declarations an `ArgumentParser` is built from.

Every declaration is a frozen dataclass that describes *what* may appear on the
command line. None of them carries parse results: presence and values live in the
per-parse state records of `argtree.parser.parser_types`, so one declaration can be
shared by any number of concurrent parses.

The set of declarations is closed:
- `Positional`: a plain token assigned to a slot by position.
- `Option`: a `-k` / `--long` switch, optionally taking a value.
- `Command`: a named alternative that hands the remaining tokens to its own parser.

Commands are grouped in a `CommandGroup`, which is mandatory or optional as a whole.

All three declaration kinds share a declaration `index`, assigned in call order by
the builder; usage text and diagnostics are ordered by it.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from types import MappingProxyType
from typing import TYPE_CHECKING, ClassVar, Final, Iterable, Iterator, Mapping

if TYPE_CHECKING:
    from argtree.parser.argument_parser import ArgumentParser

NO_KEY: Final[str] = ""
ESCAPE_KEY: Final[str] = "-"


class ArgumentKind(Enum):
    """Discriminates the three kinds of declarations."""

    POSITIONAL = "positional"
    OPTION = "option"
    COMMAND = "command"

    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True)
class Positional:
    """
    A positional argument.

    Attributes:
        index (int): Declaration index.
        name (str): Name used to look the value up in the result.
        mandatory (bool): Whether parsing fails when no token reaches this slot.
        description (str | None): Help text.
    """

    kind: ClassVar[ArgumentKind] = ArgumentKind.POSITIONAL

    index: int
    name: str
    mandatory: bool = True
    description: str | None = None

    @property
    def is_option(self) -> bool:
        return False

    @property
    def display_name(self) -> str:
        return f"<{self.name}>"

    @property
    def full_name(self) -> str:
        return self.display_name


@dataclass(frozen=True)
class Option:
    """
    An option, identified by a single character key, a long key, or both.

    An option with neither a key nor a long key is the bare `-` option. The key
    `-` itself is reserved for the escape switch, written as the literal `--`.

    Attributes:
        index (int): Declaration index.
        key (str): Single character key or `NO_KEY`.
        long_key (str | None): Long key used as `--long_key`.
        expects_value (bool): Whether the option must be followed by a value.
        mandatory (bool): Whether parsing fails when the option is absent.
        description (str | None): Help text.
    """

    kind: ClassVar[ArgumentKind] = ArgumentKind.OPTION

    index: int
    key: str = NO_KEY
    long_key: str | None = None
    expects_value: bool = False
    mandatory: bool = False
    description: str | None = None

    @property
    def is_option(self) -> bool:
        return True

    @property
    def name(self) -> str:
        """Return the long key if there is one, else the key."""
        if self.long_key:
            return self.long_key
        return self.key or "-"

    @property
    def display_name(self) -> str:
        if self.key:
            return f"-{self.key}"
        if self.long_key:
            return f"--{self.long_key}"
        return "-"

    @property
    def full_name(self) -> str:
        """Return the option as it appears in the syntax line, e.g. `-f <file>`."""
        if self.key:
            suffix = f" <{self.name}>" if self.expects_value else ""
            return f"-{self.key}{suffix}"
        if self.long_key:
            suffix = f"=<{self.name}>" if self.expects_value else ""
            return f"--{self.long_key}{suffix}"
        return "-" + (f" <{self.name}>" if self.expects_value else "")

    @property
    def spellings(self) -> tuple[str, ...]:
        """
        Return every way to start this option on the command line.

        A long key that expects a value is spelled `--long=`, the only long form
        that accepts one.
        """
        spellings = []
        if self.key or not self.long_key:
            spellings.append(self.display_name)
        if self.long_key:
            suffix = "=" if self.expects_value else ""
            spellings.append(f"--{self.long_key}{suffix}")
        return tuple(spellings)


@dataclass(frozen=True)
class Command:
    """
    A subcommand. Once its name is matched, the remaining tokens are parsed by
    `parser`, which is shared by reference between all parses.

    `mandatory` mirrors the flag of the group the command belongs to.
    """

    kind: ClassVar[ArgumentKind] = ArgumentKind.COMMAND

    index: int
    name: str
    parser: ArgumentParser = field(compare=False, repr=False)
    description: str | None = None
    mandatory: bool = False

    @property
    def is_option(self) -> bool:
        return False

    @property
    def display_name(self) -> str:
        return self.name

    @property
    def full_name(self) -> str:
        return f"{self.name} {self.parser.syntax()}".strip()


@dataclass(frozen=True)
class CommandGroup:
    """A set of mutually exclusive commands sharing one mandatory flag."""

    commands: Mapping[str, Command]
    mandatory: bool = False

    @classmethod
    def of(cls, commands: Iterable[Command], mandatory: bool = False) -> CommandGroup:
        ordered = sorted(commands, key=lambda command: command.index)
        return cls(
            commands=MappingProxyType({command.name: command for command in ordered}),
            mandatory=mandatory,
        )

    @property
    def index(self) -> int:
        return min(command.index for command in self.commands.values())

    @property
    def name(self) -> str:
        return " | ".join(self.commands)

    @property
    def display_name(self) -> str:
        return self.name

    @property
    def full_name(self) -> str:
        return self.name

    def get(self, name: str) -> Command | None:
        return self.commands.get(name)

    def __contains__(self, name: object) -> bool:
        return name in self.commands

    def __iter__(self) -> Iterator[Command]:
        return iter(self.commands.values())

    def __len__(self) -> int:
        return len(self.commands)
