# argtree — (c) 2025 rtj.dev LLC — MIT Licensed
"""
Per-parse state records and mode selectors for the argtree parser.

A `Schema` never changes once built. Each parse forks it into a `ParseSession`,
which wraps every declaration in one of the mutable records below:

- `PositionalState`: the token assigned to a positional slot.
- `OptionState`: presence and value of one option arena slot. Short and long
  lookups resolve to the same record, so an alias never goes out of sync.
- `CommandState`: the nested result captured by a matched command.
- `CommandGroupState`: which command of the group (if any) was matched.

`Arity` selects between a fixed list of named positionals and variable-arity mode.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import TYPE_CHECKING

from argtree.parser.argument import Command, CommandGroup, Option, Positional

if TYPE_CHECKING:
    from argtree.parser.model import ArgumentModel


class Arity(Enum):
    """How plain tokens are collected."""

    FIXED = "fixed"
    VARIABLE = "variable"

    def __str__(self) -> str:
        return self.value


@dataclass
class PositionalState:
    """Tracks the value assigned to a positional during one parse."""

    declaration: Positional
    value: str | None = None

    @property
    def present(self) -> bool:
        return self.value is not None


@dataclass
class OptionState:
    """Tracks whether an option was given during one parse, and its value."""

    declaration: Option
    present: bool = False
    value: str | None = None

    def set_value(self, value: str) -> None:
        assert (
            self.declaration.expects_value
        ), f"{self.declaration.display_name} takes no value"
        self.value = value

    @property
    def awaiting_value(self) -> bool:
        return self.declaration.expects_value and self.value is None


@dataclass
class CommandState:
    """Holds the nested result of a matched command."""

    declaration: Command
    value: ArgumentModel | None = None

    @property
    def present(self) -> bool:
        return self.value is not None


@dataclass
class CommandGroupState:
    """Tracks which command of a group was matched during one parse."""

    group: CommandGroup
    commands: dict[str, CommandState] = field(default_factory=dict)
    satisfied: bool = False

    @classmethod
    def fork(cls, group: CommandGroup) -> CommandGroupState:
        return cls(
            group=group,
            commands={command.name: CommandState(command) for command in group},
        )

    @property
    def declaration(self) -> CommandGroup:
        return self.group

    @property
    def present(self) -> bool:
        return self.satisfied

    @property
    def present_command(self) -> CommandState | None:
        return next((state for state in self.commands.values() if state.present), None)

    def accepts(self, name: str) -> bool:
        """Return True if `name` may still select a command of this group."""
        return not self.satisfied and name in self.commands

    def record(self, name: str, value: ArgumentModel) -> None:
        self.commands[name].value = value
        self.satisfied = True
