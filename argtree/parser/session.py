# argtree — (c) 2025 rtj.dev LLC — MIT Licensed
"""
Defines `ParseSession`, the private working copy of a `Schema` for one parse.

A session is created by `Schema.fork()` and discarded once it has produced an
`ArgumentModel`. It owns:
- one `PositionalState` per declared positional plus the cursor into them, or the
  growing list of plain tokens in variable-arity mode;
- one `OptionState` per arena slot, reached through the schema's key maps;
- the `CommandGroupState` of the schema's command group, if any;
- the pending mandatory items, checked by `missing()` once the tokens run out.

Nothing in a session is shared with another session, which is what makes one
`ArgumentParser` safe to use from several threads at once.
"""
from __future__ import annotations

from types import MappingProxyType
from typing import TYPE_CHECKING, Union

from argtree.exceptions import MissingArgumentError
from argtree.logger import logger
from argtree.parser.argument import Command, CommandGroup, Option, Positional
from argtree.parser.model import ArgumentModel, ParsedOption
from argtree.parser.parser_types import (
    Arity,
    CommandGroupState,
    OptionState,
    PositionalState,
)

if TYPE_CHECKING:
    from argtree.parser.schema import Schema

PendingState = Union[PositionalState, OptionState, CommandGroupState]


class ParseSession:
    """Mutable per-parse state forked from a `Schema`."""

    def __init__(self, schema: Schema) -> None:
        self.schema = schema
        self.positionals: list[PositionalState] = [
            PositionalState(declaration) for declaration in schema.positionals
        ]
        self.var_args: list[str] | None = (
            [] if schema.arity is Arity.VARIABLE else None
        )
        self.options: list[OptionState] = [
            OptionState(declaration) for declaration in schema.options
        ]
        self.commands: CommandGroupState | None = (
            CommandGroupState.fork(schema.commands) if schema.commands else None
        )
        self.cursor: int = 0

        pending: list[PendingState] = [
            state for state in self.positionals if state.declaration.mandatory
        ]
        pending.extend(
            state
            for state in self.options[: schema.declared_option_count]
            if state.declaration.mandatory
        )
        if self.commands is not None and self.commands.group.mandatory:
            pending.append(self.commands)
        self.pending: list[PendingState] = sorted(
            pending, key=lambda state: state.declaration.index
        )

    @property
    def escaped(self) -> bool:
        """True once the escape switch `--` has been seen."""
        return self.options[self.schema.escape_slot].present

    def option(self, key: str) -> OptionState | None:
        """Return the state of the option with the given key character."""
        slot = self.schema.short_keys.get(key)
        return None if slot is None else self.options[slot]

    def long_option(self, long_key: str) -> OptionState | None:
        slot = self.schema.long_keys.get(long_key)
        return None if slot is None else self.options[slot]

    def expects_command(self, token: str) -> bool:
        """Return True if `token` selects a command of the still open group."""
        return self.commands is not None and self.commands.accepts(token)

    def command(self, name: str) -> Command:
        assert self.commands is not None
        return self.commands.commands[name].declaration

    def record_command(self, name: str, result: ArgumentModel) -> None:
        assert self.commands is not None
        self.commands.record(name, result)

    def next_positional(self) -> PositionalState | None:
        """Return the next unassigned positional, or None if all are taken."""
        if self.cursor < len(self.positionals):
            return self.positionals[self.cursor]
        return None

    def assign_positional(self, token: str) -> bool:
        """
        Store a plain token in the next free slot.

        Returns False when the fixed positional list is exhausted.
        """
        if self.var_args is not None:
            self.var_args.append(token)
            return True
        state = self.next_positional()
        if state is None:
            return False
        state.value = token
        self.cursor += 1
        return True

    def missing(self) -> list[Positional | Option | CommandGroup]:
        """Return the mandatory declarations that are still unsatisfied."""
        return [state.declaration for state in self.pending if not state.present]

    def build(self) -> ArgumentModel:
        """
        Validate the session and freeze it into an `ArgumentModel`.

        Raises:
            MissingArgumentError: If any mandatory item was not satisfied.
        """
        missing = self.missing()
        if missing:
            raise MissingArgumentError(missing)

        options: dict[str, ParsedOption] = {}
        long_options: dict[str, ParsedOption] = {}
        for state in self.options:
            if not state.present:
                continue
            declaration = state.declaration
            parsed = ParsedOption(
                key=declaration.key, long_key=declaration.long_key, value=state.value
            )
            if declaration.key or not declaration.long_key:
                options[declaration.key] = parsed
            if declaration.long_key:
                long_options[declaration.long_key] = parsed

        command_name = None
        command_result = None
        if self.commands is not None:
            present = self.commands.present_command
            if present is not None:
                command_name = present.declaration.name
                command_result = present.value

        if self.var_args is not None:
            model = ArgumentModel(
                var_args=tuple(self.var_args),
                options=MappingProxyType(options),
                long_options=MappingProxyType(long_options),
                command_name=command_name,
                command=command_result,
            )
        else:
            model = ArgumentModel(
                arguments=MappingProxyType(
                    {state.declaration.name: state.value for state in self.positionals}
                ),
                options=MappingProxyType(options),
                long_options=MappingProxyType(long_options),
                command_name=command_name,
                command=command_result,
            )
        logger.debug(
            "Assembled result: %d positional(s), %d option(s), command=%s",
            len(model.plain_arguments),
            sum(state.present for state in self.options),
            command_name,
        )
        return model
