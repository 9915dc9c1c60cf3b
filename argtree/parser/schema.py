# argtree — (c) 2025 rtj.dev LLC — MIT Licensed
"""
Defines `Schema`, the immutable description of everything a parser accepts.

Options are stored once, in an arena (`Schema.options`), and reached through two
index maps: `short_keys` (key character -> slot) and `long_keys` (long key -> slot).
An option declared with both a key and a long key occupies a single slot that both
maps point to, so every mutation made through one spelling is visible through the
other.

Unless the declarations contain an option keyed `-`, the schema appends a synthetic
escape option for the literal `--` token. It takes the next free declaration index
and is never listed in usage text.

`fork()` creates the private `ParseSession` a parse works on; the schema itself is
never mutated and may be shared between threads.
"""
from __future__ import annotations

from dataclasses import dataclass
from types import MappingProxyType
from typing import Iterable, Mapping, Union

from argtree.exceptions import SchemaError
from argtree.parser.argument import (
    ESCAPE_KEY,
    ArgumentKind,
    Command,
    CommandGroup,
    Option,
    Positional,
)
from argtree.parser.parser_types import Arity
from argtree.parser.session import ParseSession

Declaration = Union[Positional, Option, Command]

ESCAPE_DESCRIPTION = (
    "Indicates that the following arguments are plain arguments and no options, "
    "even if they have a leading '-'"
)


@dataclass(frozen=True)
class Schema:
    """Immutable union of positionals, the option arena and an optional command group."""

    arity: Arity
    positionals: tuple[Positional, ...]
    options: tuple[Option, ...]
    short_keys: Mapping[str, int]
    long_keys: Mapping[str, int]
    commands: CommandGroup | None
    declared_option_count: int

    @classmethod
    def build(
        cls,
        positionals: Iterable[Positional] = (),
        options: Iterable[Option] = (),
        commands: CommandGroup | None = None,
        arity: Arity = Arity.FIXED,
    ) -> Schema:
        """
        Validate the declarations and lay out the option arena.

        Raises:
            SchemaError: If positionals are combined with variable arity, or a name,
                key or long key is declared twice.
        """
        positionals = tuple(sorted(positionals, key=lambda arg: arg.index))
        if arity is Arity.VARIABLE and positionals:
            raise SchemaError(
                "Named positionals cannot be combined with variable arity"
            )
        names = [positional.name for positional in positionals]
        duplicates = sorted({name for name in names if names.count(name) > 1})
        if duplicates:
            raise SchemaError(f"Positional '{duplicates[0]}' is declared more than once")

        arena: list[Option] = []
        short_keys: dict[str, int] = {}
        long_keys: dict[str, int] = {}
        for option in sorted(options, key=lambda opt: opt.index):
            slot = len(arena)
            if option.key or not option.long_key:
                if option.key in short_keys:
                    raise SchemaError(
                        f"Option key '{option.display_name}' is already used by "
                        f"option '{arena[short_keys[option.key]].name}'"
                    )
                short_keys[option.key] = slot
            if option.long_key:
                if option.long_key in long_keys:
                    raise SchemaError(
                        f"Long key '--{option.long_key}' is already used by "
                        f"option '{arena[long_keys[option.long_key]].name}'"
                    )
                long_keys[option.long_key] = slot
            arena.append(option)

        declared_option_count = len(arena)
        if ESCAPE_KEY not in short_keys:
            indices = [positional.index for positional in positionals]
            indices += [option.index for option in arena]
            if commands is not None:
                indices += [command.index for command in commands]
            short_keys[ESCAPE_KEY] = len(arena)
            arena.append(
                Option(
                    index=max(indices, default=-1) + 1,
                    key=ESCAPE_KEY,
                    description=ESCAPE_DESCRIPTION,
                )
            )

        return cls(
            arity=arity,
            positionals=positionals,
            options=tuple(arena),
            short_keys=MappingProxyType(short_keys),
            long_keys=MappingProxyType(long_keys),
            commands=commands if commands else None,
            declared_option_count=declared_option_count,
        )

    @property
    def escape_slot(self) -> int:
        return self.short_keys[ESCAPE_KEY]

    @property
    def escape_option(self) -> Option:
        return self.options[self.escape_slot]

    @property
    def has_synthetic_escape(self) -> bool:
        return self.declared_option_count < len(self.options)

    def option_slot(self, key: str) -> int | None:
        """Return the arena slot for a key or long key (see `ArgumentModel`)."""
        if len(key) <= 1:
            return self.short_keys.get(key)
        return self.long_keys.get(key)

    def declarations(self) -> list[Declaration]:
        """
        Return every declared positional, option and command in declaration order.

        The synthetic escape option is not included.
        """
        declared: list[Declaration] = [*self.positionals]
        declared.extend(self.options[: self.declared_option_count])
        if self.commands is not None:
            declared.extend(self.commands)
        return sorted(declared, key=lambda item: item.index)

    def usage_items(self) -> list[Positional | Option | CommandGroup]:
        """
        Return the items of the syntax line in declaration order, with the command
        group standing in for its commands at the position of its first command.
        """
        items: list[Positional | Option | CommandGroup] = []
        for item in self.declarations():
            if item.kind is ArgumentKind.COMMAND:
                assert self.commands is not None
                if self.commands not in items:
                    items.append(self.commands)
            else:
                items.append(item)
        return items

    def fork(self) -> ParseSession:
        """Create the private, mutable working copy for one parse."""
        return ParseSession(self)
