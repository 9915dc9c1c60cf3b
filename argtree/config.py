# argtree — (c) 2025 rtj.dev LLC — MIT Licensed
"""config.py
Declarative schema loader for argtree parsers.

A schema document (YAML or TOML) describes one parser. Its `arguments` list holds
the declarations in order, each tagged with a `kind`:

    arguments:
      - kind: argument
        name: source
        description: File to read
      - kind: option
        key: v
        long_key: verbose
      - kind: option
        long_key: format
        expects_value: true
      - kind: command
        name: run
        parser:
          arguments:
            - kind: argument
              name: target
      - kind: command
        name: get
        config: get.yaml   # resolved relative to this file
    commands_mandatory: true
"""
from __future__ import annotations

from pathlib import Path
from typing import Annotated, Any, Literal, Union

import toml
import yaml
from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from argtree.logger import logger
from argtree.parser import ArgumentParser, ArgumentParserBuilder

MAX_DEPTH = 5


class RawArgument(BaseModel):
    """Raw positional declaration."""

    model_config = ConfigDict(extra="forbid")

    kind: Literal["argument"]
    name: str
    mandatory: bool = True
    description: str | None = None


class RawOption(BaseModel):
    """Raw option declaration."""

    model_config = ConfigDict(extra="forbid")

    kind: Literal["option"]
    key: str = ""
    long_key: str | None = None
    expects_value: bool = False
    mandatory: bool = False
    description: str | None = None

    @field_validator("key")
    @classmethod
    def validate_key(cls, value: str) -> str:
        if len(value) > 1:
            raise ValueError("key must be a single character")
        return value


class RawCommand(BaseModel):
    """Raw command declaration, with an inline parser or a reference to another file."""

    model_config = ConfigDict(extra="forbid")

    kind: Literal["command"]
    name: str
    description: str | None = None
    parser: RawParser | None = None
    config: str | None = None

    @model_validator(mode="after")
    def validate_parser_source(self) -> RawCommand:
        if self.parser is not None and self.config is not None:
            raise ValueError(
                f"Command '{self.name}' cannot have both an inline parser and a config file"
            )
        return self

    def to_parser(self, base_path: Path | None, depth: int) -> ArgumentParser | None:
        if self.config is not None:
            config_path = Path(self.config)
            if base_path is not None and not config_path.is_absolute():
                config_path = (base_path.parent / config_path).resolve()
            logger.debug("Loading parser for command '%s' from %s", self.name, config_path)
            return _load_raw(config_path, depth + 1).to_parser(
                config_path, depth + 1, is_command=True
            )
        if self.parser is not None:
            return self.parser.to_parser(base_path, depth, is_command=True)
        return None


RawDeclaration = Annotated[
    Union[RawArgument, RawOption, RawCommand], Field(discriminator="kind")
]


class RawParser(BaseModel):
    """Raw parser model: the root of a schema document."""

    model_config = ConfigDict(extra="forbid")

    arguments: list[RawDeclaration] = Field(default_factory=list)
    variable_arity: bool = False
    commands_mandatory: bool = False
    ignore_unknown: bool | None = None
    help_args: list[str] | None = None

    def to_parser(
        self, base_path: Path | None = None, depth: int = 0, is_command: bool = False
    ) -> ArgumentParser:
        """
        Build the `ArgumentParser` this document describes.

        A command's parser ignores unknown tokens unless `ignore_unknown` says
        otherwise, so that it hands them back to its parent.
        """
        builder = ArgumentParserBuilder()
        if self.variable_arity:
            builder.variable_arity()
        for declaration in self.arguments:
            if isinstance(declaration, RawArgument):
                builder.add_argument(
                    declaration.name,
                    mandatory=declaration.mandatory,
                    description=declaration.description,
                )
            elif isinstance(declaration, RawOption):
                builder.add_option(
                    declaration.key,
                    declaration.long_key,
                    expects_value=declaration.expects_value,
                    mandatory=declaration.mandatory,
                    description=declaration.description,
                )
            else:
                builder.add_command(
                    declaration.name,
                    declaration.to_parser(base_path, depth),
                    description=declaration.description,
                )
        builder.set_commands_mandatory(self.commands_mandatory)
        if self.ignore_unknown is None:
            builder.set_ignore_unknown(is_command)
        else:
            builder.set_ignore_unknown(self.ignore_unknown)
        if self.help_args is not None:
            builder.set_help_args(*self.help_args)
        return builder.build()


RawCommand.model_rebuild()
RawParser.model_rebuild()


def _read(path: Path) -> Any:
    suffix = path.suffix
    with path.open("r", encoding="UTF-8") as config_file:
        if suffix in (".yaml", ".yml"):
            return yaml.safe_load(config_file)
        elif suffix == ".toml":
            return toml.load(config_file)
        else:
            raise ValueError(f"Unsupported config format: {suffix}")


def _load_raw(file_path: Path | str, depth: int) -> RawParser:
    if depth > MAX_DEPTH:
        raise ValueError(f"Maximum schema depth exceeded ({MAX_DEPTH} levels deep)")

    if isinstance(file_path, (str, Path)):
        path = Path(file_path)
    else:
        raise TypeError("file_path must be a string or Path object.")

    if not path.is_file():
        raise FileNotFoundError(f"No such config file: {file_path}")

    raw_config = _read(path)
    if not isinstance(raw_config, dict):
        raise ValueError(
            "Schema file must contain a dictionary with a list of arguments.\n"
            "Example:\n"
            "arguments:\n"
            "  - kind: argument\n"
            "    name: source\n"
            "  - kind: option\n"
            "    key: v\n"
            "    long_key: verbose"
        )
    return RawParser.model_validate(raw_config)


def loader(file_path: Path | str) -> ArgumentParser:
    """
    Load an `ArgumentParser` from a YAML or TOML schema file.

    Args:
        file_path (Path | str): Path to the schema file.

    Returns:
        ArgumentParser: The parser described by the file.

    Raises:
        TypeError: If `file_path` is not a string or Path.
        FileNotFoundError: If the file (or a referenced command file) does not exist.
        ValueError: If the format is unsupported, the document is not a mapping or
            command files are nested more than five levels deep.
        pydantic.ValidationError: If the document does not describe a parser.
        SchemaError: If the declarations are inconsistent.
    """
    path = Path(file_path) if isinstance(file_path, (str, Path)) else file_path
    raw_parser = _load_raw(path, 0)
    logger.debug("Loaded schema from %s", path)
    return raw_parser.to_parser(Path(path).resolve())
