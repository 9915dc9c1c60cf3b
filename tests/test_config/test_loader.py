from pathlib import Path

import pytest
from pydantic import ValidationError

from argtree.config import RawParser, loader
from argtree.exceptions import SchemaError, UnknownArgumentError
from argtree.parser import ArgumentParser

YAML_SCHEMA = """
arguments:
  - kind: argument
    name: source
    description: File to read
  - kind: option
    key: "v"
    long_key: verbose
  - kind: option
    long_key: format
    expects_value: true
  - kind: command
    name: run
    description: Run it
    parser:
      arguments:
        - kind: argument
          name: target
  - kind: command
    name: get
commands_mandatory: true
"""

TOML_SCHEMA = """
variable_arity = true
help_args = ["help"]

[[arguments]]
kind = "option"
key = "q"
long_key = "quiet"
"""


def write(path: Path, text: str) -> Path:
    path.write_text(text, encoding="UTF-8")
    return path


def test_load_yaml_schema(tmp_path):
    parser = loader(write(tmp_path / "cli.yaml", YAML_SCHEMA))

    assert isinstance(parser, ArgumentParser)
    assert parser.syntax() == "<source> [-v] [--format=<format>] run | get"
    model = parser.parse_args(["--format=json", "in.txt", "run", "all"])
    assert model.get_option_value("format") == "json"
    assert model.get_command_value("run").get_argument_value("target") == "all"


def test_inline_command_parser_ignores_unknown_by_default(tmp_path):
    parser = loader(write(tmp_path / "cli.yaml", YAML_SCHEMA))

    assert not parser.ignore_unknown
    assert parser.schema.commands.get("run").parser.ignore_unknown
    assert parser.schema.commands.get("get").parser.ignore_unknown


def test_load_toml_schema(tmp_path):
    parser = loader(str(write(tmp_path / "cli.toml", TOML_SCHEMA)))

    assert parser.help_args == ("help",)
    model = parser.parse_args(["a", "--quiet", "b"])
    assert model.var_args == ("a", "b")
    assert model.is_option_present("q")


def test_command_from_referenced_file(tmp_path):
    (tmp_path / "sub").mkdir()
    write(
        tmp_path / "sub" / "get.yaml",
        "arguments:\n  - kind: argument\n    name: key\n",
    )
    main = write(
        tmp_path / "main.yaml",
        "arguments:\n"
        "  - kind: command\n"
        "    name: get\n"
        "    config: sub/get.yaml\n",
    )

    parser = loader(main)

    get = parser.schema.commands.get("get").parser
    assert get.ignore_unknown
    assert parser.parse_args(["get", "k1"]).get_command_value("get").plain_arguments == [
        "k1"
    ]


def test_referenced_file_can_disable_ignore_unknown(tmp_path):
    write(
        tmp_path / "get.yaml",
        "ignore_unknown: false\narguments:\n  - kind: argument\n    name: key\n",
    )
    main = write(
        tmp_path / "main.yaml",
        "arguments:\n  - kind: command\n    name: get\n    config: get.yaml\n",
    )

    parser = loader(main)

    with pytest.raises(UnknownArgumentError):
        parser.parse_args(["get", "k1", "k2"])


def test_self_reference_exceeds_depth(tmp_path):
    schema = write(
        tmp_path / "loop.yaml",
        "arguments:\n  - kind: command\n    name: again\n    config: loop.yaml\n",
    )

    with pytest.raises(ValueError, match="depth"):
        loader(schema)


def test_missing_file(tmp_path):
    with pytest.raises(FileNotFoundError):
        loader(tmp_path / "nope.yaml")


def test_unsupported_suffix(tmp_path):
    with pytest.raises(ValueError, match="Unsupported config format"):
        loader(write(tmp_path / "cli.json", "{}"))


def test_document_must_be_a_mapping(tmp_path):
    with pytest.raises(ValueError, match="dictionary"):
        loader(write(tmp_path / "cli.yaml", "- just\n- a list\n"))


def test_invalid_path_type():
    with pytest.raises(TypeError):
        loader(42)


@pytest.mark.parametrize(
    "document",
    [
        {"arguments": [{"kind": "flag", "name": "x"}]},
        {"arguments": [{"kind": "option", "key": "xy"}]},
        {"arguments": [{"kind": "argument"}]},
        {"arguments": [], "colour": "blue"},
        {
            "arguments": [
                {
                    "kind": "command",
                    "name": "go",
                    "config": "go.yaml",
                    "parser": {"arguments": []},
                }
            ]
        },
    ],
)
def test_invalid_documents(document):
    with pytest.raises(ValidationError):
        RawParser.model_validate(document)


def test_inconsistent_declarations_raise_schema_error(tmp_path):
    schema = write(
        tmp_path / "cli.yaml",
        "arguments:\n"
        "  - kind: option\n    key: v\n"
        "  - kind: option\n    key: v\n",
    )

    with pytest.raises(SchemaError):
        loader(schema)
