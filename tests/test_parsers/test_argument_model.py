import json

import pytest

from argtree.parser import ArgumentModel, ArgumentParserBuilder, ParsedOption


@pytest.fixture
def parser():
    get = ArgumentParserBuilder().variable_arity().build()
    return (
        ArgumentParserBuilder()
        .add_argument("name")
        .add_argument("nickname", mandatory=False)
        .add_option("t", "tag", expects_value=True)
        .add_option("x")
        .add_option(long_key="dry-run")
        .add_command("get", get)
        .build()
    )


def test_option_lookup_by_key_and_long_key(parser):
    model = parser.parse_args(["-x", "--tag=beta", "alice"])

    assert model.get_option("t") == ParsedOption(key="t", long_key="tag", value="beta")
    assert model.get_option("tag").name == "tag"
    assert model.get_option("x").name == "x"
    assert model.get_option_value("x") is None
    assert model.is_option_present("x")
    assert not model.is_option_present("dry-run")


def test_long_only_option_is_not_reachable_by_key(parser):
    model = parser.parse_args(["--dry-run", "alice"])

    assert model.is_option_present("dry-run")
    assert "" not in model.options
    assert model.get_option("dry-run").key == ""


def test_command_result_is_variable_arity(parser):
    model = parser.parse_args(["alice", "get", "a", "b"])

    get = model.get_command_value("get")
    assert get.is_variable_arity
    assert get.plain_arguments == ["a", "b"]


def test_model_is_immutable(parser):
    model = parser.parse_args(["alice"])

    with pytest.raises(AttributeError):
        model.command_name = "get"
    with pytest.raises(TypeError):
        model.arguments["name"] = "bob"
    with pytest.raises(TypeError):
        model.options["x"] = ParsedOption(key="x")


def test_parsed_options_lists_each_option_once(parser):
    model = parser.parse_args(["-t", "v1", "-x", "--dry-run", "alice"])

    assert sorted(option.name for option in model.parsed_options) == [
        "dry-run",
        "tag",
        "x",
    ]


def test_to_dict_is_json_ready(parser):
    model = parser.parse_args(["-t", "v1", "alice", "get", "1"])

    data = model.to_dict()

    assert data == {
        "options": {"tag": "v1"},
        "arguments": {"name": "alice", "nickname": None},
        "command": {
            "name": "get",
            "result": {"options": {}, "arguments": ["1"]},
        },
    }
    assert json.loads(json.dumps(data)) == data


def test_empty_model_defaults():
    model = ArgumentModel(var_args=())

    assert list(model) == []
    assert model.get_option("x") is None
    assert model.get_command_value("any") is None
    assert not model.is_command_present("any")
    assert model.to_dict() == {"options": {}, "arguments": []}
