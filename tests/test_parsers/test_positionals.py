import pytest

from argtree.exceptions import UnknownArgumentError
from argtree.parser import ArgumentParserBuilder


def build_fixed_parser():
    return (
        ArgumentParserBuilder()
        .add_argument("source")
        .add_argument("target")
        .add_argument("mode", mandatory=False)
        .build()
    )


def test_positionals_fill_in_declaration_order():
    """Each plain token is assigned to the next positional."""
    model = build_fixed_parser().parse_args(["a.txt", "b.txt", "fast"])

    assert model.get_argument_value("source") == "a.txt"
    assert model.get_argument_value("target") == "b.txt"
    assert model.get_argument_value("mode") == "fast"
    assert list(model) == ["a.txt", "b.txt", "fast"]
    assert model.plain_arguments == ["a.txt", "b.txt", "fast"]


def test_optional_positional_may_be_left_out():
    model = build_fixed_parser().parse_args(["a.txt", "b.txt"])

    assert model.is_argument_present("target")
    assert not model.is_argument_present("mode")
    assert model.get_argument_value("mode") is None
    assert list(model) == ["a.txt", "b.txt"]
    assert list(model.arguments) == ["source", "target", "mode"]


def test_extra_positional_is_unknown():
    """A token beyond the declared positionals is rejected."""
    with pytest.raises(UnknownArgumentError) as excinfo:
        build_fixed_parser().parse_args(["a", "b", "c", "d"])

    assert excinfo.value.token == "d"
    assert "'d'" in str(excinfo.value)


def test_positional_after_options():
    parser = (
        ArgumentParserBuilder()
        .add_argument("file")
        .add_option("v", "verbose")
        .build()
    )

    model = parser.parse_args(["-v", "notes.md"])

    assert model.get_argument_value("file") == "notes.md"
    assert model.is_option_present("v")


def test_variable_arity_collects_every_plain_token():
    parser = ArgumentParserBuilder().variable_arity().add_option("q").build()

    model = parser.parse_args(["one", "-q", "two", "three"])

    assert model.is_variable_arity
    assert model.var_args == ("one", "two", "three")
    assert list(model) == ["one", "two", "three"]
    assert model.arguments is None
    assert model.get_argument_value("one") is None
    assert model.is_option_present("q")


def test_variable_arity_accepts_no_tokens():
    model = ArgumentParserBuilder().variable_arity().build().parse_args([])

    assert model.var_args == ()
    assert list(model) == []


def test_empty_token_list_with_only_optional_items():
    parser = (
        ArgumentParserBuilder()
        .add_argument("maybe", mandatory=False)
        .add_option("x")
        .build()
    )

    model = parser.parse_args([])

    assert not model.is_argument_present("maybe")
    assert not model.is_option_present("x")


def test_offset_skips_leading_tokens():
    model = build_fixed_parser().parse_args(["prog", "sub", "a", "b"], offset=2)

    assert model.get_argument_value("source") == "a"
    assert model.get_argument_value("target") == "b"
