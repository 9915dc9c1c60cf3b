import pytest

from argtree.parser import ArgumentParserBuilder


@pytest.fixture
def parser():
    run = (
        ArgumentParserBuilder()
        .add_argument("target")
        .add_option("n", "name", expects_value=True)
        .build()
    )
    return (
        ArgumentParserBuilder()
        .add_option("v", "verbose")
        .add_option("o", "out", expects_value=True)
        .add_option("f")
        .add_command("run", run)
        .add_command("get")
        .build()
    )


def test_suggest_everything_on_empty_input(parser):
    assert parser.suggest_next([]) == [
        "--out=",
        "--verbose",
        "-f",
        "-o",
        "-v",
        "get",
        "run",
    ]


def test_used_options_are_not_suggested(parser):
    suggestions = parser.suggest_next(["-v", "-f"], cursor_at_end_of_token=True)

    assert suggestions == ["--out=", "-o", "get", "run"]


def test_long_spelling_counts_as_used(parser):
    suggestions = parser.suggest_next(["--verbose"], cursor_at_end_of_token=True)

    assert "-v" not in suggestions
    assert "--verbose" not in suggestions


def test_prefix_filters_suggestions(parser):
    assert parser.suggest_next(["--v"]) == ["--verbose"]
    assert parser.suggest_next(["r"]) == ["run"]


def test_nothing_suggested_while_value_pending(parser):
    assert parser.suggest_next(["-o"], cursor_at_end_of_token=True) == []
    assert parser.suggest_next(["-o", "bu"]) == []


def test_value_consumed_then_suggestions_resume(parser):
    suggestions = parser.suggest_next(["-o", "build"], cursor_at_end_of_token=True)

    assert "-o" not in suggestions
    assert "run" in suggestions


def test_recurses_into_command(parser):
    assert parser.suggest_next(["run"], cursor_at_end_of_token=True) == [
        "--name=",
        "-n",
    ]
    assert parser.suggest_next(["-v", "run", "--"]) == ["--name="]


def test_only_commands_after_escape(parser):
    assert parser.suggest_next(["--"], cursor_at_end_of_token=True) == ["get", "run"]


def test_unplaceable_tokens_are_skipped(parser):
    suggestions = parser.suggest_next(
        ["-z", "stray", "--out", "-v"], cursor_at_end_of_token=True
    )

    assert suggestions == ["--out=", "-f", "-o", "get", "run"]


def test_default_command_parser_suggests_nothing():
    parser = (
        ArgumentParserBuilder()
        .add_command("get")
        .add_command("put")
        .add_argument("key", mandatory=False)
        .set_ignore_unknown()
        .build()
    )

    assert parser.suggest_next(["get", "x"], cursor_at_end_of_token=True) == []


def test_value_taking_long_option_suggested_with_equals(parser):
    """`--out` alone never takes a value, so it is offered as `--out=`."""
    assert parser.suggest_next(["--o"]) == ["--out="]

    suggestions = parser.suggest_next(["--out"], cursor_at_end_of_token=True)

    assert "--out=" in suggestions
    assert "--out" not in suggestions


def test_long_option_with_value_counts_as_used(parser):
    suggestions = parser.suggest_next(["--out=build"], cursor_at_end_of_token=True)

    assert "--out=" not in suggestions
    assert "-o" not in suggestions
