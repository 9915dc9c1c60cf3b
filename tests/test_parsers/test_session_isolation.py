from concurrent.futures import ThreadPoolExecutor

import pytest

from argtree.exceptions import UnknownArgumentError
from argtree.parser import ArgumentParserBuilder


def build_parser():
    run = ArgumentParserBuilder().add_argument("target").add_option("f").build()
    return (
        ArgumentParserBuilder()
        .add_argument("source")
        .add_option("v", "verbose")
        .add_option("o", "out", expects_value=True)
        .add_command("run", run)
        .build()
    )


def test_reparse_yields_equal_independent_result():
    """Parsing the same tokens twice with one parser gives equal, separate models."""
    parser = build_parser()
    tokens = ["-v", "-o", "dist", "src", "run", "-f", "all"]

    first = parser.parse_args(tokens)
    second = parser.parse_args(tokens)

    assert first == second
    assert first is not second
    assert first.get_option("v") is not second.get_option("v")
    assert first.get_command_value("run") is not second.get_command_value("run")


def test_state_does_not_leak_between_parses():
    parser = build_parser()

    parser.parse_args(["-v", "-o", "dist", "src", "run", "-f", "all"])
    model = parser.parse_args(["src"])

    assert not model.is_option_present("v")
    assert model.get_option_value("o") is None
    assert model.command_name is None
    assert model.get_argument_value("source") == "src"


def test_failed_parse_does_not_poison_next_parse():
    parser = build_parser()

    with pytest.raises(UnknownArgumentError):
        parser.parse_args(["-v", "src", "extra"])
    model = parser.parse_args(["src"])

    assert not model.is_option_present("verbose")


def test_fork_creates_fresh_sessions():
    parser = build_parser()

    first = parser.schema.fork()
    second = parser.schema.fork()

    first.option("v").present = True
    assert not second.option("v").present
    assert first.option("v") is first.long_option("verbose")


def test_concurrent_parses_share_one_parser():
    parser = build_parser()

    def parse(number):
        model = parser.parse_args(
            ["-o", f"out{number}", f"src{number}", "run", f"t{number}"]
        )
        return (
            model.get_option_value("out"),
            model.get_argument_value("source"),
            model.get_command_value("run").get_argument_value("target"),
        )

    with ThreadPoolExecutor(max_workers=8) as pool:
        results = list(pool.map(parse, range(200)))

    assert results == [(f"out{n}", f"src{n}", f"t{n}") for n in range(200)]
