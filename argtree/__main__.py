"""
argtree

Copyright (c) 2025 rtj.dev LLC.
Licensed under the MIT License. See LICENSE file for details.

Command-line entry point: parse tokens against a schema file and show the result.

    argtree [-j] [-s] [-v] [--log-mode=<mode>] [--] <schema-file> [tokens...]
"""
from __future__ import annotations

import logging
import sys
from typing import Sequence

from rich.markup import escape
from rich.tree import Tree

from argtree.config import loader
from argtree.console import console, error_console
from argtree.exceptions import ArgumentParseError, SchemaError
from argtree.logger import logger
from argtree.parser import ArgumentModel, ArgumentParser, ArgumentParserBuilder
from argtree.utils import get_program_invocation, setup_logging


def get_cli_parser() -> ArgumentParser:
    """Return the parser for the `argtree` command itself."""
    return (
        ArgumentParserBuilder()
        .variable_arity()
        .add_option("j", "json", description="Print the result as JSON.")
        .add_option(
            "s", "syntax", description="Print the schema's usage instead of parsing."
        )
        .add_option("v", "verbose", description="Enable debug logging.")
        .add_option(
            long_key="log-mode",
            expects_value=True,
            description="Console log format, 'cli' or 'json'.",
        )
        .build()
    )


def print_cli_usage(cli: ArgumentParser) -> None:
    console.print(
        f"[bold]{escape(get_program_invocation())}[/bold] parses tokens against a "
        "declarative schema file.\n"
    )
    cli.print_usage()
    console.print(
        "\nThe first plain token is the schema file (.yaml, .yml or .toml), the rest "
        "are parsed against it. Put [bold]--[/bold] before the schema file to pass "
        "tokens that start with '-'."
    )


def build_tree(model: ArgumentModel, label: str) -> Tree:
    """Render a parse result, including nested command results, as a rich tree."""
    tree = Tree(f"[bold]{escape(label)}[/bold]")
    _fill_tree(tree, model)
    return tree


def _fill_tree(tree: Tree, model: ArgumentModel) -> None:
    arguments = tree.add("arguments")
    if model.var_args is not None:
        for value in model.var_args:
            arguments.add(escape(value))
    elif model.arguments:
        for name, value in model.arguments.items():
            shown = escape(value) if value is not None else "[dim]not given[/dim]"
            arguments.add(f"[argtree.name]{escape(f'<{name}>')}[/] = {shown}")

    options = tree.add("options")
    for option in model.parsed_options:
        entry = f"[argtree.name]{escape(option.name)}[/]"
        if option.value is not None:
            entry += f" = {escape(option.value)}"
        options.add(entry)

    if model.command_name is not None and model.command is not None:
        command = tree.add(f"command [bold]{escape(model.command_name)}[/bold]")
        _fill_tree(command, model.command)


def _fail(message: str) -> None:
    error_console.print(f"[argtree.error]error:[/] {escape(message)}")


def main(argv: Sequence[str] | None = None) -> int:
    """Run the `argtree` command and return its exit code."""
    args = list(sys.argv[1:] if argv is None else argv)
    cli = get_cli_parser()
    if cli.is_help(args):
        print_cli_usage(cli)
        return 0

    try:
        cli_args = cli.parse_args(args)
    except ArgumentParseError as error:
        _fail(str(error))
        error_console.print(f"usage: {escape(cli.syntax())} <schema-file> [tokens...]")
        return 2

    verbose = cli_args.is_option_present("verbose")
    try:
        setup_logging(
            mode=cli_args.get_option_value("log-mode"),
            console_log_level=logging.DEBUG if verbose else logging.WARNING,
        )
    except ValueError as error:
        _fail(str(error))
        return 2

    tokens = cli_args.plain_arguments
    if not tokens:
        _fail("Missing schema file")
        return 2
    schema_file, *rest = tokens

    try:
        parser = loader(schema_file)
    except (OSError, ValueError, SchemaError) as error:
        logger.debug("Could not load schema from %s", schema_file, exc_info=True)
        _fail(f"Could not load schema '{schema_file}': {error}")
        return 2

    if cli_args.is_option_present("syntax"):
        parser.print_usage()
        return 0
    if parser.print_usage_if_help_requested(rest):
        return 0

    try:
        result = parser.parse_args(rest)
    except ArgumentParseError as error:
        _fail(str(error))
        error_console.print(f"usage: {escape(parser.syntax())}")
        return 1

    if cli_args.is_option_present("json"):
        console.print_json(data=result.to_dict(), highlight=False)
    else:
        console.print(build_tree(result, schema_file))
    return 0


if __name__ == "__main__":
    sys.exit(main())
