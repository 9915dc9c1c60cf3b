"""builder_demo.py"""
import sys

from argtree import ArgumentParserBuilder
from argtree.console import console
from argtree.exceptions import ArgumentParseError

copy = (
    ArgumentParserBuilder()
    .add_argument("source", description="File to copy.")
    .add_argument("target", description="Where to put it.")
    .add_option("f", "force", description="Overwrite the target.")
    .build()
)

parser = (
    ArgumentParserBuilder()
    .add_option("v", "verbose", description="Print more details.")
    .add_option("o", "out", expects_value=True, description="Write a report.")
    .add_command("copy", copy, description="Copy a file.")
    .add_command("list", description="List files.")
    .set_commands_mandatory()
    .build()
)

if __name__ == "__main__":
    args = sys.argv[1:]
    if parser.print_usage_if_help_requested(args):
        sys.exit(0)
    try:
        model = parser.parse_args(args)
    except ArgumentParseError as error:
        console.print(f"[argtree.error]{error}[/]")
        parser.print_usage()
        sys.exit(1)
    console.print(model.to_dict())
