# argtree — (c) 2025 rtj.dev LLC — MIT Licensed
"""Global console instances for argtree output."""
from rich.console import Console
from rich.theme import Theme

argtree_theme = Theme(
    {
        "argtree.syntax": "bold",
        "argtree.name": "bold cyan",
        "argtree.description": "dim",
        "argtree.error": "bold red",
    }
)

console = Console(color_system="truecolor", theme=argtree_theme)
error_console = Console(stderr=True, theme=argtree_theme)
