"""
argtree

Copyright (c) 2025 rtj.dev LLC.
Licensed under the MIT License. See LICENSE file for details.
"""

import logging

from .parser import ArgumentModel, ArgumentParser, ArgumentParserBuilder

logger = logging.getLogger("argtree")


__all__ = [
    "ArgumentModel",
    "ArgumentParser",
    "ArgumentParserBuilder",
]
