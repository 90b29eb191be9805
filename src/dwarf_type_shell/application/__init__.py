#!/usr/bin/env python3

"""Application layer: the command table and the interactive shell."""

from .commands import COMMANDS, find_command, simple_query_cmd
from .shell import TypeShell

__all__ = [
    "COMMANDS",
    "TypeShell",
    "find_command",
    "simple_query_cmd",
]
