#!/usr/bin/env python3

"""Interactive read-eval loop over a loaded type database."""

import readline  # noqa: F401 - enables line editing in input()
import sys
from collections.abc import Callable
from pathlib import Path
from typing import TextIO

from ..domain.repositories import TypeDatabase
from ..infrastructure.config import get_config
from ..infrastructure.logging import get_logger
from .commands import find_command

logger = get_logger(__name__)

EXIT_COMMAND = "exit"


def split_command(line: str) -> tuple[str, str]:
    """Split a trimmed line into command name and argument text.

    Examples:
        >>> split_command("sizeof Vec<u8>")
        ('sizeof', 'Vec<u8>')
        >>> split_command("help")
        ('help', '')
    """
    parts = line.split(maxsplit=1)
    if not parts:
        return "", ""
    return parts[0], parts[1] if len(parts) > 1 else ""


class TypeShell:
    """Line-oriented shell dispatching to the command table."""

    def __init__(
        self,
        db: TypeDatabase,
        out: TextIO | None = None,
        input_func: Callable[[str], str] = input,
        history_file: Path | None = None,
        prompt: str | None = None,
        history_length: int | None = None,
    ):
        """Initialize the shell.

        Args:
            db: Snapshot every command queries
            out: Output stream (defaults to stdout)
            input_func: Line reader; raises EOFError at end of input
            history_file: Persistent readline history, or None for none
            prompt: Prompt text (defaults to DWARF_PROMPT)
            history_length: History entries kept (defaults to DWARF_HISTORY_LENGTH)
        """
        config = get_config()
        self.db = db
        self.out = out if out is not None else sys.stdout
        self.input_func = input_func
        self.history_file = history_file
        self.prompt = prompt if prompt is not None else config["PROMPT"]
        self.history_length = (
            history_length if history_length is not None else config["HISTORY_LENGTH"]
        )

    def run(self) -> int:
        """Run until end of input or ``exit``.

        Returns:
            Process exit status (always 0)
        """
        self._load_history()
        self.out.write(f"Loaded; {self.db.type_count()} types found in program.\n")
        self.out.write("To quit: ^D or exit\n")

        try:
            while True:
                try:
                    line = self.input_func(self.prompt)
                except EOFError:
                    self.out.write("\n")
                    break
                except KeyboardInterrupt:
                    self.out.write("^C\n")
                    continue

                if not self.execute(line):
                    break
        finally:
            self._save_history()

        return 0

    def execute(self, line: str) -> bool:
        """Run one input line.

        Args:
            line: Raw input line

        Returns:
            False when the line asks the shell to stop
        """
        name, args = split_command(line.strip())
        if not name:
            return True
        if name == EXIT_COMMAND:
            return False

        command = find_command(name)
        if command is None:
            self.out.write(f"unknown command: {name}\n")
            self.out.write("for help, try: help\n")
            return True

        logger.debug(f"Running {name} {args!r}")
        command(self.db, args, self.out)
        return True

    def _load_history(self) -> None:
        if self.history_file is None:
            return
        try:
            readline.read_history_file(self.history_file)
        except FileNotFoundError:
            pass
        except OSError as e:
            logger.warning(f"Could not read history file {self.history_file}: {e}")

    def _save_history(self) -> None:
        if self.history_file is None:
            return
        try:
            readline.set_history_length(self.history_length)
            readline.write_history_file(self.history_file)
        except OSError as e:
            logger.warning(f"Could not write history file {self.history_file}: {e}")
