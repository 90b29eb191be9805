"""Main entry point for the DWARF type shell."""

import argparse
import sys
from pathlib import Path
from typing import NoReturn

from .application import TypeShell
from .domain.services.parsing import TypeLoadError, load_type_database
from .infrastructure.config import Config, get_config
from .infrastructure.logging import LoggerSetup, get_logger, log_timing


def parse_args() -> argparse.Namespace:
    """Parse command line arguments."""
    parser = argparse.ArgumentParser(
        description="Interactively explore the types described by an ELF file's "
        "DWARF debug information",
        epilog="""
Examples:
  # Open a shell on a binary
  python main.py target/debug/myprog

  # Show loader diagnostics on stderr
  python main.py target/debug/myprog --verbose

  # Keep a full debug log
  python main.py target/debug/myprog --log-dir logs/

  # Using .env file for configuration
  echo 'ELF_FILE_PATH=target/debug/myprog' > .env
  python main.py
        """,
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument(
        "elf_file",
        type=Path,
        nargs="?",
        help="Path to the ELF file to load (optional if using .env)",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        default=None,
        help="Enable verbose output with debug logs",
    )
    parser.add_argument(
        "--log-dir",
        type=Path,
        metavar="DIR",
        help="Write a timestamped debug log to this directory",
    )
    parser.add_argument(
        "--no-history",
        action="store_true",
        help="Do not read or write the command history file",
    )
    return parser.parse_args()


@log_timing
def main() -> NoReturn:
    """Load the binary's type database and run the shell on it."""
    args = parse_args()

    # Load configuration
    try:
        config = Config.from_args(
            elf_file_path=args.elf_file,
            verbose=args.verbose,
            log_dir=args.log_dir,
            no_history=args.no_history,
        )
        config.validate()
    except ValueError as e:
        print(f"Configuration error: {e}", file=sys.stderr)
        sys.exit(1)

    LoggerSetup.initialize(config.log_dir, verbose=config.verbose)
    logger = get_logger(__name__)
    logger.debug(f"ELF file: {config.elf_file_path}")

    try:
        db = load_type_database(config.elf_file_path, get_config())
    except TypeLoadError as e:
        print(f"error: {e}", file=sys.stderr)
        sys.exit(1)

    shell = TypeShell(db, history_file=config.history_file)
    sys.exit(shell.run())


if __name__ == "__main__":
    main()
