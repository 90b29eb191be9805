"""Configuration management for the DWARF type shell."""

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv


def _optional_path(value: str | None) -> Path | None:
    """Turn an env value into a Path; empty or missing means disabled."""
    if not value:
        return None
    return Path(value).expanduser()


@dataclass
class Config:
    """Configuration for one shell session."""

    elf_file_path: Path
    verbose: bool = False
    log_dir: Path | None = None
    history_file: Path | None = None

    @classmethod
    def from_env(cls, env_path: Optional[Path] = None) -> "Config":
        """
        Load configuration from environment variables or a .env file.

        Args:
            env_path: Optional path to .env file (defaults to .env in current directory)

        Returns:
            Config object
        """
        if env_path is None:
            env_path = Path.cwd() / ".env"

        if env_path.exists():
            load_dotenv(env_path)

        elf_file_path = Path(os.getenv("ELF_FILE_PATH", "a.out"))
        verbose = os.getenv("VERBOSE", "false").lower() in ("true", "1", "yes")
        log_dir = _optional_path(os.getenv("LOG_DIR"))
        history_file = _optional_path(os.getenv("HISTORY_FILE", "~/.dwarf_type_shell_history"))

        return cls(
            elf_file_path=elf_file_path,
            verbose=verbose,
            log_dir=log_dir,
            history_file=history_file,
        )

    @classmethod
    def from_args(
        cls,
        elf_file_path: Optional[Path] = None,
        verbose: Optional[bool] = None,
        log_dir: Optional[Path] = None,
        no_history: bool = False,
    ) -> "Config":
        """
        Create configuration from explicit arguments, falling back to environment.

        Args:
            elf_file_path: Path to ELF file (overrides env)
            verbose: Enable verbose output (overrides env)
            log_dir: Directory for log files (overrides env)
            no_history: Disable the persistent history file

        Returns:
            Config object
        """
        config = cls.from_env()

        if elf_file_path is not None:
            config.elf_file_path = elf_file_path
        if verbose is not None:
            config.verbose = verbose
        if log_dir is not None:
            config.log_dir = log_dir
        if no_history:
            config.history_file = None

        return config

    def validate(self) -> None:
        """
        Validate the configuration.

        Raises:
            ValueError: If configuration is invalid
        """
        if not self.elf_file_path.exists():
            raise ValueError(f"ELF file not found: {self.elf_file_path}")

        if not self.elf_file_path.is_file():
            raise ValueError(f"Not a file: {self.elf_file_path}")
