"""Pytest configuration and shared fixtures."""

import sys
from pathlib import Path

import pytest

# Add src directory to path for imports
src_path = Path(__file__).parent.parent / "src"
if str(src_path) not in sys.path:
    sys.path.insert(0, str(src_path))

from dwarf_type_shell.domain.models.dwarf import LineRow
from dwarf_type_shell.domain.repositories import LineTable, TypeDatabase
from dwarf_type_shell.infrastructure.config import Config

from .sample_types import build_sample_entries


@pytest.fixture
def sample_line_table() -> LineTable:
    """Two adjacent ranges, the second without line/column information."""
    return LineTable(
        [
            (0x1000, 0x1010, LineRow("src/main.rs", 3, 5)),
            (0x1010, 0x1020, LineRow("src/lib.rs")),
        ]
    )


@pytest.fixture
def sample_db(sample_line_table: LineTable) -> TypeDatabase:
    """A synthetic snapshot over ``build_sample_entries``."""
    return TypeDatabase(build_sample_entries(), line_table=sample_line_table, pointer_size=8)


@pytest.fixture
def env_config(monkeypatch, tmp_path: Path) -> Config:
    """Configuration loaded from a clean environment pointing at a dummy file."""
    elf = tmp_path / "prog.elf"
    elf.write_bytes(b"\x7fELF")
    for name in ("ELF_FILE_PATH", "VERBOSE", "LOG_DIR", "HISTORY_FILE"):
        monkeypatch.delenv(name, raising=False)
    monkeypatch.setenv("ELF_FILE_PATH", str(elf))
    return Config.from_env(tmp_path / "missing.env")
