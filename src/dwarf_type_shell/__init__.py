"""DWARF type shell - interactive exploration of the types in an ELF file's debug info."""

from .application import TypeShell
from .domain.repositories import TypeDatabase
from .infrastructure.config import Config
from .main import main

__all__ = ["Config", "TypeDatabase", "TypeShell", "main"]
