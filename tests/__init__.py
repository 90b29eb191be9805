"""Test suite for the DWARF type shell.

Test Structure:
- domain/: Models, the TypeDatabase snapshot, and the parsing, resolution,
  layout and generation services
- application/: Command table and interactive shell
- infrastructure/: Configuration and logging

Run tests with pytest:
    pytest                    # Run all tests
    pytest -m unit            # Run unit tests only
"""
