#!/usr/bin/env python3

"""Parsing services turning DWARF debug information into a type database."""

from .die_type_classifier import DIETypeClassifier
from .dwarf_location_parser import parse_location_offset
from .line_table_builder import build_line_ranges, resolve_file_name
from .subrange_parser import parse_array_bounds
from .type_graph_builder import TypeGraphBuilder
from .type_loader import TypeLoader, TypeLoadError, load_type_database

__all__ = [
    "DIETypeClassifier",
    "TypeGraphBuilder",
    "TypeLoadError",
    "TypeLoader",
    "build_line_ranges",
    "load_type_database",
    "parse_array_bounds",
    "parse_location_offset",
    "resolve_file_name",
]
