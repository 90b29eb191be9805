#!/usr/bin/env python3

"""Repositories holding the decoded type graph."""

from .line_table import LineTable
from .type_database import DEFAULT_POINTER_SIZE, TypeDatabase

__all__ = [
    "DEFAULT_POINTER_SIZE",
    "LineTable",
    "TypeDatabase",
]
