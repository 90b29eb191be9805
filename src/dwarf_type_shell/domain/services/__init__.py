#!/usr/bin/env python3

"""Domain services layer."""

from . import generation, layout, parsing, resolution

__all__ = [
    "generation",
    "layout",
    "parsing",
    "resolution",
]
