#!/usr/bin/env python3

"""Layout (size and alignment) services."""

from .layout_calculator import LayoutCalculator

__all__ = [
    "LayoutCalculator",
]
