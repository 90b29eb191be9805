#!/usr/bin/env python3

"""Rendering services for type definitions and summaries."""

from .definition_renderer import DefinitionRenderer, RenderError, primitive_name
from .info_renderer import InfoRenderer

__all__ = [
    "DefinitionRenderer",
    "InfoRenderer",
    "RenderError",
    "primitive_name",
]
