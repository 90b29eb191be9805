#!/usr/bin/env python3

"""Domain layer containing the type graph, its snapshot and queries."""

from . import models, repositories, services

__all__ = [
    "models",
    "repositories",
    "services",
]
