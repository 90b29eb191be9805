#!/usr/bin/env python3

"""Line-table row model for address-to-source lookups."""

from dataclasses import dataclass


@dataclass(frozen=True)
class LineRow:
    """Source position for an address; line/column may be unknown."""

    file: str
    line: int | None = None
    column: int | None = None
