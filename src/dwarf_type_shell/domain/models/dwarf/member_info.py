#!/usr/bin/env python3

"""Member information model for aggregate type entries."""

from dataclasses import dataclass

from .goff import Goff


@dataclass(frozen=True)
class MemberInfo:
    """A data member of a struct, union, enum variant or discriminant."""

    name: str | None
    type_goff: Goff
    offset: int = 0
    alignment: int | None = None
    artificial: bool = False
