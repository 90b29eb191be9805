#!/usr/bin/env python3

"""Union information model for DWARF parsing."""

from dataclasses import dataclass

from .member_info import MemberInfo


@dataclass(frozen=True)
class UnionInfo:
    """Information about a union."""

    name: str
    members: tuple[MemberInfo, ...] = ()
