#!/usr/bin/env python3

"""Subroutine (callable signature) model for DWARF parsing."""

from dataclasses import dataclass

from .goff import Goff


@dataclass(frozen=True)
class SubroutineInfo:
    """A callable type signature, not a concrete function."""

    formal_parameters: tuple[Goff, ...] = ()
    return_type_goff: Goff | None = None
