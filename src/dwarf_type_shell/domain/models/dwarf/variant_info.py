#!/usr/bin/env python3

"""Variant part models describing how a sum type is encoded."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field

from .member_info import MemberInfo


@dataclass(frozen=True)
class VariantInfo:
    """One arm of a sum type; the member carries the arm's payload struct."""

    member: MemberInfo


@dataclass(frozen=True)
class ZeroVariants:
    """Uninhabited sum type."""


@dataclass(frozen=True)
class OneVariant:
    """Exactly one variant and no discriminant field."""

    variant: VariantInfo


@dataclass(frozen=True)
class ManyVariants:
    """Variants selected by a discriminant member.

    ``variants`` is keyed by discriminant value. The ``None`` key, if present,
    is the default arm matching any value not listed explicitly; keeping it as
    ``None`` rather than a sentinel keeps it distinct from a discriminant of 0.
    """

    discriminant: MemberInfo
    variants: Mapping[int | None, VariantInfo] = field(default_factory=dict)

    def explicit_variants(self) -> list[tuple[int, VariantInfo]]:
        """Return explicitly-valued arms in ascending discriminant order."""
        return sorted(
            ((value, variant) for value, variant in self.variants.items() if value is not None),
            key=lambda item: item[0],
        )

    def default_variant(self) -> VariantInfo | None:
        """Return the fallback arm, if the encoding has one."""
        return self.variants.get(None)

    def ordered_variants(self) -> list[tuple[int | None, VariantInfo]]:
        """Return every arm: explicit values first, the default arm last."""
        ordered: list[tuple[int | None, VariantInfo]] = list(self.explicit_variants())
        default = self.default_variant()
        if default is not None:
            ordered.append((None, default))
        return ordered


VariantShape = ZeroVariants | OneVariant | ManyVariants


@dataclass(frozen=True)
class VariantPart:
    """The variant part of an enum."""

    shape: VariantShape
