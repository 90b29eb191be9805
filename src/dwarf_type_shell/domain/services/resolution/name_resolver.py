#!/usr/bin/env python3

"""Name and goff resolution for user queries.

Users refer to a type either by its declared name or by the textual goff
printed next to every listing line, e.g. ``<.debug_info+0x0000a1f2>``. This
module converts between goffs and text and turns a free-text query into the
list of matching entries.
"""

import re
from dataclasses import dataclass

from ....infrastructure.logging import get_logger
from ...models.dwarf import DebugSection, Goff, TypeInfo
from ...repositories import TypeDatabase

logger = get_logger(__name__)

GOFF_PREFIX = "<.debug_"
ANONYMOUS_TYPE = "<anonymous type>"

# Section tag (after the shared prefix) -> section
_SECTION_TAGS = {
    "info+0x": DebugSection.DEBUG_INFO,
    "types+0x": DebugSection.DEBUG_TYPES,
}

_HEX_DIGITS = re.compile(r"[0-9a-fA-F]+")


class GoffParseError(ValueError):
    """Text looked like a goff reference but could not be decoded."""


@dataclass(frozen=True)
class TypeNameQuery:
    """A query by declared name."""

    name: str


@dataclass(frozen=True)
class GoffQuery:
    """A query by explicit goff."""

    goff: Goff


ParsedTypeName = TypeNameQuery | GoffQuery


def format_goff(goff: Goff) -> str:
    """Render a goff as ``<.debug_info+0xHEX>`` / ``<.debug_types+0xHEX>``."""
    return str(goff)


def looks_like_goff(text: str) -> bool:
    """Check whether text has the shape of a textual goff."""
    return text.startswith(GOFF_PREFIX) and text.endswith(">")


def parse_goff(text: str) -> Goff:
    """Parse the textual goff form back into a goff.

    Args:
        text: Text such as ``<.debug_types+0x0000beef>``

    Returns:
        The goff named by ``text``

    Raises:
        GoffParseError: On an unknown section tag or undecodable hex payload
    """
    if not looks_like_goff(text):
        raise GoffParseError(f"bad offset reference: {text}")

    rest = text[len(GOFF_PREFIX):]
    for tag, section in _SECTION_TAGS.items():
        if rest.startswith(tag):
            digits = rest[len(tag):-1]
            if not _HEX_DIGITS.fullmatch(digits):
                raise GoffParseError(f"can't parse {digits} as hex")
            return Goff(section, int(digits, 16))

    raise GoffParseError(f"bad offset reference: {text}")


def parse_type_name(text: str) -> ParsedTypeName:
    """Classify a query as a goff reference or a plain name.

    Anything without the goff shape is a name, even if it is not a valid one.

    Raises:
        GoffParseError: If the text has the goff shape but does not decode
    """
    if looks_like_goff(text):
        return GoffQuery(parse_goff(text))
    return TypeNameQuery(text)


def name_or_goff(db: TypeDatabase, goff: Goff) -> str:
    """Return the entry's name, or its textual goff when it has none."""
    name = db.name_from_goff(goff)
    return name if name is not None else format_goff(goff)


def named_goff(db: TypeDatabase, goff: Goff) -> str:
    """Render ``Name <.debug_info+0x...>`` with a placeholder for anonymous entries."""
    name = db.name_from_goff(goff)
    return f"{name if name is not None else ANONYMOUS_TYPE} {format_goff(goff)}"


def resolve_query(db: TypeDatabase, text: str) -> list[tuple[Goff, TypeInfo]]:
    """Resolve a free-text query into matching entries, in snapshot order.

    Args:
        db: Type database to search
        text: A declared name or a textual goff

    Returns:
        Zero, one or many (goff, entry) pairs

    Raises:
        GoffParseError: If ``text`` is a malformed goff reference
    """
    query = parse_type_name(text.strip())

    if isinstance(query, GoffQuery):
        entry = db.type_from_goff(query.goff)
        if entry is None:
            logger.debug(f"No type entry at {query.goff}")
            return []
        return [(query.goff, entry)]

    matches = db.types_by_name(query.name)
    logger.debug(f"{len(matches)} types named {query.name!r}")
    return matches
