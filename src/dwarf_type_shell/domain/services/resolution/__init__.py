#!/usr/bin/env python3

"""Name, goff and address resolution services."""

from .address_resolver import AddressParseError, format_line_row, lookup_address, parse_address
from .name_resolver import (
    ANONYMOUS_TYPE,
    GoffParseError,
    GoffQuery,
    ParsedTypeName,
    TypeNameQuery,
    format_goff,
    name_or_goff,
    named_goff,
    parse_goff,
    parse_type_name,
    resolve_query,
)

__all__ = [
    "ANONYMOUS_TYPE",
    "AddressParseError",
    "GoffParseError",
    "GoffQuery",
    "ParsedTypeName",
    "TypeNameQuery",
    "format_goff",
    "format_line_row",
    "lookup_address",
    "name_or_goff",
    "named_goff",
    "parse_address",
    "parse_goff",
    "parse_type_name",
    "resolve_query",
]
