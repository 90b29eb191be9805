#!/usr/bin/env python3

"""DW_AT_data_member_location decoding.

Producers emit member offsets either as a plain constant (DWARF 3 and
later) or as a location expression (DWARF 2), typically
``[DW_OP_plus_uconst, offset]``.

Example:
    member_location = 4         -> offset = 4
    member_location = [35, 4]   -> offset = 4
"""

from ....infrastructure.logging import get_logger

logger = get_logger(__name__)

DW_OP_PLUS_UCONST = 0x23


def _decode_uleb128(data: list[int] | tuple[int, ...]) -> int | None:
    """Decode an unsigned LEB128 operand; None if the bytes run out."""
    result = 0
    shift = 0
    for byte in data:
        result |= (byte & 0x7F) << shift
        if not byte & 0x80:
            return result
        shift += 7
    return None


def _parse_location_expression(expr: list[int] | tuple[int, ...]) -> int | None:
    """Extract the constant from a ``DW_OP_plus_uconst`` expression."""
    if not expr:
        logger.debug("Empty location expression, cannot extract offset")
        return None

    if expr[0] == DW_OP_PLUS_UCONST and len(expr) >= 2:
        offset = _decode_uleb128(expr[1:])
        if offset is None:
            logger.warning(f"Truncated DW_OP_plus_uconst operand in {list(expr)}")
        return offset

    logger.warning(f"Unsupported location expression for member offset: {list(expr)}")
    return None


def parse_location_offset(attr_value: int | list[int] | tuple[int, ...] | None) -> int | None:
    """Extract a member offset in bytes from DW_AT_data_member_location.

    Args:
        attr_value: Attribute value; an int, an expression byte list, or None

    Returns:
        Offset in bytes, or None if it cannot be determined

    Examples:
        >>> parse_location_offset(8)
        8
        >>> parse_location_offset([35, 16])
        16
        >>> parse_location_offset([35, 0x80, 0x01])
        128
    """
    if attr_value is None:
        return None

    if isinstance(attr_value, int):
        return attr_value

    if isinstance(attr_value, (list, tuple)):
        return _parse_location_expression(attr_value)

    logger.warning(f"Unknown member location value type: {type(attr_value).__name__}")
    return None
