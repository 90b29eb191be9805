#!/usr/bin/env python3

"""Array bounds from DW_TAG_subrange_type children."""

from elftools.dwarf.die import DIE

from ....infrastructure.logging import get_logger
from ...models.dwarf.tag_constants import SUBRANGE_TYPE_TAG

logger = get_logger(__name__)


# Forms carrying a bound as a literal; reference and exprloc bounds are runtime values
CONSTANT_FORMS = frozenset(
    {
        "DW_FORM_data1",
        "DW_FORM_data2",
        "DW_FORM_data4",
        "DW_FORM_data8",
        "DW_FORM_sdata",
        "DW_FORM_udata",
        "DW_FORM_implicit_const",
    }
)


def _int_attr(die: DIE, name: str) -> int | None:
    attr = die.attributes.get(name)
    if attr is None or not isinstance(attr.value, int) or isinstance(attr.value, bool):
        return None
    if attr.form not in CONSTANT_FORMS:
        logger.debug(f"{name} of DIE at 0x{die.offset:x} has non-constant form {attr.form}")
        return None
    return attr.value


def parse_array_bounds(array_die: DIE) -> tuple[int, int | None]:
    """Read the lower bound and element count of an array DIE.

    Only the first subrange is used; multi-dimensional C arrays therefore
    report the outermost dimension. The count comes from ``DW_AT_count``, or
    from ``DW_AT_upper_bound - lower + 1`` when only bounds are given.

    Args:
        array_die: DIE of type DW_TAG_array_type

    Returns:
        (lower_bound, count); count is None when the length is unknown
    """
    for child in array_die.iter_children():
        if child.tag != SUBRANGE_TYPE_TAG:
            continue

        lower_bound = _int_attr(child, "DW_AT_lower_bound") or 0
        count = _int_attr(child, "DW_AT_count")
        if count is None:
            upper_bound = _int_attr(child, "DW_AT_upper_bound")
            if upper_bound is not None:
                count = upper_bound - lower_bound + 1

        if count is not None and count < 0:
            logger.debug(f"Array at 0x{array_die.offset:x} has negative count {count}")
            count = None

        logger.debug(
            f"Array at 0x{array_die.offset:x}: lower bound {lower_bound}, count {count}"
        )
        return lower_bound, count

    logger.debug(f"Array at 0x{array_die.offset:x} has no subrange")
    return 0, None
