"""
Sort specification parsing.
"""

from __future__ import annotations

import logging
from typing import List, Optional, Tuple

from .config import DEFAULT_ORDER_BY, DEFAULT_ORDER_DIRECTION

ORDER_DIRECTIONS = ("asc", "desc")

logger = logging.getLogger(__name__)


def parse_sort(sort: Optional[List[str]]) -> Tuple[str, str]:
    """Parse a sort list like ["score:asc"] into (order_by, order_direction).

    Only the first entry is honored. A missing field falls back to createdAt and a
    missing or unknown direction falls back to desc.
    """
    order_by = DEFAULT_ORDER_BY
    order_direction = DEFAULT_ORDER_DIRECTION
    if not sort:
        return order_by, order_direction

    if len(sort) > 1:
        logger.debug(f"Ignoring extra sort entries: {sort[1:]}")

    field, _, direction = (sort[0] or "").partition(":")
    field = field.strip()
    direction = direction.strip().lower()

    if field:
        order_by = field
    if direction:
        if direction in ORDER_DIRECTIONS:
            order_direction = direction
        else:
            logger.warning(
                f"Unknown sort direction {direction!r} for {order_by}, "
                f"defaulting to {DEFAULT_ORDER_DIRECTION}"
            )
    return order_by, order_direction
