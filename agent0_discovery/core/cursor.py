"""
Offset cursors.

A cursor is the decimal string form of a non-negative offset into the indexed
source's result order. Cursors are reconstructible: "50" always means offset 50.
"""

from __future__ import annotations

import re
from typing import Optional

from .exceptions import InvalidCursorError

_CURSOR_RE = re.compile(r"[0-9]+")


def decode_cursor(cursor: Optional[str]) -> int:
    """Turn a cursor into an offset. None or "" means the first page."""
    if cursor is None or cursor == "":
        return 0
    if not isinstance(cursor, str) or not _CURSOR_RE.fullmatch(cursor):
        raise InvalidCursorError(cursor)
    return int(cursor, 10)


def encode_cursor(offset: int) -> str:
    if offset < 0:
        raise ValueError(f"Cursor offset must be non-negative, got {offset}")
    return str(offset)
