"""
Address normalization helpers.
"""

from __future__ import annotations

from typing import Iterable, List, Optional

from eth_utils import is_hex_address, to_normalized_address


def normalize_address(value: Optional[str]) -> Optional[str]:
    """Return the canonical form of an address-like string.

    20-byte hex addresses are normalized through eth_utils (lowercase, 0x-prefixed).
    Anything else (ENS names, opaque ids) is stripped and lowercased.
    """
    if value is None:
        return None
    if not isinstance(value, str):
        value = str(value)
    value = value.strip()
    if not value:
        return None
    if is_hex_address(value):
        return to_normalized_address(value)
    return value.lower()


def normalize_addresses(values: Optional[Iterable[str]]) -> List[str]:
    """Normalize every address in a list, dropping empty entries."""
    normalized = []
    for value in values or []:
        address = normalize_address(value)
        if address:
            normalized.append(address)
    return normalized


def addresses_equal(left: Optional[str], right: Optional[str]) -> bool:
    """Compare two address-like strings by normalized form. Missing values never match."""
    left_normalized = normalize_address(left)
    right_normalized = normalize_address(right)
    if left_normalized is None or right_normalized is None:
        return False
    return left_normalized == right_normalized
