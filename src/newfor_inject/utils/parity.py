"""Odd parity for teletext payload bytes."""

from __future__ import annotations


def add_odd_parity(value: int) -> int:
    """Return ``value`` with bit 7 set so the byte has an odd bit count.

    Bit 7 of the input is ignored, so applying this twice gives the same
    result as applying it once.
    """
    value &= 0x7F
    if bin(value).count("1") % 2 == 0:
        value |= 0x80
    return value


def has_odd_parity(value: int) -> bool:
    return bin(value & 0xFF).count("1") % 2 == 1


def strip_parity(value: int) -> int:
    """Drop the parity bit, leaving the 7-bit character code."""
    return value & 0x7F
