"""Hamming 8/4 digit codec.

Every numeric field on the Newfor wire (page digits, row nibbles, the
subtitle data byte) is sent as a "protected" byte: a 4-bit value spread
over 8 bits with redundancy so a single flipped bit can be detected by the
receiver. The encoding is a fixed 16-entry table.
"""

from __future__ import annotations

HAMMING_8_4: tuple[int, ...] = (
    0x15, 0x02, 0x49, 0x5E, 0x64, 0x73, 0x38, 0x2F,
    0xD0, 0xC7, 0x8C, 0x9B, 0xA1, 0xB6, 0xFD, 0xEA,
)

_REVERSE = {byte: nibble for nibble, byte in enumerate(HAMMING_8_4)}


def encode_digit(nibble: int) -> int:
    """Encode a 0-15 value as its protected byte.

    Raises:
        ValueError: If ``nibble`` is outside 0-15.
    """
    if not 0 <= nibble <= 15:
        raise ValueError(f"Nibble must be 0-15, got {nibble}")
    return HAMMING_8_4[nibble]


def decode_digit(byte: int) -> int:
    """Recover the nibble from a protected byte.

    No error correction is attempted: bytes that are not in the table
    raise ``ValueError``.
    """
    try:
        return _REVERSE[byte]
    except KeyError:
        raise ValueError(f"0x{byte:02X} is not a Hamming 8/4 code") from None
