"""Newfor packet builders.

A subtitle update is a short burst of packets written to the receiver::

    CONNECT     0E 00 D(mag) D(tens) D(units)     select the page
    CLEAR       98                                blank the display
    BUILD       8F D(clear<<3|n) {D(rh) D(rl) <40 bytes>} x n
    REVEAL      10                                show the last BUILD
    DISCONNECT  0E 00 D(9) D(9) D(9)              select the illegal page

``D`` is the Hamming 8/4 digit code. ``rh``/``rl`` are the high and low
nibbles of the binary row number. Each row carries exactly 40 bytes of
odd-parity teletext: control codes, text, then padding.
"""

from __future__ import annotations

import logging
import warnings
from dataclasses import dataclass
from enum import IntEnum

from ..errors import EncodingOverflow
from ..models.page import PageNumber
from ..models.style import SubtitleStyle
from ..utils.hamming import encode_digit
from ..utils.parity import add_odd_parity
from .layout import FIRST_ROW, LAST_ROW

logger = logging.getLogger(__name__)

ROW_SIZE = 40
MAX_ROWS_PER_BUILD = 7
LEFT_MARGIN = 4
CLEAR_FLAG = 0x08


class Marker(IntEnum):
    """Leading byte of each packet kind."""

    PAGE = 0x0E
    BUILD = 0x8F
    REVEAL = 0x10
    CLEAR = 0x98


class Control(IntEnum):
    """WST spacing attributes used inside a row."""

    END_BOX = 0x0A
    START_BOX = 0x0B
    DOUBLE_HEIGHT = 0x0D
    SPACE = 0x20


PADDING = 0x8A  # END_BOX with odd parity


@dataclass(frozen=True)
class Row:
    """One display row of a BUILD packet."""

    number: int
    content: bytes

    def __post_init__(self) -> None:
        if not FIRST_ROW <= self.number <= LAST_ROW:
            raise ValueError(
                f"Row must be {FIRST_ROW}-{LAST_ROW}, got {self.number}"
            )
        if len(self.content) != ROW_SIZE:
            raise ValueError(
                f"Row content must be {ROW_SIZE} bytes, got {len(self.content)}"
            )


def encode_text(text: str) -> bytes:
    """Odd-parity encode text, one byte per character.

    Characters outside 7-bit ASCII are sent as ``?``.
    """
    raw = text.encode("ascii", errors="replace")
    return bytes(add_odd_parity(b) for b in raw)


def build_row_content(
    text: str, style: SubtitleStyle, close_box: bool = True
) -> bytes:
    """Build the 40-byte content buffer for one subtitle line.

    Layout: [double height, space] 4 spaces [start box x2] colour, space,
    text, [end box x2], padding. Content longer than 40 bytes is cut to 40
    and an :class:`EncodingOverflow` warning is issued.

    Args:
        text: The line to draw.
        style: Colour, box and height attributes.
        close_box: Append the two end-box codes when boxed. The legacy burst
            format relies on the padding byte to end the box instead.
    """
    data = bytearray()
    if style.double_height:
        data += bytes([Control.DOUBLE_HEIGHT, Control.SPACE])
    data += bytes([Control.SPACE] * LEFT_MARGIN)
    if style.boxed:
        data += bytes([Control.START_BOX, Control.START_BOX])
    data += bytes([style.color, Control.SPACE])
    data = bytearray(add_odd_parity(b) for b in data)

    data += encode_text(text)

    if style.boxed and close_box:
        data += bytes(add_odd_parity(b) for b in (Control.END_BOX, Control.END_BOX))

    if len(data) > ROW_SIZE:
        message = (
            f"Row content is {len(data)} bytes, truncated to {ROW_SIZE}: {text!r}"
        )
        logger.warning(message)
        warnings.warn(message, EncodingOverflow, stacklevel=2)
        return bytes(data[:ROW_SIZE])

    return bytes(data) + bytes([PADDING]) * (ROW_SIZE - len(data))


def encode_page(page: PageNumber, fold_magazine: bool = False) -> bytes:
    """Encode the three page digits.

    Args:
        page: Page to encode.
        fold_magazine: Send magazine 8 as 0, as teletext packet headers do.
    """
    magazine = page.magazine
    if fold_magazine and magazine == 8:
        magazine = 0
    return bytes(encode_digit(d) for d in (magazine, page.tens, page.units))


def build_connect(page: PageNumber, fold_magazine: bool = False) -> bytes:
    """Build a CONNECT packet selecting ``page`` for the session."""
    return bytes([Marker.PAGE, 0x00]) + encode_page(page, fold_magazine)


def build_disconnect() -> bytes:
    """Build a DISCONNECT packet (CONNECT to the illegal page 999)."""
    return bytes([Marker.PAGE, 0x00]) + encode_page(PageNumber.ILLEGAL)


def build_subtitle_data(row_count: int, clear: bool = True) -> int:
    """Pack the clear flag and row count into the protected data byte."""
    if not 1 <= row_count <= MAX_ROWS_PER_BUILD:
        raise ValueError(
            f"Row count must be 1-{MAX_ROWS_PER_BUILD}, got {row_count}"
        )
    return encode_digit((CLEAR_FLAG if clear else 0) | row_count)


def build_build(rows: list[Row], clear: bool = True) -> bytes:
    """Build a single BUILD packet carrying every row of one update."""
    packet = bytearray([Marker.BUILD, build_subtitle_data(len(rows), clear)])
    for row in rows:
        packet += bytes([encode_digit(row.number >> 4), encode_digit(row.number & 0x0F)])
        packet += row.content
    return bytes(packet)


def build_reveal() -> bytes:
    """Build a REVEAL packet, making the last BUILD visible."""
    return bytes([Marker.REVEAL])


def build_clear() -> bytes:
    """Build a CLEAR packet, blanking the display."""
    return bytes([Marker.CLEAR])
