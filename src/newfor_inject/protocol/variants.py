"""Protocol variants: how a send, clear, or disconnect maps to packets.

``newfor`` is the protocol receivers speak. ``burst`` and ``framed`` are
earlier reverse-engineered revisions kept for receivers and captures that
still expect them. A session picks one by name and never mixes them.
"""

from __future__ import annotations

from ..models.page import PageNumber
from ..models.style import SubtitleStyle
from ..utils.parity import add_odd_parity
from .layout import row_numbers
from .packets import (
    ROW_SIZE,
    Control,
    Row,
    build_build,
    build_clear,
    build_connect,
    build_disconnect,
    build_reveal,
    build_row_content,
)


class ProtocolVariant:
    """Base class. Each method returns named packets in write order."""

    name = ""

    def send_packets(
        self, page: PageNumber, lines: list[str], style: SubtitleStyle
    ) -> list[tuple[str, bytes]]:
        raise NotImplementedError

    def clear_packets(self, page: PageNumber) -> list[tuple[str, bytes]]:
        raise NotImplementedError

    def disconnect_packets(self) -> list[tuple[str, bytes]]:
        raise NotImplementedError


class NewforVariant(ProtocolVariant):
    """CONNECT, CLEAR, one BUILD for all rows, REVEAL."""

    name = "newfor"

    def __init__(self, fold_magazine: bool = False) -> None:
        self.fold_magazine = fold_magazine

    def send_packets(self, page, lines, style):
        numbers = row_numbers(len(lines), style.position, style.double_height)
        rows = [
            Row(number=number, content=build_row_content(line, style))
            for number, line in zip(numbers, lines)
        ]
        return [
            ("CONNECT", build_connect(page, self.fold_magazine)),
            ("CLEAR", build_clear()),
            ("BUILD", build_build(rows, clear=True)),
            ("REVEAL", build_reveal()),
        ]

    def clear_packets(self, page):
        return [("CLEAR", build_clear())]

    def disconnect_packets(self):
        return [("DISCONNECT", build_disconnect())]


# Digit codes as first captured; 0 was never seen on the wire, only folded 8.
BURST_DIGITS = (0xD0, 0x02, 0x49, 0x5E, 0x64, 0x73, 0x38, 0x2F, 0xD0, 0xC7)
BURST_HEADER = b"\x8f\xc7\x02"
BURST_INIT = b"\x0e\x15\x15\x15\x15"


class BurstVariant(ProtocolVariant):
    """Burst framing: page start, init confirm, one data packet per row."""

    name = "burst"

    def _burst_start(self, page: PageNumber) -> list[tuple[str, bytes]]:
        magazine = 0 if page.magazine == 8 else page.magazine
        digits = bytes(BURST_DIGITS[d] for d in (magazine, page.tens, page.units))
        return [
            ("BURST_START", b"\x0e\x15" + digits),
            ("BURST_INIT", BURST_INIT),
            ("CLEAR", build_clear()),
        ]

    def send_packets(self, page, lines, style):
        packets = self._burst_start(page)
        numbers = row_numbers(len(lines), style.position, style.double_height)
        for number, line in zip(numbers, lines):
            content = build_row_content(line, style, close_box=False)
            packets.append(
                ("DATA", BURST_HEADER + bytes([add_odd_parity(number)]) + content)
            )
        packets.append(("REVEAL", build_reveal()))
        return packets

    def clear_packets(self, page):
        return self._burst_start(page) + [("REVEAL", build_reveal())]

    def disconnect_packets(self):
        return []


NAK = 0x15
ETX = 0x14
FRAMED_CLEAR_ROWS = range(18, 24)
FRAMED_END_BOX = 0x0C  # this revision closed boxes with 0x0C, not WST end box


class FramedVariant(ProtocolVariant):
    """NAK/ETX framing with the page and row as ASCII digits."""

    name = "framed"

    def _packet(self, page: PageNumber, row: int, data: bytes) -> bytes:
        return bytes([NAK]) + f"{page}{row:02d}".encode("ascii") + data + bytes([ETX])

    def send_packets(self, page, lines, style):
        packets = self.clear_packets(page)
        numbers = row_numbers(len(lines), style.position, style.double_height)
        for number, line in zip(numbers, lines):
            data = bytearray()
            if style.boxed:
                data.append(Control.START_BOX)
            data.append(style.color)
            if style.double_height:
                data.append(Control.DOUBLE_HEIGHT)
            data += line.encode("ascii", errors="replace")
            if style.boxed:
                data.append(FRAMED_END_BOX)
            packets.append(("ROW", self._packet(page, number, bytes(data))))
        return packets

    def clear_packets(self, page):
        blank = b" " * ROW_SIZE
        return [("ROW", self._packet(page, row, blank)) for row in FRAMED_CLEAR_ROWS]

    def disconnect_packets(self):
        return []


VARIANTS: dict[str, type[ProtocolVariant]] = {
    NewforVariant.name: NewforVariant,
    BurstVariant.name: BurstVariant,
    FramedVariant.name: FramedVariant,
}


def get_variant(name: str) -> ProtocolVariant:
    """Instantiate a protocol variant by name."""
    if name not in VARIANTS:
        raise ValueError(f"Unknown protocol variant '{name}'. Valid: {list(VARIANTS)}")
    return VARIANTS[name]()
