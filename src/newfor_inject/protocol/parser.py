"""Decoding of canonical Newfor byte streams, as a receiver would see them."""

from __future__ import annotations

from dataclasses import dataclass, field

from ..models.page import PageNumber
from ..utils.hamming import decode_digit
from ..utils.parity import strip_parity
from .packets import CLEAR_FLAG, ROW_SIZE, Control, Marker, Row


@dataclass
class ConnectPacket:
    """CONNECT (0x0E): select the page for subsequent updates."""

    page: PageNumber


@dataclass
class DisconnectPacket:
    """CONNECT to the illegal page 999, ending the session."""


@dataclass
class BuildPacket:
    """BUILD (0x8F): rows of subtitle data, shown on the next REVEAL."""

    clear: bool
    rows: list[Row] = field(default_factory=list)

    def __repr__(self) -> str:
        return (
            f"BuildPacket(clear={self.clear}, "
            f"rows={[row.number for row in self.rows]})"
        )


@dataclass
class RevealPacket:
    """REVEAL (0x10)."""


@dataclass
class ClearPacket:
    """CLEAR (0x98)."""


Packet = ConnectPacket | DisconnectPacket | BuildPacket | RevealPacket | ClearPacket


def decode_row_text(content: bytes) -> str:
    """Return the visible text of a row, without control codes or margins."""
    chars = []
    for byte in content:
        code = strip_parity(byte)
        chars.append(chr(code) if code >= Control.SPACE else " ")
    return "".join(chars).strip()


def _parse_page(data: bytes, offset: int) -> tuple[Packet, int]:
    end = offset + 5
    if len(data) < end:
        raise ValueError(f"Truncated page packet at offset {offset}")
    digits = tuple(decode_digit(b) for b in data[offset + 2 : end])
    page = PageNumber(*digits)
    if page == PageNumber.ILLEGAL:
        return DisconnectPacket(), end
    return ConnectPacket(page=page), end


def _parse_build(data: bytes, offset: int) -> tuple[Packet, int]:
    if len(data) < offset + 2:
        raise ValueError(f"Truncated build packet at offset {offset}")
    subtitle_data = decode_digit(data[offset + 1])
    row_count = subtitle_data & 0x07
    packet = BuildPacket(clear=bool(subtitle_data & CLEAR_FLAG))

    pos = offset + 2
    for _ in range(row_count):
        if len(data) < pos + 2 + ROW_SIZE:
            raise ValueError(f"Truncated row in build packet at offset {pos}")
        number = (decode_digit(data[pos]) << 4) | decode_digit(data[pos + 1])
        content = data[pos + 2 : pos + 2 + ROW_SIZE]
        packet.rows.append(Row(number=number, content=bytes(content)))
        pos += 2 + ROW_SIZE
    return packet, pos


def parse_packets(data: bytes) -> list[Packet]:
    """Split a canonical Newfor byte stream into packets.

    Raises:
        ValueError: On an unknown leading byte, a truncated packet, or a
            field that is not a valid Hamming 8/4 code.
    """
    packets: list[Packet] = []
    offset = 0
    while offset < len(data):
        marker = data[offset]
        if marker == Marker.PAGE:
            packet, offset = _parse_page(data, offset)
        elif marker == Marker.BUILD:
            packet, offset = _parse_build(data, offset)
        elif marker == Marker.REVEAL:
            packet, offset = RevealPacket(), offset + 1
        elif marker == Marker.CLEAR:
            packet, offset = ClearPacket(), offset + 1
        else:
            raise ValueError(f"Unknown packet marker 0x{marker:02X} at offset {offset}")
        packets.append(packet)
    return packets
