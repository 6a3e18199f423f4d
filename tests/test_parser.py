"""Tests for decoding canonical Newfor streams."""

import pytest

from newfor_inject.models.page import PageNumber
from newfor_inject.models.style import Position, SubtitleStyle
from newfor_inject.protocol.packets import build_connect, build_disconnect
from newfor_inject.protocol.parser import (
    BuildPacket,
    ClearPacket,
    ConnectPacket,
    DisconnectPacket,
    RevealPacket,
    decode_row_text,
    parse_packets,
)
from newfor_inject.protocol.variants import NewforVariant


def _send_stream(lines, style, page="888") -> bytes:
    packets = NewforVariant().send_packets(PageNumber.parse(page), lines, style)
    return b"".join(data for _, data in packets)


def test_page_888_recovers_digits():
    """The three page bytes decode back to 8, 8, 8."""
    packets = parse_packets(build_connect(PageNumber.parse("888")))
    assert packets == [ConnectPacket(page=PageNumber(8, 8, 8))]


def test_disconnect_decodes_as_disconnect():
    assert parse_packets(build_disconnect()) == [DisconnectPacket()]


def test_send_sequence_order():
    stream = _send_stream(["HELLO"], SubtitleStyle())
    packets = parse_packets(stream)
    assert [type(p) for p in packets] == [
        ConnectPacket,
        ClearPacket,
        BuildPacket,
        RevealPacket,
    ]


def test_build_rows_and_text():
    stream = _send_stream(
        ["TOP LINE", "MIDDLE LINE", "LAST LINE"],
        SubtitleStyle(double_height=True, position=Position.TOP),
        page="123",
    )
    connect, _, build, _ = parse_packets(stream)
    assert connect.page == PageNumber(1, 2, 3)
    assert build.clear is True
    assert [row.number for row in build.rows] == [2, 4, 6]
    assert [decode_row_text(row.content) for row in build.rows] == [
        "TOP LINE",
        "MIDDLE LINE",
        "LAST LINE",
    ]


def test_decode_row_text_keeps_inner_spaces():
    stream = _send_stream(["A  B"], SubtitleStyle(boxed=False))
    build = parse_packets(stream)[2]
    assert decode_row_text(build.rows[0].content) == "A  B"


def test_unknown_marker_rejected():
    with pytest.raises(ValueError):
        parse_packets(b"\x42")


def test_truncated_build_rejected():
    stream = _send_stream(["HELLO"], SubtitleStyle())
    with pytest.raises(ValueError):
        parse_packets(stream[:30])


def test_bad_hamming_code_rejected():
    with pytest.raises(ValueError):
        parse_packets(bytes([0x0E, 0x00, 0xD0, 0x00, 0xD0]))


def test_build_repr_lists_rows():
    build = parse_packets(_send_stream(["X", "Y"], SubtitleStyle()))[2]
    assert "rows=[22, 23]" in repr(build)
