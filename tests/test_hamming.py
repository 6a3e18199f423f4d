"""Tests for the Hamming 8/4 digit codec."""

import pytest

from newfor_inject.utils.hamming import HAMMING_8_4, decode_digit, encode_digit


def test_table_has_sixteen_distinct_codes():
    """Every nibble maps to its own protected byte."""
    assert len(HAMMING_8_4) == 16
    assert len(set(HAMMING_8_4)) == 16


def test_encode_known_captured_digits():
    """Digits seen in receiver captures (pages 123, 456, 567, 888, 889)."""
    assert encode_digit(1) == 0x02
    assert encode_digit(2) == 0x49
    assert encode_digit(3) == 0x5E
    assert encode_digit(4) == 0x64
    assert encode_digit(5) == 0x73
    assert encode_digit(6) == 0x38
    assert encode_digit(7) == 0x2F
    assert encode_digit(8) == 0xD0
    assert encode_digit(9) == 0xC7


def test_encode_zero_and_high_nibbles():
    assert encode_digit(0) == 0x15
    assert encode_digit(0x0F) == 0xEA


def test_encode_deterministic_and_from_table():
    """Same input always yields the same table entry."""
    for nibble in range(16):
        assert encode_digit(nibble) == encode_digit(nibble)
        assert encode_digit(nibble) in HAMMING_8_4


def test_encode_rejects_out_of_range():
    with pytest.raises(ValueError):
        encode_digit(16)
    with pytest.raises(ValueError):
        encode_digit(-1)


def test_decode_inverts_encode():
    for nibble in range(16):
        assert decode_digit(encode_digit(nibble)) == nibble


def test_decode_rejects_unknown_byte():
    """A corrupted code is reported, not silently corrected."""
    with pytest.raises(ValueError):
        decode_digit(0x00)
