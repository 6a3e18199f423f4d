"""Tests for odd parity encoding."""

from newfor_inject.utils.parity import add_odd_parity, has_odd_parity, strip_parity


def test_every_byte_gets_odd_parity():
    """The result always has an odd number of set bits."""
    for value in range(256):
        result = add_odd_parity(value)
        low_bits = bin(result & 0x7F).count("1")
        assert (low_bits + ((result >> 7) & 1)) % 2 == 1


def test_parity_known_values():
    assert add_odd_parity(0x20) == 0x20  # space: one bit set already
    assert add_odd_parity(0x18) == 0x98  # clear control code
    assert add_odd_parity(0x0A) == 0x8A  # end box / padding
    assert add_odd_parity(ord("H")) == 0xC8
    assert add_odd_parity(ord("E")) == 0x45
    assert add_odd_parity(0x00) == 0x80


def test_parity_ignores_bit_seven():
    """Applying parity twice gives the same byte as applying it once."""
    for value in range(256):
        once = add_odd_parity(value)
        assert add_odd_parity(once) == once
    assert add_odd_parity(0xFF) == 0x7F


def test_has_odd_parity_and_strip():
    assert has_odd_parity(0x98)
    assert not has_odd_parity(0x18)
    assert strip_parity(0xC8) == ord("H")
