"""Byte-level codecs: Hamming 8/4 digits and odd parity."""

from .hamming import encode_digit, decode_digit
from .parity import add_odd_parity
