"""Protocol layer: row layout, packet builders, parsing, and variants."""

from .layout import compute_layout, row_numbers
from .packets import build_connect, build_build, build_reveal, build_clear, build_disconnect
from .variants import ProtocolVariant, get_variant
