"""Transport layer: the TCP link to the receiver."""

from .tcp_connection import TCPConnection
