"""TCP connection to a Newfor subtitle-insertion receiver.

The receiver never answers, so the connection is write-only. Writes block
until the OS accepts the bytes; there is no deadline unless ``timeout`` is
given.
"""

from __future__ import annotations

import logging
import socket
from dataclasses import dataclass

from ..errors import ConnectError

logger = logging.getLogger(__name__)

DEFAULT_HOST = "127.0.0.1"
DEFAULT_PORT = 1234


@dataclass
class ReceiverInfo:
    """Endpoint details of the connected receiver."""

    host: str = DEFAULT_HOST
    port: int = DEFAULT_PORT
    local_address: str = ""


class TCPConnection:
    """Owns the socket to one receiver.

    Usage::

        conn = TCPConnection("10.0.0.5", 1234)
        conn.open()
        conn.write(packet)
        conn.close()
    """

    def __init__(
        self,
        host: str = DEFAULT_HOST,
        port: int = DEFAULT_PORT,
        timeout: float | None = None,
    ) -> None:
        self._host = host
        self._port = port
        self._timeout = timeout
        self._sock: socket.socket | None = None
        self._info = ReceiverInfo(host=host, port=port)

    @property
    def connected(self) -> bool:
        return self._sock is not None

    @property
    def info(self) -> ReceiverInfo:
        return self._info

    def open(self) -> ReceiverInfo:
        """Open the TCP connection.

        Raises:
            ConnectError: If the receiver cannot be reached.
        """
        if self._sock is not None:
            return self._info

        sock = None
        try:
            sock = socket.create_connection((self._host, self._port), timeout=self._timeout)
            sock.setsockopt(socket.IPPROTO_TCP, socket.TCP_NODELAY, 1)
        except OSError as e:
            if sock is not None:
                sock.close()
            raise ConnectError(
                f"Could not connect to receiver at {self._host}:{self._port}: {e}"
            ) from e

        self._sock = sock
        local_host, local_port = sock.getsockname()[:2]
        self._info = ReceiverInfo(
            host=self._host,
            port=self._port,
            local_address=f"{local_host}:{local_port}",
        )
        logger.info("Connected to receiver %s:%s", self._host, self._port)
        return self._info

    def close(self) -> None:
        """Close the socket. Safe to call more than once."""
        if self._sock is None:
            return

        try:
            self._sock.close()
        except OSError as e:
            logger.warning("Error closing socket: %s", e)
        finally:
            self._sock = None
            logger.info("Disconnected from receiver %s:%s", self._host, self._port)

    def write(self, data: bytes) -> int:
        """Write one packet, blocking until the OS has taken all of it.

        Returns:
            Number of bytes written.

        Raises:
            ConnectionError: If not connected.
            OSError: If the write fails.
        """
        if self._sock is None:
            raise ConnectionError("Not connected to receiver")

        logger.debug("TX %s", data.hex(" "))
        self._sock.sendall(data)
        return len(data)
