"""Session client: one page-session over one receiver connection.

State machine::

    IDLE --connect()--> CONNECTED --disconnect()--> DISCONNECTED
                         |    ^
                         +----+  send() / clear()

A failed ``connect()`` leaves the session IDLE. A failed write aborts the
rest of that operation but leaves the session CONNECTED. Calls are not
thread-safe; the caller serialises them.
"""

from __future__ import annotations

import logging
from enum import Enum

from .config import DEFAULT_PAGE, DEFAULT_VARIANT, NewforConfig
from .errors import SessionStateError, WriteError
from .models.page import PageNumber
from .models.style import SubtitleStyle
from .protocol.variants import ProtocolVariant, get_variant
from .transport.tcp_connection import (
    DEFAULT_HOST,
    DEFAULT_PORT,
    ReceiverInfo,
    TCPConnection,
)

logger = logging.getLogger(__name__)


class SessionState(Enum):
    IDLE = "idle"
    CONNECTED = "connected"
    DISCONNECTED = "disconnected"


class NewforSession:
    """Drives a subtitle receiver through CONNECT/BUILD/REVEAL/CLEAR.

    Usage::

        with NewforSession("10.0.0.5", 1234, page="888") as session:
            session.send(["HELLO"], SubtitleStyle(color=Color.YELLOW))
            session.clear()
    """

    def __init__(
        self,
        host: str = DEFAULT_HOST,
        port: int = DEFAULT_PORT,
        page: str | PageNumber = DEFAULT_PAGE,
        variant: str | ProtocolVariant = DEFAULT_VARIANT,
        timeout: float | None = None,
        connection: TCPConnection | None = None,
    ) -> None:
        self._page = PageNumber.parse(page)
        self._variant = get_variant(variant) if isinstance(variant, str) else variant
        self._connection = connection or TCPConnection(host, port, timeout)
        self._state = SessionState.IDLE

    @classmethod
    def from_config(cls, config: NewforConfig) -> NewforSession:
        return cls(
            host=config.host,
            port=config.port,
            page=config.page,
            variant=config.variant,
            timeout=config.timeout,
        )

    @property
    def state(self) -> SessionState:
        return self._state

    @property
    def connected(self) -> bool:
        return self._state is SessionState.CONNECTED

    @property
    def page(self) -> PageNumber:
        return self._page

    @property
    def variant(self) -> ProtocolVariant:
        return self._variant

    @property
    def receiver(self) -> ReceiverInfo:
        return self._connection.info

    def set_page(self, page: str | PageNumber) -> PageNumber:
        """Change the page used when ``send``/``clear`` are given none."""
        self._page = PageNumber.parse(page)
        logger.info("Page changed to %s", self._page)
        return self._page

    def connect(self) -> ReceiverInfo:
        """Open the connection to the receiver.

        Raises:
            ConnectError: If the socket cannot be opened; the session
                stays IDLE and ``connect`` may be called again.
            SessionStateError: If the session has already been ended.
        """
        if self._state is SessionState.DISCONNECTED:
            raise SessionStateError("Session has been disconnected; create a new one")
        if self._state is SessionState.CONNECTED:
            logger.debug("connect() called on an open session")
            return self._connection.info

        info = self._connection.open()
        self._state = SessionState.CONNECTED
        return info

    def send(
        self,
        lines: list[str],
        style: SubtitleStyle | None = None,
        page: str | PageNumber | None = None,
    ) -> None:
        """Show ``lines`` on the page, replacing whatever was there.

        Every packet is encoded before the first byte is written, so bad
        arguments never leave a half-sent update.

        Raises:
            ValueError: If the page or line count is invalid.
            SessionStateError: If not connected.
            WriteError: If a packet write fails.
        """
        self._require_connected("send")
        target = self._page if page is None else PageNumber.parse(page)
        lines = list(lines)
        packets = self._variant.send_packets(target, lines, style or SubtitleStyle())
        self._write_all(packets)
        logger.info("Sent %d line(s) to page %s", len(lines), target)

    def clear(self, page: str | PageNumber | None = None) -> None:
        """Blank the display without changing the connected page.

        Raises:
            SessionStateError: If not connected.
            WriteError: If the write fails.
        """
        self._require_connected("clear")
        target = self._page if page is None else PageNumber.parse(page)
        self._write_all(self._variant.clear_packets(target))
        logger.info("Cleared page %s", target)

    def disconnect(self) -> None:
        """End the session and release the socket.

        The socket is closed even if the DISCONNECT packet cannot be sent;
        that failure is logged, not raised. Does nothing unless connected.
        """
        if self._state is not SessionState.CONNECTED:
            return

        try:
            self._write_all(self._variant.disconnect_packets())
        except WriteError as e:
            logger.warning("Disconnect packet not delivered: %s", e)
        finally:
            self._connection.close()
            self._state = SessionState.DISCONNECTED

    def close(self) -> None:
        self.disconnect()

    def _require_connected(self, operation: str) -> None:
        if self._state is not SessionState.CONNECTED:
            raise SessionStateError(
                f"Cannot {operation}: session is {self._state.value}"
            )

    def _write_all(self, packets: list[tuple[str, bytes]]) -> None:
        for name, packet in packets:
            try:
                self._connection.write(packet)
            except OSError as e:
                logger.error("Write of %s packet failed: %s", name, e)
                raise WriteError(name, e) from e

    def __enter__(self) -> NewforSession:
        self.connect()
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.disconnect()

    def __repr__(self) -> str:
        info = self._connection.info
        return (
            f"NewforSession({info.host}:{info.port}, page={self._page}, "
            f"variant={self._variant.name}, state={self._state.value})"
        )


def connect(
    host: str = DEFAULT_HOST,
    port: int = DEFAULT_PORT,
    page: str | PageNumber = DEFAULT_PAGE,
    variant: str | ProtocolVariant = DEFAULT_VARIANT,
    timeout: float | None = None,
) -> NewforSession:
    """Open a session to a receiver.

    Raises:
        ConnectError: If the receiver cannot be reached.
    """
    session = NewforSession(host, port, page=page, variant=variant, timeout=timeout)
    session.connect()
    return session
