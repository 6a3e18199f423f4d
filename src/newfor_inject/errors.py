"""Exceptions and warnings raised by the session client and encoder."""

from __future__ import annotations


class NewforError(Exception):
    """Base class for session errors."""


class ConnectError(NewforError, ConnectionError):
    """The TCP connection to the receiver could not be opened."""


class WriteError(NewforError):
    """A packet write or flush failed part-way through an operation.

    The remaining packets of that operation are not sent. The session
    stays connected, so the caller may simply retry.
    """

    def __init__(self, packet: str, cause: BaseException | None = None) -> None:
        self.packet = packet
        self.cause = cause
        message = f"Failed to write {packet} packet"
        if cause is not None:
            message += f": {cause}"
        super().__init__(message)


SendError = WriteError


class SessionStateError(NewforError):
    """The operation is not valid in the session's current state."""


class EncodingOverflow(UserWarning):
    """Row content was longer than 40 bytes and has been truncated."""
