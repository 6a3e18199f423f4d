"""Subtitle injection for WST teletext receivers over the Newfor protocol."""

from .errors import ConnectError, EncodingOverflow, NewforError, SendError, WriteError
from .models import Color, PageNumber, Position, SubtitleStyle
from .session import NewforSession, SessionState, connect

__version__ = "0.1.0"
