"""Data models for pages and subtitle styles."""

from .page import PageNumber
from .style import Color, Position, SubtitleStyle
