"""Subtitle presentation: colors, vertical position, and the style value."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum, IntEnum


class Color(IntEnum):
    """WST alphanumeric colour control codes (before parity)."""

    RED = 0x01
    GREEN = 0x02
    YELLOW = 0x03
    BLUE = 0x04
    MAGENTA = 0x05
    CYAN = 0x06
    WHITE = 0x07

    @classmethod
    def from_name(cls, name: str) -> Color:
        """Look up a colour by case-insensitive name, e.g. ``"yellow"``."""
        try:
            return cls[name.strip().upper()]
        except KeyError:
            valid = [c.name.lower() for c in cls]
            raise ValueError(f"Unknown color '{name}'. Valid: {valid}") from None


class Position(Enum):
    """Vertical placement of the subtitle block on the page."""

    TOP = "top"
    MIDDLE = "middle"
    LOWER = "lower"

    @classmethod
    def from_name(cls, name: str) -> Position:
        try:
            return cls(name.strip().lower())
        except ValueError:
            valid = [p.value for p in cls]
            raise ValueError(f"Unknown position '{name}'. Valid: {valid}") from None


@dataclass(frozen=True)
class SubtitleStyle:
    """How a subtitle update is drawn. Passed explicitly with every send."""

    color: Color = Color.WHITE
    boxed: bool = True
    double_height: bool = False
    position: Position = Position.LOWER

    def to_dict(self) -> dict:
        return {
            "color": self.color.name.lower(),
            "boxed": self.boxed,
            "double_height": self.double_height,
            "position": self.position.value,
        }
