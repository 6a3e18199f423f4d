"""Teletext page addresses."""

from __future__ import annotations

from dataclasses import dataclass
from typing import ClassVar

MAX_SUBTITLE_PAGE = 899
ILLEGAL_PAGE = 999


@dataclass(frozen=True)
class PageNumber:
    """A 3-digit teletext page: magazine digit plus a 2-digit page number.

    Subtitle pages run 000-899. Page 999 is the reserved illegal page the
    receiver treats as "no page" and is only used to end a session.
    """

    ILLEGAL: ClassVar[PageNumber]

    magazine: int
    tens: int
    units: int

    def __post_init__(self) -> None:
        for digit in self.digits:
            if not 0 <= digit <= 9:
                raise ValueError(f"Page digits must be 0-9, got {self.digits}")

    @property
    def digits(self) -> tuple[int, int, int]:
        return (self.magazine, self.tens, self.units)

    @property
    def value(self) -> int:
        return self.magazine * 100 + self.tens * 10 + self.units

    @classmethod
    def parse(cls, page: str | int | PageNumber) -> PageNumber:
        """Parse a subtitle page such as ``"888"`` or ``"88"`` (-> 088).

        Raises:
            ValueError: If the page is not 1-3 decimal digits, or falls
                outside the 000-899 subtitle range.
        """
        if isinstance(page, PageNumber):
            page_number = page
        else:
            text = str(page).strip()
            if not text.isdigit() or len(text) > 3:
                raise ValueError(f"Page must be 1-3 decimal digits, got {page!r}")
            text = text.zfill(3)
            page_number = cls(int(text[0]), int(text[1]), int(text[2]))

        if page_number.value > MAX_SUBTITLE_PAGE:
            raise ValueError(
                f"Page must be 000-{MAX_SUBTITLE_PAGE}, got {page_number}"
            )
        return page_number

    def __str__(self) -> str:
        return f"{self.magazine}{self.tens}{self.units}"


PageNumber.ILLEGAL = PageNumber(9, 9, 9)
