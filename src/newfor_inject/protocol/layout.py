"""Row layout: where on the 25-row teletext page each subtitle line goes.

Row 0 is the page header and row 1 is never written; display rows run
1-23. Double-height text occupies two rows, so lines are spaced by 2.
"""

from __future__ import annotations

from ..models.style import Position

FIRST_ROW = 1
LAST_ROW = 23
TOP_ROW = 2
CENTER_ROW = 12
MAX_LINES = 3


def compute_layout(
    line_count: int, position: Position, double_height: bool
) -> tuple[int, int]:
    """Return ``(start_row, spacing)`` for a block of subtitle lines.

    Args:
        line_count: Number of lines, 1-3.
        position: Vertical placement of the block.
        double_height: Whether lines are drawn double height.

    Raises:
        ValueError: If ``line_count`` is outside 1-3 or the block would
            leave the 1-23 display range.
    """
    if not 1 <= line_count <= MAX_LINES:
        raise ValueError(f"Line count must be 1-{MAX_LINES}, got {line_count}")

    spacing = 2 if double_height else 1
    total_height = line_count + (line_count - 1) * (spacing - 1)

    if position is Position.TOP:
        start_row = TOP_ROW
    elif position is Position.MIDDLE:
        start_row = CENTER_ROW - total_height // 2
    else:
        start_row = LAST_ROW - (line_count - 1) * spacing

    last_row = start_row + (line_count - 1) * spacing
    if start_row < FIRST_ROW or last_row > LAST_ROW:
        raise ValueError(
            f"{line_count} line(s) at {position.value} do not fit rows "
            f"{FIRST_ROW}-{LAST_ROW}"
        )
    return start_row, spacing


def row_numbers(
    line_count: int, position: Position, double_height: bool
) -> list[int]:
    """Row number for each line of the block, top to bottom."""
    start_row, spacing = compute_layout(line_count, position, double_height)
    return [start_row + i * spacing for i in range(line_count)]
