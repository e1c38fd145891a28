"""Flat-index arithmetic for card grids and selectable lists.

Every move is a pure function of ``(index, columns, total)`` that returns the
new index.  Boundary cases never raise: they leave the index where it is or
clamp it to the last valid item.
"""

from dataclasses import dataclass
from typing import Optional, Tuple

MIN_CARD_WIDTH = 18
CARD_HEIGHT = 4  # top border + 2 content rows + bottom border
CARD_SPACING_H = 1


def calculate_columns(usable_width: int, min_card_width: int = MIN_CARD_WIDTH, spacing: int = CARD_SPACING_H) -> int:
    """Number of card columns that fit into ``usable_width`` (always >= 1)."""
    if usable_width < min_card_width:
        return 1
    return max(1, (usable_width + spacing) // (min_card_width + spacing))


def move_left(index: int, columns: int) -> int:
    if columns <= 0:
        return index
    if index % columns > 0:
        return index - 1
    return index


def move_right(index: int, columns: int, total: int) -> int:
    if columns <= 0 or total <= 0:
        return index
    if index % columns < columns - 1 and index + 1 < total:
        return index + 1
    return index


def move_up_grid(index: int, columns: int) -> int:
    if columns <= 0:
        return index
    if index >= columns:
        return index - columns
    return index


def move_down_grid(index: int, columns: int, total: int) -> int:
    """Move one row down; a short last row is reached via its nearest item."""
    if columns <= 0 or total <= 0:
        return index
    if index + columns < total:
        return index + columns
    current_row = index // columns
    last_row = (total - 1) // columns
    if current_row >= last_row:
        return index
    target = last_row * columns + index % columns
    if target < total:
        return target
    return total - 1


def move_down(index: int, max_items: int) -> int:
    if max_items > 0 and index < max_items - 1:
        return index + 1
    return index


def move_up(index: int, max_items: Optional[int] = None) -> int:
    if max_items == 0:
        return index
    if index > 0:
        return index - 1
    return index


def scroll_to_show(index: int, offset: int, visible: int) -> int:
    """Return a list scroll offset that keeps ``index`` inside the viewport."""
    if visible <= 0:
        return offset
    if index < offset:
        return index
    if index >= offset + visible:
        return index - visible + 1
    return offset


@dataclass
class GridLayout:
    """Card geometry inside the grid's inner area (borders excluded)."""

    columns: int
    card_width: int
    card_height: int = CARD_HEIGHT
    spacing: int = CARD_SPACING_H

    @classmethod
    def for_width(cls, usable_width: int) -> "GridLayout":
        columns = calculate_columns(usable_width)
        total_spacing = (columns - 1) * CARD_SPACING_H
        card_width = max(MIN_CARD_WIDTH, (max(0, usable_width - total_spacing)) // columns)
        return cls(columns=columns, card_width=card_width)

    def cell_of(self, index: int) -> Tuple[int, int]:
        """(row, column) of a flat index."""
        return index // self.columns, index % self.columns

    def card_origin(self, index: int) -> Tuple[int, int]:
        """(x, y) of the card's top-left corner, relative to the inner area."""
        row, col = self.cell_of(index)
        return col * (self.card_width + self.spacing), row * self.card_height

    def index_at(self, rel_x: int, rel_y: int, total: int) -> Optional[int]:
        """Flat index of the card under a point, or None when nothing is there."""
        if rel_x < 0 or rel_y < 0 or total <= 0:
            return None
        col = rel_x // (self.card_width + self.spacing)
        if col >= self.columns:
            return None
        row = rel_y // self.card_height
        index = row * self.columns + col
        if index < total:
            return index
        return None

    def rows_for(self, total: int) -> int:
        return (total + self.columns - 1) // self.columns

    def scroll_to_show(self, index: int, offset: int, visible_height: int) -> int:
        """Return a line scroll offset that keeps the card at ``index`` fully visible."""
        top = (index // self.columns) * self.card_height
        if top < offset:
            return top
        if visible_height > 0 and top + self.card_height > offset + visible_height:
            return max(0, top + self.card_height - visible_height)
        return offset


__all__ = [
    "MIN_CARD_WIDTH",
    "CARD_HEIGHT",
    "CARD_SPACING_H",
    "calculate_columns",
    "move_left",
    "move_right",
    "move_up_grid",
    "move_down_grid",
    "move_down",
    "move_up",
    "scroll_to_show",
    "GridLayout",
]
