"""Text selection state: anchor, live cursor and mode flags."""

from dataclasses import dataclass
from typing import Optional, Tuple

from core.geometry import ScreenPosition, normalize_range


@dataclass
class SelectionState:
    anchor: Optional[ScreenPosition] = None
    cursor: Optional[ScreenPosition] = None
    is_selecting: bool = False  # mouse drag in progress
    keyboard_mode: bool = False
    keyboard_cursor: Optional[ScreenPosition] = None

    def start(self, pos: ScreenPosition) -> None:
        self.anchor = pos
        self.cursor = pos
        self.is_selecting = True

    def update(self, pos: ScreenPosition) -> None:
        self.cursor = pos

    def finish(self) -> None:
        self.is_selecting = False

    def clear(self) -> None:
        self.anchor = None
        self.cursor = None
        self.is_selecting = False
        self.keyboard_mode = False
        self.keyboard_cursor = None

    def get_range(self) -> Optional[Tuple[ScreenPosition, ScreenPosition]]:
        if self.anchor is None or self.cursor is None:
            return None
        return normalize_range(self.anchor, self.cursor)

    def contains(self, pos: ScreenPosition) -> bool:
        bounds = self.get_range()
        if bounds is None:
            return False
        start, end = bounds
        if pos.row < start.row or pos.row > end.row:
            return False
        if pos.row == start.row and pos.column < start.column:
            return False
        if pos.row == end.row and pos.column > end.column:
            return False
        return True

    def has_selection(self) -> bool:
        """A single point is not a selection."""
        bounds = self.get_range()
        if bounds is None:
            return False
        start, end = bounds
        return start != end

    @property
    def active(self) -> bool:
        """True while something needs highlighting: a real range or a drag."""
        return self.is_selecting or self.has_selection()

    def move_keyboard_cursor(self, d_col: int, d_row: int, width: int, height: int) -> None:
        """Shift+arrow selection; the first press anchors at the screen centre."""
        if self.keyboard_cursor is None:
            centre = ScreenPosition(width // 2, height // 2)
            self.keyboard_cursor = centre
            self.start(centre)
            self.is_selecting = False
        current = self.keyboard_cursor
        column = min(max(0, current.column + d_col), max(0, width - 1))
        row = min(max(0, current.row + d_row), max(0, height - 1))
        moved = ScreenPosition(column, row)
        self.keyboard_cursor = moved
        self.update(moved)
        self.keyboard_mode = True


__all__ = ["SelectionState"]
