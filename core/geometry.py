"""Screen coordinates and range ordering."""

from dataclasses import dataclass
from typing import Tuple


@dataclass(frozen=True)
class ScreenPosition:
    """A terminal cell, addressed as (column, row)."""

    column: int
    row: int

    def row_major(self) -> Tuple[int, int]:
        return (self.row, self.column)

    def __lt__(self, other: "ScreenPosition") -> bool:
        return self.row_major() < other.row_major()

    def __le__(self, other: "ScreenPosition") -> bool:
        return self.row_major() <= other.row_major()


def normalize_range(a: ScreenPosition, b: ScreenPosition) -> Tuple[ScreenPosition, ScreenPosition]:
    """Order two positions top-left first, whatever direction the drag went."""
    if a.row < b.row or (a.row == b.row and a.column <= b.column):
        return a, b
    return b, a


__all__ = ["ScreenPosition", "normalize_range"]
