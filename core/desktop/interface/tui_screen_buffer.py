"""Snapshot of the characters painted in the last frame, used for copy."""

from typing import Dict, Iterable, Optional, Tuple

from core.geometry import ScreenPosition, normalize_range


class FrameSnapshotBuffer:
    """Sparse ``(column, row) -> char`` map, valid only for the frame that filled it.

    Writes outside the current bounds are dropped silently; the buffer is an
    optical cache, not a store of record.
    """

    def __init__(self, width: int = 0, height: int = 0) -> None:
        self.width = width
        self.height = height
        self._cells: Dict[Tuple[int, int], str] = {}

    def __len__(self) -> int:
        return len(self._cells)

    def resize(self, width: int, height: int) -> None:
        self.width = max(0, width)
        self.height = max(0, height)

    def clear(self) -> None:
        self._cells.clear()

    def set(self, column: int, row: int, ch: str) -> None:
        if 0 <= column < self.width and 0 <= row < self.height:
            self._cells[(column, row)] = ch

    def get(self, column: int, row: int) -> Optional[str]:
        return self._cells.get((column, row))

    def _char_at(self, column: int, row: int) -> str:
        # Unpainted cells count as spaces so columns stay aligned; the trailing
        # half of a wide glyph is painted as "" and contributes nothing.
        ch = self._cells.get((column, row))
        return " " if ch is None else ch

    def rebuild(self, width: int, height: int, cells: Iterable[Tuple[int, int, str]]) -> None:
        """Start a new frame: resize, drop the old frame, record every painted cell."""
        self.resize(width, height)
        self.clear()
        for column, row, ch in cells:
            self.set(column, row, ch)

    def extract_text(self, start: ScreenPosition, end: ScreenPosition) -> str:
        start, end = normalize_range(start, end)
        last_column = max(0, self.width - 1)
        lines = []
        for row in range(start.row, end.row + 1):
            col_start = start.column if row == start.row else 0
            col_end = end.column if row == end.row else last_column
            raw = "".join(self._char_at(col, row) for col in range(col_start, col_end + 1))
            lines.append(raw.rstrip())
        return "\n".join(lines)


__all__ = ["FrameSnapshotBuffer"]
