"""Screen regions shared by the renderer and the mouse router."""

from dataclasses import dataclass
from typing import NamedTuple, Optional

from core.screens import SECTIONS
from util.grid import GridLayout

CONTEXT_BAR_HEIGHT = 3
SIDEBAR_WIDTH = 20
STATUS_BAR_HEIGHT = 1
FORM_FIELD_HEIGHT = 3  # label, value, spacer
GRID_HEADER_ROWS = 1
LIST_HEADER_ROWS = 2
# Sidebar rows: sections, a blank row, the "Actions" header, then local actions.
SIDEBAR_ACTIONS_HEADER = len(SECTIONS) + 1
SIDEBAR_ACTIONS_TOP = SIDEBAR_ACTIONS_HEADER + 1
DIALOG_WIDTH = 50
DIALOG_HEIGHT = 10
# Rows inside the dialog border.
DIALOG_CANCEL_ROW = 5
DIALOG_CONFIRM_ROW = 6
DIALOG_HINT_ROW = 7


class Rect(NamedTuple):
    x: int
    y: int
    width: int
    height: int

    @property
    def right(self) -> int:
        return self.x + self.width

    @property
    def bottom(self) -> int:
        return self.y + self.height

    def contains(self, x: int, y: int) -> bool:
        return self.x <= x < self.right and self.y <= y < self.bottom

    def inner(self) -> "Rect":
        """Area inside a one-cell border."""
        return Rect(self.x + 1, self.y + 1, max(0, self.width - 2), max(0, self.height - 2))


@dataclass
class ScreenRegions:
    width: int
    height: int
    context_bar: Rect
    sidebar: Optional[Rect]
    main: Rect
    status_bar: Rect

    @property
    def content(self) -> Rect:
        return self.main.inner()

    @property
    def usable_width(self) -> int:
        return self.content.width

    @property
    def grid_top(self) -> int:
        return self.content.y + GRID_HEADER_ROWS

    @property
    def grid_height(self) -> int:
        return max(0, self.content.height - GRID_HEADER_ROWS)

    @property
    def list_top(self) -> int:
        return self.content.y + LIST_HEADER_ROWS

    @property
    def list_height(self) -> int:
        return max(0, self.content.height - LIST_HEADER_ROWS)

    @property
    def form_top(self) -> int:
        return self.content.y

    def grid_layout(self) -> GridLayout:
        return GridLayout.for_width(self.usable_width)

    def sidebar_item_at(self, x: int, y: int) -> Optional[int]:
        if self.sidebar is None or not self.sidebar.inner().contains(x, y):
            return None
        return y - self.sidebar.inner().y

    def grid_index_at(self, x: int, y: int, scroll_offset: int, total: int) -> Optional[int]:
        content = self.content
        if not content.contains(x, y) or y < self.grid_top:
            return None
        layout = self.grid_layout()
        index = layout.index_at(x - content.x, y - self.grid_top + scroll_offset, total)
        if index is None:
            return None
        # Cards cut off by the viewport are not drawn, so they cannot be hit.
        top = layout.card_origin(index)[1] - scroll_offset
        if top < 0 or top + layout.card_height > self.grid_height:
            return None
        return index

    def list_index_at(self, x: int, y: int, scroll_offset: int, total: int) -> Optional[int]:
        if not self.content.contains(x, y) or y < self.list_top:
            return None
        index = scroll_offset + (y - self.list_top)
        if 0 <= index < total:
            return index
        return None

    def form_field_at(self, x: int, y: int) -> Optional[int]:
        if not self.content.contains(x, y) or y < self.form_top:
            return None
        return (y - self.form_top) // FORM_FIELD_HEIGHT

    def sidebar_action_at(self, x: int, y: int) -> Optional[int]:
        row = self.sidebar_item_at(x, y)
        if row is None or row < SIDEBAR_ACTIONS_TOP:
            return None
        return row - SIDEBAR_ACTIONS_TOP

    @property
    def dialog(self) -> Rect:
        width = min(DIALOG_WIDTH, self.width)
        height = min(DIALOG_HEIGHT, self.height)
        return Rect((self.width - width) // 2, (self.height - height) // 2, width, height)

    def dialog_option_at(self, x: int, y: int) -> Optional[bool]:
        """True for the confirm row, False for the cancel row, None elsewhere."""
        inner = self.dialog.inner()
        if not inner.contains(x, y):
            return None
        if y == inner.y + DIALOG_CANCEL_ROW:
            return False
        if y == inner.y + DIALOG_CONFIRM_ROW:
            return True
        return None


def compute_regions(width: int, height: int, has_sidebar: bool) -> ScreenRegions:
    width = max(0, width)
    height = max(0, height)
    body_top = CONTEXT_BAR_HEIGHT
    body_height = max(0, height - CONTEXT_BAR_HEIGHT - STATUS_BAR_HEIGHT)
    sidebar_width = SIDEBAR_WIDTH if has_sidebar else 0
    sidebar = Rect(0, body_top, sidebar_width, body_height) if has_sidebar else None
    return ScreenRegions(
        width=width,
        height=height,
        context_bar=Rect(0, 0, width, CONTEXT_BAR_HEIGHT),
        sidebar=sidebar,
        main=Rect(sidebar_width, body_top, max(0, width - sidebar_width), body_height),
        status_bar=Rect(0, max(0, height - STATUS_BAR_HEIGHT), width, STATUS_BAR_HEIGHT),
    )


__all__ = [
    "CONTEXT_BAR_HEIGHT",
    "SIDEBAR_WIDTH",
    "FORM_FIELD_HEIGHT",
    "SIDEBAR_ACTIONS_HEADER",
    "SIDEBAR_ACTIONS_TOP",
    "DIALOG_WIDTH",
    "DIALOG_HEIGHT",
    "DIALOG_CANCEL_ROW",
    "DIALOG_CONFIRM_ROW",
    "DIALOG_HINT_ROW",
    "Rect",
    "ScreenRegions",
    "compute_regions",
]
