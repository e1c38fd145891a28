"""Cell canvas the renderer paints into, one per frame."""

from typing import Callable, Dict, Iterator, List, Optional, Tuple

from wcwidth import wcwidth

Cell = Tuple[str, str]  # (style, char); char "" marks the right half of a wide glyph


def char_width(ch: str) -> int:
    w = wcwidth(ch)
    if w is None or w < 0:
        return 0
    return w


def display_width(text: str) -> int:
    """Return visual width of text accounting for wide/narrow characters."""
    return sum(char_width(ch) for ch in text)


def trim_display(text: str, width: int) -> str:
    """Trim text so visible width doesn't exceed ``width``; an ellipsis marks the cut."""
    if width <= 0:
        return ""
    if display_width(text) <= width:
        return text
    acc = []
    used = 0
    for ch in text:
        w = char_width(ch)
        if used + w > width - 1:
            break
        acc.append(ch)
        used += w
    return "".join(acc) + "…"


def pad_display(text: str, width: int) -> str:
    trimmed = trim_display(text, width)
    return trimmed + " " * max(0, width - display_width(trimmed))


def wrap_display(text: str, width: int) -> List[str]:
    """Word-wrap ``text`` to ``width`` columns, keeping explicit newlines."""
    if width <= 0:
        return []
    lines: List[str] = []
    for paragraph in (text or "").split("\n"):
        current = ""
        used = 0
        for word in paragraph.split(" "):
            w = display_width(word)
            sep = 1 if current else 0
            if current and used + sep + w > width:
                lines.append(current)
                current, used = "", 0
                sep = 0
            while w > width:
                # hard-split words longer than a line
                head = ""
                head_w = 0
                for ch in word:
                    cw = char_width(ch)
                    if head_w + cw > width:
                        break
                    head += ch
                    head_w += cw
                head = head or word[0]
                lines.append(head)
                word = word[len(head):]
                w = display_width(word)
            current = f"{current} {word}" if sep else word
            used += sep + w
        lines.append(current)
    return lines


class Canvas:
    """Sparse grid of painted cells; anything never painted stays a gap."""

    def __init__(self, width: int, height: int) -> None:
        self.width = max(0, width)
        self.height = max(0, height)
        self._cells: Dict[Tuple[int, int], Cell] = {}

    def _inside(self, x: int, y: int) -> bool:
        return 0 <= x < self.width and 0 <= y < self.height

    def get(self, x: int, y: int) -> Optional[Cell]:
        return self._cells.get((x, y))

    def put(self, x: int, y: int, text: str, style: str = "", max_width: Optional[int] = None) -> int:
        """Paint ``text`` starting at (x, y); returns the number of columns used."""
        limit = self.width - x if max_width is None else min(max_width, self.width - x)
        if limit <= 0 or not (0 <= y < self.height):
            return 0
        used = 0
        for ch in text:
            if ch == "\n":
                break
            w = char_width(ch)
            if w == 0:
                continue
            if used + w > limit:
                break
            if self._inside(x + used, y):
                self._cells[(x + used, y)] = (style, ch)
            if w == 2 and self._inside(x + used + 1, y):
                self._cells[(x + used + 1, y)] = (style, "")
            used += w
        return used

    def fill(self, x: int, y: int, width: int, height: int, ch: str = " ", style: str = "") -> None:
        for row in range(y, y + height):
            for col in range(x, x + width):
                if self._inside(col, row):
                    self._cells[(col, row)] = (style, ch)

    def hline(self, x: int, y: int, width: int, ch: str = "─", style: str = "") -> None:
        self.fill(x, y, width, 1, ch, style)

    def box(self, x: int, y: int, width: int, height: int, style: str = "class:border", title: str = "",
            title_style: str = "class:title") -> None:
        if width < 2 or height < 2:
            return
        right = x + width - 1
        bottom = y + height - 1
        self.hline(x + 1, y, width - 2, "─", style)
        self.hline(x + 1, bottom, width - 2, "─", style)
        for row in range(y + 1, bottom):
            self.put(x, row, "│", style)
            self.put(right, row, "│", style)
        self.put(x, y, "┌", style)
        self.put(right, y, "┐", style)
        self.put(x, bottom, "└", style)
        self.put(right, bottom, "┘", style)
        if title and width > 4:
            self.put(x + 2, y, f" {title} ", title_style, max_width=width - 4)

    def painted(self) -> Iterator[Tuple[int, int, str]]:
        """Every painted cell as ``(column, row, char)`` for the frame snapshot."""
        for (x, y), (_, ch) in self._cells.items():
            yield x, y, ch

    def to_fragments(self, highlight: Optional[Callable[[int, int], bool]] = None) -> List[Tuple[str, str]]:
        """prompt_toolkit fragments, one line per row; highlighted cells get reverse video."""
        fragments: List[Tuple[str, str]] = []
        for y in range(self.height):
            run_style: Optional[str] = None
            run_text: List[str] = []
            for x in range(self.width):
                style, ch = self._cells.get((x, y), ("", " "))
                if highlight is not None and highlight(x, y):
                    style = f"{style} reverse".strip()
                if style != run_style:
                    if run_text:
                        fragments.append((run_style or "", "".join(run_text)))
                    run_style, run_text = style, []
                run_text.append(ch)
            if run_text:
                fragments.append((run_style or "", "".join(run_text)))
            if y < self.height - 1:
                fragments.append(("", "\n"))
        return fragments


__all__ = ["Canvas", "char_width", "display_width", "trim_display", "pad_display", "wrap_display"]
