"""Single vs. double click classification for list rows and grid cards."""

import time
from dataclasses import dataclass
from typing import Callable, Optional

DOUBLE_CLICK_SECONDS = 0.4

TimeSource = Callable[[], float]


@dataclass
class ClickMemory:
    last_click_time: Optional[float] = None
    last_click_index: Optional[int] = None

    def reset(self) -> None:
        self.last_click_time = None
        self.last_click_index = None


class ClickDisambiguator:
    """Remembers the last click and decides whether the next one completes a double click.

    ``clock`` must be monotonic; tests pass a synthetic one.
    """

    def __init__(self, clock: Optional[TimeSource] = None, threshold: float = DOUBLE_CLICK_SECONDS) -> None:
        self.clock: TimeSource = clock or time.monotonic
        self.threshold = threshold
        self.memory = ClickMemory()

    def is_double_click(self, index: int, now: float) -> bool:
        memory = self.memory
        if memory.last_click_index is None or memory.last_click_time is None:
            return False
        return memory.last_click_index == index and (now - memory.last_click_time) < self.threshold

    def click(self, index: int, now: Optional[float] = None) -> bool:
        """Record a click on ``index``; True means "activate", False means "select"."""
        when = self.clock() if now is None else now
        if self.is_double_click(index, when):
            self.memory.reset()
            return True
        self.memory.last_click_time = when
        self.memory.last_click_index = index
        return False

    def reset(self) -> None:
        self.memory.reset()


__all__ = ["DOUBLE_CLICK_SECONDS", "ClickMemory", "ClickDisambiguator", "TimeSource"]
