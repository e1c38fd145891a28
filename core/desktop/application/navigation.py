"""Screen history: where to return to on Back."""

from typing import List, Optional

from core.screens import DEFAULT_PARAMS, NavigationEntry, Screen, ScreenParams


class NavigationStack:
    """Current screen plus the entries it was reached from.

    ``navigate`` records where you came from; ``go_back`` pops exactly one
    entry.  There is no redo.
    """

    def __init__(self, screen: Screen = Screen.PROJECTS, params: Optional[ScreenParams] = None) -> None:
        self.current = NavigationEntry(screen, params if params is not None else DEFAULT_PARAMS)
        self.history: List[NavigationEntry] = []

    @property
    def screen(self) -> Screen:
        return self.current.screen

    @property
    def params(self) -> ScreenParams:
        return self.current.params

    def __len__(self) -> int:
        return len(self.history)

    def navigate(self, screen: Screen, params: Optional[ScreenParams] = None) -> None:
        self.history.append(self.current)
        self.current = NavigationEntry(screen, params if params is not None else DEFAULT_PARAMS)

    def go_back(self) -> bool:
        """Restore the previous entry; False (and no change) when history is empty."""
        if not self.history:
            return False
        self.current = self.history.pop()
        return True

    def peek(self) -> Optional[NavigationEntry]:
        return self.history[-1] if self.history else None


__all__ = ["NavigationStack"]
