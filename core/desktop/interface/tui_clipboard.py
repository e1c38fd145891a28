"""Clipboard handling mixin for TUI."""

import logging
import subprocess
from typing import TYPE_CHECKING, Optional

from prompt_toolkit.clipboard import ClipboardData, InMemoryClipboard
from prompt_toolkit.clipboard.pyperclip import PyperclipClipboard

if TYPE_CHECKING:
    from prompt_toolkit.clipboard import Clipboard

    from core.desktop.application.app_state import AppState

logger = logging.getLogger("centy_tui.clipboard")

NATIVE_COPY_COMMANDS = (
    ["pbcopy"],
    ["wl-copy"],
    ["xclip", "-selection", "clipboard", "-in"],
    ["clip.exe"],
)


class ClipboardMixin:
    """Mixin providing selection copy for the TUI."""

    clipboard: Optional["Clipboard"]
    state: "AppState"

    def force_render(self) -> None:
        """Force render stub - implemented by main class."""
        raise NotImplementedError

    def _build_clipboard(self) -> "Clipboard":
        """Create clipboard instance with fallback."""
        try:
            return PyperclipClipboard()
        except Exception as exc:
            logger.debug("pyperclip clipboard unavailable: %s", exc)
        return InMemoryClipboard()

    def _copy_to_clipboard(self, text: str) -> bool:
        """Copy text to clipboard (best-effort)."""
        payload = str(text or "")
        if not payload:
            return False
        clipboard = getattr(self, "clipboard", None)
        if clipboard and not isinstance(clipboard, InMemoryClipboard):
            try:
                clipboard.set_data(ClipboardData(payload))
                return True
            except Exception as exc:
                logger.debug("clipboard set_data failed: %s", exc)
        for cmd in NATIVE_COPY_COMMANDS:
            try:
                result = subprocess.run(
                    cmd, input=payload, text=True, timeout=1, stdout=subprocess.DEVNULL, stderr=subprocess.DEVNULL
                )
            except (OSError, subprocess.SubprocessError):
                continue
            if result.returncode == 0:
                return True
        if clipboard:
            # app-local copy only
            clipboard.set_data(ClipboardData(payload))
        logger.warning("no system clipboard accepted %s chars", len(payload))
        return False

    def copy_selection(self) -> bool:
        """Copy the selected text from the last frame; False when nothing is selected."""
        selection = self.state.selection
        bounds = selection.get_range()
        if bounds is None or not selection.has_selection():
            return False
        text = self.state.snapshot.extract_text(*bounds)
        if self._copy_to_clipboard(text):
            self.state.set_status_message(f"Copied {len(text)} chars")
        else:
            self.state.set_status_message("Copy failed")
        selection.clear()
        self.force_render()
        return True


__all__ = ["ClipboardMixin"]
