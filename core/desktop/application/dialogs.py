"""Modal confirmation dialog shown before destructive daemon calls."""

from dataclasses import dataclass


@dataclass
class ConfirmDialog:
    action: str
    title: str
    message: str
    target: str = ""
    confirm_label: str = "Delete"
    # Cancel is highlighted until the user moves to the confirm option.
    confirmed: bool = False

    def toggle(self) -> None:
        self.confirmed = not self.confirmed


__all__ = ["ConfirmDialog"]
