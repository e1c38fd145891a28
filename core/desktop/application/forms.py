"""Working buffers for the create/edit screens."""

from typing import Dict, Optional, Tuple

from core.entities import Issue, PullRequest
from core.screens import Screen

# (field name, label, kind) where kind is "text" or "digit"
FormField = Tuple[str, str, str]

FORM_FIELDS: Dict[Screen, Tuple[FormField, ...]] = {
    Screen.ISSUE_CREATE: (
        ("title", "Title", "text"),
        ("description", "Description", "text"),
        ("priority", "Priority", "digit"),
    ),
    Screen.ISSUE_EDIT: (
        ("title", "Title", "text"),
        ("description", "Description", "text"),
        ("priority", "Priority", "digit"),
        ("status", "Status", "text"),
    ),
    Screen.PR_CREATE: (
        ("title", "Title", "text"),
        ("description", "Description", "text"),
        ("source_branch", "Source branch", "text"),
        ("target_branch", "Target branch", "text"),
        ("priority", "Priority", "digit"),
    ),
    Screen.PR_EDIT: (
        ("title", "Title", "text"),
        ("description", "Description", "text"),
        ("source_branch", "Source branch", "text"),
        ("target_branch", "Target branch", "text"),
        ("priority", "Priority", "digit"),
        ("status", "Status", "text"),
    ),
    Screen.DOC_CREATE: (
        ("title", "Title", "text"),
        ("content", "Content", "text"),
        ("slug", "Slug", "text"),
    ),
}


class FormState:
    def __init__(self) -> None:
        self.screen: Optional[Screen] = None
        self.active_field: int = 0
        self.values: Dict[str, str] = {}

    def fields(self, screen: Optional[Screen] = None) -> Tuple[FormField, ...]:
        return FORM_FIELDS.get(screen or self.screen, ())

    def field_count(self, screen: Optional[Screen] = None) -> int:
        return max(1, len(self.fields(screen)))

    def open(self, screen: Screen) -> None:
        """Bind the form to a screen without touching prefilled values."""
        self.screen = screen
        self.active_field = 0

    def value(self, name: str) -> str:
        return self.values.get(name, "")

    def priority(self) -> int:
        raw = self.value("priority")
        return int(raw) if raw.isdigit() else 0

    def _active(self) -> Optional[FormField]:
        fields = self.fields()
        if 0 <= self.active_field < len(fields):
            return fields[self.active_field]
        return None

    def next_field(self) -> None:
        self.active_field = (self.active_field + 1) % self.field_count()

    def prev_field(self) -> None:
        if self.active_field == 0:
            self.active_field = self.field_count() - 1
        else:
            self.active_field -= 1

    def focus(self, index: int) -> None:
        if 0 <= index < len(self.fields()):
            self.active_field = index

    def input_char(self, ch: str) -> None:
        active = self._active()
        if active is None or not ch:
            return
        name, _, kind = active
        if kind == "digit":
            if ch.isdigit():
                self.values[name] = ch
            return
        self.values[name] = self.value(name) + ch

    def backspace(self) -> None:
        active = self._active()
        if active is None:
            return
        name, _, kind = active
        if kind == "digit":
            return
        self.values[name] = self.value(name)[:-1]

    def clear(self) -> None:
        self.active_field = 0
        self.values = {}

    def load_issue(self, issue: Issue) -> None:
        self.values = {
            "title": issue.title,
            "description": issue.description,
            "priority": str(issue.priority),
            "status": issue.status,
        }

    def load_pr(self, pr: PullRequest) -> None:
        self.values = {
            "title": pr.title,
            "description": pr.description,
            "priority": str(pr.priority),
            "status": pr.status,
            "source_branch": pr.source_branch,
            "target_branch": pr.target_branch,
        }


__all__ = ["FORM_FIELDS", "FormState"]
