from enum import Enum
from typing import Callable, Dict, Iterable, List

from .entities import Issue, Project, PullRequest


class SortDirection(Enum):
    ASC = ("asc", "↑")
    DESC = ("desc", "↓")

    @property
    def symbol(self) -> str:
        return self.value[1]

    def toggle(self) -> "SortDirection":
        return SortDirection.DESC if self is SortDirection.ASC else SortDirection.ASC

    @classmethod
    def from_string(cls, value: str) -> "SortDirection":
        token = (value or "").strip().lower()
        for direction in cls:
            if direction.value[0] == token:
                return direction
        return cls.ASC


class SortField(Enum):
    """Shared sort keys for issues and pull requests."""

    PRIORITY = ("priority", "Priority")
    DISPLAY_NUMBER = ("number", "Number")
    CREATED_AT = ("created", "Created")
    UPDATED_AT = ("updated", "Updated")
    STATUS = ("status", "Status")

    @property
    def label(self) -> str:
        return self.value[1]

    def next(self) -> "SortField":
        members = list(SortField)
        return members[(members.index(self) + 1) % len(members)]

    @classmethod
    def from_string(cls, value: str) -> "SortField":
        token = (value or "").strip().lower()
        for sort_field in cls:
            if token in (sort_field.value[0], sort_field.name.lower()):
                return sort_field
        return cls.PRIORITY


IssueSortField = SortField
PrSortField = SortField

_SORT_KEYS: Dict[SortField, Callable] = {
    SortField.PRIORITY: lambda item: item.priority,
    SortField.DISPLAY_NUMBER: lambda item: item.display_number,
    SortField.CREATED_AT: lambda item: item.created_at,
    SortField.UPDATED_AT: lambda item: item.updated_at,
    SortField.STATUS: lambda item: item.status,
}

CLOSED_ISSUE_STATES = frozenset({"closed"})
FINISHED_PR_STATES = frozenset({"merged", "closed"})


def _sorted(items: Iterable, sort_field: SortField, direction: SortDirection) -> List:
    return sorted(items, key=_SORT_KEYS[sort_field], reverse=direction is SortDirection.DESC)


def sorted_projects(projects: Iterable[Project]) -> List[Project]:
    """Favorites first, otherwise daemon order; archived projects are hidden."""
    visible = [p for p in projects if not p.is_archived]
    return sorted(visible, key=lambda p: not p.is_favorite)


def sorted_issues(
    issues: Iterable[Issue],
    sort_field: SortField = SortField.PRIORITY,
    direction: SortDirection = SortDirection.ASC,
    show_closed: bool = False,
) -> List[Issue]:
    visible = [i for i in issues if show_closed or i.status not in CLOSED_ISSUE_STATES]
    return _sorted(visible, sort_field, direction)


def sorted_prs(
    prs: Iterable[PullRequest],
    sort_field: SortField = SortField.PRIORITY,
    direction: SortDirection = SortDirection.ASC,
    show_merged: bool = False,
) -> List[PullRequest]:
    visible = [p for p in prs if show_merged or p.status not in FINISHED_PR_STATES]
    return _sorted(visible, sort_field, direction)
