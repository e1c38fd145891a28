"""Screen kinds and the parameters each one carries."""

from dataclasses import dataclass
from enum import Enum
from typing import NamedTuple, Tuple, Union


class Screen(Enum):
    # (id, sidebar section, is form)
    PROJECTS = ("projects", "projects", False)
    ISSUES = ("issues", "issues", False)
    ISSUE_DETAIL = ("issue-detail", "issues", False)
    ISSUE_CREATE = ("issue-create", "issues", True)
    ISSUE_EDIT = ("issue-edit", "issues", True)
    PRS = ("prs", "prs", False)
    PR_DETAIL = ("pr-detail", "prs", False)
    PR_CREATE = ("pr-create", "prs", True)
    PR_EDIT = ("pr-edit", "prs", True)
    DOCS = ("docs", "docs", False)
    DOC_DETAIL = ("doc-detail", "docs", False)
    DOC_CREATE = ("doc-create", "docs", True)
    CONFIG = ("config", "config", False)

    @property
    def section(self) -> str:
        return self.value[1]

    @property
    def is_form(self) -> bool:
        return self.value[2]

    @property
    def title(self) -> str:
        return TITLES[self]


TITLES = {
    Screen.PROJECTS: "Projects",
    Screen.ISSUES: "Issues",
    Screen.ISSUE_DETAIL: "Issue",
    Screen.ISSUE_CREATE: "New Issue",
    Screen.ISSUE_EDIT: "Edit Issue",
    Screen.PRS: "Pull Requests",
    Screen.PR_DETAIL: "Pull Request",
    Screen.PR_CREATE: "New Pull Request",
    Screen.PR_EDIT: "Edit Pull Request",
    Screen.DOCS: "Docs",
    Screen.DOC_DETAIL: "Doc",
    Screen.DOC_CREATE: "New Doc",
    Screen.CONFIG: "Config",
}

# Sidebar sections in display order; the number is the shortcut key.
SECTIONS = (
    ("1", "projects", "Projects", Screen.PROJECTS),
    ("2", "issues", "Issues", Screen.ISSUES),
    ("3", "prs", "PRs", Screen.PRS),
    ("4", "docs", "Docs", Screen.DOCS),
    ("5", "config", "Config", Screen.CONFIG),
)

# Per-screen sidebar actions: (action id, label, shortcut key).
LOCAL_ACTIONS = {
    Screen.ISSUES: (("new_issue", "New Issue", "n"), ("delete_issue", "Delete Issue", "d")),
    Screen.ISSUE_DETAIL: (("edit_issue", "Edit Issue", "e"), ("delete_issue", "Delete Issue", "d")),
    Screen.PRS: (("new_pr", "New PR", "n"),),
    Screen.PR_DETAIL: (("edit_pr", "Edit PR", "e"),),
    Screen.DOCS: (("new_doc", "New Doc", "n"),),
    Screen.CONFIG: (("restart_daemon", "Restart", "R"), ("shutdown_daemon", "Stop daemon", "X")),
}


def local_actions(screen: Screen) -> Tuple[Tuple[str, str, str], ...]:
    return LOCAL_ACTIONS.get(screen, ())


@dataclass(frozen=True)
class NoParams:
    pass


@dataclass(frozen=True)
class IssueParams:
    issue_id: str


@dataclass(frozen=True)
class PrParams:
    pr_id: str


@dataclass(frozen=True)
class DocParams:
    doc_slug: str


ScreenParams = Union[NoParams, IssueParams, PrParams, DocParams]

DEFAULT_PARAMS: ScreenParams = NoParams()


class NavigationEntry(NamedTuple):
    screen: Screen
    params: ScreenParams


__all__ = [
    "Screen",
    "SECTIONS",
    "LOCAL_ACTIONS",
    "local_actions",
    "NoParams",
    "IssueParams",
    "PrParams",
    "DocParams",
    "ScreenParams",
    "DEFAULT_PARAMS",
    "NavigationEntry",
]
