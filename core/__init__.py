from .entities import DaemonInfo, Doc, Issue, Project, ProjectConfig, PullRequest
from .geometry import ScreenPosition, normalize_range
from .screens import (
    DEFAULT_PARAMS,
    DocParams,
    IssueParams,
    NavigationEntry,
    NoParams,
    PrParams,
    Screen,
    ScreenParams,
)
from .sorting import (
    IssueSortField,
    PrSortField,
    SortDirection,
    SortField,
    sorted_issues,
    sorted_projects,
    sorted_prs,
)

__all__ = [
    # Entities
    "DaemonInfo",
    "Doc",
    "Issue",
    "Project",
    "ProjectConfig",
    "PullRequest",
    # Geometry
    "ScreenPosition",
    "normalize_range",
    # Screens
    "Screen",
    "ScreenParams",
    "NoParams",
    "IssueParams",
    "PrParams",
    "DocParams",
    "DEFAULT_PARAMS",
    "NavigationEntry",
    # Sorting
    "SortField",
    "IssueSortField",
    "PrSortField",
    "SortDirection",
    "sorted_projects",
    "sorted_issues",
    "sorted_prs",
]
