"""Entities served by the centy daemon."""

from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, Dict, List, Mapping, Optional

_EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)


def parse_timestamp(value: Any) -> datetime:
    """Parse an RFC 3339 timestamp; anything unparseable sorts first."""
    if isinstance(value, datetime):
        return value
    text = str(value or "").strip()
    if not text:
        return _EPOCH
    if text.endswith("Z"):
        text = text[:-1] + "+00:00"
    try:
        parsed = datetime.fromisoformat(text)
    except ValueError:
        return _EPOCH
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed


def _optional_timestamp(value: Any) -> Optional[datetime]:
    if not value:
        return None
    return parse_timestamp(value)


def _str_map(value: Any) -> Dict[str, str]:
    if not isinstance(value, Mapping):
        return {}
    return {str(k): str(v) for k, v in value.items()}


@dataclass
class Project:
    path: str
    name: str
    project_title: Optional[str] = None
    user_title: Optional[str] = None
    is_favorite: bool = False
    is_archived: bool = False
    initialized: bool = True
    issue_count: int = 0
    doc_count: int = 0
    pr_count: int = 0

    @property
    def display_name(self) -> str:
        return self.user_title or self.project_title or self.name

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "Project":
        path = str(data.get("path", ""))
        return cls(
            path=path,
            name=str(data.get("name") or path.rstrip("/").split("/")[-1]),
            project_title=data.get("project_title") or None,
            user_title=data.get("user_title") or None,
            is_favorite=bool(data.get("is_favorite", False)),
            is_archived=bool(data.get("is_archived", False)),
            initialized=bool(data.get("initialized", True)),
            issue_count=int(data.get("issue_count", 0) or 0),
            doc_count=int(data.get("doc_count", 0) or 0),
            pr_count=int(data.get("pr_count", 0) or 0),
        )


@dataclass
class Issue:
    id: str
    display_number: int
    title: str
    description: str = ""
    status: str = "open"
    priority: int = 0
    priority_label_override: Optional[str] = None
    created_at: datetime = _EPOCH
    updated_at: datetime = _EPOCH
    custom_fields: Dict[str, str] = field(default_factory=dict)

    @property
    def priority_label(self) -> str:
        if self.priority_label_override:
            return self.priority_label_override
        return {1: "high", 2: "med"}.get(self.priority, "low")

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "Issue":
        meta = data.get("metadata") or {}
        return cls(
            id=str(data.get("id", "")),
            display_number=int(data.get("display_number", 0) or 0),
            title=str(data.get("title", "")),
            description=str(data.get("description", "")),
            status=str(meta.get("status", "open")),
            priority=int(meta.get("priority", 0) or 0),
            priority_label_override=meta.get("priority_label") or None,
            created_at=parse_timestamp(meta.get("created_at")),
            updated_at=parse_timestamp(meta.get("updated_at")),
            custom_fields=_str_map(meta.get("custom_fields")),
        )


@dataclass
class PullRequest:
    id: str
    display_number: int
    title: str
    description: str = ""
    status: str = "open"
    priority: int = 0
    source_branch: str = ""
    target_branch: str = ""
    linked_issues: List[str] = field(default_factory=list)
    reviewers: List[str] = field(default_factory=list)
    created_at: datetime = _EPOCH
    updated_at: datetime = _EPOCH
    merged_at: Optional[datetime] = None
    closed_at: Optional[datetime] = None

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "PullRequest":
        meta = data.get("metadata") or {}
        return cls(
            id=str(data.get("id", "")),
            display_number=int(data.get("display_number", 0) or 0),
            title=str(data.get("title", "")),
            description=str(data.get("description", "")),
            status=str(meta.get("status", "open")),
            priority=int(meta.get("priority", 0) or 0),
            source_branch=str(meta.get("source_branch", "")),
            target_branch=str(meta.get("target_branch", "")),
            linked_issues=[str(x) for x in meta.get("linked_issues") or []],
            reviewers=[str(x) for x in meta.get("reviewers") or []],
            created_at=parse_timestamp(meta.get("created_at")),
            updated_at=parse_timestamp(meta.get("updated_at")),
            merged_at=_optional_timestamp(meta.get("merged_at")),
            closed_at=_optional_timestamp(meta.get("closed_at")),
        )


@dataclass
class Doc:
    slug: str
    title: str
    content: str = ""
    created_at: datetime = _EPOCH
    updated_at: datetime = _EPOCH

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "Doc":
        return cls(
            slug=str(data.get("slug", "")),
            title=str(data.get("title", "")),
            content=str(data.get("content", "")),
            created_at=parse_timestamp(data.get("created_at")),
            updated_at=parse_timestamp(data.get("updated_at")),
        )


@dataclass
class ProjectConfig:
    priority_levels: int = 3
    allowed_states: List[str] = field(default_factory=lambda: ["open", "in-progress", "closed"])
    default_state: str = "open"
    version: str = ""

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "ProjectConfig":
        default = cls()
        return cls(
            priority_levels=int(data.get("priority_levels", default.priority_levels) or default.priority_levels),
            allowed_states=[str(s) for s in data.get("allowed_states") or default.allowed_states],
            default_state=str(data.get("default_state") or default.default_state),
            version=str(data.get("version", "")),
        )


@dataclass
class DaemonInfo:
    version: str = ""
    uptime_seconds: int = 0
    project_count: int = 0

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "DaemonInfo":
        return cls(
            version=str(data.get("version", "")),
            uptime_seconds=int(data.get("uptime_seconds", 0) or 0),
            project_count=int(data.get("project_count", 0) or 0),
        )
