from typing import Protocol, List, Optional
from core import DaemonInfo, Doc, Issue, Project, ProjectConfig, PullRequest


class DaemonPort(Protocol):
    def check_connection(self) -> bool:
        ...

    def list_projects(self) -> List[Project]:
        ...

    def list_issues(self, project_path: str) -> List[Issue]:
        ...

    def list_prs(self, project_path: str) -> List[PullRequest]:
        ...

    def list_docs(self, project_path: str) -> List[Doc]:
        ...

    def get_config(self, project_path: str) -> ProjectConfig:
        ...

    def get_daemon_info(self) -> DaemonInfo:
        ...

    def set_project_favorite(self, project_path: str, is_favorite: bool) -> None:
        ...

    def set_project_archived(self, project_path: str, is_archived: bool) -> None:
        ...

    def untrack_project(self, project_path: str) -> None:
        ...

    def create_issue(self, project_path: str, title: str, description: str, priority: int) -> str:
        ...

    def update_issue(
        self, project_path: str, issue_id: str, title: str, description: str, priority: int, status: str
    ) -> None:
        ...

    def delete_issue(self, project_path: str, issue_id: str) -> None:
        ...

    def create_pr(
        self,
        project_path: str,
        title: str,
        description: str,
        source_branch: str,
        target_branch: str,
        priority: int = 0,
    ) -> str:
        ...

    def update_pr(
        self,
        project_path: str,
        pr_id: str,
        title: str,
        description: str,
        source_branch: str,
        target_branch: str,
        status: str,
        priority: int = 0,
    ) -> None:
        ...

    def create_doc(self, project_path: str, title: str, content: str, slug: Optional[str] = None) -> str:
        ...

    def restart_daemon(self) -> None:
        ...

    def shutdown_daemon(self) -> None:
        ...
