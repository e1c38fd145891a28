"""JSON-over-HTTP client for the centy daemon."""

import logging
import random
import time
from typing import Any, Dict, List, Optional

import requests

from core import DaemonInfo, Doc, Issue, Project, ProjectConfig, PullRequest

DEFAULT_ADDRESS = "http://127.0.0.1:50051"

logger = logging.getLogger("centy_tui.daemon")


class DaemonError(RuntimeError):
    pass


class DaemonUnavailableError(DaemonError):
    pass


class DaemonRequestError(DaemonError):
    pass


class DaemonClient:
    """Calls ``POST {address}/rpc/<Method>`` with a JSON body and returns the JSON reply.

    Network failures and 5xx replies are retried with exponential backoff;
    anything else that is not a success raises immediately.
    """

    def __init__(
        self,
        address: str = DEFAULT_ADDRESS,
        session: Optional[requests.Session] = None,
        timeout: int = 10,
        max_attempts: int = 3,
    ) -> None:
        if "://" not in address:
            address = f"http://{address}"
        self.address = address.rstrip("/")
        self.session = session or requests.Session()
        self.timeout = timeout
        self.max_attempts = max_attempts

    def call(self, method: str, payload: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
        url = f"{self.address}/rpc/{method}"
        attempt = 0
        delay = 0.25
        while True:
            attempt += 1
            try:
                response = self.session.post(url, json=payload or {}, timeout=self.timeout)
            except requests.RequestException as exc:
                if attempt >= self.max_attempts:
                    logger.warning("daemon %s unreachable after %s attempts: %s", method, attempt, exc)
                    raise DaemonUnavailableError(f"Daemon unreachable at {self.address}: {exc}") from exc
                self._sleep(delay)
                delay *= 2
                continue
            if response.status_code >= 500 and attempt < self.max_attempts:
                logger.debug("daemon %s returned %s, retrying", method, response.status_code)
                self._sleep(delay)
                delay *= 2
                continue
            if response.status_code >= 400:
                raise DaemonRequestError(f"{method} failed: HTTP {response.status_code} {response.text}")
            try:
                data = response.json()
            except ValueError as exc:
                raise DaemonRequestError(f"{method} returned invalid JSON") from exc
            if not isinstance(data, dict):
                raise DaemonRequestError(f"{method} returned unexpected payload")
            if data.get("error") or data.get("success") is False:
                raise DaemonRequestError(f"{method} failed: {data.get('error') or 'unknown error'}")
            return data

    def _sleep(self, base_delay: float) -> None:
        time.sleep(base_delay + random.uniform(0, base_delay))

    # ---- queries ----------------------------------------------------------

    def check_connection(self) -> bool:
        try:
            self.call("GetDaemonInfo")
        except DaemonError:
            return False
        return True

    def list_projects(self) -> List[Project]:
        data = self.call(
            "ListProjects",
            {"include_stale": False, "include_uninitialized": False, "include_archived": False},
        )
        return [Project.from_dict(item) for item in data.get("projects") or []]

    def list_issues(self, project_path: str) -> List[Issue]:
        data = self.call("ListIssues", {"project_path": project_path})
        return [Issue.from_dict(item) for item in data.get("issues") or []]

    def list_prs(self, project_path: str) -> List[PullRequest]:
        data = self.call("ListPrs", {"project_path": project_path})
        return [PullRequest.from_dict(item) for item in data.get("prs") or []]

    def list_docs(self, project_path: str) -> List[Doc]:
        data = self.call("ListDocs", {"project_path": project_path})
        return [Doc.from_dict(item) for item in data.get("docs") or []]

    def get_config(self, project_path: str) -> ProjectConfig:
        data = self.call("GetConfig", {"project_path": project_path})
        return ProjectConfig.from_dict(data.get("config") or data)

    def get_daemon_info(self) -> DaemonInfo:
        return DaemonInfo.from_dict(self.call("GetDaemonInfo"))

    # ---- project mutations ------------------------------------------------

    def set_project_favorite(self, project_path: str, is_favorite: bool) -> None:
        self.call("SetProjectFavorite", {"project_path": project_path, "is_favorite": is_favorite})

    def set_project_archived(self, project_path: str, is_archived: bool) -> None:
        self.call("SetProjectArchived", {"project_path": project_path, "is_archived": is_archived})

    def untrack_project(self, project_path: str) -> None:
        self.call("UntrackProject", {"project_path": project_path})

    # ---- issues / prs / docs ----------------------------------------------

    def create_issue(self, project_path: str, title: str, description: str, priority: int) -> str:
        data = self.call(
            "CreateIssue",
            {
                "project_path": project_path,
                "title": title,
                "description": description,
                "priority": priority,
            },
        )
        return str(data.get("id", ""))

    def update_issue(
        self, project_path: str, issue_id: str, title: str, description: str, priority: int, status: str
    ) -> None:
        self.call(
            "UpdateIssue",
            {
                "project_path": project_path,
                "issue_id": issue_id,
                "title": title,
                "description": description,
                "priority": priority,
                "status": status,
            },
        )

    def delete_issue(self, project_path: str, issue_id: str) -> None:
        self.call("DeleteIssue", {"project_path": project_path, "issue_id": issue_id})

    def create_pr(
        self,
        project_path: str,
        title: str,
        description: str,
        source_branch: str,
        target_branch: str,
        priority: int = 0,
    ) -> str:
        data = self.call(
            "CreatePr",
            {
                "project_path": project_path,
                "title": title,
                "description": description,
                "source_branch": source_branch,
                "target_branch": target_branch,
                "priority": priority,
            },
        )
        return str(data.get("id", ""))

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
        self.call(
            "UpdatePr",
            {
                "project_path": project_path,
                "pr_id": pr_id,
                "title": title,
                "description": description,
                "source_branch": source_branch,
                "target_branch": target_branch,
                "status": status,
                "priority": priority,
            },
        )

    def create_doc(self, project_path: str, title: str, content: str, slug: Optional[str] = None) -> str:
        data = self.call(
            "CreateDoc",
            {"project_path": project_path, "title": title, "content": content, "slug": slug or ""},
        )
        return str(data.get("slug", ""))

    # ---- daemon lifecycle -------------------------------------------------

    def restart_daemon(self) -> None:
        self.call("Restart", {"delay_seconds": 0})

    def shutdown_daemon(self) -> None:
        self.call("Shutdown", {"delay_seconds": 0})


__all__ = [
    "DEFAULT_ADDRESS",
    "DaemonClient",
    "DaemonError",
    "DaemonUnavailableError",
    "DaemonRequestError",
]
