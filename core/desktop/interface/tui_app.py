"""Full-screen prompt_toolkit front end for the centy daemon."""

import logging
import os
from typing import Any, Callable, Optional, Tuple

from prompt_toolkit.application import Application
from prompt_toolkit.formatted_text import FormattedText
from prompt_toolkit.layout import Layout, Window
from prompt_toolkit.mouse_events import MouseEvent
from prompt_toolkit.styles import Style

from application.ports import DaemonPort
from config import TuiConfig, save_tui_config
from core import DocParams, IssueParams, PrParams, Screen, ScreenPosition
from core.desktop.application.app_state import AppState
from core.desktop.application.dialogs import ConfirmDialog
from core.desktop.interface.tui_clicks import TimeSource
from core.desktop.interface.tui_clipboard import ClipboardMixin
from core.desktop.interface.tui_keys import build_key_bindings
from core.desktop.interface.tui_layout import ScreenRegions
from core.desktop.interface.tui_models import InteractiveFormattedTextControl
from core.desktop.interface.tui_mouse import handle_body_mouse
from core.desktop.interface.tui_render import regions_for, render_frame
from core.desktop.interface.tui_themes import DEFAULT_THEME, build_style
from infrastructure.daemon_client import DaemonError, DaemonUnavailableError
from util import grid

logger = logging.getLogger("centy_tui.tui")

CREATE_SCREENS = {"issues": Screen.ISSUE_CREATE, "prs": Screen.PR_CREATE, "docs": Screen.DOC_CREATE}


class CentyTUI(ClipboardMixin):
    def __init__(
        self,
        daemon: DaemonPort,
        config: Optional[TuiConfig] = None,
        theme: Optional[str] = None,
        clock: Optional[TimeSource] = None,
        persist: bool = True,
    ):
        self.daemon = daemon
        self.config = config or TuiConfig()
        self.theme_name = theme or self.config.theme or DEFAULT_THEME
        self.persist = persist
        self.state = AppState(self.config, clock=clock)
        self.clipboard = self._build_clipboard()
        self._last_size: Optional[Tuple[int, int]] = None
        self._regions: Optional[ScreenRegions] = None

        self.style = self.build_style(self.theme_name)
        self.body_control = InteractiveFormattedTextControl(
            self.get_body_content,
            show_cursor=False,
            focusable=True,
            mouse_handler=self._handle_body_mouse,
        )
        self.main_window = Window(content=self.body_control, always_hide_cursor=True, wrap_lines=False)
        self.app = Application(
            layout=Layout(self.main_window),
            key_bindings=build_key_bindings(self),
            style=self.style,
            full_screen=True,
            mouse_support=True,
            clipboard=self.clipboard,
        )
        # Esc must not wait for the default 0.5s escape-sequence timeout.
        try:
            self.app.ttimeoutlen = max(0.0, float(os.getenv("CENTY_TUI_TTIMEOUTLEN", "0.05")))
        except ValueError:
            self.app.ttimeoutlen = 0.05

    @classmethod
    def build_style(cls, theme: str) -> Style:
        return build_style(theme)

    @staticmethod
    def get_terminal_width() -> int:
        """Get current terminal width, default to 100 if unavailable."""
        try:
            return os.get_terminal_size().columns
        except (AttributeError, ValueError, OSError):
            return 100

    @staticmethod
    def get_terminal_height() -> int:
        try:
            return os.get_terminal_size().lines
        except (AttributeError, ValueError, OSError):
            return 40

    def force_render(self) -> None:
        app = getattr(self, "app", None)
        if app:
            app.invalidate()

    def exit(self) -> None:
        if self.app.is_running:
            self.app.exit()

    # ---- frame ------------------------------------------------------------------

    def regions(self) -> ScreenRegions:
        if self._regions is None:
            self._regions = regions_for(self.state, self.get_terminal_width(), self.get_terminal_height())
        return self._regions

    def grid_columns(self) -> int:
        return self.regions().grid_layout().columns

    def get_body_content(self) -> FormattedText:
        state = self.state
        width, height = self.get_terminal_width(), self.get_terminal_height()
        if self._last_size is not None and self._last_size != (width, height):
            # positions from the old geometry point at different text now
            state.selection.clear()
        self._last_size = (width, height)
        self._regions = regions_for(state, width, height)
        canvas = render_frame(state, width, height, self._regions)
        highlight: Optional[Callable[[int, int], bool]] = None
        if state.selection.active:
            state.snapshot.rebuild(width, height, canvas.painted())
            selection = state.selection
            highlight = lambda x, y: selection.contains(ScreenPosition(x, y))  # noqa: E731
        return FormattedText(canvas.to_fragments(highlight))

    def _handle_body_mouse(self, mouse_event: MouseEvent):
        return handle_body_mouse(self, mouse_event)

    def ensure_selection_visible(self) -> None:
        state = self.state
        regions = self.regions()
        if state.screen is Screen.PROJECTS:
            state.scroll_offset = regions.grid_layout().scroll_to_show(
                state.selected_index, state.scroll_offset, regions.grid_height
            )
        else:
            state.scroll_offset = grid.scroll_to_show(state.selected_index, state.scroll_offset, regions.list_height)

    # ---- daemon calls -------------------------------------------------------------

    def _remote(self, label: str, func: Callable[..., Any], *args: Any) -> Tuple[bool, Any]:
        """Run a daemon call; failures become a status-bar error instead of an exception."""
        try:
            result = func(*args)
        except DaemonUnavailableError as exc:
            logger.warning("%s failed: %s", label, exc)
            self.state.daemon_connected = False
            self.state.push_error(f"{label}: daemon unavailable")
            return False, None
        except DaemonError as exc:
            logger.warning("%s failed: %s", label, exc)
            self.state.push_error(f"{label} failed: {exc}")
            return False, None
        self.state.daemon_connected = True
        return True, result

    def load_projects(self) -> bool:
        ok, projects = self._remote("List projects", self.daemon.list_projects)
        if ok:
            self.state.projects = projects
            self.state.clamp_selection()
        return ok

    def _load_project_data(self, project_path: str) -> bool:
        ok, issues = self._remote("List issues", self.daemon.list_issues, project_path)
        if not ok:
            return False
        ok, prs = self._remote("List pull requests", self.daemon.list_prs, project_path)
        if not ok:
            return False
        ok, docs = self._remote("List docs", self.daemon.list_docs, project_path)
        if not ok:
            return False
        self.state.issues, self.state.prs, self.state.docs = issues, prs, docs
        return True

    def _load_config_view(self) -> bool:
        path = self.state.selected_project_path
        if not path:
            return False
        ok, config = self._remote("Load config", self.daemon.get_config, path)
        if not ok:
            return False
        self.state.project_config = config
        ok, info = self._remote("Daemon info", self.daemon.get_daemon_info)
        if ok:
            self.state.daemon_info = info
        return True

    def reload(self) -> None:
        state = self.state
        if not self.daemon.check_connection():
            state.daemon_connected = False
            state.push_error("Reload: daemon unavailable")
            self.force_render()
            return
        if state.selected_project_path:
            self._load_project_data(state.selected_project_path)
            if state.screen is Screen.CONFIG:
                self._load_config_view()
        self.load_projects()
        state.clamp_selection()
        self.force_render()

    # ---- actions ------------------------------------------------------------------

    def open_project(self, project) -> None:
        if not self._load_project_data(project.path):
            self.force_render()
            return
        self.state.selected_project_path = project.path
        self.state.navigate(Screen.ISSUES)
        self.force_render()

    def activate_selected(self) -> None:
        state = self.state
        screen = state.screen
        if screen is Screen.PROJECTS:
            project = state.selected_project()
            if project is not None:
                self.open_project(project)
                return
        elif screen is Screen.ISSUES:
            issue = state.selected_issue()
            if issue is not None:
                state.navigate(Screen.ISSUE_DETAIL, IssueParams(issue.id))
        elif screen is Screen.PRS:
            pr = state.selected_pr()
            if pr is not None:
                state.navigate(Screen.PR_DETAIL, PrParams(pr.id))
        elif screen is Screen.DOCS:
            doc = state.selected_doc()
            if doc is not None:
                state.navigate(Screen.DOC_DETAIL, DocParams(doc.slug))
        self.force_render()

    def switch_section(self, screen: Screen) -> None:
        if screen is Screen.CONFIG and self.state.screen is not Screen.CONFIG:
            if not self._load_config_view():
                self.force_render()
                return
        self.state.switch_section(screen)
        self.force_render()

    def toggle_favorite(self) -> None:
        project = self.state.selected_project()
        if project is None:
            return
        ok, _ = self._remote("Favorite", self.daemon.set_project_favorite, project.path, not project.is_favorite)
        if ok:
            self.load_projects()
        self.force_render()

    def archive_project(self) -> None:
        project = self.state.selected_project()
        if project is None:
            return
        ok, _ = self._remote("Archive", self.daemon.set_project_archived, project.path, True)
        if ok:
            self.load_projects()
            self.state.set_status_message(f"Archived {project.display_name}")
        self.force_render()

    def persist_preferences(self) -> None:
        self.config = self.state.export_config(self.config)
        if not self.persist:
            return
        try:
            save_tui_config(self.config)
        except OSError as exc:
            logger.warning("could not save preferences: %s", exc)

    # ---- confirmations --------------------------------------------------------------

    def request_untrack(self) -> None:
        project = self.state.selected_project()
        if project is None:
            return
        self.state.open_confirm(
            ConfirmDialog(
                "untrack",
                "Untrack Project",
                f"Stop tracking {project.display_name}? Files on disk are kept.",
                target=project.path,
                confirm_label="Untrack",
            )
        )
        self.force_render()

    def request_delete_issue(self) -> None:
        state = self.state
        issue = state.current_issue() if state.screen is Screen.ISSUE_DETAIL else state.selected_issue()
        if issue is None or state.screen not in (Screen.ISSUES, Screen.ISSUE_DETAIL):
            return
        state.open_confirm(
            ConfirmDialog(
                "delete_issue",
                "Confirm Delete",
                f"Delete issue #{issue.display_number} \"{issue.title}\"? This cannot be undone.",
                target=issue.id,
            )
        )
        self.force_render()

    def request_daemon_restart(self) -> None:
        self.state.open_confirm(
            ConfirmDialog("restart_daemon", "Restart Daemon", "Restart the centy daemon?", confirm_label="Restart")
        )
        self.force_render()

    def request_daemon_shutdown(self) -> None:
        self.state.open_confirm(
            ConfirmDialog("shutdown_daemon", "Stop Daemon", "Shut down the centy daemon?", confirm_label="Stop")
        )
        self.force_render()

    def resolve_dialog(self, accept: bool) -> None:
        """Close the front dialog; an accepted confirmation runs its action."""
        state = self.state
        if state.confirm is None:
            state.dismiss_error()
        else:
            dialog = state.close_confirm()
            if accept:
                self._run_confirmed(dialog)
        self.force_render()

    def _run_confirmed(self, dialog: ConfirmDialog) -> None:
        state = self.state
        if dialog.action == "untrack":
            ok, _ = self._remote("Untrack project", self.daemon.untrack_project, dialog.target)
            if ok:
                if state.selected_project_path == dialog.target:
                    state.forget_project()
                self.load_projects()
                state.set_status_message("Project untracked")
        elif dialog.action == "delete_issue":
            path = state.selected_project_path
            if not path:
                return
            ok, _ = self._remote("Delete issue", self.daemon.delete_issue, path, dialog.target)
            if ok:
                self._load_project_data(path)
                if state.screen is Screen.ISSUE_DETAIL:
                    state.go_back()
                state.clamp_selection()
                state.set_status_message("Issue deleted")
        elif dialog.action == "restart_daemon":
            ok, _ = self._remote("Restart daemon", self.daemon.restart_daemon)
            if ok:
                state.daemon_connected = False
                state.set_status_message("Daemon restarting; press r to reload")
        elif dialog.action == "shutdown_daemon":
            ok, _ = self._remote("Stop daemon", self.daemon.shutdown_daemon)
            if ok:
                state.daemon_connected = False
                state.set_status_message("Daemon stopped")

    def run_local_action(self, action: str) -> None:
        handlers = {
            "new_issue": self.open_create_form,
            "new_pr": self.open_create_form,
            "new_doc": self.open_create_form,
            "edit_issue": self.open_edit_form,
            "edit_pr": self.open_edit_form,
            "delete_issue": self.request_delete_issue,
            "restart_daemon": self.request_daemon_restart,
            "shutdown_daemon": self.request_daemon_shutdown,
        }
        handler = handlers.get(action)
        if handler is not None:
            handler()

    # ---- forms ----------------------------------------------------------------------

    def open_create_form(self) -> None:
        state = self.state
        target = CREATE_SCREENS.get(state.screen.section)
        if target is None or not state.selected_project_path:
            return
        state.form.clear()
        state.navigate(target)
        self.force_render()

    def open_edit_form(self) -> None:
        state = self.state
        screen = state.screen
        if screen in (Screen.ISSUES, Screen.ISSUE_DETAIL):
            issue = state.current_issue() if screen is Screen.ISSUE_DETAIL else state.selected_issue()
            if issue is None:
                return
            state.form.load_issue(issue)
            state.navigate(Screen.ISSUE_EDIT, IssueParams(issue.id))
        elif screen in (Screen.PRS, Screen.PR_DETAIL):
            pr = state.current_pr() if screen is Screen.PR_DETAIL else state.selected_pr()
            if pr is None:
                return
            state.form.load_pr(pr)
            state.navigate(Screen.PR_EDIT, PrParams(pr.id))
        else:
            return
        self.force_render()

    def cancel_form(self) -> None:
        self.state.form.clear()
        self.state.go_back()
        self.force_render()

    def submit_form(self) -> None:
        state = self.state
        form = state.form
        path = state.selected_project_path
        screen = state.screen
        if not path or not screen.is_form:
            return
        if not form.value("title").strip():
            state.set_status_message("Title is required")
            self.force_render()
            return
        title, description = form.value("title").strip(), form.value("description")
        if screen is Screen.ISSUE_CREATE:
            ok, issue_id = self._remote(
                "Create issue", self.daemon.create_issue, path, title, description, form.priority()
            )
            if ok and self._load_project_data(path):
                state.navigate_to_created_item(Screen.ISSUE_DETAIL, IssueParams(issue_id))
                state.set_status_message("Issue created")
        elif screen is Screen.ISSUE_EDIT:
            params = state.params
            ok, _ = self._remote(
                "Update issue",
                self.daemon.update_issue,
                path,
                params.issue_id,
                title,
                description,
                form.priority(),
                form.value("status"),
            )
            if ok:
                self._load_project_data(path)
                form.clear()
                state.go_back()
                state.set_status_message("Issue updated")
        elif screen is Screen.PR_CREATE:
            ok, pr_id = self._remote(
                "Create pull request",
                self.daemon.create_pr,
                path,
                title,
                description,
                form.value("source_branch"),
                form.value("target_branch"),
                form.priority(),
            )
            if ok and self._load_project_data(path):
                state.navigate_to_created_item(Screen.PR_DETAIL, PrParams(pr_id))
                state.set_status_message("Pull request created")
        elif screen is Screen.PR_EDIT:
            params = state.params
            ok, _ = self._remote(
                "Update pull request",
                self.daemon.update_pr,
                path,
                params.pr_id,
                title,
                description,
                form.value("source_branch"),
                form.value("target_branch"),
                form.value("status"),
                form.priority(),
            )
            if ok:
                self._load_project_data(path)
                form.clear()
                state.go_back()
                state.set_status_message("Pull request updated")
        elif screen is Screen.DOC_CREATE:
            ok, slug = self._remote(
                "Create doc", self.daemon.create_doc, path, title, form.value("content"), form.value("slug") or None
            )
            if ok and self._load_project_data(path):
                state.navigate_to_created_item(Screen.DOC_DETAIL, DocParams(slug))
                state.set_status_message("Doc created")
        self.force_render()

    def run(self):
        self.app.run()


def cmd_tui(args, daemon: DaemonPort, config: Optional[TuiConfig] = None) -> int:
    tui = CentyTUI(daemon, config=config, theme=getattr(args, "theme", None))
    if not tui.load_projects():
        logger.warning("starting without daemon connection")
    tui.run()
    return 0


__all__ = ["CentyTUI", "cmd_tui"]
