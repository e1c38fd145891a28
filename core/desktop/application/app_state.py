"""Single owner of the TUI's mutable state.

Input handlers and the renderer read and mutate an ``AppState``; nothing
else keeps a copy.  The core pieces (navigation, selection, clicks, frame
snapshot, grid index arithmetic) are composed here and never talk to the
daemon or the terminal themselves.
"""

import time
from collections import deque
from typing import Deque, List, Optional, Tuple

from config import TuiConfig
from core import (
    DaemonInfo,
    Doc,
    DocParams,
    Issue,
    IssueParams,
    PrParams,
    Project,
    ProjectConfig,
    PullRequest,
    Screen,
    ScreenParams,
    SortDirection,
    SortField,
    sorted_issues,
    sorted_projects,
    sorted_prs,
)
from core.desktop.application.dialogs import ConfirmDialog
from core.desktop.application.forms import FormState
from core.desktop.application.navigation import NavigationStack
from core.desktop.interface.tui_clicks import ClickDisambiguator, TimeSource
from core.desktop.interface.tui_screen_buffer import FrameSnapshotBuffer
from core.desktop.interface.tui_selection import SelectionState
from util import grid

QUIT_CONFIRM_SECONDS = 0.5
MAX_ERRORS = 20


class AppState:
    def __init__(self, config: Optional[TuiConfig] = None, clock: Optional[TimeSource] = None) -> None:
        self.clock: TimeSource = clock or time.monotonic
        self.nav = NavigationStack()
        self.selection = SelectionState()
        self.clicks = ClickDisambiguator(clock=self.clock)
        self.snapshot = FrameSnapshotBuffer()
        self.form = FormState()

        self.selected_index = 0
        self.scroll_offset = 0
        self._index_history: List[Tuple[int, int]] = []

        self.projects: List[Project] = []
        self.issues: List[Issue] = []
        self.prs: List[PullRequest] = []
        self.docs: List[Doc] = []
        self.project_config: Optional[ProjectConfig] = None
        self.daemon_info: Optional[DaemonInfo] = None
        self.selected_project_path: Optional[str] = None
        self.daemon_connected = False

        self.issue_sort_field = SortField.PRIORITY
        self.issue_sort_direction = SortDirection.ASC
        self.pr_sort_field = SortField.PRIORITY
        self.pr_sort_direction = SortDirection.ASC
        self.show_closed_issues = False
        self.show_merged_prs = False

        self.errors: Deque[str] = deque(maxlen=MAX_ERRORS)
        self.pending_errors: Deque[str] = deque(maxlen=MAX_ERRORS)
        self.confirm: Optional[ConfirmDialog] = None
        self.status_message = ""
        self.status_expires = 0.0
        self.last_ctrl_c: Optional[float] = None

        if config is not None:
            self.apply_config(config)

    # ---- preferences -------------------------------------------------------

    def apply_config(self, config: TuiConfig) -> None:
        self.issue_sort_field = SortField.from_string(config.issue_sort_field)
        self.issue_sort_direction = SortDirection.from_string(config.issue_sort_direction)
        self.pr_sort_field = SortField.from_string(config.pr_sort_field)
        self.pr_sort_direction = SortDirection.from_string(config.pr_sort_direction)
        self.show_closed_issues = config.show_closed_issues
        self.show_merged_prs = config.show_merged_prs

    def export_config(self, base: Optional[TuiConfig] = None) -> TuiConfig:
        base = base or TuiConfig()
        return TuiConfig(
            issue_sort_field=self.issue_sort_field.value[0],
            issue_sort_direction=self.issue_sort_direction.value[0],
            pr_sort_field=self.pr_sort_field.value[0],
            pr_sort_direction=self.pr_sort_direction.value[0],
            show_closed_issues=self.show_closed_issues,
            show_merged_prs=self.show_merged_prs,
            daemon_address=base.daemon_address,
            theme=base.theme,
        )

    # ---- navigation --------------------------------------------------------

    @property
    def screen(self) -> Screen:
        return self.nav.screen

    @property
    def params(self) -> ScreenParams:
        return self.nav.params

    def navigate(self, screen: Screen, params: Optional[ScreenParams] = None) -> None:
        self.selection.clear()
        self.clicks.reset()
        self._index_history.append((self.selected_index, self.scroll_offset))
        self.nav.navigate(screen, params)
        if screen.is_form:
            self.form.open(screen)
        else:
            self.reset_selection()

    def go_back(self) -> bool:
        self.selection.clear()
        self.clicks.reset()
        if not self.nav.go_back():
            return False
        if self._index_history:
            self.selected_index, self.scroll_offset = self._index_history.pop()
        if self.screen is Screen.PROJECTS:
            self.selected_project_path = None
        self.clamp_selection()
        return True

    def navigate_to_created_item(self, screen: Screen, params: ScreenParams) -> None:
        """Replace the form on top of the history with the created entity's detail screen."""
        self.form.clear()
        if self.screen.is_form:
            self.go_back()
        self.navigate(screen, params)

    def forget_project(self) -> None:
        """Drop the open project and every history entry that points into it."""
        self.selected_project_path = None
        self.issues, self.prs, self.docs = [], [], []
        self.project_config = None
        self.nav = NavigationStack()
        self._index_history.clear()
        self.reset_selection()

    def switch_section(self, screen: Screen) -> None:
        if screen is self.screen:
            return
        if screen is not Screen.PROJECTS and not self.selected_project_path:
            return
        self.navigate(screen)

    # ---- selection and scrolling -------------------------------------------

    def reset_selection(self) -> None:
        self.selected_index = 0
        self.scroll_offset = 0

    def list_length(self, screen: Optional[Screen] = None) -> int:
        screen = screen or self.screen
        if screen is Screen.PROJECTS:
            return len(self.visible_projects())
        if screen is Screen.ISSUES:
            return len(self.visible_issues())
        if screen is Screen.PRS:
            return len(self.visible_prs())
        if screen is Screen.DOCS:
            return len(self.docs)
        return 0

    def clamp_selection(self) -> None:
        total = self.list_length()
        if total <= 0:
            self.selected_index = 0
        elif self.selected_index >= total:
            self.selected_index = total - 1

    def move_selection_down(self) -> None:
        self.selected_index = grid.move_down(self.selected_index, self.list_length())

    def move_selection_up(self) -> None:
        self.selected_index = grid.move_up(self.selected_index, self.list_length())

    def move_selection_left(self, columns: int) -> None:
        self.selected_index = grid.move_left(self.selected_index, columns)

    def move_selection_right(self, columns: int) -> None:
        self.selected_index = grid.move_right(self.selected_index, columns, self.list_length())

    def move_selection_up_grid(self, columns: int) -> None:
        self.selected_index = grid.move_up_grid(self.selected_index, columns)

    def move_selection_down_grid(self, columns: int) -> None:
        self.selected_index = grid.move_down_grid(self.selected_index, columns, self.list_length())

    def scroll_down(self, amount: int = 1) -> None:
        self.scroll_offset += amount

    def scroll_up(self, amount: int = 1) -> None:
        self.scroll_offset = max(0, self.scroll_offset - amount)

    # ---- sorted views --------------------------------------------------------

    def visible_projects(self) -> List[Project]:
        return sorted_projects(self.projects)

    def visible_issues(self) -> List[Issue]:
        return sorted_issues(self.issues, self.issue_sort_field, self.issue_sort_direction, self.show_closed_issues)

    def visible_prs(self) -> List[PullRequest]:
        return sorted_prs(self.prs, self.pr_sort_field, self.pr_sort_direction, self.show_merged_prs)

    def cycle_issue_sort_field(self) -> None:
        self.issue_sort_field = self.issue_sort_field.next()
        self.reset_selection()

    def toggle_issue_sort_direction(self) -> None:
        self.issue_sort_direction = self.issue_sort_direction.toggle()
        self.reset_selection()

    def cycle_pr_sort_field(self) -> None:
        self.pr_sort_field = self.pr_sort_field.next()
        self.reset_selection()

    def toggle_pr_sort_direction(self) -> None:
        self.pr_sort_direction = self.pr_sort_direction.toggle()
        self.reset_selection()

    def toggle_show_closed_issues(self) -> None:
        self.show_closed_issues = not self.show_closed_issues
        self.reset_selection()

    def toggle_show_merged_prs(self) -> None:
        self.show_merged_prs = not self.show_merged_prs
        self.reset_selection()

    # ---- lookups -------------------------------------------------------------

    def _pick(self, items: List):
        if 0 <= self.selected_index < len(items):
            return items[self.selected_index]
        return None

    def selected_project(self) -> Optional[Project]:
        return self._pick(self.visible_projects())

    def selected_issue(self) -> Optional[Issue]:
        return self._pick(self.visible_issues())

    def selected_pr(self) -> Optional[PullRequest]:
        return self._pick(self.visible_prs())

    def selected_doc(self) -> Optional[Doc]:
        return self._pick(self.docs)

    def current_project(self) -> Optional[Project]:
        for project in self.projects:
            if project.path == self.selected_project_path:
                return project
        return None

    def current_issue(self) -> Optional[Issue]:
        params = self.params
        if not isinstance(params, IssueParams):
            return None
        return next((i for i in self.issues if i.id == params.issue_id), None)

    def current_pr(self) -> Optional[PullRequest]:
        params = self.params
        if not isinstance(params, PrParams):
            return None
        return next((p for p in self.prs if p.id == params.pr_id), None)

    def current_doc(self) -> Optional[Doc]:
        params = self.params
        if not isinstance(params, DocParams):
            return None
        return next((d for d in self.docs if d.slug == params.doc_slug), None)

    # ---- messages ------------------------------------------------------------

    def set_status_message(self, message: str, ttl: float = 3.0) -> None:
        self.status_message = message
        self.status_expires = self.clock() + ttl

    def current_status_message(self) -> str:
        if self.status_message and self.clock() >= self.status_expires:
            self.status_message = ""
        return self.status_message

    def push_error(self, message: str) -> None:
        self.errors.append(message)
        self.pending_errors.append(message)
        self.set_status_message(message, ttl=5.0)

    def latest_error(self) -> Optional[str]:
        return self.errors[-1] if self.errors else None

    # ---- dialogs -------------------------------------------------------------

    def current_error(self) -> Optional[str]:
        """Oldest error the user has not dismissed yet."""
        return self.pending_errors[0] if self.pending_errors else None

    def dismiss_error(self) -> None:
        if self.pending_errors:
            self.pending_errors.popleft()

    def has_dialog(self) -> bool:
        return self.confirm is not None or bool(self.pending_errors)

    def open_confirm(self, dialog: ConfirmDialog) -> None:
        self.selection.clear()
        self.clicks.reset()
        self.confirm = dialog

    def close_confirm(self) -> Optional[ConfirmDialog]:
        dialog, self.confirm = self.confirm, None
        return dialog

    def register_ctrl_c(self) -> bool:
        """True when this Ctrl+C follows another one closely enough to quit."""
        now = self.clock()
        last = self.last_ctrl_c
        if last is not None and now - last < QUIT_CONFIRM_SECONDS:
            self.last_ctrl_c = None
            return True
        self.last_ctrl_c = now
        return False


__all__ = ["AppState", "QUIT_CONFIRM_SECONDS"]
