from config import TuiConfig
from core import DEFAULT_PARAMS, DocParams, Issue, IssueParams, Project, PullRequest, Screen, ScreenPosition, SortDirection, SortField
from core.desktop.application.app_state import AppState
from core.desktop.application.dialogs import ConfirmDialog


class FakeClock:
    def __init__(self, now=0.0):
        self.now = now

    def __call__(self):
        return self.now


def _state(**kwargs):
    state = AppState(clock=FakeClock(), **kwargs)
    state.projects = [Project(path=f"/p/{n}", name=n) for n in "abcde"]
    state.issues = [Issue(id=f"i{n}", display_number=n, title=f"Issue {n}", priority=n) for n in range(1, 5)]
    state.prs = [PullRequest(id="pr1", display_number=1, title="PR")]
    return state


def test_config_seeds_preferences():
    state = AppState(TuiConfig(issue_sort_field="status", pr_sort_direction="desc", show_merged_prs=True))
    assert state.issue_sort_field is SortField.STATUS
    assert state.pr_sort_direction is SortDirection.DESC
    assert state.show_merged_prs is True
    exported = state.export_config(TuiConfig(theme="light"))
    assert exported.issue_sort_field == "status"
    assert exported.theme == "light"


def test_navigate_clears_text_selection():
    state = _state()
    state.selection.start(ScreenPosition(1, 1))
    state.selection.update(ScreenPosition(5, 1))
    state.navigate(Screen.ISSUES)
    assert not state.selection.has_selection()
    state.selection.start(ScreenPosition(1, 1))
    state.selection.update(ScreenPosition(5, 1))
    state.go_back()
    assert not state.selection.has_selection()


def test_go_back_to_projects_clears_project_and_restores_index():
    state = _state()
    state.selected_index = 3
    state.selected_project_path = "/p/d"
    state.navigate(Screen.ISSUES)
    assert state.selected_index == 0
    state.selected_index = 2
    state.navigate(Screen.ISSUE_DETAIL, IssueParams("i3"))
    assert state.go_back() is True
    assert state.selected_index == 2
    assert state.go_back() is True
    assert state.screen is Screen.PROJECTS
    assert state.selected_project_path is None
    assert state.selected_index == 3


def test_go_back_on_empty_history_is_noop():
    state = _state()
    assert state.go_back() is False
    assert state.screen is Screen.PROJECTS
    assert state.params == DEFAULT_PARAMS


def test_created_item_replaces_form_in_history():
    state = _state()
    state.selected_project_path = "/p/a"
    state.navigate(Screen.DOCS)
    state.navigate(Screen.DOC_CREATE)
    state.form.input_char("x")
    state.navigate_to_created_item(Screen.DOC_DETAIL, DocParams("intro"))
    assert state.screen is Screen.DOC_DETAIL
    assert state.form.values == {}
    state.go_back()
    assert state.screen is Screen.DOCS


def test_switch_section_requires_project():
    state = _state()
    state.switch_section(Screen.ISSUES)
    assert state.screen is Screen.PROJECTS
    state.selected_project_path = "/p/a"
    state.switch_section(Screen.PRS)
    assert state.screen is Screen.PRS
    state.switch_section(Screen.PROJECTS)
    assert state.screen is Screen.PROJECTS
    assert state.selected_project_path == "/p/a"


def test_back_from_projects_section_keeps_project():
    state = _state()
    state.selected_project_path = "/p/a"
    state.navigate(Screen.ISSUES)
    state.switch_section(Screen.PROJECTS)
    assert state.go_back() is True
    assert state.screen is Screen.ISSUES
    assert state.selected_project_path == "/p/a"
    assert state.go_back() is True
    assert state.screen is Screen.PROJECTS
    assert state.selected_project_path is None


def test_forget_project_drops_history():
    state = _state()
    state.selected_project_path = "/p/a"
    state.navigate(Screen.ISSUES)
    state.navigate(Screen.ISSUE_DETAIL, IssueParams("i1"))
    state.forget_project()
    assert state.selected_project_path is None
    assert state.issues == []
    assert state.screen is Screen.PROJECTS
    assert state.go_back() is False


def test_grid_moves_use_visible_projects():
    state = _state()
    state.move_selection_right(3)
    state.move_selection_down_grid(3)
    assert state.selected_index == 4
    state.move_selection_right(3)
    assert state.selected_index == 4  # last item
    state.move_selection_up_grid(3)
    state.move_selection_left(3)
    assert state.selected_index == 0


def test_list_moves_clamp_to_visible_issues():
    state = _state()
    state.navigate(Screen.ISSUES)
    for _ in range(10):
        state.move_selection_down()
    assert state.selected_index == 3
    assert state.selected_issue().display_number == 4


def test_sort_changes_reset_selection():
    state = _state()
    state.navigate(Screen.ISSUES)
    state.selected_index = 2
    state.scroll_offset = 1
    state.cycle_issue_sort_field()
    assert state.issue_sort_field is SortField.DISPLAY_NUMBER
    assert (state.selected_index, state.scroll_offset) == (0, 0)
    state.selected_index = 1
    state.toggle_issue_sort_direction()
    assert state.selected_index == 0
    assert state.visible_issues()[0].display_number == 4


def test_current_entity_lookups_follow_params():
    state = _state()
    state.navigate(Screen.ISSUE_DETAIL, IssueParams("i2"))
    assert state.current_issue().display_number == 2
    assert state.current_pr() is None
    state.navigate(Screen.ISSUE_DETAIL, IssueParams("missing"))
    assert state.current_issue() is None


def test_status_message_expires():
    clock = FakeClock()
    state = AppState(clock=clock)
    state.set_status_message("Copied 3 chars", ttl=2)
    assert state.current_status_message() == "Copied 3 chars"
    clock.now = 2.5
    assert state.current_status_message() == ""


def test_errors_are_queued_and_shown():
    state = AppState(clock=FakeClock())
    state.push_error("List issues: daemon unavailable")
    assert state.latest_error() == "List issues: daemon unavailable"
    assert state.current_status_message() == "List issues: daemon unavailable"


def test_error_dialog_queue_dismisses_oldest_first():
    state = AppState(clock=FakeClock())
    assert state.has_dialog() is False
    state.push_error("first")
    state.push_error("second")
    assert state.has_dialog() is True
    assert state.current_error() == "first"
    state.dismiss_error()
    assert state.current_error() == "second"
    state.dismiss_error()
    assert state.has_dialog() is False
    assert list(state.errors) == ["first", "second"]


def test_confirm_dialog_open_and_close():
    state = _state()
    state.open_confirm(ConfirmDialog("untrack", "Untrack", "Untrack a?", target="/p/a"))
    assert state.has_dialog() is True
    assert state.confirm.confirmed is False
    state.confirm.toggle()
    dialog = state.close_confirm()
    assert dialog.confirmed is True
    assert dialog.target == "/p/a"
    assert state.confirm is None
    assert state.has_dialog() is False


def test_double_ctrl_c_quits_only_within_window():
    clock = FakeClock()
    state = AppState(clock=clock)
    assert state.register_ctrl_c() is False
    clock.now = 0.6
    assert state.register_ctrl_c() is False
    clock.now = 0.9
    assert state.register_ctrl_c() is True
