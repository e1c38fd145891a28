#!/usr/bin/env python3
"""Unit tests for tui_app module - CentyTUI against an in-memory daemon."""

import pytest

from config import TuiConfig
from core import DaemonInfo, Doc, Issue, IssueParams, Project, ProjectConfig, PullRequest, Screen, ScreenPosition
from core.desktop.interface import tui_app
from core.desktop.interface.tui_app import CentyTUI
from infrastructure.daemon_client import DaemonRequestError, DaemonUnavailableError


class FakeDaemon:
    def __init__(self):
        self.projects = [
            Project(path="/src/alpha", name="alpha"),
            Project(path="/src/beta", name="beta"),
        ]
        self.issues = [Issue(id="i1", display_number=1, title="First", priority=2)]
        self.prs = [PullRequest(id="p1", display_number=1, title="Feature", source_branch="feat", target_branch="main")]
        self.docs = [Doc(slug="readme", title="Readme")]
        self.failures = {}
        self.calls = []
        self.connected = True

    def _maybe_fail(self, name):
        self.calls.append(name)
        exc = self.failures.get(name)
        if exc is not None:
            raise exc

    def check_connection(self):
        self.calls.append("check_connection")
        return self.connected

    def list_projects(self):
        self._maybe_fail("list_projects")
        return list(self.projects)

    def list_issues(self, path):
        self._maybe_fail("list_issues")
        return list(self.issues)

    def list_prs(self, path):
        self._maybe_fail("list_prs")
        return list(self.prs)

    def list_docs(self, path):
        self._maybe_fail("list_docs")
        return list(self.docs)

    def get_config(self, path):
        self._maybe_fail("get_config")
        return ProjectConfig(priority_levels=3)

    def get_daemon_info(self):
        self._maybe_fail("get_daemon_info")
        return DaemonInfo(version="1.2.3")

    def set_project_favorite(self, path, value):
        self._maybe_fail("set_project_favorite")
        for project in self.projects:
            if project.path == path:
                project.is_favorite = value

    def set_project_archived(self, path, value):
        self._maybe_fail("set_project_archived")
        self.archived = (path, value)
        for project in self.projects:
            if project.path == path:
                project.is_archived = value

    def create_issue(self, path, title, description, priority):
        self._maybe_fail("create_issue")
        issue = Issue(id="i-new", display_number=len(self.issues) + 1, title=title, description=description, priority=priority)
        self.issues.append(issue)
        return issue.id

    def update_issue(self, path, issue_id, title, description, priority, status):
        self._maybe_fail("update_issue")
        self.updated = (issue_id, title, description, priority, status)

    def create_pr(self, path, title, description, source_branch, target_branch, priority=0):
        self._maybe_fail("create_pr")
        self.created_pr = (title, source_branch, target_branch, priority)
        self.prs.append(PullRequest(id="p-new", display_number=2, title=title))
        return "p-new"

    def create_doc(self, path, title, content, slug=None):
        self._maybe_fail("create_doc")
        self.docs.append(Doc(slug=slug or "generated", title=title, content=content))
        return slug or "generated"

    def untrack_project(self, path):
        self._maybe_fail("untrack_project")
        self.projects = [p for p in self.projects if p.path != path]

    def delete_issue(self, path, issue_id):
        self._maybe_fail("delete_issue")
        self.issues = [i for i in self.issues if i.id != issue_id]

    def restart_daemon(self):
        self._maybe_fail("restart_daemon")

    def shutdown_daemon(self):
        self._maybe_fail("shutdown_daemon")


@pytest.fixture
def daemon():
    return FakeDaemon()


@pytest.fixture
def tui(daemon):
    app = CentyTUI(daemon, config=TuiConfig(), clock=lambda: 0.0, persist=False)
    app.get_terminal_width = lambda: 80
    app.get_terminal_height = lambda: 24
    assert app.load_projects()
    return app


def _type(tui, text):
    for ch in text:
        tui.state.form.input_char(ch)


class TestCentyTUIHelpers:
    def test_build_style(self):
        assert CentyTUI.build_style("light") is not None

    def test_theme_defaults_to_config(self, daemon):
        app = CentyTUI(daemon, config=TuiConfig(theme="light"), persist=False)
        assert app.theme_name == "light"
        assert CentyTUI(daemon, theme="dark", persist=False).theme_name == "dark"


class TestDaemonCalls:
    def test_load_projects_marks_connected(self, tui):
        assert tui.state.daemon_connected
        assert [p.name for p in tui.state.projects] == ["alpha", "beta"]

    def test_unavailable_daemon_becomes_status_error(self, tui, daemon):
        daemon.failures["list_projects"] = DaemonUnavailableError("connection refused")
        assert tui.load_projects() is False
        assert tui.state.daemon_connected is False
        assert "daemon unavailable" in tui.state.latest_error()

    def test_request_error_keeps_connection_flag(self, tui, daemon):
        daemon.failures["set_project_favorite"] = DaemonRequestError("denied")
        tui.toggle_favorite()
        assert tui.state.daemon_connected is True
        assert tui.state.latest_error() == "Favorite failed: denied"

    def test_reload_stops_when_daemon_unreachable(self, tui, daemon):
        daemon.connected = False
        daemon.calls.clear()
        tui.reload()
        assert daemon.calls == ["check_connection"]
        assert tui.state.daemon_connected is False
        assert tui.state.current_error() == "Reload: daemon unavailable"
        tui.resolve_dialog(True)
        assert tui.state.has_dialog() is False

    def test_reload_refreshes_projects(self, tui, daemon):
        daemon.projects.append(Project(path="/src/gamma", name="gamma"))
        tui.reload()
        assert [p.name for p in tui.state.projects] == ["alpha", "beta", "gamma"]


class TestActions:
    def test_open_project_loads_data_then_navigates(self, tui):
        tui.activate_selected()
        assert tui.state.screen is Screen.ISSUES
        assert tui.state.selected_project_path == "/src/alpha"
        assert [i.id for i in tui.state.issues] == ["i1"]

    def test_open_project_failure_stays_on_projects(self, tui, daemon):
        daemon.failures["list_prs"] = DaemonUnavailableError("down")
        tui.activate_selected()
        assert tui.state.screen is Screen.PROJECTS
        assert tui.state.selected_project_path is None

    def test_activate_issue_opens_detail_and_back_restores_list(self, tui):
        tui.activate_selected()
        tui.activate_selected()
        assert tui.state.screen is Screen.ISSUE_DETAIL
        assert tui.state.params == IssueParams("i1")
        tui.state.go_back()
        assert tui.state.screen is Screen.ISSUES

    def test_back_from_projects_section_keeps_open_project(self, tui):
        tui.activate_selected()
        tui.switch_section(Screen.PROJECTS)
        assert tui.state.screen is Screen.PROJECTS
        tui.state.go_back()
        assert tui.state.screen is Screen.ISSUES
        assert tui.state.selected_project_path == "/src/alpha"
        tui.open_create_form()
        assert tui.state.screen is Screen.ISSUE_CREATE

    def test_config_section_requires_loaded_config(self, tui, daemon):
        tui.activate_selected()
        daemon.failures["get_config"] = DaemonRequestError("boom")
        tui.switch_section(Screen.CONFIG)
        assert tui.state.screen is Screen.ISSUES
        del daemon.failures["get_config"]
        tui.switch_section(Screen.CONFIG)
        assert tui.state.screen is Screen.CONFIG
        assert tui.state.daemon_info.version == "1.2.3"

    def test_toggle_favorite_reloads_projects(self, tui, daemon):
        tui.state.selected_index = 1
        tui.toggle_favorite()
        assert daemon.projects[1].is_favorite
        assert tui.state.visible_projects()[0].name == "beta"

    def test_archive_project_hides_project(self, tui, daemon):
        tui.archive_project()
        assert daemon.archived == ("/src/alpha", True)
        assert [p.name for p in tui.state.visible_projects()] == ["beta"]
        assert tui.state.current_status_message() == "Archived alpha"

    def test_persist_disabled_skips_save(self, tui, monkeypatch):
        def fail(config):
            raise AssertionError("should not save")

        monkeypatch.setattr(tui_app, "save_tui_config", fail)
        tui.state.toggle_issue_sort_direction()
        tui.persist_preferences()
        assert tui.config.issue_sort_direction == "desc"

    def test_persist_writes_config(self, daemon, monkeypatch):
        saved = []
        monkeypatch.setattr(tui_app, "save_tui_config", saved.append)
        app = CentyTUI(daemon, config=TuiConfig(theme="light"))
        app.state.cycle_pr_sort_field()
        app.persist_preferences()
        assert saved[0].pr_sort_field == "number"
        assert saved[0].theme == "light"


class TestForms:
    def test_create_issue_replaces_form_with_detail(self, tui, daemon):
        tui.activate_selected()
        tui.open_create_form()
        assert tui.state.screen is Screen.ISSUE_CREATE
        _type(tui, "Broken build")
        tui.state.form.next_field()
        _type(tui, "CI fails")
        tui.state.form.next_field()
        _type(tui, "1")
        tui.submit_form()
        assert tui.state.screen is Screen.ISSUE_DETAIL
        assert tui.state.params == IssueParams("i-new")
        assert tui.state.current_issue().priority == 1
        assert tui.state.current_status_message() == "Issue created"
        tui.state.go_back()
        assert tui.state.screen is Screen.ISSUES

    def test_empty_title_is_rejected(self, tui, daemon):
        tui.activate_selected()
        tui.open_create_form()
        tui.submit_form()
        assert tui.state.screen is Screen.ISSUE_CREATE
        assert "create_issue" not in daemon.calls
        assert tui.state.current_status_message() == "Title is required"

    def test_failed_create_keeps_form(self, tui, daemon):
        daemon.failures["create_issue"] = DaemonRequestError("invalid")
        tui.activate_selected()
        tui.open_create_form()
        _type(tui, "x")
        tui.submit_form()
        assert tui.state.screen is Screen.ISSUE_CREATE
        assert tui.state.form.value("title") == "x"

    def test_edit_issue_returns_to_detail(self, tui, daemon):
        tui.activate_selected()
        tui.activate_selected()
        tui.open_edit_form()
        assert tui.state.screen is Screen.ISSUE_EDIT
        assert tui.state.form.value("title") == "First"
        _type(tui, "!")
        tui.submit_form()
        assert daemon.updated == ("i1", "First!", "", 2, "open")
        assert tui.state.screen is Screen.ISSUE_DETAIL

    def test_create_pr_passes_branches_and_priority(self, tui, daemon):
        tui.activate_selected()
        tui.switch_section(Screen.PRS)
        tui.open_create_form()
        assert tui.state.screen is Screen.PR_CREATE
        for value in ("Add API", "", "feature/api", "main", "2"):
            _type(tui, value)
            tui.state.form.next_field()
        tui.submit_form()
        assert daemon.created_pr == ("Add API", "feature/api", "main", 2)
        assert tui.state.screen is Screen.PR_DETAIL

    def test_create_doc_without_slug_uses_generated(self, tui):
        tui.activate_selected()
        tui.switch_section(Screen.DOCS)
        tui.open_create_form()
        _type(tui, "Guide")
        tui.submit_form()
        assert tui.state.screen is Screen.DOC_DETAIL
        assert tui.state.current_doc().slug == "generated"

    def test_cancel_form_goes_back(self, tui):
        tui.activate_selected()
        tui.open_create_form()
        _type(tui, "draft")
        tui.cancel_form()
        assert tui.state.screen is Screen.ISSUES
        assert tui.state.form.value("title") == ""

    def test_create_form_needs_project(self, tui):
        tui.open_create_form()
        assert tui.state.screen is Screen.PROJECTS


class TestBodyContent:
    def test_selected_cells_render_reversed(self, tui):
        tui.get_body_content()
        selection = tui.state.selection
        selection.start(ScreenPosition(2, 1))
        selection.update(ScreenPosition(6, 1))
        fragments = tui.get_body_content()
        reversed_text = "".join(text for style, text in fragments if "reverse" in style)
        assert reversed_text == "Centy"
        assert tui.state.snapshot.extract_text(ScreenPosition(2, 1), ScreenPosition(6, 1)) == "Centy"

    def test_resize_clears_selection(self, tui):
        tui.get_body_content()
        tui.state.selection.start(ScreenPosition(1, 1))
        tui.state.selection.update(ScreenPosition(5, 1))
        tui.get_terminal_width = lambda: 100
        tui.get_body_content()
        assert tui.state.selection.anchor is None

    def test_ensure_selection_visible_scrolls_list(self, tui, daemon):
        daemon.issues = [Issue(id=f"i{n}", display_number=n, title=f"t{n}") for n in range(40)]
        tui.activate_selected()
        tui.get_body_content()
        tui.state.selected_index = 30
        tui.ensure_selection_visible()
        visible = tui.regions().list_height
        assert tui.state.scroll_offset == 30 - visible + 1


class TestConfirmations:
    def test_untrack_asks_first_and_cancel_keeps_project(self, tui, daemon):
        tui.request_untrack()
        assert tui.state.confirm.target == "/src/alpha"
        assert tui.state.confirm.confirmed is False
        tui.resolve_dialog(False)
        assert tui.state.confirm is None
        assert "untrack_project" not in daemon.calls
        assert len(tui.state.projects) == 2

    def test_untrack_confirmed_reloads_projects(self, tui, daemon):
        tui.request_untrack()
        tui.state.confirm.toggle()
        tui.resolve_dialog(tui.state.confirm.confirmed)
        assert [p.name for p in tui.state.projects] == ["beta"]
        assert tui.state.current_status_message() == "Project untracked"

    def test_untracking_open_project_forgets_it(self, tui, daemon):
        tui.activate_selected()
        tui.switch_section(Screen.PROJECTS)
        tui.request_untrack()
        tui.resolve_dialog(True)
        assert tui.state.selected_project_path is None
        assert tui.state.go_back() is False
        assert tui.state.screen is Screen.PROJECTS

    def test_delete_issue_from_detail_returns_to_list(self, tui, daemon):
        tui.activate_selected()
        tui.activate_selected()
        tui.request_delete_issue()
        assert tui.state.confirm.action == "delete_issue"
        assert "#1" in tui.state.confirm.message
        tui.resolve_dialog(True)
        assert daemon.issues == []
        assert tui.state.screen is Screen.ISSUES
        assert tui.state.issues == []
        assert tui.state.current_status_message() == "Issue deleted"

    def test_delete_issue_ignored_outside_issue_screens(self, tui):
        tui.activate_selected()
        tui.switch_section(Screen.DOCS)
        tui.request_delete_issue()
        assert tui.state.confirm is None

    def test_failed_delete_shows_error_dialog(self, tui, daemon):
        daemon.failures["delete_issue"] = DaemonRequestError("locked")
        tui.activate_selected()
        tui.request_delete_issue()
        tui.resolve_dialog(True)
        assert tui.state.current_error() == "Delete issue failed: locked"
        assert len(tui.state.issues) == 1
        tui.resolve_dialog(False)
        assert tui.state.has_dialog() is False

    def test_daemon_restart_and_shutdown(self, tui, daemon):
        tui.request_daemon_restart()
        tui.resolve_dialog(True)
        assert "restart_daemon" in daemon.calls
        assert tui.state.daemon_connected is False
        tui.request_daemon_shutdown()
        assert tui.state.confirm.confirm_label == "Stop"
        tui.resolve_dialog(True)
        assert "shutdown_daemon" in daemon.calls
        assert tui.state.current_status_message() == "Daemon stopped"

    def test_local_actions_dispatch(self, tui):
        tui.activate_selected()
        tui.run_local_action("new_issue")
        assert tui.state.screen is Screen.ISSUE_CREATE
        tui.cancel_form()
        tui.run_local_action("delete_issue")
        assert tui.state.confirm.target == "i1"
        tui.resolve_dialog(False)
        tui.run_local_action("unknown")
        assert tui.state.screen is Screen.ISSUES

    def test_dialog_is_drawn_over_the_frame(self, tui):
        tui.request_untrack()
        frame = "".join(text for _, text in tui.get_body_content())
        assert "Untrack Project" in frame
        assert "▸ Cancel" in frame
        assert "  Untrack" in frame
