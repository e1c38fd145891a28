from core import DEFAULT_PARAMS, IssueParams, NavigationEntry, PrParams, Screen
from core.desktop.application.navigation import NavigationStack


def test_navigation_round_trip():
    nav = NavigationStack()
    nav.navigate(Screen.ISSUES)
    nav.navigate(Screen.ISSUE_DETAIL, IssueParams("abc"))
    assert nav.current == NavigationEntry(Screen.ISSUE_DETAIL, IssueParams("abc"))

    assert nav.go_back() is True
    assert nav.current == NavigationEntry(Screen.ISSUES, DEFAULT_PARAMS)
    assert nav.go_back() is True
    assert nav.current == NavigationEntry(Screen.PROJECTS, DEFAULT_PARAMS)
    assert nav.go_back() is False
    assert nav.screen is Screen.PROJECTS
    assert len(nav) == 0


def test_navigate_records_origin_not_destination():
    nav = NavigationStack(Screen.PRS)
    nav.navigate(Screen.PR_DETAIL, PrParams("p1"))
    assert nav.peek() == NavigationEntry(Screen.PRS, DEFAULT_PARAMS)
    assert nav.params == PrParams("p1")


def test_params_are_restored_exactly():
    nav = NavigationStack()
    nav.navigate(Screen.ISSUE_DETAIL, IssueParams("one"))
    nav.navigate(Screen.ISSUE_EDIT, IssueParams("one"))
    nav.go_back()
    assert nav.params == IssueParams("one")
    assert nav.screen is Screen.ISSUE_DETAIL


def test_popped_entries_are_gone():
    nav = NavigationStack()
    nav.navigate(Screen.DOCS)
    nav.go_back()
    nav.navigate(Screen.CONFIG)
    nav.go_back()
    assert nav.history == []
    assert nav.screen is Screen.PROJECTS
