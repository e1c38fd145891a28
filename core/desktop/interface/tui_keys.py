"""Key bindings for CentyTUI."""

from prompt_toolkit.filters import Condition
from prompt_toolkit.key_binding import KeyBindings
from prompt_toolkit.keys import Keys

from core import Screen
from core.screens import SECTIONS

LIST_SCREENS = (Screen.ISSUES, Screen.PRS, Screen.DOCS)
PAGE_STEP = 10


def _move(tui, direction: str) -> None:
    """Arrow/h-j-k-l movement: grid on Projects, rows on lists, scrolling elsewhere."""
    state = tui.state
    screen = state.screen
    if screen is Screen.PROJECTS:
        columns = tui.grid_columns()
        if direction == "left":
            state.move_selection_left(columns)
        elif direction == "right":
            state.move_selection_right(columns)
        elif direction == "up":
            state.move_selection_up_grid(columns)
        else:
            state.move_selection_down_grid(columns)
        tui.ensure_selection_visible()
    elif screen in LIST_SCREENS:
        if direction == "up":
            state.move_selection_up()
        elif direction == "down":
            state.move_selection_down()
        tui.ensure_selection_visible()
    elif direction == "up":
        state.scroll_up()
    elif direction == "down":
        state.scroll_down()
    tui.force_render()


def build_key_bindings(tui) -> KeyBindings:
    kb = KeyBindings()
    state = tui.state

    is_form = Condition(lambda: state.screen.is_form)
    dialog_open = Condition(lambda: state.has_dialog())
    form_active = is_form & ~dialog_open
    not_form = ~is_form & ~dialog_open
    has_selection = Condition(lambda: state.selection.has_selection())

    @kb.add("c-c", eager=True)
    def _(event):
        if state.selection.has_selection():
            tui.copy_selection()
            return
        if state.register_ctrl_c():
            tui.exit()
            return
        state.set_status_message("Press Ctrl+C again to quit", ttl=1.0)
        tui.force_render()

    @kb.add("q", filter=not_form)
    def _(event):
        tui.exit()

    @kb.add("y", filter=not_form & has_selection)
    def _(event):
        tui.copy_selection()

    @kb.add("escape", eager=True)
    def _(event):
        if state.has_dialog():
            tui.resolve_dialog(False)
            return
        if state.selection.active or state.selection.keyboard_mode:
            state.selection.clear()
        elif state.screen.is_form:
            tui.cancel_form()
        else:
            state.go_back()
        tui.force_render()

    @kb.add("backspace", filter=not_form)
    def _(event):
        state.go_back()
        tui.force_render()

    for keys, direction in (
        (("left", "h"), "left"),
        (("right", "l"), "right"),
        (("up", "k"), "up"),
        (("down", "j"), "down"),
    ):
        for key in keys:
            kb.add(key, filter=not_form)(lambda event, d=direction: _move(tui, d))

    for key, d_col, d_row in (("s-left", -1, 0), ("s-right", 1, 0), ("s-up", 0, -1), ("s-down", 0, 1)):
        def _shift_move(event, d_col=d_col, d_row=d_row):
            state.selection.move_keyboard_cursor(d_col, d_row, tui.get_terminal_width(), tui.get_terminal_height())
            tui.force_render()

        kb.add(key, filter=not_form)(_shift_move)

    @kb.add("pagedown", filter=not_form)
    def _(event):
        state.scroll_down(PAGE_STEP)
        tui.force_render()

    @kb.add("pageup", filter=not_form)
    def _(event):
        state.scroll_up(PAGE_STEP)
        tui.force_render()

    @kb.add("enter", filter=not_form)
    def _(event):
        tui.activate_selected()

    for key, _section, _label, screen in SECTIONS:
        kb.add(key, filter=not_form)(lambda event, s=screen: tui.switch_section(s))

    @kb.add("s", filter=not_form)
    def _(event):
        if state.screen is Screen.ISSUES:
            state.cycle_issue_sort_field()
        elif state.screen is Screen.PRS:
            state.cycle_pr_sort_field()
        else:
            return
        tui.persist_preferences()
        tui.force_render()

    @kb.add("S", filter=not_form)
    def _(event):
        if state.screen is Screen.ISSUES:
            state.toggle_issue_sort_direction()
        elif state.screen is Screen.PRS:
            state.toggle_pr_sort_direction()
        else:
            return
        tui.persist_preferences()
        tui.force_render()

    @kb.add("a", filter=not_form)
    def _(event):
        if state.screen is Screen.ISSUES:
            state.toggle_show_closed_issues()
        elif state.screen is Screen.PRS:
            state.toggle_show_merged_prs()
        elif state.screen is Screen.PROJECTS:
            tui.archive_project()
            return
        else:
            return
        tui.persist_preferences()
        tui.force_render()

    @kb.add("f", filter=not_form)
    def _(event):
        if state.screen is Screen.PROJECTS:
            tui.toggle_favorite()

    @kb.add("n", filter=not_form)
    def _(event):
        tui.open_create_form()

    @kb.add("e", filter=not_form)
    def _(event):
        tui.open_edit_form()

    @kb.add("r", filter=not_form)
    def _(event):
        tui.reload()

    @kb.add("x", filter=not_form)
    def _(event):
        if state.screen is Screen.PROJECTS:
            tui.request_untrack()

    @kb.add("d", filter=not_form)
    def _(event):
        if state.screen in (Screen.ISSUES, Screen.ISSUE_DETAIL):
            tui.request_delete_issue()

    @kb.add("R", filter=not_form)
    def _(event):
        if state.screen is Screen.CONFIG:
            tui.request_daemon_restart()

    @kb.add("X", filter=not_form)
    def _(event):
        if state.screen is Screen.CONFIG:
            tui.request_daemon_shutdown()

    # ---- dialogs --------------------------------------------------------

    @kb.add("enter", filter=dialog_open)
    def _(event):
        confirm = state.confirm
        tui.resolve_dialog(True if confirm is None else confirm.confirmed)

    @kb.add("y", filter=dialog_open)
    def _(event):
        if state.confirm is not None:
            tui.resolve_dialog(True)

    @kb.add("n", filter=dialog_open)
    def _(event):
        if state.confirm is not None:
            tui.resolve_dialog(False)

    for key in ("up", "down", "left", "right", "tab", "k", "j"):
        def _toggle(event):
            if state.confirm is not None:
                state.confirm.toggle()
                tui.force_render()

        kb.add(key, filter=dialog_open)(_toggle)

    # ---- forms ----------------------------------------------------------

    @kb.add("tab", filter=form_active)
    @kb.add("enter", filter=form_active)
    def _(event):
        state.form.next_field()
        tui.force_render()

    @kb.add("s-tab", filter=form_active)
    def _(event):
        state.form.prev_field()
        tui.force_render()

    @kb.add("c-s", filter=form_active)
    def _(event):
        tui.submit_form()

    @kb.add("backspace", filter=form_active)
    def _(event):
        state.form.backspace()
        tui.force_render()

    @kb.add(Keys.Any, filter=form_active)
    def _(event):
        data = event.data or ""
        if len(data) == 1 and data.isprintable():
            state.form.input_char(data)
            tui.force_render()

    return kb


__all__ = ["build_key_bindings"]
