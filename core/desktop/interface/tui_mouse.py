"""Mouse event handling helpers for CentyTUI."""

from prompt_toolkit.mouse_events import MouseButton, MouseEventType, MouseModifier

from core import ScreenPosition, Screen
from core.screens import SECTIONS, local_actions

LIST_SCREENS = (Screen.ISSUES, Screen.PRS, Screen.DOCS)
SCROLL_STEP = 3


def _position(mouse_event) -> ScreenPosition:
    return ScreenPosition(mouse_event.position.x, mouse_event.position.y)


def _is_left(mouse_event) -> bool:
    return getattr(mouse_event, "button", MouseButton.LEFT) == MouseButton.LEFT


def _handle_selection(tui, mouse_event):
    """Track text selection. Returns True when the event is fully consumed."""
    selection = tui.state.selection
    event_type = mouse_event.event_type
    pos = _position(mouse_event)
    if event_type == MouseEventType.MOUSE_DOWN and _is_left(mouse_event):
        if MouseModifier.SHIFT in mouse_event.modifiers and selection.anchor is not None:
            selection.update(pos)
            selection.is_selecting = True
            return True
        selection.start(pos)
        return False
    if event_type == MouseEventType.MOUSE_MOVE and _is_left(mouse_event) and selection.is_selecting:
        selection.update(pos)
        return True
    if event_type == MouseEventType.MOUSE_UP and _is_left(mouse_event):
        if selection.is_selecting:
            selection.update(pos)
            selection.finish()
        return True
    return False


def _handle_scroll(tui, mouse_event):
    state = tui.state
    if mouse_event.event_type == MouseEventType.SCROLL_DOWN:
        delta = 1
    elif mouse_event.event_type == MouseEventType.SCROLL_UP:
        delta = -1
    else:
        return False
    screen = state.screen
    if screen is Screen.PROJECTS:
        columns = tui.grid_columns()
        if delta > 0:
            state.move_selection_down_grid(columns)
        else:
            state.move_selection_up_grid(columns)
        tui.ensure_selection_visible()
    elif screen in LIST_SCREENS:
        if delta > 0:
            state.move_selection_down()
        else:
            state.move_selection_up()
        tui.ensure_selection_visible()
    elif not screen.is_form:
        if delta > 0:
            state.scroll_down(SCROLL_STEP)
        else:
            state.scroll_up(SCROLL_STEP)
    return True


def _click_index(tui, index: int) -> None:
    state = tui.state
    state.selected_index = index
    if state.clicks.click(index):
        tui.activate_selected()
    else:
        tui.ensure_selection_visible()


def _handle_sidebar_click(tui, x: int, y: int) -> bool:
    regions = tui.regions()
    row = regions.sidebar_item_at(x, y)
    if row is None:
        return regions.sidebar is not None and regions.sidebar.contains(x, y)
    if 0 <= row < len(SECTIONS):
        tui.switch_section(SECTIONS[row][3])
        return True
    action = regions.sidebar_action_at(x, y)
    actions = local_actions(tui.state.screen)
    if action is not None and action < len(actions):
        tui.run_local_action(actions[action][0])
    return True


def _handle_dialog_click(tui, x: int, y: int) -> None:
    state = tui.state
    regions = tui.regions()
    if state.confirm is None:
        if regions.dialog.contains(x, y):
            tui.resolve_dialog(True)
        return
    option = regions.dialog_option_at(x, y)
    if option is not None:
        state.confirm.confirmed = option
        tui.resolve_dialog(option)


def _handle_content_click(tui, x: int, y: int) -> bool:
    state = tui.state
    regions = tui.regions()
    screen = state.screen
    total = state.list_length()
    if screen is Screen.PROJECTS:
        index = regions.grid_index_at(x, y, state.scroll_offset, total)
    elif screen in LIST_SCREENS:
        index = regions.list_index_at(x, y, state.scroll_offset, total)
    elif screen.is_form:
        field = regions.form_field_at(x, y)
        if field is not None:
            state.form.focus(field)
        return True
    else:
        return False
    if index is not None:
        _click_index(tui, index)
    return True


def handle_body_mouse(tui, mouse_event):
    """Route mouse events for the CentyTUI screen."""
    if tui.state.has_dialog():
        # modal: only clicks on the dialog itself do anything
        if mouse_event.event_type == MouseEventType.MOUSE_DOWN and _is_left(mouse_event):
            _handle_dialog_click(tui, mouse_event.position.x, mouse_event.position.y)
            tui.force_render()
        return None
    if _handle_selection(tui, mouse_event):
        tui.force_render()
        return None
    if _handle_scroll(tui, mouse_event):
        tui.force_render()
        return None
    if mouse_event.event_type == MouseEventType.MOUSE_DOWN and _is_left(mouse_event):
        x, y = mouse_event.position.x, mouse_event.position.y
        if not _handle_sidebar_click(tui, x, y):
            _handle_content_click(tui, x, y)
        # the selection anchor moved even when nothing was hit
        tui.force_render()
        return None
    return NotImplemented


__all__ = ["handle_body_mouse"]
