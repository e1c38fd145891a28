"""Rendering helpers: paint one frame of application state onto a Canvas."""

from typing import List, Optional, Tuple

from core import Issue, PullRequest, Screen
from core.desktop.application.app_state import AppState
from core.desktop.interface.tui_canvas import Canvas, display_width, pad_display, trim_display, wrap_display
from core.desktop.interface.tui_layout import (
    DIALOG_CANCEL_ROW,
    DIALOG_CONFIRM_ROW,
    DIALOG_HINT_ROW,
    FORM_FIELD_HEIGHT,
    SIDEBAR_ACTIONS_HEADER,
    SIDEBAR_ACTIONS_TOP,
    ScreenRegions,
    compute_regions,
)
from core.screens import SECTIONS, local_actions

VIEW_HINTS = {
    Screen.PROJECTS: "h/j/k/l:nav  Enter:select  f:fav  a:archive  x:untrack  r:reload",
    Screen.ISSUES: "j/k:nav  Enter:view  n:new  d:delete  s/S:sort  a:all  y:copy",
    Screen.ISSUE_DETAIL: "e:edit  d:delete  j/k:scroll  Esc:back",
    Screen.ISSUE_CREATE: "Tab:next  ^S:save  Esc:cancel",
    Screen.ISSUE_EDIT: "Tab:next  ^S:save  Esc:cancel",
    Screen.PRS: "j/k:nav  Enter:view  n:new  s/S:sort  a:all",
    Screen.PR_DETAIL: "e:edit  j/k:scroll  Esc:back",
    Screen.PR_CREATE: "Tab:next  ^S:save  Esc:cancel",
    Screen.PR_EDIT: "Tab:next  ^S:save  Esc:cancel",
    Screen.DOCS: "j/k:nav  Enter:view  n:new  Esc:back",
    Screen.DOC_DETAIL: "j/k:scroll  Esc:back",
    Screen.DOC_CREATE: "Tab:next  ^S:save  Esc:cancel",
    Screen.CONFIG: "j/k:scroll  R:restart  X:stop daemon  Esc:back",
}

QUIT_HINT = " ^C:quit "

_FINISHED = {"closed", "merged"}


def regions_for(state: AppState, width: int, height: int) -> ScreenRegions:
    return compute_regions(width, height, has_sidebar=bool(state.selected_project_path))


def _priority_style(label: str) -> str:
    if label in ("high", "med", "low"):
        return f"class:priority.{label}"
    return "class:text"


def _status_style(status: str) -> str:
    return "class:status.done" if status in _FINISHED else "class:status.open"


def _breadcrumb(state: AppState) -> List[str]:
    parts = ["Centy"]
    project = state.current_project()
    if state.selected_project_path:
        parts.append(project.display_name if project else state.selected_project_path.rstrip("/").split("/")[-1])
    screen = state.screen
    if screen is Screen.PROJECTS:
        parts.append("Projects")
        return parts
    section = {"issues": "Issues", "prs": "Pull Requests", "docs": "Docs", "config": "Config"}.get(screen.section)
    if section:
        parts.append(section)
    issue = state.current_issue()
    pr = state.current_pr()
    doc = state.current_doc()
    if issue is not None:
        parts.append(f"#{issue.display_number}")
    elif pr is not None:
        parts.append(f"PR #{pr.display_number}")
    elif doc is not None:
        parts.append(doc.slug)
    if screen.is_form:
        parts.append(screen.title)
    return parts


def draw_context_bar(state: AppState, canvas: Canvas, regions: ScreenRegions) -> None:
    bar = regions.context_bar
    canvas.box(bar.x, bar.y, bar.width, bar.height)
    parts = _breadcrumb(state)
    x = bar.x + 2
    limit = bar.right - 2
    for idx, part in enumerate(parts):
        last = idx == len(parts) - 1
        style = "class:breadcrumb.current" if last else "class:breadcrumb"
        x += canvas.put(x, bar.y + 1, part, style, max_width=max(0, limit - x))
        if not last:
            x += canvas.put(x, bar.y + 1, " › ", "class:breadcrumb", max_width=max(0, limit - x))


def draw_sidebar(state: AppState, canvas: Canvas, regions: ScreenRegions) -> None:
    side = regions.sidebar
    if side is None:
        return
    canvas.box(side.x, side.y, side.width, side.height, style="class:border.focus", title="Centy")
    inner = side.inner()
    for row, (key, section, label, _) in enumerate(SECTIONS):
        if row >= inner.height:
            break
        active = state.screen.section == section
        prefix = "▸ " if active else "  "
        style = "class:sidebar.active" if active else "class:sidebar.item"
        canvas.put(inner.x, inner.y + row, pad_display(f"{prefix}[{key}] {label}", inner.width), style)
    actions = local_actions(state.screen)
    if not actions or SIDEBAR_ACTIONS_HEADER >= inner.height:
        return
    canvas.put(inner.x, inner.y + SIDEBAR_ACTIONS_HEADER, trim_display("Actions", inner.width), "class:header")
    for idx, (_, label, key) in enumerate(actions):
        row = SIDEBAR_ACTIONS_TOP + idx
        if row >= inner.height:
            break
        canvas.put(inner.x, inner.y + row, pad_display(f"  [{key}] {label}", inner.width), "class:sidebar.item")


def _draw_project_card(canvas: Canvas, x: int, y: int, width: int, project, selected: bool) -> None:
    border = "class:card.selected" if selected else "class:border"
    canvas.box(x, y, width, 4, style=border)
    name = ("★ " if project.is_favorite else "") + project.display_name
    style = "class:card.selected" if selected else ("class:favorite" if project.is_favorite else "class:card")
    canvas.put(x + 1, y + 1, trim_display(name, width - 2), style)
    counts = f"{project.issue_count} issues · {project.doc_count} docs"
    canvas.put(x + 1, y + 2, trim_display(counts, width - 2), "class:text.dim")


def draw_projects(state: AppState, canvas: Canvas, regions: ScreenRegions) -> None:
    projects = state.visible_projects()
    content = regions.content
    header = f"{len(projects)} projects"
    canvas.put(content.x, content.y, trim_display(header, content.width), "class:header")
    if not projects:
        canvas.put(content.x, regions.grid_top, "No projects tracked by the daemon", "class:text.dim")
        return
    layout = regions.grid_layout()
    offset = state.scroll_offset
    visible_bottom = regions.grid_top + regions.grid_height
    for index, project in enumerate(projects):
        rel_x, rel_y = layout.card_origin(index)
        y = regions.grid_top + rel_y - offset
        if y < regions.grid_top or y + layout.card_height > visible_bottom:
            continue
        _draw_project_card(canvas, content.x + rel_x, y, layout.card_width, project, index == state.selected_index)


def _sort_header(label: str, sort_field, direction, count: int, hidden_hint: str) -> str:
    return f"{count} {label} · sort: {sort_field.label} {direction.symbol} · {hidden_hint}"


def _draw_rows(state: AppState, canvas: Canvas, regions: ScreenRegions, rows: List[Tuple[str, str, str, str]]) -> None:
    """rows: (number, title, badge, badge_style) painted from list_top with scrolling."""
    content = regions.content
    offset = state.scroll_offset
    for line in range(regions.list_height):
        index = offset + line
        if index >= len(rows):
            break
        number, title, badge, badge_style = rows[index]
        y = regions.list_top + line
        selected = index == state.selected_index
        base = "class:selected" if selected else "class:text"
        canvas.put(content.x, y, " " * content.width, base)
        used = canvas.put(content.x, y, f"{number:>5} ", "class:text.dim" if not selected else base)
        badge_width = display_width(badge) + 1 if badge else 0
        title_width = max(0, content.width - used - badge_width)
        canvas.put(content.x + used, y, trim_display(title, title_width), base)
        if badge:
            canvas.put(content.right - badge_width, y, badge, f"{base} {badge_style}".strip())


def _issue_row(issue: Issue) -> Tuple[str, str, str, str]:
    label = issue.priority_label
    return f"#{issue.display_number}", issue.title, f"{label} {issue.status}", _priority_style(label)


def _pr_row(pr: PullRequest) -> Tuple[str, str, str, str]:
    return f"#{pr.display_number}", pr.title, f"{pr.source_branch}→{pr.target_branch} {pr.status}", _status_style(pr.status)


def draw_issues(state: AppState, canvas: Canvas, regions: ScreenRegions) -> None:
    issues = state.visible_issues()
    content = regions.content
    hidden = "showing closed" if state.show_closed_issues else "closed hidden"
    header = _sort_header("issues", state.issue_sort_field, state.issue_sort_direction, len(issues), hidden)
    canvas.put(content.x, content.y, trim_display(header, content.width), "class:header")
    canvas.hline(content.x, content.y + 1, content.width, "─", "class:border")
    _draw_rows(state, canvas, regions, [_issue_row(i) for i in issues])


def draw_prs(state: AppState, canvas: Canvas, regions: ScreenRegions) -> None:
    prs = state.visible_prs()
    content = regions.content
    hidden = "showing merged" if state.show_merged_prs else "merged hidden"
    header = _sort_header("pull requests", state.pr_sort_field, state.pr_sort_direction, len(prs), hidden)
    canvas.put(content.x, content.y, trim_display(header, content.width), "class:header")
    canvas.hline(content.x, content.y + 1, content.width, "─", "class:border")
    _draw_rows(state, canvas, regions, [_pr_row(p) for p in prs])


def draw_docs(state: AppState, canvas: Canvas, regions: ScreenRegions) -> None:
    content = regions.content
    canvas.put(content.x, content.y, f"{len(state.docs)} docs", "class:header")
    canvas.hline(content.x, content.y + 1, content.width, "─", "class:border")
    _draw_rows(state, canvas, regions, [("", d.title, d.slug, "class:text.dim") for d in state.docs])


def _draw_text_lines(state: AppState, canvas: Canvas, regions: ScreenRegions, lines: List[Tuple[str, str]]) -> None:
    content = regions.content
    wrapped: List[Tuple[str, str]] = []
    for text, style in lines:
        for piece in wrap_display(text, content.width) or [""]:
            wrapped.append((piece, style))
    max_offset = max(0, len(wrapped) - content.height)
    if state.scroll_offset > max_offset:
        state.scroll_offset = max_offset
    for row, (text, style) in enumerate(wrapped[state.scroll_offset:state.scroll_offset + content.height]):
        canvas.put(content.x, content.y + row, text, style)


def _issue_detail_lines(issue: Issue) -> List[Tuple[str, str]]:
    lines = [
        (f"#{issue.display_number} {issue.title}", "class:title"),
        (f"Status: {issue.status}   Priority: {issue.priority_label}", "class:text.dim"),
        (f"Created: {issue.created_at:%Y-%m-%d %H:%M}   Updated: {issue.updated_at:%Y-%m-%d %H:%M}", "class:text.dim"),
    ]
    for key, value in sorted(issue.custom_fields.items()):
        lines.append((f"{key}: {value}", "class:text.dim"))
    lines.append(("", ""))
    lines.append((issue.description or "(no description)", "class:text"))
    return lines


def _pr_detail_lines(pr: PullRequest) -> List[Tuple[str, str]]:
    lines = [
        (f"PR #{pr.display_number} {pr.title}", "class:title"),
        (f"{pr.source_branch} → {pr.target_branch}", "class:text"),
        (f"Status: {pr.status}   Priority: {pr.priority}", "class:text.dim"),
    ]
    if pr.reviewers:
        lines.append((f"Reviewers: {', '.join(pr.reviewers)}", "class:text.dim"))
    if pr.linked_issues:
        lines.append((f"Linked issues: {', '.join(pr.linked_issues)}", "class:text.dim"))
    if pr.merged_at:
        lines.append((f"Merged: {pr.merged_at:%Y-%m-%d %H:%M}", "class:text.dim"))
    lines.append(("", ""))
    lines.append((pr.description or "(no description)", "class:text"))
    return lines


def draw_detail(state: AppState, canvas: Canvas, regions: ScreenRegions) -> None:
    screen = state.screen
    lines: List[Tuple[str, str]] = []
    if screen is Screen.ISSUE_DETAIL:
        issue = state.current_issue()
        lines = _issue_detail_lines(issue) if issue else [("Issue not found", "class:text.dim")]
    elif screen is Screen.PR_DETAIL:
        pr = state.current_pr()
        lines = _pr_detail_lines(pr) if pr else [("Pull request not found", "class:text.dim")]
    elif screen is Screen.DOC_DETAIL:
        doc = state.current_doc()
        if doc:
            lines = [(doc.title, "class:title"), (doc.slug, "class:text.dim"), ("", ""), (doc.content, "class:text")]
        else:
            lines = [("Doc not found", "class:text.dim")]
    _draw_text_lines(state, canvas, regions, lines)


def draw_config(state: AppState, canvas: Canvas, regions: ScreenRegions) -> None:
    lines: List[Tuple[str, str]] = [("Project configuration", "class:title")]
    config = state.project_config
    if config is None:
        lines.append(("Configuration not loaded", "class:text.dim"))
    else:
        lines.extend([
            (f"Priority levels: {config.priority_levels}", "class:text"),
            (f"Allowed states: {', '.join(config.allowed_states)}", "class:text"),
            (f"Default state: {config.default_state}", "class:text"),
            (f"Version: {config.version or '-'}", "class:text"),
        ])
    info = state.daemon_info
    lines.append(("", ""))
    lines.append(("Daemon", "class:title"))
    if info is None:
        lines.append(("Daemon info unavailable", "class:text.dim"))
    else:
        lines.extend([
            (f"Version: {info.version or '-'}", "class:text"),
            (f"Uptime: {info.uptime_seconds}s", "class:text"),
            (f"Projects: {info.project_count}", "class:text"),
        ])
    _draw_text_lines(state, canvas, regions, lines)


def draw_form(state: AppState, canvas: Canvas, regions: ScreenRegions) -> None:
    content = regions.content
    form = state.form
    for idx, (name, label, kind) in enumerate(form.fields(state.screen)):
        y = regions.form_top + idx * FORM_FIELD_HEIGHT
        if y + 1 >= content.bottom:
            break
        active = idx == form.active_field
        label_text = f"{label} (1-9)" if kind == "digit" else label
        canvas.put(content.x, y, trim_display(label_text, content.width), "class:form.active" if active else "class:form.label")
        value = form.value(name)
        cursor = "▏" if active else ""
        shown = value.replace("\n", " ")
        # keep the tail of long values in view while typing
        while display_width(shown) + len(cursor) > content.width - 2 and shown:
            shown = shown[1:]
        canvas.put(content.x, y + 1, "> " + shown + cursor, "class:form.active" if active else "class:form.field")


def draw_status_bar(state: AppState, canvas: Canvas, regions: ScreenRegions) -> None:
    bar = regions.status_bar
    canvas.put(bar.x, bar.y, " " * bar.width, "class:statusbar")
    x = bar.x
    dot_style = "class:statusbar.ok" if state.daemon_connected else "class:statusbar.fail"
    x += canvas.put(x, bar.y, " ● " if state.daemon_connected else " ○ ", dot_style)
    segments = [(VIEW_HINTS.get(state.screen, ""), "class:statusbar.hint")]
    message = state.current_status_message()
    if message:
        segments.append((message, "class:statusbar.message"))
    if state.selected_project_path:
        segments.append((state.selected_project_path.rstrip("/").split("/")[-1], "class:statusbar"))
    limit = max(0, bar.width - len(QUIT_HINT))
    for idx, (text, style) in enumerate(segments):
        if idx:
            x += canvas.put(x, bar.y, " | ", "class:statusbar", max_width=max(0, limit - x))
        x += canvas.put(x, bar.y, text, style, max_width=max(0, limit - x))
    canvas.put(limit, bar.y, QUIT_HINT, "class:statusbar.hint")


def draw_dialog(state: AppState, canvas: Canvas, regions: ScreenRegions) -> None:
    """Modal box on top of everything: the pending confirmation, else the oldest error."""
    dialog = state.confirm
    error = state.current_error()
    if dialog is None and error is None:
        return
    area = regions.dialog
    canvas.fill(area.x, area.y, area.width, area.height, " ", "class:dialog")
    title = dialog.title if dialog is not None else "Error"
    canvas.box(area.x, area.y, area.width, area.height, style="class:dialog", title=title, title_style="class:dialog.title")
    inner = area.inner()
    message = dialog.message if dialog is not None else error
    for idx, line in enumerate(wrap_display(message, max(1, inner.width - 2))[: DIALOG_CANCEL_ROW - 2]):
        canvas.put(inner.x + 1, inner.y + 1 + idx, line, "class:dialog")
    if dialog is not None:
        options = ((DIALOG_CANCEL_ROW, "Cancel", not dialog.confirmed), (DIALOG_CONFIRM_ROW, dialog.confirm_label, dialog.confirmed))
        for row, label, active in options:
            if active:
                style = "class:dialog.danger" if row == DIALOG_CONFIRM_ROW else "class:dialog.option.selected"
            else:
                style = "class:dialog.option"
            text = ("▸ " if active else "  ") + label
            canvas.put(inner.x + 1, inner.y + row, pad_display(text, max(0, inner.width - 2)), style)
        hint = "↑↓:select  Enter:confirm  Esc:cancel"
    else:
        hint = "Press Enter or Esc to dismiss"
    canvas.put(inner.x + 1, inner.y + DIALOG_HINT_ROW, trim_display(hint, max(0, inner.width - 2)), "class:dialog.option")


_MAIN_DRAWERS = {
    Screen.PROJECTS: draw_projects,
    Screen.ISSUES: draw_issues,
    Screen.PRS: draw_prs,
    Screen.DOCS: draw_docs,
    Screen.ISSUE_DETAIL: draw_detail,
    Screen.PR_DETAIL: draw_detail,
    Screen.DOC_DETAIL: draw_detail,
    Screen.CONFIG: draw_config,
}


def render_frame(state: AppState, width: int, height: int, regions: Optional[ScreenRegions] = None) -> Canvas:
    canvas = Canvas(width, height)
    regions = regions or regions_for(state, width, height)
    draw_context_bar(state, canvas, regions)
    draw_sidebar(state, canvas, regions)
    main = regions.main
    canvas.box(main.x, main.y, main.width, main.height, title=state.screen.title)
    drawer = draw_form if state.screen.is_form else _MAIN_DRAWERS.get(state.screen)
    if drawer is not None:
        drawer(state, canvas, regions)
    draw_status_bar(state, canvas, regions)
    draw_dialog(state, canvas, regions)
    return canvas


__all__ = ["VIEW_HINTS", "regions_for", "render_frame"]
