#!/usr/bin/env python3
"""TUI themes and styling."""

from typing import Dict

from prompt_toolkit.styles import Style


THEMES: Dict[str, Dict[str, str]] = {
    "dark": {
        "": "#d7dfe6",
        "border": "#4b525a",
        "border.focus": "#61afef",
        "title": "#ffb347 bold",
        "header": "#ffb347 bold",
        "breadcrumb": "#97a0a9",
        "breadcrumb.current": "#d7dfe6 bold",
        "text": "#d7dfe6",
        "text.dim": "#97a0a9",
        "selected": "bg:#3b3b3b #d7dfe6 bold",
        "card": "#d7dfe6",
        "card.selected": "#61afef bold",
        "favorite": "#e5c07b bold",
        "sidebar.item": "#97a0a9",
        "sidebar.active": "bg:#3b3b3b #ffb347 bold",
        "priority.high": "#e06c75 bold",
        "priority.med": "#e5c07b",
        "priority.low": "#9ad974",
        "status.open": "#9ad974",
        "status.done": "#7a7f85",
        "form.label": "#97a0a9",
        "form.field": "#d7dfe6",
        "form.active": "#61afef bold",
        "statusbar": "bg:#262a30 #d7dfe6",
        "statusbar.ok": "bg:#262a30 #9ad974 bold",
        "statusbar.fail": "bg:#262a30 #e06c75 bold",
        "statusbar.hint": "bg:#262a30 #97a0a9",
        "statusbar.message": "bg:#262a30 #e5c07b bold",
        "dialog": "bg:#21252b #d7dfe6",
        "dialog.title": "bg:#21252b #e06c75 bold",
        "dialog.option": "bg:#21252b #97a0a9",
        "dialog.option.selected": "bg:#3b3b3b #d7dfe6 bold",
        "dialog.danger": "bg:#3b3b3b #e06c75 bold",
    },
    "light": {
        "": "#2c313a",
        "border": "#a0a7b4",
        "border.focus": "#0184bc",
        "title": "#c18401 bold",
        "header": "#c18401 bold",
        "breadcrumb": "#696c77",
        "breadcrumb.current": "#2c313a bold",
        "text": "#2c313a",
        "text.dim": "#696c77",
        "selected": "bg:#e5e5e6 #2c313a bold",
        "card": "#2c313a",
        "card.selected": "#0184bc bold",
        "favorite": "#c18401 bold",
        "sidebar.item": "#696c77",
        "sidebar.active": "bg:#e5e5e6 #c18401 bold",
        "priority.high": "#e45649 bold",
        "priority.med": "#c18401",
        "priority.low": "#50a14f",
        "status.open": "#50a14f",
        "status.done": "#a0a1a7",
        "form.label": "#696c77",
        "form.field": "#2c313a",
        "form.active": "#0184bc bold",
        "statusbar": "bg:#e5e5e6 #2c313a",
        "statusbar.ok": "bg:#e5e5e6 #50a14f bold",
        "statusbar.fail": "bg:#e5e5e6 #e45649 bold",
        "statusbar.hint": "bg:#e5e5e6 #696c77",
        "statusbar.message": "bg:#e5e5e6 #c18401 bold",
        "dialog": "bg:#fafafa #2c313a",
        "dialog.title": "bg:#fafafa #e45649 bold",
        "dialog.option": "bg:#fafafa #696c77",
        "dialog.option.selected": "bg:#e5e5e6 #2c313a bold",
        "dialog.danger": "bg:#e5e5e6 #e45649 bold",
    },
}

DEFAULT_THEME = "dark"


def get_theme_palette(theme: str) -> Dict[str, str]:
    """Get theme palette, falling back to default if theme not found."""
    base = THEMES.get(theme)
    if not base:
        base = THEMES[DEFAULT_THEME]
    return dict(base)


def build_style(theme: str) -> Style:
    return Style.from_dict(get_theme_palette(theme))
