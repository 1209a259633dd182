"""Dashboard colors and inline style fragments."""

from __future__ import annotations

from typing import Any

CATEGORY_COLORS: dict[str, str] = {
    "js": "#F1E05A",
    "mjs": "#F1E05A",
    "ts": "#3178C6",
    "css": "#563D7C",
    "scss": "#C6538C",
    "html": "#E34C26",
    "py": "#3572A5",
    "json": "#292929",
    "md": "#083FA1",
    "other": "#888888",
}

_DEFAULT_COLOR = "#888888"

POINT_COLOR = "steelblue"

CARD_STYLE: dict[str, Any] = {
    "padding": "12px 20px",
    "border": "1px solid #ddd",
    "borderRadius": "8px",
    "minWidth": "120px",
    "textAlign": "center",
}

PANEL_STYLE: dict[str, Any] = {
    "padding": "12px",
    "border": "1px solid #ddd",
    "borderRadius": "8px",
}


def category_color(category: str) -> str:
    """Return hex color for a dataset category (file extension)."""
    return CATEGORY_COLORS.get(category.lower(), _DEFAULT_COLOR)
