"""Dash application factory."""

from __future__ import annotations

from pathlib import Path

from dash import Dash

from commit_lens.core.aggregate import DEFAULT_COMMIT_URL
from commit_lens.dashboard.callbacks import register_callbacks
from commit_lens.dashboard.data import DashboardData, load_dashboard_data
from commit_lens.dashboard.layout import build_layout


def create_dashboard(
    dataset: str | Path | DashboardData,
    url_template: str = DEFAULT_COMMIT_URL,
) -> Dash:
    data = dataset if isinstance(dataset, DashboardData) else load_dashboard_data(dataset, url_template)
    app = Dash(__name__, suppress_callback_exceptions=True)
    app.layout = build_layout(kind=data.kind)
    register_callbacks(app, data)
    return app
