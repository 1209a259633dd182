"""Dash callback registrations."""

from __future__ import annotations

import logging
from typing import Any

from dash import Dash, Input, Output, no_update

from commit_lens.core.playback import recompute_playback
from commit_lens.core.selection import recompute_selection
from commit_lens.dashboard.data import DashboardData
from commit_lens.dashboard.figures import (
    breakdown_to_children,
    commits_to_figure,
    file_units_to_children,
    selection_from_plotly,
)

_log = logging.getLogger(__name__)


def register_callbacks(app: Dash, data: DashboardData) -> None:
    # ── Summary cards ──────────────────────────────────────────────

    @app.callback(
        [
            Output("stat-records", "children"),
            Output("stat-commits", "children"),
            Output("stat-files", "children"),
            Output("stat-extra", "children"),
            Output("dashboard-error", "children"),
        ],
        Input("page-load", "data"),
    )
    def load_stats(_: Any) -> tuple[str, str, str, str, str]:
        stats = data.stats
        if data.kind.unit == "lines":
            extra = "--" if stats.longest_line is None else str(stats.longest_line)
        else:
            extra = "--" if stats.total_size is None else f"{stats.total_size} B"
        return (
            str(stats.total_records),
            str(stats.total_commits),
            str(stats.total_files),
            extra,
            data.error,
        )

    # ── Time slider: scatter, cutoff and file units ───────────────

    @app.callback(
        [
            Output("commit-chart", "figure"),
            Output("cutoff-label", "children"),
            Output("cutoff-label", "dateTime"),
            Output("file-units", "children"),
        ],
        Input("time-slider", "value"),
    )
    def update_timeline(position: float | None) -> tuple[Any, str, str, list[Any]]:
        try:
            view = recompute_playback(data.commits, 100.0 if position is None else float(position))
            figure = commits_to_figure(view.visible, data.scales, view.size_scale, data.kind.unit)
        except Exception:
            _log.exception("update_timeline failed")
            return no_update, no_update, no_update, no_update
        if view.cutoff is None:
            return figure, "No commits", "", []
        label = view.cutoff.strftime("%B %d, %Y %H:%M")
        return figure, label, view.cutoff.isoformat(), file_units_to_children(view.files, data.kind.unit)

    # ── Brush: selection count and category breakdown ─────────────
    # Only commits drawn at the current slider position can be selected.

    @app.callback(
        [
            Output("selection-count", "children"),
            Output("language-breakdown", "children"),
        ],
        [
            Input("commit-chart", "selectedData"),
            Input("time-slider", "value"),
        ],
    )
    def update_selection(
        selected_data: dict[str, Any] | None, position: float | None
    ) -> tuple[str, list[Any]]:
        try:
            view = None
            if data.scales is not None:
                drawn = recompute_playback(data.commits, 100.0 if position is None else float(position)).visible
                selection = selection_from_plotly(selected_data, data.scales)
                view = recompute_selection(drawn, selection, data.scales, data.kind.unit)
        except Exception:
            _log.exception("update_selection failed")
            return no_update, no_update
        if view is None:
            return "No commits selected", []
        return view.count_text, breakdown_to_children(view.breakdown)
