"""Convert commit summaries and derived views into Plotly figures and Dash children."""

from __future__ import annotations

from collections.abc import Sequence
from datetime import UTC, datetime
from typing import Any

import plotly.graph_objects as go  # type: ignore[import-untyped]
from dash import html

from commit_lens.core.scales import PlotArea, PlotScales, SqrtScale
from commit_lens.core.selection import BrushSelection
from commit_lens.dashboard.styles import POINT_COLOR, category_color
from commit_lens.models import BreakdownEntry, CommitSummary, FileUnits

_MAX_UNIT_MARKS = 200


def _naive_utc(moment: datetime) -> datetime:
    return moment.astimezone(UTC).replace(tzinfo=None)


def _parse_axis_time(value: Any) -> datetime:
    """Parse a Plotly date-axis value; Plotly reports them as naive UTC strings."""
    parsed = datetime.fromisoformat(str(value))
    return parsed.replace(tzinfo=UTC) if parsed.tzinfo is None else parsed


def hour_tick_label(hour: int) -> str:
    return f"{hour % 24:02d}:00"


def tooltip_text(commit: CommitSummary, unit: str = "lines") -> str:
    parts = [
        f"Commit: {commit.id}",
        f"Date: {commit.datetime.strftime('%A, %B %d, %Y')}",
        f"Time: {commit.time} {commit.timezone}",
    ]
    if commit.author:
        parts.append(f"Author: {commit.author}")
    parts.append(f"{'Lines edited' if unit == 'lines' else 'Total size'}: {commit.total}")
    return "<br>".join(parts)


def commits_to_figure(
    commits: Sequence[CommitSummary],
    scales: PlotScales | None,
    size_scale: SqrtScale | None = None,
    unit: str = "lines",
    area: PlotArea | None = None,
) -> go.Figure:
    """Scatter of commits by time (x) and hour of day (y), sized by commit total.

    Larger commits are drawn first so smaller ones stay hoverable on top.
    """
    area = area or PlotArea()
    fig = go.Figure()
    fig.update_layout(
        width=area.width,
        height=area.height,
        margin={"l": area.margin_left, "r": area.margin_right, "t": area.margin_top, "b": area.margin_bottom},
        dragmode="select",
        uirevision="commits",
        showlegend=False,
        yaxis={
            "range": [0, 24],
            "tickvals": list(range(0, 25, 2)),
            "ticktext": [hour_tick_label(h) for h in range(0, 25, 2)],
            "showgrid": True,
            "fixedrange": True,
        },
    )
    if not commits or scales is None:
        fig.update_layout(title="No commits")
        return fig
    radius = size_scale or scales.r
    ordered = sorted(commits, key=lambda c: c.total, reverse=True)
    fig.add_trace(
        go.Scatter(
            x=[_naive_utc(c.datetime) for c in ordered],
            y=[c.hour_fraction for c in ordered],
            mode="markers",
            customdata=[c.id for c in ordered],
            hovertext=[tooltip_text(c, unit) for c in ordered],
            hoverinfo="text",
            marker={
                "size": [2 * radius(c.total) for c in ordered],
                "sizemode": "diameter",
                "color": POINT_COLOR,
                "opacity": 0.7,
            },
            selected={"marker": {"color": "#ff6b6b", "opacity": 1}},
        )
    )
    x0, x1 = scales.x.domain
    fig.update_xaxes(range=[_naive_utc(x0), _naive_utc(x1)])
    return fig


def selection_from_plotly(selected_data: dict[str, Any] | None, scales: PlotScales | None) -> BrushSelection | None:
    """Translate a Plotly box-select payload into a brush rectangle in plot coordinates."""
    if not selected_data or scales is None:
        return None
    box = selected_data.get("range")
    if not box or "x" not in box or "y" not in box:
        return None
    (t0, t1), (h0, h1) = box["x"], box["y"]
    return BrushSelection.from_corners(
        (scales.x(_parse_axis_time(t0)), scales.y(float(h0))),
        (scales.x(_parse_axis_time(t1)), scales.y(float(h1))),
    )


def breakdown_to_children(entries: Sequence[BreakdownEntry]) -> list[Any]:
    children: list[Any] = []
    for entry in entries:
        children.append(html.Dt(entry.category, style={"fontWeight": "bold", "color": category_color(entry.category)}))
        children.append(html.Dd(entry.label))
    return children


def file_units_to_children(files: Sequence[FileUnits], unit: str = "lines") -> list[Any]:
    """One row per file with a strip of marks colored by category."""
    if not files:
        return []
    largest = max(f.units for f in files) or 1
    children: list[Any] = []
    for entry in files:
        marks = max(1, round(_MAX_UNIT_MARKS * entry.units / largest)) if entry.units else 0
        children.append(
            html.Dt(
                [html.Code(entry.file), html.Small(f" {entry.units} {unit}")],
                style={"marginTop": "6px"},
            )
        )
        children.append(
            html.Dd(
                html.Div(
                    style={
                        "height": "8px",
                        "width": f"{100 * marks / _MAX_UNIT_MARKS:.1f}%",
                        "backgroundColor": category_color(entry.category),
                        "borderRadius": "4px",
                    }
                ),
                style={"margin": "2px 0 0 0"},
            )
        )
    return children
