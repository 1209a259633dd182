"""Dash layout: summary cards, commit scatter with brush, time slider, file units."""

from __future__ import annotations

from dash import dcc, html

from commit_lens.core.dataset import DatasetKind
from commit_lens.core.playback import SLIDER_MAX, SLIDER_MIN
from commit_lens.dashboard.styles import CARD_STYLE, PANEL_STYLE


def _stat_card(card_id: str, title: str) -> html.Div:
    """Return a stat card placeholder."""
    return html.Div(
        [
            html.H4(title, style={"margin": "0", "color": "#666", "fontSize": "12px"}),
            html.Div("--", id=card_id, style={"fontSize": "24px", "fontWeight": "bold"}),
        ],
        style=CARD_STYLE,
    )


def build_layout(title: str = "Commit Lens", kind: DatasetKind = DatasetKind.LOC) -> html.Div:
    """Return the top-level layout.

    A hidden dcc.Store fires the initial data-loading callbacks reliably.
    """
    return html.Div(
        [
            dcc.Store(id="page-load", data="ready"),
            html.H1(title),
            html.Div(id="dashboard-error", style={"color": "red"}),
            html.Div(
                [
                    _stat_card("stat-records", "Total records"),
                    _stat_card("stat-commits", "Total commits"),
                    _stat_card("stat-files", "Files"),
                    _stat_card("stat-extra", "Longest line" if kind is DatasetKind.LOC else "Total size"),
                ],
                style={"display": "flex", "gap": "16px", "marginBottom": "20px", "flexWrap": "wrap"},
            ),
            html.Div(
                [
                    html.Label("Show commits until:", style={"fontWeight": "bold"}),
                    dcc.Slider(
                        id="time-slider",
                        min=SLIDER_MIN,
                        max=SLIDER_MAX,
                        step=0.1,
                        value=SLIDER_MAX,
                        marks=None,
                        updatemode="drag",
                    ),
                    html.Time(id="cutoff-label", style={"color": "#555", "fontSize": "13px"}),
                ],
                style={"marginBottom": "12px"},
            ),
            dcc.Graph(id="commit-chart", figure={}, config={"displayModeBar": True}),
            html.Div(
                [
                    html.Div(
                        [
                            html.P("No commits selected", id="selection-count"),
                            html.Dl(id="language-breakdown", children=[]),
                        ],
                        style={**PANEL_STYLE, "minWidth": "260px"},
                    ),
                    html.Div(
                        [
                            html.H4("Files", style={"marginTop": "0"}),
                            html.Dl(id="file-units", children=[]),
                        ],
                        style={**PANEL_STYLE, "flex": "1", "maxHeight": "500px", "overflowY": "auto"},
                    ),
                ],
                style={"display": "flex", "gap": "16px", "marginTop": "16px"},
            ),
        ],
        style={"padding": "20px", "fontFamily": "system-ui, sans-serif"},
    )
