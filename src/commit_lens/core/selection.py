"""Brush selection over the commit scatter plot.

Every recompute takes the current brush region as an explicit argument and
rebuilds its views from the full commit list; nothing is cached between calls.
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass

from commit_lens.core.scales import PlotScales
from commit_lens.models import BreakdownEntry, CommitSummary


@dataclass(frozen=True)
class BrushSelection:
    """Rectangle in plot coordinates with ``x0 <= x1`` and ``y0 <= y1``."""

    x0: float
    y0: float
    x1: float
    y1: float

    @classmethod
    def from_corners(cls, a: tuple[float, float], b: tuple[float, float]) -> BrushSelection:
        return cls(
            x0=min(a[0], b[0]),
            y0=min(a[1], b[1]),
            x1=max(a[0], b[0]),
            y1=max(a[1], b[1]),
        )

    def contains(self, x: float, y: float) -> bool:
        return self.x0 <= x <= self.x1 and self.y0 <= y <= self.y1


@dataclass(frozen=True)
class SelectionView:
    selected: list[CommitSummary]
    count_text: str
    breakdown: list[BreakdownEntry]


def is_commit_selected(selection: BrushSelection | None, commit: CommitSummary, scales: PlotScales) -> bool:
    if selection is None:
        return False
    return selection.contains(*scales.point(commit))


def selected_commits(
    commits: Sequence[CommitSummary],
    selection: BrushSelection | None,
    scales: PlotScales,
) -> list[CommitSummary]:
    if selection is None:
        return []
    return [c for c in commits if is_commit_selected(selection, c, scales)]


def selection_count_text(count: int) -> str:
    if count == 0:
        return "No commits selected"
    return f"{count} commits selected"


def format_percent(fraction: float) -> str:
    """Percentage with at most one decimal and no trailing zeros (``50%``, ``33.3%``)."""
    text = f"{fraction * 100:.1f}"
    if text.endswith(".0"):
        text = text[:-2]
    return f"{text}%"


def category_breakdown(commits: Sequence[CommitSummary], unit: str = "lines") -> list[BreakdownEntry]:
    """Count member records of *commits* per category, in first-seen order."""
    counts: dict[str, int] = {}
    for commit in commits:
        for record in commit.records:
            counts[record.category] = counts.get(record.category, 0) + 1
    total = sum(counts.values())
    if not total:
        return []
    entries: list[BreakdownEntry] = []
    for category, count in counts.items():
        fraction = count / total
        entries.append(
            BreakdownEntry(
                category=category,
                count=count,
                percent=round(fraction * 100, 1),
                label=f"{count} {unit} ({format_percent(fraction)})",
            )
        )
    return entries


def recompute_selection(
    commits: Sequence[CommitSummary],
    selection: BrushSelection | None,
    scales: PlotScales,
    unit: str = "lines",
) -> SelectionView:
    chosen = selected_commits(commits, selection, scales)
    return SelectionView(
        selected=chosen,
        count_text=selection_count_text(len(chosen)),
        breakdown=category_breakdown(chosen, unit),
    )
