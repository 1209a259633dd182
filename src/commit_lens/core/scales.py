"""Continuous scales shared by the scatter plot and the interactive filters.

Plotting, brushing and the playback slider all map through these objects, so a
point is selected exactly when it is drawn inside the brushed rectangle.
"""

from __future__ import annotations

import math
from collections.abc import Sequence
from dataclasses import dataclass
from datetime import UTC, datetime

from commit_lens.models import CommitSummary


def _interpolate(a: float, b: float, t: float) -> float:
    return a * (1 - t) + b * t


@dataclass(frozen=True)
class LinearScale:
    domain: tuple[float, float]
    range: tuple[float, float]

    def __call__(self, value: float) -> float:
        d0, d1 = self.domain
        t = 0.5 if d1 == d0 else (value - d0) / (d1 - d0)
        return _interpolate(self.range[0], self.range[1], t)

    def invert(self, value: float) -> float:
        r0, r1 = self.range
        t = 0.5 if r1 == r0 else (value - r0) / (r1 - r0)
        return _interpolate(self.domain[0], self.domain[1], t)


@dataclass(frozen=True)
class SqrtScale:
    domain: tuple[float, float]
    range: tuple[float, float]

    def __call__(self, value: float) -> float:
        inner = LinearScale((math.sqrt(self.domain[0]), math.sqrt(self.domain[1])), self.range)
        return inner(math.sqrt(value))


@dataclass(frozen=True)
class TimeScale:
    domain: tuple[datetime, datetime]
    range: tuple[float, float]

    @property
    def _linear(self) -> LinearScale:
        return LinearScale((self.domain[0].timestamp(), self.domain[1].timestamp()), self.range)

    def __call__(self, value: datetime) -> float:
        return self._linear(value.timestamp())

    def invert(self, value: float) -> datetime:
        d0, d1 = self.domain
        if d0 == d1:
            return d0
        if value == self.range[0]:
            return d0
        if value == self.range[1]:
            return d1
        return datetime.fromtimestamp(self._linear.invert(value), tz=UTC)


@dataclass(frozen=True)
class PlotArea:
    width: float = 1000
    height: float = 600
    margin_top: float = 10
    margin_right: float = 10
    margin_bottom: float = 30
    margin_left: float = 40

    @property
    def x_range(self) -> tuple[float, float]:
        return (self.margin_left, self.width - self.margin_right)

    @property
    def y_range(self) -> tuple[float, float]:
        return (self.height - self.margin_bottom, self.margin_top)


@dataclass(frozen=True)
class PlotScales:
    x: TimeScale
    y: LinearScale
    r: SqrtScale

    def point(self, commit: CommitSummary) -> tuple[float, float]:
        return self.x(commit.datetime), self.y(commit.hour_fraction)


def time_extent(commits: Sequence[CommitSummary]) -> tuple[datetime, datetime]:
    if not commits:
        raise ValueError("Cannot compute the time extent of an empty commit list.")
    moments = [c.datetime for c in commits]
    return min(moments), max(moments)


def radius_scale(commits: Sequence[CommitSummary], radius: tuple[float, float] = (2, 30)) -> SqrtScale:
    totals = [c.total for c in commits] or [0]
    return SqrtScale((min(totals), max(totals)), radius)


def build_plot_scales(commits: Sequence[CommitSummary], area: PlotArea | None = None) -> PlotScales:
    """Scales for the commit scatter: time across, hour of day (0-24) upward."""
    area = area or PlotArea()
    return PlotScales(
        x=TimeScale(time_extent(commits), area.x_range),
        y=LinearScale((0, 24), area.y_range),
        r=radius_scale(commits),
    )
