"""Time-slider filtering of commits.

The slider position in ``[0, 100]`` is mapped back onto the time span of all
commits; commits at or before that moment stay visible.
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass
from datetime import datetime

from commit_lens.core.scales import SqrtScale, TimeScale, radius_scale, time_extent
from commit_lens.models import CommitSummary, FileUnits, LoadedFileSizeRecord, LoadedRecord

SLIDER_MIN = 0.0
SLIDER_MAX = 100.0


@dataclass(frozen=True)
class PlaybackView:
    position: float
    cutoff: datetime | None
    visible: list[CommitSummary]
    files: list[FileUnits]
    size_scale: SqrtScale


def progress_scale(commits: Sequence[CommitSummary]) -> TimeScale:
    return TimeScale(time_extent(commits), (SLIDER_MIN, SLIDER_MAX))


def cutoff_for(commits: Sequence[CommitSummary], position: float) -> datetime:
    position = min(max(position, SLIDER_MIN), SLIDER_MAX)
    return progress_scale(commits).invert(position)


def visible_commits(commits: Sequence[CommitSummary], cutoff: datetime) -> list[CommitSummary]:
    return [c for c in commits if c.datetime <= cutoff]


def file_units(commits: Sequence[CommitSummary]) -> list[FileUnits]:
    """Per-file units of the given commits, largest first.

    Line datasets count lines per file. File-size datasets report the size of
    each file in the most recent of the given commits that contains it.
    """
    latest: dict[str, LoadedRecord] = {}
    counts: dict[str, int] = {}
    for commit in commits:
        for record in commit.records:
            counts[record.file] = counts.get(record.file, 0) + 1
            current = latest.get(record.file)
            if current is None or record.datetime >= current.datetime:
                latest[record.file] = record

    units: list[FileUnits] = []
    for path, record in latest.items():
        amount = record.size if isinstance(record, LoadedFileSizeRecord) else counts[path]
        units.append(FileUnits(file=path, category=record.category, units=amount))
    units.sort(key=lambda u: u.units, reverse=True)
    return units


def recompute_playback(commits: Sequence[CommitSummary], position: float) -> PlaybackView:
    """Visible subset and per-file units for a slider position.

    The size scale always spans the full commit list so bubble sizes stay put
    while the slider moves.
    """
    size_scale = radius_scale(commits)
    if not commits:
        return PlaybackView(position=position, cutoff=None, visible=[], files=[], size_scale=size_scale)
    cutoff = cutoff_for(commits, position)
    visible = visible_commits(commits, cutoff)
    return PlaybackView(
        position=position,
        cutoff=cutoff,
        visible=visible,
        files=file_units(visible),
        size_scale=size_scale,
    )
