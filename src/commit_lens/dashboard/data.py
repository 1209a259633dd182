"""Dataset loading for the dashboard.

The fetch resolves completely before any aggregation runs; a failed fetch
leaves the dashboard with an empty dataset and an error message.
"""

from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass, field
from pathlib import Path

from commit_lens.core.aggregate import DEFAULT_COMMIT_URL, DatasetStats, dataset_stats, summarize_commits
from commit_lens.core.dataset import DatasetKind, fetch_dataset
from commit_lens.core.scales import PlotScales, build_plot_scales
from commit_lens.models import CommitSummary, LoadedRecord

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class DashboardData:
    kind: DatasetKind
    records: list[LoadedRecord] = field(default_factory=list)
    commits: list[CommitSummary] = field(default_factory=list)
    scales: PlotScales | None = None
    error: str = ""

    @property
    def stats(self) -> DatasetStats:
        return dataset_stats(self.records, self.commits)


def build_dashboard_data(
    kind: DatasetKind,
    records: list[LoadedRecord],
    url_template: str = DEFAULT_COMMIT_URL,
) -> DashboardData:
    commits = summarize_commits(records, url_template)
    scales = build_plot_scales(commits) if commits else None
    return DashboardData(kind=kind, records=records, commits=commits, scales=scales)


def load_dashboard_data(path: str | Path, url_template: str = DEFAULT_COMMIT_URL) -> DashboardData:
    try:
        kind, records = asyncio.run(fetch_dataset(path))
    except Exception as exc:
        logger.exception("Failed to load dataset %s", path)
        return DashboardData(kind=DatasetKind.LOC, error=f"Failed to load dataset: {exc}")
    return build_dashboard_data(kind, records, url_template)
