"""Grouping of provenance records into per-commit summaries.

Traversal order is part of the contract: groups appear in the order their
commit is first met in the record stream, and the first record of each group
supplies the author and timestamps of the summary. Records are never sorted
here.
"""

from __future__ import annotations

from collections import Counter
from collections.abc import Sequence
from dataclasses import dataclass
from datetime import datetime

from commit_lens.models import CommitSummary, LoadedFileSizeRecord, LoadedLineRecord, LoadedRecord

DEFAULT_COMMIT_URL = "https://github.com/YOUR_REPO/commit/{commit}"


@dataclass(frozen=True)
class DatasetStats:
    total_records: int
    total_commits: int
    total_files: int
    longest_line: int | None = None
    max_file_lines: int | None = None
    total_size: int | None = None


def hour_fraction(moment: datetime) -> float:
    """Hour of day in the timestamp's own zone, with minutes as a fraction."""
    return moment.hour + moment.minute / 60


def group_by_commit(records: Sequence[LoadedRecord]) -> dict[str, list[LoadedRecord]]:
    groups: dict[str, list[LoadedRecord]] = {}
    for record in records:
        groups.setdefault(record.commit, []).append(record)
    return groups


def _group_total(members: Sequence[LoadedRecord]) -> int:
    if isinstance(members[0], LoadedFileSizeRecord):
        return sum(m.size for m in members if isinstance(m, LoadedFileSizeRecord))
    return len(members)


def summarize_commits(
    records: Sequence[LoadedRecord],
    url_template: str = DEFAULT_COMMIT_URL,
) -> list[CommitSummary]:
    """Build one ``CommitSummary`` per distinct commit id.

    ``total`` is the number of member records for line datasets and the summed
    byte size for file-size datasets.
    """
    summaries: list[CommitSummary] = []
    for commit, members in group_by_commit(records).items():
        first = members[0]
        summaries.append(
            CommitSummary(
                id=commit,
                url=url_template.format(commit=commit),
                author=first.author if isinstance(first, LoadedLineRecord) else None,
                date=first.date,
                time=first.time,
                timezone=first.timezone,
                datetime=first.datetime,
                hour_fraction=hour_fraction(first.datetime),
                total=_group_total(members),
                records=tuple(members),
            )
        )
    return summaries


def dataset_stats(records: Sequence[LoadedRecord], commits: Sequence[CommitSummary]) -> DatasetStats:
    files = Counter(r.file for r in records)
    line_records = [r for r in records if isinstance(r, LoadedLineRecord)]
    size_records = [r for r in records if isinstance(r, LoadedFileSizeRecord)]
    return DatasetStats(
        total_records=len(records),
        total_commits=len(commits),
        total_files=len(files),
        longest_line=max((r.length for r in line_records), default=None),
        max_file_lines=max(files.values(), default=None) if line_records else None,
        total_size=sum(r.size for r in size_records) if size_records else None,
    )
