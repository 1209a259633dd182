"""Per-commit file size snapshots.

Commit ids are shortened to eight characters for display. Two commits sharing
that prefix in a very large history will be merged by downstream grouping; this
is accepted rather than guarded against.
"""

import logging
from collections.abc import Iterator, Sequence
from pathlib import PurePosixPath

from commit_lens.core.blame import short_commit
from commit_lens.core.ports.history import HistoryQuery
from commit_lens.core.timestamps import split_iso
from commit_lens.models import FileSizeRecord

logger = logging.getLogger(__name__)


def snapshot_commit(history: HistoryQuery, commit: str, extensions: Sequence[str]) -> list[FileSizeRecord]:
    """Size every allow-listed file in the tree of *commit*.

    Returns an empty list when the commit timestamp cannot be resolved. Files
    whose blob size cannot be resolved are left out.
    """
    iso = history.author_timestamp(commit)
    if iso is None:
        logger.debug("Skipping commit %s: no timestamp", commit)
        return []
    parts = split_iso(iso)
    records: list[FileSizeRecord] = []
    for path in history.list_files(commit):
        suffix = PurePosixPath(path).suffix.lower()
        if suffix not in extensions:
            continue
        size = history.blob_size(commit, path)
        if size is None:
            logger.debug("Skipping %s at %s: blob size unavailable", path, commit)
            continue
        records.append(
            FileSizeRecord(
                commit=short_commit(commit),
                file=path,
                size=size,
                category=suffix[1:],
                date=parts.date,
                time=parts.time,
                timezone=parts.timezone,
                datetime=parts.datetime,
            )
        )
    return records


def snapshot_history(history: HistoryQuery, extensions: Sequence[str]) -> Iterator[FileSizeRecord]:
    """Yield size records for every commit reachable from any ref.

    Raises ``HistoryUnavailableError`` when commits cannot be enumerated.
    """
    commits = history.list_commits()
    logger.info("Snapshotting %d commit(s)", len(commits))
    for commit in commits:
        yield from snapshot_commit(history, commit, extensions)
