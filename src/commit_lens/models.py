"""Record types produced by extraction and derived by the client-side views.

Records are write-once; summaries are rebuilt from scratch on every load.
"""

from __future__ import annotations

import datetime as dt
from dataclasses import dataclass, field


@dataclass(frozen=True)
class LineRecord:
    file: str
    line: int
    category: str
    commit: str
    author: str
    date: str
    time: str
    timezone: str
    datetime: str
    depth: int
    length: int


@dataclass(frozen=True)
class FileSizeRecord:
    commit: str
    file: str
    size: int
    category: str
    date: str
    time: str
    timezone: str
    datetime: str


@dataclass(frozen=True)
class LoadedLineRecord:
    """A ``LineRecord`` after deserialization, with parsed timestamps."""

    file: str
    line: int
    category: str
    commit: str
    author: str
    date: dt.datetime
    time: str
    timezone: str
    datetime: dt.datetime
    depth: int
    length: int


@dataclass(frozen=True)
class LoadedFileSizeRecord:
    """A ``FileSizeRecord`` after deserialization, with parsed timestamps."""

    commit: str
    file: str
    size: int
    category: str
    date: dt.datetime
    time: str
    timezone: str
    datetime: dt.datetime


LoadedRecord = LoadedLineRecord | LoadedFileSizeRecord


@dataclass(frozen=True)
class CommitSummary:
    id: str
    url: str
    author: str | None
    date: dt.datetime
    time: str
    timezone: str
    datetime: dt.datetime
    hour_fraction: float
    total: int
    records: tuple[LoadedRecord, ...] = field(repr=False, compare=False)


@dataclass(frozen=True)
class BreakdownEntry:
    category: str
    count: int
    percent: float
    label: str


@dataclass(frozen=True)
class FileUnits:
    file: str
    category: str
    units: int
