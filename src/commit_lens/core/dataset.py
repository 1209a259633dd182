"""Delimited-text serialization of provenance records and its inverse.

The loader is a deserialization contract with ``serialize_records`` as its only
producer; rows are assumed to be well-formed.
"""

from __future__ import annotations

import asyncio
import io
import logging
from collections.abc import Iterable, Sequence
from datetime import datetime
from enum import Enum
from pathlib import Path
from typing import Any

import pandas as pd

from commit_lens.models import (
    FileSizeRecord,
    LineRecord,
    LoadedFileSizeRecord,
    LoadedLineRecord,
    LoadedRecord,
)

logger = logging.getLogger(__name__)

DELIMITER = ","
QUOTE = '"'


class DatasetFormatError(ValueError):
    """Raised when a file does not carry one of the known dataset headers."""


class DatasetKind(Enum):
    LOC = ("file", "line", "type", "commit", "author", "date", "time", "timezone", "datetime", "depth", "length")
    FILESIZE = ("commit", "file", "size", "type", "date", "time", "timezone", "datetime")

    @property
    def columns(self) -> tuple[str, ...]:
        return self.value

    @property
    def header(self) -> str:
        return DELIMITER.join(self.value)

    @property
    def unit(self) -> str:
        return "lines" if self is DatasetKind.LOC else "files"

    @classmethod
    def from_columns(cls, columns: Sequence[str]) -> DatasetKind:
        for kind in cls:
            if tuple(columns) == kind.columns:
                return kind
        raise DatasetFormatError(f"Unrecognized dataset header: {DELIMITER.join(columns)}")


def escape_field(value: object) -> str:
    """Quote a field only when it contains the delimiter, doubling inner quotes."""
    text = str(value)
    if DELIMITER in text:
        return QUOTE + text.replace(QUOTE, QUOTE * 2) + QUOTE
    return text


def _row_values(record: LineRecord | FileSizeRecord) -> tuple[object, ...]:
    if isinstance(record, LineRecord):
        return (
            record.file,
            record.line,
            record.category,
            record.commit,
            record.author,
            record.date,
            record.time,
            record.timezone,
            record.datetime,
            record.depth,
            record.length,
        )
    return (
        record.commit,
        record.file,
        record.size,
        record.category,
        record.date,
        record.time,
        record.timezone,
        record.datetime,
    )


def serialize_records(records: Iterable[LineRecord | FileSizeRecord], kind: DatasetKind) -> str:
    """Render the header and one line per record, without a trailing newline."""
    lines = [kind.header]
    lines.extend(DELIMITER.join(escape_field(v) for v in _row_values(record)) for record in records)
    return "\n".join(lines)


def write_dataset(path: Path, records: Iterable[LineRecord | FileSizeRecord], kind: DatasetKind) -> int:
    """Write *records* to *path* and return the number of data rows."""
    materialized = list(records)
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(serialize_records(materialized, kind), encoding="utf-8")
    logger.info("Wrote %d row(s) to %s", len(materialized), path)
    return len(materialized)


def _midnight(date: str, timezone: str) -> datetime:
    return datetime.fromisoformat(f"{date}T00:00{timezone}")


def _to_loaded(row: dict[str, Any], kind: DatasetKind) -> LoadedRecord:
    if kind is DatasetKind.LOC:
        return LoadedLineRecord(
            file=row["file"],
            line=int(row["line"]),
            category=row["type"],
            commit=row["commit"],
            author=row["author"],
            date=_midnight(row["date"], row["timezone"]),
            time=row["time"],
            timezone=row["timezone"],
            datetime=datetime.fromisoformat(row["datetime"]),
            depth=int(row["depth"]),
            length=int(row["length"]),
        )
    return LoadedFileSizeRecord(
        commit=row["commit"],
        file=row["file"],
        size=int(row["size"]),
        category=row["type"],
        date=_midnight(row["date"], row["timezone"]),
        time=row["time"],
        timezone=row["timezone"],
        datetime=datetime.fromisoformat(row["datetime"]),
    )


def parse_dataset(text: str) -> tuple[DatasetKind, list[LoadedRecord]]:
    """Parse serialized dataset text into typed records, in file order."""
    try:
        frame = pd.read_csv(io.StringIO(text), dtype=str, keep_default_na=False)
    except pd.errors.EmptyDataError as exc:
        raise DatasetFormatError("Dataset is empty") from exc
    kind = DatasetKind.from_columns([str(c) for c in frame.columns])
    return kind, [_to_loaded(row, kind) for row in frame.to_dict("records")]


async def fetch_dataset(path: str | Path) -> tuple[DatasetKind, list[LoadedRecord]]:
    """Read and parse a dataset file without blocking the event loop."""
    text = await asyncio.to_thread(Path(path).read_text, encoding="utf-8")
    kind, records = parse_dataset(text)
    logger.info("Loaded %d %s record(s) from %s", len(records), kind.name.lower(), path)
    return kind, records
