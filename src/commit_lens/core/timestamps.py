"""Decomposition of offset-qualified timestamps into dataset columns."""

import re
from dataclasses import dataclass
from datetime import datetime, timedelta

_ISO_PATTERN = re.compile(r"^(\d{4}-\d{2}-\d{2})T(\d{2}:\d{2}:\d{2})([+-]\d{2}:\d{2}|Z)")


@dataclass(frozen=True)
class TimestampParts:
    date: str
    time: str
    timezone: str
    datetime: str


def format_offset(offset: timedelta | None) -> str:
    """Render a UTC offset as ``+HH:MM`` / ``-HH:MM``."""
    minutes = int((offset or timedelta(0)).total_seconds() // 60)
    sign = "+" if minutes >= 0 else "-"
    hours, mins = divmod(abs(minutes), 60)
    return f"{sign}{hours:02d}:{mins:02d}"


def synthesize_now(now: datetime | None = None) -> TimestampParts:
    """Current local time with its zone offset."""
    moment = (now or datetime.now()).astimezone()
    date = moment.strftime("%Y-%m-%d")
    time = moment.strftime("%H:%M:%S")
    tz = format_offset(moment.utcoffset())
    return TimestampParts(date=date, time=time, timezone=tz, datetime=f"{date}T{time}{tz}")


def split_iso(iso: str | None, now: datetime | None = None) -> TimestampParts:
    """Split ``YYYY-MM-DDTHH:MM:SS+HH:MM`` into its parts.

    Missing or malformed input never raises; it yields the current local time.
    """
    if not iso:
        return synthesize_now(now)
    match = _ISO_PATTERN.match(iso)
    if not match:
        return synthesize_now(now)
    date, time, tz = match.groups()
    if tz == "Z":
        tz = "+00:00"
        iso = f"{date}T{time}{tz}"
    return TimestampParts(date=date, time=time, timezone=tz, datetime=iso)
