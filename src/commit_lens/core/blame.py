"""Line-level provenance extraction from ``git blame``."""

import logging
import os
import re
import secrets
from collections.abc import Callable, Iterable, Iterator, Sequence
from datetime import UTC, datetime
from pathlib import Path

from commit_lens.core.ports.history import BlameLine, HistoryQuery
from commit_lens.core.timestamps import split_iso
from commit_lens.models import LineRecord

logger = logging.getLogger(__name__)

SHORT_COMMIT_LENGTH = 8
UNKNOWN_AUTHOR = "Unknown"

_NEWLINE = re.compile(r"\r?\n")


def short_commit(commit: str) -> str:
    return commit[:SHORT_COMMIT_LENGTH]


def random_commit_token() -> str:
    return secrets.token_hex(SHORT_COMMIT_LENGTH // 2)


def category_for(path: str, extensions: Sequence[str]) -> str:
    """Lowercased extension without the dot, or ``other`` outside the allow-list."""
    suffix = Path(path).suffix.lower()
    if suffix in extensions:
        return suffix[1:]
    return "other"


def split_lines(text: str) -> list[str]:
    """Split on ``\\n`` or ``\\r\\n``; a trailing newline yields a final empty line."""
    return _NEWLINE.split(text)


def find_tracked_files(
    root: Path,
    extensions: Sequence[str],
    exclude_dirs: Sequence[str] = ("node_modules", ".git"),
    skip: Iterable[Path] = (),
) -> list[Path]:
    """Walk *root* and return files with an allow-listed extension, sorted by path."""
    skipped = {p.resolve() for p in skip}
    found: list[Path] = []
    for dirpath, dirnames, filenames in os.walk(root):
        dirnames[:] = sorted(d for d in dirnames if d not in exclude_dirs)
        for name in sorted(filenames):
            path = Path(dirpath) / name
            if path.suffix.lower() not in extensions:
                continue
            if path.resolve() in skipped:
                continue
            found.append(path)
    return sorted(found, key=lambda p: p.relative_to(root).as_posix())


class BlameExtractor:
    """Turns blame output into ``LineRecord`` rows, one per physical line.

    Author timestamps are memoized per commit for the lifetime of the extractor,
    so one instance should be used per extraction run.
    """

    def __init__(
        self,
        history: HistoryQuery,
        repo_root: Path,
        extensions: Sequence[str],
        token_factory: Callable[[], str] = random_commit_token,
        use_history: bool | None = None,
    ) -> None:
        self.history = history
        self.repo_root = Path(repo_root).resolve()
        self.extensions = list(extensions)
        self._token_factory = token_factory
        self._use_history = history.is_available() if use_history is None else use_history
        self._iso_cache: dict[str, str | None] = {}
        if not self._use_history:
            logger.warning("Git repository not detected in %s; using fallback metadata.", self.repo_root)

    def _relative(self, path: Path) -> str:
        resolved = Path(path).resolve()
        try:
            return resolved.relative_to(self.repo_root).as_posix()
        except ValueError:
            return Path(path).as_posix()

    def _commit_iso(self, line: BlameLine) -> str | None:
        if line.commit not in self._iso_cache:
            iso = self.history.author_timestamp(line.commit)
            if iso is None and line.author_time is not None:
                iso = datetime.fromtimestamp(line.author_time, tz=UTC).isoformat()
            self._iso_cache[line.commit] = iso
        return self._iso_cache[line.commit]

    def _fallback_lines(self, path: Path) -> list[BlameLine]:
        text = Path(path).read_text(encoding="utf-8", errors="replace")
        return [BlameLine(commit="", author=UNKNOWN_AUTHOR, author_time=None, content=line) for line in split_lines(text)]

    def extract_file(self, path: Path) -> list[LineRecord]:
        rel_path = self._relative(path)
        attributed = self.history.blame(rel_path) if self._use_history else None
        if not attributed:
            logger.debug("No attribution for %s; enumerating lines directly", rel_path)
            attributed = self._fallback_lines(path)
        category = category_for(rel_path, self.extensions)

        records: list[LineRecord] = []
        for index, entry in enumerate(attributed, start=1):
            if entry.commit:
                commit = short_commit(entry.commit)
                parts = split_iso(self._commit_iso(entry))
            else:
                commit = self._token_factory()
                parts = split_iso(None)
            records.append(
                LineRecord(
                    file=rel_path,
                    line=index,
                    category=category,
                    commit=commit,
                    author=entry.author or UNKNOWN_AUTHOR,
                    date=parts.date,
                    time=parts.time,
                    timezone=parts.timezone,
                    datetime=parts.datetime,
                    depth=0,
                    length=len(entry.content),
                )
            )
        return records

    def extract(self, paths: Iterable[Path]) -> Iterator[LineRecord]:
        for path in paths:
            yield from self.extract_file(path)
