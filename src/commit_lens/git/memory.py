from dataclasses import dataclass, field

from commit_lens.core.ports.history import BlameLine, HistoryUnavailableError


@dataclass(frozen=True)
class InMemoryCommit:
    commit_id: str
    timestamp: str | None
    files: dict[str, int | None]


@dataclass
class InMemoryHistory:
    """History backed by plain dictionaries.

    ``files`` maps a path to its blob size (``None`` simulates an unreadable
    blob). ``blames`` maps a path to its attribution; paths without an entry
    behave like files outside version control.
    """

    commits: list[InMemoryCommit] = field(default_factory=list)
    blames: dict[str, list[BlameLine]] = field(default_factory=dict)
    available: bool = True
    timestamp_queries: list[str] = field(default_factory=list)

    def _commit(self, commit: str) -> InMemoryCommit | None:
        for candidate in self.commits:
            if candidate.commit_id == commit:
                return candidate
        return None

    def is_available(self) -> bool:
        return self.available

    def list_commits(self) -> list[str]:
        if not self.available or not self.commits:
            raise HistoryUnavailableError("Cannot read in-memory history.")
        return [c.commit_id for c in self.commits]

    def list_files(self, commit: str) -> list[str]:
        found = self._commit(commit)
        return list(found.files) if found else []

    def blob_size(self, commit: str, path: str) -> int | None:
        found = self._commit(commit)
        if found is None:
            return None
        return found.files.get(path)

    def author_timestamp(self, commit: str) -> str | None:
        self.timestamp_queries.append(commit)
        found = self._commit(commit)
        return found.timestamp if found else None

    def blame(self, path: str) -> list[BlameLine] | None:
        if not self.available:
            return None
        return self.blames.get(path)
