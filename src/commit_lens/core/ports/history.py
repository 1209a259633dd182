from dataclasses import dataclass
from typing import Protocol


class HistoryUnavailableError(RuntimeError):
    """Raised when the commit list of a repository cannot be read."""


@dataclass(frozen=True)
class BlameLine:
    commit: str
    author: str | None
    author_time: int | None
    content: str


class HistoryQuery(Protocol):
    def is_available(self) -> bool: ...

    def list_commits(self) -> list[str]: ...

    def list_files(self, commit: str) -> list[str]: ...

    def blob_size(self, commit: str, path: str) -> int | None: ...

    def author_timestamp(self, commit: str) -> str | None: ...

    def blame(self, path: str) -> list[BlameLine] | None: ...
