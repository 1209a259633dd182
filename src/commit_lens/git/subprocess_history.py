import logging
import re
import subprocess
from pathlib import Path

from commit_lens.core.ports.history import BlameLine, HistoryUnavailableError

logger = logging.getLogger(__name__)

_PORCELAIN_HEADER = re.compile(r"^([0-9a-f]{40,64})\s")
_NEWLINE = re.compile(r"\r?\n")


def get_git_repo_root(start_dir: Path) -> Path | None:
    result = subprocess.run(
        ["git", "-C", str(start_dir), "rev-parse", "--show-toplevel"],
        check=False,
        capture_output=True,
        text=True,
    )
    if result.returncode != 0:
        return None
    root = result.stdout.strip()
    if not root:
        return None
    return Path(root)


def parse_line_porcelain(output: str) -> list[BlameLine]:
    """Parse ``git blame --line-porcelain`` output into one entry per line."""
    lines = _NEWLINE.split(output)
    entries: list[BlameLine] = []
    i = 0
    while i < len(lines):
        match = _PORCELAIN_HEADER.match(lines[i])
        i += 1
        if not match:
            continue
        author: str | None = None
        author_time: int | None = None
        while i < len(lines) and not lines[i].startswith("\t"):
            header = lines[i]
            if header.startswith("author "):
                author = header[len("author ") :]
            elif header.startswith("author-time "):
                author_time = int(header[len("author-time ") :])
            i += 1
        if i < len(lines):
            entries.append(BlameLine(commit=match.group(1), author=author, author_time=author_time, content=lines[i][1:]))
            i += 1
    return entries


class GitHistory:
    """Read-only history queries answered by the ``git`` executable."""

    def __init__(self, repo_path: Path) -> None:
        self.repo_path = Path(repo_path).resolve()

    def _run_git(self, args: list[str]) -> str | None:
        result = subprocess.run(
            ["git", "-C", str(self.repo_path), *args],
            check=False,
            capture_output=True,
            text=True,
            encoding="utf-8",
            errors="replace",
        )
        if result.returncode != 0:
            logger.debug("git %s failed: %s", " ".join(args), result.stderr.strip())
            return None
        return result.stdout

    def is_available(self) -> bool:
        output = self._run_git(["rev-parse", "--is-inside-work-tree"])
        return output is not None and output.strip() == "true"

    def list_commits(self) -> list[str]:
        output = self._run_git(["rev-list", "--all"])
        if not output or not output.strip():
            raise HistoryUnavailableError(f"Cannot read git history of {self.repo_path}")
        return [line for line in output.splitlines() if line.strip()]

    def list_files(self, commit: str) -> list[str]:
        # -z keeps non-ASCII paths unquoted
        output = self._run_git(["ls-tree", "-r", "-z", "--name-only", commit])
        if output is None:
            return []
        return [path for path in output.split("\0") if path]

    def blob_size(self, commit: str, path: str) -> int | None:
        listing = self._run_git(["ls-tree", "-z", commit, "--", path])
        if not listing:
            return None
        # <mode> SP <type> SP <object> TAB <path> NUL
        parts = listing.split("\t", 1)[0].split()
        if len(parts) < 3:
            return None
        size = self._run_git(["cat-file", "-s", parts[2]])
        if not size or not size.strip().isdigit():
            return None
        return int(size.strip())

    def author_timestamp(self, commit: str) -> str | None:
        output = self._run_git(["show", "-s", "--format=%aI", commit])
        if output is None:
            return None
        return output.strip() or None

    def blame(self, path: str) -> list[BlameLine] | None:
        output = self._run_git(["blame", "--line-porcelain", "--", path])
        if not output:
            return None
        return parse_line_porcelain(output)
