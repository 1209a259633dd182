"""Shared fixtures and helpers for tests."""

import os
import subprocess
from collections.abc import Callable
from datetime import datetime
from pathlib import Path
from typing import Any

import pytest

from commit_lens.core.ports.history import BlameLine
from commit_lens.git import InMemoryCommit, InMemoryHistory
from commit_lens.models import LoadedFileSizeRecord, LoadedLineRecord

_REPO_ROOT = Path(__file__).parent.parent


# ---------------------------------------------------------------------------
# Auto-marker: tag tests as "unit" or "integration" based on directory
# ---------------------------------------------------------------------------


def pytest_collection_modifyitems(items: list[pytest.Item]) -> None:
    for item in items:
        test_path = Path(str(item.fspath))
        rel = test_path.relative_to(_REPO_ROOT / "tests")
        parts = rel.parts
        if parts and parts[0] == "integration":
            item.add_marker(pytest.mark.integration)
        else:
            item.add_marker(pytest.mark.unit)


# ---------------------------------------------------------------------------
# Git helpers
# ---------------------------------------------------------------------------


def run_git(args: list[str], cwd: Path, env: dict[str, str] | None = None) -> str:
    result = subprocess.run(
        ["git", *args],
        cwd=cwd,
        check=True,
        capture_output=True,
        text=True,
        env=env,
    )
    return result.stdout.strip()


def commit_all(repo: Path, message: str, when: str) -> str:
    """Stage everything and commit with a fixed author/committer date."""
    run_git(["add", "."], repo)
    run_git(
        [
            "-c",
            "user.name=Test Author",
            "-c",
            "user.email=author@example.com",
            "commit",
            "-m",
            message,
            "--date",
            when,
        ],
        repo,
        env={**os.environ, "GIT_COMMITTER_DATE": when},
    )
    return run_git(["rev-parse", "HEAD"], repo)


@pytest.fixture
def git_repo(tmp_path: Path) -> Path:
    """A repository with two commits touching .js and .css files.

    Commit 1 (2024-01-01 09:00 +00:00): app.js (2 lines), style.css (1 line), notes.md
    Commit 2 (2024-01-02 14:30 +02:00): app.js gains a third line
    """
    repo = tmp_path / "repo"
    repo.mkdir()
    run_git(["init"], repo)
    run_git(["config", "user.name", "Test Author"], repo)
    run_git(["config", "user.email", "author@example.com"], repo)

    (repo / "app.js").write_text("const a = 1;\nconsole.log(a);\n", encoding="utf-8")
    (repo / "style.css").write_text("body { margin: 0; }\n", encoding="utf-8")
    (repo / "notes.md").write_text("# notes\n", encoding="utf-8")
    commit_all(repo, "initial", "2024-01-01T09:00:00+00:00")

    (repo / "app.js").write_text("const a = 1;\nconsole.log(a);\nexport default a;\n", encoding="utf-8")
    commit_all(repo, "export", "2024-01-02T14:30:00+02:00")
    return repo


# ---------------------------------------------------------------------------
# In-memory fixtures
# ---------------------------------------------------------------------------

FULL_A = "a" * 40
FULL_B = "b" * 40


@pytest.fixture
def in_memory_history() -> InMemoryHistory:
    return InMemoryHistory(
        commits=[
            InMemoryCommit(FULL_B, "2024-01-02T14:30:00+02:00", {"app.js": 48, "style.css": 20, "notes.md": 8}),
            InMemoryCommit(FULL_A, "2024-01-01T09:00:00+00:00", {"app.js": 31, "style.css": 20}),
        ],
        blames={
            "app.js": [
                BlameLine(FULL_A, "Alice", 1704099600, "const a = 1;"),
                BlameLine(FULL_A, "Alice", 1704099600, "console.log(a);"),
                BlameLine(FULL_B, "Bob", 1704198600, "export default a;"),
            ],
            "style.css": [BlameLine(FULL_A, "Alice", 1704099600, "body { margin: 0; }")],
        },
    )


@pytest.fixture
def line_record() -> Callable[..., LoadedLineRecord]:
    def _make(**overrides: Any) -> LoadedLineRecord:
        moment = datetime.fromisoformat(overrides.pop("datetime", "2024-01-01T09:00:00+00:00"))
        values: dict[str, Any] = {
            "file": "src/app.js",
            "line": 1,
            "category": "js",
            "commit": "c1",
            "author": "Al",
            "date": moment.replace(hour=0, minute=0, second=0),
            "time": moment.strftime("%H:%M:%S"),
            "timezone": "+00:00",
            "datetime": moment,
            "depth": 0,
            "length": 5,
        }
        values.update(overrides)
        return LoadedLineRecord(**values)

    return _make


@pytest.fixture
def size_record() -> Callable[..., LoadedFileSizeRecord]:
    def _make(**overrides: Any) -> LoadedFileSizeRecord:
        moment = datetime.fromisoformat(overrides.pop("datetime", "2024-01-01T09:00:00+00:00"))
        values: dict[str, Any] = {
            "commit": "c1",
            "file": "src/app.js",
            "size": 100,
            "category": "js",
            "date": moment.replace(hour=0, minute=0, second=0),
            "time": moment.strftime("%H:%M:%S"),
            "timezone": "+00:00",
            "datetime": moment,
        }
        values.update(overrides)
        return LoadedFileSizeRecord(**values)

    return _make
