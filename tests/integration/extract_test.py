"""End-to-end extraction against a real git repository."""

from pathlib import Path

import pytest
from typer.testing import CliRunner

from commit_lens.cli.app import app
from commit_lens.core.aggregate import summarize_commits
from commit_lens.core.dataset import DatasetKind, fetch_dataset
from commit_lens.core.extract import run_filesize_extraction, run_loc_extraction
from commit_lens.core.ports.history import HistoryUnavailableError
from commit_lens.git import GitHistory
from commit_lens.models import LoadedFileSizeRecord, LoadedLineRecord
from commit_lens.settings import Settings
from tests.conftest import commit_all, run_git


def _short(repo: Path, rev: str) -> str:
    return run_git(["rev-parse", rev], repo)[:8]


@pytest.mark.asyncio
async def test_loc_dataset_round_trip(git_repo: Path) -> None:
    path, count = run_loc_extraction(GitHistory(git_repo), git_repo, Settings())

    assert path == git_repo / "meta" / "loc.csv"
    assert count == 4

    kind, records = await fetch_dataset(path)
    assert kind is DatasetKind.LOC
    assert all(isinstance(r, LoadedLineRecord) for r in records)
    assert [(r.file, r.line) for r in records] == [("app.js", 1), ("app.js", 2), ("app.js", 3), ("style.css", 1)]

    first, second = _short(git_repo, "HEAD~1"), _short(git_repo, "HEAD")
    assert [r.commit for r in records] == [first, first, second, first]
    assert {r.author for r in records} == {"Test Author"}
    assert records[2].timezone == "+02:00"
    assert records[2].time == "14:30:00"

    commits = summarize_commits(records)
    assert [(c.id, c.total) for c in commits] == [(first, 3), (second, 1)]
    assert commits[1].hour_fraction == 14.5


@pytest.mark.asyncio
async def test_filesize_dataset_round_trip(git_repo: Path) -> None:
    path, count = run_filesize_extraction(GitHistory(git_repo), git_repo, Settings())

    assert path == git_repo / "meta" / "filesize.csv"
    assert count == 4

    kind, records = await fetch_dataset(path)
    assert kind is DatasetKind.FILESIZE
    assert all(isinstance(r, LoadedFileSizeRecord) for r in records)

    first, second = _short(git_repo, "HEAD~1"), _short(git_repo, "HEAD")
    app_js = (git_repo / "app.js").read_bytes()
    assert [(r.commit, r.file) for r in records] == [
        (second, "app.js"),
        (second, "style.css"),
        (first, "app.js"),
        (first, "style.css"),
    ]
    assert records[0].size == len(app_js)
    assert records[2].size == len(b"const a = 1;\nconsole.log(a);\n")

    commits = summarize_commits(records)
    assert commits[0].total == len(app_js) + len(b"body { margin: 0; }\n")


def test_loc_outside_a_repository_uses_fallback(tmp_path: Path) -> None:
    (tmp_path / "main.js").write_text("a\nb", encoding="utf-8")

    path, count = run_loc_extraction(GitHistory(tmp_path), tmp_path, Settings())

    assert count == 2
    rows = path.read_text(encoding="utf-8").split("\n")[1:]
    assert all(",Unknown," in row for row in rows)
    assert rows[0].split(",")[3] != rows[1].split(",")[3]


def test_filesize_outside_a_repository_fails(tmp_path: Path) -> None:
    with pytest.raises(HistoryUnavailableError):
        run_filesize_extraction(GitHistory(tmp_path), tmp_path, Settings())
    assert not (tmp_path / "meta" / "filesize.csv").exists()


def test_cli_extract_then_summarize(git_repo: Path) -> None:
    runner = CliRunner()

    extracted = runner.invoke(app, ["extract", "loc", "--repo", str(git_repo)])
    assert extracted.exit_code == 0, extracted.output
    assert "Generated" in extracted.output

    summarized = runner.invoke(app, ["summary", str(git_repo / "meta" / "loc.csv")])
    assert summarized.exit_code == 0, summarized.output
    assert "Total commits: 2" in summarized.output


def _init_repo(path: Path) -> Path:
    path.mkdir()
    run_git(["init"], path)
    return path


def test_filesize_keeps_non_ascii_paths(tmp_path: Path) -> None:
    repo = _init_repo(tmp_path / "repo")
    (repo / "café.js").write_text("let x;\n", encoding="utf-8")
    commit_all(repo, "accents", "2024-03-01T10:00:00+00:00")

    path, count = run_filesize_extraction(GitHistory(repo), repo, Settings())

    assert count == 1
    row = path.read_text(encoding="utf-8").split("\n")[1]
    assert row.split(",")[1:4] == ["café.js", "7", "js"]


def test_loc_counts_one_line_for_empty_committed_file(tmp_path: Path) -> None:
    repo = _init_repo(tmp_path / "repo")
    (repo / "empty.js").write_text("", encoding="utf-8")
    commit_all(repo, "empty", "2024-03-01T10:00:00+00:00")

    path, count = run_loc_extraction(GitHistory(repo), repo, Settings())

    assert count == 1
    row = path.read_text(encoding="utf-8").split("\n")[1]
    assert row.startswith("empty.js,1,js,")
    assert row.endswith(",0,0")
