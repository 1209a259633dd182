from pathlib import Path

from commit_lens.core.blame import (
    UNKNOWN_AUTHOR,
    BlameExtractor,
    category_for,
    find_tracked_files,
    split_lines,
)
from commit_lens.git import InMemoryHistory

EXTENSIONS = [".js", ".css"]


def _write(root: Path, rel: str, content: str) -> Path:
    path = root / rel
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(content, encoding="utf-8")
    return path


def test_split_lines_keeps_trailing_empty_line() -> None:
    assert split_lines("a\nb\n") == ["a", "b", ""]
    assert split_lines("a\r\nb") == ["a", "b"]
    assert split_lines("") == [""]


def test_category_for_allow_listed_and_other() -> None:
    assert category_for("src/App.JS", EXTENSIONS) == "js"
    assert category_for("style.css", EXTENSIONS) == "css"
    assert category_for("README.md", EXTENSIONS) == "other"


def test_find_tracked_files_filters_and_skips(tmp_path: Path) -> None:
    _write(tmp_path, "b.js", "x")
    _write(tmp_path, "a/style.css", "x")
    _write(tmp_path, "node_modules/dep.js", "x")
    _write(tmp_path, ".git/hooks/x.js", "x")
    _write(tmp_path, "notes.md", "x")
    skipped = _write(tmp_path, "meta/out.js", "x")

    found = find_tracked_files(tmp_path, EXTENSIONS, skip=[skipped])

    assert [p.relative_to(tmp_path).as_posix() for p in found] == ["a/style.css", "b.js"]


def test_extract_file_uses_blame_attribution(tmp_path: Path, in_memory_history: InMemoryHistory) -> None:
    path = _write(tmp_path, "app.js", "const a = 1;\nconsole.log(a);\nexport default a;\n")
    extractor = BlameExtractor(in_memory_history, tmp_path, EXTENSIONS)

    records = extractor.extract_file(path)

    assert [r.line for r in records] == [1, 2, 3]
    assert [r.commit for r in records] == ["aaaaaaaa", "aaaaaaaa", "bbbbbbbb"]
    assert [r.author for r in records] == ["Alice", "Alice", "Bob"]
    assert records[0].file == "app.js"
    assert records[0].category == "js"
    assert records[0].datetime == "2024-01-01T09:00:00+00:00"
    assert records[2].timezone == "+02:00"
    assert records[2].time == "14:30:00"
    assert records[1].length == len("console.log(a);")
    assert all(r.depth == 0 for r in records)


def test_commit_timestamps_are_memoized_per_run(tmp_path: Path, in_memory_history: InMemoryHistory) -> None:
    app = _write(tmp_path, "app.js", "x\n")
    css = _write(tmp_path, "style.css", "x\n")
    extractor = BlameExtractor(in_memory_history, tmp_path, EXTENSIONS)

    list(extractor.extract([app, css]))

    assert sorted(in_memory_history.timestamp_queries) == sorted(["a" * 40, "b" * 40])


def test_untracked_file_falls_back_to_direct_enumeration(tmp_path: Path, in_memory_history: InMemoryHistory) -> None:
    path = _write(tmp_path, "new.js", "one\ntwo\n")
    tokens = iter(["11111111", "22222222", "33333333"])
    extractor = BlameExtractor(in_memory_history, tmp_path, EXTENSIONS, token_factory=lambda: next(tokens))

    records = extractor.extract_file(path)

    # "one", "two" and the empty line after the trailing newline
    assert len(records) == 3
    assert [r.length for r in records] == [3, 3, 0]
    assert all(r.author == UNKNOWN_AUTHOR for r in records)
    assert [r.commit for r in records] == ["11111111", "22222222", "33333333"]
    assert all(r.datetime == f"{r.date}T{r.time}{r.timezone}" for r in records)


def test_unavailable_history_skips_blame(tmp_path: Path) -> None:
    history = InMemoryHistory(available=False)
    path = _write(tmp_path, "a.css", "p {}\n")

    extractor = BlameExtractor(history, tmp_path, EXTENSIONS)
    records = extractor.extract_file(path)

    assert len(records) == 2
    assert records[0].category == "css"
    assert all(len(r.commit) == 8 for r in records)
    assert history.timestamp_queries == []


def test_empty_blame_falls_back_to_one_empty_line(tmp_path: Path) -> None:
    history = InMemoryHistory(blames={"empty.js": []})
    path = _write(tmp_path, "empty.js", "")

    records = BlameExtractor(history, tmp_path, EXTENSIONS, token_factory=lambda: "0badc0de").extract_file(path)

    assert [(r.line, r.length, r.author, r.commit) for r in records] == [(1, 0, UNKNOWN_AUTHOR, "0badc0de")]


def test_missing_commit_timestamp_uses_author_time(tmp_path: Path, in_memory_history: InMemoryHistory) -> None:
    in_memory_history.commits.clear()
    path = _write(tmp_path, "style.css", "body { margin: 0; }\n")

    records = BlameExtractor(in_memory_history, tmp_path, EXTENSIONS).extract_file(path)

    assert records[0].datetime == "2024-01-01T09:00:00+00:00"
