"""Dataset generation commands."""

from __future__ import annotations

from pathlib import Path
from typing import Annotated

import typer
from rich.console import Console

from commit_lens.core.extract import run_filesize_extraction, run_loc_extraction
from commit_lens.core.ports.history import HistoryQuery, HistoryUnavailableError
from commit_lens.settings import load_settings

extract_app = typer.Typer(help="Generate datasets from git history.")
console = Console()

RepoOption = Annotated[Path, typer.Option("--repo", help="Repository root (default: current directory).")]
OutputOption = Annotated[Path | None, typer.Option("--output", "-o", help="Output CSV path.")]
ExtOption = Annotated[
    list[str] | None,
    typer.Option("--ext", help="Tracked file extension; repeat for several (default: .js, .css)."),
]


def _resolve_repo(repo: Path) -> Path:
    from commit_lens.git import get_git_repo_root

    return get_git_repo_root(repo) or repo.resolve()


def _get_history(repo_root: Path) -> HistoryQuery:
    from commit_lens.git import GitHistory

    return GitHistory(repo_root)


@extract_app.command("loc")
def loc(
    repo: RepoOption = Path("."),
    output: OutputOption = None,
    ext: ExtOption = None,
) -> None:
    """Write one row per line of every tracked file, attributed with git blame."""
    settings = load_settings(extensions=ext or None)
    repo_root = _resolve_repo(repo)
    path, count = run_loc_extraction(_get_history(repo_root), repo_root, settings, output)
    console.print(f"[green]Generated[/green] {path} with {count} lines.")


@extract_app.command("filesize")
def filesize(
    repo: RepoOption = Path("."),
    output: OutputOption = None,
    ext: ExtOption = None,
) -> None:
    """Write one row per tracked file in every commit, with its blob size."""
    settings = load_settings(extensions=ext or None)
    repo_root = _resolve_repo(repo)
    try:
        path, count = run_filesize_extraction(_get_history(repo_root), repo_root, settings, output)
    except HistoryUnavailableError as exc:
        console.print(f"[red]{exc}[/red]")
        raise typer.Exit(1) from exc
    console.print(f"[green]Generated[/green] {path} with {count} rows.")
