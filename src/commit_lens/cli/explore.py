"""Headless exploration of a dataset: summaries, playback and brush selection."""

from __future__ import annotations

import asyncio
from collections.abc import Sequence
from datetime import UTC, datetime
from pathlib import Path
from typing import Annotated, Any

import typer
from rich.console import Console
from rich.table import Table

from commit_lens.core.aggregate import dataset_stats, summarize_commits
from commit_lens.core.dataset import DatasetFormatError, DatasetKind, fetch_dataset
from commit_lens.core.playback import recompute_playback
from commit_lens.core.scales import build_plot_scales
from commit_lens.core.selection import BrushSelection, recompute_selection
from commit_lens.models import CommitSummary, LoadedRecord
from commit_lens.settings import load_settings

console = Console()

DatasetArgument = Annotated[Path, typer.Argument(help="Dataset CSV produced by 'extract'.")]


def _render_table(headers: Sequence[str], rows: Sequence[tuple[Any, ...]]) -> None:
    table = Table(show_lines=False)
    for h in headers:
        table.add_column(h)
    for row in rows:
        table.add_row(*(str(v) for v in row))
    console.print(table)
    console.print(f"({len(rows)} rows)")


def _load(dataset: Path) -> tuple[DatasetKind, list[LoadedRecord], list[CommitSummary]]:
    try:
        kind, records = asyncio.run(fetch_dataset(dataset))
    except (OSError, DatasetFormatError) as exc:
        console.print(f"[red]Cannot load {dataset}: {exc}[/red]")
        raise typer.Exit(1) from exc
    commits = summarize_commits(records, load_settings().commit_url_template)
    return kind, records, commits


def _parse_moment(value: str) -> datetime:
    moment = datetime.fromisoformat(value)
    return moment.replace(tzinfo=UTC) if moment.tzinfo is None else moment


def summary(
    dataset: DatasetArgument,
    limit: Annotated[int, typer.Option(help="Max commits to list.")] = 20,
) -> None:
    """Print dataset statistics and per-commit summaries."""
    kind, records, commits = _load(dataset)
    stats = dataset_stats(records, commits)
    console.print(f"[bold]Total records:[/bold] {stats.total_records}")
    console.print(f"[bold]Total commits:[/bold] {stats.total_commits}")
    console.print(f"[bold]Files:[/bold] {stats.total_files}")
    if stats.longest_line is not None:
        console.print(f"[bold]Longest line:[/bold] {stats.longest_line}")
        console.print(f"[bold]Most lines in a file:[/bold] {stats.max_file_lines}")
    if stats.total_size is not None:
        console.print(f"[bold]Total size:[/bold] {stats.total_size} B")
    _render_table(
        ["commit", "author", "datetime", "hour", kind.unit if kind is DatasetKind.LOC else "bytes"],
        [(c.id, c.author or "", c.datetime.isoformat(), f"{c.hour_fraction:.2f}", c.total) for c in commits[:limit]],
    )


def playback(
    dataset: DatasetArgument,
    position: Annotated[float, typer.Option(min=0, max=100, help="Slider position in [0, 100].")] = 100.0,
    limit: Annotated[int, typer.Option(help="Max files to list.")] = 20,
) -> None:
    """Show the commits and files visible at a time-slider position."""
    kind, _, commits = _load(dataset)
    view = recompute_playback(commits, position)
    if view.cutoff is None:
        console.print("No commits in dataset.")
        return
    console.print(f"[bold]Cutoff:[/bold] {view.cutoff.isoformat()}")
    console.print(f"[bold]Visible commits:[/bold] {len(view.visible)} of {len(commits)}")
    _render_table(["file", "type", kind.unit if kind is DatasetKind.LOC else "bytes"], [(f.file, f.category, f.units) for f in view.files[:limit]])


def brush(
    dataset: DatasetArgument,
    start: Annotated[str, typer.Option(help="Earliest commit time (ISO 8601).")],
    end: Annotated[str, typer.Option(help="Latest commit time (ISO 8601).")],
    from_hour: Annotated[float, typer.Option(min=0, max=24, help="Earliest hour of day.")] = 0.0,
    to_hour: Annotated[float, typer.Option(min=0, max=24, help="Latest hour of day.")] = 24.0,
) -> None:
    """Select commits inside a time / hour-of-day rectangle and break them down by type."""
    kind, _, commits = _load(dataset)
    if not commits:
        console.print("No commits selected")
        return
    try:
        t0, t1 = _parse_moment(start), _parse_moment(end)
    except ValueError as exc:
        console.print(f"[red]Invalid timestamp: {exc}[/red]")
        raise typer.Exit(1) from exc
    scales = build_plot_scales(commits)
    selection = BrushSelection.from_corners(
        (scales.x(t0), scales.y(from_hour)),
        (scales.x(t1), scales.y(to_hour)),
    )
    view = recompute_selection(commits, selection, scales, kind.unit)
    console.print(view.count_text)
    if view.breakdown:
        _render_table(["type", "count", "share"], [(e.category, e.count, e.label) for e in view.breakdown])
