import logging
from pathlib import Path

from commit_lens.core.blame import BlameExtractor, find_tracked_files
from commit_lens.core.dataset import DatasetKind, write_dataset
from commit_lens.core.ports.history import HistoryQuery
from commit_lens.core.snapshot import snapshot_history
from commit_lens.settings import Settings

logger = logging.getLogger(__name__)


def _resolve_output(repo_root: Path, output: Path | None, default: Path) -> Path:
    path = output if output is not None else default
    return path if path.is_absolute() else repo_root / path


def run_loc_extraction(
    history: HistoryQuery,
    repo_root: Path,
    settings: Settings,
    output: Path | None = None,
) -> tuple[Path, int]:
    """Write the line-provenance dataset for the current checkout.

    Returns (output_path, row_count).
    """
    output_path = _resolve_output(repo_root, output, settings.loc_path)
    files = find_tracked_files(repo_root, settings.extensions, settings.exclude_dirs, skip=[output_path])
    logger.info("Found %d file(s) to attribute", len(files))
    extractor = BlameExtractor(history, repo_root, settings.extensions)
    count = write_dataset(output_path, extractor.extract(files), DatasetKind.LOC)
    return output_path, count


def run_filesize_extraction(
    history: HistoryQuery,
    repo_root: Path,
    settings: Settings,
    output: Path | None = None,
) -> tuple[Path, int]:
    """Write the per-commit file-size dataset.

    Returns (output_path, row_count). ``HistoryUnavailableError`` propagates
    when commits cannot be enumerated.
    """
    output_path = _resolve_output(repo_root, output, settings.filesize_path)
    records = list(snapshot_history(history, settings.extensions))
    count = write_dataset(output_path, records, DatasetKind.FILESIZE)
    return output_path, count
