"""Deletion of selected folders for devpurge."""

import logging
import shutil
from pathlib import Path
from typing import Callable, Iterable

from devpurge.cache import ScanCache
from devpurge.models import CandidateDir, DeletionResult, PurgeSummary

log = logging.getLogger(__name__)


def delete_path(path: Path, dry_run: bool = False) -> tuple[bool, str | None]:
    """
    Recursively delete a directory.

    A path that is already gone counts as deleted.

    Args:
        path: Directory to delete
        dry_run: If True, don't actually delete

    Returns:
        Tuple of (success, error_message)
    """
    if not path.exists():
        return True, None

    if dry_run:
        return True, None

    try:
        shutil.rmtree(path)
        return True, None
    except PermissionError as e:
        return False, f"Permission denied: {e}"
    except OSError as e:
        return False, f"OS error: {e}"


def delete_candidates(
    candidates: Iterable[CandidateDir],
    cache: ScanCache | None = None,
    dry_run: bool = False,
    progress_callback: Callable[[DeletionResult], None] | None = None,
) -> PurgeSummary:
    """
    Delete each selected folder independently.

    A failure never stops the remaining deletions. Successfully deleted
    folders are then dropped from the scan cache; failed ones stay cached.
    Folders that had already vanished are dropped too, but their recorded
    size is not counted as reclaimed.

    Args:
        candidates: Folders to delete
        cache: Scan cache to prune, or None to leave it alone
        dry_run: If True, don't actually delete
        progress_callback: Optional callback(result) after each folder

    Returns:
        PurgeSummary with one result per folder
    """
    summary = PurgeSummary()

    for candidate in candidates:
        path = Path(candidate.path)
        already_gone = not path.exists()
        success, error = delete_path(path, dry_run=dry_run)
        if error:
            log.warning("Failed to delete %s: %s", candidate.path, error)
        elif already_gone:
            log.info("Already gone: %s", candidate.path)
        else:
            log.info("Deleted %s", candidate.path)

        result = DeletionResult(
            path=candidate.path,
            size=candidate.size,
            success=success,
            error=error,
            dry_run=dry_run,
            already_gone=already_gone,
        )
        summary.results.append(result)

        if progress_callback:
            progress_callback(result)

    if cache is not None and summary.deleted_paths:
        cache.remove(summary.deleted_paths)

    return summary
