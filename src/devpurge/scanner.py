"""Directory walking and size accounting for devpurge."""

import logging
import os
from pathlib import Path
from typing import Callable, Generator

from devpurge.categories import is_candidate_name
from devpurge.classifier import is_safe_to_delete
from devpurge.models import CandidateDir

log = logging.getLogger(__name__)

VisitCallback = Callable[[str], None]


def get_directory_size(path: Path | str) -> int:
    """
    Calculate total size of the regular files under a directory.

    Uses os.scandir with an explicit stack of pending directories, so tree
    depth is not bounded by the interpreter's recursion limit. Symlinks and
    special files are not counted and entries that cannot be read
    contribute 0.

    Returns:
        Total bytes
    """
    total_size = 0
    pending = [os.fspath(path)]

    while pending:
        current = pending.pop()
        try:
            with os.scandir(current) as entries:
                for entry in entries:
                    try:
                        if entry.is_file(follow_symlinks=False):
                            total_size += entry.stat(follow_symlinks=False).st_size
                        elif entry.is_dir(follow_symlinks=False):
                            pending.append(entry.path)
                    except OSError:
                        continue
        except OSError:
            continue

    return total_size


def walk_candidates(
    root: Path | str,
    on_visit: VisitCallback | None = None,
) -> Generator[CandidateDir, None, None]:
    """
    Walk a tree and yield every purgeable folder beneath it.

    Directories are visited pre-order, starting with ``root`` itself. A
    matched folder is sized and yielded, and nothing inside it is visited.
    Symlinked directories are not followed and unreadable entries are
    skipped. Each call starts a fresh traversal. A root that is not a
    directory yields nothing.

    Args:
        root: Directory to start from (must exist)
        on_visit: Optional callback(path) invoked for each visited directory

    Yields:
        CandidateDir for each match
    """
    start = Path(os.path.abspath(os.fspath(root)))
    if not start.is_dir():
        log.debug("Not a directory, nothing to walk: %s", start)
        return

    stack = [start]
    while stack:
        directory = stack.pop()
        if on_visit:
            on_visit(str(directory))

        name = directory.name
        if is_candidate_name(name) and is_safe_to_delete(name, directory):
            size = get_directory_size(directory)
            log.debug("Matched %s (%d bytes)", directory, size)
            yield CandidateDir(path=str(directory), size=size)
            # Don't descend into a match
            continue

        stack.extend(reversed(_list_subdirs(directory)))


def _list_subdirs(directory: Path) -> list[Path]:
    subdirs: list[Path] = []
    try:
        with os.scandir(directory) as entries:
            for entry in entries:
                try:
                    if entry.is_dir(follow_symlinks=False):
                        subdirs.append(Path(entry.path))
                except OSError:
                    continue
    except OSError as e:
        log.debug("Skipping %s: %s", directory, e)
    return subdirs


def scan_directory(
    root: Path | str,
    on_visit: VisitCallback | None = None,
) -> list[CandidateDir]:
    """
    Scan a tree and collect all purgeable folders.

    Args:
        root: Directory to scan
        on_visit: Optional callback(path) for progress reporting

    Returns:
        List of CandidateDir in traversal order
    """
    candidates = list(walk_candidates(root, on_visit))
    log.info("Found %d purgeable folders under %s", len(candidates), root)
    return candidates
