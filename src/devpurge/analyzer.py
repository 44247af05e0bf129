"""Candidate collection for devpurge."""

import logging
from pathlib import Path

from devpurge.cache import ScanCache, root_key
from devpurge.models import Analysis, CandidateDir
from devpurge.results import prepare_results
from devpurge.scanner import VisitCallback, scan_directory

log = logging.getLogger(__name__)


def collect_candidates(
    root: Path | str,
    cache: ScanCache | None = None,
    fresh: bool = False,
    use_cache: bool = True,
    on_visit: VisitCallback | None = None,
) -> tuple[list[CandidateDir], bool, bool]:
    """
    Get the purgeable folders under a root, from the cache when possible.

    Args:
        root: Directory to scan (must exist)
        cache: Scan cache, or None to always scan
        fresh: Ignore cached results but still store the new scan
        use_cache: If False, neither read nor write the cache
        on_visit: Optional callback(path) for progress reporting

    Returns:
        Tuple of (candidates, from_cache, saved), where saved tells whether
        a fresh scan was written to the cache
    """
    cache_enabled = use_cache and cache is not None

    if cache_enabled and not fresh:
        cached = cache.load(root)
        if cached is not None:
            log.info("Loaded %d results from cache", len(cached))
            return cached, True, False

    candidates = scan_directory(root, on_visit=on_visit)

    saved = False
    if cache_enabled:
        saved = cache.save(root, candidates)

    return candidates, False, saved


def analyze_root(
    root: Path | str,
    min_size_bytes: int = 0,
    cache: ScanCache | None = None,
    fresh: bool = False,
    use_cache: bool = True,
    on_visit: VisitCallback | None = None,
) -> Analysis:
    """
    Collect, filter and sort the purgeable folders under a root.

    Returns:
        Analysis with candidates largest first
    """
    candidates, from_cache, saved = collect_candidates(
        root,
        cache=cache,
        fresh=fresh,
        use_cache=use_cache,
        on_visit=on_visit,
    )
    result = prepare_results(candidates, min_size_bytes)

    return Analysis(
        root=root_key(root),
        candidates=result.kept,
        found_count=len(candidates),
        filtered_out=result.filtered_out,
        from_cache=from_cache,
        cache_saved=saved,
        min_size_bytes=min_size_bytes,
    )
