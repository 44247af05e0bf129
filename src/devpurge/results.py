"""Filtering and ordering of scan results."""

from typing import Iterable

from devpurge.models import CandidateDir, FilterResult


def filter_by_size(candidates: Iterable[CandidateDir], min_bytes: int) -> FilterResult:
    """
    Keep candidates of at least ``min_bytes``.

    A threshold of 0 keeps everything.
    """
    candidates = list(candidates)
    kept = [c for c in candidates if c.size >= min_bytes]
    return FilterResult(kept=kept, filtered_out=len(candidates) - len(kept))


def sort_by_size(candidates: Iterable[CandidateDir]) -> list[CandidateDir]:
    """Largest first; equal sizes keep their input order."""
    return sorted(candidates, key=lambda c: c.size, reverse=True)


def prepare_results(candidates: Iterable[CandidateDir], min_bytes: int = 0) -> FilterResult:
    """Filter by size, then sort what is left largest first."""
    result = filter_by_size(candidates, min_bytes)
    return FilterResult(kept=sort_by_size(result.kept), filtered_out=result.filtered_out)
