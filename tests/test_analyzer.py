"""Tests for candidate collection."""

import os
from unittest.mock import MagicMock, patch

import pytest

from devpurge.analyzer import analyze_root, collect_candidates
from devpurge.cache import ScanCache
from devpurge.models import CandidateDir


@pytest.fixture
def cache(tmp_path):
    return ScanCache(tmp_path / "cache.json")


@pytest.fixture
def tree(workspace, make_project):
    """Workspace with a 1000-byte node_modules and a 10-byte target."""
    make_project(workspace / "web", "package.json", "node_modules", {"big.js": 1000})
    make_project(workspace / "cli", "Cargo.toml", "target", {"small": 10})
    return workspace


class TestCollectCandidates:
    def test_cold_cache_scans_and_saves(self, tree, cache):
        candidates, from_cache, _ = collect_candidates(tree, cache=cache)

        assert not from_cache
        assert len(candidates) == 2
        assert len(cache.load(tree)) == 2

    def test_warm_cache_skips_scan(self, tree, cache):
        collect_candidates(tree, cache=cache)

        with patch("devpurge.analyzer.scan_directory") as mock_scan:
            candidates, from_cache, _ = collect_candidates(tree, cache=cache)

        assert from_cache
        assert len(candidates) == 2
        mock_scan.assert_not_called()

    def test_fresh_ignores_cache_but_saves(self, tree, cache):
        cache.save(tree, [])

        candidates, from_cache, _ = collect_candidates(tree, cache=cache, fresh=True)

        assert not from_cache
        assert len(candidates) == 2
        assert len(cache.load(tree)) == 2

    def test_no_cache_neither_reads_nor_writes(self, tree):
        cache = MagicMock()

        candidates, from_cache, _ = collect_candidates(tree, cache=cache, use_cache=False)

        assert not from_cache
        assert len(candidates) == 2
        cache.load.assert_not_called()
        cache.save.assert_not_called()

    def test_without_cache_object(self, tree):
        candidates, from_cache, _ = collect_candidates(tree, cache=None)
        assert not from_cache
        assert len(candidates) == 2

    def test_cached_results_reconciled(self, tree, cache):
        collect_candidates(tree, cache=cache)
        os.rename(tree / "cli" / "target", tree / "cli" / "moved")

        candidates, from_cache, _ = collect_candidates(tree, cache=cache)

        assert from_cache
        assert [c.path for c in candidates] == [str(tree / "web" / "node_modules")]

    def test_forwards_progress_callback(self, tree):
        visited = []
        collect_candidates(tree, on_visit=visited.append)
        assert str(tree) in visited


class TestAnalyzeRoot:
    def test_sorted_largest_first(self, tree, cache):
        analysis = analyze_root(tree, cache=cache)

        assert [c.size for c in analysis.candidates] == [1000, 10]
        assert analysis.found_count == 2
        assert analysis.filtered_out == 0
        assert analysis.total_size == 1010
        assert analysis.root == str(tree)

    def test_applies_threshold(self, tree, cache):
        analysis = analyze_root(tree, min_size_bytes=500, cache=cache)

        assert [c.path for c in analysis.candidates] == [str(tree / "web" / "node_modules")]
        assert analysis.found_count == 2
        assert analysis.filtered_out == 1
        assert analysis.min_size_bytes == 500

    def test_threshold_does_not_shrink_cache(self, tree, cache):
        analyze_root(tree, min_size_bytes=500, cache=cache)
        assert len(cache.load(tree)) == 2

    def test_reports_cache_hit(self, tree, cache):
        analyze_root(tree, cache=cache)
        assert analyze_root(tree, cache=cache).from_cache

    def test_nothing_found(self, workspace, cache):
        analysis = analyze_root(workspace, cache=cache)
        assert analysis.found_count == 0
        assert analysis.candidates == []

    def test_uses_cached_values(self, tree, cache):
        cache.save(tree, [CandidateDir(path=str(tree / "web" / "node_modules"), size=5)])

        analysis = analyze_root(tree, cache=cache)

        assert analysis.from_cache
        assert [c.size for c in analysis.candidates] == [5]

    def test_reports_cache_write(self, tree, cache):
        assert analyze_root(tree, cache=cache).cache_saved
        assert not analyze_root(tree, cache=cache).cache_saved  # served from cache

    def test_failed_cache_write_not_reported(self, tree, cache):
        with patch.object(ScanCache, "_write", return_value=False):
            analysis = analyze_root(tree, cache=cache)

        assert not analysis.from_cache
        assert not analysis.cache_saved
