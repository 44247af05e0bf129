"""Shared test fixtures."""

import pytest


@pytest.fixture(autouse=True)
def isolate_xdg(tmp_path, monkeypatch):
    """Keep settings and the scan cache out of the real home directory."""
    cache_home = tmp_path / "xdg_cache"
    config_home = tmp_path / "xdg_config"
    monkeypatch.setenv("XDG_CACHE_HOME", str(cache_home))
    monkeypatch.setenv("XDG_CONFIG_HOME", str(config_home))
    return cache_home, config_home


@pytest.fixture
def workspace(tmp_path):
    """Directory to build project trees in, separate from the XDG dirs."""
    root = tmp_path / "workspace"
    root.mkdir()
    return root


@pytest.fixture
def make_project():
    """Factory creating a project dir with a marker file and an artifact folder."""

    def _make(parent, marker_file, artifact_dir, files=None):
        parent.mkdir(parents=True, exist_ok=True)
        (parent / marker_file).write_text("{}")
        artifact = parent / artifact_dir
        artifact.mkdir()
        for name, size in (files or {}).items():
            target = artifact / name
            target.parent.mkdir(parents=True, exist_ok=True)
            target.write_bytes(b"x" * size)
        return artifact

    return _make
