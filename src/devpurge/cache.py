"""Persisted scan results for devpurge.

The cache is a single JSON document owned by the tool:

    {
      "version": 1,
      "markers": "<fingerprint of the marker table>",
      "scans": {"/abs/root": [{"path": "...", "size": 123}, ...]}
    }

Results are only served back for the exact root they were produced for, and
only while the marker table is unchanged. Anything unreadable is treated as a
cold cache.
"""

import json
import logging
import os
import tempfile
from pathlib import Path
from typing import Any, Iterable

from pydantic import ValidationError

from devpurge.categories import markers_fingerprint
from devpurge.config import default_cache_path
from devpurge.models import CandidateDir

log = logging.getLogger(__name__)

CACHE_VERSION = 1


def root_key(root: Path | str) -> str:
    """Normalized absolute form of a scan root."""
    return os.path.abspath(os.fspath(root))


def _parse_entries(entries: Any) -> list[CandidateDir]:
    if not isinstance(entries, list):
        return []
    candidates = []
    for item in entries:
        try:
            candidates.append(CandidateDir.model_validate(item))
        except ValidationError:
            log.debug("Skipping malformed cache entry: %r", item)
    return candidates


class ScanCache:
    """Scan results stored at one well-known location."""

    def __init__(self, path: Path | str | None = None, fingerprint: str | None = None) -> None:
        self.path = Path(path) if path else default_cache_path()
        self.fingerprint = fingerprint or markers_fingerprint()

    def _read(self) -> dict[str, Any] | None:
        """Read the raw document, or None if absent or unusable."""
        if not self.path.exists():
            log.debug("No scan cache at %s", self.path)
            return None

        try:
            with open(self.path, encoding="utf-8") as f:
                data = json.load(f)
        except (json.JSONDecodeError, UnicodeDecodeError, OSError) as e:
            log.warning("Ignoring unreadable scan cache %s: %s", self.path, e)
            return None

        if (
            not isinstance(data, dict)
            or data.get("version") != CACHE_VERSION
            or not isinstance(data.get("markers"), str)
            or not isinstance(data.get("scans"), dict)
        ):
            log.warning("Ignoring scan cache %s: unrecognized format", self.path)
            return None

        return data

    def _write(self, data: dict[str, Any]) -> bool:
        """Replace the cache file so readers see either the old or the new document."""
        tmp_name = None
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            with tempfile.NamedTemporaryFile(
                "w",
                encoding="utf-8",
                dir=self.path.parent,
                prefix=f".{self.path.name}.",
                suffix=".tmp",
                delete=False,
            ) as tmp:
                tmp_name = tmp.name
                json.dump(data, tmp)
                tmp.flush()
                os.fsync(tmp.fileno())
            os.replace(tmp_name, self.path)
            return True
        except OSError as e:
            log.warning("Could not write scan cache %s: %s", self.path, e)
            if tmp_name and os.path.exists(tmp_name):
                try:
                    os.unlink(tmp_name)
                except OSError:
                    pass
            return False

    def load(self, root: Path | str) -> list[CandidateDir] | None:
        """
        Load cached results for a root.

        Args:
            root: Scan root the results must belong to

        Returns:
            Cached candidates that still exist on disk, or None for a cold cache
        """
        data = self._read()
        if data is None:
            return None

        if data["markers"] != self.fingerprint:
            log.info("Scan cache was built with different folder markers, ignoring it")
            return None

        key = root_key(root)
        if key not in data["scans"]:
            log.debug("No cached scan for %s", key)
            return None

        candidates = _parse_entries(data["scans"][key])
        existing = [c for c in candidates if os.path.exists(c.path)]
        dropped = len(candidates) - len(existing)
        if dropped:
            log.info("Dropped %d cached folders that no longer exist", dropped)
        return existing

    def save(self, root: Path | str, candidates: Iterable[CandidateDir]) -> bool:
        """
        Store the results of a fresh scan of ``root``.

        Results cached for other roots are kept as long as they were built
        with the same marker table.

        Returns:
            True if the cache file was written
        """
        data = self._read()
        scans: dict[str, Any] = {}
        if data is not None and data["markers"] == self.fingerprint:
            scans = data["scans"]

        scans[root_key(root)] = [c.model_dump(mode="json") for c in candidates]
        return self._write(
            {"version": CACHE_VERSION, "markers": self.fingerprint, "scans": scans}
        )

    def remove(self, paths: Iterable[Path | str]) -> bool:
        """
        Drop deleted folders from every cached scan.

        Removing paths that are not cached is a no-op.

        Returns:
            True if the cache file was rewritten
        """
        targets = {os.fspath(p) for p in paths}
        if not targets:
            return False

        data = self._read()
        if data is None:
            return False

        changed = False
        for key, entries in data["scans"].items():
            if not isinstance(entries, list):
                continue
            kept = [e for e in entries if not (isinstance(e, dict) and e.get("path") in targets)]
            if len(kept) != len(entries):
                data["scans"][key] = kept
                changed = True

        if not changed:
            return False
        return self._write(data)

    def clear(self) -> bool:
        """Delete the cache file. Returns True if a file was removed."""
        try:
            self.path.unlink()
        except FileNotFoundError:
            return False
        except OSError as e:
            log.warning("Could not remove scan cache %s: %s", self.path, e)
            return False
        return True
