"""User configuration for devpurge."""

import json
import logging
import os
from pathlib import Path
from typing import Optional

from pydantic import BaseModel, Field, ValidationError

log = logging.getLogger(__name__)

APP_NAME = "devpurge"
CONFIG_FILE_NAME = "config.json"
CACHE_FILE_NAME = "scan_cache.json"


def xdg_cache_home() -> Path:
    """Return XDG_CACHE_HOME, defaulting to ~/.cache."""
    return Path(os.environ.get("XDG_CACHE_HOME", Path.home() / ".cache"))


def xdg_config_home() -> Path:
    """Return XDG_CONFIG_HOME, defaulting to ~/.config."""
    return Path(os.environ.get("XDG_CONFIG_HOME", Path.home() / ".config"))


def default_cache_path() -> Path:
    """Location of the scan cache shared by every run."""
    return xdg_cache_home() / APP_NAME / CACHE_FILE_NAME


def default_config_path() -> Path:
    """Location of the user settings file."""
    return xdg_config_home() / APP_NAME / CONFIG_FILE_NAME


class Settings(BaseModel):
    """Defaults applied when the matching CLI option is not given."""

    min_size_mb: int = Field(0, ge=0, description="Hide folders smaller than this (MB)")
    use_cache: bool = Field(True, description="Read and write the scan cache")
    cache_file: Optional[str] = Field(None, description="Override the scan cache location")

    @property
    def cache_path(self) -> Path:
        """Resolved scan cache location."""
        if self.cache_file:
            return Path(os.path.expanduser(self.cache_file))
        return default_cache_path()


def load_settings(path: Path | None = None) -> Settings:
    """
    Load settings from disk.

    Missing, unreadable or invalid files fall back to the defaults.
    """
    config_path = path or default_config_path()
    if not config_path.exists():
        return Settings()

    try:
        data = json.loads(config_path.read_text(encoding="utf-8"))
    except (json.JSONDecodeError, OSError) as e:
        log.warning("Could not load settings from %s: %s", config_path, e)
        return Settings()

    if not isinstance(data, dict):
        log.warning("Ignoring settings in %s: expected a JSON object", config_path)
        return Settings()

    try:
        return Settings.model_validate(data)
    except ValidationError as e:
        log.warning("Invalid settings in %s: %s", config_path, e)
        return Settings()
