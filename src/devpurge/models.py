"""Data models for devpurge."""

from enum import Enum
from typing import Optional

from pydantic import BaseModel, Field


class RuleKind(str, Enum):
    """How a category corroborates a match from its parent directory."""

    ANY_FILE = "any_file"  # One of the named files sits next to the folder
    ANY_EXTENSION = "any_extension"  # A sibling file has one of the extensions
    ALWAYS = "always"  # No evidence needed


class EvidenceRule(BaseModel):
    """Evidence required in the parent directory before a folder is purgeable."""

    kind: RuleKind = Field(..., description="Type of evidence check")
    files: list[str] = Field(
        default_factory=list,
        description="File names checked by ANY_FILE rules",
    )
    extensions: list[str] = Field(
        default_factory=list,
        description="Extensions (without the dot) checked by ANY_EXTENSION rules",
    )


class Category(BaseModel):
    """A directory name that is considered a build or dependency artifact."""

    name: str = Field(..., description="Exact directory name to match")
    ecosystem: str = Field(..., description="Toolchain that produces the folder")
    description: str = Field(..., description="What the folder contains")
    rule: EvidenceRule = Field(..., description="Evidence rule for safe deletion")


class CandidateDir(BaseModel):
    """A discovered purgeable directory."""

    path: str = Field(..., description="Absolute path of the directory")
    size: int = Field(..., ge=0, description="Total bytes of regular files under path")


class FilterResult(BaseModel):
    """Candidates that passed the size threshold."""

    kept: list[CandidateDir] = Field(default_factory=list)
    filtered_out: int = Field(0, ge=0, description="Number of candidates dropped")


class Analysis(BaseModel):
    """Candidates collected for one root, ready for selection."""

    root: str = Field(..., description="Root path that was scanned")
    candidates: list[CandidateDir] = Field(
        default_factory=list,
        description="Candidates after filtering, largest first",
    )
    found_count: int = Field(0, description="Candidates found before filtering")
    filtered_out: int = Field(0, description="Candidates below the size threshold")
    from_cache: bool = Field(False, description="Whether results came from the scan cache")
    cache_saved: bool = Field(False, description="Whether a fresh scan was written to the cache")
    min_size_bytes: int = Field(0, description="Size threshold that was applied")

    @property
    def total_size(self) -> int:
        """Total bytes across the offered candidates."""
        return sum(c.size for c in self.candidates)


class DeletionResult(BaseModel):
    """Outcome of deleting one candidate."""

    path: str = Field(..., description="Directory that was deleted")
    size: int = Field(0, description="Recorded size of the directory")
    success: bool = Field(True, description="Whether deletion succeeded")
    error: Optional[str] = Field(None, description="Reason if deletion failed")
    dry_run: bool = Field(False, description="Whether this was a dry run")
    already_gone: bool = Field(False, description="Whether the directory was already missing")


class PurgeSummary(BaseModel):
    """All deletion outcomes of one run."""

    results: list[DeletionResult] = Field(default_factory=list)

    @property
    def reclaimed_bytes(self) -> int:
        """Bytes reclaimed by successful deletions of folders that still existed."""
        return sum(r.size for r in self.results if r.success and not r.already_gone)

    @property
    def success_count(self) -> int:
        """Number of successful deletions."""
        return sum(1 for r in self.results if r.success)

    @property
    def failure_count(self) -> int:
        """Number of failed deletions."""
        return sum(1 for r in self.results if not r.success)

    @property
    def deleted_paths(self) -> list[str]:
        """Paths that were actually removed from disk."""
        return [r.path for r in self.results if r.success and not r.dry_run]


class Outcome(str, Enum):
    """Terminal state of a purge run."""

    INVALID_PATH = "invalid_path"
    NOTHING_FOUND = "nothing_found"
    NOTHING_AFTER_FILTER = "nothing_after_filter"
    NOTHING_SELECTED = "nothing_selected"
    CANCELLED = "cancelled"
    COMPLETED = "completed"
    COMPLETED_WITH_FAILURES = "completed_with_failures"
