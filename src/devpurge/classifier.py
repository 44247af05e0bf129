"""Evidence checks deciding whether a matched folder is safe to delete.

Only the parent directory is ever probed; the candidate's own contents are
never read here.
"""

import logging
import os
from pathlib import Path

from devpurge.categories import get_category
from devpurge.models import EvidenceRule, RuleKind

log = logging.getLogger(__name__)


def has_file(directory: Path, file_name: str) -> bool:
    """Check whether ``directory`` contains an entry called ``file_name``."""
    try:
        return (directory / file_name).exists()
    except OSError:
        return False


def has_any_file(directory: Path, file_names: list[str]) -> bool:
    """Check whether ``directory`` contains any of ``file_names``."""
    return any(has_file(directory, name) for name in file_names)


def has_file_with_extension(directory: Path, extensions: list[str]) -> bool:
    """
    Check whether any entry of ``directory`` ends in one of ``extensions``.

    Extensions are given without the leading dot (e.g. 'csproj').
    """
    wanted = {f".{ext}" for ext in extensions}
    try:
        with os.scandir(directory) as entries:
            for entry in entries:
                if Path(entry.name).suffix in wanted:
                    return True
    except OSError as e:
        log.debug("Could not list %s: %s", directory, e)
    return False


def rule_matches(rule: EvidenceRule, parent: Path) -> bool:
    """Evaluate an evidence rule against a parent directory."""
    if rule.kind == RuleKind.ALWAYS:
        return True
    if rule.kind == RuleKind.ANY_FILE:
        return has_any_file(parent, rule.files)
    if rule.kind == RuleKind.ANY_EXTENSION:
        return has_file_with_extension(parent, rule.extensions)
    return False


def is_safe_to_delete(dir_name: str, path: Path | str) -> bool:
    """
    Decide whether a folder named ``dir_name`` at ``path`` is a disposable artifact.

    Args:
        dir_name: Directory name (must be one of the purgeable names)
        path: Full path of the directory

    Returns:
        True if the parent directory holds the evidence for this category
    """
    path = Path(path)
    parent = path.parent
    if parent == path:
        return False

    category = get_category(dir_name)
    if category is None:
        return False

    return rule_matches(category.rule, parent)
