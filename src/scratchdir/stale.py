"""Discovery and removal of scratch directories left behind by earlier runs.

Handles opened with ``cleanup_on_release=False``, or runs that crashed before
releasing, leave directories under the base path. These helpers find them and
remove the ones older than a given age. Only directories directly under the
base are considered; plain files there are left alone.
"""

import logging
import time
from pathlib import Path

from scratchdir.handle import remove_entry
from scratchdir.paths import ensure_has_parent

logger = logging.getLogger(__name__)


def list_scratch_dirs(base_path: Path) -> list[Path]:
    """Return the directories directly under ``base_path``, sorted by name.

    Returns an empty list when ``base_path`` does not exist.
    """
    if not base_path.is_dir():
        return []
    return sorted(
        (entry for entry in base_path.iterdir() if entry.is_dir() and not entry.is_symlink()),
        key=lambda entry: entry.name,
    )


def cleanup_stale_scratch(
    base_path: Path,
    *,
    max_age_seconds: float = 0,
    dry_run: bool = False,
    now: float | None = None,
) -> list[Path]:
    """Remove scratch directories under ``base_path`` older than ``max_age_seconds``.

    Age is measured from the directory's modification time.

    Args:
        base_path: Base scratch directory to scan
        max_age_seconds: Minimum age of directories to remove (0 removes all)
        dry_run: Report what would be removed without deleting anything
        now: Reference timestamp, defaults to time.time()

    Returns:
        Directories that were removed (or would be, with ``dry_run``)

    Raises:
        ConfigurationError: If ``base_path`` has no parent
        OSError: If a directory cannot be removed
    """
    ensure_has_parent(base_path)
    reference = now if now is not None else time.time()

    stale: list[Path] = []
    for entry in list_scratch_dirs(base_path):
        age = reference - entry.stat().st_mtime
        if age < max_age_seconds:
            continue
        stale.append(entry)
        if dry_run:
            logger.debug("Would remove stale scratch directory %s", entry)
            continue
        remove_entry(entry)
        logger.debug("Removed stale scratch directory %s", entry)

    return stale
