"""Scratch directory handles.

A ScratchDir owns one directory for its lifetime and exposes file operations
scoped beneath it. Handles are opened with open_scratch_dir() and released
either explicitly or by leaving a ``with`` block:

    with open_scratch_dir("alpha", base_path=Path("scratch")) as scratch:
        scratch.write_file("a.txt", b"hello")
        assert scratch.read_file("a.txt") == b"hello"
    # scratch/alpha-<context id> no longer exists

Two isolation modes are supported:

- PER_CALLER: every execution context gets its own ``<label>-<context id>``
  subdirectory under the base path. Handles share nothing, so any number of
  them can be live at once.
- GLOBAL: all handles use the base path itself. A process-wide ScratchLock is
  acquired before the directory is touched and held until release, so at
  most one handle is live at a time.
"""

import logging
import os
import shutil
from pathlib import Path
from types import TracebackType

from scratchdir.config import IsolationMode, ScratchConfig
from scratchdir.context_ids import ContextIdSource, ThreadContextIdSource
from scratchdir.errors import HandleReleasedError, ScratchCleanupError
from scratchdir.locks import LockRegistry, ScratchLock, default_registry
from scratchdir.paths import (
    ensure_has_parent,
    ensure_not_root,
    unique_dir_name,
    validate_label,
)

logger = logging.getLogger(__name__)

# Enable debug logging if SCRATCHDIR_DEBUG environment variable is set
if os.environ.get("SCRATCHDIR_DEBUG"):
    logging.basicConfig(level=logging.DEBUG, format="[DEBUG %(name)s:%(lineno)d] %(message)s")


def remove_entry(path: Path) -> None:
    """Delete a file, symlink or directory tree. Symlinks are never followed."""
    if path.is_symlink() or not path.is_dir():
        path.unlink()
    else:
        shutil.rmtree(path)


def _prepare_directory(target: Path) -> None:
    # A file or symlink squatting on the target is replaced by a directory
    if target.is_symlink() or target.is_file():
        logger.debug("Removing non-directory entry at %s", target)
        target.unlink()

    if not target.is_dir():
        target.mkdir(parents=True, exist_ok=True)


class ScratchDir:
    """Handle on a scratch directory owned for the handle's lifetime.

    Use open_scratch_dir() to create one. The directory exists from the moment
    the handle is returned until release() deletes it (when
    ``cleanup_on_release`` is set).
    """

    def __init__(
        self,
        root_path: Path,
        *,
        label: str,
        mode: IsolationMode,
        cleanup_on_release: bool,
        lock: ScratchLock | None,
    ) -> None:
        self._root_path = root_path
        self._label = label
        self._mode = mode
        self._cleanup_on_release = cleanup_on_release
        self._lock = lock
        self._released = False

    def __repr__(self) -> str:
        state = "released" if self._released else "live"
        return f"ScratchDir({str(self._root_path)!r}, mode={self._mode.value}, {state})"

    def __enter__(self) -> "ScratchDir":
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        try:
            self.release()
        except ScratchCleanupError as cleanup_error:
            if exc is None:
                raise
            # Keep the body's exception as the reported failure
            exc.add_note(f"Scratch directory cleanup also failed: {cleanup_error}")

    @property
    def root_path(self) -> Path:
        return self._root_path

    @property
    def label(self) -> str:
        return self._label

    @property
    def mode(self) -> IsolationMode:
        return self._mode

    @property
    def lock(self) -> ScratchLock | None:
        """The lock held by a GLOBAL handle, None for PER_CALLER handles."""
        return self._lock

    @property
    def released(self) -> bool:
        return self._released

    @property
    def cleanup_on_release(self) -> bool:
        """Whether release() deletes the directory. True by default."""
        return self._cleanup_on_release

    @cleanup_on_release.setter
    def cleanup_on_release(self, value: bool) -> None:
        self._cleanup_on_release = value

    def _ensure_live(self) -> None:
        if self._released:
            raise HandleReleasedError(self._root_path)

    def resolve_path(self, name: str) -> Path:
        """Return the path of ``name`` inside the scratch directory.

        Pure join; the filesystem is not consulted.
        """
        return self._root_path / name

    def write_file(self, name: str, contents: bytes) -> Path:
        """Create or overwrite ``name`` with exactly ``contents``.

        Returns:
            Path of the written file

        Raises:
            OSError: If the file cannot be written
        """
        self._ensure_live()
        path = self.resolve_path(name)
        path.write_bytes(contents)
        return path

    def touch_file(self, name: str) -> Path:
        """Create or truncate ``name`` as an empty file."""
        return self.write_file(name, b"")

    def read_file(self, name: str) -> bytes:
        """Return the current contents of ``name``.

        Raises:
            FileNotFoundError: If the file does not exist
        """
        self._ensure_live()
        return self.resolve_path(name).read_bytes()

    def delete_file(self, name: str) -> None:
        """Delete ``name`` if it exists. A missing file is not an error."""
        self._ensure_live()
        self.resolve_path(name).unlink(missing_ok=True)

    def list_files(self) -> list[str]:
        """Return the sorted names of the entries directly under the root."""
        self._ensure_live()
        return sorted(entry.name for entry in self._root_path.iterdir())

    def reset(self) -> None:
        """Delete everything under the root, leaving the root itself empty."""
        self._ensure_live()
        removed = 0
        for entry in self._root_path.iterdir():
            remove_entry(entry)
            removed += 1
        logger.debug("Reset %s (%d entries removed)", self._root_path, removed)

    def release(self) -> None:
        """Release the handle, deleting the directory if ``cleanup_on_release`` is set.

        The lock of a GLOBAL handle is released only after the directory is gone.
        If deletion fails or is interrupted the lock is poisoned before it is
        released, so later handles fail fast instead of reusing a half-deleted
        directory. The lock is released on every exit path.
        Calling release() again is a no-op.

        Raises:
            ScratchCleanupError: If the directory could not be deleted
        """
        if self._released:
            return
        self._released = True

        try:
            if self._cleanup_on_release and self._root_path.exists():
                try:
                    shutil.rmtree(self._root_path)
                except OSError as e:
                    logger.error("Failed to clean up scratch directory %s: %s", self._root_path, e)
                    raise ScratchCleanupError(self._root_path, str(e)) from e
        except BaseException:
            # Interrupted cleanup leaves the directory in an unknown state too
            if self._lock is not None:
                self._lock.poison()
            raise
        finally:
            if self._lock is not None:
                self._lock.release()

        logger.debug("Released scratch directory %s", self._root_path)


def open_scratch_dir(
    label: str,
    *,
    base_path: Path | str | None = None,
    mode: IsolationMode | None = None,
    cleanup_on_release: bool | None = None,
    context_id: str | int | None = None,
    context_ids: ContextIdSource | None = None,
    lock: ScratchLock | None = None,
    registry: LockRegistry | None = None,
    config: ScratchConfig | None = None,
) -> ScratchDir:
    """Open a scratch directory handle.

    A GLOBAL handle owns its whole base path: reset() and release() delete
    everything under it, including the directories of live PER_CALLER
    handles opened on the same base. Give GLOBAL handles their own base
    when both modes run in one process.

    Args:
        label: Human-readable name; becomes part of the directory name in
            PER_CALLER mode
        base_path: Directory under which scratch directories live
        mode: PER_CALLER or GLOBAL isolation
        cleanup_on_release: Delete the directory when the handle is released
        context_id: Identifier of the calling execution context (PER_CALLER only).
            Taken from ``context_ids`` when omitted
        context_ids: Source of context ids, defaults to the current thread
        lock: Lock guarding the shared directory (GLOBAL only)
        registry: Registry to fetch the lock from when ``lock`` is omitted,
            defaults to the process-wide registry
        config: Defaults for base_path, mode and cleanup_on_release

    Returns:
        Live ScratchDir whose root exists as a directory

    Raises:
        ConfigurationError: If the label or target path is unsafe. Nothing on
            disk has been touched when this is raised
        LockPoisonedError: If the GLOBAL lock was poisoned by a failed cleanup
        OSError: If the directory cannot be prepared
    """
    settings = config if config is not None else ScratchConfig()
    base = Path(base_path) if base_path is not None else settings.base_path
    resolved_mode = mode if mode is not None else settings.mode
    cleanup = cleanup_on_release if cleanup_on_release is not None else settings.cleanup_on_release

    validate_label(label)

    if resolved_mode is IsolationMode.PER_CALLER:
        # The base is never deleted in this mode, only the target below it
        ensure_not_root(base)
        if context_id is None:
            source = context_ids if context_ids is not None else ThreadContextIdSource()
            context_id = source.current()
        target = base / unique_dir_name(label, context_id)
        ensure_has_parent(target)
        _prepare_directory(target)
        logger.debug("Opened per-caller scratch directory %s", target)
        return ScratchDir(
            target,
            label=label,
            mode=resolved_mode,
            cleanup_on_release=cleanup,
            lock=None,
        )

    ensure_has_parent(base)
    if lock is None:
        lock = (registry if registry is not None else default_registry()).lock_for(base)

    logger.debug("Waiting for scratch lock on %s", base)
    lock.acquire()
    try:
        _prepare_directory(base)
    except BaseException:
        lock.release()
        raise

    logger.debug("Opened shared scratch directory %s for %s", base, label)
    return ScratchDir(
        base,
        label=label,
        mode=resolved_mode,
        cleanup_on_release=cleanup,
        lock=lock,
    )
