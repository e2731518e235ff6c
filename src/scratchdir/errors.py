"""Exception types raised by the scratch directory manager.

Filesystem failures are not wrapped: they surface as the built-in OSError
family (FileNotFoundError, PermissionError, ...) so callers can handle them
with the usual Python idioms. The types below cover everything else.
"""

from pathlib import Path


class ScratchDirError(Exception):
    """Base class for scratchdir errors."""


class ConfigurationError(ScratchDirError):
    """Raised when a scratch directory is requested with an unsafe path or label.

    This indicates a caller bug. It is always raised before the filesystem is
    touched, so a rejected call has no side effects.
    """


class LockPoisonedError(ScratchDirError):
    """Raised when acquiring a lock whose previous holder failed to clean up.

    The shared directory guarded by the lock may be in an inconsistent state,
    so no further handle is allowed to use it.
    """

    def __init__(self, key: str) -> None:
        self.key = key
        super().__init__(f"Scratch lock for {key} is poisoned by a failed cleanup")


class ScratchCleanupError(ScratchDirError):
    """Raised when releasing a handle fails to delete its directory."""

    def __init__(self, path: Path, message: str) -> None:
        self.path = path
        super().__init__(f"Failed to clean up scratch directory {path}: {message}")


class HandleReleasedError(ScratchDirError):
    """Raised when a released handle is used."""

    def __init__(self, path: Path) -> None:
        self.path = path
        super().__init__(f"Scratch directory handle for {path} has already been released")
