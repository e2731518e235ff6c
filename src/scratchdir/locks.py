"""Process-wide locks for globally serialized scratch directories.

A shared scratch directory is guarded by a ScratchLock. Locks are handed out by
a LockRegistry, which creates the lock for a given directory exactly once and
returns that same instance to every later caller.

The registry returned by default_registry() is created when this module is
imported, so there is a single instance per process. Tests and callers that
need isolation can construct their own LockRegistry and pass it in.
"""

import logging
import threading
from pathlib import Path

from scratchdir.errors import LockPoisonedError

logger = logging.getLogger(__name__)


class ScratchLock:
    """Mutual-exclusion lock that can be poisoned by a failed holder.

    Acquisition blocks without a timeout. Once poisoned, every later
    acquisition fails with LockPoisonedError instead of granting access to a
    directory whose state is unknown.
    """

    def __init__(self, key: str) -> None:
        self._key = key
        self._lock = threading.Lock()
        self._poisoned = False

    @property
    def key(self) -> str:
        return self._key

    @property
    def poisoned(self) -> bool:
        return self._poisoned

    def locked(self) -> bool:
        return self._lock.locked()

    def acquire(self) -> None:
        """Block until the lock is held by the caller.

        Raises:
            LockPoisonedError: If a previous holder poisoned the lock
        """
        self._lock.acquire()
        if self._poisoned:
            self._lock.release()
            raise LockPoisonedError(self._key)

    def release(self) -> None:
        self._lock.release()

    def poison(self) -> None:
        """Mark the lock unusable. Must be called by the current holder."""
        logger.error("Poisoning scratch lock for %s", self._key)
        self._poisoned = True


class LockRegistry:
    """Hands out one ScratchLock per shared directory."""

    def __init__(self) -> None:
        self._guard = threading.Lock()
        self._locks: dict[str, ScratchLock] = {}

    def lock_for(self, path: Path) -> ScratchLock:
        """Return the lock guarding ``path``, creating it on first use.

        Paths are keyed by their resolved absolute form, so ``scratch`` and
        ``./scratch`` share a lock.
        """
        key = str(path.resolve())
        with self._guard:
            lock = self._locks.get(key)
            if lock is None:
                lock = ScratchLock(key)
                self._locks[key] = lock
        return lock


_DEFAULT_REGISTRY = LockRegistry()


def default_registry() -> LockRegistry:
    """Return the process-wide LockRegistry."""
    return _DEFAULT_REGISTRY
