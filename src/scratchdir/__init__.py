"""Ephemeral scratch directories for concurrently running tests."""

from scratchdir.config import IsolationMode, ScratchConfig, load_config
from scratchdir.context_ids import ContextIdSource, ThreadContextIdSource
from scratchdir.errors import (
    ConfigurationError,
    HandleReleasedError,
    LockPoisonedError,
    ScratchCleanupError,
    ScratchDirError,
)
from scratchdir.handle import ScratchDir, open_scratch_dir
from scratchdir.locks import LockRegistry, ScratchLock, default_registry
from scratchdir.paths import DEFAULT_BASE_PATH

__all__ = [
    "DEFAULT_BASE_PATH",
    "ConfigurationError",
    "ContextIdSource",
    "HandleReleasedError",
    "IsolationMode",
    "LockPoisonedError",
    "LockRegistry",
    "ScratchCleanupError",
    "ScratchConfig",
    "ScratchDir",
    "ScratchDirError",
    "ScratchLock",
    "ThreadContextIdSource",
    "default_registry",
    "load_config",
    "open_scratch_dir",
]
