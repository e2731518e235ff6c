"""Scratch directory configuration.

Configuration can come from environment variables (ScratchConfig.from_env)
or from the ``[tool.scratchdir]`` table of a pyproject.toml (load_config).
Explicit arguments to open_scratch_dir() always take precedence.
"""

import os
import tomllib
from dataclasses import dataclass
from enum import Enum
from pathlib import Path

from scratchdir.paths import DEFAULT_BASE_PATH


class IsolationMode(Enum):
    """How concurrent handles are kept apart."""

    PER_CALLER = "per-caller"
    GLOBAL = "global"

    @staticmethod
    def parse(value: str) -> "IsolationMode":
        """Parse a mode name such as ``"per-caller"`` or ``"global"``.

        Raises:
            ValueError: If the name is not a known mode
        """
        normalized = value.strip().lower().replace("_", "-")
        for mode in IsolationMode:
            if mode.value == normalized:
                return mode
        valid = ", ".join(mode.value for mode in IsolationMode)
        raise ValueError(f"Unknown isolation mode {value!r} (expected one of: {valid})")


@dataclass(frozen=True)
class ScratchConfig:
    """Immutable scratch directory settings."""

    base_path: Path = DEFAULT_BASE_PATH
    mode: IsolationMode = IsolationMode.PER_CALLER
    cleanup_on_release: bool = True

    @staticmethod
    def from_env() -> "ScratchConfig":
        """Load configuration from SCRATCHDIR_* environment variables."""
        return ScratchConfig(
            base_path=Path(os.environ.get("SCRATCHDIR_BASE", str(DEFAULT_BASE_PATH))),
            mode=IsolationMode.parse(os.environ.get("SCRATCHDIR_MODE", "per-caller")),
            cleanup_on_release=os.environ.get("SCRATCHDIR_KEEP", "false").lower() != "true",
        )


def load_config(pyproject_path: Path) -> ScratchConfig:
    """Load configuration from the ``[tool.scratchdir]`` table of a pyproject.toml.

    A relative ``base_path`` is interpreted relative to the pyproject's directory.

    Args:
        pyproject_path: Path to pyproject.toml

    Returns:
        ScratchConfig with values from the file, defaults for anything missing

    Raises:
        ValueError: If a value in the table has the wrong type or is unknown
    """
    if not pyproject_path.exists():
        return ScratchConfig()

    data = tomllib.loads(pyproject_path.read_text(encoding="utf-8"))
    table = data.get("tool", {}).get("scratchdir")
    if table is None:
        return ScratchConfig()

    base = table.get("base_path", str(DEFAULT_BASE_PATH))
    if not isinstance(base, str):
        raise ValueError(f"'base_path' must be a string in {pyproject_path}")
    base_path = Path(base)
    if not base_path.is_absolute():
        base_path = pyproject_path.parent / base_path

    mode = table.get("mode", IsolationMode.PER_CALLER.value)
    if not isinstance(mode, str):
        raise ValueError(f"'mode' must be a string in {pyproject_path}")

    cleanup = table.get("cleanup_on_release", True)
    if not isinstance(cleanup, bool):
        raise ValueError(f"'cleanup_on_release' must be a boolean in {pyproject_path}")

    return ScratchConfig(
        base_path=base_path,
        mode=IsolationMode.parse(mode),
        cleanup_on_release=cleanup,
    )
