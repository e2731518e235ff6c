"""Path and name utilities for scratch directories.

All functions here are pure: they never create, modify or delete anything on
disk. They are used to validate a target before the manager touches it.
"""

import os
import re
from pathlib import Path

from scratchdir.errors import ConfigurationError

DEFAULT_BASE_PATH = Path("test_dir.tmp")

_CONTEXT_ID_PATTERN = re.compile(r"^[A-Za-z0-9._-]+$")


def ensure_has_parent(path: Path) -> None:
    """Reject paths whose recursive deletion could take out a filesystem root.

    A path is rejected when it has no final name component (``""``, ``"."``,
    ``"/"``, a bare drive), when its final component is ``".."``, or when it
    resolves to a filesystem root.

    Args:
        path: Candidate scratch directory

    Raises:
        ConfigurationError: If the path has no parent
    """
    if path.name in ("", ".."):
        raise ConfigurationError(f"Refusing to use {str(path)!r} as a scratch directory: no parent")

    ensure_not_root(path)


def ensure_not_root(path: Path) -> None:
    """Reject a path that resolves to a filesystem root.

    Weaker than ensure_has_parent(): ``"."`` passes when the current directory
    is not a root. Used for bases that only ever hold scratch subdirectories.

    Raises:
        ConfigurationError: If the path resolves to a root
    """
    resolved = path.resolve()
    if resolved.parent == resolved:
        raise ConfigurationError(
            f"Refusing to use {str(path)!r} as a scratch directory: resolves to root {resolved}"
        )


def validate_label(label: str) -> None:
    """Check that a label can be used as a single directory name component.

    Raises:
        ConfigurationError: If the label is empty, a dot entry, or contains a separator
    """
    if not label or label in (".", ".."):
        raise ConfigurationError(f"Invalid scratch directory label: {label!r}")

    separators = [sep for sep in (os.sep, os.altsep, "/") if sep]
    if any(sep in label for sep in separators):
        raise ConfigurationError(f"Scratch directory label contains a path separator: {label!r}")


def sanitize_label(name: str) -> str:
    """Turn an arbitrary string (e.g. a pytest node name) into a valid label.

    - Replaces characters outside ``[A-Za-z0-9._-]`` with ``-``
    - Collapses consecutive ``-``
    - Strips leading/trailing ``-`` and ``.``
    - Truncates to 60 characters
    Returns ``"scratch"`` if the result is empty.

    Examples:
        >>> sanitize_label("test_write[a/b]")
        'test_write-a-b'
    """
    replaced = re.sub(r"[^A-Za-z0-9._-]+", "-", name)
    collapsed = re.sub(r"-+", "-", replaced)
    trimmed = collapsed.strip("-.")
    result = trimmed[:60].rstrip("-.")
    return result or "scratch"


def format_context_id(context_id: str | int) -> str:
    """Render an execution-context identifier as a directory name token.

    Identifiers are validated rather than sanitized: rewriting characters could
    make two distinct identifiers collide.

    Raises:
        ConfigurationError: If the identifier contains characters outside ``[A-Za-z0-9._-]``
    """
    token = str(context_id)
    if not _CONTEXT_ID_PATTERN.match(token):
        raise ConfigurationError(f"Invalid execution context id: {token!r}")
    return token


def unique_dir_name(label: str, context_id: str | int) -> str:
    """Build the per-caller directory name ``<label>-<context_id>``.

    Examples:
        >>> unique_dir_name("alpha", "thread-140")
        'alpha-thread-140'
    """
    validate_label(label)
    return f"{label}-{format_context_id(context_id)}"
