"""Pytest configuration and fixtures."""

from pathlib import Path

import pytest


@pytest.fixture(autouse=True)
def isolated_scratch_base(
    monkeypatch: pytest.MonkeyPatch, tmp_path_factory: pytest.TempPathFactory
) -> Path:
    """Point SCRATCHDIR_BASE at a temporary directory so tests never write into the repo."""
    base = tmp_path_factory.mktemp("scratch-base")
    monkeypatch.setenv("SCRATCHDIR_BASE", str(base))
    return base
