"""pytest plugin providing a ``scratch_dir`` fixture.

Registered through the ``pytest11`` entry point, so installing scratchdir is
enough to make the fixture available:

    def test_roundtrip(scratch_dir):
        scratch_dir.write_file("data.bin", b"\\x00\\x01")
        assert scratch_dir.read_file("data.bin") == b"\\x00\\x01"

Settings are read from the SCRATCHDIR_* environment variables. In per-caller
mode each test gets its own directory named after the test and a fresh uuid,
so tests running in parallel never share a directory. In global mode every
test uses the base path itself and holds the process-wide lock while it runs.
"""

import uuid
from collections.abc import Generator

import pytest

from scratchdir.config import IsolationMode, ScratchConfig
from scratchdir.handle import ScratchDir, open_scratch_dir
from scratchdir.paths import sanitize_label


@pytest.fixture
def scratch_config() -> ScratchConfig:
    """Scratch settings for the current test session."""
    return ScratchConfig.from_env()


@pytest.fixture
def scratch_dir(
    request: pytest.FixtureRequest, scratch_config: ScratchConfig
) -> Generator[ScratchDir]:
    """Yield a ScratchDir that is released when the test ends."""
    context_id = None
    if scratch_config.mode is IsolationMode.PER_CALLER:
        context_id = uuid.uuid4().hex

    handle = open_scratch_dir(
        sanitize_label(request.node.name),
        base_path=scratch_config.base_path,
        mode=scratch_config.mode,
        cleanup_on_release=scratch_config.cleanup_on_release,
        context_id=context_id,
    )
    with handle:
        yield handle
