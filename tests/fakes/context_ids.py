"""Fake ContextIdSource implementation for testing."""

from scratchdir.context_ids import ContextIdSource


class FakeContextIdSource(ContextIdSource):
    """Returns a fixed identifier and records how often it was asked.

    This class has NO public setup methods. All state is provided via constructor
    or captured during execution.
    """

    def __init__(self, context_id: str) -> None:
        self._context_id = context_id
        self._calls = 0

    @property
    def calls(self) -> int:
        """Number of current() calls, for test assertions only."""
        return self._calls

    def current(self) -> str:
        self._calls += 1
        return self._context_id
