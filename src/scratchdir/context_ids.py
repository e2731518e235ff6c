"""Execution-context identifier sources.

Per-caller scratch directories are named after the execution context that
opened them. The source of that identifier is injectable so the manager works
the same under threads, tasks or worker processes.
"""

import threading
from abc import ABC, abstractmethod


class ContextIdSource(ABC):
    """Abstract source of execution-context identifiers."""

    @abstractmethod
    def current(self) -> str:
        """Return an identifier distinct across concurrently running contexts.

        Repeated calls from the same context must return the same value.
        """
        ...


class ThreadContextIdSource(ContextIdSource):
    """Production implementation keyed on the calling thread."""

    def current(self) -> str:
        return f"thread-{threading.get_ident()}"
