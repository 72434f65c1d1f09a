"""Per-session state shared across the tasks of one CLI or REPL session."""

from collections.abc import Iterator
from contextlib import contextmanager

from clawcode.agents.exceptions import TaskInProgressError


class SessionContext:
    """Mutable state for one interactive session.

    Each session owns its own busy flag and cached provider choice, so two
    sessions in one process never see each other's state.
    """

    def __init__(self, root_dir: str, cached_provider: str | None = None):
        self.root_dir = root_dir
        self.cached_provider = cached_provider
        self.busy = False

    @contextmanager
    def begin_task(self) -> Iterator["SessionContext"]:
        """Mark the session busy for the duration of one task.

        Raises:
            TaskInProgressError: If a task is already running in this session.
        """
        if self.busy:
            raise TaskInProgressError("A task is already running in this session")
        self.busy = True
        try:
            yield self
        finally:
            self.busy = False
