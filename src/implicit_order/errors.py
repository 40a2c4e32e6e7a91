"""Exceptions raised by the ordering core and the task stores."""

from __future__ import annotations

from typing import Any, Optional


class OrderingError(Exception):
    """Base class for every error raised by ``implicit_order``."""


class OrderCollision(OrderingError):
    """A balanced move found no finite bound on either side."""


class MissingOrderFatal(OrderingError):
    """A task that must carry an order tag has none.

    ``applied`` holds the tag assignments already made by the aborted walk.
    They are never persisted; callers may inspect them for diagnostics.
    """

    def __init__(self, task_id: str, message: str = "", applied: Optional[list[Any]] = None) -> None:
        self.task_id = task_id
        self.applied = list(applied or [])
        super().__init__(message or f"Task {task_id} is missing its order tag")


class StoreError(OrderingError):
    """The task store could not be read."""


class UpdateFailed(OrderingError):
    """Persisting the text of a single task failed."""

    def __init__(self, task_id: str, reason: str = "") -> None:
        self.task_id = task_id
        self.reason = reason
        detail = f": {reason}" if reason else ""
        super().__init__(f"Failed to update task {task_id}{detail}")


class PersistFailed(OrderingError):
    """One or more updates of a persistence fan-out failed.

    The in-memory sequence keeps the optimistic tags of the failed tasks;
    a full refresh from the store restores a consistent view.
    """

    def __init__(self, failures: list[UpdateFailed]) -> None:
        self.failures = list(failures)
        ids = ", ".join(f.task_id for f in self.failures)
        super().__init__(f"{len(self.failures)} update(s) failed: {ids}")
