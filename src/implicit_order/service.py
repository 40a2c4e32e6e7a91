"""Ordering service: binds the pure engine to a store and a current sequence.

The service owns the sequence the caller displays.  Every operation
publishes it twice: once optimistically, straight from the engine result,
and once more after the persistence fan-out with the store's snapshots.
Task positions are identical in both publications.

Only one operation may be in flight at a time; the service does not guard
against overlapping calls.
"""

from __future__ import annotations

from typing import Callable, Optional, Union

from loguru import logger

from .config import OrderingSettings
from .errors import PersistFailed
from .logging_utils import pretty, summarize_result
from .ordering.engine import OrderingEngine
from .ordering.model import OrderingResult, ReorderPolicy, Task
from .store import FileTaskStore, TaskStore, TodoistStore

SequenceListener = Callable[[tuple[Task, ...]], None]


def build_store(settings: OrderingSettings) -> TaskStore:
    """Create the store selected by *settings*."""
    if settings.store == "file":
        if settings.file_store_path is None:
            raise ValueError("file store selected but no path configured")
        return FileTaskStore(settings.file_store_path)
    if not settings.todoist_token:
        raise ValueError("No Todoist token configured (set TODOIST_TOKEN or todoist.token)")
    return TodoistStore(
        settings.todoist_token,
        base_url=settings.todoist_base_url,
        timeout=settings.todoist_timeout,
    )


class OrderingService:
    """Keep a task sequence in sync with its store while it is reordered."""

    def __init__(
        self,
        store: TaskStore,
        *,
        engine: Optional[OrderingEngine] = None,
        filter_expression: str = "",
        policy: Union[ReorderPolicy, str] = ReorderPolicy.PUSHY,
        on_change: Optional[SequenceListener] = None,
    ) -> None:
        self.store = store
        self.engine = engine or OrderingEngine()
        self.filter_expression = filter_expression
        self.policy = ReorderPolicy(policy)
        self.on_change = on_change
        self._sequence: tuple[Task, ...] = ()

    @classmethod
    def from_settings(
        cls,
        settings: OrderingSettings,
        *,
        on_change: Optional[SequenceListener] = None,
    ) -> "OrderingService":
        return cls(
            build_store(settings),
            engine=OrderingEngine(max_workers=settings.max_workers),
            filter_expression=settings.filter,
            policy=settings.policy,
            on_change=on_change,
        )

    @property
    def sequence(self) -> tuple[Task, ...]:
        return self._sequence

    def refresh(self) -> tuple[Task, ...]:
        """Re-fetch every task from the store.

        Tasks are sorted by their case-folded text.  Tagged tasks come out in
        tag order; an untagged task lands wherever its text sorts against
        "[", so "1st" comes before every tag and "Buy milk" after.
        """
        raw_tasks = self.store.fetch_all(self.filter_expression)
        tasks = sorted((Task.from_raw(raw) for raw in raw_tasks), key=lambda t: t.text.casefold())
        logger.info("Loaded {} task(s)", len(tasks))
        self._publish(tuple(tasks))
        return self._sequence

    def move(
        self,
        source_index: int,
        dest_index: int,
        policy: Union[ReorderPolicy, str, None] = None,
    ) -> OrderingResult:
        """Move a task and persist the resulting tag changes.

        Raises :class:`PersistFailed` after the fan-out when any update failed;
        the current sequence then still holds the optimistic tags of the
        failed tasks.
        """
        chosen = ReorderPolicy.parse(policy, self.policy)
        result = self.engine.move(self._sequence, source_index, dest_index, chosen)
        return self._apply(result, f"move:{chosen.value}")

    def spread(self) -> OrderingResult:
        """Rebalance every tag in the current sequence and persist the changes."""
        result = self.engine.spread(self._sequence)
        return self._apply(result, "spread")

    def _apply(self, result: OrderingResult, operation: str) -> OrderingResult:
        self._publish(result.sequence)
        if not result.changed:
            logger.debug("{}: no tag changes to persist", operation)
            return result

        logger.info("{}: persisting {} task(s)", operation, len(result.assignments))
        logger.debug("{}", pretty(summarize_result(result, operation)))
        outcome = self.engine.persist(result, self.store)
        self._publish(outcome.sequence)
        if not outcome.ok:
            logger.warning("{}: {} update(s) failed; refresh to recover", operation, len(outcome.failures))
            raise PersistFailed(outcome.failures)
        return result

    def _publish(self, sequence: tuple[Task, ...]) -> None:
        self._sequence = sequence
        if self.on_change is not None:
            self.on_change(sequence)
