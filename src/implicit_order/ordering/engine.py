"""Ordering engine, the entry point for every ordering operation.

:meth:`OrderingEngine.move` and :meth:`OrderingEngine.spread` are pure: they
take the current sequence and return an :class:`OrderingResult` without any
side effect.  :meth:`OrderingEngine.persist` is the only place that talks to
a store; it fans one update per changed task out to a thread pool and joins
them before returning.
"""

from __future__ import annotations

import concurrent.futures
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Sequence, Union

from loguru import logger

from ..constants import DEFAULT_MAX_WORKERS
from ..errors import UpdateFailed
from .model import OrderingResult, ReorderPolicy, TagAssignment, Task
from .planner import ReorderPlanner
from .spreader import Spreader

if TYPE_CHECKING:
    from ..store.interfaces import TaskStore


@dataclass(frozen=True)
class PersistOutcome:
    """Server-reconciled sequence plus the updates that did not go through."""

    sequence: tuple[Task, ...]
    failures: list[UpdateFailed] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return not self.failures


class OrderingEngine:
    """Compose the planner and spreader, and persist their results."""

    def __init__(
        self,
        planner: ReorderPlanner | None = None,
        spreader: Spreader | None = None,
        *,
        max_workers: int = DEFAULT_MAX_WORKERS,
    ) -> None:
        self.planner = planner or ReorderPlanner()
        self.spreader = spreader or Spreader()
        self.max_workers = max(1, int(max_workers))

    def move(
        self,
        sequence: Sequence[Task],
        source_index: int,
        dest_index: int,
        policy: Union[ReorderPolicy, str] = ReorderPolicy.PUSHY,
    ) -> OrderingResult:
        return self.planner.plan(sequence, source_index, dest_index, policy)

    def spread(self, sequence: Sequence[Task]) -> OrderingResult:
        return self.spreader.spread(sequence)

    def persist(self, result: OrderingResult, store: TaskStore) -> PersistOutcome:
        """Write every assignment of *result* to *store* concurrently.

        Successful updates replace the optimistic task with the store's
        snapshot.  Failed ones keep their optimistic text; nothing is rolled
        back, remotely or in memory.
        """
        sequence = list(result.sequence)
        if not result.assignments:
            return PersistOutcome(sequence=tuple(sequence))

        failures: list[UpdateFailed] = []
        workers = min(self.max_workers, len(result.assignments))
        with concurrent.futures.ThreadPoolExecutor(max_workers=workers, thread_name_prefix="order-persist") as executor:
            futures = {
                executor.submit(store.update_text, a.task.id, a.task.text): a
                for a in result.assignments
            }
            for future in concurrent.futures.as_completed(futures):
                assignment: TagAssignment = futures[future]
                try:
                    raw = future.result()
                except UpdateFailed as exc:
                    logger.warning("Update of task {} failed: {}", assignment.task.id, exc)
                    failures.append(exc)
                    continue
                except Exception as exc:
                    logger.exception("Unexpected error updating task {}: {}", assignment.task.id, exc)
                    failures.append(UpdateFailed(assignment.task.id, str(exc)))
                    continue
                sequence[assignment.index] = Task.from_raw(raw)

        logger.info(
            "Persisted {}/{} task update(s)",
            len(result.assignments) - len(failures),
            len(result.assignments),
        )
        return PersistOutcome(sequence=tuple(sequence), failures=failures)
