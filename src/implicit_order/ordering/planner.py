"""Reorder planner: computes new order tags when a single task is moved.

The moved task is removed from ``source_index`` and re-inserted at
``dest_index``.  Its new left neighbour is the *anchor*: when moving up that
is the task originally at ``dest_index - 1``, when moving down the one
originally at ``dest_index``.  Working on the already reordered list makes
both cases read the same (``reordered[dest_index - 1]``).

Three policies decide which tags change:

* ``BALANCED``: midpoint between the anchor and the new follower.
* ``RIGHT_AFTER``: anchor + 1, the follower is not inspected.
* ``PUSHY``: anchor + 1 (1 at the front), then walk forward bumping every
  following task whose tag now conflicts, without crossing a boundary-tier
  task.
"""

from __future__ import annotations

import math
from typing import Optional, Sequence, Union

from loguru import logger

from ..constants import MAX_ORDER, MIN_ORDER
from ..errors import MissingOrderFatal, OrderCollision
from .codec import OrderTag
from .model import OrderingResult, ReorderPolicy, TagAssignment, Task


def _check_index(sequence: Sequence[Task], index: int, name: str) -> None:
    if not 0 <= index < len(sequence):
        raise ValueError(f"{name} {index} out of range for a sequence of {len(sequence)} task(s)")


def _required_order(task: Task, applied: Optional[list[TagAssignment]] = None) -> int:
    order = task.order
    if order is None:
        raise MissingOrderFatal(task.id, f"Task {task.id} ({task.text!r}) is missing its order tag", applied)
    return order


class ReorderPlanner:
    """Plan the tag changes caused by moving one task."""

    def __init__(self, max_order: int = MAX_ORDER) -> None:
        self.max_order = max_order

    def plan(
        self,
        sequence: Sequence[Task],
        source_index: int,
        dest_index: int,
        policy: Union[ReorderPolicy, str] = ReorderPolicy.PUSHY,
    ) -> OrderingResult:
        """Move ``sequence[source_index]`` to ``dest_index`` under *policy*.

        Returns the reordered sequence and the tag assignments to persist.
        *sequence* itself is never mutated.
        """
        tasks = list(sequence)
        _check_index(tasks, source_index, "source_index")
        _check_index(tasks, dest_index, "dest_index")
        if source_index == dest_index:
            return OrderingResult(sequence=tuple(tasks))

        policy = ReorderPolicy(policy)
        moved = tasks.pop(source_index)
        tasks.insert(dest_index, moved)

        if moved.is_boundary:
            logger.debug("Task {} is boundary tier; moved without re-tagging", moved.id)
            return OrderingResult(sequence=tuple(tasks))

        anchor = tasks[dest_index - 1] if dest_index > 0 else None
        follower = tasks[dest_index + 1] if dest_index < len(tasks) - 1 else None
        logger.debug(
            "Planning {} move of {} from {} to {} (anchor={}, follower={})",
            policy.value,
            moved.id,
            source_index,
            dest_index,
            anchor.id if anchor else None,
            follower.id if follower else None,
        )

        if policy == ReorderPolicy.BALANCED:
            new_order = self._balanced_order(anchor, follower)
            assignments = self._assign_all(tasks, [(dest_index, new_order)])
        elif policy == ReorderPolicy.RIGHT_AFTER:
            new_order = min(self._order_after(anchor), self.max_order)
            assignments = self._assign_all(tasks, [(dest_index, new_order)])
        else:
            # Without an anchor the walk starts at 1.
            assignments = self._push(tasks, dest_index, self._order_after(anchor, MIN_ORDER + 1))

        return OrderingResult(sequence=tuple(tasks), assignments=tuple(assignments))

    # ------------------------------------------------------------------
    # Policies
    # ------------------------------------------------------------------

    def _balanced_order(self, anchor: Optional[Task], follower: Optional[Task]) -> int:
        if anchor is None and follower is None:
            raise OrderCollision("No sibling order on either side; the sequence has a single task")
        lower = -math.inf if anchor is None else _required_order(anchor)
        upper = math.inf if follower is None else _required_order(follower)
        low = max(MIN_ORDER, lower)
        high = min(self.max_order, upper)
        logger.debug("Balanced bounds: lower={} upper={}", low, high)
        return int((low + high) // 2)

    @staticmethod
    def _order_after(anchor: Optional[Task], no_anchor: int = MIN_ORDER) -> int:
        if anchor is None:
            return no_anchor
        return _required_order(anchor) + 1

    def _max_allowed_order(self, tasks: list[Task], start: int) -> int:
        """One below the tag of the nearest boundary task at or after *start*."""
        for task in tasks[start:]:
            if task.is_boundary:
                return _required_order(task) - 1
        return self.max_order

    def _push(self, tasks: list[Task], dest_index: int, start_order: int) -> list[TagAssignment]:
        max_allowed = self._max_allowed_order(tasks, dest_index + 1)
        logger.debug("Max allowed order: {}", max_allowed)

        assignments: list[TagAssignment] = []
        index = dest_index
        current = start_order
        while index < len(tasks):
            if current > max_allowed:
                logger.debug("Reached max allowed order {} at index {}", max_allowed, index)
                break

            assignment = self._assign(tasks, index, current)
            if assignment is not None:
                assignments.append(assignment)

            if index + 1 >= len(tasks):
                break
            nxt = tasks[index + 1]
            if nxt.is_boundary:
                logger.debug("Next task {} is boundary tier, stop here", nxt.id)
                break
            if _required_order(nxt, assignments) > current:
                break

            index += 1
            current += 1
        return assignments

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    def _assign_all(self, tasks: list[Task], orders: list[tuple[int, int]]) -> list[TagAssignment]:
        assignments = []
        for index, order in orders:
            assignment = self._assign(tasks, index, order)
            if assignment is not None:
                assignments.append(assignment)
        return assignments

    @staticmethod
    def _assign(tasks: list[Task], index: int, order: int) -> Optional[TagAssignment]:
        """Re-tag ``tasks[index]`` in place; ``None`` when its text is unchanged."""
        tag = OrderTag(order)
        updated = tasks[index].with_tag(tag)
        if updated.text == tasks[index].text:
            return None
        tasks[index] = updated
        return TagAssignment(index=index, task=updated, tag=tag)
