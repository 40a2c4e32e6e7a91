"""Even redistribution of order tags over a whole sequence."""

from __future__ import annotations

from typing import Sequence

from loguru import logger

from ..constants import MAX_ORDER, SPREAD_MAX_STEP, SPREAD_MID_STEP, SPREAD_MIN_ORDER
from .codec import OrderTag
from .model import OrderingResult, TagAssignment, Task


def spread_step(count: int, min_order: int = SPREAD_MIN_ORDER, max_order: int = MAX_ORDER) -> int:
    """Return the tag step for *count* tasks.

    Steps above 10 clamp to 10 and steps of 6-10 clamp to 5.
    """
    if count < 1:
        raise ValueError("Cannot spread an empty sequence")
    step = (max_order - min_order + 1) // count
    if step > SPREAD_MAX_STEP:
        step = SPREAD_MAX_STEP
    elif step > SPREAD_MID_STEP:
        step = SPREAD_MID_STEP
    return step


class Spreader:
    """Assign ``min_order, min_order + step, ...`` in display order."""

    def __init__(self, min_order: int = SPREAD_MIN_ORDER, max_order: int = MAX_ORDER) -> None:
        self.min_order = min_order
        self.max_order = max_order

    def spread(self, sequence: Sequence[Task]) -> OrderingResult:
        tasks = list(sequence)
        if not tasks:
            return OrderingResult(sequence=())

        step = spread_step(len(tasks), self.min_order, self.max_order)
        logger.debug("Spreading {} task(s) from {} with step {}", len(tasks), self.min_order, step)

        assignments: list[TagAssignment] = []
        current = self.min_order
        for index, task in enumerate(tasks):
            if task.order != current:
                tag = OrderTag(current)
                tasks[index] = task.with_tag(tag)
                assignments.append(TagAssignment(index=index, task=tasks[index], tag=tag))
            current += step

        return OrderingResult(sequence=tuple(tasks), assignments=tuple(assignments))
