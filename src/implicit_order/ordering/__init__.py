"""Implicit ordering core.

Tags embedded in task text are decoded by :mod:`.codec`, planned by
:mod:`.planner` (single moves) or :mod:`.spreader` (rebalancing) and
orchestrated by :mod:`.engine`.
"""

from .codec import OrderTag, decode, encode
from .engine import OrderingEngine, PersistOutcome
from .model import OrderingResult, RawTask, ReorderPolicy, TagAssignment, Task
from .planner import ReorderPlanner
from .spreader import Spreader, spread_step

__all__ = [
    "OrderTag",
    "OrderingEngine",
    "OrderingResult",
    "PersistOutcome",
    "RawTask",
    "ReorderPlanner",
    "ReorderPolicy",
    "Spreader",
    "TagAssignment",
    "Task",
    "decode",
    "encode",
    "spread_step",
]
