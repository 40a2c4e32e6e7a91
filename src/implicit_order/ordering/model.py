"""Task model for the implicit ordering core.

Tasks come from an external store that only knows about free text and a
coarse priority.  :class:`RawTask` mirrors the store payload; :class:`Task`
is the normalized, immutable value the planner and spreader work on.
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from enum import Enum
from typing import Any, Optional, Union

from ..constants import BOUNDARY_TIER, MAX_RAW_PRIORITY, MIN_RAW_PRIORITY
from . import codec
from .codec import OrderTag


# ---------------------------------------------------------------------------
# Enums
# ---------------------------------------------------------------------------

class ReorderPolicy(str, Enum):
    """How aggressively a move touches the tags of neighbouring tasks."""

    BALANCED = "balanced"  # Midpoint between the new neighbours
    RIGHT_AFTER = "right_after"  # Anchor + 1, nothing else touched
    PUSHY = "pushy"  # Anchor + 1, cascade forward until no conflict

    @classmethod
    def parse(cls, raw: Union[str, "ReorderPolicy", None], default: "ReorderPolicy") -> "ReorderPolicy":
        if raw is None or raw == "":
            return default
        if isinstance(raw, cls):
            return raw
        value = str(raw).strip().lower().replace("-", "_")
        # "middle" is an older name for the balanced policy.
        if value == "middle":
            return cls.BALANCED
        return cls(value)


# ---------------------------------------------------------------------------
# Store payload
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class RawTask:
    """A task as returned by the store.  ``priority`` 4 is the most urgent."""

    id: str
    content: str
    is_completed: bool = False
    priority: int = 1

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "content": self.content,
            "is_completed": self.is_completed,
            "priority": self.priority,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "RawTask":
        return cls(
            id=str(data.get("id", "")),
            content=str(data.get("content", "") or ""),
            is_completed=bool(data.get("is_completed", False)),
            priority=int(data.get("priority", 1) or 1),
        )


def priority_tier(raw_priority: int) -> int:
    """Map the store priority (4 = p1) onto a tier where 4 is the lowest."""
    clamped = max(MIN_RAW_PRIORITY, min(MAX_RAW_PRIORITY, int(raw_priority)))
    return 5 - clamped


# ---------------------------------------------------------------------------
# Task
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class Task:
    """A task in display order.  Its order tag is derived from ``text``."""

    id: str
    text: str
    priority_tier: int = 1
    completed: bool = False

    @classmethod
    def from_raw(cls, raw: RawTask) -> "Task":
        return cls(
            id=raw.id,
            text=raw.content,
            priority_tier=priority_tier(raw.priority),
            completed=raw.is_completed,
        )

    @property
    def tag(self) -> Optional[OrderTag]:
        return codec.decode(self.text)

    @property
    def order(self) -> Optional[int]:
        tag = self.tag
        return tag.value if tag is not None else None

    @property
    def is_boundary(self) -> bool:
        """Lowest-tier tasks partition the tag space and are never re-tagged by moves."""
        return self.priority_tier >= BOUNDARY_TIER

    def with_tag(self, tag: Union[OrderTag, int]) -> "Task":
        return replace(self, text=codec.encode(self.text, tag))

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "text": self.text,
            "priority_tier": self.priority_tier,
            "completed": self.completed,
            "order": self.order,
        }


# ---------------------------------------------------------------------------
# Results
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class TagAssignment:
    """A task that received a new tag at ``index`` of the resulting sequence."""

    index: int
    task: Task
    tag: OrderTag

    def to_dict(self) -> dict[str, Any]:
        return {"index": self.index, "id": self.task.id, "order": self.tag.value, "text": self.task.text}


@dataclass(frozen=True)
class OrderingResult:
    """The outcome of a pure ordering operation.

    ``sequence`` is the new display order with re-encoded tasks in place;
    ``assignments`` lists exactly the tasks that must be persisted.
    """

    sequence: tuple[Task, ...]
    assignments: tuple[TagAssignment, ...] = ()

    @property
    def changed(self) -> bool:
        return bool(self.assignments)
