"""Provide the public `implicit_order` package exports."""

from __future__ import annotations

from .errors import (
    MissingOrderFatal,
    OrderCollision,
    OrderingError,
    PersistFailed,
    StoreError,
    UpdateFailed,
)
from .ordering import OrderingEngine, OrderingResult, OrderTag, ReorderPolicy, Task
from .service import OrderingService

__all__ = [
    "MissingOrderFatal",
    "OrderCollision",
    "OrderTag",
    "OrderingEngine",
    "OrderingError",
    "OrderingResult",
    "OrderingService",
    "PersistFailed",
    "ReorderPolicy",
    "StoreError",
    "Task",
    "UpdateFailed",
]
