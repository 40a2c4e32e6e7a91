from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Optional

from ..ordering.model import RawTask


class TaskStore(ABC):
    """The external task store the ordering core persists through."""

    @abstractmethod
    def fetch_all(self, filter_expression: Optional[str] = None) -> list[RawTask]:
        raise NotImplementedError

    @abstractmethod
    def update_text(self, task_id: str, new_text: str) -> RawTask:
        raise NotImplementedError
