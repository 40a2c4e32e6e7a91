"""File-based task store with locking.

Keeps raw tasks in a single YAML file (``tasks.yaml``) inside the project's
``.implicit_order/`` directory.  Reads and writes go through
:meth:`FileTaskStore.transaction`, which holds an exclusive file lock so the
concurrent updates of a persistence fan-out serialize cleanly.
"""

from __future__ import annotations

import threading
from contextlib import contextmanager
from pathlib import Path
from typing import Iterable, Iterator, Optional

from ..errors import StoreError, UpdateFailed
from ..io_utils import FileLock, _atomic_write_yaml, _load_data_with_error
from ..ordering.model import RawTask
from .interfaces import TaskStore

LOCK_SUFFIX = ".lock"
STORE_VERSION = 1


class FileTaskStore(TaskStore):
    """Thread-safe, file-backed store of :class:`RawTask` objects.

    Parameters
    ----------
    path:
        YAML file holding ``{"version": 1, "tasks": [...]}``.
    """

    def __init__(self, path: Path) -> None:
        self._path = path
        self._file_lock = FileLock(path.with_name(path.name + LOCK_SUFFIX))
        # FileLock keeps a single handle, so threads of this process queue here first.
        self._thread_lock = threading.Lock()

    @property
    def path(self) -> Path:
        return self._path

    # -- internal helpers ---------------------------------------------------

    def _load(self) -> list[RawTask]:
        data, err = _load_data_with_error(self._path, {})
        if err:
            raise StoreError(err)
        raw = data.get("tasks") or []
        if not isinstance(raw, list):
            raise StoreError(f"{self._path.name}: 'tasks' must be a list")
        return [RawTask.from_dict(item) for item in raw if isinstance(item, dict)]

    def _save(self, tasks: list[RawTask]) -> None:
        _atomic_write_yaml(self._path, {"version": STORE_VERSION, "tasks": [t.to_dict() for t in tasks]})

    @contextmanager
    def transaction(self) -> Iterator[_RawTaskTx]:
        """Acquire the locks, load tasks, yield a transaction, and save on exit if dirty."""
        with self._thread_lock, self._file_lock:
            tx = _RawTaskTx(self._load())
            yield tx
            if tx.dirty:
                self._save(tx.tasks)

    # -- public API ---------------------------------------------------------

    def seed(self, tasks: Iterable[RawTask]) -> None:
        """Replace the whole file content with *tasks*."""
        with self.transaction() as tx:
            tx.tasks = list(tasks)
            tx.dirty = True

    def fetch_all(self, filter_expression: Optional[str] = None) -> list[RawTask]:
        """Return stored tasks whose content contains *filter_expression* (case-insensitive)."""
        with self.transaction() as tx:
            return tx.find(filter_expression)

    def update_text(self, task_id: str, new_text: str) -> RawTask:
        try:
            with self.transaction() as tx:
                updated = tx.update_content(task_id, new_text)
        except (OSError, StoreError) as exc:
            raise UpdateFailed(task_id, str(exc)) from exc
        if updated is None:
            raise UpdateFailed(task_id, "not found")
        return updated


class _RawTaskTx:
    """In-memory transaction over the stored task list."""

    def __init__(self, tasks: list[RawTask]) -> None:
        self.tasks = tasks
        self.dirty = False

    def find(self, search: Optional[str]) -> list[RawTask]:
        if not search:
            return list(self.tasks)
        q = search.lower()
        return [t for t in self.tasks if q in t.content.lower()]

    def update_content(self, task_id: str, content: str) -> Optional[RawTask]:
        for i, task in enumerate(self.tasks):
            if task.id == task_id:
                updated = RawTask(
                    id=task.id,
                    content=content,
                    is_completed=task.is_completed,
                    priority=task.priority,
                )
                self.tasks[i] = updated
                self.dirty = True
                return updated
        return None
