"""Todoist REST v2 task store."""

from __future__ import annotations

import json
import urllib.error
import urllib.parse
import urllib.request
from typing import Any, Optional

from loguru import logger

from ..constants import TODOIST_BASE_URL, TODOIST_TIMEOUT_SECONDS
from ..errors import StoreError, UpdateFailed
from ..ordering.model import RawTask
from .interfaces import TaskStore


class TodoistStore(TaskStore):
    """Read and update Todoist tasks with a personal API token."""

    def __init__(
        self,
        token: str,
        *,
        base_url: str = TODOIST_BASE_URL,
        timeout: float = TODOIST_TIMEOUT_SECONDS,
    ) -> None:
        if not token:
            raise ValueError("A Todoist API token is required")
        self._token = token
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout

    def _request(self, method: str, path: str, payload: Optional[dict[str, Any]] = None) -> Any:
        url = f"{self.base_url}{path}"
        data = json.dumps(payload).encode("utf-8") if payload is not None else None
        request = urllib.request.Request(
            url,
            data=data,
            headers={
                "Content-Type": "application/json",
                "Authorization": f"Bearer {self._token}",
                "Cache-Control": "no-cache",
            },
            method=method,
        )
        with urllib.request.urlopen(request, timeout=self.timeout) as resp:
            body = resp.read().decode("utf-8")
        return json.loads(body) if body else None

    def fetch_all(self, filter_expression: Optional[str] = None) -> list[RawTask]:
        path = "/tasks"
        if filter_expression:
            path += "?" + urllib.parse.urlencode({"filter": filter_expression})
        try:
            payload = self._request("GET", path)
        except urllib.error.HTTPError as exc:
            raise StoreError(f"Todoist HTTP error: {exc.code} {exc.reason}") from exc
        except urllib.error.URLError as exc:
            raise StoreError(f"Todoist unreachable: {exc.reason}") from exc
        except (OSError, json.JSONDecodeError) as exc:
            raise StoreError(f"Todoist fetch failed: {exc}") from exc
        if not isinstance(payload, list):
            raise StoreError(f"Unexpected Todoist payload: expected a list, got {type(payload).__name__}")
        tasks = [RawTask.from_dict(item) for item in payload if isinstance(item, dict)]
        logger.debug("Fetched {} task(s) from Todoist", len(tasks))
        return tasks

    def update_text(self, task_id: str, new_text: str) -> RawTask:
        path = f"/tasks/{urllib.parse.quote(task_id, safe='')}"
        try:
            payload = self._request("POST", path, {"content": new_text})
        except urllib.error.HTTPError as exc:
            raise UpdateFailed(task_id, f"HTTP {exc.code} {exc.reason}") from exc
        except urllib.error.URLError as exc:
            raise UpdateFailed(task_id, str(exc.reason)) from exc
        except (OSError, json.JSONDecodeError) as exc:
            raise UpdateFailed(task_id, str(exc)) from exc
        if not isinstance(payload, dict):
            raise UpdateFailed(task_id, "unexpected response payload")
        return RawTask.from_dict(payload)
