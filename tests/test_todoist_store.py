"""Tests for the Todoist REST store (store/todoist.py)."""

from __future__ import annotations

import io
import json
import urllib.error
from typing import Any
from unittest.mock import MagicMock, patch

import pytest

from implicit_order.errors import StoreError, UpdateFailed
from implicit_order.ordering.model import RawTask
from implicit_order.store.todoist import TodoistStore


def _response(payload: Any) -> MagicMock:
    resp = MagicMock()
    resp.read.return_value = json.dumps(payload).encode("utf-8")
    resp.__enter__.return_value = resp
    resp.__exit__.return_value = False
    return resp


def _http_error(code: int) -> urllib.error.HTTPError:
    return urllib.error.HTTPError("https://example.test", code, "Bad", {}, io.BytesIO(b""))  # type: ignore[arg-type]


@pytest.fixture
def store() -> TodoistStore:
    return TodoistStore("secret-token", base_url="https://api.example.test/rest/v2/")


class TestTodoistStore:
    def test_requires_token(self) -> None:
        with pytest.raises(ValueError):
            TodoistStore("")

    def test_fetch_all_sends_filter_and_token(self, store: TodoistStore) -> None:
        payload = [
            {"id": "1", "content": "[10] A", "is_completed": False, "priority": 2, "project_id": "p"},
            {"id": "2", "content": "B", "is_completed": True, "priority": 1},
        ]
        with patch("urllib.request.urlopen", return_value=_response(payload)) as urlopen:
            tasks = store.fetch_all("#Buckets & p3")

        request = urlopen.call_args[0][0]
        assert request.get_method() == "GET"
        assert request.full_url == "https://api.example.test/rest/v2/tasks?filter=%23Buckets+%26+p3"
        assert request.get_header("Authorization") == "Bearer secret-token"
        assert tasks == [
            RawTask(id="1", content="[10] A", is_completed=False, priority=2),
            RawTask(id="2", content="B", is_completed=True, priority=1),
        ]

    def test_fetch_all_without_filter(self, store: TodoistStore) -> None:
        with patch("urllib.request.urlopen", return_value=_response([])) as urlopen:
            assert store.fetch_all() == []
        assert urlopen.call_args[0][0].full_url == "https://api.example.test/rest/v2/tasks"

    def test_fetch_all_http_error(self, store: TodoistStore) -> None:
        with patch("urllib.request.urlopen", side_effect=_http_error(401)):
            with pytest.raises(StoreError, match="401"):
                store.fetch_all("today")

    def test_fetch_all_unreachable(self, store: TodoistStore) -> None:
        with patch("urllib.request.urlopen", side_effect=urllib.error.URLError("no route")):
            with pytest.raises(StoreError, match="unreachable"):
                store.fetch_all()

    def test_fetch_all_rejects_non_list(self, store: TodoistStore) -> None:
        with patch("urllib.request.urlopen", return_value=_response({"error": "x"})):
            with pytest.raises(StoreError, match="expected a list"):
                store.fetch_all()

    def test_update_text_posts_content(self, store: TodoistStore) -> None:
        payload = {"id": "7", "content": "[12] Buy milk", "is_completed": False, "priority": 3}
        with patch("urllib.request.urlopen", return_value=_response(payload)) as urlopen:
            raw = store.update_text("7", "[12] Buy milk")

        request = urlopen.call_args[0][0]
        assert request.get_method() == "POST"
        assert request.full_url == "https://api.example.test/rest/v2/tasks/7"
        assert json.loads(request.data.decode("utf-8")) == {"content": "[12] Buy milk"}
        assert raw == RawTask(id="7", content="[12] Buy milk", is_completed=False, priority=3)

    def test_update_text_http_error(self, store: TodoistStore) -> None:
        with patch("urllib.request.urlopen", side_effect=_http_error(500)):
            with pytest.raises(UpdateFailed) as excinfo:
                store.update_text("7", "[12] Buy milk")
        assert excinfo.value.task_id == "7"
        assert "500" in str(excinfo.value)

    def test_update_text_bad_json(self, store: TodoistStore) -> None:
        resp = _response(None)
        resp.read.return_value = b"<html>"
        with patch("urllib.request.urlopen", return_value=resp):
            with pytest.raises(UpdateFailed):
                store.update_text("7", "x")
