"""Tests for the `implicit-order` command line."""

from __future__ import annotations

import json
from pathlib import Path

import pytest

from implicit_order.cli import build_parser, main
from implicit_order.ordering.model import RawTask
from implicit_order.store import FileTaskStore


@pytest.fixture
def project(tmp_path: Path) -> Path:
    state = tmp_path / ".implicit_order"
    state.mkdir()
    (state / "config.yaml").write_text("store: file\npolicy: pushy\n", encoding="utf-8")
    FileTaskStore(state / "tasks.yaml").seed([
        RawTask(id="1", content="[10] Alpha", priority=3),
        RawTask(id="2", content="[20] Bravo", priority=3),
        RawTask(id="3", content="[30] Charlie", priority=3),
    ])
    return tmp_path


def _stored(project: Path) -> dict[str, str]:
    store = FileTaskStore(project / ".implicit_order" / "tasks.yaml")
    return {t.id: t.content for t in store.fetch_all()}


class TestParser:
    def test_command_required(self) -> None:
        with pytest.raises(SystemExit):
            build_parser().parse_args([])

    def test_move_arguments(self) -> None:
        args = build_parser().parse_args(["move", "3", "1", "--policy", "balanced"])
        assert (args.source, args.dest, args.policy) == (3, 1, "balanced")

    def test_rejects_unknown_policy(self) -> None:
        with pytest.raises(SystemExit):
            build_parser().parse_args(["move", "0", "1", "--policy", "sideways"])


class TestMain:
    def test_list(self, project: Path, capsys) -> None:
        assert main(["--project-dir", str(project), "list"]) == 0
        out = capsys.readouterr().out
        assert "[10] Alpha" in out
        assert out.index("Alpha") < out.index("Bravo") < out.index("Charlie")

    def test_move(self, project: Path, capsys) -> None:
        assert main(["--project-dir", str(project), "move", "2", "0", "--policy", "right_after"]) == 0
        summary = json.loads(capsys.readouterr().out)
        assert summary["operation"] == "move:right_after"
        assert summary["changed_n"] == 1
        assert summary["assignments"][0] == {"index": 0, "id": "3", "order": 0, "text": "[00] Charlie"}
        assert _stored(project)["3"] == "[00] Charlie"

    def test_move_uses_configured_policy(self, project: Path, capsys) -> None:
        assert main(["--project-dir", str(project), "move", "2", "0"]) == 0
        summary = json.loads(capsys.readouterr().out)
        assert summary["operation"] == "move:pushy"
        assert summary["assignments"] == [{"index": 0, "id": "3", "order": 1, "text": "[01] Charlie"}]
        assert _stored(project)["3"] == "[01] Charlie"

    def test_spread(self, project: Path, capsys) -> None:
        assert main(["--project-dir", str(project), "spread"]) == 0
        summary = json.loads(capsys.readouterr().out)
        assert summary["operation"] == "spread"
        assert summary["changed_n"] == 0
        assert _stored(project) == {"1": "[10] Alpha", "2": "[20] Bravo", "3": "[30] Charlie"}

    def test_out_of_range_move(self, project: Path, capsys) -> None:
        assert main(["--project-dir", str(project), "move", "7", "0"]) == 1
        assert "out of range" in capsys.readouterr().err

    def test_missing_token(self, tmp_path: Path, capsys, monkeypatch) -> None:
        monkeypatch.delenv("TODOIST_TOKEN", raising=False)
        assert main(["--project-dir", str(tmp_path), "list"]) == 1
        assert "Todoist token" in capsys.readouterr().err
