from __future__ import annotations

import argparse
import json
import sys
from pathlib import Path
from typing import Optional

from rich.console import Console
from rich.markup import escape
from rich.table import Table

from .config import load_config, resolve_settings
from .errors import OrderingError, PersistFailed
from .logging_utils import configure_logging, summarize_result
from .ordering.model import ReorderPolicy
from .service import OrderingService


def _resolve_project_dir(project_dir: Optional[str]) -> Path:
    return Path(project_dir).expanduser().resolve() if project_dir else Path.cwd().resolve()


def _service(args: argparse.Namespace) -> OrderingService:
    project_dir = _resolve_project_dir(args.project_dir)
    config, err = load_config(project_dir)
    if err:
        sys.stderr.write(f"Ignoring unreadable config: {err}\n")
    settings = resolve_settings(config, project_dir)
    configure_logging(args.log_level or settings.log_level)
    service = OrderingService.from_settings(settings)
    service.refresh()
    return service


def _list(args: argparse.Namespace) -> int:
    service = _service(args)
    table = Table(title="Tasks", show_header=True)
    table.add_column("#", justify="right", style="cyan")
    table.add_column("Order", justify="right")
    table.add_column("Tier", justify="right")
    table.add_column("Text")
    for index, task in enumerate(service.sequence):
        order = "-" if task.order is None else f"{task.order:02d}"
        tier = f"[red]{task.priority_tier}[/red]" if task.is_boundary else str(task.priority_tier)
        text = escape(task.text)
        if task.completed:
            text = f"[strike]{text}[/strike]"
        table.add_row(str(index), order, tier, text)
    Console().print(table)
    return 0


def _move(args: argparse.Namespace) -> int:
    service = _service(args)
    policy = ReorderPolicy.parse(args.policy, service.policy)
    result = service.move(args.source, args.dest, policy)
    sys.stdout.write(json.dumps(summarize_result(result, f"move:{policy.value}"), indent=2) + '\n')
    return 0


def _spread(args: argparse.Namespace) -> int:
    service = _service(args)
    result = service.spread()
    sys.stdout.write(json.dumps(summarize_result(result, "spread"), indent=2) + '\n')
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description='Keep a manual order on tasks through tags in their text')
    parser.add_argument('--project-dir', default=None, help='Directory holding .implicit_order/ (default: current working directory)')
    parser.add_argument('--log-level', default=None, help='Log level (default: from config, INFO)')
    subparsers = parser.add_subparsers(dest='command', required=True)

    plist = subparsers.add_parser('list', help='List tasks in their current order')
    plist.set_defaults(func=_list)

    pmove = subparsers.add_parser('move', help='Move the task at SOURCE to DEST')
    pmove.add_argument('source', type=int)
    pmove.add_argument('dest', type=int)
    pmove.add_argument('--policy', default=None, choices=[p.value for p in ReorderPolicy])
    pmove.set_defaults(func=_move)

    pspread = subparsers.add_parser('spread', help='Redistribute tags evenly')
    pspread.set_defaults(func=_spread)

    return parser


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    handler = getattr(args, 'func', None)
    if handler is None:
        parser.print_help()
        return 1
    try:
        return int(handler(args) or 0)
    except PersistFailed as exc:
        sys.stderr.write(f"{exc}\nSome tasks were not saved; run 'list' to see the stored order.\n")
        return 1
    except (OrderingError, ValueError) as exc:
        sys.stderr.write(str(exc) + '\n')
        return 1


if __name__ == '__main__':
    sys.exit(main())
