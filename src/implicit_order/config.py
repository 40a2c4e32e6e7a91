"""Load optional configuration from `.implicit_order/config.yaml`."""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Mapping, Optional

from .constants import (
    CONFIG_FILE,
    DEFAULT_FILTER,
    DEFAULT_LOG_LEVEL,
    DEFAULT_MAX_WORKERS,
    DEFAULT_POLICY,
    DEFAULT_STORE,
    FILE_STORE_NAME,
    STATE_DIR_NAME,
    TODOIST_BASE_URL,
    TODOIST_TIMEOUT_SECONDS,
    TODOIST_TOKEN_ENV,
)
from .io_utils import _load_data_with_error
from .ordering.model import ReorderPolicy

VALID_STORES = {"todoist", "file"}


@dataclass(frozen=True)
class OrderingSettings:
    """Resolved settings for a project directory."""

    store: str = DEFAULT_STORE
    filter: str = DEFAULT_FILTER
    policy: ReorderPolicy = ReorderPolicy(DEFAULT_POLICY)
    todoist_token: Optional[str] = None
    todoist_base_url: str = TODOIST_BASE_URL
    todoist_timeout: float = TODOIST_TIMEOUT_SECONDS
    file_store_path: Optional[Path] = None
    max_workers: int = DEFAULT_MAX_WORKERS
    log_level: str = DEFAULT_LOG_LEVEL


def load_config(project_dir: Path) -> tuple[dict[str, Any], str | None]:
    """Load the optional config file.

    Args:
        project_dir: Directory holding `.implicit_order/`.

    Returns:
        A tuple of `(config, error_message)`. If the file is missing, returns `({}, None)`.
    """
    path = project_dir.resolve() / STATE_DIR_NAME / CONFIG_FILE
    if not path.exists():
        return {}, None
    data, err = _load_data_with_error(path, {})
    if err:
        return {}, err
    return data, None


def _as_dict(value: Any) -> dict[str, Any]:
    return value if isinstance(value, dict) else {}


def resolve_settings(
    config: dict[str, Any],
    project_dir: Path,
    env: Optional[Mapping[str, str]] = None,
) -> OrderingSettings:
    """Turn a raw config mapping into :class:`OrderingSettings`.

    Unknown or malformed values fall back to defaults; ``TODOIST_TOKEN`` in
    *env* wins over the token in the file.
    """
    env = os.environ if env is None else env
    store = str(config.get("store") or DEFAULT_STORE).strip().lower()
    if store not in VALID_STORES:
        store = DEFAULT_STORE

    raw_filter = config.get("filter")
    if isinstance(raw_filter, str):
        filter_expression = raw_filter
    else:
        # The default filter is a Todoist query; the file store searches text.
        filter_expression = DEFAULT_FILTER if store == "todoist" else ""

    try:
        policy = ReorderPolicy.parse(config.get("policy"), ReorderPolicy(DEFAULT_POLICY))
    except ValueError:
        policy = ReorderPolicy(DEFAULT_POLICY)

    todoist_cfg = _as_dict(config.get("todoist"))
    token = env.get(TODOIST_TOKEN_ENV) or todoist_cfg.get("token") or None
    try:
        timeout = float(todoist_cfg.get("timeout") or TODOIST_TIMEOUT_SECONDS)
    except (TypeError, ValueError):
        timeout = float(TODOIST_TIMEOUT_SECONDS)

    file_cfg = _as_dict(config.get("file_store"))
    raw_path = file_cfg.get("path")
    if raw_path:
        file_path = Path(str(raw_path)).expanduser()
        if not file_path.is_absolute():
            file_path = project_dir / file_path
    else:
        file_path = project_dir / STATE_DIR_NAME / FILE_STORE_NAME

    try:
        max_workers = max(1, int(config.get("max_workers") or DEFAULT_MAX_WORKERS))
    except (TypeError, ValueError):
        max_workers = DEFAULT_MAX_WORKERS

    log_level = str(config.get("log_level") or DEFAULT_LOG_LEVEL).upper()

    return OrderingSettings(
        store=store,
        filter=filter_expression,
        policy=policy,
        todoist_token=str(token) if token else None,
        todoist_base_url=str(todoist_cfg.get("base_url") or TODOIST_BASE_URL),
        todoist_timeout=timeout,
        file_store_path=file_path,
        max_workers=max_workers,
        log_level=log_level,
    )
