"""Configure logging and summarize ordering results for logs."""

from __future__ import annotations

import json
import sys
from typing import Any

from loguru import logger

from .ordering.model import OrderingResult


def configure_logging(level: str = "INFO") -> None:
    """Configure loguru logger with the specified level."""
    logger.remove()
    logger.add(
        sys.stderr,
        level=level.upper(),
        format=(
            "<green>{time:YYYY-MM-DD HH:mm:ss.SSS}</green> | "
            "<level>{level: <8}</level> | "
            "<cyan>{module}</cyan>:<cyan>{line}</cyan>\n"
            "{message}"
        ),
    )


def summarize_result(result: OrderingResult | None, operation: str | None = None) -> dict[str, Any]:
    """Render a compact, JSON-friendly summary of an ordering result.

    Args:
        result: Result of a move or spread (or None).
        operation: Optional operation name to include.

    Returns:
        A dictionary suitable for logging or CLI output.
    """
    if result is None:
        return {"result": None}

    d: dict[str, Any] = {}
    if operation:
        d["operation"] = operation
    d["size"] = len(result.sequence)
    d["changed_n"] = len(result.assignments)
    d["assignments"] = [a.to_dict() for a in result.assignments]
    return d


def pretty(obj: Any, *, indent: int = 2) -> str:
    """Serialize an object as JSON for readable logs.

    Args:
        obj: Object to serialize.
        indent: Indentation level for JSON output.

    Returns:
        A JSON string when possible; otherwise `str(obj)`.
    """
    try:
        return json.dumps(obj, indent=indent, default=str)
    except (TypeError, ValueError):
        return str(obj)
