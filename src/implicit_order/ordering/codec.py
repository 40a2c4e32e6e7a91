"""Order tag codec.

The order of a task lives in its text as a zero-padded two digit prefix,
``"[07] Buy milk"``.  :func:`decode` reads that prefix into an
:class:`OrderTag`, :func:`encode` writes one back while leaving the rest
of the text untouched.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Optional, Union

from ..constants import MAX_ORDER, MIN_ORDER

_TAG_RE = re.compile(r"^\[([0-9]{1,2})\]")
# Wider than _TAG_RE so that stray tokens like "[-1]" get overwritten too.
_TOKEN_RE = re.compile(r"^\[[0-9\-]{1,2}\]")


@dataclass(frozen=True, order=True)
class OrderTag:
    """An order value in ``[MIN_ORDER, MAX_ORDER]``."""

    value: int

    def __post_init__(self) -> None:
        if not isinstance(self.value, int) or isinstance(self.value, bool):
            raise TypeError(f"OrderTag value must be an int, got {type(self.value).__name__}")
        if not MIN_ORDER <= self.value <= MAX_ORDER:
            raise ValueError(f"OrderTag value must be in [{MIN_ORDER}, {MAX_ORDER}], got {self.value}")

    def __str__(self) -> str:
        return f"[{self.value:02d}]"


def decode(text: str) -> Optional[OrderTag]:
    """Return the tag prefixed to *text*, or ``None`` when there is none."""
    match = _TAG_RE.match(text or "")
    if match is None:
        return None
    value = int(match.group(1), 10)
    if not MIN_ORDER <= value <= MAX_ORDER:
        return None
    return OrderTag(value)


def encode(text: str, tag: Union[OrderTag, int]) -> str:
    """Return *text* carrying *tag* as its prefix.

    An existing leading token is replaced in place; otherwise ``"[NN] "`` is
    prepended.  Encoding twice with the same tag is a no-op.
    """
    if not isinstance(tag, OrderTag):
        tag = OrderTag(tag)
    text = text or ""
    if _TOKEN_RE.match(text):
        return _TOKEN_RE.sub(str(tag), text, count=1)
    return f"{tag} {text}"
