"""Turning a cell grid into a status message."""

import logging
from collections.abc import Sequence
from typing import Any

logger = logging.getLogger(__name__)

MAX_STATUS_LENGTH = 280
STATUS_PREFIX = "some cool data: "


def render(value: Any) -> str:
    """Render nested rows as space-separated bracketed lists.

    >>> render([["a", "b"], ["c", "d"]])
    '[[a b] [c d]]'
    """
    if isinstance(value, Sequence) and not isinstance(value, (str, bytes)):
        return "[" + " ".join(render(item) for item in value) + "]"
    return str(value)


def format_status(grid: Sequence[Sequence[Any]]) -> str:
    """Format a cell grid as a status, cut to MAX_STATUS_LENGTH characters.

    The cut is a plain slice: no ellipsis and no word boundaries.
    """
    status = STATUS_PREFIX + render(grid)
    return status[:MAX_STATUS_LENGTH]


def mark_complete() -> None:
    """Record that the posted rows are done.

    Placeholder: nothing is persisted yet, so repeated runs post the same rows.
    """
    logger.debug("Nothing to mark complete")
