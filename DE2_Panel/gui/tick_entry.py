"""Parsing for the free-form ``n=`` tick count entry."""

from __future__ import annotations

import logging

logger = logging.getLogger(__name__)


def parse_tick_entry(text: str) -> int:
    """Return the tick count typed into the entry box.

    Anything that is not a non-negative integer is logged and treated as
    zero, which makes the "Tick N" button a no-op.
    """

    try:
        value = int(text.strip())
    except ValueError as e:
        logger.warning("Invalid tick entry value '%s': %s", text, e)
        return 0
    if value < 0:
        logger.warning("Invalid tick entry value '%s': negative count", text)
        return 0
    return value
