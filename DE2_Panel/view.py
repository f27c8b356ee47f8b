"""UI-facing snapshot dataclasses."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Tuple


@dataclass(frozen=True)
class PanelSnapshot:
    """Everything the presentation layer needs to repaint the board."""

    tick: int
    cycle_text: str
    hex_digits: Tuple[int, ...] = field(default_factory=tuple)
    ledr: int = 0
    ledg: int = 0
    sw: int = 0
    key: int = 0
    pending_futures: int = 0
