import sys
from pathlib import Path

# Ensure package import for tests
ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

import random

import pytest

from DE2_Panel.engine.ui_state import UIState


class FixedRandom(random.Random):
    """Random source whose ``random()`` always returns ``value``."""

    def __init__(self, value: float = 0.0) -> None:
        super().__init__(0)
        self.value = value

    def random(self) -> float:
        return self.value


@pytest.fixture
def state() -> UIState:
    """UIState with minimum-length key presses and a counting tick hook."""

    s = UIState(rng=FixedRandom(0.0))

    def _count(st: UIState, final: bool) -> None:
        st.tick += 1

    s.on_tick = _count
    return s
