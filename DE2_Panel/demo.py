"""Reference simulation: counts ticks and shows the count on the board."""

from __future__ import annotations

import logging

from .engine.bitfields import encode_hex_digit
from .engine.ui_state import UIState

logger = logging.getLogger(__name__)


def show_tick(state: UIState) -> None:
    """Show the tick number on the red LEDs and as hex on the displays."""
    state.set_ledr(state.tick)
    digits = len(state.hex_digits.digits)
    for i in range(digits):
        state.set_hex(i, encode_hex_digit(state.tick >> (4 * i)))


def on_key(state: UIState) -> None:
    logger.info("KEY pressed, key state is: 0x%x", state.key())
    state.set_ledg(state.key())


def on_sw(state: UIState) -> None:
    logger.info("SW changed, switch state is 0x%x", state.sw())


def on_tick(state: UIState, final: bool) -> None:
    # the caller has to maintain the simulation tick number
    state.tick += 1
    if final:
        show_tick(state)


def on_reset(state: UIState) -> None:
    state.tick = 0
    # their scheduled releases are about to be discarded
    state.release_keys()
    state.set_ledr(0)
    state.set_ledg(0)
    state.clear_futures()
    state.clear_sw()
    state.clear_hex()


def install(state: UIState) -> UIState:
    """Attach the demo callbacks to ``state`` and return it."""
    state.on_key = on_key
    state.on_sw = on_sw
    state.on_tick = on_tick
    state.on_reset = on_reset
    return state
