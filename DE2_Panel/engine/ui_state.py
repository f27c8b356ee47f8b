from __future__ import annotations

"""Tick-driven state machine behind the board front panel."""

import logging
import random
from typing import Callable, Optional

from ..config import Config
from ..view import PanelSnapshot
from .bitfields import HexBank, KeyBank, LedBank, SwitchBank
from .futures import Future, FutureRegistry

logger = logging.getLogger(__name__)

StateCallback = Callable[["UIState"], None]
TickCallback = Callable[["UIState", bool], None]


class UIState:
    """State and event routing for one simulated DE2-115 front panel.

    The panel assumes the simulation runs in discrete "ticks". ``on_tick``
    is called whenever the user does something that triggers one or more
    ticks; the caller is expected to advance :attr:`tick` itself while
    handling them. The panel never increments it.

    Some events happen in the future. A pushed KEY stays pressed for a
    random number of ticks (a human holds a real button for many thousands
    of clock cycles), so each push schedules its own release. Futures run
    when a tick occurs and :attr:`tick` has reached their scheduled value,
    always before ``on_tick`` for that step.

    Every callback runs synchronously on the calling thread and must not
    block.

    Attributes
    ----------
    tick:
        Current simulation tick, shown as the cycle number and used to decide
        which futures are due.
    on_key:
        Run whenever any key is pressed or released.
    on_sw:
        Run whenever a switch changes.
    on_tick:
        Run once per tick. The boolean is ``True`` only on the final tick of
        a batch, so expensive display updates such as :meth:`set_hex` can be
        deferred to it.
    on_reset:
        Run when the reset control is used. Nothing is cleared automatically;
        call :meth:`clear_futures`, :meth:`clear_sw` and the setters from it.
    on_refresh:
        Presentation hook run after displayed state changes.
    """

    def __init__(
        self,
        *,
        rng: random.Random | None = None,
        key_push_min_time: int | None = None,
        key_push_max_time: int | None = None,
    ) -> None:
        self.tick = 0

        self.on_key: Optional[StateCallback] = None
        self.on_sw: Optional[StateCallback] = None
        self.on_tick: Optional[TickCallback] = None
        self.on_reset: Optional[StateCallback] = None
        self.on_refresh: Optional[StateCallback] = None

        self.key_push_min_time = (
            Config.key_push_min_time if key_push_min_time is None else key_push_min_time
        )
        self.key_push_max_time = (
            Config.key_push_max_time if key_push_max_time is None else key_push_max_time
        )
        self._rng = rng if rng is not None else random.Random(Config.random_seed)

        self.futures = FutureRegistry()
        self.keys = KeyBank(Config.num_keys)
        self.switches = SwitchBank(Config.num_switches)
        self.red_leds = LedBank(Config.num_red_leds)
        self.green_leds = LedBank(Config.num_green_leds)
        self.hex_digits = HexBank(Config.num_hex)

        self.cycle_text = "cycle# --"

    # ------------------------------------------------------------------
    def _refresh(self) -> None:
        if self.on_refresh is not None:
            self.on_refresh(self)

    # ------------------------------------------------------------------
    def advance(self, count: int) -> None:
        """Run ``count`` ticks.

        Each tick first fires the futures that are due at the current
        :attr:`tick`, then calls ``on_tick``. A count of zero does nothing
        at all, not even a cycle label update.
        """

        if count < 0:
            raise ValueError(f"tick count must be non-negative, got {count}")
        # don't trigger updates on 0-tick events
        if count == 0:
            return

        for i in range(count):
            self.futures.fire_due(self.tick)
            if self.on_tick is not None:
                self.on_tick(self, i + 1 == count)

        self.cycle_text = f"cycle# {self.tick}"
        self._refresh()

    def schedule_future(self, when: int, callback: Future) -> None:
        """Run ``callback`` on the first tick where :attr:`tick` ``>= when``."""
        self.futures.schedule(when, callback)

    def clear_futures(self) -> None:
        """Drop every scheduled future. Usually called from ``on_reset``."""
        logger.debug("clearing %d pending future(s)", len(self.futures))
        self.futures.clear()

    # ------------------------------------------------------------------
    def press_key(self, i: int) -> None:
        """Push KEY ``i`` and schedule its release.

        The key is held for ``key_push_min_time`` plus a uniform random
        share of ``key_push_max_time`` ticks. Pushing a key that is already
        held schedules another release without touching the pending one.
        """

        self.keys.press(i)
        delay = int(
            self._rng.random() * self.key_push_max_time + self.key_push_min_time
        )
        release = self.tick + delay
        self.schedule_future(release, lambda: self._release_key(i))
        logger.debug("KEY%d pressed at tick %d, release at %d", i, self.tick, release)

        if self.on_key is not None:
            self.on_key(self)

    def _release_key(self, i: int) -> None:
        """Release KEY ``i``; invoked only by the future scheduled on press."""
        self.keys.release(i)
        logger.debug("KEY%d released at tick %d", i, self.tick)
        if self.on_key is not None:
            self.on_key(self)

    def toggle_switch(self, i: int, on: bool) -> None:
        """Record that switch ``i`` (bit 0 = rightmost) was flipped."""
        self.switches.set_bit(i, on)
        self._refresh()
        if self.on_sw is not None:
            self.on_sw(self)

    def reset(self) -> None:
        """Handle the reset control by delegating to ``on_reset``."""
        logger.debug("reset requested at tick %d", self.tick)
        if self.on_reset is not None:
            self.on_reset(self)

    def clear_sw(self) -> None:
        """Turn every switch off without notifying ``on_sw``."""
        self.switches.clear()
        self._refresh()

    def release_keys(self) -> None:
        """Release every held key, for reset handlers.

        Use it before :meth:`clear_futures`, which discards the scheduled
        releases. ``on_key`` runs once if any key was held.
        """
        if not self.keys.value:
            return
        self.keys.clear()
        logger.debug("all keys released at tick %d", self.tick)
        if self.on_key is not None:
            self.on_key(self)

    def clear_hex(self) -> None:
        """Blank every HEX display."""
        self.hex_digits.blank()
        self._refresh()

    # ------------------------------------------------------------------
    def set_hex(self, i: int, state: int) -> None:
        """Update HEX display ``i`` (taken modulo the display count).

        Display 0 is the rightmost one. Segments are active-low; see
        :class:`~DE2_Panel.engine.bitfields.HexBank` for the bit layout.
        """
        self.hex_digits.set(i, state)
        self._refresh()

    def set_ledr(self, state: int) -> None:
        """Set the red LEDs. Bits above the bank width are ignored."""
        self.red_leds.set(state)
        self._refresh()

    def set_ledg(self, state: int) -> None:
        """Set the green LEDs. Bits above the bank width are ignored."""
        self.green_leds.set(state)
        self._refresh()

    # ------------------------------------------------------------------
    def sw(self) -> int:
        """Return the switch bank, rightmost switch in bit 0."""
        return self.switches.value

    def key(self) -> int:
        """Return the key bank, KEY0 in bit 0."""
        return self.keys.value

    def ledr(self) -> int:
        return self.red_leds.value

    def ledg(self) -> int:
        return self.green_leds.value

    def hex(self, i: int) -> int:
        return self.hex_digits.get(i)

    def snapshot(self) -> PanelSnapshot:
        """Return an immutable copy of everything currently displayed."""
        return PanelSnapshot(
            tick=self.tick,
            cycle_text=self.cycle_text,
            hex_digits=tuple(self.hex_digits.digits),
            ledr=self.red_leds.value,
            ledg=self.green_leds.value,
            sw=self.switches.value,
            key=self.keys.value,
            pending_futures=len(self.futures),
        )
