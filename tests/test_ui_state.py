import random

import pytest

from DE2_Panel.config import Config
from DE2_Panel.engine.bitfields import HEX_BLANK
from DE2_Panel.engine.ui_state import UIState


def test_initial_state_is_cleared():
    s = UIState()
    assert s.tick == 0
    assert s.key() == 0
    assert s.sw() == 0
    assert s.ledr() == 0
    assert s.ledg() == 0
    assert all(s.hex(i) == HEX_BLANK for i in range(Config.num_hex))
    assert s.cycle_text == "cycle# --"


def test_advance_zero_has_no_side_effects(state):
    fired = []
    ticks = []
    refreshes = []
    state.schedule_future(0, lambda: fired.append(1))
    state.on_tick = lambda s, final: ticks.append(final)
    state.on_refresh = lambda s: refreshes.append(1)

    state.advance(0)

    assert fired == []
    assert ticks == []
    assert refreshes == []
    assert state.cycle_text == "cycle# --"


def test_advance_negative_raises(state):
    with pytest.raises(ValueError):
        state.advance(-1)


def test_final_flag_only_on_last_step(state):
    flags = []

    def on_tick(s, final):
        s.tick += 1
        flags.append(final)

    state.on_tick = on_tick
    state.advance(5)
    assert flags == [False, False, False, False, True]
    assert state.tick == 5
    assert state.cycle_text == "cycle# 5"

    flags.clear()
    state.advance(1)
    assert flags == [True]


def test_futures_fire_exactly_once_before_on_tick(state):
    order = []

    def on_tick(s, final):
        order.append(("tick", s.tick))
        s.tick += 1

    state.on_tick = on_tick
    for when in (0, 3, 3, 7, 50):
        state.schedule_future(when, lambda w=when: order.append(("future", w)))

    state.advance(4)
    state.advance(4)

    futures = [entry for entry in order if entry[0] == "future"]
    assert futures == [("future", 0), ("future", 3), ("future", 3), ("future", 7)]
    # the future for tick 3 ran before on_tick observed tick 3
    assert order.index(("future", 3)) < order.index(("tick", 3))
    assert state.futures.pending_ticks() == [50]


def test_without_on_tick_the_clock_stands_still(state):
    state.on_tick = None
    calls = []
    state.schedule_future(1, lambda: calls.append(1))
    state.advance(10)
    assert state.tick == 0
    assert calls == []
    assert state.cycle_text == "cycle# 0"


def test_press_key_sets_bit_and_notifies_synchronously(state):
    seen = []
    state.on_key = lambda s: seen.append(s.key())
    state.press_key(2)
    assert state.key() == 0b0100
    assert seen == [0b0100]


def test_press_and_release_scenario(state):
    seen = []
    state.on_key = lambda s: seen.append(s.key())

    state.press_key(0)
    assert state.key() == 0b0001

    state.advance(9)
    assert state.tick == 9
    assert state.key() & 1

    state.advance(1)
    assert state.tick == 10
    # release is due at tick 10 and fires on the next step
    assert state.key() & 1
    state.advance(1)
    assert state.key() == 0
    assert seen == [0b0001, 0b0000]


def test_release_tick_within_bounds():
    rng = random.Random(1234)
    for start in (0, 17, 1000):
        s = UIState(rng=rng)
        s.tick = start
        s.press_key(1)
        (release,) = s.futures.pending_ticks()
        assert start + 10 <= release < start + 260


def test_maximum_random_draw_stays_below_upper_bound():
    class AlmostOne(random.Random):
        def random(self):
            return 0.999999999

    s = UIState(rng=AlmostOne())
    s.press_key(3)
    assert s.futures.pending_ticks() == [259]


def test_repress_schedules_independent_idempotent_release(state):
    seen = []
    state.on_key = lambda s: seen.append(s.key())

    state.press_key(1)
    state.advance(5)
    state.press_key(1)
    assert state.futures.pending_ticks() == [10, 15]

    state.advance(6)  # fires the tick-10 release
    assert state.key() == 0
    state.advance(5)  # fires the tick-15 release again
    assert state.key() == 0
    assert seen == [0b10, 0b10, 0, 0]


def test_press_key_out_of_range(state):
    with pytest.raises(IndexError):
        state.press_key(Config.num_keys)


def test_toggle_switch_notifies_and_reads_back(state):
    seen = []
    state.on_sw = lambda s: seen.append(s.sw())
    state.toggle_switch(0, True)
    state.toggle_switch(17, True)
    state.toggle_switch(0, False)
    assert seen == [0x1, 0x20001, 0x20000]
    assert state.sw() == 0x20000


def test_clear_sw_is_silent(state):
    seen = []
    state.toggle_switch(4, True)
    state.on_sw = lambda s: seen.append(s.sw())
    state.clear_sw()
    assert state.sw() == 0
    assert seen == []


def test_release_keys_clears_held_keys_and_notifies_once(state):
    seen = []
    state.press_key(0)
    state.press_key(2)
    state.on_key = lambda s: seen.append(s.key())
    state.release_keys()
    assert state.key() == 0
    assert seen == [0]

    state.release_keys()
    assert seen == [0]


def test_scheduled_release_still_fires_after_release_keys(state):
    seen = []
    state.press_key(1)
    state.release_keys()
    state.on_key = lambda s: seen.append(s.key())
    state.advance(state.key_push_min_time + 1)
    # the release future finds the key already up
    assert state.key() == 0
    assert seen == [0]


def test_clear_hex_blanks_displays_and_refreshes(state):
    refreshes = []
    for i in range(Config.num_hex):
        state.set_hex(i, 0xC0)
    state.on_refresh = lambda s: refreshes.append(s.snapshot())
    state.clear_hex()
    assert all(state.hex(i) == HEX_BLANK for i in range(Config.num_hex))
    assert len(refreshes) == 1


def test_reset_only_delegates(state):
    state.toggle_switch(3, True)
    state.press_key(0)
    state.reset()
    assert state.sw() == 0b1000
    assert len(state.futures) == 1

    def on_reset(s):
        s.tick = 0
        s.clear_futures()
        s.clear_sw()

    state.on_reset = on_reset
    state.tick = 4
    state.reset()
    assert state.tick == 0
    assert state.sw() == 0
    assert len(state.futures) == 0


def test_cleared_futures_never_run(state):
    calls = []
    for when in range(0, 20, 3):
        state.schedule_future(when, lambda: calls.append(1))
    state.clear_futures()
    state.advance(50)
    assert calls == []


def test_led_values_are_masked(state):
    state.set_ledr(0xFFFFFFFF)
    assert state.ledr() == 0x3FFFF
    state.set_ledg(0x1234)
    assert state.ledg() == 0x1234 & 0x1FF
    assert state.green_leds.label() == "(0x034)"
    assert state.red_leds.label() == "(0x3ffff)"


def test_hex_index_wraps(state):
    state.set_hex(Config.num_hex + 1, 0x1C0)
    assert state.hex(1) == 0xC0
    assert state.snapshot().hex_digits[1] == 0xC0


def test_setters_notify_refresh(state):
    refreshes = []
    state.on_refresh = lambda s: refreshes.append(s.snapshot())
    state.set_ledr(1)
    state.set_ledg(2)
    state.set_hex(0, 0)
    state.advance(2)
    assert len(refreshes) == 4
    assert refreshes[-1].tick == 2
    assert refreshes[-1].cycle_text == "cycle# 2"


def test_instances_are_isolated():
    a = UIState()
    b = UIState()
    a.schedule_future(0, lambda: None)
    a.set_ledr(5)
    a.toggle_switch(1, True)
    assert len(b.futures) == 0
    assert b.ledr() == 0
    assert b.sw() == 0


def test_instance_keeps_timing_from_construction():
    original = Config.key_push_min_time
    try:
        s = UIState()
        Config.key_push_min_time = 1
        assert s.key_push_min_time == original
        assert UIState().key_push_min_time == 1
    finally:
        Config.key_push_min_time = original
