"""Bit-field models backing the board's displays and inputs."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import List

#: Active-low byte with every segment (and the decimal point) dark.
HEX_BLANK = 0xFF

#: Active-high segment patterns for ``0``-``F`` (bit 0 = top segment).
HEX_FONT = [
    0x3F,  # 0
    0x06,  # 1
    0x5B,  # 2
    0x4F,  # 3
    0x66,  # 4
    0x6D,  # 5
    0x7D,  # 6
    0x07,  # 7
    0x7F,  # 8
    0x6F,  # 9
    0x77,  # A
    0x7C,  # b
    0x39,  # C
    0x5E,  # d
    0x79,  # E
    0x71,  # F
]


def width_mask(width: int) -> int:
    """Return an integer with the low ``width`` bits set."""
    return (1 << width) - 1


def encode_hex_digit(value: int, dot: bool = False) -> int:
    """Return the active-low segment byte showing ``value & 0xF``.

    ``dot`` lights the decimal point as well.
    """
    segments = HEX_FONT[value & 0xF]
    if dot:
        segments |= 0x80
    return ~segments & 0xFF


@dataclass
class LedBank:
    """A strip of active-high LEDs; bit 0 is the rightmost LED."""

    width: int
    value: int = 0

    @property
    def mask(self) -> int:
        return width_mask(self.width)

    def set(self, value: int) -> int:
        """Store ``value`` truncated to the bank width and return it."""
        self.value = value & self.mask
        return self.value

    def is_lit(self, bit: int) -> bool:
        return bool(self.value >> bit & 1)

    def label(self) -> str:
        """Return the hex label shown next to the strip, e.g. ``(0x0002a)``."""
        digits = (self.width + 3) // 4
        return f"(0x{self.value:0{digits}x})"


@dataclass
class SwitchBank:
    """Persistent toggle switches packed into one integer.

    Bit 0 is the rightmost switch on the board.
    """

    width: int
    value: int = 0

    def _check(self, bit: int) -> None:
        if not 0 <= bit < self.width:
            raise IndexError(f"switch {bit} out of range 0..{self.width - 1}")

    def set_bit(self, bit: int, on: bool) -> None:
        self._check(bit)
        if on:
            self.value |= 1 << bit
        else:
            self.value &= ~(1 << bit)

    def is_on(self, bit: int) -> bool:
        self._check(bit)
        return bool(self.value >> bit & 1)

    def clear(self) -> None:
        self.value = 0

    def label(self) -> str:
        digits = (self.width + 3) // 4
        return f"(0x{self.value:0{digits}x})"


@dataclass
class KeyBank:
    """Momentary push-buttons; bit ``i`` set while KEY ``i`` is held."""

    width: int
    value: int = 0

    def _check(self, key: int) -> None:
        if not 0 <= key < self.width:
            raise IndexError(f"key {key} out of range 0..{self.width - 1}")

    def press(self, key: int) -> None:
        self._check(key)
        self.value |= 1 << key

    def release(self, key: int) -> None:
        self._check(key)
        self.value &= ~(1 << key)

    def clear(self) -> None:
        self.value = 0


@dataclass
class HexBank:
    """Seven-segment displays, one active-low byte per digit.

    Digit 0 is the rightmost (least significant) display. Segments are
    packed as follows, with bit 7 driving the decimal point::

              0
            -----
           |     |
         5 |     | 1
           |  6  |
            -----
           |     |
         4 |     | 2
           |  3  |
            -----
    """

    count: int
    digits: List[int] = field(default_factory=list)

    def __post_init__(self) -> None:
        if not self.digits:
            self.digits = [HEX_BLANK] * self.count

    def set(self, index: int, state: int) -> int:
        """Store ``state`` on digit ``index % count`` and return the index."""
        index %= self.count
        self.digits[index] = state & 0xFF
        return index

    def get(self, index: int) -> int:
        return self.digits[index % self.count]

    def blank(self) -> None:
        self.digits = [HEX_BLANK] * self.count

    @staticmethod
    def segment_lit(state: int, segment: int) -> bool:
        """Return ``True`` when ``segment`` of an active-low byte is on."""
        return not state >> segment & 1
