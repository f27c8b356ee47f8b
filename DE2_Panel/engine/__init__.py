"""Tick scheduling and board state, free of any GUI toolkit."""

from .bitfields import HexBank, KeyBank, LedBank, SwitchBank, encode_hex_digit
from .futures import FutureRegistry
from .ui_state import UIState

__all__ = [
    "FutureRegistry",
    "HexBank",
    "KeyBank",
    "LedBank",
    "SwitchBank",
    "UIState",
    "encode_hex_digit",
]
