"""Qt front panel wiring the board widgets to a :class:`UIState`."""

from __future__ import annotations

from typing import List

from PySide6.QtGui import QColor, QFont
from PySide6.QtWidgets import (
    QCheckBox,
    QHBoxLayout,
    QLabel,
    QLineEdit,
    QPushButton,
    QVBoxLayout,
    QWidget,
)

from ..config import Config
from ..engine.ui_state import UIState
from ..gui.tick_entry import parse_tick_entry
from .hex_widget import HexWidget
from .led_widget import LedWidget

TICK_BUTTONS = (1, 10, 100)


def _qcolor(name: str) -> QColor:
    return QColor(*Config.color(name))


def _mono_label(text: str) -> QLabel:
    label = QLabel(text)
    font = QFont("Monospace")
    font.setStyleHint(QFont.TypeWriter)
    label.setFont(font)
    return label


class BoardPanel(QWidget):
    """Facsimile of the DE2-115 displays and controls.

    The panel owns no simulation state. User actions are forwarded to the
    :class:`UIState` and the widgets are repainted from it through its
    ``on_refresh`` hook.
    """

    def __init__(self, state: UIState, parent: QWidget | None = None) -> None:
        super().__init__(parent)
        self.state = state
        self._tick_entry_val = 0

        red_on, red_off = _qcolor("red_active"), _qcolor("red_inactive")
        green_on, green_off = _qcolor("green_active"), _qcolor("green_inactive")

        num_hex = len(state.hex_digits.digits)
        self.hex_widgets: List[HexWidget] = [
            HexWidget(red_on, red_off) for _ in range(num_hex)
        ]
        self.ledr_widget = LedWidget(state.red_leds.width, red_on, red_off)
        self.ledr_label = _mono_label(state.red_leds.label())
        self.ledg_widget = LedWidget(state.green_leds.width, green_on, green_off)
        self.ledg_label = _mono_label(state.green_leds.label())
        self.switch_label = _mono_label(state.switches.label())
        self.cycle_label = QLabel(state.cycle_text)
        self.tick_entry = QLineEdit()
        self.tick_entry.setMaximumWidth(80)
        self.tick_entry.textChanged.connect(self._tick_entry_changed)

        layout = QVBoxLayout(self)

        hex_row = QHBoxLayout()
        # display 0 is the rightmost
        for widget in reversed(self.hex_widgets):
            hex_row.addWidget(widget)
        hex_row.addStretch(1)
        layout.addLayout(hex_row)

        layout.addLayout(self._row(QLabel("LEDR:"), self.ledr_widget, self.ledr_label))
        layout.addLayout(self._row(QLabel("LEDG:"), self.ledg_widget, self.ledg_label))

        # leftmost check box drives the most significant switch bit
        self.switch_checks: List[QCheckBox] = []
        switch_row = QHBoxLayout()
        switch_row.addWidget(QLabel("SW:"))
        width = state.switches.width
        for position in range(width):
            check = QCheckBox()
            bit = width - 1 - position
            check.toggled.connect(
                lambda checked, bit=bit: self.state.toggle_switch(bit, checked)
            )
            self.switch_checks.append(check)
            switch_row.addWidget(check)
        switch_row.addWidget(self.switch_label)
        switch_row.addStretch(1)
        layout.addLayout(switch_row)

        self.key_buttons: dict[int, QPushButton] = {}
        key_row = QHBoxLayout()
        for i in reversed(range(state.keys.width)):
            button = QPushButton(f"KEY{i}")
            button.clicked.connect(lambda _=False, i=i: self.state.press_key(i))
            self.key_buttons[i] = button
            key_row.addWidget(button)
        key_row.addStretch(1)
        layout.addLayout(key_row)

        self.tick_buttons: dict[int, QPushButton] = {}
        tick_row = QHBoxLayout()
        tick_row.addWidget(self.cycle_label)
        for count in TICK_BUTTONS:
            button = QPushButton(f"Tick {count}")
            button.clicked.connect(lambda _=False, n=count: self.state.advance(n))
            self.tick_buttons[count] = button
            tick_row.addWidget(button)
        tick_row.addWidget(QLabel("n="))
        tick_row.addWidget(self.tick_entry)
        self.tick_n_button = QPushButton("Tick N")
        self.tick_n_button.clicked.connect(
            lambda: self.state.advance(self._tick_entry_val)
        )
        tick_row.addWidget(self.tick_n_button)
        self.reset_button = QPushButton("Reset")
        self.reset_button.clicked.connect(lambda: self.state.reset())
        tick_row.addWidget(self.reset_button)
        tick_row.addStretch(1)
        layout.addLayout(tick_row)

        state.on_refresh = self.refresh
        self.refresh(state)

    # ------------------------------------------------------------------
    @staticmethod
    def _row(*widgets: QWidget) -> QHBoxLayout:
        row = QHBoxLayout()
        for widget in widgets:
            row.addWidget(widget)
        row.addStretch(1)
        return row

    def _tick_entry_changed(self, text: str) -> None:
        self._tick_entry_val = parse_tick_entry(text)

    def tick_entry_value(self) -> int:
        return self._tick_entry_val

    # ------------------------------------------------------------------
    def refresh(self, state: UIState) -> None:
        """Repaint every widget from ``state``."""
        for i, widget in enumerate(self.hex_widgets):
            widget.update_state(state.hex(i))
        self.ledr_widget.update_state(state.ledr())
        self.ledr_label.setText(state.red_leds.label())
        self.ledg_widget.update_state(state.ledg())
        self.ledg_label.setText(state.green_leds.label())
        self.cycle_label.setText(state.cycle_text)

        width = len(self.switch_checks)
        for position, check in enumerate(self.switch_checks):
            on = state.switches.is_on(width - 1 - position)
            if check.isChecked() != on:
                # programmatic sync must not look like a user toggle
                check.blockSignals(True)
                check.setChecked(on)
                check.blockSignals(False)
        self.switch_label.setText(state.switches.label())
