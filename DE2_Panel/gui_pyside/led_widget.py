from __future__ import annotations

"""Widget mimicking a row of DE2-115 LEDs."""

from PySide6.QtCore import QSize, Qt
from PySide6.QtGui import QBrush, QColor, QPainter, QPaintEvent
from PySide6.QtWidgets import QWidget

from ..engine.bitfields import LedBank

LED_RADIUS = 5
LED_BOX_SIZE = 15  # padding "box" around each LED
PADDING = 4


class LedWidget(QWidget):
    """Horizontal strip of up to 32 same-colored LEDs.

    The least significant bit is drawn on the right.
    """

    def __init__(
        self,
        count: int,
        on_color: QColor,
        off_color: QColor,
        parent: QWidget | None = None,
    ) -> None:
        super().__init__(parent)
        self.count = count
        self._bank = LedBank(count)
        self.on_color = on_color
        self.off_color = off_color

    def state(self) -> int:
        return self._bank.value

    def update_state(self, state: int) -> None:
        """Show ``state`` and schedule a repaint if it changed."""
        before = self._bank.value
        if self._bank.set(state) != before:
            self.update()

    def led_color(self, position: int) -> QColor:
        """Return the color of the LED ``position`` places from the left."""
        bit = self.count - position - 1
        if self._bank.is_lit(bit):
            return self.on_color
        return self.off_color

    def sizeHint(self) -> QSize:  # type: ignore[override]
        return QSize(self.count * LED_BOX_SIZE + PADDING * 2, LED_BOX_SIZE + PADDING * 2)

    def minimumSizeHint(self) -> QSize:  # type: ignore[override]
        return self.sizeHint()

    def paintEvent(self, event: QPaintEvent) -> None:  # type: ignore[override]
        painter = QPainter(self)
        painter.setRenderHint(QPainter.Antialiasing)
        painter.setPen(Qt.NoPen)
        for i in range(self.count):
            painter.setBrush(QBrush(self.led_color(i)))
            x = PADDING + i * LED_BOX_SIZE + (LED_BOX_SIZE - 2 * LED_RADIUS) // 2
            y = PADDING + (LED_BOX_SIZE - 2 * LED_RADIUS) // 2
            painter.drawEllipse(x, y, LED_RADIUS * 2, LED_RADIUS * 2)
        painter.end()
