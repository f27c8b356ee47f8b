from __future__ import annotations

"""Seven-segment hexadecimal display widget."""

from PySide6.QtCore import QPointF, QSize, Qt
from PySide6.QtGui import QBrush, QColor, QPainter, QPaintEvent, QPen
from PySide6.QtWidgets import QWidget

from ..engine.bitfields import HEX_BLANK, HexBank

# size in pixels of the digit
HEX_HEIGHT = 75.0
HEX_WIDTH = HEX_HEIGHT * (7.5 / 14.0)
# slant of the vertical segments
HEX_OFFSET = 0.1 * HEX_WIDTH
HEX_SEGMENT_WIDTH = 0.2 * HEX_WIDTH
HEX_SEGMENT_VLENGTH = (9.14 / (2 * 14)) * HEX_HEIGHT
HEX_SEGMENT_HLENGTH = (4.8 / 7.5) * HEX_WIDTH
PADDING = 4


def segment_endpoints() -> list[tuple[QPointF, QPointF]]:
    """Return ``(start, end)`` for segments 0-6 in widget coordinates."""

    top = PADDING + HEX_SEGMENT_WIDTH / 2
    mid = top + HEX_SEGMENT_VLENGTH
    bottom = mid + HEX_SEGMENT_VLENGTH
    left = PADDING + HEX_SEGMENT_WIDTH / 2
    right = left + HEX_SEGMENT_HLENGTH
    gap = HEX_SEGMENT_WIDTH / 3

    def pt(x: float, y: float) -> QPointF:
        # lean the digit to the right, more towards the top
        return QPointF(x + HEX_OFFSET * (bottom - y) / (bottom - top), y)

    return [
        (pt(left + gap, top), pt(right - gap, top)),
        (pt(right, top + gap), pt(right, mid - gap)),
        (pt(right, mid + gap), pt(right, bottom - gap)),
        (pt(left + gap, bottom), pt(right - gap, bottom)),
        (pt(left, mid + gap), pt(left, bottom - gap)),
        (pt(left, top + gap), pt(left, mid - gap)),
        (pt(left + gap, mid), pt(right - gap, mid)),
    ]


class HexWidget(QWidget):
    """Seven-segment display driven by one active-low segment byte.

    Segment 0 lives in the least significant bit; bit 7 is the decimal
    point. See :class:`~DE2_Panel.engine.bitfields.HexBank` for the layout.
    """

    def __init__(
        self, on_color: QColor, off_color: QColor, parent: QWidget | None = None
    ) -> None:
        super().__init__(parent)
        self.on_color = on_color
        self.off_color = off_color
        self._segments = HEX_BLANK
        self._lines = segment_endpoints()

    def segments(self) -> int:
        return self._segments

    def update_state(self, segments: int) -> None:
        segments &= 0xFF
        if segments != self._segments:
            self._segments = segments
            self.update()

    def segment_color(self, segment: int) -> QColor:
        if HexBank.segment_lit(self._segments, segment):
            return self.on_color
        return self.off_color

    def sizeHint(self) -> QSize:  # type: ignore[override]
        return QSize(
            int(HEX_WIDTH + HEX_SEGMENT_WIDTH) + PADDING * 2,
            int(HEX_HEIGHT) + PADDING * 2,
        )

    def minimumSizeHint(self) -> QSize:  # type: ignore[override]
        return self.sizeHint()

    def paintEvent(self, event: QPaintEvent) -> None:  # type: ignore[override]
        painter = QPainter(self)
        painter.setRenderHint(QPainter.Antialiasing)
        for i, (start, end) in enumerate(self._lines):
            pen = QPen(self.segment_color(i))
            pen.setWidthF(HEX_SEGMENT_WIDTH / 2)
            pen.setCapStyle(Qt.RoundCap)
            painter.setPen(pen)
            painter.drawLine(start, end)

        painter.setPen(Qt.NoPen)
        painter.setBrush(QBrush(self.segment_color(7)))
        _, bottom_right = self._lines[2]
        radius = HEX_SEGMENT_WIDTH / 4
        painter.drawEllipse(
            QPointF(bottom_right.x() + HEX_SEGMENT_WIDTH, bottom_right.y() + HEX_SEGMENT_WIDTH / 3),
            radius,
            radius,
        )
        painter.end()
