"""
Rolling line chart widget.

Immediate-mode renderer for a TimeSeriesBuffer: every paint recomputes the
scale from the buffered samples and redraws grid, line and area fill from
scratch. The widget is its own drawing surface; its size is read on each
paint and a resize schedules a redraw.
"""

import math
from dataclasses import dataclass
from typing import List, Optional

from PyQt6.QtCore import QPointF, QRectF
from PyQt6.QtGui import QColor, QPainter, QPainterPath, QPen
from PyQt6.QtWidgets import QWidget, QSizePolicy

from models.timeseries import TimeSeriesBuffer
from services.theme import DEFAULT_ACCENT, Theme


@dataclass(frozen=True)
class ChartScale:
    """Vertical value range used to map samples to pixels."""
    minimum: float
    maximum: float
    span: float


def compute_scale(values) -> Optional[ChartScale]:
    """
    Value range for a set of samples, with headroom.

    The top is the observed maximum * 1.1 and the bottom the observed
    minimum * 0.9. A zero or negative span is replaced by 1. Non-finite
    samples are ignored; returns None when nothing finite remains.
    """
    finite = [v for v in values if math.isfinite(v)]
    if not finite:
        return None
    maximum = max(finite) * 1.1
    minimum = min(finite) * 0.9
    span = maximum - minimum
    if span <= 0:
        span = 1
    return ChartScale(minimum, maximum, span)


class ChartWidget(QWidget):
    """
    Line + area chart bound to one buffer.

    X spacing is derived from the buffer capacity rather than its current
    length, so a partially filled window sits against the left edge.
    """

    GRID_COLOR = QColor(255, 255, 255, 10)
    FILL_ALPHA = 0x22
    LINE_WIDTH = 2.5

    def __init__(
        self,
        buffer: TimeSeriesBuffer,
        theme: Optional[Theme] = None,
        padding: int = 10,
        rows: int = 3,
        background: Optional[QColor] = None,
        parent: Optional[QWidget] = None,
    ):
        super().__init__(parent)
        self._buffer = buffer
        self._theme = theme
        self.padding = padding
        self.rows = max(1, rows)
        self.background = background if background is not None else QColor(0, 0, 0, 0)

        self.setMinimumHeight(80)
        self.setMinimumWidth(120)
        self.setSizePolicy(QSizePolicy.Policy.Expanding, QSizePolicy.Policy.Expanding)

        self._buffer.subscribe(self.draw)

    @property
    def buffer(self) -> TimeSeriesBuffer:
        return self._buffer

    def push(self, value: float):
        self._buffer.push(value)

    def clear(self):
        self._buffer.clear()

    def draw(self):
        """Schedule a repaint."""
        self.update()

    def detach(self):
        """Stop listening to the buffer."""
        self._buffer.unsubscribe(self.draw)

    def accent_color(self) -> str:
        if self._theme is None:
            return DEFAULT_ACCENT
        return self._theme.accent_color()

    # ------------------------------------------------------------------
    # Geometry
    # ------------------------------------------------------------------

    def compute_scale(self) -> Optional[ChartScale]:
        return compute_scale(self._buffer.values())

    def grid_lines(self, height: float) -> List[float]:
        """Y positions of the horizontal grid lines."""
        inner = height - self.padding * 2
        return [self.padding + inner * (i / self.rows) for i in range(self.rows + 1)]

    def map_points(self, width: float, height: float) -> List[QPointF]:
        """Pixel positions of the finite samples, oldest first."""
        scale = self.compute_scale()
        if scale is None:
            return []

        pad = self.padding
        inner_w = width - pad * 2
        inner_h = height - pad * 2
        slots = self._buffer.capacity - 1

        points = []
        for i, value in enumerate(self._buffer.values()):
            if not math.isfinite(value):
                continue
            x = pad + (inner_w * (i / slots) if slots > 0 else 0)
            y = height - pad - ((value - scale.minimum) / scale.span) * inner_h
            points.append(QPointF(x, y))
        return points

    # ------------------------------------------------------------------
    # Painting
    # ------------------------------------------------------------------

    def resizeEvent(self, event):
        super().resizeEvent(event)
        self.draw()

    def paintEvent(self, event):
        painter = QPainter(self)
        try:
            self.paint_chart(painter, self.width(), self.height())
        finally:
            painter.end()

    def paint_chart(self, painter: QPainter, width: int, height: int):
        """Paint the chart for a surface of the given size."""
        if width <= 0 or height <= 0:
            return

        self._clear(painter, width, height)

        points = self.map_points(width, height)
        if len(points) < 2:
            return

        painter.setRenderHint(QPainter.RenderHint.Antialiasing)

        # Grid
        painter.setPen(QPen(self.GRID_COLOR, 1))
        for y in self.grid_lines(height):
            painter.drawLine(QPointF(0, y), QPointF(width, y))

        # Line
        path = QPainterPath()
        path.moveTo(points[0])
        for point in points[1:]:
            path.lineTo(point)

        accent = QColor(self.accent_color())
        painter.setPen(QPen(accent, self.LINE_WIDTH))
        painter.drawPath(path)

        # Area under the line
        baseline = height - self.padding
        area = QPainterPath(path)
        area.lineTo(width - self.padding, baseline)
        area.lineTo(self.padding, baseline)
        area.closeSubpath()

        fill = QColor(accent)
        fill.setAlpha(self.FILL_ALPHA)
        painter.fillPath(area, fill)

    def _clear(self, painter: QPainter, width: int, height: int):
        painter.save()
        painter.setCompositionMode(QPainter.CompositionMode.CompositionMode_Source)
        painter.fillRect(QRectF(0, 0, width, height), self.background)
        painter.restore()
