"""
Dashboard panels.

Stat cards, chart cards and the list panels for nodes, alerts and top
sources. Panels only paint what they are given; the simulation state
stays with the clock.
"""

from typing import Dict, Optional, Sequence

from PyQt6.QtCore import Qt, pyqtSignal
from PyQt6.QtWidgets import (
    QFrame, QHBoxLayout, QLabel, QPushButton, QVBoxLayout, QWidget
)

from models.dashboard import Alert, AlertLevel, Node, NodeStatus, TopSource
from models.timeseries import TimeSeriesBuffer
from services.theme import Theme
from views.chart_widget import ChartWidget


LEVEL_COLORS: Dict[AlertLevel, str] = {
    AlertLevel.INFO: "#3B82F6",
    AlertLevel.WARNING: "#F59E0B",
    AlertLevel.CRITICAL: "#EF4444",
}

STATUS_COLORS: Dict[NodeStatus, str] = {
    NodeStatus.OK: "#10B981",
    NodeStatus.WARN: "#F59E0B",
}

CARD_STYLE = """
    QFrame#card {
        background: #111827;
        border: 1px solid #1F2937;
        border-radius: 10px;
    }
"""


def _clear_layout(layout):
    while layout.count():
        item = layout.takeAt(0)
        if item.widget():
            item.widget().deleteLater()


class StatCard(QFrame):
    """A card displaying a single statistic."""

    def __init__(self, title: str, value: str = "--", parent=None):
        super().__init__(parent)
        self.setObjectName("card")
        self.setStyleSheet(CARD_STYLE)

        layout = QVBoxLayout(self)
        layout.setContentsMargins(12, 10, 12, 10)
        layout.setSpacing(4)

        title_label = QLabel(title)
        title_label.setStyleSheet("color: #9CA3AF; font-size: 11px;")
        layout.addWidget(title_label)

        self._value_label = QLabel(value)
        self._value_label.setStyleSheet("color: #F9FAFB; font-size: 24px; font-weight: 600;")
        layout.addWidget(self._value_label)

    @property
    def value(self) -> str:
        return self._value_label.text()

    def set_value(self, value: str):
        """Update the displayed value."""
        self._value_label.setText(value)


class ChartCard(QFrame):
    """Titled frame around a ChartWidget, with a last-updated label."""

    def __init__(self, title: str, buffer: TimeSeriesBuffer, theme: Optional[Theme] = None, parent=None):
        super().__init__(parent)
        self.setObjectName("card")
        self.setStyleSheet(CARD_STYLE)

        layout = QVBoxLayout(self)
        layout.setContentsMargins(12, 10, 12, 10)
        layout.setSpacing(6)

        header = QHBoxLayout()
        title_label = QLabel(title)
        title_label.setStyleSheet("color: #E5E7EB; font-weight: bold;")
        header.addWidget(title_label)
        header.addStretch()

        self.timestamp_label = QLabel("")
        self.timestamp_label.setStyleSheet("color: #6B7280; font-size: 11px;")
        header.addWidget(self.timestamp_label)
        layout.addLayout(header)

        self.chart = ChartWidget(buffer, theme)
        layout.addWidget(self.chart, 1)


class _ListPanel(QFrame):
    """Titled card holding a vertical list of rows."""

    def __init__(self, title: str, parent=None):
        super().__init__(parent)
        self.setObjectName("card")
        self.setStyleSheet(CARD_STYLE)
        self._title = title

        self._layout = QVBoxLayout(self)
        self._layout.setContentsMargins(12, 10, 12, 10)
        self._layout.setSpacing(4)

        self.title_label = QLabel(title)
        self.title_label.setStyleSheet("color: #E5E7EB; font-weight: bold;")
        self._layout.addWidget(self.title_label)

        self._rows = QVBoxLayout()
        self._rows.setSpacing(2)
        self._layout.addLayout(self._rows)
        self._layout.addStretch()

    @property
    def row_count(self) -> int:
        return self._rows.count()

    def _set_rows(self, rows):
        _clear_layout(self._rows)
        for row in rows:
            self._rows.addWidget(row)

    @staticmethod
    def _line(left: str, right: str, right_color: str = "#9CA3AF") -> QFrame:
        row = QFrame()
        layout = QHBoxLayout(row)
        layout.setContentsMargins(2, 2, 2, 2)
        name_label = QLabel(left)
        name_label.setStyleSheet("color: #E5E7EB; font-family: monospace;")
        layout.addWidget(name_label, 1)
        meta_label = QLabel(right)
        meta_label.setStyleSheet(f"color: {right_color}; font-size: 11px;")
        layout.addWidget(meta_label)
        return row


class NodeListPanel(_ListPanel):
    """Node names with load and status."""

    def __init__(self, parent=None):
        super().__init__("Nodes", parent)

    def set_nodes(self, nodes: Sequence[Node]):
        self._set_rows(
            self._line(n.name, f"{n.load}% | {n.status.value}", STATUS_COLORS[n.status])
            for n in nodes
        )


class TopSourcesPanel(_ListPanel):
    """Top traffic sources by volume."""

    def __init__(self, parent=None):
        super().__init__("Top Sources", parent)

    def set_sources(self, sources: Sequence[TopSource]):
        self._set_rows(self._line(s.name, f"{s.mb}MB") for s in sources)


class AlertFeedPanel(_ListPanel):
    """
    Alert feed with per-row dismiss buttons.

    Dismissal is only requested here; the owner removes the alert from the
    simulation state and re-renders.
    """

    dismiss_requested = pyqtSignal(int)  # Alert id

    def __init__(self, dismissable: bool = True, parent=None):
        super().__init__("Alerts", parent)
        self._dismissable = dismissable

    def set_alerts(self, alerts: Sequence[Alert]):
        self.title_label.setText(f"{self._title} ({len(alerts)})")
        self._set_rows(self._alert_row(a) for a in alerts)

    def _alert_row(self, alert: Alert) -> QFrame:
        row = QFrame()
        color = LEVEL_COLORS[alert.level]
        row.setStyleSheet(f"QFrame {{ border-left: 3px solid {color}; }}")

        layout = QHBoxLayout(row)
        layout.setContentsMargins(6, 2, 2, 2)

        text_col = QVBoxLayout()
        text_label = QLabel(alert.text)
        text_label.setStyleSheet("color: #F9FAFB; font-weight: 600; border: none;")
        text_col.addWidget(text_label)
        when_label = QLabel(alert.timestamp.strftime("%Y-%m-%d %H:%M:%S"))
        when_label.setStyleSheet("color: #6B7280; font-size: 10px; border: none;")
        text_col.addWidget(when_label)
        layout.addLayout(text_col, 1)

        if self._dismissable:
            dismiss_btn = QPushButton("Dismiss")
            dismiss_btn.setCursor(Qt.CursorShape.PointingHandCursor)
            dismiss_btn.clicked.connect(lambda _=False, aid=alert.id: self.dismiss_requested.emit(aid))
            layout.addWidget(dismiss_btn)

        return row
