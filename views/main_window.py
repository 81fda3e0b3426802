"""
Main application window.

Hosts the realtime, analytics, alerts and settings panels, owns the
simulation clock and acts as its event sink.
"""

import logging
import random
from typing import Optional, Sequence

from PyQt6.QtGui import QColor
from PyQt6.QtWidgets import (
    QCheckBox, QColorDialog, QComboBox, QFormLayout, QGridLayout, QHBoxLayout,
    QLabel, QLineEdit, QMainWindow, QPushButton, QTabWidget, QVBoxLayout, QWidget
)

from models.dashboard import Alert, Node, SimulationState, TopSource
from services.event_sink import EventSink
from services.settings_manager import SettingsManager, SimulationSettings
from services.simulation_clock import SimulationClock
from services.theme import Theme
from views.dashboard_panels import (
    AlertFeedPanel, ChartCard, NodeListPanel, StatCard, TopSourcesPanel
)

logger = logging.getLogger(__name__)

# Analytics range choices (hours)
RANGE_CHOICES = (1, 6, 24, 168)

TOAST_MS = 1600


def range_label(hours: int) -> str:
    """Human readable label for an analytics range."""
    if hours == 1:
        return "1 hour"
    if hours in (6, 24):
        return f"{hours} hours"
    return "7 days"


class DashboardWindow(QMainWindow, EventSink):
    """
    Operational dashboard window.

    Builds the simulation state and clock from settings, paints whatever
    snapshots the clock forwards, and routes user actions (simulate,
    range change, dismiss, search) back to the clock.
    """

    def __init__(
        self,
        settings_manager: SettingsManager,
        simulation: Optional[SimulationSettings] = None,
        parent: Optional[QWidget] = None,
    ):
        super().__init__(parent)
        self._settings_manager = settings_manager
        settings = settings_manager.settings
        # A passed-in copy holds run-only overrides and is never saved
        self._simulation = simulation if simulation is not None else settings.simulation

        self.theme = Theme(settings.appearance.accent, settings.appearance.compact, self)

        sim = self._simulation
        rng = random.Random(sim.random_seed)
        state = SimulationState(window_size=sim.window_size, max_alerts=sim.max_alerts)
        state.seed(rng)
        self.clock = SimulationClock(
            state,
            sink=self,
            rng=rng,
            interval_ms=sim.tick_interval_ms,
            parent=self,
        )

        self._query = ""

        self.setWindowTitle("Ops Dashboard")
        self.resize(1200, 780)
        self._setup_ui()
        self._connect_signals()
        self._apply_compact(self.theme.compact)

        geometry = settings_manager.get_window_geometry()
        if geometry:
            self.restoreGeometry(geometry)

        self.clock.publish()

    # ------------------------------------------------------------------
    # UI construction
    # ------------------------------------------------------------------

    def _setup_ui(self):
        central = QWidget()
        central.setStyleSheet("background: #0B0F14; color: #E5E7EB;")
        self._central_layout = QVBoxLayout(central)
        self._central_layout.setSpacing(8)

        # Top bar: search + simulate
        top = QHBoxLayout()
        self.search_edit = QLineEdit()
        self.search_edit.setPlaceholderText("Search nodes, alerts, sources...")
        self.search_edit.setClearButtonEnabled(True)
        top.addWidget(self.search_edit, 1)

        self.simulate_btn = QPushButton("Simulate Alert")
        top.addWidget(self.simulate_btn)
        self._central_layout.addLayout(top)

        self.tabs = QTabWidget()
        self.tabs.addTab(self._create_realtime_tab(), "Realtime")
        self.tabs.addTab(self._create_analytics_tab(), "Analytics")
        self.tabs.addTab(self._create_alerts_tab(), "Alerts")
        self.tabs.addTab(self._create_settings_tab(), "Settings")
        self._central_layout.addWidget(self.tabs, 1)

        self.setCentralWidget(central)
        self.statusBar().showMessage("Ready")

    def _create_realtime_tab(self) -> QWidget:
        tab = QWidget()
        grid = QGridLayout(tab)
        grid.setSpacing(8)

        self.cpu_card = StatCard("CPU")
        self.mem_card = StatCard("Memory")
        self.latency_card = StatCard("Latency")
        grid.addWidget(self.cpu_card, 0, 0)
        grid.addWidget(self.mem_card, 0, 1)
        grid.addWidget(self.latency_card, 0, 2)

        state = self.clock.simulation
        self.throughput_card = ChartCard("Throughput", state.series["throughput"], self.theme)
        grid.addWidget(self.throughput_card, 1, 0, 1, 3)

        self.nodes_panel = NodeListPanel()
        grid.addWidget(self.nodes_panel, 2, 0, 1, 2)

        self.sources_panel = TopSourcesPanel()
        grid.addWidget(self.sources_panel, 2, 2)

        return tab

    def _create_analytics_tab(self) -> QWidget:
        tab = QWidget()
        layout = QVBoxLayout(tab)

        controls = QHBoxLayout()
        controls.addWidget(QLabel("Range:"))
        self.range_combo = QComboBox()
        for hours in RANGE_CHOICES:
            self.range_combo.addItem(range_label(hours), hours)
        controls.addWidget(self.range_combo)
        controls.addStretch()
        layout.addLayout(controls)

        self.traffic_card = ChartCard("Traffic", self.clock.simulation.series["traffic"], self.theme)
        layout.addWidget(self.traffic_card, 1)
        return tab

    def _create_alerts_tab(self) -> QWidget:
        tab = QWidget()
        layout = QVBoxLayout(tab)
        self.alerts_panel = AlertFeedPanel()
        layout.addWidget(self.alerts_panel, 1)
        return tab

    def _create_settings_tab(self) -> QWidget:
        tab = QWidget()
        form = QFormLayout(tab)
        settings = self._settings_manager.settings

        accent_row = QHBoxLayout()
        self.accent_edit = QLineEdit(self.theme.accent_color())
        accent_row.addWidget(self.accent_edit, 1)
        self.accent_pick_btn = QPushButton("Pick...")
        accent_row.addWidget(self.accent_pick_btn)
        form.addRow("Accent color:", accent_row)

        self.compact_check = QCheckBox("Compact mode")
        self.compact_check.setChecked(self.theme.compact)
        form.addRow("", self.compact_check)

        self.username_edit = QLineEdit(settings.account.username)
        form.addRow("Username:", self.username_edit)

        self.api_key_edit = QLineEdit(settings.account.api_key)
        self.api_key_edit.setEchoMode(QLineEdit.EchoMode.Password)
        form.addRow("API key:", self.api_key_edit)

        self.save_settings_btn = QPushButton("Save Settings")
        form.addRow("", self.save_settings_btn)
        return tab

    def _connect_signals(self):
        self.simulate_btn.clicked.connect(self.on_simulate)
        self.range_combo.activated.connect(self._on_range_activated)
        self.search_edit.textChanged.connect(self.set_search_query)
        self.alerts_panel.dismiss_requested.connect(self.clock.dismiss_alert)

        self.accent_edit.editingFinished.connect(
            lambda: self.theme.apply_accent(self.accent_edit.text())
        )
        self.accent_pick_btn.clicked.connect(self._pick_accent)
        self.compact_check.toggled.connect(self.theme.apply_compact)
        self.save_settings_btn.clicked.connect(self.save_settings)

        self.theme.accent_changed.connect(self._on_accent_changed)
        self.theme.compact_changed.connect(self._apply_compact)

    # ------------------------------------------------------------------
    # EventSink
    # ------------------------------------------------------------------

    def render_nodes(self, nodes: Sequence[Node]):
        if self._query:
            nodes = self.clock.simulation.filter(self._query).nodes
        self.nodes_panel.set_nodes(nodes)

    def render_alerts(self, alerts: Sequence[Alert]):
        if self._query:
            alerts = self.clock.simulation.filter(self._query).alerts
        self.alerts_panel.set_alerts(alerts)

    def render_top_sources(self, sources: Sequence[TopSource]):
        if self._query:
            sources = self.clock.simulation.filter(self._query).sources
        self.sources_panel.set_sources(sources)

    def update_stat(self, name: str, text: str):
        cards = {
            "cpu": self.cpu_card,
            "mem": self.mem_card,
            "latency": self.latency_card,
        }
        if name in cards:
            cards[name].set_value(text)
        elif name == "throughput_ts":
            self.throughput_card.timestamp_label.setText(text)
        else:
            logger.debug(f"Unknown stat {name!r} ignored")

    # ------------------------------------------------------------------
    # User actions
    # ------------------------------------------------------------------

    def start(self):
        """Fill the charts and start the clock."""
        self.clock.prefill(self._simulation.prefill_ticks)
        self.clock.start()

    def toast(self, text: str, ms: int = TOAST_MS):
        self.statusBar().showMessage(text, ms)

    def on_simulate(self):
        self.clock.simulate_alert()
        self.toast("Simulated alert injected")

    def set_range(self, hours: int):
        self.clock.inject_burst(hours)
        self.toast(f"Range set: {range_label(hours)}")

    def _on_range_activated(self, index: int):
        self.set_range(self.range_combo.itemData(index))

    def set_search_query(self, text: str):
        self._query = text.strip()
        self.clock.publish()

    def _pick_accent(self):
        color = QColorDialog.getColor(QColor(self.theme.accent_color()), self, "Accent color")
        if color.isValid():
            self.accent_edit.setText(color.name())
            self.theme.apply_accent(color.name())

    def _on_accent_changed(self, color: str):
        if self.accent_edit.text() != color:
            self.accent_edit.setText(color)
        self.throughput_card.chart.draw()
        self.traffic_card.chart.draw()

    def _apply_compact(self, compact: bool):
        margin = 4 if compact else 12
        self._central_layout.setContentsMargins(margin, margin, margin, margin)

    def save_settings(self) -> bool:
        settings = self._settings_manager.settings
        settings.appearance.accent = self.theme.accent_color()
        settings.appearance.compact = self.theme.compact
        settings.account.username = self.username_edit.text()
        settings.account.api_key = self.api_key_edit.text()
        saved = self._settings_manager.save()
        self.toast("Settings saved" if saved else "Could not save settings")
        return saved

    def closeEvent(self, event):
        self.clock.stop()
        self._settings_manager.save_window_geometry(bytes(self.saveGeometry()))
        super().closeEvent(event)
