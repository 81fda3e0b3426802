"""
Simulation Clock Service.

Drives the synthetic dashboard: on every timer tick it advances each
metric's random walk, feeds the charted series, rolls the random side
events (alerts, new nodes, top-source re-ranking) and forwards the
resulting snapshots to the event sink.
"""

import logging
import random
from dataclasses import dataclass
from enum import Enum, auto
from typing import Dict, Optional

from PyQt6.QtCore import QObject, QTimer, pyqtSignal

from models.dashboard import (
    AlertLevel, CHARTED_METRICS, NodeStatus, SimulationState, round_half_up
)
from services.event_sink import EventSink
from services.walk_generator import WalkGenerator

logger = logging.getLogger(__name__)


class ClockState(Enum):
    """Scheduler state."""
    IDLE = auto()
    RUNNING = auto()


@dataclass
class EventProbabilities:
    """Per-tick chance of each random side event."""
    alert: float = 0.03
    node: float = 0.02
    rerank: float = 0.12

    def __post_init__(self):
        for name in ("alert", "node", "rerank"):
            p = getattr(self, name)
            if not 0.0 <= p <= 1.0:
                raise ValueError(f"probability {name!r} must be within [0, 1], got {p}")


# Stat label formats, keyed by metric name
STAT_FORMATS: Dict[str, str] = {
    "cpu": "{}%",
    "mem": "{}%",
    "latency": "{} ms",
}

MANUAL_ALERT_TEXT = "Manual simulation: service degrade"
MAX_BURST_POINTS = 60


class SimulationClock(QObject):
    """
    Fixed-period scheduler for the synthetic dashboard.

    Two states only: IDLE and RUNNING. Each tick runs to completion on the
    Qt event loop; manual injections run synchronously between ticks and
    share the same SimulationState.
    """

    # Signals
    status_changed = pyqtSignal(object)  # ClockState
    ticked = pyqtSignal(int)             # Tick count
    alert_added = pyqtSignal(object)     # Alert

    DEFAULT_INTERVAL_MS = 1500

    def __init__(
        self,
        state: SimulationState,
        sink: Optional[EventSink] = None,
        rng: Optional[random.Random] = None,
        interval_ms: int = DEFAULT_INTERVAL_MS,
        probabilities: Optional[EventProbabilities] = None,
        parent: Optional[QObject] = None,
    ):
        super().__init__(parent)
        if interval_ms <= 0:
            raise ValueError(f"interval_ms must be positive, got {interval_ms}")

        self._state = state
        self._sink = sink if sink is not None else EventSink()
        self._rng = rng if rng is not None else random.Random()
        self._walk = WalkGenerator(self._rng)
        self._probabilities = probabilities or EventProbabilities()
        self._interval_ms = interval_ms
        self._status = ClockState.IDLE
        self._tick_count = 0

        self._timer = QTimer(self)
        self._timer.timeout.connect(self.tick)

    @property
    def status(self) -> ClockState:
        return self._status

    @property
    def is_running(self) -> bool:
        return self._status == ClockState.RUNNING

    @property
    def simulation(self) -> SimulationState:
        return self._state

    @property
    def interval_ms(self) -> int:
        return self._interval_ms

    @property
    def tick_count(self) -> int:
        return self._tick_count

    @property
    def probabilities(self) -> EventProbabilities:
        return self._probabilities

    def set_sink(self, sink: EventSink):
        """Replace the event sink and push the current state to it."""
        self._sink = sink
        self.publish()

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------

    def start(self):
        """Begin ticking at the configured interval."""
        if self._status == ClockState.RUNNING:
            logger.debug("start() ignored, clock already running")
            return
        self._timer.start(self._interval_ms)
        self._status = ClockState.RUNNING
        logger.info(f"Simulation clock started ({self._interval_ms} ms period)")
        self.status_changed.emit(self._status)

    def stop(self):
        """Cancel the pending timer so no further ticks fire."""
        if self._status == ClockState.IDLE:
            return
        self._timer.stop()
        self._status = ClockState.IDLE
        logger.info(f"Simulation clock stopped after {self._tick_count} ticks")
        self.status_changed.emit(self._status)

    # ------------------------------------------------------------------
    # Tick
    # ------------------------------------------------------------------

    def tick(self):
        """Advance the simulation by one step."""
        state = self._state
        rng = self._rng
        p = self._probabilities

        for name in CHARTED_METRICS:
            value = self._walk.step(state.metric(name))
            state.series[name].push(value)

        stats = self._advance_stats()

        # Independent trials, evaluated every tick
        if rng.random() < p.alert:
            self._add_random_alert()
        if rng.random() < p.node:
            self._add_random_node()
        if rng.random() < p.rerank:
            self._rerank_sources()

        self._tick_count += 1
        self.publish(stats)
        self.ticked.emit(self._tick_count)

    def prefill(self, ticks: int = 18):
        """Run several ticks immediately so the charts start populated."""
        for _ in range(ticks):
            self.tick()

    def _advance_stats(self) -> Dict[str, str]:
        stats = {}
        for name, fmt in STAT_FORMATS.items():
            value = self._walk.step(self._state.metric(name))
            stats[name] = fmt.format(int(round_half_up(value)))
        stats["throughput_ts"] = self._state.now().strftime("%H:%M:%S")
        return stats

    def _add_random_alert(self):
        rng = self._rng
        if rng.random() < 0.5:
            traffic = self._state.metric("traffic").value
            text = f"Spike detected: {int(round_half_up(traffic))} MB/s"
        else:
            text = f"Node NODE-{100 + int(rng.random() * 20)} high CPU"
        level = AlertLevel.WARNING if rng.random() < 0.4 else AlertLevel.INFO
        alert = self._state.add_alert(level, text)
        logger.debug(f"Random alert #{alert.id} ({level.value}): {text}")
        self.alert_added.emit(alert)

    def _add_random_node(self):
        load = int(round_half_up(self._rng.random() * 30)) + 10
        node = self._state.add_node(load=load, status=NodeStatus.OK)
        logger.debug(f"Node joined: {node.name} at {node.load}% load")

    def _rerank_sources(self):
        sources = self._state.top_sources
        factors = [0.8 + self._rng.random() * 0.6 for _ in sources]
        self._state.scale_top_sources(factors)
        logger.debug("Top sources re-ranked")

    # ------------------------------------------------------------------
    # Manual injections
    # ------------------------------------------------------------------

    def simulate_alert(self):
        """Prepend a critical alert, regardless of clock state."""
        alert = self._state.add_alert(AlertLevel.CRITICAL, MANUAL_ALERT_TEXT)
        logger.info(f"Manual alert injected (#{alert.id})")
        self.alert_added.emit(alert)
        self._sink.render_alerts(self._state.alerts)
        return alert

    def inject_burst(self, range_hours: int) -> int:
        """
        Push a burst of traffic points sized to the selected range.

        The traffic walk state is left untouched, so the next tick resumes
        from the previous walk value.
        """
        count = max(0, min(MAX_BURST_POINTS, range_hours * 6))
        buffer = self._state.series["traffic"]
        for _ in range(count):
            buffer.push(100 + self._rng.random() * (range_hours * 4))
        logger.info(f"Injected {count} traffic points for {range_hours}h range")
        return count

    def dismiss_alert(self, alert_id: int) -> bool:
        removed = self._state.dismiss_alert(alert_id)
        if removed:
            logger.debug(f"Alert #{alert_id} dismissed")
            self._sink.render_alerts(self._state.alerts)
        return removed

    # ------------------------------------------------------------------
    # Sink forwarding
    # ------------------------------------------------------------------

    def publish(self, stats: Optional[Dict[str, str]] = None):
        """Forward the current snapshots (and any stat labels) to the sink."""
        sink = self._sink
        sink.render_nodes(self._state.nodes)
        sink.render_alerts(self._state.alerts)
        sink.render_top_sources(self._state.top_sources)
        for name, text in (stats or {}).items():
            sink.update_stat(name, text)
