"""
Dashboard state models.

Holds the synthetic telemetry the dashboard displays: tracked metrics,
the rolling series behind the charts, the alert feed, the node list and
the top-sources ranking. SimulationState is the single owner of all of
it; views only ever receive snapshots.
"""

import itertools
import math
import random
from dataclasses import dataclass, field, replace
from datetime import datetime, timedelta
from enum import Enum
from typing import Callable, Dict, List, Optional, Sequence, Tuple

from .timeseries import TimeSeriesBuffer


class AlertLevel(Enum):
    """Severity of an alert."""
    INFO = "info"
    WARNING = "warning"
    CRITICAL = "critical"


class NodeStatus(Enum):
    """Health status of a monitored node."""
    OK = "ok"
    WARN = "warn"


@dataclass(frozen=True)
class Alert:
    """A single entry in the alert feed."""
    id: int
    level: AlertLevel
    text: str
    timestamp: datetime


@dataclass(frozen=True)
class Node:
    """A monitored node."""
    id: str
    name: str
    status: NodeStatus = NodeStatus.OK
    load: int = 0

    def __post_init__(self):
        if not 0 <= self.load <= 100:
            raise ValueError(f"node load must be within 0-100, got {self.load}")


@dataclass(frozen=True)
class TopSource:
    """A traffic source and its volume in MB."""
    name: str
    mb: int


@dataclass
class Metric:
    """
    Synthetic metric driven by a bounded random walk.

    `value` is the previous walk output and seeds the next step.
    """
    name: str
    value: float
    variance: float
    minimum: float
    maximum: float
    unit: str = ""

    def __post_init__(self):
        if self.minimum > self.maximum:
            raise ValueError(
                f"metric {self.name!r}: minimum {self.minimum} exceeds maximum {self.maximum}"
            )


# Walk tuning per tracked quantity: seed, variance, bounds
DEFAULT_METRICS: Tuple[Metric, ...] = (
    Metric("throughput", 40.0, 12.0, 5.0, 220.0, "Mbps"),
    Metric("traffic", 320.0, 30.0, 50.0, 1200.0, "MB/s"),
    Metric("cpu", 20.0, 8.0, 2.0, 99.0, "%"),
    Metric("mem", 50.0, 4.0, 8.0, 98.0, "%"),
    Metric("latency", 12.0, 6.0, 1.0, 500.0, "ms"),
)

# Metrics whose values are plotted in a rolling chart
CHARTED_METRICS = ("throughput", "traffic")

DEFAULT_TOP_SOURCES: Tuple[TopSource, ...] = (
    TopSource("192.168.1.12", 120),
    TopSource("10.0.0.4", 98),
    TopSource("172.16.0.2", 72),
)


def round_half_up(value: float, digits: int = 0) -> float:
    """Round with exact .5 ties going up rather than to even."""
    scale = 10 ** digits
    return math.floor(value * scale + 0.5) / scale


@dataclass
class FilterResult:
    """Subset of the dashboard collections matching a search query."""
    nodes: List[Node] = field(default_factory=list)
    alerts: List[Alert] = field(default_factory=list)
    sources: List[TopSource] = field(default_factory=list)


class SimulationState:
    """
    Owned state of the simulated dashboard.

    Collections are exposed as tuples; every mutation goes through a method
    so the ordering rules hold: alerts newest first, nodes append-only,
    top sources sorted descending by volume.
    """

    def __init__(
        self,
        window_size: int = 60,
        max_alerts: int = 0,
        now: Callable[[], datetime] = datetime.now,
    ):
        if max_alerts < 0:
            raise ValueError(f"max_alerts must be >= 0, got {max_alerts}")
        self._now = now
        self._max_alerts = max_alerts
        self.metrics: Dict[str, Metric] = {m.name: replace(m) for m in DEFAULT_METRICS}
        self.series: Dict[str, TimeSeriesBuffer] = {
            name: TimeSeriesBuffer(window_size) for name in CHARTED_METRICS
        }
        self._alerts: List[Alert] = []
        self._nodes: List[Node] = []
        self._sources: List[TopSource] = []
        self._alert_ids = itertools.count(1)

    # ------------------------------------------------------------------
    # Read access
    # ------------------------------------------------------------------

    @property
    def alerts(self) -> Tuple[Alert, ...]:
        return tuple(self._alerts)

    @property
    def nodes(self) -> Tuple[Node, ...]:
        return tuple(self._nodes)

    @property
    def top_sources(self) -> Tuple[TopSource, ...]:
        return tuple(self._sources)

    @property
    def max_alerts(self) -> int:
        return self._max_alerts

    def metric(self, name: str) -> Metric:
        return self.metrics[name]

    def now(self) -> datetime:
        return self._now()

    # ------------------------------------------------------------------
    # Alerts
    # ------------------------------------------------------------------

    def add_alert(self, level: AlertLevel, text: str, timestamp: Optional[datetime] = None) -> Alert:
        """Prepend a new alert and return it."""
        alert = Alert(
            id=next(self._alert_ids),
            level=level,
            text=text,
            timestamp=timestamp if timestamp is not None else self._now(),
        )
        self._alerts.insert(0, alert)
        if self._max_alerts and len(self._alerts) > self._max_alerts:
            del self._alerts[self._max_alerts:]
        return alert

    def dismiss_alert(self, alert_id: int) -> bool:
        """Remove the alert with the given id. Returns False if absent."""
        for i, alert in enumerate(self._alerts):
            if alert.id == alert_id:
                del self._alerts[i]
                return True
        return False

    # ------------------------------------------------------------------
    # Nodes
    # ------------------------------------------------------------------

    def add_node(self, load: int, status: NodeStatus = NodeStatus.OK, name: str = "") -> Node:
        """Append a node numbered after the current list length."""
        number = len(self._nodes) + 1
        node = Node(
            id=f"node-{number}",
            name=name or f"NODE-{100 + number}",
            status=status,
            load=int(load),
        )
        self._nodes.append(node)
        return node

    # ------------------------------------------------------------------
    # Top sources
    # ------------------------------------------------------------------

    def set_top_sources(self, sources: Sequence[TopSource]):
        self._sources = sorted(sources, key=lambda s: s.mb, reverse=True)

    def scale_top_sources(self, factors: Sequence[float]):
        """
        Multiply each source volume by its factor and re-rank.

        Volumes are rounded to whole MB with a floor of 1.
        """
        if len(factors) != len(self._sources):
            raise ValueError(
                f"expected {len(self._sources)} factors, got {len(factors)}"
            )
        scaled = [
            replace(source, mb=max(1, int(round_half_up(source.mb * factor))))
            for source, factor in zip(self._sources, factors)
        ]
        self.set_top_sources(scaled)

    # ------------------------------------------------------------------
    # Seeding and search
    # ------------------------------------------------------------------

    def seed(self, rng: random.Random, node_count: int = 6):
        """Populate the initial nodes, alerts and top sources."""
        self._nodes = []
        for i in range(node_count):
            self._nodes.append(Node(
                id=f"node-{i + 1}",
                name=f"NODE-{100 + i:X}",
                status=NodeStatus.OK if rng.random() > 0.1 else NodeStatus.WARN,
                load=int(round_half_up(rng.random() * 80)) + 10,
            ))

        now = self._now()
        self._alerts = []
        self.add_alert(AlertLevel.INFO, "New node joined: NODE-108", now - timedelta(minutes=60))
        self.add_alert(AlertLevel.WARNING, "High latency detected", now - timedelta(minutes=20))
        self.add_alert(AlertLevel.CRITICAL, "Node NODE-104 unreachable", now - timedelta(minutes=8))

        self.set_top_sources(DEFAULT_TOP_SOURCES)

    def filter(self, query: str) -> FilterResult:
        """Case-insensitive substring match over node names, alert text and source names."""
        q = query.strip().lower()
        if not q:
            return FilterResult(list(self._nodes), list(self._alerts), list(self._sources))
        return FilterResult(
            nodes=[n for n in self._nodes if q in n.name.lower()],
            alerts=[a for a in self._alerts if q in a.text.lower()],
            sources=[s for s in self._sources if q in s.name.lower()],
        )
