"""
Models package.

Data models for the ops dashboard:
- Rolling time series (TimeSeriesBuffer)
- Dashboard entities (Alert, Node, TopSource, Metric)
- Owned simulation state (SimulationState)
"""

from .timeseries import TimeSeriesBuffer
from .dashboard import (
    AlertLevel,
    NodeStatus,
    Alert,
    Node,
    TopSource,
    Metric,
    FilterResult,
    SimulationState,
    DEFAULT_METRICS,
    DEFAULT_TOP_SOURCES,
    CHARTED_METRICS,
    round_half_up,
)

__all__ = [
    "TimeSeriesBuffer",
    "AlertLevel",
    "NodeStatus",
    "Alert",
    "Node",
    "TopSource",
    "Metric",
    "FilterResult",
    "SimulationState",
    "DEFAULT_METRICS",
    "DEFAULT_TOP_SOURCES",
    "CHARTED_METRICS",
    "round_half_up",
]
