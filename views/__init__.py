"""Views package."""

from .chart_widget import ChartWidget, ChartScale, compute_scale
from .dashboard_panels import (
    StatCard,
    ChartCard,
    NodeListPanel,
    AlertFeedPanel,
    TopSourcesPanel,
)
from .main_window import DashboardWindow, range_label

__all__ = [
    "ChartWidget",
    "ChartScale",
    "compute_scale",
    "StatCard",
    "ChartCard",
    "NodeListPanel",
    "AlertFeedPanel",
    "TopSourcesPanel",
    "DashboardWindow",
    "range_label",
]
