"""
Event sink contract.

The simulation clock pushes snapshots of the dashboard collections and
formatted stat values to an EventSink once per tick (and after manual
injections). Views implement it to repaint their lists and labels.
"""

from typing import Sequence

from models.dashboard import Alert, Node, TopSource


class EventSink:
    """
    Receiver for dashboard updates.

    Methods default to no-ops so a sink only overrides what it displays.
    Kept as a plain mixin (not a QObject) so Qt widgets can inherit it.
    """

    def render_nodes(self, nodes: Sequence[Node]):
        pass

    def render_alerts(self, alerts: Sequence[Alert]):
        pass

    def render_top_sources(self, sources: Sequence[TopSource]):
        pass

    def update_stat(self, name: str, text: str):
        pass
