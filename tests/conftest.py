"""
Pytest configuration and shared fixtures for dashboard tests.
"""

import os
import random
import pytest
import tempfile
import shutil
from datetime import datetime
from pathlib import Path
from typing import Generator, List, Tuple

# Render Qt widgets without a display
os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")

# Add parent directory to path for imports
import sys
sys.path.insert(0, str(Path(__file__).parent.parent))

from PyQt6.QtWidgets import QApplication

from models.dashboard import SimulationState
from services.event_sink import EventSink
from services.settings_manager import SettingsManager, reset_settings_manager


FIXED_NOW = datetime(2024, 5, 1, 12, 30, 0)


# ============== Qt Fixtures ==============

@pytest.fixture(scope="session")
def qapp() -> QApplication:
    """Shared QApplication for widget and timer tests."""
    app = QApplication.instance() or QApplication([])
    return app


# ============== Randomness ==============

class ScriptedRandom(random.Random):
    """
    Random source returning scripted values from random().

    Cycles through `values`; a single value makes every draw identical.
    """

    def __init__(self, values=(0.5,)):
        super().__init__(0)
        self._values = list(values)
        self._index = 0
        self.calls = 0

    def random(self) -> float:
        value = self._values[self._index % len(self._values)]
        self._index += 1
        self.calls += 1
        return value


# ============== Sink ==============

class RecordingSink(EventSink):
    """EventSink that records every call."""

    def __init__(self):
        self.nodes_calls: List[tuple] = []
        self.alerts_calls: List[tuple] = []
        self.sources_calls: List[tuple] = []
        self.stats: List[Tuple[str, str]] = []

    def render_nodes(self, nodes):
        self.nodes_calls.append(tuple(nodes))

    def render_alerts(self, alerts):
        self.alerts_calls.append(tuple(alerts))

    def render_top_sources(self, sources):
        self.sources_calls.append(tuple(sources))

    def update_stat(self, name, text):
        self.stats.append((name, text))

    def last_stat(self, name: str) -> str:
        for stat_name, text in reversed(self.stats):
            if stat_name == name:
                return text
        raise KeyError(name)


@pytest.fixture
def sink() -> RecordingSink:
    return RecordingSink()


# ============== State Fixtures ==============

@pytest.fixture
def fixed_now():
    return lambda: FIXED_NOW


@pytest.fixture
def empty_state(fixed_now) -> SimulationState:
    """Simulation state with no nodes, alerts or sources."""
    return SimulationState(window_size=60, now=fixed_now)


@pytest.fixture
def seeded_state(fixed_now) -> SimulationState:
    """Simulation state populated with the initial nodes, alerts and sources."""
    state = SimulationState(window_size=60, now=fixed_now)
    state.seed(random.Random(7))
    return state


# ============== Temporary Directory Fixtures ==============

@pytest.fixture
def temp_dir() -> Generator[Path, None, None]:
    """Create a temporary directory for test files."""
    tmp = tempfile.mkdtemp(prefix="ops_dashboard_test_")
    yield Path(tmp)
    shutil.rmtree(tmp, ignore_errors=True)


@pytest.fixture
def settings_manager(temp_dir: Path) -> Generator[SettingsManager, None, None]:
    """Settings manager writing to a temporary file."""
    reset_settings_manager()
    yield SettingsManager(str(temp_dir / "settings.json"))
    reset_settings_manager()
