"""Services package."""

from .walk_generator import WalkGenerator, random_walk
from .event_sink import EventSink
from .simulation_clock import (
    SimulationClock,
    ClockState,
    EventProbabilities,
    STAT_FORMATS,
)
from .theme import Theme, DEFAULT_ACCENT
from .settings_manager import (
    SettingsManager,
    AppSettings,
    AppearanceSettings,
    AccountSettings,
    SimulationSettings,
    get_settings,
    reset_settings_manager,
)

__all__ = [
    "WalkGenerator",
    "random_walk",
    "EventSink",
    "SimulationClock",
    "ClockState",
    "EventProbabilities",
    "STAT_FORMATS",
    "Theme",
    "DEFAULT_ACCENT",
    "SettingsManager",
    "AppSettings",
    "AppearanceSettings",
    "AccountSettings",
    "SimulationSettings",
    "get_settings",
    "reset_settings_manager",
]
