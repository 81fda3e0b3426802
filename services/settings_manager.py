"""
Settings Manager.

Handles dashboard settings with JSON file storage.
"""

import json
import logging
import os
from dataclasses import dataclass, field, asdict, fields
from pathlib import Path
from typing import Optional

from services.theme import DEFAULT_ACCENT

logger = logging.getLogger(__name__)


@dataclass
class AppearanceSettings:
    """Look and feel."""
    accent: str = DEFAULT_ACCENT
    compact: bool = False


@dataclass
class AccountSettings:
    """Free-text account fields shown on the settings panel."""
    username: str = ""
    api_key: str = ""


@dataclass
class SimulationSettings:
    """Synthetic data generator tuning."""
    tick_interval_ms: int = 1500
    window_size: int = 60
    prefill_ticks: int = 18
    max_alerts: int = 0                 # 0 keeps every alert
    random_seed: Optional[int] = None   # None for a fresh seed each run

    def __post_init__(self):
        if self.tick_interval_ms <= 0:
            raise ValueError(f"tick_interval_ms must be positive, got {self.tick_interval_ms}")
        if self.window_size < 2:
            raise ValueError(f"window_size must be at least 2, got {self.window_size}")
        if self.prefill_ticks < 0:
            raise ValueError(f"prefill_ticks must be >= 0, got {self.prefill_ticks}")
        if self.max_alerts < 0:
            raise ValueError(f"max_alerts must be >= 0, got {self.max_alerts}")


def _from_section(cls, data: dict):
    """Build a settings dataclass, ignoring keys it does not know."""
    if data is None:
        data = {}
    if not isinstance(data, dict):
        raise TypeError(f"{cls.__name__} section must be an object, got {type(data).__name__}")
    known = {f.name for f in fields(cls)}
    return cls(**{k: v for k, v in data.items() if k in known})


@dataclass
class AppSettings:
    """Complete application settings."""
    appearance: AppearanceSettings = field(default_factory=AppearanceSettings)
    account: AccountSettings = field(default_factory=AccountSettings)
    simulation: SimulationSettings = field(default_factory=SimulationSettings)
    window_geometry: dict = field(default_factory=dict)

    def to_dict(self) -> dict:
        """Convert to dictionary for JSON serialization."""
        return {
            "appearance": asdict(self.appearance),
            "account": asdict(self.account),
            "simulation": asdict(self.simulation),
            "window_geometry": self.window_geometry,
        }

    @classmethod
    def from_dict(cls, data: dict) -> "AppSettings":
        """Create from dictionary."""
        if not isinstance(data, dict):
            raise TypeError(f"settings must be an object, got {type(data).__name__}")
        settings = cls()

        if "appearance" in data:
            settings.appearance = _from_section(AppearanceSettings, data["appearance"])
        if "account" in data:
            settings.account = _from_section(AccountSettings, data["account"])
        if "simulation" in data:
            settings.simulation = _from_section(SimulationSettings, data["simulation"])
        if "window_geometry" in data:
            geometry = data["window_geometry"]
            if not isinstance(geometry, dict):
                raise TypeError(f"window_geometry must be an object, got {type(geometry).__name__}")
            settings.window_geometry = geometry

        return settings


class SettingsManager:
    """
    Manages dashboard settings with JSON file storage.

    Settings file location:
    - Windows: %APPDATA%/OpsDashboard/settings.json
    - Linux: ~/.config/OpsDashboard/settings.json
    - macOS: ~/Library/Application Support/OpsDashboard/settings.json
    """

    APP_NAME = "OpsDashboard"
    SETTINGS_FILE = "settings.json"

    def __init__(self, config_override: Optional[str] = None):
        """
        Initialize settings manager.

        Args:
            config_override: Optional path to override config file location.
                            Useful for testing.
        """
        self._settings = AppSettings()
        self._config_override = config_override
        self._settings_path = self._get_settings_path()
        self.load()

    @property
    def settings(self) -> AppSettings:
        """Get current settings."""
        return self._settings

    @property
    def settings_path(self) -> str:
        """Get the settings file path."""
        return str(self._settings_path)

    @property
    def appearance(self) -> AppearanceSettings:
        return self._settings.appearance

    @property
    def account(self) -> AccountSettings:
        return self._settings.account

    @property
    def simulation(self) -> SimulationSettings:
        return self._settings.simulation

    def _get_settings_path(self) -> Path:
        """Get platform-specific settings directory."""
        if self._config_override:
            return Path(self._config_override)

        import platform
        system = platform.system()

        if system == "Windows":
            base = os.environ.get("APPDATA", os.path.expanduser("~"))
            config_dir = Path(base) / self.APP_NAME
        elif system == "Darwin":  # macOS
            config_dir = Path.home() / "Library" / "Application Support" / self.APP_NAME
        else:  # Linux and others
            xdg_config = os.environ.get("XDG_CONFIG_HOME", os.path.expanduser("~/.config"))
            config_dir = Path(xdg_config) / self.APP_NAME

        return config_dir / self.SETTINGS_FILE

    def load(self) -> bool:
        """Load settings from file."""
        if not self._settings_path.exists():
            return False

        try:
            with open(self._settings_path, "r", encoding="utf-8") as f:
                data = json.load(f)
            self._settings = AppSettings.from_dict(data)
            return True
        except (OSError, ValueError, TypeError) as e:
            logger.warning(f"Error loading settings from {self._settings_path}: {e}")
            self._settings = AppSettings()
            return False

    def save(self) -> bool:
        """Save settings to file."""
        try:
            self._settings_path.parent.mkdir(parents=True, exist_ok=True)
            with open(self._settings_path, "w", encoding="utf-8") as f:
                json.dump(self._settings.to_dict(), f, indent=2)
            logger.debug(f"Settings saved to {self._settings_path}")
            return True
        except OSError as e:
            logger.error(f"Error saving settings to {self._settings_path}: {e}")
            return False

    def reset(self):
        """Reset settings to defaults."""
        self._settings = AppSettings()
        self.save()

    def save_window_geometry(self, geometry: bytes):
        """Save window geometry."""
        import base64
        self._settings.window_geometry = {
            "geometry": base64.b64encode(geometry).decode("ascii"),
        }
        self.save()

    def get_window_geometry(self) -> Optional[bytes]:
        """Get saved window geometry."""
        import base64
        geo = self._settings.window_geometry
        if not geo:
            return None

        try:
            return base64.b64decode(geo.get("geometry", ""))
        except ValueError:
            return None


# Global settings instance
_settings_manager: Optional[SettingsManager] = None


def get_settings(config_override: Optional[str] = None) -> SettingsManager:
    """
    Get the global settings manager instance.

    Args:
        config_override: Optional path to override config location.
                        Only used on first call to initialize.
    """
    global _settings_manager
    if _settings_manager is None:
        _settings_manager = SettingsManager(config_override)
    return _settings_manager


def reset_settings_manager():
    """Reset the global settings manager (useful for testing)."""
    global _settings_manager
    _settings_manager = None
