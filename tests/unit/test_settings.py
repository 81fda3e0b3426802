"""
Unit tests for settings persistence and the theme source.
"""

import json

import pytest

from services.settings_manager import (
    AppSettings, SettingsManager, SimulationSettings, get_settings, reset_settings_manager
)
from services.theme import DEFAULT_ACCENT, Theme


class TestSettingsManager:
    """Tests for JSON settings storage."""

    def test_defaults_when_missing(self, settings_manager):
        assert settings_manager.appearance.accent == DEFAULT_ACCENT
        assert settings_manager.appearance.compact is False
        assert settings_manager.simulation.tick_interval_ms == 1500
        assert settings_manager.simulation.window_size == 60
        assert settings_manager.simulation.max_alerts == 0
        assert settings_manager.load() is False

    def test_save_and_reload(self, settings_manager):
        settings_manager.appearance.accent = "#ff8800"
        settings_manager.appearance.compact = True
        settings_manager.account.username = "ops"
        settings_manager.account.api_key = "secret"
        assert settings_manager.save() is True

        reloaded = SettingsManager(settings_manager.settings_path)
        assert reloaded.appearance.accent == "#ff8800"
        assert reloaded.appearance.compact is True
        assert reloaded.account.username == "ops"
        assert reloaded.account.api_key == "secret"

    def test_file_layout(self, settings_manager):
        settings_manager.save()
        with open(settings_manager.settings_path) as f:
            data = json.load(f)
        assert set(data) == {"appearance", "account", "simulation", "window_geometry"}
        assert data["simulation"]["prefill_ticks"] == 18

    def test_unknown_keys_ignored(self, temp_dir):
        path = temp_dir / "settings.json"
        path.write_text(json.dumps({
            "appearance": {"accent": "#123456", "glow": True},
            "legacy": {"x": 1},
        }))
        manager = SettingsManager(str(path))
        assert manager.appearance.accent == "#123456"

    def test_corrupt_file_falls_back(self, temp_dir):
        path = temp_dir / "settings.json"
        path.write_text("{not json")
        manager = SettingsManager(str(path))
        assert manager.load() is False
        assert manager.settings.to_dict() == AppSettings().to_dict()

    @pytest.mark.parametrize("content", [
        {"simulation": [1, 2]},
        {"appearance": "dark"},
        {"window_geometry": ["abc"]},
        [1, 2, 3],
        42,
    ])
    def test_malformed_sections_fall_back(self, temp_dir, content):
        path = temp_dir / "settings.json"
        path.write_text(json.dumps(content))
        manager = SettingsManager(str(path))
        assert manager.load() is False
        assert manager.settings.to_dict() == AppSettings().to_dict()

    @pytest.mark.parametrize("simulation", [
        {"window_size": 0},
        {"window_size": 1},
        {"tick_interval_ms": 0},
        {"tick_interval_ms": -100},
        {"prefill_ticks": -1},
        {"max_alerts": -3},
        {"window_size": "sixty"},
    ])
    def test_invalid_simulation_values_fall_back(self, temp_dir, simulation):
        path = temp_dir / "settings.json"
        path.write_text(json.dumps({"simulation": simulation, "account": {"username": "ops"}}))
        manager = SettingsManager(str(path))
        assert manager.load() is False
        assert manager.simulation == SimulationSettings()
        assert manager.account.username == ""

    def test_simulation_settings_validate(self):
        with pytest.raises(ValueError):
            SimulationSettings(window_size=1)
        with pytest.raises(ValueError):
            SimulationSettings(tick_interval_ms=0)
        assert SimulationSettings(window_size=2, prefill_ticks=0).window_size == 2

    def test_reset(self, settings_manager):
        settings_manager.account.username = "someone"
        settings_manager.reset()
        assert settings_manager.account.username == ""

    def test_window_geometry_roundtrip(self, settings_manager):
        assert settings_manager.get_window_geometry() is None
        settings_manager.save_window_geometry(b"\x01\x02\x03")
        assert settings_manager.get_window_geometry() == b"\x01\x02\x03"

    def test_global_instance(self, temp_dir):
        reset_settings_manager()
        try:
            first = get_settings(str(temp_dir / "global.json"))
            assert get_settings() is first
        finally:
            reset_settings_manager()


class TestTheme:
    """Tests for the live accent color."""

    def test_default(self, qapp):
        assert Theme().accent_color() == DEFAULT_ACCENT

    def test_apply_accent_emits(self, qapp):
        theme = Theme()
        changes = []
        theme.accent_changed.connect(changes.append)

        assert theme.apply_accent("#ff0000") is True
        assert theme.apply_accent("#ff0000") is True

        assert theme.accent_color() == "#ff0000"
        assert changes == ["#ff0000"]

    def test_invalid_accent_ignored(self, qapp):
        theme = Theme("#00ff00")
        assert theme.apply_accent("not-a-color") is False
        assert theme.accent_color() == "#00ff00"

    def test_compact(self, qapp):
        theme = Theme()
        changes = []
        theme.compact_changed.connect(changes.append)
        theme.apply_compact(True)
        theme.apply_compact(True)
        assert theme.compact is True
        assert changes == [True]
