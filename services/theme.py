"""
Theme source.

Holds the live accent color and compact-mode flag. Charts poll
accent_color() on every paint instead of caching it, so a change shows
up on the next redraw.
"""

import logging
from typing import Optional

from PyQt6.QtCore import QObject, pyqtSignal
from PyQt6.QtGui import QColor

logger = logging.getLogger(__name__)

DEFAULT_ACCENT = "#00ffff"


class Theme(QObject):
    """Observable appearance state."""

    # Signals
    accent_changed = pyqtSignal(str)
    compact_changed = pyqtSignal(bool)

    def __init__(self, accent: str = DEFAULT_ACCENT, compact: bool = False,
                 parent: Optional[QObject] = None):
        super().__init__(parent)
        self._accent = DEFAULT_ACCENT
        self._compact = bool(compact)
        self.apply_accent(accent)

    def accent_color(self) -> str:
        """Current accent color as a hex string."""
        return self._accent

    @property
    def compact(self) -> bool:
        return self._compact

    def apply_accent(self, color: str) -> bool:
        """
        Set the accent color.

        Invalid color strings are ignored and the previous accent is kept.
        """
        color = (color or "").strip()
        if not QColor(color).isValid():
            logger.warning(f"Ignoring invalid accent color {color!r}")
            return False
        if color != self._accent:
            self._accent = color
            self.accent_changed.emit(color)
        return True

    def apply_compact(self, compact: bool):
        compact = bool(compact)
        if compact != self._compact:
            self._compact = compact
            self.compact_changed.emit(compact)
