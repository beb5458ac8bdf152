"""
Streak Persistence
Keeps the quiz streak between sessions using QSettings.
"""
from __future__ import annotations

import logging
from typing import Optional, Protocol

from PySide6.QtCore import QSettings

from quadricexplorer.config import STREAK_SETTINGS_KEY

logger = logging.getLogger(__name__)


class StreakStore(Protocol):
    def load(self) -> int: ...
    def save(self, streak: int) -> None: ...


class SettingsStreakStore:
    """
    QSettings-backed streak storage.

    Args:
        settings: Optional QSettings instance. Defaults to the application scope
            configured in `application.create_app` (INI format).
    """

    def __init__(self, settings: Optional[QSettings] = None) -> None:
        self.settings = settings if settings is not None else QSettings()

    def load(self) -> int:
        raw = self.settings.value(STREAK_SETTINGS_KEY, 0)
        try:
            return max(int(raw), 0)
        except (TypeError, ValueError):
            logger.warning(f"Ignoring unreadable streak value {raw!r}.")
            return 0

    def save(self, streak: int) -> None:
        self.settings.setValue(STREAK_SETTINGS_KEY, int(streak))
        self.settings.sync()
