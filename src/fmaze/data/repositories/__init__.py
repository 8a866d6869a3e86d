"""Repository exports."""

from .entities_repo import EntitiesRepository
from .settings_repo import SettingsRepository

__all__ = [
    "EntitiesRepository",
    "SettingsRepository",
]
