"""Settings repository."""
from __future__ import annotations

from dataclasses import fields
from typing import Dict

from fmaze.data.errors import DataValidationError
from fmaze.data.repositories.base import RepositoryBase
from fmaze.domain.defs import GameSettings

_FLOAT_FIELDS = {"noise_ratio"}


class SettingsRepository(RepositoryBase[GameSettings]):
    """Loads settings profiles from settings.json; omitted keys keep their defaults."""

    def __init__(self, base_path=None) -> None:
        super().__init__("settings.json", base_path)

    def _build(self, raw: dict[str, object]) -> Dict[str, GameSettings]:
        allowed = {f.name for f in fields(GameSettings)} - {"id"}
        profiles: Dict[str, GameSettings] = {}
        for profile_id, payload in raw.items():
            context = f"settings profile '{profile_id}'"
            data = self._require_mapping(payload, context)
            self._assert_known(data, allowed, context)
            values: dict[str, object] = {}
            for key, value in data.items():
                if key in _FLOAT_FIELDS:
                    values[key] = self._require_number(value, f"{context} {key}")
                else:
                    values[key] = self._require_int(value, f"{context} {key}")
            settings = GameSettings(id=profile_id, **values)  # type: ignore[arg-type]
            self._validate(settings, context)
            profiles[profile_id] = settings
        return profiles

    @staticmethod
    def _validate(settings: GameSettings, context: str) -> None:
        if settings.maze_size < 3:
            raise DataValidationError(f"{context} maze_size must be at least 3.")
        if settings.min_dist < 0:
            raise DataValidationError(f"{context} min_dist must not be negative.")
        if not 0.0 <= settings.noise_ratio < 1.0:
            raise DataValidationError(f"{context} noise_ratio must be in [0, 1).")
        if settings.spin_interval_ms <= 0:
            raise DataValidationError(f"{context} spin_interval_ms must be positive.")
        if not 0 <= settings.forced_min <= settings.forced_max:
            raise DataValidationError(f"{context} requires 0 <= forced_min <= forced_max.")
        if settings.max_health <= 0 or settings.max_attempts <= 0:
            raise DataValidationError(f"{context} max_health and max_attempts must be positive.")
