"""Domain definition exports."""

from .entity_def import EntityDef
from .outcome_def import OutcomeDef
from .settings_def import GameSettings

__all__ = [
    "EntityDef",
    "GameSettings",
    "OutcomeDef",
]
