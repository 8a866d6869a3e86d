"""Game settings definition."""
from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class GameSettings:
    """Tunable constants for one settings profile."""

    id: str = "default"
    maze_size: int = 20
    min_dist: int = 2
    noise_ratio: float = 0.15
    spin_interval_ms: int = 80
    max_health: int = 100
    forced_min: int = 2
    forced_max: int = 3
    max_attempts: int = 1000
