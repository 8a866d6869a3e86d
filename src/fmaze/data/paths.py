"""Helpers for resolving data file locations."""
from __future__ import annotations

import os
from pathlib import Path

DEFINITIONS_ENV_VAR = "FMAZE_DEFINITIONS"


def get_repo_root() -> Path:
    """Return the repository root (the directory that holds src/ and data/)."""
    return Path(__file__).resolve().parents[3]


def get_definitions_path(base_path: Path | str | None = None) -> Path:
    """Return the directory holding entities.json and settings.json.

    An explicit ``base_path`` wins, then the FMAZE_DEFINITIONS environment
    variable, then ``data/definitions`` under the repository root.
    """
    if base_path is not None:
        return Path(base_path)
    override = os.environ.get(DEFINITIONS_ENV_VAR)
    if override:
        return Path(override)
    return get_repo_root() / "data" / "definitions"
