"""Game constants shared by the core and the UI."""

from __future__ import annotations

import os
from pathlib import Path
from typing import Dict, Final, Tuple

MAX_ATTEMPTS: Final[int] = 6

WORD_LENGTHS: Final[Tuple[int, ...]] = (4, 5, 6, 7)

DEFAULT_WORD_LENGTH: Final[int] = 5

HINTS_PER_GAME: Final[Dict[str, int]] = {"letter": 1, "definition": 1}

# Daily history keeps only the most recent entries.
HISTORY_LIMIT: Final[int] = 30

STATS_KEY: Final[str] = "mami-palabra-stats"
PREFERENCES_KEY: Final[str] = "mami-palabra-preferences"
DAILY_DATE_KEY: Final[str] = "mami-palabra-daily-date"

HOME_ENV_VAR: Final[str] = "MAMIPALABRA_HOME"


def storage_dir() -> Path:
    """Directory holding persisted stats and preferences (~/.mamipalabra by default)."""
    override = os.environ.get(HOME_ENV_VAR)
    if override:
        return Path(override).expanduser()
    return Path.home() / ".mamipalabra"
