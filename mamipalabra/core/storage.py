from __future__ import annotations

import logging
import re
from pathlib import Path
from typing import Optional

from mamipalabra.core.config import storage_dir

logger = logging.getLogger(__name__)

_KEY_RE = re.compile(r"^[A-Za-z0-9_.-]+$")


class LocalStorage:
    """Device-local string key/value store, one file per key.

    Read and write failures are logged and treated as a missing value, so a
    broken disk never ends the game. There is exactly one writer (the running
    app); two processes writing the same key race and the last one wins.
    """

    def __init__(self, directory: Optional[Path] = None) -> None:
        self._directory = Path(directory) if directory is not None else storage_dir()

    @property
    def directory(self) -> Path:
        return self._directory

    def get_item(self, key: str) -> Optional[str]:
        path = self._path_for(key)
        if not path.exists():
            return None
        try:
            return path.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as e:
            logger.warning("Could not read %s: %s", path, e)
            return None

    def set_item(self, key: str, value: str) -> None:
        path = self._path_for(key)
        try:
            path.parent.mkdir(parents=True, exist_ok=True)
            path.write_text(value, encoding="utf-8")
        except OSError as e:
            logger.warning("Could not write %s: %s", path, e)

    def remove_item(self, key: str) -> None:
        path = self._path_for(key)
        try:
            path.unlink(missing_ok=True)
        except OSError as e:
            logger.warning("Could not remove %s: %s", path, e)

    def _path_for(self, key: str) -> Path:
        if not _KEY_RE.match(key):
            raise ValueError(f"Invalid storage key: {key!r}")
        return self._directory / key
