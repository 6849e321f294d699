"""File-backed session storage."""

import logging
import os
import re
from pathlib import Path

logger = logging.getLogger(__name__)

_SAFE_KEY = re.compile(r"[^A-Za-z0-9_.-]")


class FileSessionStorage:
    """SessionStorage that keeps each key in its own JSON file.

    Values are written to a temporary file and renamed into place, so a reader
    never observes a half-written session.
    """

    def __init__(self, directory: Path) -> None:
        self._directory = directory

    @property
    def directory(self) -> Path:
        return self._directory

    def path_for(self, key: str) -> Path:
        return self._directory / f"{_SAFE_KEY.sub('_', key)}.json"

    def get(self, key: str) -> str | None:
        path = self.path_for(key)
        if not path.exists():
            return None
        try:
            return path.read_text()
        except OSError as e:
            logger.warning("Could not read session file %s: %s", path, e)
            return None

    def set(self, key: str, value: str) -> None:
        self._directory.mkdir(parents=True, exist_ok=True)
        path = self.path_for(key)
        tmp = path.with_suffix(".tmp")
        tmp.write_text(value)
        os.chmod(tmp, 0o600)  # holds a session token
        tmp.replace(path)

    def remove(self, key: str) -> None:
        path = self.path_for(key)
        if path.exists():
            path.unlink()
