"""Persistence of the recently opened files list."""

from __future__ import annotations

import json
import logging
from pathlib import Path

from .codec import write_atomic

logger = logging.getLogger(__name__)


class RecentFiles:
    """
    Ordered list of recently used paths stored as JSON array.

    Missing or corrupt storage reads as empty list.
    """

    def __init__(self, path: Path, max_entries: int = 10):
        """
        :param path: The JSON file
        :param max_entries: Maximum number of paths kept by :meth:`add`
        """
        self.path = Path(path)
        self.max_entries = max_entries

    def get(self) -> list[str]:
        """
        Returns the stored paths, most recent first

        :return: The list of paths
        """
        if not self.path.exists():
            return []
        try:
            files = json.loads(self.path.read_text(encoding="utf-8"))
        except (OSError, UnicodeDecodeError, json.JSONDecodeError) as e:
            logger.warning(f"Ignoring unreadable recent files list {self.path}: {e}")
            return []
        if not isinstance(files, list) or not all(isinstance(f, str) for f in files):
            logger.warning(f"Ignoring malformed recent files list {self.path}")
            return []
        return files

    def set(self, files: list[str]) -> None:
        """
        Replaces the stored list

        :param files: The paths, most recent first
        :raises EncodeError: If the file can not be written
        """
        write_atomic(json.dumps(list(files)).encode("utf-8"), self.path)

    def add(self, path: str) -> list[str]:
        """
        Moves ``path`` to the front, dropping duplicates and overflow

        :param path: The path just used
        :return: The updated list
        """
        files = [f for f in self.get() if f != path]
        files.insert(0, path)
        files = files[: self.max_entries]
        self.set(files)
        return files


__all__ = ["RecentFiles"]
