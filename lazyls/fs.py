"""Filesystem source: the only part of the listing path that touches disk.

The pipeline talks to any object with the ``FilesystemSource`` methods, so
tests can substitute an in-memory fake.
"""

from __future__ import annotations

import logging
import os

from .listing import RawStat

logger = logging.getLogger(__name__)


class FilesystemSource:
    """Read stat records, directory entries, and link targets from disk."""

    def lstat(self, path: str) -> RawStat | None:
        """Return ``path``'s own stat record or ``None`` when it cannot be read."""
        try:
            return RawStat.from_stat_result(os.lstat(path))
        except OSError as exc:
            logger.debug("lstat failed for %s: %s", path, exc)
            return None

    def scandir(self, path: str) -> list[str]:
        """Return child names in enumeration order.

        Raises ``OSError`` when the directory cannot be opened.
        """
        with os.scandir(path) as entries:
            return [entry.name for entry in entries]

    def read_link(self, path: str) -> str:
        return os.readlink(path)

    def target_exists(self, path: str) -> bool:
        return os.path.exists(path)


__all__ = ["FilesystemSource"]
