"""Fatal listing errors.

Any of these aborts the whole invocation: the pipeline discards buffered
output and the CLI reports the message with a non-zero exit status.
Degraded conditions (unknown owners, bad color specs) never raise.
"""

from __future__ import annotations


class ListingError(Exception):
    """Base class for errors that abort a listing."""

    def __init__(self, path: str, message: str) -> None:
        super().__init__(message)
        self.path = path


class StatMissingError(ListingError):
    """Raw stat payload for an entry is absent or unreadable."""

    def __init__(self, path: str) -> None:
        super().__init__(path, f"cannot access '{path}': no stat information")


class LinkResolutionError(ListingError):
    """Symbolic link target could not be read."""

    def __init__(self, path: str, reason: object = None) -> None:
        detail = f": {reason}" if reason else ""
        super().__init__(path, f"cannot read symbolic link '{path}'{detail}")


class PathNotFoundError(ListingError):
    """A named path argument does not exist."""

    def __init__(self, path: str) -> None:
        super().__init__(path, f"cannot access '{path}': No such file or directory")


class DirectoryReadError(ListingError):
    """A directory selected for listing could not be scanned."""

    def __init__(self, path: str, reason: object = None) -> None:
        detail = f": {reason}" if reason else ""
        super().__init__(path, f"cannot open directory '{path}'{detail}")


__all__ = [
    "ListingError",
    "StatMissingError",
    "LinkResolutionError",
    "PathNotFoundError",
    "DirectoryReadError",
]
