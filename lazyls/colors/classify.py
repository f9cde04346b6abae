"""Map listings to color categories and wrap display names in SGR codes."""

from __future__ import annotations

from ..ansi import RESET
from ..listing import Listing
from .colormap import (
    BLOCK,
    CHARACTER,
    DIRECTORY,
    DIRECTORY_OTHER_WRITABLE,
    DIRECTORY_OTHER_WRITABLE_STICKY,
    DIRECTORY_STICKY,
    EXECUTABLE,
    EXECUTABLE_SGID,
    EXECUTABLE_SUID,
    ORPHAN_LINK,
    PIPE,
    SOCKET,
    SYMLINK,
    ColorMap,
)


def candidate_categories(listing: Listing) -> list[str]:
    """Return matching categories for ``listing`` in precedence order.

    Directory variants come before the plain directory category so that a
    map without the extended entries still colors the directory.
    """
    if listing.is_directory:
        candidates: list[str] = []
        if listing.is_other_writable and listing.is_sticky:
            candidates.append(DIRECTORY_OTHER_WRITABLE_STICKY)
        elif listing.is_other_writable:
            candidates.append(DIRECTORY_OTHER_WRITABLE)
        elif listing.is_sticky:
            candidates.append(DIRECTORY_STICKY)
        candidates.append(DIRECTORY)
        return candidates
    if listing.is_symlink:
        if listing.is_orphan_link:
            return [ORPHAN_LINK, SYMLINK]
        return [SYMLINK]
    if listing.is_executable:
        candidates = []
        if listing.is_setuid:
            candidates.append(EXECUTABLE_SUID)
        if listing.is_setgid:
            candidates.append(EXECUTABLE_SGID)
        candidates.append(EXECUTABLE)
        return candidates
    if listing.is_socket:
        return [SOCKET]
    if listing.is_pipe:
        return [PIPE]
    if listing.is_block_device:
        return [BLOCK]
    if listing.is_char_device:
        return [CHARACTER]
    return []


def classify(listing: Listing, color_map: ColorMap | None) -> str | None:
    """Return the escape sequence for ``listing`` or ``None`` when uncolored.

    The first candidate category present in ``color_map`` wins; regular
    files with no category match fall back to extension colors.
    """
    if color_map is None:
        return None
    for category in candidate_categories(listing):
        code = color_map.get(category)
        if code:
            return code
    if listing.is_executable or listing.permissions[0] != "-":
        return None
    return color_map.for_extension(listing.extension)


def color_name(name: str, code: str | None) -> str:
    if not code:
        return name
    return f"{code}{name}{RESET}"


def colorize(listing: Listing, color_map: ColorMap | None) -> str:
    """Return the display name wrapped in its color, or unchanged."""
    return color_name(listing.name, classify(listing, color_map))
