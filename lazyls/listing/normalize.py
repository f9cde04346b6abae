"""Convert raw stat records into immutable, printable ``Listing`` values.

All environment access (link reading, owner lookups, the current instant)
arrives through ``ListingContext`` so normalization is deterministic for a
given context.
"""

from __future__ import annotations

import os
import time
from collections.abc import Callable, Mapping
from dataclasses import dataclass, field

from ..errors import LinkResolutionError, StatMissingError
from ..principals import lookup_group_name, lookup_user_name
from .types import FileMode, Listing, RawStat

SIZE_UNITS = "BKMGTPE"
MAX_SIZE_EXPONENT = 6
RECENT_WINDOW_NS = 182 * 24 * 60 * 60 * 1_000_000_000
FUTURE_TOLERANCE_NS = 5 * 1_000_000_000
MONTH_ABBREVIATIONS = (
    "Jan", "Feb", "Mar", "Apr", "May", "Jun",
    "Jul", "Aug", "Sep", "Oct", "Nov", "Dec",
)


def _default_target_exists(path: str) -> bool:
    return os.path.exists(path)


@dataclass(frozen=True)
class ListingContext:
    """Invocation-wide inputs shared by every normalized entry.

    ``now_ns`` anchors the recent-file window for the whole invocation.
    ``read_link`` and ``target_exists`` receive the entry path; lookups
    receive a numeric id and return ``None`` when no name is known.
    """

    human_sizes: bool = False
    now_ns: int = field(default_factory=time.time_ns)
    read_link: Callable[[str], str] = os.readlink
    target_exists: Callable[[str], bool] = _default_target_exists
    user_lookup: Callable[[int], str | None] = lookup_user_name
    group_lookup: Callable[[int], str | None] = lookup_group_name


def human_size(size_bytes: int) -> str:
    """Format ``size_bytes`` with binary-prefix units and one decimal digit.

    A trailing ``.0`` is dropped: ``1024`` gives ``1K`` while ``1485`` gives
    ``1.5K``. Plain bytes carry no decimals (``1023B``).
    """
    value = float(size_bytes)
    exponent = 0
    while value >= 1024 and exponent < MAX_SIZE_EXPONENT:
        value /= 1024
        exponent += 1
    if exponent == 0:
        return f"{int(value)}B"
    text = f"{value:.1f}"
    if text.endswith(".0"):
        text = text[:-2]
    return text + SIZE_UNITS[exponent]


def format_size(size_bytes: int, human_sizes: bool) -> str:
    return human_size(size_bytes) if human_sizes else str(size_bytes)


def resolve_principal(
    principal_id: int,
    lookup: Callable[[int], str | None],
    table: Mapping[int, str] | None,
) -> str:
    """Resolve an id to a display name; falls back to the table, then the id."""
    name = lookup(principal_id)
    if name:
        return name
    if table:
        name = table.get(principal_id)
        if name:
            return name
    return str(principal_id)


def time_fields(mtime_ns: int, now_ns: int) -> tuple[str, str, str]:
    """Return ``(month, day, time_or_year)`` display parts for ``mtime_ns``.

    Entries older than six months, or more than five seconds in the future,
    show the year instead of ``HH:MM``.
    """
    local = time.localtime(mtime_ns // 1_000_000_000)
    month = MONTH_ABBREVIATIONS[local.tm_mon - 1]
    day = str(local.tm_mday)
    six_months_ago = now_ns - RECENT_WINDOW_NS
    near_future = now_ns + FUTURE_TOLERANCE_NS
    if mtime_ns < six_months_ago or mtime_ns > near_future:
        return month, day, str(local.tm_year)
    return month, day, f"{local.tm_hour:02d}:{local.tm_min:02d}"


def _extension(name: str) -> str:
    return os.path.splitext(os.path.basename(name))[1].lstrip(".").lower()


def normalize(
    path: str,
    raw_stat: RawStat | None,
    owner_table: Mapping[int, str] | None,
    group_table: Mapping[int, str] | None,
    context: ListingContext,
    name: str | None = None,
) -> Listing:
    """Build one ``Listing`` from ``raw_stat`` observed at ``path``.

    ``name`` is the display name and defaults to ``path``. Raises
    ``StatMissingError`` for an absent stat payload and
    ``LinkResolutionError`` when a symlink target cannot be read.
    """
    if raw_stat is None:
        raise StatMissingError(path)

    mode = FileMode.from_mode(raw_stat.st_mode)
    type_char = mode.type_char
    is_symlink = type_char == "l"
    is_directory = type_char == "d"

    link_target: str | None = None
    is_orphan_link = False
    if is_symlink:
        try:
            link_target = context.read_link(path)
        except OSError as exc:
            raise LinkResolutionError(path, exc.strerror or exc) from exc
        target_path = os.path.join(os.path.dirname(path), link_target)
        is_orphan_link = not context.target_exists(target_path)

    month, day, time_or_year = time_fields(raw_stat.st_mtime_ns, context.now_ns)
    display_name = path if name is None else name
    is_regular = type_char == "-"

    return Listing(
        permissions=mode.to_string(),
        hard_link_count=str(raw_stat.st_nlink),
        owner=resolve_principal(raw_stat.st_uid, context.user_lookup, owner_table),
        group=resolve_principal(raw_stat.st_gid, context.group_lookup, group_table),
        size=format_size(raw_stat.st_size, context.human_sizes),
        size_bytes=int(raw_stat.st_size),
        mtime_ns=int(raw_stat.st_mtime_ns),
        month=month,
        day=day,
        time_or_year=time_or_year,
        name=display_name,
        link_target=link_target,
        is_directory=is_directory,
        is_symlink=is_symlink,
        is_socket=type_char == "s",
        is_pipe=type_char == "p",
        is_block_device=type_char == "b",
        is_char_device=type_char == "c",
        is_setuid=mode.setuid,
        is_setgid=mode.setgid,
        is_executable=is_regular and mode.any_execute,
        is_sticky=mode.sticky,
        is_other_writable=mode.other_writable,
        is_orphan_link=is_orphan_link,
        extension=_extension(display_name) if is_regular else "",
    )


__all__ = [
    "ListingContext",
    "human_size",
    "format_size",
    "resolve_principal",
    "time_fields",
    "normalize",
]
