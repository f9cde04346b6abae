"""Render listings as a grid, a single column, or a detail table.

Every renderer is a pure function of its inputs and returns text without a
trailing newline. Widths are measured in terminal cells on the plain names,
so color escapes never influence column math.
"""

from __future__ import annotations

import math
from collections.abc import Sequence

from .ansi import display_width, pad_left, pad_right
from .colors import ColorMap, colorize
from .listing import Listing
from .options import LayoutMode

GRID_SEPARATOR = "  "
DETAIL_SEPARATOR = " "
LINK_ARROW = " -> "
STARVATION_MIN_SHORTFALL = 5


def column_widths(widths: Sequence[int], rows: int) -> list[int]:
    """Return per-column max widths when items fill columns of ``rows``."""
    if rows <= 0:
        return []
    return [max(widths[start : start + rows]) for start in range(0, len(widths), rows)]


def starves_last_column(count: int, rows: int) -> bool:
    """Whether the last column holds at most half of a full column.

    Small shortfalls are tolerated; only a gap of at least five entries
    counts as starvation.
    """
    columns = math.ceil(count / rows)
    if columns < 2:
        return False
    last = count - (columns - 1) * rows
    return last * 2 <= rows and rows - last >= STARVATION_MIN_SHORTFALL


def grid_row_count(widths: Sequence[int], terminal_width: int) -> int:
    """Find the smallest row count whose columns fit ``terminal_width``.

    Falls back to one entry per row once ``rows`` reaches the entry count.
    """
    count = len(widths)
    if count == 0:
        return 0
    rows = 1
    while rows < count:
        col_widths = column_widths(widths, rows)
        total = sum(col_widths) + len(GRID_SEPARATOR) * (len(col_widths) - 1)
        if total <= terminal_width and not starves_last_column(count, rows):
            break
        rows += 1
    return rows


def render_grid(
    listings: Sequence[Listing],
    terminal_width: int,
    color_map: ColorMap | None = None,
) -> str:
    """Fill columns top-to-bottom, then emit rows left-to-right."""
    if not listings:
        return ""
    widths = [display_width(listing.name) for listing in listings]
    names = [colorize(listing, color_map) for listing in listings]
    rows = grid_row_count(widths, terminal_width)
    col_widths = column_widths(widths, rows)

    lines: list[str] = []
    for row in range(rows):
        indices = list(range(row, len(names), rows))
        cells = [names[index] + " " * (col_widths[index // rows] - widths[index]) for index in indices[:-1]]
        cells.append(names[indices[-1]])
        lines.append(GRID_SEPARATOR.join(cells))
    return "\n".join(lines)


def render_single_column(listings: Sequence[Listing], color_map: ColorMap | None = None) -> str:
    return "\n".join(colorize(listing, color_map) for listing in listings)


def _max_width(values: Sequence[str]) -> int:
    return max((display_width(value) for value in values), default=0)


def render_detail(listings: Sequence[Listing], color_map: ColorMap | None = None) -> str:
    """Render one aligned attribute row per listing.

    Permissions, owner, group, and month are left-justified; link count,
    size, day, and time/year are right-justified.
    """
    if not listings:
        return ""
    perm_width = _max_width([item.permissions for item in listings])
    links_width = _max_width([item.hard_link_count for item in listings])
    owner_width = _max_width([item.owner for item in listings])
    group_width = _max_width([item.group for item in listings])
    size_width = _max_width([item.size for item in listings])
    month_width = _max_width([item.month for item in listings])
    day_width = _max_width([item.day for item in listings])
    time_width = _max_width([item.time_or_year for item in listings])

    lines: list[str] = []
    for item in listings:
        name = colorize(item, color_map)
        if item.is_symlink and item.link_target is not None:
            name = f"{name}{LINK_ARROW}{item.link_target}"
        fields = [
            pad_right(item.permissions, perm_width),
            pad_left(item.hard_link_count, links_width),
            pad_right(item.owner, owner_width),
            pad_right(item.group, group_width),
            pad_left(item.size, size_width),
            pad_right(item.month, month_width),
            pad_left(item.day, day_width),
            pad_left(item.time_or_year, time_width),
            name,
        ]
        lines.append(DETAIL_SEPARATOR.join(fields))
    return "\n".join(lines)


def render(
    listings: Sequence[Listing],
    mode: LayoutMode,
    terminal_width: int,
    color_map: ColorMap | None = None,
) -> str:
    """Render ``listings`` in ``mode``; empty input yields ``""``."""
    if mode is LayoutMode.DETAIL:
        return render_detail(listings, color_map)
    if mode is LayoutMode.SINGLE_COLUMN:
        return render_single_column(listings, color_map)
    return render_grid(listings, terminal_width, color_map)


__all__ = [
    "GRID_SEPARATOR",
    "column_widths",
    "starves_last_column",
    "grid_row_count",
    "render_grid",
    "render_single_column",
    "render_detail",
    "render",
]
