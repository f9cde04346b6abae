"""Listing pipeline: path arguments in, rendered text out.

Each invocation normalizes, sorts, and lays out one section per directory
argument, with plain file arguments grouped into a leading section. Output
is assembled in memory and only returned once every section succeeded, so
a fatal error never leaves partial text behind.
"""

from __future__ import annotations

import logging
import os
import stat
import time
from collections.abc import Mapping, Sequence
from dataclasses import dataclass, field
from typing import Protocol

from .colors import ColorMap
from .errors import DirectoryReadError, PathNotFoundError
from .layout import render
from .listing import Listing, ListingContext, RawStat, normalize
from .options import Options
from .sorting import sort_listings

logger = logging.getLogger(__name__)

SECTION_SEPARATOR = "\n\n"
CURRENT_DIRECTORY = "."
PARENT_DIRECTORY = ".."


class ListingSource(Protocol):
    def lstat(self, path: str) -> RawStat | None: ...

    def scandir(self, path: str) -> list[str]: ...

    def read_link(self, path: str) -> str: ...

    def target_exists(self, path: str) -> bool: ...


@dataclass(frozen=True)
class RenderContext:
    """Everything one invocation needs, bundled once and passed down."""

    options: Options
    source: ListingSource
    terminal_width: int
    color_map: ColorMap | None = None
    owner_table: Mapping[int, str] = field(default_factory=dict)
    group_table: Mapping[int, str] = field(default_factory=dict)
    now_ns: int = field(default_factory=time.time_ns)

    def listing_context(self) -> ListingContext:
        return ListingContext(
            human_sizes=self.options.human_sizes,
            now_ns=self.now_ns,
            read_link=self.source.read_link,
            target_exists=self.source.target_exists,
        )


def _normalize_entry(context: RenderContext, listing_context: ListingContext, path: str, name: str) -> Listing:
    return normalize(
        path,
        context.source.lstat(path),
        context.owner_table,
        context.group_table,
        listing_context,
        name=name,
    )


def directory_listings(context: RenderContext, listing_context: ListingContext, directory: str) -> list[Listing]:
    """Normalize the visible children of ``directory`` in enumeration order.

    ``show_all`` adds ``.`` and ``..`` ahead of the scanned entries and keeps
    dotfiles; otherwise names starting with ``.`` are skipped.
    """
    try:
        names = context.source.scandir(directory)
    except OSError as exc:
        raise DirectoryReadError(directory, exc.strerror or exc) from exc

    show_all = context.options.show_all
    entries: list[tuple[str, str]] = []
    if show_all:
        entries.append((CURRENT_DIRECTORY, directory))
        entries.append((PARENT_DIRECTORY, os.path.join(directory, PARENT_DIRECTORY)))
    for name in names:
        if not show_all and name.startswith("."):
            continue
        entries.append((name, os.path.join(directory, name)))
    return [_normalize_entry(context, listing_context, path, name) for name, path in entries]


def render_listings(context: RenderContext, listings: Sequence[Listing]) -> str:
    """Sort and lay out one section's listings according to the options."""
    options = context.options
    ordered = sort_listings(
        listings,
        options.sort_policy,
        reverse=options.reverse_sort,
        dirs_first=options.dirs_first,
    )
    return render(ordered, options.layout_mode, context.terminal_width, context.color_map)


def render_paths(context: RenderContext, paths: Sequence[str]) -> str:
    """Render every path argument into one buffered text block.

    With no paths the current directory is listed. ``name:`` headers appear
    only when more than one section is produced. Raises ``ListingError``
    subclasses; nothing is returned in that case.
    """
    if not paths:
        paths = [CURRENT_DIRECTORY]
    listing_context = context.listing_context()
    treat_dirs_as_files = context.options.treat_dirs_as_files

    files: list[Listing] = []
    directories: list[str] = []
    for path in paths:
        raw_stat = context.source.lstat(path)
        if raw_stat is None:
            raise PathNotFoundError(path)
        if stat.S_ISDIR(raw_stat.st_mode) and not treat_dirs_as_files:
            directories.append(path)
            continue
        files.append(normalize(path, raw_stat, context.owner_table, context.group_table, listing_context))

    show_headers = len(directories) + (1 if files else 0) > 1
    sections: list[str] = []
    if files:
        logger.debug("rendering %d file argument(s)", len(files))
        sections.append(render_listings(context, files))
    for directory in directories:
        listings = directory_listings(context, listing_context, directory)
        logger.debug("rendering directory %s (%d entries)", directory, len(listings))
        body = render_listings(context, listings)
        if not show_headers:
            sections.append(body)
        elif body:
            sections.append(f"{directory}:\n{body}")
        else:
            sections.append(f"{directory}:")
    return SECTION_SEPARATOR.join(sections)


__all__ = [
    "ListingSource",
    "RenderContext",
    "directory_listings",
    "render_listings",
    "render_paths",
]
