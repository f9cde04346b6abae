"""Invocation options resolved once before any listing is built."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class SortPolicy(Enum):
    """Comparator selection for the sorter."""

    NAME = "name"
    TIME = "time"
    SIZE = "size"


class LayoutMode(Enum):
    """Output layout selected for a whole render call."""

    GRID = "grid"
    SINGLE_COLUMN = "single_column"
    DETAIL = "detail"


@dataclass(frozen=True)
class Options:
    """Read-only flag bundle for one invocation.

    ``width`` overrides the detected terminal width when set. Conflicting
    flags resolve deterministically: ``-t`` wins over ``-S`` and ``-l`` wins
    over ``-1``.
    """

    show_all: bool = False
    long_format: bool = False
    single_column: bool = False
    human_sizes: bool = False
    treat_dirs_as_files: bool = False
    use_color: bool = True
    reverse_sort: bool = False
    sort_by_time: bool = False
    sort_by_size: bool = False
    dirs_first: bool = False
    help: bool = False
    width: int | None = None

    @property
    def sort_policy(self) -> SortPolicy:
        if self.sort_by_time:
            return SortPolicy.TIME
        if self.sort_by_size:
            return SortPolicy.SIZE
        return SortPolicy.NAME

    @property
    def layout_mode(self) -> LayoutMode:
        if self.long_format:
            return LayoutMode.DETAIL
        if self.single_column:
            return LayoutMode.SINGLE_COLUMN
        return LayoutMode.GRID


__all__ = ["SortPolicy", "LayoutMode", "Options"]
