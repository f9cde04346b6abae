"""Ordering and partitioning of listings.

Sorting is stable under every policy so entries that compare equal keep
their filesystem enumeration order. Reversal happens on the whole sorted
sequence afterwards, which mirrors tie blocks as a unit.
"""

from __future__ import annotations

from collections.abc import Iterable

from .listing import Listing
from .options import SortPolicy


def name_key(listing: Listing) -> str:
    """Case-insensitive key; shorter names win on a shared prefix."""
    return listing.name.lower()


def time_key(listing: Listing) -> int:
    """Most recently modified first."""
    return -listing.mtime_ns


def size_key(listing: Listing) -> int:
    """Largest raw byte count first."""
    return -listing.size_bytes


def _sort_key(policy: SortPolicy):
    if policy is SortPolicy.TIME:
        return time_key
    if policy is SortPolicy.SIZE:
        return size_key
    return name_key


def partition_dirs_first(listings: Iterable[Listing]) -> list[Listing]:
    """Move directories ahead of everything else, keeping each group's order."""
    directories: list[Listing] = []
    others: list[Listing] = []
    for listing in listings:
        if listing.permissions[0] == "d":
            directories.append(listing)
        else:
            others.append(listing)
    return directories + others


def sort_listings(
    listings: Iterable[Listing],
    policy: SortPolicy = SortPolicy.NAME,
    reverse: bool = False,
    dirs_first: bool = False,
) -> list[Listing]:
    """Return a new list ordered by ``policy``.

    ``reverse`` flips the stably sorted sequence; ``dirs_first`` then
    partitions directories to the front.
    """
    ordered = sorted(listings, key=_sort_key(policy))
    if reverse:
        ordered.reverse()
    if dirs_first:
        ordered = partition_dirs_first(ordered)
    return ordered


__all__ = [
    "name_key",
    "time_key",
    "size_key",
    "partition_dirs_first",
    "sort_listings",
]
