"""Listing domain model: raw stat records, structured modes, normalization.

This package contains the non-UI listing primitives:
- ``RawStat``/``FileMode``/``Listing`` datatypes
- the metadata normalizer with human sizes and time-field policy
"""

from __future__ import annotations

from .types import FileMode, Listing, RawStat
from .normalize import (
    ListingContext,
    format_size,
    human_size,
    normalize,
    resolve_principal,
    time_fields,
)

__all__ = [
    "RawStat",
    "FileMode",
    "Listing",
    "ListingContext",
    "human_size",
    "format_size",
    "resolve_principal",
    "time_fields",
    "normalize",
]
