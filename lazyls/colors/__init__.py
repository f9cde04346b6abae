"""Color classification for listings.

Two grammars (BSD positional ``LSCOLORS`` and GNU ``LS_COLORS``) build a
``ColorMap``; the classifier picks a category per listing with a fixed
precedence and wraps the name in the matching escape sequence.
"""

from __future__ import annotations

from .colormap import (
    DEFAULT_LSCOLORS,
    ColorMap,
    color_map_from_environment,
    parse_ls_colors,
    parse_lscolors,
    positional_pair_params,
)
from .classify import candidate_categories, classify, color_name, colorize

__all__ = [
    "DEFAULT_LSCOLORS",
    "ColorMap",
    "color_map_from_environment",
    "parse_ls_colors",
    "parse_lscolors",
    "positional_pair_params",
    "candidate_categories",
    "classify",
    "color_name",
    "colorize",
]
