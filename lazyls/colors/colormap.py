"""Color specification parsing for the two ``ls`` color grammars.

``LSCOLORS`` is the BSD positional grammar: two letters per category in a
fixed order, foreground then background. ``LS_COLORS`` is the GNU
``key=SGR`` grammar. Both produce a ``ColorMap`` from category name to a
complete escape sequence. Malformed input never raises; the affected
categories simply stay uncolored.
"""

from __future__ import annotations

import logging
import os
from collections.abc import Mapping
from dataclasses import dataclass, field

from ..ansi import sgr

logger = logging.getLogger(__name__)

DIRECTORY = "directory"
SYMLINK = "symlink"
EXECUTABLE = "executable"
EXECUTABLE_SUID = "executable_suid"
EXECUTABLE_SGID = "executable_sgid"
SOCKET = "socket"
PIPE = "pipe"
BLOCK = "block"
CHARACTER = "character"
DIRECTORY_OTHER_WRITABLE = "directory_o+w"
DIRECTORY_OTHER_WRITABLE_STICKY = "directory_o+w_sticky"
DIRECTORY_STICKY = "directory_sticky"
ORPHAN_LINK = "orphan_link"

LSCOLORS_ENV = "LSCOLORS"
LS_COLORS_ENV = "LS_COLORS"
DEFAULT_LSCOLORS = "exfxcxdxbxegedabagacad"

POSITIONAL_CATEGORIES = (
    DIRECTORY,
    SYMLINK,
    SOCKET,
    PIPE,
    EXECUTABLE,
    BLOCK,
    CHARACTER,
    EXECUTABLE_SUID,
    EXECUTABLE_SGID,
    DIRECTORY_OTHER_WRITABLE_STICKY,
    DIRECTORY_OTHER_WRITABLE,
)

GNU_KEYS: dict[str, str] = {
    "di": DIRECTORY,
    "ln": SYMLINK,
    "ex": EXECUTABLE,
    "so": SOCKET,
    "pi": PIPE,
    "bd": BLOCK,
    "cd": CHARACTER,
    "su": EXECUTABLE_SUID,
    "sg": EXECUTABLE_SGID,
    "tw": DIRECTORY_OTHER_WRITABLE_STICKY,
    "ow": DIRECTORY_OTHER_WRITABLE,
    "st": DIRECTORY_STICKY,
    "or": ORPHAN_LINK,
}

# black, red, green, brown, blue, magenta, cyan, white
_POSITIONAL_LETTERS = "abcdefgh"
_FOREGROUND_BASE = 30
_BACKGROUND_BASE = 40


@dataclass(frozen=True)
class ColorMap:
    """Category and extension lookup of complete SGR escape sequences."""

    categories: Mapping[str, str] = field(default_factory=dict)
    extensions: Mapping[str, str] = field(default_factory=dict)

    def get(self, category: str) -> str | None:
        return self.categories.get(category)

    def for_extension(self, extension: str) -> str | None:
        if not extension:
            return None
        return self.extensions.get(extension.lower())


def positional_pair_params(pair: str) -> str | None:
    """Translate one foreground/background letter pair into SGR parameters.

    Returns ``None`` for invalid letters and for ``xx`` (both default).
    """
    if len(pair) != 2:
        return None
    bold = False
    colors: list[str] = []
    for letter, base in zip(pair, (_FOREGROUND_BASE, _BACKGROUND_BASE)):
        lowered = letter.lower()
        if lowered == "x":
            bold = bold or letter.isupper()
            continue
        index = _POSITIONAL_LETTERS.find(lowered)
        if index < 0:
            return None
        bold = bold or letter.isupper()
        colors.append(str(base + index))
    params = (["1"] if bold else []) + colors
    if not params:
        return None
    return ";".join(params)


def parse_lscolors(spec: str) -> ColorMap:
    """Parse a BSD ``LSCOLORS`` positional string.

    Short strings color only the leading categories they cover; extra
    characters are ignored.
    """
    categories: dict[str, str] = {}
    for index, category in enumerate(POSITIONAL_CATEGORIES):
        pair = spec[index * 2 : index * 2 + 2]
        if len(pair) < 2:
            break
        params = positional_pair_params(pair)
        if params is None:
            if pair.lower() != "xx":
                logger.debug("ignoring invalid LSCOLORS pair %r for %s", pair, category)
            continue
        categories[category] = sgr(params)
    return ColorMap(categories=categories)


def parse_ls_colors(spec: str) -> ColorMap:
    """Parse a GNU ``LS_COLORS`` ``key=SGR`` list.

    ``*.ext`` keys register extension colors. Unknown keys, entries without
    ``=``, and empty values are skipped.
    """
    categories: dict[str, str] = {}
    extensions: dict[str, str] = {}
    for item in spec.split(":"):
        if not item:
            continue
        key, sep, value = item.partition("=")
        if not sep or not value:
            logger.debug("ignoring malformed LS_COLORS entry %r", item)
            continue
        if key.startswith("*.") and len(key) > 2:
            extensions[key[2:].lower()] = sgr(value)
            continue
        category = GNU_KEYS.get(key)
        if category is None:
            logger.debug("ignoring unknown LS_COLORS key %r", key)
            continue
        categories[category] = sgr(value)
    return ColorMap(categories=categories, extensions=extensions)


def color_map_from_environment(env: Mapping[str, str] | None = None) -> ColorMap:
    """Build the invocation's color map from ``LSCOLORS``/``LS_COLORS``.

    ``LSCOLORS`` is consulted first. An unset variable and an empty one are
    treated the same; with neither present the built-in default applies.
    """
    if env is None:
        env = os.environ
    lscolors = env.get(LSCOLORS_ENV, "")
    if lscolors:
        logger.debug("using %s color grammar", LSCOLORS_ENV)
        return parse_lscolors(lscolors)
    ls_colors = env.get(LS_COLORS_ENV, "")
    if ls_colors:
        logger.debug("using %s color grammar", LS_COLORS_ENV)
        return parse_ls_colors(ls_colors)
    logger.debug("no color environment set, using default %s", DEFAULT_LSCOLORS)
    return parse_lscolors(DEFAULT_LSCOLORS)
