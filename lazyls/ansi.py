"""ANSI SGR helpers and display-width measurement.

Column math in the layout engine runs on terminal cells, not code points:
escape sequences occupy no columns, combining marks occupy none, and East
Asian wide/fullwidth characters occupy two.
"""

from __future__ import annotations

import re
import unicodedata

ANSI_ESCAPE_RE = re.compile(r"\x1b\[[0-9;?]*[ -/]*[@-~]")
CSI = "\033["
RESET = "\033[0m"


def sgr(params: str) -> str:
    """Wrap SGR parameters (``01;34``) into a full escape sequence."""
    return f"{CSI}{params}m"


def strip_ansi(text: str) -> str:
    """Remove ANSI escape sequences from ``text``."""
    return ANSI_ESCAPE_RE.sub("", text)


def char_display_width(ch: str) -> int:
    """Return terminal column width for one character."""
    if unicodedata.combining(ch):
        return 0
    if unicodedata.east_asian_width(ch) in {"W", "F"}:
        return 2
    return 1


def display_width(text: str) -> int:
    """Return rendered column width of ``text`` ignoring escape sequences."""
    return sum(char_display_width(ch) for ch in strip_ansi(text))


def pad_right(text: str, width: int) -> str:
    """Pad styled ``text`` with trailing spaces to ``width`` display columns."""
    return text + " " * max(0, width - display_width(text))


def pad_left(text: str, width: int) -> str:
    """Pad styled ``text`` with leading spaces to ``width`` display columns."""
    return " " * max(0, width - display_width(text)) + text
