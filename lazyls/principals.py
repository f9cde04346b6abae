"""Owner/group name resolution helpers.

``pwd``/``grp`` lookups come first; ``/etc/passwd``-style tables supply a
second tier. Neither path raises: unknown ids resolve to ``None`` here and
to the decimal id in the normalizer.
"""

from __future__ import annotations

import grp
import logging
import pwd
from pathlib import Path

logger = logging.getLogger(__name__)

PASSWD_PATH = Path("/etc/passwd")
GROUP_PATH = Path("/etc/group")


def lookup_user_name(uid: int) -> str | None:
    """Return the login name for ``uid`` or ``None`` when unknown."""
    try:
        return pwd.getpwuid(uid).pw_name
    except (KeyError, OverflowError):
        return None


def lookup_group_name(gid: int) -> str | None:
    """Return the group name for ``gid`` or ``None`` when unknown."""
    try:
        return grp.getgrgid(gid).gr_name
    except (KeyError, OverflowError):
        return None


def parse_principal_table(text: str) -> dict[int, str]:
    """Parse ``name:password:id:...`` rows into an ``{id: name}`` table.

    Comment lines, blank lines, and rows without a numeric third field are
    skipped. The first row wins for duplicate ids.
    """
    table: dict[int, str] = {}
    for line_number, raw_line in enumerate(text.splitlines(), start=1):
        line = raw_line.strip(" \t")
        if not line or line.startswith("#"):
            continue
        fields = line.split(":")
        if len(fields) < 3 or not fields[0]:
            logger.debug("skipping malformed principal row %d", line_number)
            continue
        try:
            principal_id = int(fields[2])
        except ValueError:
            logger.debug("skipping principal row %d with non-numeric id %r", line_number, fields[2])
            continue
        table.setdefault(principal_id, fields[0])
    return table


def load_principal_table(path: Path) -> dict[int, str]:
    """Load an id table from ``path``, returning ``{}`` when unreadable."""
    try:
        text = path.read_text(encoding="utf-8", errors="replace")
    except OSError as exc:
        logger.debug("principal table %s unavailable: %s", path, exc)
        return {}
    return parse_principal_table(text)


def load_owner_table() -> dict[int, str]:
    return load_principal_table(PASSWD_PATH)


def load_group_table() -> dict[int, str]:
    return load_principal_table(GROUP_PATH)


__all__ = [
    "lookup_user_name",
    "lookup_group_name",
    "parse_principal_table",
    "load_principal_table",
    "load_owner_table",
    "load_group_table",
]
