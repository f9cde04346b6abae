"""Domain datatypes for raw stat records and printable listings."""

from __future__ import annotations

import os
import stat
from dataclasses import dataclass

_TYPE_CHARS: dict[int, str] = {
    stat.S_IFDIR: "d",
    stat.S_IFLNK: "l",
    stat.S_IFREG: "-",
    stat.S_IFBLK: "b",
    stat.S_IFCHR: "c",
    stat.S_IFIFO: "p",
    stat.S_IFSOCK: "s",
}


@dataclass(frozen=True)
class RawStat:
    """Stat fields consumed by the normalizer."""

    st_mode: int
    st_nlink: int = 1
    st_uid: int = 0
    st_gid: int = 0
    st_size: int = 0
    st_mtime_ns: int = 0

    @classmethod
    def from_stat_result(cls, result: os.stat_result) -> "RawStat":
        return cls(
            st_mode=int(result.st_mode),
            st_nlink=int(result.st_nlink),
            st_uid=int(result.st_uid),
            st_gid=int(result.st_gid),
            st_size=int(result.st_size),
            st_mtime_ns=int(result.st_mtime_ns),
        )


@dataclass(frozen=True)
class FileMode:
    """File type plus permission bits, serialized only on demand.

    ``bits`` holds the nine rwx bits (``0o777`` mask). Special bits are kept
    as flags so the canonical string can place ``s``/``S`` and ``t``/``T``
    in the execute positions.
    """

    type_char: str
    bits: int
    setuid: bool = False
    setgid: bool = False
    sticky: bool = False

    @classmethod
    def from_mode(cls, mode: int) -> "FileMode":
        return cls(
            type_char=_TYPE_CHARS.get(stat.S_IFMT(mode), "-"),
            bits=mode & 0o777,
            setuid=bool(mode & stat.S_ISUID),
            setgid=bool(mode & stat.S_ISGID),
            sticky=bool(mode & stat.S_ISVTX),
        )

    @property
    def any_execute(self) -> bool:
        return bool(self.bits & 0o111)

    @property
    def other_writable(self) -> bool:
        return bool(self.bits & stat.S_IWOTH)

    def _triad(self, shift: int, special: bool, special_char: str) -> str:
        triad = (self.bits >> shift) & 0o7
        read = "r" if triad & 0o4 else "-"
        write = "w" if triad & 0o2 else "-"
        execute = bool(triad & 0o1)
        if special:
            exec_char = special_char if execute else special_char.upper()
        else:
            exec_char = "x" if execute else "-"
        return read + write + exec_char

    def to_string(self) -> str:
        """Return the canonical 10-character mode string (``drwxr-xr-x``)."""
        return (
            self.type_char
            + self._triad(6, self.setuid, "s")
            + self._triad(3, self.setgid, "s")
            + self._triad(0, self.sticky, "t")
        )

    def __str__(self) -> str:
        return self.to_string()


@dataclass(frozen=True)
class Listing:
    """Printable record derived from one filesystem entry.

    Every field is computed by the normalizer at construction; sorting and
    layout only reorder and read listings.
    """

    permissions: str
    hard_link_count: str
    owner: str
    group: str
    size: str
    size_bytes: int
    mtime_ns: int
    month: str
    day: str
    time_or_year: str
    name: str
    link_target: str | None = None
    is_directory: bool = False
    is_symlink: bool = False
    is_socket: bool = False
    is_pipe: bool = False
    is_block_device: bool = False
    is_char_device: bool = False
    is_setuid: bool = False
    is_setgid: bool = False
    is_executable: bool = False
    is_sticky: bool = False
    is_other_writable: bool = False
    is_orphan_link: bool = False
    extension: str = ""


__all__ = ["RawStat", "FileMode", "Listing"]
