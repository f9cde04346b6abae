"""Metadata normalizer tests: modes, ownership fallback, sizes, and dates."""

from __future__ import annotations

import time
import unittest

from lazyls.errors import LinkResolutionError, StatMissingError
from lazyls.listing import ListingContext, RawStat, human_size, normalize, time_fields

NOW_NS = 1_700_000_000 * 1_000_000_000
DAY_NS = 24 * 60 * 60 * 1_000_000_000


def _context(**overrides) -> ListingContext:
    values = dict(
        now_ns=NOW_NS,
        read_link=lambda path: "target",
        target_exists=lambda path: True,
        user_lookup=lambda uid: None,
        group_lookup=lambda gid: None,
    )
    values.update(overrides)
    return ListingContext(**values)


def _stat(mode: int, **overrides) -> RawStat:
    values = dict(st_mode=mode, st_nlink=1, st_uid=1000, st_gid=1000, st_size=13, st_mtime_ns=NOW_NS)
    values.update(overrides)
    return RawStat(**values)


class HumanSizeTests(unittest.TestCase):
    def test_reference_values(self) -> None:
        self.assertEqual(human_size(0), "0B")
        self.assertEqual(human_size(1023), "1023B")
        self.assertEqual(human_size(1024), "1K")
        self.assertEqual(human_size(1485), "1.5K")
        self.assertEqual(human_size(1_073_741_824), "1G")

    def test_keeps_non_zero_decimal_and_strips_only_trailing_zero(self) -> None:
        self.assertEqual(human_size(14 * 1024), "14K")
        self.assertEqual(human_size(int(2.5 * 1024 * 1024)), "2.5M")

    def test_exponent_is_capped_at_exbibytes(self) -> None:
        self.assertEqual(human_size(1024**6), "1E")
        self.assertEqual(human_size(1024**7), "1024E")


class TimeFieldTests(unittest.TestCase):
    def test_recent_entry_shows_clock_time(self) -> None:
        mtime_ns = NOW_NS - DAY_NS
        local = time.localtime(mtime_ns // 1_000_000_000)
        _month, day, time_or_year = time_fields(mtime_ns, NOW_NS)
        self.assertEqual(day, str(local.tm_mday))
        self.assertEqual(time_or_year, f"{local.tm_hour:02d}:{local.tm_min:02d}")

    def test_entry_older_than_six_months_shows_year(self) -> None:
        mtime_ns = NOW_NS - 200 * DAY_NS
        local = time.localtime(mtime_ns // 1_000_000_000)
        _month, _day, time_or_year = time_fields(mtime_ns, NOW_NS)
        self.assertEqual(time_or_year, str(local.tm_year))

    def test_future_tolerance_is_five_seconds(self) -> None:
        near = NOW_NS + 3 * 1_000_000_000
        far = NOW_NS + 10 * 1_000_000_000
        self.assertIn(":", time_fields(near, NOW_NS)[2])
        self.assertEqual(time_fields(far, NOW_NS)[2], str(time.localtime(far // 1_000_000_000).tm_year))

    def test_month_uses_english_abbreviation(self) -> None:
        month, _day, _time = time_fields(NOW_NS, NOW_NS)
        local = time.localtime(NOW_NS // 1_000_000_000)
        expected = ("Jan", "Feb", "Mar", "Apr", "May", "Jun", "Jul", "Aug", "Sep", "Oct", "Nov", "Dec")[local.tm_mon - 1]
        self.assertEqual(month, expected)


class NormalizeTests(unittest.TestCase):
    def test_regular_file_fields(self) -> None:
        listing = normalize("a", _stat(0o100644, st_nlink=2), {}, {}, _context())
        self.assertEqual(listing.permissions, "-rw-r--r--")
        self.assertEqual(listing.hard_link_count, "2")
        self.assertEqual(listing.size, "13")
        self.assertEqual(listing.size_bytes, 13)
        self.assertEqual(listing.mtime_ns, NOW_NS)
        self.assertEqual(listing.name, "a")
        self.assertIsNone(listing.link_target)
        self.assertFalse(listing.is_executable)
        self.assertFalse(listing.is_directory)

    def test_human_sizes_flag_formats_size_but_keeps_raw_bytes(self) -> None:
        listing = normalize("big", _stat(0o100644, st_size=1485), {}, {}, _context(human_sizes=True))
        self.assertEqual(listing.size, "1.5K")
        self.assertEqual(listing.size_bytes, 1485)

    def test_special_bits_are_placed_in_execute_positions(self) -> None:
        cases = {
            0o104755: "-rwsr-xr-x",
            0o104644: "-rwSr--r--",
            0o102755: "-rwxr-sr-x",
            0o102745: "-rwxr-Sr-x",
            0o041777: "drwxrwxrwt",
            0o041776: "drwxrwxrwT",
        }
        for mode, expected in cases.items():
            with self.subTest(mode=oct(mode)):
                listing = normalize("x", _stat(mode), {}, {}, _context())
                self.assertEqual(listing.permissions, expected)

    def test_type_characters_and_flags(self) -> None:
        cases = [
            (0o040755, "d", "is_directory"),
            (0o020644, "c", "is_char_device"),
            (0o060644, "b", "is_block_device"),
            (0o010644, "p", "is_pipe"),
            (0o140755, "s", "is_socket"),
        ]
        for mode, type_char, flag in cases:
            with self.subTest(flag=flag):
                listing = normalize("x", _stat(mode), {}, {}, _context())
                self.assertEqual(listing.permissions[0], type_char)
                self.assertTrue(getattr(listing, flag))
                self.assertFalse(listing.is_executable)

    def test_executable_flag_only_applies_to_regular_files(self) -> None:
        self.assertTrue(normalize("run", _stat(0o100700), {}, {}, _context()).is_executable)
        self.assertTrue(normalize("run", _stat(0o100601), {}, {}, _context()).is_executable)
        self.assertFalse(normalize("dir", _stat(0o040755), {}, {}, _context()).is_executable)

    def test_symlink_resolves_target(self) -> None:
        listing = normalize("dir/link", _stat(0o120777), {}, {}, _context(read_link=lambda path: "../elsewhere"))
        self.assertEqual(listing.permissions, "lrwxrwxrwx")
        self.assertTrue(listing.is_symlink)
        self.assertEqual(listing.link_target, "../elsewhere")
        self.assertFalse(listing.is_orphan_link)

    def test_symlink_with_missing_target_is_orphan(self) -> None:
        checked: list[str] = []

        def exists(path: str) -> bool:
            checked.append(path)
            return False

        listing = normalize("dir/link", _stat(0o120777), {}, {}, _context(target_exists=exists))
        self.assertTrue(listing.is_orphan_link)
        self.assertEqual(checked, ["dir/target"])

    def test_unreadable_link_raises(self) -> None:
        def broken(path: str) -> str:
            raise PermissionError(13, "Permission denied")

        with self.assertRaises(LinkResolutionError) as ctx:
            normalize("link", _stat(0o120777), {}, {}, _context(read_link=broken))
        self.assertEqual(ctx.exception.path, "link")

    def test_missing_stat_raises(self) -> None:
        with self.assertRaises(StatMissingError):
            normalize("gone", None, {}, {}, _context())

    def test_owner_resolution_falls_back_to_table_then_numeric_id(self) -> None:
        listing = normalize("a", _stat(0o100644, st_uid=1000, st_gid=4242), {1000: "alice"}, {}, _context())
        self.assertEqual(listing.owner, "alice")
        self.assertEqual(listing.group, "4242")

    def test_lookup_result_wins_over_table(self) -> None:
        context = _context(user_lookup=lambda uid: "root", group_lookup=lambda gid: "wheel")
        listing = normalize("a", _stat(0o100644), {1000: "alice"}, {1000: "staff"}, context)
        self.assertEqual(listing.owner, "root")
        self.assertEqual(listing.group, "wheel")

    def test_display_name_and_extension(self) -> None:
        listing = normalize("/tmp/x/Archive.TAR.GZ", _stat(0o100644), {}, {}, _context(), name="Archive.TAR.GZ")
        self.assertEqual(listing.name, "Archive.TAR.GZ")
        self.assertEqual(listing.extension, "gz")
        dotfile = normalize(".bashrc", _stat(0o100644), {}, {}, _context())
        self.assertEqual(dotfile.extension, "")


if __name__ == "__main__":
    unittest.main()
