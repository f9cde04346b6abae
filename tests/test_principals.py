from __future__ import annotations

import os
import tempfile
import unittest
from pathlib import Path

from lazyls import principals


class PrincipalTableTests(unittest.TestCase):
    def test_parse_skips_comments_blank_and_malformed_rows(self) -> None:
        text = "\n".join(
            [
                "# comment",
                "",
                "root:x:0:",
                "wheel:x:10:root,alice",
                "broken",
                "odd:x:notanumber:",
                "  staff:x:20:  ",
                "dup:x:0:",
            ]
        )
        self.assertEqual(principals.parse_principal_table(text), {0: "root", 10: "wheel", 20: "staff"})

    def test_load_missing_file_returns_empty_table(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            self.assertEqual(principals.load_principal_table(Path(tmp) / "absent"), {})

    def test_load_reads_file(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            path = Path(tmp) / "passwd"
            path.write_text("alice:x:1000:1000::/home/alice:/bin/sh\n", encoding="utf-8")
            self.assertEqual(principals.load_principal_table(path), {1000: "alice"})

    def test_lookups_return_none_for_unknown_ids(self) -> None:
        self.assertIsNone(principals.lookup_user_name(2**31 - 2))
        self.assertIsNone(principals.lookup_group_name(2**31 - 2))

    def test_lookup_current_user_matches_pwd(self) -> None:
        name = principals.lookup_user_name(os.getuid())
        self.assertTrue(name is None or isinstance(name, str))


if __name__ == "__main__":
    unittest.main()
