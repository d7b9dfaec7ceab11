"""Unit tests for unified-diff parsing and row mapping.

Covers hunk header defaults, malformed input tolerance, and the
``DisplayLineInfo`` row index used by inline line selection.
"""

from __future__ import annotations

import unittest

from diffview.diff_model import (
    LINE_ADDED,
    LINE_CONTEXT,
    LINE_REMOVED,
    build_line_infos,
    hunk_header_rows,
    is_binary_diff,
    parse_diff,
    parse_hunk_header,
    parse_range,
    split_diff_lines,
)

SEPARATOR_DIFF = (
    "--- a/doc.txt\n"
    "+++ b/doc.txt\n"
    "@@ -1,3 +1,4 @@\n"
    " a\n"
    "+foo\x0cbar\n"
    "+left\u2028right\n"
    "-crlf\r\n"
    " b\n"
)

TWO_HUNK_DIFF = (
    "diff --git a/src/app.py b/src/app.py\n"
    "index 1111111..2222222 100644\n"
    "--- a/src/app.py\n"
    "+++ b/src/app.py\n"
    "@@ -1,4 +1,4 @@ def main():\n"
    " a\n"
    "-b\n"
    "+c\n"
    " d\n"
    "@@ -10,2 +10,3 @@\n"
    " x\n"
    "+y\n"
    " z\n"
)


class ParseRangeTests(unittest.TestCase):
    def test_missing_count_means_one_line(self) -> None:
        self.assertEqual(parse_range("7"), (7, 1))

    def test_explicit_zero_count(self) -> None:
        self.assertEqual(parse_range("0,0"), (0, 0))

    def test_unparsable_values_fall_back_to_defaults(self) -> None:
        self.assertEqual(parse_range("x,3"), (1, 3))
        self.assertEqual(parse_range("4,y"), (4, 0))


class ParseHunkHeaderTests(unittest.TestCase):
    def test_parses_both_ranges_and_keeps_header_text(self) -> None:
        hunk = parse_hunk_header("@@ -3,5 +4,6 @@ class Foo:")
        self.assertIsNotNone(hunk)
        assert hunk is not None
        self.assertEqual((hunk.old_start, hunk.old_count, hunk.new_start, hunk.new_count), (3, 5, 4, 6))
        self.assertEqual(hunk.header, "@@ -3,5 +4,6 @@ class Foo:")
        self.assertEqual(hunk.lines, [])

    def test_too_few_fields_is_rejected(self) -> None:
        self.assertIsNone(parse_hunk_header("@@ -1,2"))

    def test_single_line_ranges(self) -> None:
        hunk = parse_hunk_header("@@ -1 +1 @@")
        assert hunk is not None
        self.assertEqual((hunk.old_count, hunk.new_count), (1, 1))


class SplitDiffLinesTests(unittest.TestCase):
    def test_splits_on_newline_only(self) -> None:
        self.assertEqual(
            split_diff_lines("+a\x0cb\n+c\u2028d\n-e\r\n+f\x0bg\x1c\x85h\rk\n"),
            ["+a\x0cb", "+c\u2028d", "-e\r", "+f\x0bg\x1c\x85h\rk"],
        )

    def test_trailing_newline_adds_no_empty_row(self) -> None:
        self.assertEqual(split_diff_lines(""), [])
        self.assertEqual(split_diff_lines("a\n"), ["a"])
        self.assertEqual(split_diff_lines("a"), ["a"])
        self.assertEqual(split_diff_lines("a\n\n"), ["a", ""])


class ParseDiffTests(unittest.TestCase):
    def test_two_hunks_in_source_order(self) -> None:
        diff = parse_diff(TWO_HUNK_DIFF)

        self.assertEqual(diff.path, "src/app.py")
        self.assertFalse(diff.is_binary)
        self.assertEqual(len(diff.hunks), 2)
        first, second = diff.hunks
        self.assertEqual(
            [(line.kind, line.text) for line in first.lines],
            [(LINE_CONTEXT, "a"), (LINE_REMOVED, "b"), (LINE_ADDED, "c"), (LINE_CONTEXT, "d")],
        )
        self.assertEqual((second.old_start, second.new_count), (10, 3))
        self.assertEqual([line.render() for line in second.lines], [" x", "+y", " z"])

    def test_binary_diff_has_no_hunks(self) -> None:
        text = "diff --git a/logo.png b/logo.png\nBinary files a/logo.png and b/logo.png differ\n"
        self.assertTrue(is_binary_diff(text))
        diff = parse_diff(text)
        self.assertTrue(diff.is_binary)
        self.assertEqual(diff.hunks, [])

    def test_empty_text_gives_empty_diff(self) -> None:
        diff = parse_diff("")
        self.assertEqual(diff.hunks, [])
        self.assertEqual(diff.path, "")

    def test_unknown_rows_inside_hunk_are_dropped(self) -> None:
        text = "@@ -1,2 +1,2 @@\n-old\n\\ No newline at end of file\n+new\n"
        diff = parse_diff(text)
        self.assertEqual([line.render() for line in diff.hunks[0].lines], ["-old", "+new"])

    def test_malformed_header_drops_its_body(self) -> None:
        text = "@@ -1,1 +1,1 @@\n-a\n+b\n@@ broken\n+lost\n"
        diff = parse_diff(text)
        self.assertEqual(len(diff.hunks), 1)
        self.assertEqual([line.render() for line in diff.hunks[0].lines], ["-a", "+b"])

    def test_separator_characters_stay_inside_line_text(self) -> None:
        lines = parse_diff(SEPARATOR_DIFF).hunks[0].lines
        self.assertEqual(
            [(line.kind, line.text) for line in lines],
            [
                (LINE_CONTEXT, "a"),
                (LINE_ADDED, "foo\x0cbar"),
                (LINE_ADDED, "left\u2028right"),
                (LINE_REMOVED, "crlf\r"),
                (LINE_CONTEXT, "b"),
            ],
        )


class BuildLineInfosTests(unittest.TestCase):
    def test_one_info_per_row_with_hunk_addresses(self) -> None:
        infos = build_line_infos(TWO_HUNK_DIFF)
        rows = TWO_HUNK_DIFF.splitlines()
        self.assertEqual(len(infos), len(rows))

        # File header rows belong to no hunk.
        for info in infos[:4]:
            self.assertIsNone(info.hunk_index)
            self.assertFalse(info.is_selectable)

        header = infos[4]
        self.assertEqual((header.hunk_index, header.line_in_hunk, header.is_selectable), (0, None, False))
        self.assertEqual((infos[5].line_in_hunk, infos[5].is_selectable), (0, False))
        self.assertEqual((infos[6].line_in_hunk, infos[6].is_selectable), (1, True))
        self.assertEqual((infos[7].line_in_hunk, infos[7].is_selectable), (2, True))
        self.assertEqual(infos[9].hunk_index, 1)
        self.assertEqual((infos[11].hunk_index, infos[11].line_in_hunk, infos[11].is_selectable), (1, 1, True))

    def test_line_in_hunk_skips_unparsed_rows(self) -> None:
        text = "@@ -1,2 +1,2 @@\n-old\n\\ No newline at end of file\n+new\n"
        infos = build_line_infos(text)
        self.assertIsNone(infos[2].line_in_hunk)
        self.assertEqual(infos[3].line_in_hunk, 1)
        hunk = parse_diff(text).hunks[0]
        self.assertEqual(hunk.lines[infos[3].line_in_hunk].text, "new")

    def test_rows_match_git_rows_with_separator_characters(self) -> None:
        infos = build_line_infos(SEPARATOR_DIFF)
        self.assertEqual(len(infos), 8)
        self.assertEqual([info.line_in_hunk for info in infos[3:]], [0, 1, 2, 3, 4])
        self.assertEqual([info.is_selectable for info in infos[3:]], [False, True, True, True, False])

    def test_selectable_rows_address_change_lines(self) -> None:
        diff = parse_diff(TWO_HUNK_DIFF)
        for info in build_line_infos(TWO_HUNK_DIFF):
            if not info.is_selectable:
                continue
            assert info.hunk_index is not None and info.line_in_hunk is not None
            self.assertTrue(diff.hunks[info.hunk_index].lines[info.line_in_hunk].is_change)


class HunkHeaderRowsTests(unittest.TestCase):
    def test_rows_ignore_separators_inside_lines(self) -> None:
        text = "@@ -1 +1 @@\n-a\x0c@@ fake\n+b\u2028@@ fake\n@@ -5 +5 @@\n"
        self.assertEqual(hunk_header_rows(text), [0, 3])

    def test_finds_headers_through_color_codes(self) -> None:
        text = "\x1b[1mdiff\x1b[0m\n\x1b[36m@@ -1 +1 @@\x1b[0m\n-a\n+b\n@@ -5 +5 @@\n"
        self.assertEqual(hunk_header_rows(text), [1, 4])


if __name__ == "__main__":
    unittest.main()
