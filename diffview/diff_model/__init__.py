"""Diff parsing and patch synthesis.

Pure functions over unified-diff text: no git calls, no terminal state.
"""

from __future__ import annotations

from .parse import (
    build_line_infos,
    hunk_header_rows,
    is_binary_diff,
    parse_diff,
    parse_hunk_header,
    parse_range,
    split_diff_lines,
)
from .patch import (
    build_hunk_patch,
    build_partial_patch,
    build_reverse_partial_patch,
    check_patch_header,
    count_patch_body,
)
from .types import (
    LINE_ADDED,
    LINE_CONTEXT,
    LINE_REMOVED,
    DiffLine,
    DisplayLineInfo,
    FileDiff,
    Hunk,
    format_hunk_header,
)

__all__ = [
    "LINE_ADDED",
    "LINE_CONTEXT",
    "LINE_REMOVED",
    "DiffLine",
    "DisplayLineInfo",
    "FileDiff",
    "Hunk",
    "format_hunk_header",
    "parse_diff",
    "parse_hunk_header",
    "parse_range",
    "build_line_infos",
    "hunk_header_rows",
    "is_binary_diff",
    "split_diff_lines",
    "build_hunk_patch",
    "build_partial_patch",
    "build_reverse_partial_patch",
    "check_patch_header",
    "count_patch_body",
]
