"""Git collaborators: status source, diff sources, and the patch applier.

All calls are synchronous subprocess invocations rooted at the repository
toplevel; failures raise ``diffview.errors`` types.
"""

from __future__ import annotations

from .apply import apply_patch, stage_file, unstage_file
from .diff import (
    DIFF_TOOLS,
    TOOL_DELTA,
    TOOL_DIFFTASTIC,
    TOOL_RAW,
    WIDTH_SENSITIVE_TOOLS,
    fetch_display_diff,
    fetch_raw_diff,
    normalize_tool,
    supports_line_ops,
)
from .runner import resolve_commit, resolve_repo_root, run_git
from .status import ChangeRecord, fetch_commit_files, fetch_status, parse_commit_name_status, parse_status

__all__ = [
    "ChangeRecord",
    "DIFF_TOOLS",
    "TOOL_DELTA",
    "TOOL_DIFFTASTIC",
    "TOOL_RAW",
    "WIDTH_SENSITIVE_TOOLS",
    "apply_patch",
    "fetch_commit_files",
    "fetch_display_diff",
    "fetch_raw_diff",
    "fetch_status",
    "normalize_tool",
    "parse_commit_name_status",
    "parse_status",
    "resolve_commit",
    "resolve_repo_root",
    "run_git",
    "stage_file",
    "supports_line_ops",
    "unstage_file",
]
