"""Diff text sources for the index, the worktree, and single commits.

The raw unified diff always comes from ``git diff`` / ``git show`` and is what
the parser and patch builder see. The display text may instead come from an
external formatter; the formatter set is closed and fixed at startup.
"""

from __future__ import annotations

import logging
import os
from collections.abc import Callable
from pathlib import Path

from ..errors import SubprocessFailure
from .runner import run_command, run_git

logger = logging.getLogger(__name__)

TOOL_RAW = "raw"
TOOL_DELTA = "delta"
TOOL_DIFFTASTIC = "difftastic"
DIFF_TOOLS: tuple[str, ...] = (TOOL_RAW, TOOL_DELTA, TOOL_DIFFTASTIC)

# Tools whose output keeps unified-diff row structure and can back line selection.
LINE_OPS_TOOLS = frozenset({TOOL_RAW, TOOL_DELTA})
# Tools whose layout depends on pane width and must re-render on resize.
WIDTH_SENSITIVE_TOOLS = frozenset({TOOL_DELTA})


def normalize_tool(name: str | None) -> str:
    """Map a user-supplied tool name onto the closed tool set (default raw)."""
    lowered = (name or "").strip().lower()
    return lowered if lowered in DIFF_TOOLS else TOOL_RAW


def supports_line_ops(tool: str) -> bool:
    return tool in LINE_OPS_TOOLS


def _diff_args(path: str, staged: bool, revision: str | None, ext_diff: bool = False) -> list[str]:
    if revision is not None:
        args = ["show", "--format=", "--patch"]
    else:
        args = ["diff", "--cached"] if staged else ["diff"]
    if ext_diff:
        args.append("--ext-diff")
    if revision is not None:
        args.append(revision)
    return [*args, "--", path]


def fetch_raw_diff(path: str, staged: bool, repo_root: Path, revision: str | None = None) -> str:
    """Return raw unified diff text for ``path``.

    ``staged`` compares the index against HEAD; otherwise the worktree against
    the index. With ``revision`` the diff introduced by that commit is returned.
    """
    return run_git(_diff_args(path, staged, revision), repo_root)


def _raw_display(path: str, staged: bool, width: int, repo_root: Path, revision: str | None) -> str:
    return fetch_raw_diff(path, staged, repo_root, revision=revision)


def _delta_display(path: str, staged: bool, width: int, repo_root: Path, revision: str | None) -> str:
    raw = fetch_raw_diff(path, staged, repo_root, revision=revision)
    width_text = str(max(1, width))
    env = {**os.environ, "COLUMNS": width_text}
    return run_command(["delta", "--width", width_text, "--paging", "never"], cwd=repo_root, stdin_text=raw, env=env)


def _difftastic_display(path: str, staged: bool, width: int, repo_root: Path, revision: str | None) -> str:
    env = {**os.environ, "GIT_EXTERNAL_DIFF": "difft", "DFT_WIDTH": str(max(1, width))}
    return run_git(_diff_args(path, staged, revision, ext_diff=True), repo_root, env=env)


_DISPLAY_RENDERERS: dict[str, Callable[[str, bool, int, Path, str | None], str]] = {
    TOOL_RAW: _raw_display,
    TOOL_DELTA: _delta_display,
    TOOL_DIFFTASTIC: _difftastic_display,
}


def fetch_display_diff(
    path: str,
    staged: bool,
    tool: str,
    width: int,
    repo_root: Path,
    revision: str | None = None,
    raw_text: str | None = None,
) -> str:
    """Return the display rendering of a diff, falling back to raw text.

    ``raw_text`` lets callers that already hold the raw diff skip a git call
    for the raw tool.
    """
    if tool == TOOL_RAW and raw_text is not None:
        return raw_text
    renderer = _DISPLAY_RENDERERS.get(tool, _raw_display)
    try:
        return renderer(path, staged, width, repo_root, revision)
    except SubprocessFailure as exc:
        logger.warning("%s rendering failed for %s, showing raw diff: %s", tool, path, exc)
        if raw_text is not None:
            return raw_text
        return fetch_raw_diff(path, staged, repo_root, revision=revision)
