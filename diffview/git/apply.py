"""Moving changes between the worktree and the index.

File-level operations use ``git add`` / ``git restore --staged``. Hunk and
line patches are synthesized by ``diffview.diff_model`` and piped into
``git apply --cached``, which applies atomically or not at all.
"""

from __future__ import annotations

from pathlib import Path

from ..diff_model import check_patch_header
from ..errors import PatchRejected
from .runner import run_git


def stage_file(path: str, repo_root: Path) -> None:
    run_git(["add", "--", path], repo_root)


def unstage_file(path: str, repo_root: Path) -> None:
    """Remove ``path`` from the index, leaving the worktree copy untouched."""
    run_git(["restore", "--staged", "--", path], repo_root)


def apply_patch(patch: str, repo_root: Path, reverse: bool = False) -> None:
    """Apply ``patch`` to the index; raises ``PatchRejected`` on refusal."""
    check_patch_header(patch)
    args = ["apply", "--cached"]
    if reverse:
        args.append("--reverse")
    args.append("-")
    run_git(args, repo_root, stdin_text=patch, failure_type=PatchRejected)
