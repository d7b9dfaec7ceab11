"""Change-status records from ``git status`` and ``git show --name-status``.

Parsing is forgiving: short or malformed rows are skipped, never raised on.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path

from .runner import run_git

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ChangeRecord:
    """One changed path with its index (X) and worktree (Y) status codes."""

    path: str
    index_state: str
    worktree_state: str

    @property
    def is_untracked(self) -> bool:
        return self.index_state == "?" and self.worktree_state == "?"

    @property
    def display_status(self) -> str:
        return f"{self.index_state}{self.worktree_state}"


def _unquote_path(path: str) -> str:
    """Strip the C-style quoting git applies to unusual file names."""
    if len(path) >= 2 and path.startswith('"') and path.endswith('"'):
        body = path[1:-1]
        try:
            raw = body.encode("utf-8").decode("unicode_escape")
            return raw.encode("latin-1").decode("utf-8", errors="replace")
        except UnicodeError:
            return body
    return path


def _parse_status_z(output: str) -> list[ChangeRecord]:
    records: list[ChangeRecord] = []
    tokens = output.split("\0")
    index = 0
    while index < len(tokens):
        token = tokens[index]
        index += 1
        if len(token) < 4 or token[2] != " ":
            continue
        status = token[:2]
        records.append(ChangeRecord(token[3:], status[0], status[1]))
        # Renames and copies carry the source path as an extra token.
        if "R" in status or "C" in status:
            index += 1
    return records


def _parse_status_lines(output: str) -> list[ChangeRecord]:
    records: list[ChangeRecord] = []
    for line in output.splitlines():
        if len(line) < 4:
            if line.strip():
                logger.debug("skipping short status row %r", line)
            continue
        rest = line[3:]
        if " -> " in rest:
            rest = rest.rsplit(" -> ", 1)[1]
        path = _unquote_path(rest)
        if path:
            records.append(ChangeRecord(path, line[0], line[1]))
    return records


def parse_status(output: str) -> list[ChangeRecord]:
    """Parse ``git status --porcelain=v1`` output, NUL- or newline-separated.

    Renamed entries keep the destination path; ``!!`` (ignored) rows are dropped.
    """
    records = _parse_status_z(output) if "\0" in output else _parse_status_lines(output)
    return [record for record in records if record.display_status != "!!"]


def parse_commit_name_status(output: str) -> list[ChangeRecord]:
    """Parse ``git show --name-status`` rows into records.

    Both status columns carry the commit's change letter; renames and copies
    (``R100<TAB>old<TAB>new``) keep the new path.
    """
    records: list[ChangeRecord] = []
    for line in output.splitlines():
        if not line.strip():
            continue
        parts = line.split("\t")
        if len(parts) < 2:
            logger.debug("skipping name-status row %r", line)
            continue
        status = parts[0][:1] or " "
        path = parts[2] if status in {"R", "C"} and len(parts) > 2 else parts[1]
        if path:
            records.append(ChangeRecord(path, status, status))
    return records


def fetch_status(repo_root: Path) -> list[ChangeRecord]:
    output = run_git(["status", "--porcelain=v1", "-z", "--untracked-files=all"], repo_root)
    return parse_status(output)


def fetch_commit_files(revision: str, repo_root: Path) -> list[ChangeRecord]:
    output = run_git(["show", "--format=", "--name-status", "--find-renames", revision], repo_root)
    return parse_commit_name_status(output)
