"""Tree-node construction from flat changed-path records.

Directories are derived from path prefixes only. Sorting on keys where a
directory carries a trailing ``/`` places every directory immediately before
its children, so the flat list needs no parent/child links.
"""

from __future__ import annotations

from collections.abc import Iterable, Sequence
from typing import TYPE_CHECKING

from .types import PANE_STAGED, PANE_UNSTAGED, TreeNode

if TYPE_CHECKING:
    from ..git.status import ChangeRecord

FileRecord = tuple[str, str, str]


def split_records_by_pane(records: Iterable[ChangeRecord]) -> dict[str, list[FileRecord]]:
    """Partition status records into per-pane ``(path, index, worktree)`` tuples.

    Unstaged holds anything with a worktree change (untracked included);
    staged holds anything with an index change other than untracked.
    """
    panes: dict[str, list[FileRecord]] = {PANE_UNSTAGED: [], PANE_STAGED: []}
    for record in records:
        row = (record.path, record.index_state, record.worktree_state)
        if record.worktree_state != " ":
            panes[PANE_UNSTAGED].append(row)
        if record.index_state not in {" ", "?"}:
            panes[PANE_STAGED].append(row)
    return panes


def path_components(path: str) -> list[str]:
    return [part for part in path.split("/") if part]


def parent_path(path: str) -> str | None:
    """Return the parent directory path, or ``None`` for top-level paths."""
    head, sep, _tail = path.rstrip("/").rpartition("/")
    return head if sep and head else None


def build_section_nodes(previous: Sequence[TreeNode], files: Iterable[FileRecord]) -> list[TreeNode]:
    """Build ordered nodes for one pane, keeping prior directory fold state.

    New directories start expanded; directories already present in
    ``previous`` keep their ``expanded`` flag (matched by path).
    """
    prev_expanded = {node.path: node.expanded for node in previous if node.is_dir}

    keyed: dict[str, tuple[bool, str, str]] = {}
    for path, index_state, worktree_state in files:
        parts = path_components(path)
        if not parts:
            continue
        for end in range(1, len(parts)):
            keyed.setdefault("/".join(parts[:end]) + "/", (True, " ", " "))
        keyed["/".join(parts)] = (False, index_state, worktree_state)

    nodes: list[TreeNode] = []
    for key in sorted(keyed):
        is_dir, index_state, worktree_state = keyed[key]
        path = key.rstrip("/") if is_dir else key
        parts = path_components(path)
        nodes.append(
            TreeNode(
                path=path,
                name=parts[-1],
                depth=len(parts) - 1,
                is_dir=is_dir,
                expanded=prev_expanded.get(path, True) if is_dir else False,
                index_state=index_state,
                worktree_state=worktree_state,
            )
        )
    return nodes
