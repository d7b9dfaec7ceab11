"""Tree node datatype and pane identifiers."""

from __future__ import annotations

from dataclasses import dataclass

PANE_UNSTAGED = "unstaged"
PANE_STAGED = "staged"
PANES: tuple[str, str] = (PANE_UNSTAGED, PANE_STAGED)

# Porcelain both-added and both-deleted conflicts carry no U.
_UNMERGED_PAIRS = {("A", "A"), ("D", "D")}

PANE_LABELS = {
    PANE_UNSTAGED: "Unstaged",
    PANE_STAGED: "Staged",
}


def other_pane(pane: str) -> str:
    return PANE_STAGED if pane == PANE_UNSTAGED else PANE_UNSTAGED


@dataclass
class TreeNode:
    """One row of a pane: a changed file or a synthesized ancestor directory."""

    path: str
    name: str
    depth: int
    is_dir: bool
    expanded: bool = False
    index_state: str = " "
    worktree_state: str = " "

    @property
    def is_untracked(self) -> bool:
        return self.index_state == "?" and self.worktree_state == "?"

    @property
    def is_unmerged(self) -> bool:
        if self.index_state == "U" or self.worktree_state == "U":
            return True
        return (self.index_state, self.worktree_state) in _UNMERGED_PAIRS

    def status_for(self, pane: str) -> str:
        """Return the status glyph this node shows in ``pane``."""
        if pane == PANE_UNSTAGED:
            return self.worktree_state
        return " " if self.index_state == "?" else self.index_state
