"""Per-pane tree state: node arena, visible-row index, and cursor.

``visible`` holds indices into ``all_nodes`` for rows whose ancestor
directories are all expanded. Every mutation ends with ``rebuild_visible``
followed by ``clamp_cursor``.
"""

from __future__ import annotations

from collections.abc import Iterable

from .build import FileRecord, build_section_nodes, parent_path
from .types import TreeNode


class TreeSection:
    """Hierarchical change list for one pane, stored as a flat ordered arena."""

    def __init__(self, nodes: Iterable[TreeNode] = ()) -> None:
        self.all_nodes: list[TreeNode] = list(nodes)
        self.visible: list[int] = []
        self.cursor = 0
        self.rebuild_visible()
        self.clamp_cursor()

    def replace_nodes(self, files: Iterable[FileRecord]) -> None:
        """Rebuild nodes from fresh status rows, carrying directory fold state."""
        self.all_nodes = build_section_nodes(self.all_nodes, files)
        self.rebuild_visible()
        self.clamp_cursor()

    def current_node(self) -> TreeNode | None:
        if 0 <= self.cursor < len(self.visible):
            return self.all_nodes[self.visible[self.cursor]]
        return None

    def visible_nodes(self) -> list[TreeNode]:
        return [self.all_nodes[idx] for idx in self.visible]

    def is_empty(self) -> bool:
        return not self.visible

    def rebuild_visible(self) -> None:
        """Recompute ``visible`` from directory ``expanded`` flags."""
        expanded = {node.path: node.expanded for node in self.all_nodes if node.is_dir}
        visible: list[int] = []
        for idx, node in enumerate(self.all_nodes):
            ancestor = parent_path(node.path)
            hidden = False
            while ancestor is not None:
                if not expanded.get(ancestor, True):
                    hidden = True
                    break
                ancestor = parent_path(ancestor)
            if not hidden:
                visible.append(idx)
        self.visible = visible

    def clamp_cursor(self) -> None:
        if not self.visible:
            self.cursor = 0
        elif self.cursor >= len(self.visible):
            self.cursor = len(self.visible) - 1
        elif self.cursor < 0:
            self.cursor = 0

    def move(self, delta: int) -> bool:
        """Move the cursor by ``delta`` rows if the target row exists."""
        target = self.cursor + delta
        if not 0 <= target < len(self.visible):
            return False
        self.cursor = target
        return True

    def move_to_last(self) -> None:
        self.cursor = max(0, len(self.visible) - 1)

    def set_expanded(self, expanded: bool) -> None:
        """Force the fold state of the directory at the cursor."""
        node = self.current_node()
        if node is None or not node.is_dir:
            return
        node.expanded = expanded
        self.rebuild_visible()
        self.clamp_cursor()

    def expand_and_enter(self) -> None:
        """Expand the directory at the cursor and step onto its first child."""
        node = self.current_node()
        if node is None or not node.is_dir:
            return
        row = self.cursor
        node.expanded = True
        self.rebuild_visible()
        self.clamp_cursor()
        if row + 1 < len(self.visible):
            self.cursor = row + 1

    def fold_parent(self) -> None:
        """Collapse the nearest ancestor directory and put the cursor on it."""
        node = self.current_node()
        if node is None:
            return
        parent = parent_path(node.path)
        if parent is None:
            return
        for idx, candidate in enumerate(self.all_nodes):
            if candidate.is_dir and candidate.path == parent:
                candidate.expanded = False
                self.rebuild_visible()
                if idx in self.visible:
                    self.cursor = self.visible.index(idx)
                self.clamp_cursor()
                return

    def files_under_dir(self, dir_path: str) -> list[str]:
        """Return every file path below ``dir_path`` in tree order."""
        prefix = dir_path.rstrip("/") + "/"
        return [node.path for node in self.all_nodes if not node.is_dir and node.path.startswith(prefix)]

    def contains_file(self, path: str) -> bool:
        return any(not node.is_dir and node.path == path for node in self.all_nodes)

    def find_file(self, path: str) -> TreeNode | None:
        for node in self.all_nodes:
            if not node.is_dir and node.path == path:
                return node
        return None
