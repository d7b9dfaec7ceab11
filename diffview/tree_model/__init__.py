"""Change-tree model for the two status panes.

Defines ``TreeNode`` and ``TreeSection`` plus the record-to-node builder.
"""

from __future__ import annotations

from .build import build_section_nodes, parent_path, path_components, split_records_by_pane
from .section import TreeSection
from .types import PANE_LABELS, PANE_STAGED, PANE_UNSTAGED, PANES, TreeNode, other_pane

__all__ = [
    "PANE_LABELS",
    "PANE_STAGED",
    "PANE_UNSTAGED",
    "PANES",
    "TreeNode",
    "TreeSection",
    "build_section_nodes",
    "other_pane",
    "parent_path",
    "path_components",
    "split_records_by_pane",
]
