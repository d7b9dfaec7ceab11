"""Screen geometry for the two-column layout.

The left column stacks the Unstaged and Staged panes; the right column holds
the diff. The last terminal row is the status bar.
"""

from __future__ import annotations

from dataclasses import dataclass

STATUS_ROWS = 1
TITLE_ROWS = 1
DIVIDER_WIDTH = 1


@dataclass(frozen=True)
class ScreenLayout:
    columns: int
    rows: int
    left_width: int
    right_width: int
    content_rows: int
    unstaged_rows: int
    staged_rows: int
    diff_rows: int


def clamp_left_width(total_width: int, desired_left: int) -> int:
    max_possible = max(1, total_width - 2)
    min_left = max(12, min(20, total_width - 12))
    max_left = max(min_left, total_width - 12)
    max_left = min(max_left, max_possible)
    min_left = min(min_left, max_left)
    return max(min_left, min(desired_left, max_left))


def compute_layout(columns: int, rows: int, tree_pane_percent: float) -> ScreenLayout:
    """Split a ``columns`` x ``rows`` terminal into pane rectangles.

    Each pane gives its first row to a title; pane bodies may be zero rows
    tall on very small terminals, the diff body never is.
    """
    columns = max(3, columns)
    content_rows = max(2 * TITLE_ROWS, rows - STATUS_ROWS)
    left_width = clamp_left_width(columns, int(columns * tree_pane_percent / 100))
    right_width = max(1, columns - left_width - DIVIDER_WIDTH)
    unstaged_total = content_rows // 2
    staged_total = content_rows - unstaged_total
    return ScreenLayout(
        columns=columns,
        rows=rows,
        left_width=left_width,
        right_width=right_width,
        content_rows=content_rows,
        unstaged_rows=max(0, unstaged_total - TITLE_ROWS),
        staged_rows=max(0, staged_total - TITLE_ROWS),
        diff_rows=max(1, content_rows - TITLE_ROWS),
    )


def window_start(cursor: int, count: int, rows: int, previous: int) -> int:
    """Return the first visible row so ``cursor`` stays inside a ``rows`` window."""
    if rows <= 0 or count <= 0:
        return 0
    start = previous
    if cursor < start:
        start = cursor
    elif cursor >= start + rows:
        start = cursor - rows + 1
    return max(0, min(start, max(0, count - rows)))
