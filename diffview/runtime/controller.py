"""Navigation controller: focus/mode state machine over two tree panes and a diff.

Owns both ``TreeSection``s, the current raw/display diff, parsed hunks, and
all cursors. Every git interaction goes through ``ControllerDeps`` so the
state machine can be exercised against an in-memory repository.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import dataclass
from functools import partial

from ..diff_model import (
    DisplayLineInfo,
    FileDiff,
    build_line_infos,
    build_partial_patch,
    build_reverse_partial_patch,
    build_hunk_patch,
    hunk_header_rows,
    parse_diff,
    split_diff_lines,
)
from ..errors import DiffviewError, NotSelectable
from ..git import (
    ChangeRecord,
    WIDTH_SENSITIVE_TOOLS,
    apply_patch,
    fetch_commit_files,
    fetch_display_diff,
    fetch_raw_diff,
    fetch_status,
    stage_file,
    supports_line_ops,
    unstage_file,
)
from ..tree_model import PANE_LABELS, PANE_STAGED, PANE_UNSTAGED, PANES, TreeNode, TreeSection, other_pane
from ..tree_model import split_records_by_pane
from .app_helpers import copy_text_to_clipboard
from .config import DEFAULT_DIFF_PANE_HEIGHT, AppConfig, save_tree_pane_percent
from .keys import build_key_registries

logger = logging.getLogger(__name__)

FOCUS_UNSTAGED = PANE_UNSTAGED
FOCUS_STAGED = PANE_STAGED
FOCUS_DIFF = "diff"
FOCUS_INLINE = "inline"

UNTRACKED_PLACEHOLDER = "(untracked file - press Enter to stage it)"
READ_ONLY_MESSAGE = "Read-only commit view"
TREE_HELP = "j/k:move  l:open  h:back  Enter:stage/unstage  c:copy-path  r:refresh  q:quit"
DIFF_HELP = "j/k:scroll  C-d/C-u:half-page  g/G:top/bottom  n/p:hunk  Enter:hunk  v:line-select  h:back"
INLINE_HELP = "Inline select: j/k move  Space toggle  Enter apply  n/p hunk  v/h exit"
TREE_PANE_MIN_PERCENT = 10.0
TREE_PANE_MAX_PERCENT = 90.0
TREE_PANE_STEP_PERCENT = 5.0


@dataclass(frozen=True)
class ControllerDeps:
    """External collaborators used by ``NavigationController``."""

    fetch_status: Callable[[], list[ChangeRecord]]
    fetch_raw_diff: Callable[[str, bool], str]
    fetch_display_diff: Callable[[str, bool, int, str], str]
    stage_file: Callable[[str], None]
    unstage_file: Callable[[str], None]
    apply_patch: Callable[[str, bool], None]
    copy_text: Callable[[str], bool]
    save_tree_pane_percent: Callable[[float], None]


def git_controller_deps(config: AppConfig) -> ControllerDeps:
    """Bind the git-backed collaborators for ``config.repo_root``."""
    root = config.repo_root
    revision = config.revision

    def raw_diff(path: str, staged: bool) -> str:
        return fetch_raw_diff(path, staged, root, revision=revision)

    def display_diff(path: str, staged: bool, width: int, raw_text: str) -> str:
        return fetch_display_diff(path, staged, config.diff_tool, width, root, revision=revision, raw_text=raw_text)

    def status() -> list[ChangeRecord]:
        if revision is not None:
            return fetch_commit_files(revision, root)
        return fetch_status(root)

    def patch(text: str, reverse: bool) -> None:
        apply_patch(text, root, reverse=reverse)

    return ControllerDeps(
        fetch_status=status,
        fetch_raw_diff=raw_diff,
        fetch_display_diff=display_diff,
        stage_file=partial(stage_file, repo_root=root),
        unstage_file=partial(unstage_file, repo_root=root),
        apply_patch=patch,
        copy_text=copy_text_to_clipboard,
        save_tree_pane_percent=save_tree_pane_percent,
    )


class NavigationController:
    """Single owner of all interactive state; one key is handled at a time."""

    def __init__(self, config: AppConfig, deps: ControllerDeps) -> None:
        self.config = config
        self.deps = deps
        self.should_quit = False
        self.dirty = True
        self.focus = FOCUS_UNSTAGED
        self.sections: dict[str, TreeSection] = {pane: TreeSection() for pane in PANES}
        self.tree_scroll: dict[str, int] = {pane: 0 for pane in PANES}
        self.tree_pane_percent = config.tree_pane_percent

        self.diff_origin: str | None = None
        self.current_file: str | None = None
        self.raw_diff = ""
        self.display_diff = ""
        self.raw_lines: list[str] = []
        self.display_lines: list[str] = []
        self.file_diff = FileDiff()
        self.line_infos: list[DisplayLineInfo] = []
        self.diff_scroll = 0
        self.diff_cursor = 0
        self.hunk_cursor = 0
        self.selected_lines: set[int] = set()
        self.selection_hunk: int | None = None
        self.diff_pane_height = DEFAULT_DIFF_PANE_HEIGHT
        self.diff_pane_width = 80

        self.status_message = ""
        self.error_message = ""
        self._registries = build_key_registries(self)

    # Startup

    def initialize(self) -> None:
        """Load both panes, pick the initial focus, and preview the first file."""
        self.refresh_trees()
        if self.sections[PANE_UNSTAGED].is_empty() and not self.sections[PANE_STAGED].is_empty():
            self.focus = FOCUS_STAGED
        try:
            self.tree_load_preview()
        except DiffviewError as exc:
            self.error_message = f"Error: {exc}"

    # Accessors

    def tree(self, pane: str) -> TreeSection:
        return self.sections[pane]

    def focused_pane(self) -> str | None:
        return self.focus if self.focus in PANES else None

    def is_tree_focused(self, pane: str) -> bool:
        return self.focus == pane

    @property
    def tool(self) -> str:
        return self.config.diff_tool

    @property
    def in_inline_select(self) -> bool:
        return self.focus == FOCUS_INLINE

    def _pane_rows(self, records: list[ChangeRecord]) -> dict[str, list[tuple[str, str, str]]]:
        if self.config.read_only:
            rows = [(record.path, record.index_state, record.worktree_state) for record in records]
            return {PANE_UNSTAGED: rows, PANE_STAGED: []}
        return split_records_by_pane(records)

    # Key handling

    def handle_key(self, key: str) -> bool:
        """Dispatch one key token; returns ``True`` when the session should end.

        Recoverable errors are converted into the transient error message here.
        """
        self.error_message = ""
        self.status_message = ""
        self.dirty = True
        try:
            if key == "r":
                self.refresh_latest_state()
            else:
                registry = self._registries.get(self.focus)
                if registry is not None:
                    registry.dispatch(key)
        except NotSelectable as exc:
            self.error_message = str(exc)
        except DiffviewError as exc:
            logger.debug("action for key %r failed", key, exc_info=True)
            self.error_message = f"Error: {exc}"
        return self.should_quit

    def quit(self) -> None:
        self.should_quit = True

    def show_help(self) -> None:
        self.status_message = TREE_HELP

    def _adjust_tree_pane(self, delta: float) -> None:
        percent = max(TREE_PANE_MIN_PERCENT, min(TREE_PANE_MAX_PERCENT, self.tree_pane_percent + delta))
        if percent == self.tree_pane_percent:
            return
        self.tree_pane_percent = percent
        self.deps.save_tree_pane_percent(percent)

    def narrow_tree_pane(self) -> None:
        self._adjust_tree_pane(-TREE_PANE_STEP_PERCENT)

    def widen_tree_pane(self) -> None:
        self._adjust_tree_pane(TREE_PANE_STEP_PERCENT)

    # Tree building

    def refresh_trees(self) -> None:
        records = self.deps.fetch_status()
        for pane, rows in self._pane_rows(records).items():
            self.sections[pane].replace_nodes(rows)

    def _fix_focus_after_refresh(self, prev_focus: str) -> None:
        """Keep ``prev_focus`` unless its pane emptied and the other pane has rows."""
        self.focus = prev_focus
        if prev_focus in PANES:
            other = other_pane(prev_focus)
            if self.sections[prev_focus].is_empty() and not self.sections[other].is_empty():
                self.focus = other

    # Diff loading

    def load_diff(self, path: str, pane: str) -> None:
        staged = pane == PANE_STAGED
        try:
            raw = self.deps.fetch_raw_diff(path, staged)
            display = self.deps.fetch_display_diff(path, staged, self.diff_pane_width, raw)
        except DiffviewError:
            self.clear_diff()
            raise
        self._set_diff_text(raw, display)
        self.current_file = path
        self.diff_origin = pane
        self.diff_scroll = 0
        self.diff_cursor = 0
        self.hunk_cursor = 0
        self.clear_selection()

    def _set_diff_text(self, raw: str, display: str) -> None:
        self.raw_diff = raw
        self.display_diff = display
        self.raw_lines = split_diff_lines(raw)
        self.display_lines = split_diff_lines(display)
        self.file_diff = parse_diff(raw)
        self.line_infos = build_line_infos(raw)

    def clear_diff(self) -> None:
        self._set_diff_text("", "")
        self.file_diff = FileDiff()
        self.current_file = None
        self.diff_origin = None
        self.diff_scroll = 0
        self.diff_cursor = 0
        self.hunk_cursor = 0
        self.clear_selection()

    def set_untracked_placeholder(self, path: str, pane: str) -> None:
        self._set_diff_text("", UNTRACKED_PLACEHOLDER)
        self.current_file = path
        self.diff_origin = pane
        self.diff_scroll = 0
        self.diff_cursor = 0
        self.hunk_cursor = 0
        self.clear_selection()

    def reload_current_diff(self) -> None:
        """Reload the current file's diff, keeping scroll and cursor in range."""
        if self.current_file is None or self.diff_origin is None:
            return
        prev_scroll = self.diff_scroll
        prev_cursor = self.diff_cursor
        prev_hunk = self.hunk_cursor
        self.load_diff(self.current_file, self.diff_origin)
        last_row = max(0, len(self.raw_lines) - 1)
        self.diff_scroll = min(prev_scroll, max(0, len(self.display_lines) - 1))
        self.diff_cursor = min(prev_cursor, last_row)
        self.hunk_cursor = min(prev_hunk, max(0, len(self.file_diff.hunks) - 1))

    def _is_untracked_in(self, pane: str, path: str) -> bool:
        node = self.sections[pane].find_file(path)
        return node is not None and node.is_untracked

    def _has_no_diff(self) -> bool:
        return not self.file_diff.hunks and not self.raw_diff.strip()

    def refresh_latest_state(self) -> None:
        """Re-read status for both panes and bring the diff pane up to date."""
        prev_focus = self.focus
        current = (self.current_file, self.diff_origin)

        self.refresh_trees()
        self._fix_focus_after_refresh(prev_focus)

        if self.focus in PANES:
            self.tree_load_preview()
        else:
            path, pane = current
            if path is None or pane is None or not any(self.sections[p].contains_file(path) for p in PANES):
                self.clear_diff()
                self._fix_focus_after_refresh(pane or PANE_UNSTAGED)
                self.tree_load_preview()
            elif self._is_untracked_in(pane, path):
                self.set_untracked_placeholder(path, pane)
                if self.focus == FOCUS_INLINE:
                    self.focus = FOCUS_DIFF
            else:
                self.reload_current_diff()
                if self.focus == FOCUS_INLINE:
                    if self.file_diff.hunks:
                        self._sync_hunk_cursor()
                        self._ensure_cursor_visible()
                    else:
                        self.focus = FOCUS_DIFF

        self.status_message = "Refreshed latest state"

    # Tree actions

    def tree_move_down(self) -> None:
        pane = self.focused_pane()
        if pane is None:
            return
        if not self.sections[pane].move(1):
            staged = self.sections[PANE_STAGED]
            if pane == PANE_UNSTAGED and not staged.is_empty():
                self.focus = FOCUS_STAGED
                staged.cursor = 0
        self.tree_load_preview()

    def tree_move_up(self) -> None:
        pane = self.focused_pane()
        if pane is None:
            return
        if not self.sections[pane].move(-1):
            unstaged = self.sections[PANE_UNSTAGED]
            if pane == PANE_STAGED and not unstaged.is_empty():
                self.focus = FOCUS_UNSTAGED
                unstaged.move_to_last()
        self.tree_load_preview()

    def _current_tree_node(self) -> tuple[str, TreeNode] | None:
        pane = self.focused_pane()
        if pane is None:
            return None
        node = self.sections[pane].current_node()
        if node is None:
            return None
        return pane, node

    def tree_open(self) -> None:
        """Expand a directory onto its first child, or open a file's diff."""
        current = self._current_tree_node()
        if current is None:
            return
        pane, node = current
        if node.is_dir:
            self.sections[pane].expand_and_enter()
            self.tree_load_preview()
            return
        if node.is_untracked:
            self.set_untracked_placeholder(node.path, pane)
        else:
            self.load_diff(node.path, pane)
        self.focus = FOCUS_DIFF

    def tree_collapse(self) -> None:
        """Fold a directory in place, or fold a file's parent and move onto it."""
        current = self._current_tree_node()
        if current is None:
            return
        pane, node = current
        if node.is_dir:
            self.sections[pane].set_expanded(False)
        else:
            self.sections[pane].fold_parent()

    def tree_commit(self) -> None:
        """Stage (unstaged pane) or unstage (staged pane) the row at the cursor.

        Directories are processed file by file; a failing file does not stop
        the rest and only the most recent error is kept.
        """
        current = self._current_tree_node()
        if current is None:
            return
        if self.config.read_only:
            self.error_message = READ_ONLY_MESSAGE
            return
        pane, node = current
        action = self.deps.stage_file if pane == PANE_UNSTAGED else self.deps.unstage_file
        verb = "Staged" if pane == PANE_UNSTAGED else "Unstaged"

        if node.is_dir:
            for path in self.sections[pane].files_under_dir(node.path):
                try:
                    action(path)
                except DiffviewError as exc:
                    logger.debug("batch %s of %s failed", verb.lower(), path, exc_info=True)
                    self.error_message = f"Error: {exc}"
            self.status_message = f"{verb} directory: {node.path}"
        else:
            action(node.path)
            self.status_message = f"{verb}: {node.path}"

        self.refresh_after_tree_op()

    def refresh_after_tree_op(self) -> None:
        prev_focus = self.focus
        self.refresh_trees()
        self._fix_focus_after_refresh(prev_focus)
        self.tree_load_preview()

    def tree_copy_path(self) -> None:
        current = self._current_tree_node()
        if current is None:
            return
        _pane, node = current
        if self.deps.copy_text(node.path):
            self.status_message = f"Copied path: {node.path}"
        else:
            self.error_message = "Clipboard error: no clipboard command succeeded"

    def tree_load_preview(self) -> None:
        """Show the diff for the focused row; directories keep the last preview."""
        pane = self.focused_pane()
        if pane is None:
            return
        node = self.sections[pane].current_node()
        if node is None:
            self.clear_diff()
            return
        if node.is_dir:
            return
        if node.is_untracked:
            self.set_untracked_placeholder(node.path, pane)
        else:
            self.load_diff(node.path, pane)

    # Diff view actions

    def _half_page(self) -> int:
        return max(1, self.diff_pane_height // 2)

    def _displayed_lines(self) -> list[str]:
        return self.raw_lines if self.focus == FOCUS_INLINE else self.display_lines

    def _display_is_raw(self) -> bool:
        # Only raw display rows map 1:1 onto line infos and hunk headers.
        return self.display_diff == self.raw_diff

    def _sync_hunk_from_scroll(self) -> None:
        if not self._display_is_raw():
            return
        if 0 <= self.diff_scroll < len(self.line_infos):
            hunk_index = self.line_infos[self.diff_scroll].hunk_index
            if hunk_index is not None:
                self.hunk_cursor = hunk_index

    def scroll_by(self, delta: int) -> None:
        last_row = max(0, len(self.display_lines) - 1)
        self.diff_scroll = max(0, min(self.diff_scroll + delta, last_row))
        self._sync_hunk_from_scroll()

    def scroll_down(self) -> None:
        self.scroll_by(1)

    def scroll_up(self) -> None:
        self.scroll_by(-1)

    def scroll_half_page_down(self) -> None:
        self.scroll_by(self._half_page())

    def scroll_half_page_up(self) -> None:
        self.scroll_by(-self._half_page())

    def scroll_to_top(self) -> None:
        self.diff_scroll = 0
        self._sync_hunk_from_scroll()

    def scroll_to_bottom(self) -> None:
        self.diff_scroll = max(0, len(self.display_lines) - 1)
        self._sync_hunk_from_scroll()

    def jump_next_hunk(self) -> None:
        count = len(self.file_diff.hunks)
        if count == 0:
            return
        if self.hunk_cursor + 1 < count:
            self.hunk_cursor += 1
        self.scroll_to_hunk(self.hunk_cursor)

    def jump_prev_hunk(self) -> None:
        if not self.file_diff.hunks:
            return
        if self.hunk_cursor > 0:
            self.hunk_cursor -= 1
        self.scroll_to_hunk(self.hunk_cursor)

    def scroll_to_hunk(self, hunk_index: int) -> None:
        """Scroll (and in inline select, move the cursor) onto a hunk header."""
        rows = hunk_header_rows("\n".join(self._displayed_lines()))
        if not 0 <= hunk_index < len(rows):
            return
        row = rows[hunk_index]
        self.diff_scroll = row
        if self.focus == FOCUS_INLINE:
            self.diff_cursor = row
            self._sync_hunk_cursor()

    def return_to_origin(self) -> None:
        self.clear_selection()
        self.focus = self.diff_origin or FOCUS_UNSTAGED

    def enter_inline_select(self) -> None:
        if not supports_line_ops(self.tool):
            self.error_message = f"Line selection unavailable with {self.tool}"
            return
        if not self.file_diff.hunks:
            self.error_message = "No hunks to select lines from"
            return
        self.focus = FOCUS_INLINE
        self.diff_cursor = min(self.diff_scroll, max(0, len(self.raw_lines) - 1))
        self.diff_scroll = min(self.diff_scroll, self.diff_cursor)
        self.clear_selection()
        self._move_to_next_selectable(self.diff_cursor)
        self._sync_hunk_cursor()
        self.status_message = INLINE_HELP

    def show_diff_help(self) -> None:
        self.status_message = DIFF_HELP

    def apply_current_hunk(self) -> None:
        """Stage or unstage the whole hunk under the hunk cursor."""
        if self.config.read_only:
            self.error_message = READ_ONLY_MESSAGE
            return
        if self.current_file is None or self.diff_origin is None:
            return
        if not 0 <= self.hunk_cursor < len(self.file_diff.hunks):
            self.error_message = "No hunk to apply"
            return
        if not self._display_is_raw():
            self.error_message = f"Hunk staging unavailable with {self.tool}"
            return
        pane = self.diff_origin
        hunk = self.file_diff.hunks[self.hunk_cursor]
        self.deps.apply_patch(build_hunk_patch(self.current_file, hunk), pane == PANE_STAGED)
        verb = "Unstaged" if pane == PANE_STAGED else "Staged"
        self.status_message = f"{verb} hunk {self.hunk_cursor + 1}"
        if self._after_patch_applied(pane):
            self.scroll_to_hunk(self.hunk_cursor)

    # Inline select actions

    def _sync_hunk_cursor(self) -> None:
        if 0 <= self.diff_cursor < len(self.line_infos):
            hunk_index = self.line_infos[self.diff_cursor].hunk_index
            if hunk_index is not None:
                self.hunk_cursor = hunk_index
                if self.selection_hunk is not None and hunk_index != self.selection_hunk:
                    self.clear_selection()

    def _ensure_cursor_visible(self) -> None:
        height = max(1, self.diff_pane_height)
        if self.diff_cursor < self.diff_scroll:
            self.diff_scroll = self.diff_cursor
        elif self.diff_cursor >= self.diff_scroll + height:
            self.diff_scroll = self.diff_cursor + 1 - height

    def move_cursor(self, delta: int) -> None:
        last_row = max(0, len(self.raw_lines) - 1)
        self.diff_cursor = max(0, min(self.diff_cursor + delta, last_row))
        self._sync_hunk_cursor()
        self._ensure_cursor_visible()

    def cursor_down(self) -> None:
        self.move_cursor(1)

    def cursor_up(self) -> None:
        self.move_cursor(-1)

    def cursor_half_page_down(self) -> None:
        self.move_cursor(self._half_page())

    def cursor_half_page_up(self) -> None:
        self.move_cursor(-self._half_page())

    def exit_inline_select(self) -> None:
        self.clear_selection()
        self.focus = FOCUS_DIFF
        self.diff_scroll = min(self.diff_scroll, max(0, len(self.display_lines) - 1))

    def clear_selection(self) -> None:
        self.selected_lines = set()
        self.selection_hunk = None

    def toggle_line_selection(self) -> None:
        """Add or remove the cursor line from the multi-line selection."""
        if not 0 <= self.diff_cursor < len(self.line_infos):
            return
        info = self.line_infos[self.diff_cursor]
        if not info.is_selectable or info.line_in_hunk is None:
            raise NotSelectable("Only +/- lines can be selected")
        if self.selection_hunk != info.hunk_index:
            self.selected_lines = set()
            self.selection_hunk = info.hunk_index
        if info.line_in_hunk in self.selected_lines:
            self.selected_lines.discard(info.line_in_hunk)
        else:
            self.selected_lines.add(info.line_in_hunk)
        if not self.selected_lines:
            self.selection_hunk = None

    def apply_selection(self) -> None:
        """Stage or unstage the selected lines, or the cursor line if none."""
        if not 0 <= self.diff_cursor < len(self.line_infos):
            return
        if self.selected_lines and self.selection_hunk is not None:
            hunk_index = self.selection_hunk
            selected = set(self.selected_lines)
        else:
            info = self.line_infos[self.diff_cursor]
            if not info.is_selectable or info.hunk_index is None or info.line_in_hunk is None:
                raise NotSelectable("Only +/- lines can be applied")
            hunk_index = info.hunk_index
            selected = {info.line_in_hunk}
        if self.config.read_only:
            self.error_message = READ_ONLY_MESSAGE
            return
        if self.current_file is None or self.diff_origin is None:
            return
        if not 0 <= hunk_index < len(self.file_diff.hunks):
            return

        pane = self.diff_origin
        hunk = self.file_diff.hunks[hunk_index]
        if pane == PANE_UNSTAGED:
            patch = build_partial_patch(self.current_file, hunk, selected)
        else:
            patch = build_reverse_partial_patch(self.current_file, hunk, selected)
        self.deps.apply_patch(patch, False)

        verb = "Unstaged" if pane == PANE_STAGED else "Staged"
        noun = "line" if len(selected) == 1 else "lines"
        self.status_message = f"{verb} {len(selected)} {noun}"
        self.clear_selection()
        prev_cursor = self.diff_cursor
        if self._after_patch_applied(pane):
            self._move_to_next_selectable(prev_cursor)
            self._sync_hunk_cursor()

    def _after_patch_applied(self, pane: str) -> bool:
        """Refresh trees and diff; returns ``False`` once no diff is left.

        With nothing left to show, focus falls back to the origin pane (or the
        other pane if the origin emptied) and the tree row there is previewed.
        """
        self.refresh_trees()
        self.reload_current_diff()
        if not self._has_no_diff():
            return True
        self.clear_diff()
        self._fix_focus_after_refresh(pane)
        self.tree_load_preview()
        return False

    def _move_to_next_selectable(self, start: int) -> None:
        """Put the cursor on the first selectable row at/after ``start``, else before it."""
        count = len(self.line_infos)
        for row in range(start, count):
            if self.line_infos[row].is_selectable:
                self.diff_cursor = row
                self._ensure_cursor_visible()
                return
        for row in range(min(start, count) - 1, -1, -1):
            if self.line_infos[row].is_selectable:
                self.diff_cursor = row
                self._ensure_cursor_visible()
                return
        self.diff_cursor = min(start, max(0, count - 1))
        self._ensure_cursor_visible()

    # Viewport

    def update_viewport(self, width: int, height: int) -> None:
        """Record diff-pane size; re-render width-sensitive diffs on width change."""
        width = max(1, width)
        height = max(1, height)
        width_changed = width != self.diff_pane_width
        if height != self.diff_pane_height:
            self.diff_pane_height = height
            self.dirty = True
            if self.focus == FOCUS_INLINE:
                self._ensure_cursor_visible()
        if not width_changed:
            return
        self.diff_pane_width = width
        self.dirty = True
        if self.tool in WIDTH_SENSITIVE_TOOLS:
            self.reload_display_for_width()

    def reload_display_for_width(self) -> None:
        if self.current_file is None or self.diff_origin is None or not self.raw_diff:
            return
        try:
            display = self.deps.fetch_display_diff(
                self.current_file,
                self.diff_origin == PANE_STAGED,
                self.diff_pane_width,
                self.raw_diff,
            )
        except DiffviewError as exc:
            self.error_message = f"Error: {exc}"
            return
        self.display_diff = display
        self.display_lines = split_diff_lines(display)
        self.diff_scroll = min(self.diff_scroll, max(0, len(self._displayed_lines()) - 1))

    # Presentation helpers

    def pane_title(self, pane: str) -> str:
        section = self.sections[pane]
        label = "Commit" if self.config.read_only and pane == PANE_UNSTAGED else PANE_LABELS[pane]
        if section.is_empty():
            return f"{label} (no changes)"
        return f"{label} ({section.cursor + 1}/{len(section.visible)})"

    def diff_title(self) -> str:
        if self.current_file is None:
            return "Diff"
        if self.file_diff.is_binary:
            return f"{self.current_file} [binary]"
        if self.file_diff.hunks:
            return f"{self.current_file} (hunk {self.hunk_cursor + 1}/{len(self.file_diff.hunks)})"
        return self.current_file
