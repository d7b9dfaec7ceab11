"""Frame composition for the split tree/diff terminal view.

``render_screen`` reads controller state and returns one fully composed ANSI
frame; writing it to the terminal is the caller's job. The only state touched
here is the per-pane tree scroll offset.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from ..ansi import fit_ansi_line
from ..diff_model import split_diff_lines
from ..highlight import colorize_diff_lines, diff_display_rows
from ..tree_model import PANE_STAGED, PANE_UNSTAGED, TreeNode
from ..ui_theme import UITheme, glyph_color, resolve_theme
from .layout import ScreenLayout, clamp_left_width, compute_layout, window_start

if TYPE_CHECKING:
    from ..runtime.controller import NavigationController

DIVIDER = "│"
EMPTY_DIFF_TEXT = "(no file selected)"
_COLOR_CACHE: dict[tuple[str, str], list[str]] = {}


def selected_with_ansi(text: str) -> str:
    """Apply selection styling without discarding existing ANSI colors."""
    if not text:
        return text

    # Keep reverse video active even when the text contains internal resets.
    return "\033[7m" + text.replace("\033[0m", "\033[0;7m") + "\033[0m"


def build_status_line(left_text: str, width: int, right_text: str = "│ ? Help") -> str:
    usable = max(1, width - 1)
    if usable <= len(right_text):
        return right_text[-usable:]
    left_limit = max(0, usable - len(right_text) - 1)
    left = left_text[:left_limit]
    gap = " " * (usable - len(left) - len(right_text))
    return f"{left}{gap}{right_text}"


def format_tree_row(node: TreeNode, pane: str, theme: UITheme) -> str:
    indent = "  " * node.depth
    reset = theme.reset
    if node.is_dir:
        marker = "▾ " if node.expanded else "▸ "
        return f"{indent}{theme.tree_marker}{marker}{reset}{theme.tree_dir}{node.name}/{reset}"
    glyph = node.status_for(pane)
    if node.is_untracked:
        glyph = "?"
    name_color = theme.tree_file
    if node.is_unmerged:
        color = theme.glyph_unmerged
        name_color = theme.glyph_unmerged
    else:
        color = glyph_color(theme, glyph)
    glyph_text = f"{color}{glyph}{reset}" if color else glyph
    return f"{indent}{glyph_text} {name_color}{node.name}{reset}"


def _tree_pane_rows(
    controller: NavigationController,
    pane: str,
    body_rows: int,
    width: int,
    theme: UITheme,
) -> list[str]:
    section = controller.tree(pane)
    focused = controller.is_tree_focused(pane)
    title_color = theme.title_active if focused else theme.title_inactive
    rows = [fit_ansi_line(f"{title_color}{controller.pane_title(pane)}{theme.reset}", width)]
    nodes = section.visible_nodes()
    start = window_start(section.cursor, len(nodes), body_rows, controller.tree_scroll.get(pane, 0))
    controller.tree_scroll[pane] = start
    for offset in range(body_rows):
        idx = start + offset
        if idx >= len(nodes):
            rows.append(" " * width)
            continue
        text = fit_ansi_line(format_tree_row(nodes[idx], pane, theme), width)
        if focused and idx == section.cursor:
            text = selected_with_ansi(text)
        rows.append(text)
    return rows


def _colorized(text: str, style: str) -> list[str]:
    key = (style, text)
    cached = _COLOR_CACHE.get(key)
    if cached is None:
        _COLOR_CACHE.clear()
        cached = colorize_diff_lines(text, style)
        _COLOR_CACHE[key] = cached
    return cached


def _source_rows(controller: NavigationController) -> list[str]:
    """Return the rows the diff pane shows, colored where the text is raw."""
    inline = controller.in_inline_select
    text = controller.raw_diff if inline else controller.display_diff
    is_raw = inline or controller.display_diff == controller.raw_diff
    if not is_raw:
        return split_diff_lines(text)
    if controller.config.no_color:
        return diff_display_rows(text)
    return _colorized(text, controller.config.style)


def _diff_pane_rows(controller: NavigationController, layout: ScreenLayout, theme: UITheme) -> list[str]:
    width = layout.right_width
    focused = controller.focus in {"diff", "inline"}
    title_color = theme.title_active if focused else theme.title_inactive
    rows = [fit_ansi_line(f"{title_color}{controller.diff_title()}{theme.reset}", width)]

    source = _source_rows(controller)
    if controller.current_file is None and not source:
        source = [EMPTY_DIFF_TEXT]
    inline = controller.in_inline_select
    selected_rows: set[int] = set()
    if inline and controller.selection_hunk is not None:
        for row, info in enumerate(controller.line_infos):
            if info.hunk_index == controller.selection_hunk and info.line_in_hunk in controller.selected_lines:
                selected_rows.add(row)

    body_width = width - 1 if inline else width
    for offset in range(layout.diff_rows):
        idx = controller.diff_scroll + offset
        if idx >= len(source):
            rows.append(" " * width)
            continue
        text = fit_ansi_line(source[idx], body_width)
        if inline:
            mark = f"{theme.selection_mark}*{theme.reset}" if idx in selected_rows else " "
            if idx == controller.diff_cursor:
                text = selected_with_ansi(text)
            text = f"{mark}{text}"
        rows.append(text)
    return rows


def _status_row(controller: NavigationController, width: int, theme: UITheme) -> str:
    if controller.error_message:
        return fit_ansi_line(f"{theme.error_message}{controller.error_message}{theme.reset}", max(1, width - 1))
    if controller.status_message:
        return fit_ansi_line(f"{theme.status_message}{controller.status_message}{theme.reset}", max(1, width - 1))
    mode = "commit" if controller.config.read_only else controller.focus
    left = f" {mode}  {controller.config.repo_root.name}  [{controller.tool}]"
    return f"{theme.reverse}{build_status_line(left, width)}{theme.reset}"


def render_screen(controller: NavigationController, columns: int, rows: int) -> str:
    """Compose the full frame for the current controller state."""
    theme = resolve_theme(no_color=controller.config.no_color)
    layout = compute_layout(columns, rows, controller.tree_pane_percent)
    left = _tree_pane_rows(controller, PANE_UNSTAGED, layout.unstaged_rows, layout.left_width, theme)
    left += _tree_pane_rows(controller, PANE_STAGED, layout.staged_rows, layout.left_width, theme)
    right = _diff_pane_rows(controller, layout, theme)
    divider = f"{theme.divider}{DIVIDER}{theme.reset}"

    out: list[str] = ["\033[H\033[J"]
    for row in range(layout.content_rows):
        left_text = left[row] if row < len(left) else " " * layout.left_width
        right_text = right[row] if row < len(right) else ""
        out.append(left_text)
        out.append(divider)
        out.append(right_text)
        out.append("\033[0m\r\n")
    out.append(_status_row(controller, layout.columns, theme))
    return "".join(out)


__all__ = [
    "ScreenLayout",
    "build_status_line",
    "clamp_left_width",
    "compute_layout",
    "format_tree_row",
    "render_screen",
    "selected_with_ansi",
    "window_start",
]
