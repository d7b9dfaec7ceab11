"""UI theme definitions and selection helpers.

Themes are UI-only ANSI palettes (tree/status/chrome). Diff coloring for raw
text is a separate pygments style setting.
"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class UITheme:
    """Semantic ANSI palette used by renderers."""

    name: str
    divider: str
    reverse: str
    reset: str
    title_active: str
    title_inactive: str
    tree_marker: str
    tree_dir: str
    tree_file: str
    glyph_added: str
    glyph_modified: str
    glyph_deleted: str
    glyph_renamed: str
    glyph_untracked: str
    glyph_unmerged: str
    selection_mark: str
    status_message: str
    error_message: str


DEFAULT_THEME = UITheme(
    name="default",
    divider="\033[2m",
    reverse="\033[7m",
    reset="\033[0m",
    title_active="\033[1;38;5;81m",
    title_inactive="\033[2;38;5;250m",
    tree_marker="\033[38;5;44m",
    tree_dir="\033[1;34m",
    tree_file="\033[38;5;252m",
    glyph_added="\033[38;5;42m",
    glyph_modified="\033[38;5;214m",
    glyph_deleted="\033[38;5;203m",
    glyph_renamed="\033[38;5;141m",
    glyph_untracked="\033[38;5;245m",
    glyph_unmerged="\033[1;38;5;196m",
    selection_mark="\033[1;38;5;229m",
    status_message="\033[33m",
    error_message="\033[31m",
)

PLAIN_THEME = UITheme(
    name="plain",
    divider="",
    reverse="\033[7m",
    reset="\033[0m",
    title_active="",
    title_inactive="",
    tree_marker="",
    tree_dir="",
    tree_file="",
    glyph_added="",
    glyph_modified="",
    glyph_deleted="",
    glyph_renamed="",
    glyph_untracked="",
    glyph_unmerged="",
    selection_mark="",
    status_message="",
    error_message="",
)


def resolve_theme(*, no_color: bool = False) -> UITheme:
    """Return the concrete theme for the requested color mode."""
    return PLAIN_THEME if no_color else DEFAULT_THEME


def glyph_color(theme: UITheme, glyph: str) -> str:
    """Return the ANSI color for a porcelain status letter."""
    if glyph == "A":
        return theme.glyph_added
    if glyph == "M" or glyph == "T":
        return theme.glyph_modified
    if glyph == "D":
        return theme.glyph_deleted
    if glyph == "R" or glyph == "C":
        return theme.glyph_renamed
    if glyph == "?":
        return theme.glyph_untracked
    if glyph == "U":
        return theme.glyph_unmerged
    return ""


__all__ = [
    "UITheme",
    "DEFAULT_THEME",
    "PLAIN_THEME",
    "glyph_color",
    "resolve_theme",
]
