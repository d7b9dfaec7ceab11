"""Diff text sanitization and syntax coloring.

Raw unified diffs are colored with the Pygments ``DiffLexer``. Control bytes in
diffed content are neutralized first so previews cannot drive the terminal.
"""

from __future__ import annotations

import logging
import re

from pygments import highlight as pygments_highlight
from pygments.formatters import Terminal256Formatter
from pygments.lexers import DiffLexer
from pygments.styles import get_style_by_name
from pygments.util import ClassNotFound

from .diff_model import split_diff_lines

logger = logging.getLogger(__name__)

DEFAULT_STYLE = "monokai"

_CONTROL_RE = re.compile(r"[\x00-\x08\x0b\x0c\x0e-\x1f\x7f-\x9f]")
_FORMATTERS: dict[str, Terminal256Formatter] = {}
_DIFF_LEXER = DiffLexer(stripnl=False, ensurenl=False)


def sanitize_terminal_text(source: str) -> str:
    """Escape terminal control bytes to avoid side effects (bell, cursor moves, etc.)."""
    if _CONTROL_RE.search(source) is None:
        return source

    out: list[str] = []
    for ch in source:
        code = ord(ch)
        if ch in {"\n", "\r", "\t"}:
            out.append(ch)
            continue
        # C0 controls + DEL + C1 controls.
        if code < 32 or code == 127 or 0x80 <= code <= 0x9F:
            out.append(f"\\x{code:02x}")
            continue
        out.append(ch)
    return "".join(out)


def normalize_style(style: str) -> str:
    try:
        get_style_by_name(style)
    except ClassNotFound:
        logger.debug("unknown pygments style %r, using %s", style, DEFAULT_STYLE)
        return DEFAULT_STYLE
    return style


def _formatter_for_style(style: str) -> Terminal256Formatter:
    formatter = _FORMATTERS.get(style)
    if formatter is None:
        formatter = Terminal256Formatter(style=normalize_style(style))
        _FORMATTERS[style] = formatter
    return formatter


def diff_display_rows(diff_text: str) -> list[str]:
    """Return sanitized rows of ``diff_text`` with carriage returns dropped.

    Row boundaries are exactly those of ``split_diff_lines`` on the raw text.
    """
    return split_diff_lines(sanitize_terminal_text(diff_text).replace("\r", ""))


def colorize_diff_lines(diff_text: str, style: str = DEFAULT_STYLE) -> list[str]:
    """Return colored display rows, one per line of ``diff_text``."""
    plain_rows = diff_display_rows(diff_text)
    if not plain_rows:
        return []
    rendered = pygments_highlight("\n".join(plain_rows) + "\n", _DIFF_LEXER, _formatter_for_style(style))
    colored_rows = split_diff_lines(rendered)
    if len(colored_rows) != len(plain_rows):
        # Row mapping must stay 1:1 with the raw diff for line selection.
        return plain_rows
    return colored_rows
