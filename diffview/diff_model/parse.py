"""Unified-diff text parsing.

Turns the raw ``git diff`` output for one file into a ``FileDiff`` and derives
per-row ``DisplayLineInfo`` records used by line selection.
Malformed input never raises: unknown rows are dropped, bad numbers defaulted.
"""

from __future__ import annotations

import logging

from ..ansi import strip_ansi
from .types import LINE_ADDED, LINE_CONTEXT, LINE_REMOVED, DiffLine, DisplayLineInfo, FileDiff, Hunk

logger = logging.getLogger(__name__)

NEW_PATH_PREFIX = "+++ b/"
_BINARY_MARKERS = ("Binary files ", "GIT binary patch")
_BODY_KINDS = {
    "+": LINE_ADDED,
    "-": LINE_REMOVED,
    " ": LINE_CONTEXT,
}


def split_diff_lines(text: str) -> list[str]:
    """Split diff text into rows at ``\\n`` only, as git delimits them.

    Form feeds, carriage returns and Unicode line separators stay inside the
    row text so patches rebuilt from the rows are byte-identical.
    """
    rows = text.split("\n")
    if rows and not rows[-1]:
        rows.pop()
    return rows


def is_binary_diff(diff_text: str) -> bool:
    return any(line.startswith(_BINARY_MARKERS) for line in split_diff_lines(diff_text))


def _parse_int(text: str, default: int) -> int:
    try:
        value = int(text)
    except ValueError:
        logger.debug("unparsable hunk range value %r, using %d", text, default)
        return default
    return value if value >= 0 else default


def parse_range(text: str) -> tuple[int, int]:
    """Parse ``start[,count]``; a missing count means one line."""
    start_text, sep, count_text = text.partition(",")
    start = _parse_int(start_text, 1)
    if not sep:
        return start, 1
    return start, _parse_int(count_text, 0)


def parse_hunk_header(line: str) -> Hunk | None:
    """Build an empty ``Hunk`` from an ``@@ -a,b +c,d @@`` line.

    Returns ``None`` when the header has too few fields to carry both ranges.
    """
    parts = line.split(" ", 4)
    if len(parts) < 3:
        logger.debug("ignoring malformed hunk header %r", line)
        return None
    old_start, old_count = parse_range(parts[1].lstrip("-"))
    new_start, new_count = parse_range(parts[2].lstrip("+"))
    return Hunk(
        old_start=old_start,
        old_count=old_count,
        new_start=new_start,
        new_count=new_count,
        header=line,
    )


def _body_line(line: str) -> DiffLine | None:
    if not line:
        return None
    kind = _BODY_KINDS.get(line[0])
    if kind is None:
        return None
    return DiffLine(kind, line[1:])


def parse_diff(diff_text: str) -> FileDiff:
    """Parse unified diff text for exactly one file.

    Line order inside each hunk is source order. Binary diffs short-circuit
    to ``FileDiff(is_binary=True)`` with no hunks.
    """
    if is_binary_diff(diff_text):
        return FileDiff(is_binary=True)

    result = FileDiff()
    current: Hunk | None = None
    for line in split_diff_lines(diff_text):
        if line.startswith("@@"):
            current = parse_hunk_header(line)
            if current is not None:
                result.hunks.append(current)
            continue
        if current is None:
            if line.startswith(NEW_PATH_PREFIX):
                result.path = line[len(NEW_PATH_PREFIX):]
            continue
        body = _body_line(line)
        if body is not None:
            current.lines.append(body)
    return result


def build_line_infos(raw_text: str) -> list[DisplayLineInfo]:
    """Return one ``DisplayLineInfo`` per line of ``raw_text``.

    ``line_in_hunk`` advances only for rows ``parse_diff`` keeps, so it always
    indexes into the matching ``Hunk.lines``.
    """
    infos: list[DisplayLineInfo] = []
    hunk_index: int | None = None
    hunk_counter = 0
    line_in_hunk = 0
    for line in split_diff_lines(raw_text):
        if line.startswith("@@"):
            if parse_hunk_header(line) is None:
                hunk_index = None
                infos.append(DisplayLineInfo())
                continue
            hunk_index = hunk_counter
            hunk_counter += 1
            line_in_hunk = 0
            infos.append(DisplayLineInfo(hunk_index=hunk_index))
            continue
        if hunk_index is None:
            infos.append(DisplayLineInfo())
            continue
        body = _body_line(line)
        if body is None:
            infos.append(DisplayLineInfo(hunk_index=hunk_index))
            continue
        infos.append(
            DisplayLineInfo(
                hunk_index=hunk_index,
                line_in_hunk=line_in_hunk,
                is_selectable=body.is_change,
            )
        )
        line_in_hunk += 1
    return infos


def hunk_header_rows(text: str) -> list[int]:
    """Return row numbers of ``@@`` lines in ``text``, ignoring color codes."""
    return [row for row, line in enumerate(split_diff_lines(text)) if strip_ansi(line).startswith("@@")]
