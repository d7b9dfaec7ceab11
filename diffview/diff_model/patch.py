"""Patch synthesis for whole hunks and arbitrary line subsets.

Every builder emits ``--- a/`` / ``+++ b/`` headers, a four-field ``@@``
header whose counts match the emitted body, and newline-terminated body rows.
Forward and reverse partial builders are deliberately separate functions:
their treatment of unselected lines is not symmetric.
"""

from __future__ import annotations

from collections.abc import Iterable

from ..errors import PatchRejected
from .parse import parse_hunk_header, split_diff_lines
from .types import LINE_ADDED, LINE_CONTEXT, LINE_REMOVED, Hunk, format_hunk_header


def _assemble(file_path: str, header: str, body: Iterable[str]) -> str:
    rows = [f"--- a/{file_path}", f"+++ b/{file_path}", header, *body]
    return "".join(f"{row}\n" for row in rows)


def build_hunk_patch(file_path: str, hunk: Hunk) -> str:
    """Return ``hunk`` verbatim under its original header numbers."""
    return _assemble(file_path, hunk.header_line(), (line.render() for line in hunk.lines))


def build_partial_patch(file_path: str, hunk: Hunk, selected: set[int]) -> str:
    """Build a forward patch recording only ``selected`` lines of ``hunk``.

    Unselected added lines are dropped; unselected removed lines become
    context because they stay present in the index. Starts are copied from
    the source hunk, counts recomputed from the body.
    """
    body: list[str] = []
    old_count = 0
    new_count = 0
    for index, line in enumerate(hunk.lines):
        if line.kind == LINE_CONTEXT:
            body.append(f" {line.text}")
            old_count += 1
            new_count += 1
        elif line.kind == LINE_ADDED:
            if index in selected:
                body.append(f"+{line.text}")
                new_count += 1
        elif line.kind == LINE_REMOVED:
            if index in selected:
                body.append(f"-{line.text}")
                old_count += 1
            else:
                body.append(f" {line.text}")
                old_count += 1
                new_count += 1
    header = format_hunk_header(hunk.old_start, old_count, hunk.new_start, new_count)
    return _assemble(file_path, header, body)


def build_reverse_partial_patch(file_path: str, hunk: Hunk, selected: set[int]) -> str:
    """Build a patch un-recording ``selected`` lines of an index hunk.

    ``hunk`` comes from ``git diff --cached``. The result applies to the
    current index (no ``--reverse``): selected added lines are deleted,
    selected removed lines restored, unselected added lines kept as context
    and unselected removed lines left out. Both starts anchor on
    ``hunk.new_start`` since the index is the reference frame.
    """
    body: list[str] = []
    old_count = 0
    new_count = 0
    for index, line in enumerate(hunk.lines):
        if line.kind == LINE_CONTEXT:
            body.append(f" {line.text}")
            old_count += 1
            new_count += 1
        elif line.kind == LINE_ADDED:
            if index in selected:
                body.append(f"-{line.text}")
                old_count += 1
            else:
                body.append(f" {line.text}")
                old_count += 1
                new_count += 1
        elif line.kind == LINE_REMOVED:
            if index in selected:
                body.append(f"+{line.text}")
                new_count += 1
    header = format_hunk_header(hunk.new_start, old_count, hunk.new_start, new_count)
    return _assemble(file_path, header, body)


def count_patch_body(body_lines: Iterable[str]) -> tuple[int, int]:
    """Return ``(old_count, new_count)`` implied by unified-diff body rows."""
    old_count = 0
    new_count = 0
    for row in body_lines:
        marker = row[:1]
        if marker == " ":
            old_count += 1
            new_count += 1
        elif marker == "-":
            old_count += 1
        elif marker == "+":
            new_count += 1
    return old_count, new_count


def check_patch_header(patch: str) -> None:
    """Raise ``PatchRejected`` if the ``@@`` counts disagree with the body.

    Expects the single-hunk layout produced by the builders in this module.
    """
    rows = split_diff_lines(patch)
    header_rows = [idx for idx, row in enumerate(rows) if row.startswith("@@")]
    if len(header_rows) != 1:
        raise PatchRejected(("patch-check",), None, f"expected one hunk header, found {len(header_rows)}")
    header = parse_hunk_header(rows[header_rows[0]])
    if header is None:
        raise PatchRejected(("patch-check",), None, f"malformed hunk header {rows[header_rows[0]]!r}")
    counted = count_patch_body(rows[header_rows[0] + 1:])
    if counted != (header.old_count, header.new_count):
        raise PatchRejected(
            ("patch-check",),
            None,
            f"header counts {header.old_count},{header.new_count} do not match body {counted[0]},{counted[1]}",
        )
