"""Structured unified-diff datatypes.

A ``FileDiff`` holds ordered ``Hunk``s whose ``lines`` order is fixed at parse
time; that order is the address space used by line selection and patching.
"""

from __future__ import annotations

from dataclasses import dataclass, field

LINE_CONTEXT = "context"
LINE_ADDED = "added"
LINE_REMOVED = "removed"

_MARKERS = {
    LINE_CONTEXT: " ",
    LINE_ADDED: "+",
    LINE_REMOVED: "-",
}


@dataclass(frozen=True)
class DiffLine:
    """One hunk body line without its leading marker character."""

    kind: str
    text: str

    @property
    def marker(self) -> str:
        return _MARKERS[self.kind]

    def render(self) -> str:
        """Return the line as it appears in a unified diff body."""
        return f"{self.marker}{self.text}"

    @property
    def is_change(self) -> bool:
        return self.kind != LINE_CONTEXT


@dataclass
class Hunk:
    old_start: int
    old_count: int
    new_start: int
    new_count: int
    header: str = ""
    lines: list[DiffLine] = field(default_factory=list)

    def header_line(self) -> str:
        return format_hunk_header(self.old_start, self.old_count, self.new_start, self.new_count)


@dataclass
class FileDiff:
    path: str = ""
    is_binary: bool = False
    hunks: list[Hunk] = field(default_factory=list)


@dataclass(frozen=True)
class DisplayLineInfo:
    """Mapping from one displayed diff row back into the parsed hunks."""

    hunk_index: int | None = None
    line_in_hunk: int | None = None
    is_selectable: bool = False


def format_hunk_header(old_start: int, old_count: int, new_start: int, new_count: int) -> str:
    """Format the four-field ``@@`` header git apply expects."""
    return f"@@ -{old_start},{old_count} +{new_start},{new_count} @@"
