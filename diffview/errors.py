"""Error taxonomy shared by git collaborators and the navigation controller.

Recoverable errors are caught at the key-action boundary and shown in the
status line; only ``SourceUnavailable`` is fatal at startup.
"""

from __future__ import annotations

from collections.abc import Sequence


class DiffviewError(Exception):
    """Base class for every error diffview reports to the user."""


class SourceUnavailable(DiffviewError):
    """The target directory is not inside a usable git repository."""


class SubprocessFailure(DiffviewError):
    """An external command exited nonzero or could not be started."""

    def __init__(self, args: Sequence[str], returncode: int | None, stderr: str = "") -> None:
        self.command = tuple(args)
        self.returncode = returncode
        self.stderr = stderr.strip()
        detail = self.stderr or f"exit status {returncode}"
        super().__init__(f"{' '.join(self.command)} failed: {detail}")


class PatchRejected(SubprocessFailure):
    """``git apply`` refused a synthesized patch; the index is unchanged."""


class NotSelectable(DiffviewError):
    """A line-level action targeted a line that is not ``+`` or ``-``."""
