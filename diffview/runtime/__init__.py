"""Public runtime orchestration entry points.

This package groups the interactive bootstrap (``run_app``), the navigation
controller, and the event loop used by tests and composition code.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from .controller import ControllerDeps, NavigationController


def run_app(*args, **kwargs):
    """Lazily import the app entrypoint to avoid heavy bootstrap on import."""
    from .app import run_app as _run_app

    return _run_app(*args, **kwargs)


def run_main_loop(*args, **kwargs):
    """Lazily import loop runner to avoid package-import cycles."""
    from .loop import run_main_loop as _run_main_loop

    return _run_main_loop(*args, **kwargs)


def __getattr__(name: str):
    if name in {"ControllerDeps", "NavigationController"}:
        from . import controller as _controller

        return getattr(_controller, name)
    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")


__all__ = [
    "ControllerDeps",
    "NavigationController",
    "run_app",
    "run_main_loop",
]
