"""Command-line front door for diffview.

Parses CLI options, resolves the repository root, and builds the session
config. Then dispatches into the interactive runtime.
"""

from __future__ import annotations

import argparse
import logging
from pathlib import Path

from .errors import SourceUnavailable, SubprocessFailure
from .git import DIFF_TOOLS, resolve_commit, resolve_repo_root
from .runtime import run_app
from .runtime.config import AppConfig, build_app_config

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


def configure_logging(log_file: Path | None) -> None:
    """Route the ``diffview`` logger to ``log_file``, or silence it.

    The TUI owns the terminal, so nothing is ever logged to stderr.
    """
    package_logger = logging.getLogger("diffview")
    package_logger.propagate = False
    if log_file is None:
        package_logger.addHandler(logging.NullHandler())
        return
    handler = logging.FileHandler(log_file, encoding="utf-8")
    handler.setFormatter(logging.Formatter(LOG_FORMAT))
    package_logger.addHandler(handler)
    package_logger.setLevel(logging.DEBUG)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="diffview",
        description="Review working-tree changes and stage them by file, hunk, or line.",
    )
    parser.add_argument(
        "path",
        nargs="?",
        default=None,
        help="Path inside the repository. Defaults to current directory.",
    )
    parser.add_argument(
        "--tool",
        choices=DIFF_TOOLS,
        default=None,
        help="Diff renderer (default: config file, else raw).",
    )
    parser.add_argument("--commit", metavar="REV", default=None, help="Review one commit read-only.")
    parser.add_argument("--style", default=None, help="Pygments style name for raw diff coloring.")
    parser.add_argument("--no-color", action="store_true", help="Disable color output.")
    parser.add_argument("--log-file", metavar="PATH", type=Path, default=None, help="Write debug log to PATH.")
    return parser


def resolve_config(args: argparse.Namespace) -> AppConfig:
    """Turn parsed arguments into an ``AppConfig``; fatal problems exit."""
    path = Path(args.path) if args.path is not None else Path.cwd()
    if not path.exists():
        raise SystemExit(f"Path not found: {path}")
    try:
        repo_root = resolve_repo_root(path.resolve())
    except SourceUnavailable as exc:
        raise SystemExit(str(exc)) from exc

    revision = None
    if args.commit is not None:
        try:
            revision = resolve_commit(args.commit, repo_root)
        except SubprocessFailure as exc:
            raise SystemExit(f"Unknown commit: {args.commit}") from exc

    return build_app_config(
        repo_root,
        tool_override=args.tool,
        style_override=args.style,
        revision=revision,
        no_color=args.no_color,
    )


def main(argv: list[str] | None = None) -> None:
    """Parse CLI arguments and launch diffview on a repository.

    ``argv`` is primarily for tests; when omitted ``sys.argv`` is used.
    """
    args = build_parser().parse_args(argv)
    configure_logging(args.log_file)
    config = resolve_config(args)
    run_app(config)
