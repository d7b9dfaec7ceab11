"""Synchronous git subprocess invocation.

Every call blocks until git exits. Nonzero exits become ``SubprocessFailure``
carrying git's stderr; nothing is retried.
"""

from __future__ import annotations

import logging
import subprocess
from collections.abc import Mapping, Sequence
from pathlib import Path

from ..errors import SourceUnavailable, SubprocessFailure

logger = logging.getLogger(__name__)


def run_command(
    args: Sequence[str],
    cwd: Path | None = None,
    stdin_text: str | None = None,
    env: Mapping[str, str] | None = None,
    failure_type: type[SubprocessFailure] = SubprocessFailure,
) -> str:
    """Run ``args`` and return stdout, raising ``failure_type`` on nonzero exit.

    Streams are decoded without newline translation. Undecodable bytes map to
    surrogates and are re-encoded unchanged when passed back as ``stdin_text``.
    """
    logger.debug("running %s (cwd=%s)", " ".join(args), cwd)
    try:
        proc = subprocess.run(
            list(args),
            cwd=None if cwd is None else str(cwd),
            input=None if stdin_text is None else stdin_text.encode("utf-8", "surrogateescape"),
            stdout=subprocess.PIPE,
            stderr=subprocess.PIPE,
            env=None if env is None else dict(env),
            check=False,
        )
    except OSError as exc:
        logger.warning("could not start %s: %s", args[0], exc)
        raise failure_type(args, None, str(exc)) from exc
    if proc.returncode != 0:
        stderr = proc.stderr.decode("utf-8", "replace")
        logger.warning("%s exited %d: %s", " ".join(args), proc.returncode, stderr.strip())
        raise failure_type(args, proc.returncode, stderr)
    return proc.stdout.decode("utf-8", "surrogateescape")


def run_git(
    args: Sequence[str],
    repo_root: Path,
    stdin_text: str | None = None,
    env: Mapping[str, str] | None = None,
    failure_type: type[SubprocessFailure] = SubprocessFailure,
) -> str:
    return run_command(["git", *args], cwd=repo_root, stdin_text=stdin_text, env=env, failure_type=failure_type)


def resolve_repo_root(path: Path) -> Path:
    """Return the toplevel of the work tree containing ``path``.

    Raises ``SourceUnavailable`` when ``path`` is not inside a git work tree.
    """
    start = path if path.is_dir() else path.parent
    try:
        output = run_command(["git", "rev-parse", "--show-toplevel"], cwd=start)
    except SubprocessFailure as exc:
        raise SourceUnavailable(
            f"Not in a git repository: {path}. Run diffview from inside a git work tree."
        ) from exc
    toplevel = output.strip()
    if not toplevel:
        raise SourceUnavailable(f"Not in a git repository: {path}")
    return Path(toplevel)


def resolve_commit(revision: str, repo_root: Path) -> str:
    """Resolve ``revision`` to a full commit id."""
    return run_git(["rev-parse", "--verify", f"{revision}^{{commit}}"], repo_root).strip()
