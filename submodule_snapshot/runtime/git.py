"""Git command line implementation of :class:`VersionSource`."""

from __future__ import annotations

import logging
import subprocess
from pathlib import Path
from typing import Callable, Optional, Sequence, Union

from submodule_snapshot.runtime.protocols import GitResult

logger = logging.getLogger("submodule_snapshot.runtime.git")

GitRunner = Callable[[Sequence[str], Path], GitResult]

DESCRIBE_TAGS_CMD = ("git", "describe", "--tags")
SHORT_HASH_CMD = ("git", "rev-parse", "--short", "HEAD")


def run_git(args: Sequence[str], cwd: Path) -> GitResult:
    """Run a git command in ``cwd`` and capture its result.

    A missing git executable or working tree is reported as a failed result
    rather than raised, so callers can fall back or fail with context.
    """
    logger.debug("Running %s in %s", " ".join(args), cwd)
    try:
        completed = subprocess.run(
            list(args),
            cwd=str(cwd),
            capture_output=True,
            text=True,
            check=False,
        )
    except OSError as exc:
        logger.debug("Could not run %s in %s: %s", args[0], cwd, exc)
        return GitResult(exit_code=-1, stderr=str(exc))
    return GitResult(
        exit_code=completed.returncode,
        stdout=completed.stdout,
        stderr=completed.stderr,
    )


class GitCommandSource:
    """Resolve versions by invoking ``git`` in each submodule working tree."""

    def __init__(self, runner: Optional[GitRunner] = None) -> None:
        self._runner = runner or run_git

    def resolve_tag(self, path: Union[str, Path]) -> GitResult:
        return self._runner(DESCRIBE_TAGS_CMD, Path(path))

    def resolve_hash(self, path: Union[str, Path]) -> GitResult:
        return self._runner(SHORT_HASH_CMD, Path(path))
