"""
Protocol definitions for runtime components.

Protocols describe the capabilities the pipeline needs from the outside
world so that tests can substitute fakes for the real implementations.
"""

from dataclasses import dataclass
from pathlib import Path
from typing import Protocol, Union


@dataclass(frozen=True)
class GitResult:
    """Outcome of a single git invocation."""

    exit_code: int
    stdout: str = ""
    stderr: str = ""

    @property
    def ok(self) -> bool:
        """True for a zero exit status with non-blank output."""
        return self.exit_code == 0 and bool(self.stdout.strip())


class VersionSource(Protocol):
    """
    Capability to query the checked-out revision of a working tree.

    Example:
        result = source.resolve_tag(Path("libs/dep-a"))
        if not result.ok:
            result = source.resolve_hash(Path("libs/dep-a"))
    """

    def resolve_tag(self, path: Union[str, Path]) -> GitResult:
        """Closest reachable tag, with a commit suffix when HEAD is past it."""
        ...

    def resolve_hash(self, path: Union[str, Path]) -> GitResult:
        """Abbreviated hash of the commit checked out at ``path``."""
        ...
