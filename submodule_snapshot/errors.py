"""Error hierarchy for submodule snapshot runs.

Every error raised here is fatal for the current run: a snapshot is either
complete and internally consistent, or it is not submitted at all.
"""

from __future__ import annotations

from typing import Any, Optional


class SubmissionError(Exception):
    """Base class for all errors that abort a snapshot run."""


class ManifestNotFound(SubmissionError):
    """The manifest path does not exist or is not a ``.gitmodules`` file."""


class ManifestUnreadable(SubmissionError):
    """The manifest exists but cannot be read as UTF-8 text."""


class VersionResolutionFailed(SubmissionError):
    """Neither a tag nor a commit hash could be obtained for a submodule.

    Attributes:
        path: Working tree that was inspected.
        stderr: Standard error of the last git invocation.
    """

    def __init__(self, path: str, stderr: str = "") -> None:
        self.path = path
        self.stderr = stderr.strip()
        message = f"Failed to resolve a tag or commit hash for {path}"
        if self.stderr:
            message = f"{message}: {self.stderr}"
        super().__init__(message)


class IncompleteSubmodule(SubmissionError):
    """A submodule record reached coordinate derivation with empty fields."""

    def __init__(self, record: Any) -> None:
        self.record = record
        super().__init__(f"Incomplete submodule detected: {record!r}")


class UnsupportedHost(SubmissionError):
    """A submodule URL points at a host other than github.com."""

    def __init__(self, host: Optional[str], url: str) -> None:
        self.host = host
        self.url = url
        if host:
            message = f"{host} submodule type not supported (url: {url})"
        else:
            message = f"Cannot derive a hosting domain from submodule url {url!r}"
        super().__init__(message)


class AssertionFailed(SubmissionError):
    """A derived coordinate is missing from the index built from the same records."""


class ConfigurationError(SubmissionError):
    """Run configuration is missing or invalid."""


class SnapshotSubmissionError(SubmissionError):
    """The dependency submission endpoint rejected or never received the snapshot.

    Attributes:
        status_code: HTTP status, or None when no response was received.
        body: Response text, if any.
    """

    def __init__(
        self, message: str, status_code: Optional[int] = None, body: str = ""
    ) -> None:
        self.status_code = status_code
        self.body = body
        super().__init__(message)


__all__ = [
    "AssertionFailed",
    "ConfigurationError",
    "IncompleteSubmodule",
    "ManifestNotFound",
    "ManifestUnreadable",
    "SnapshotSubmissionError",
    "SubmissionError",
    "UnsupportedHost",
    "VersionResolutionFailed",
]
