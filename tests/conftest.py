"""Shared fixtures for submodule-snapshot tests."""

from __future__ import annotations

import threading
from pathlib import Path
from typing import Dict, List, Optional, Union

import pytest

from submodule_snapshot.runtime.protocols import GitResult


class FakeVersionSource:
    """In-memory VersionSource keyed by working tree basename.

    ``tags`` and ``hashes`` map a submodule directory name to the value git
    would print; names missing from a mapping behave like a failing command.
    """

    def __init__(
        self,
        tags: Optional[Dict[str, str]] = None,
        hashes: Optional[Dict[str, str]] = None,
    ) -> None:
        self.tags = tags or {}
        self.hashes = hashes or {}
        self.calls: List[tuple] = []
        self._lock = threading.Lock()

    def _lookup(self, kind: str, table: Dict[str, str], path: Union[str, Path]) -> GitResult:
        name = Path(path).name
        with self._lock:
            self.calls.append((kind, Path(path)))
        if name in table:
            return GitResult(exit_code=0, stdout=table[name] + "\n")
        return GitResult(exit_code=128, stderr=f"fatal: no {kind} for {name}\n")

    def resolve_tag(self, path: Union[str, Path]) -> GitResult:
        return self._lookup("tag", self.tags, path)

    def resolve_hash(self, path: Union[str, Path]) -> GitResult:
        return self._lookup("hash", self.hashes, path)


GITMODULES_TWO = """\
[submodule "dep-a"]
\tpath = libs/dep-a
\turl = https://github.com/org/dep-a.git
[submodule "dep-b"]
\tpath = libs/dep-b
\turl = https://github.com/other/dep-b
"""


@pytest.fixture
def write_manifest(tmp_path: Path):
    """Return a helper that writes a .gitmodules file under tmp_path."""

    def _write(content: str, name: str = ".gitmodules") -> Path:
        manifest = tmp_path / name
        manifest.write_text(content, encoding="utf-8")
        return manifest

    return _write


@pytest.fixture
def fake_source() -> FakeVersionSource:
    return FakeVersionSource(
        tags={"dep-a": "v1.2.3"},
        hashes={"dep-a": "aaaaaaa", "dep-b": "1234abc"},
    )


@pytest.fixture(autouse=True)
def _clear_action_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """Keep the Actions environment of the test runner out of config loading."""
    for name in (
        "INPUT_MANIFEST",
        "INPUT_DEVELOPMENT-DEPS",
        "INPUT_DEVELOPMENT_DEPS",
        "INPUT_TOKEN",
        "GITHUB_TOKEN",
        "GITHUB_REPOSITORY",
        "GITHUB_SHA",
        "GITHUB_REF",
        "GITHUB_WORKFLOW",
        "GITHUB_JOB",
        "GITHUB_RUN_ID",
        "GITHUB_API_URL",
        "GITHUB_SERVER_URL",
    ):
        monkeypatch.delenv(name, raising=False)


@pytest.fixture
def make_source():
    """Factory for FakeVersionSource instances."""
    return FakeVersionSource
