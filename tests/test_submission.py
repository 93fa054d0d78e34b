"""Tests for snapshot submission over HTTP."""

from __future__ import annotations

from typing import Any, Dict, List

import pytest
import requests

from submodule_snapshot.config import SubmissionConfig
from submodule_snapshot.errors import ConfigurationError, SnapshotSubmissionError
from submodule_snapshot.models import Coordinate, DependencyScope, Detector, Manifest, Snapshot
from submodule_snapshot.runtime.submission import snapshot_endpoint, submit_snapshot


class _Response:
    def __init__(self, status_code: int, text: str = "", reason: str = "") -> None:
        self.status_code = status_code
        self.text = text
        self.reason = reason


class _Session:
    """Records POST calls and replies with a canned response."""

    def __init__(self, response: Any) -> None:
        self.response = response
        self.calls: List[Dict[str, Any]] = []

    def post(self, url, **kwargs):
        self.calls.append({"url": url, **kwargs})
        if isinstance(self.response, Exception):
            raise self.response
        return self.response


def _config(**kwargs) -> SubmissionConfig:
    values = dict(
        token="ghs_secret",
        repository="owner/repo",
        sha="a" * 40,
        ref="refs/heads/main",
    )
    values.update(kwargs)
    return SubmissionConfig(**values)


def _snapshot() -> Snapshot:
    snapshot = Snapshot(detector=Detector(name="tool", url="https://example.com", version="1"))
    manifest = Manifest(name=".gitmodules", source_location=".gitmodules")
    manifest.add_direct_dependency(
        Coordinate(type="github", namespace="org", name="dep-a", version="v1"),
        DependencyScope.RUNTIME,
    )
    snapshot.add_manifest(manifest)
    return snapshot


def test_submit_posts_payload_with_auth_headers() -> None:
    session = _Session(_Response(201, '{"id": 1}'))
    snapshot = _snapshot()

    status = submit_snapshot(snapshot, _config(), session=session)

    assert status == 201
    (call,) = session.calls
    assert call["url"] == "https://api.github.com/repos/owner/repo/dependency-graph/snapshots"
    assert call["headers"]["Authorization"] == "Bearer ghs_secret"
    assert call["headers"]["Accept"] == "application/vnd.github+json"
    assert call["json"] == snapshot.to_payload()
    assert call["timeout"] == 30.0


def test_endpoint_uses_configured_api_url() -> None:
    config = _config(api_url="https://ghe.example.com/api/v3/")

    assert snapshot_endpoint(config) == (
        "https://ghe.example.com/api/v3/repos/owner/repo/dependency-graph/snapshots"
    )


def test_rejected_snapshot_raises() -> None:
    session = _Session(_Response(422, '{"message": "Invalid request"}', "Unprocessable"))

    with pytest.raises(SnapshotSubmissionError) as excinfo:
        submit_snapshot(_snapshot(), _config(), session=session)

    assert excinfo.value.status_code == 422
    assert "Invalid request" in excinfo.value.body


def test_network_error_raises() -> None:
    session = _Session(requests.ConnectionError("boom"))

    with pytest.raises(SnapshotSubmissionError) as excinfo:
        submit_snapshot(_snapshot(), _config(), session=session)

    assert excinfo.value.status_code is None


def test_missing_credentials_fail_before_request() -> None:
    session = _Session(_Response(201))

    with pytest.raises(ConfigurationError):
        submit_snapshot(_snapshot(), _config(token=None), session=session)

    assert session.calls == []
