"""Submission of snapshots to the GitHub dependency submission API."""

from __future__ import annotations

import logging
from typing import Optional

import requests

from submodule_snapshot.config import SubmissionConfig
from submodule_snapshot.errors import SnapshotSubmissionError
from submodule_snapshot.models import Snapshot

logger = logging.getLogger("submodule_snapshot.runtime.submission")

API_VERSION = "2022-11-28"


def snapshot_endpoint(config: SubmissionConfig) -> str:
    return f"{config.api_url}/repos/{config.repository}/dependency-graph/snapshots"


def submission_headers(config: SubmissionConfig) -> dict:
    return {
        "Accept": "application/vnd.github+json",
        "Authorization": f"Bearer {config.token}",
        "X-GitHub-Api-Version": API_VERSION,
        "User-Agent": f"{config.detector_name}/{config.detector_version}",
    }


def submit_snapshot(
    snapshot: Snapshot,
    config: SubmissionConfig,
    session: Optional[requests.Session] = None,
) -> int:
    """POST ``snapshot`` to the repository's dependency graph.

    Args:
        snapshot: Complete snapshot to submit.
        config: Configuration with token, repository and API URL.
        session: Optional requests session (a new one is used when None).

    Returns:
        HTTP status code of the accepted submission.

    Raises:
        ConfigurationError: If token, repository, sha or ref are missing.
        SnapshotSubmissionError: On network failure or a non-2xx response.
    """
    config.require_submission_fields()
    url = snapshot_endpoint(config)
    logger.info("Submitting dependency snapshot to %s", url)

    owns_session = session is None
    http = session or requests.Session()
    try:
        response = http.post(
            url,
            json=snapshot.to_payload(),
            headers=submission_headers(config),
            timeout=config.timeout,
        )
    except requests.RequestException as e:
        raise SnapshotSubmissionError(f"Failed to submit dependency snapshot: {e}") from e
    finally:
        if owns_session:
            http.close()

    if not 200 <= response.status_code < 300:
        body = response.text.strip()
        raise SnapshotSubmissionError(
            f"Dependency snapshot rejected: HTTP {response.status_code}: {body or response.reason}",
            status_code=response.status_code,
            body=body,
        )

    logger.info("Dependency snapshot submitted: HTTP %d", response.status_code)
    logger.debug("Submission response: %s", response.text)
    return response.status_code
