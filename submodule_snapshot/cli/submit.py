"""Submit command implementation."""

import logging
from pathlib import Path

from submodule_snapshot.cli.common import config_from_args
from submodule_snapshot.errors import SubmissionError
from submodule_snapshot.export import export_json
from submodule_snapshot.runtime.orchestrator import build_snapshot
from submodule_snapshot.runtime.submission import submit_snapshot

logger = logging.getLogger("submodule_snapshot.cli.submit")


def submit_command(args) -> int:
    """Build the submodule snapshot and submit it to GitHub.

    Nothing is submitted unless the whole snapshot was built successfully.

    Args:
        args: Parsed command-line arguments.

    Returns:
        int: Exit code.
    """
    dry_run = getattr(args, "dry_run", False)
    output = getattr(args, "output", None)

    try:
        config = config_from_args(args)
        if not dry_run:
            config.require_submission_fields()

        snapshot = build_snapshot(config)
    except SubmissionError as e:
        logger.error("Dependency submission failed: %s", e)
        return 1

    if output:
        try:
            export_json(snapshot, Path(output))
        except OSError as e:
            logger.error("Failed to write %s: %s", output, e)
            return 1

    if dry_run:
        logger.warning(
            "Dry run: not submitting %d dependencies", len(snapshot.dependencies())
        )
        return 0

    try:
        submit_snapshot(snapshot, config)
    except SubmissionError as e:
        logger.error("Dependency submission failed: %s", e)
        return 1

    return 0
