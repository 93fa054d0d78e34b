"""Export command implementation."""

import logging
from pathlib import Path

from submodule_snapshot.cli.common import config_from_args, print_dependency_table
from submodule_snapshot.errors import SubmissionError
from submodule_snapshot.export import export_json
from submodule_snapshot.runtime.orchestrator import build_snapshot

logger = logging.getLogger("submodule_snapshot.cli.export")


def export_command(args) -> int:
    """Build a snapshot and write it to a JSON file without submitting it.

    Args:
        args: Parsed command-line arguments containing:
            - output: Output file path
            - manifest, development_deps, config, workers (optional)

    Returns:
        int: Exit code (0 for success, non-zero for failure).
    """
    try:
        config = config_from_args(args)
        snapshot = build_snapshot(config)
    except SubmissionError as e:
        logger.error("Export failed: %s", e)
        return 1

    try:
        export_json(snapshot, Path(args.output))
    except OSError as e:
        logger.error("Failed to write %s: %s", args.output, e)
        return 1

    if not getattr(args, "quiet", False):
        print_dependency_table(snapshot)
    return 0
