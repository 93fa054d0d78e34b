"""JSON export for dependency snapshots."""

import json
import logging
from pathlib import Path

from submodule_snapshot.models import Snapshot

logger = logging.getLogger("submodule_snapshot.export.json")


def export_json(snapshot: Snapshot, output_path: Path) -> None:
    """Write the submission payload of ``snapshot`` to ``output_path``.

    Args:
        snapshot: Snapshot to export.
        output_path: Output file path.
    """
    logger.info("Exporting snapshot to JSON: %s", output_path)

    output_path.parent.mkdir(parents=True, exist_ok=True)

    with open(output_path, "w", encoding="utf-8") as f:
        json.dump(snapshot.to_payload(), f, indent=2, ensure_ascii=False)
        f.write("\n")

    logger.info("JSON export completed: %d dependencies", len(snapshot.dependencies()))
