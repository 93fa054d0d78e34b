"""Helpers shared by CLI commands."""

import logging
import os
from typing import Any, Dict

from rich.console import Console
from rich.table import Table

from submodule_snapshot.config import SubmissionConfig, load_config
from submodule_snapshot.models import Snapshot

logger = logging.getLogger("submodule_snapshot.cli.common")

# argparse attribute -> SubmissionConfig field
_ARG_FIELDS = {
    "manifest": "manifest",
    "development_deps": "development_deps",
    "token": "token",
    "repository": "repository",
    "sha": "sha",
    "ref": "ref",
    "workers": "max_workers",
}


def config_from_args(args) -> SubmissionConfig:
    """Resolve the run configuration from file, environment and CLI flags.

    Raises:
        ConfigurationError: If the resulting configuration is invalid.
    """
    overrides: Dict[str, Any] = {}
    for attr, field in _ARG_FIELDS.items():
        value = getattr(args, attr, None)
        if value is not None:
            overrides[field] = value
    config = load_config(getattr(args, "config", None), os.environ, overrides)
    logger.debug("Manifest: %s", config.manifest)
    logger.debug("Development deps: %s", ", ".join(config.development_deps) or "-")
    return config


def print_dependency_table(snapshot: Snapshot, console: Console | None = None) -> None:
    """Render the dependencies of ``snapshot`` as a table."""
    table = Table(title="Submodule dependencies")
    table.add_column("Package URL", overflow="fold")
    table.add_column("Scope")
    for dependency in snapshot.dependencies():
        table.add_row(dependency.package_url, dependency.scope.value)
    (console or Console()).print(table)
