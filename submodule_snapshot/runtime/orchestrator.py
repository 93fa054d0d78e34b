"""Snapshot pipeline.

    parse manifest -> resolve versions -> derive coordinates
        -> index records by coordinate -> assign scopes -> Snapshot

Any error aborts the run before a snapshot is returned.
"""

from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Iterable, List, Optional, Tuple

from submodule_snapshot.config import SubmissionConfig
from submodule_snapshot.graph import CoordinateIndex, build_coordinates
from submodule_snapshot.models import (
    Coordinate,
    DependencyScope,
    Detector,
    Job,
    Manifest,
    Snapshot,
    SubmoduleRecord,
)
from submodule_snapshot.parsers import ManifestParser
from submodule_snapshot.runtime.protocols import VersionSource
from submodule_snapshot.runtime.version_resolver import VersionResolver

logger = logging.getLogger("submodule_snapshot.runtime.orchestrator")


def scope_for(
    coordinate: Coordinate,
    record: SubmoduleRecord,
    development_deps: Iterable[str],
) -> DependencyScope:
    """Development when the coordinate or submodule name is listed, else runtime."""
    listed = set(development_deps)
    if coordinate.name in listed or record.name in listed:
        return DependencyScope.DEVELOPMENT
    return DependencyScope.RUNTIME


def build_manifest(
    manifest_path: str,
    coordinates: Iterable[Coordinate],
    index: CoordinateIndex,
    development_deps: Iterable[str],
) -> Manifest:
    """Assemble the dependency listing for ``manifest_path``.

    Raises:
        AssertionFailed: If a coordinate has no entry in ``index``.
    """
    development = list(development_deps)
    manifest = Manifest(
        name=os.path.basename(os.path.normpath(manifest_path)),
        source_location=manifest_path,
    )
    for coordinate in coordinates:
        record = index.require(coordinate)
        scope = scope_for(coordinate, record, development)
        manifest.add_direct_dependency(coordinate, scope)
        logger.debug("Added %s (%s) from submodule %r", coordinate, scope.value, record.name)
    return manifest


def build_job(config: SubmissionConfig) -> Optional[Job]:
    if not config.run_id:
        return None
    html_url = None
    if config.repository and config.run_id.isdigit():
        html_url = f"{config.server_url}/{config.repository}/actions/runs/{config.run_id}"
    return Job(correlator=config.correlator, id=config.run_id, html_url=html_url)


class SnapshotBuilder:
    """Runs the pipeline for one manifest.

    Attributes:
        config: Run configuration.
        records: Resolved records of the last run, in manifest order.
        coordinates: Coordinates of the last run, aligned with ``records``.
    """

    def __init__(
        self,
        config: SubmissionConfig,
        source: Optional[VersionSource] = None,
    ) -> None:
        self.config = config
        self._source = source
        self.records: List[SubmoduleRecord] = []
        self.coordinates: List[Coordinate] = []

    def resolve(self) -> Tuple[List[SubmoduleRecord], List[Coordinate]]:
        """Parse the manifest, resolve versions and derive coordinates."""
        parser = ManifestParser(self.config.manifest)
        records = parser.parse()

        resolver = VersionResolver(
            source=self._source,
            root=parser.root,
            max_workers=self.config.max_workers,
        )
        self.records = resolver.resolve_all(records)
        self.coordinates = build_coordinates(self.records)
        return self.records, self.coordinates

    def build(self) -> Snapshot:
        """Produce a complete Snapshot or raise a SubmissionError."""
        records, coordinates = self.resolve()
        index = CoordinateIndex.build(records)
        manifest = build_manifest(
            self.config.manifest, coordinates, index, self.config.development_deps
        )

        snapshot = Snapshot(
            detector=Detector(
                name=self.config.detector_name,
                url=self.config.detector_url,
                version=self.config.detector_version,
            ),
            sha=self.config.sha or "",
            ref=self.config.ref or "",
            job=build_job(self.config),
        )
        snapshot.add_manifest(manifest)

        logger.info(
            "Snapshot for %s: %d runtime, %d development dependencies",
            Path(self.config.manifest),
            manifest.count_by_scope(DependencyScope.RUNTIME),
            manifest.count_by_scope(DependencyScope.DEVELOPMENT),
        )
        return snapshot


def build_snapshot(
    config: SubmissionConfig, source: Optional[VersionSource] = None
) -> Snapshot:
    """Build the dependency snapshot described by ``config``."""
    return SnapshotBuilder(config, source=source).build()
