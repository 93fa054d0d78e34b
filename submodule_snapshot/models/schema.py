"""Pydantic models for submodule records, coordinates and snapshots.

The snapshot models mirror the payload accepted by the GitHub dependency
submission API. SubmoduleRecord and Coordinate are frozen so that a record
cannot change after its version is set and a coordinate can key a dict.
"""

from __future__ import annotations

import logging
from datetime import datetime, timezone
from enum import Enum
from typing import Any, Dict, List, Optional
from urllib.parse import quote

from pydantic import BaseModel, ConfigDict, Field

logger = logging.getLogger("submodule_snapshot.models.schema")

SNAPSHOT_FORMAT_VERSION = 0


class DependencyScope(str, Enum):
    """Scope of a direct dependency in the listing."""

    RUNTIME = "runtime"
    DEVELOPMENT = "development"


class DependencyRelationship(str, Enum):
    """Relationship of a dependency to the manifest that declares it."""

    DIRECT = "direct"
    INDIRECT = "indirect"


class SubmoduleRecord(BaseModel):
    """One ``[submodule "..."]`` section of a manifest.

    Attributes:
        name: Section identifier, unique within a manifest.
        path: Working tree location relative to the repository root.
        url: Upstream repository URL.
        version: Tag or short hash; empty until resolved.
    """

    model_config = ConfigDict(frozen=True)

    name: str
    path: str
    url: str
    version: str = ""

    @property
    def is_complete(self) -> bool:
        """True when name, path, url and version are all set."""
        return all((self.name, self.path, self.url, self.version))

    def with_version(self, version: str) -> "SubmoduleRecord":
        """Return a copy of this record carrying ``version``."""
        return self.model_copy(update={"version": version})


class Coordinate(BaseModel):
    """Canonical package identity of a submodule (a package URL).

    Two coordinates are equal when all four fields are equal.
    """

    model_config = ConfigDict(frozen=True)

    type: str = Field(min_length=1)
    namespace: str = Field(min_length=1)
    name: str = Field(min_length=1)
    version: str = Field(min_length=1)

    def to_purl(self) -> str:
        """Render as ``pkg:type/namespace/name@version``."""
        return "pkg:{}/{}/{}@{}".format(
            self.type,
            quote(self.namespace, safe=""),
            quote(self.name, safe=""),
            quote(self.version, safe=""),
        )

    def __str__(self) -> str:
        return self.to_purl()


class Dependency(BaseModel):
    """A resolved entry of a manifest's dependency listing."""

    package_url: str
    relationship: DependencyRelationship = DependencyRelationship.DIRECT
    scope: DependencyScope = DependencyScope.RUNTIME
    dependencies: List[str] = Field(default_factory=list)
    coordinate: Optional[Coordinate] = Field(default=None, exclude=True)

    @classmethod
    def direct(cls, coordinate: Coordinate, scope: DependencyScope) -> "Dependency":
        """Create a direct dependency entry for ``coordinate``."""
        return cls(
            package_url=coordinate.to_purl(),
            relationship=DependencyRelationship.DIRECT,
            scope=scope,
            coordinate=coordinate,
        )


class Manifest(BaseModel):
    """Dependency listing for one manifest file.

    Attributes:
        name: Manifest file name, e.g. ``.gitmodules``.
        source_location: Manifest path as configured for the run.
        resolved: Dependencies keyed by package URL, in insertion order.
    """

    name: str
    source_location: str
    resolved: Dict[str, Dependency] = Field(default_factory=dict)

    def add_direct_dependency(
        self, coordinate: Coordinate, scope: DependencyScope
    ) -> Dependency:
        """Add ``coordinate`` as a direct dependency; a repeated purl replaces the entry."""
        dependency = Dependency.direct(coordinate, scope)
        if dependency.package_url in self.resolved:
            logger.debug("Replacing dependency entry for %s", dependency.package_url)
        self.resolved[dependency.package_url] = dependency
        return dependency

    def count_by_scope(self, scope: DependencyScope) -> int:
        return sum(1 for dep in self.resolved.values() if dep.scope == scope)

    def to_payload(self) -> Dict[str, Any]:
        return {
            "name": self.name,
            "file": {"source_location": self.source_location},
            "resolved": {
                purl: dep.model_dump(mode="json")
                for purl, dep in self.resolved.items()
            },
        }


class Detector(BaseModel):
    """Identity of the tool that produced a snapshot."""

    name: str
    url: str
    version: str


class Job(BaseModel):
    """Workflow job a snapshot belongs to."""

    correlator: str
    id: str
    html_url: Optional[str] = None


def _utc_now() -> str:
    return datetime.now(timezone.utc).isoformat().replace("+00:00", "Z")


class Snapshot(BaseModel):
    """A complete dependency snapshot, submitted as a unit."""

    detector: Detector
    sha: str = ""
    ref: str = ""
    job: Optional[Job] = None
    version: int = SNAPSHOT_FORMAT_VERSION
    scanned: str = Field(default_factory=_utc_now)
    manifests: Dict[str, Manifest] = Field(default_factory=dict)
    metadata: Dict[str, str] = Field(default_factory=dict)

    def add_manifest(self, manifest: Manifest) -> None:
        self.manifests[manifest.name] = manifest

    def dependencies(self) -> List[Dependency]:
        """All dependencies across manifests, in listing order."""
        return [
            dep
            for manifest in self.manifests.values()
            for dep in manifest.resolved.values()
        ]

    def to_payload(self) -> Dict[str, Any]:
        """Return the JSON body for the dependency submission API."""
        payload: Dict[str, Any] = {
            "version": self.version,
            "sha": self.sha,
            "ref": self.ref,
            "detector": self.detector.model_dump(mode="json"),
            "scanned": self.scanned,
            "manifests": {
                name: manifest.to_payload()
                for name, manifest in self.manifests.items()
            },
        }
        if self.job is not None:
            payload["job"] = self.job.model_dump(mode="json", exclude_none=True)
        if self.metadata:
            payload["metadata"] = dict(self.metadata)
        return payload
