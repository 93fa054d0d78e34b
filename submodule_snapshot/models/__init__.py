"""Data models for records, coordinates and dependency snapshots."""

from submodule_snapshot.models.schema import (
    Coordinate,
    Dependency,
    DependencyRelationship,
    DependencyScope,
    Detector,
    Job,
    Manifest,
    Snapshot,
    SubmoduleRecord,
)

__all__ = [
    "Coordinate",
    "Dependency",
    "DependencyRelationship",
    "DependencyScope",
    "Detector",
    "Job",
    "Manifest",
    "Snapshot",
    "SubmoduleRecord",
]
