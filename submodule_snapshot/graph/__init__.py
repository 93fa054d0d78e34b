"""Coordinate derivation and lookup."""

from submodule_snapshot.graph.identifiers import (
    SUPPORTED_HOST,
    build_coordinate,
    build_coordinates,
)
from submodule_snapshot.graph.registry import CoordinateIndex

__all__ = [
    "CoordinateIndex",
    "SUPPORTED_HOST",
    "build_coordinate",
    "build_coordinates",
]
