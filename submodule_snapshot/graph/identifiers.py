"""Coordinate derivation for submodule records.

A submodule URL such as ``https://github.com/org/dep-a.git`` maps to the
coordinate ``pkg:github/org/dep-a@<version>``. Only github.com is supported.

Only the last extension is stripped: ``socket.io.git`` becomes ``socket.io``, not
``socket`` as a first-dot split would give.
"""

from __future__ import annotations

from typing import Iterable, List

from submodule_snapshot.errors import IncompleteSubmodule, UnsupportedHost
from submodule_snapshot.models import Coordinate, SubmoduleRecord

SUPPORTED_HOST = "github.com"

# Positions after splitting "scheme://host/namespace/repo" on "/".
_HOST_SEGMENT = 2
_NAMESPACE_SEGMENT = 3
_REPOSITORY_SEGMENT = 4


def strip_extension(repository: str) -> str:
    """Drop the last ``.``-delimited extension, e.g. ``dep-a.git`` -> ``dep-a``."""
    stem, dot, _ = repository.rpartition(".")
    return stem if dot and stem else repository


def coordinate_type(host: str) -> str:
    """Reduce a hosting domain to its first label, e.g. ``github.com`` -> ``github``."""
    return host.split(".", 1)[0]


def build_coordinate(record: SubmoduleRecord) -> Coordinate:
    """Derive the package coordinate of a fully resolved submodule record.

    Args:
        record: Record with name, path, url and version set.

    Returns:
        Coordinate with type, namespace, name and version.

    Raises:
        IncompleteSubmodule: If any of the four record fields is empty.
        UnsupportedHost: If the URL host is not github.com or the URL does not
            have a host/namespace/repository layout.
    """
    if not record.is_complete:
        raise IncompleteSubmodule(record)

    segments = record.url.split("/")
    if len(segments) <= _REPOSITORY_SEGMENT:
        raise UnsupportedHost(None, record.url)

    host = segments[_HOST_SEGMENT]
    if host != SUPPORTED_HOST:
        raise UnsupportedHost(host, record.url)

    namespace = segments[_NAMESPACE_SEGMENT]
    name = strip_extension(segments[_REPOSITORY_SEGMENT])
    if not namespace or not name:
        raise UnsupportedHost(None, record.url)

    return Coordinate(
        type=coordinate_type(host),
        namespace=namespace,
        name=name,
        version=record.version,
    )


def build_coordinates(records: Iterable[SubmoduleRecord]) -> List[Coordinate]:
    """Derive a coordinate for each record, keeping order."""
    return [build_coordinate(record) for record in records]
