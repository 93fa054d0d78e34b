"""Run-local index from coordinate to submodule record.

Coordinates are derived independently of the records they came from; the
index lets the orchestrator map each coordinate back to its record (for
example to decide its scope). An index lives for exactly one run.
"""

import logging
from typing import Dict, Iterable, Iterator, Optional

from submodule_snapshot.errors import AssertionFailed
from submodule_snapshot.graph.identifiers import build_coordinate
from submodule_snapshot.models import Coordinate, SubmoduleRecord

logger = logging.getLogger("submodule_snapshot.graph.registry")


class CoordinateIndex:
    """Mapping of Coordinate to the SubmoduleRecord it was derived from.

    When two records derive the same coordinate, the later one replaces the
    earlier one.
    """

    def __init__(self) -> None:
        self._entries: Dict[Coordinate, SubmoduleRecord] = {}

    @classmethod
    def build(cls, records: Iterable[SubmoduleRecord]) -> "CoordinateIndex":
        """Index every record under its derived coordinate.

        Raises:
            IncompleteSubmodule: If a record lacks a field.
            UnsupportedHost: If a record URL is not on github.com.
        """
        index = cls()
        for record in records:
            index.add(record)
        logger.debug("Built coordinate index with %d entr(ies)", len(index))
        return index

    def add(self, record: SubmoduleRecord) -> Coordinate:
        coordinate = build_coordinate(record)
        previous = self._entries.get(coordinate)
        if previous is not None:
            logger.debug(
                "Coordinate %s of %r replaces entry for %r",
                coordinate,
                record.name,
                previous.name,
            )
        self._entries[coordinate] = record
        return coordinate

    def lookup(self, coordinate: Coordinate) -> Optional[SubmoduleRecord]:
        """Return the record indexed under ``coordinate``, if any."""
        return self._entries.get(coordinate)

    def require(self, coordinate: Coordinate) -> SubmoduleRecord:
        """Return the record for ``coordinate`` or raise AssertionFailed."""
        record = self.lookup(coordinate)
        if record is None:
            raise AssertionFailed(
                "assertion failed: expected all direct dependencies to have "
                f"entries in the module cache (missing {coordinate})"
            )
        return record

    def __contains__(self, coordinate: object) -> bool:
        return coordinate in self._entries

    def __len__(self) -> int:
        return len(self._entries)

    def __iter__(self) -> Iterator[Coordinate]:
        return iter(self._entries)
