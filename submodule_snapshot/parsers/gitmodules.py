"""Parser for ``.gitmodules`` manifests.

The manifest is scanned line by line. Each ``[submodule "<name>"]`` header
opens a section with its own builder; the first ``path =`` and ``url =``
assignments of the section fill it, and the section is emitted as soon as
name, path and url are all known. Sections that never collect all three
fields are dropped, including an incomplete section at the end of the file.
"""

from __future__ import annotations

import logging
import os
import re
from dataclasses import dataclass
from pathlib import Path
from typing import Iterable, List, Optional, Union

from submodule_snapshot.errors import ManifestNotFound, ManifestUnreadable
from submodule_snapshot.models import SubmoduleRecord

logger = logging.getLogger("submodule_snapshot.parsers.gitmodules")

MANIFEST_FILENAME = ".gitmodules"

_SECTION_RE = re.compile(r'submodule\s*"([^"]*)"')
_ASSIGNMENT_RE = re.compile(r"^\s*(path|url)\s*=(.*)$")


@dataclass
class _SectionBuilder:
    """Accumulates the fields of a single manifest section."""

    name: str
    path: str = ""
    url: str = ""

    def assign(self, key: str, value: str) -> None:
        # First occurrence wins.
        if key == "path" and not self.path:
            self.path = value
        elif key == "url" and not self.url:
            self.url = value

    @property
    def complete(self) -> bool:
        return bool(self.name and self.path and self.url)

    def build(self) -> SubmoduleRecord:
        return SubmoduleRecord(name=self.name, path=self.path, url=self.url)


def validate_manifest_path(manifest: Union[str, Path]) -> Path:
    """Return the normalised manifest path or raise ManifestNotFound.

    Args:
        manifest: Path to a ``.gitmodules`` file.

    Raises:
        ManifestNotFound: If the basename is not ``.gitmodules`` or the
            file does not exist.
    """
    manifest_path = Path(os.path.normpath(str(manifest)))
    if manifest_path.name != MANIFEST_FILENAME or not manifest_path.is_file():
        raise ManifestNotFound(
            f"{manifest_path} is not a {MANIFEST_FILENAME} file or it does not exist!"
        )
    return manifest_path


def parse_manifest_lines(lines: Iterable[str]) -> List[SubmoduleRecord]:
    """Fold manifest lines into complete submodule records, in file order."""
    records: List[SubmoduleRecord] = []
    current: Optional[_SectionBuilder] = None

    for lineno, line in enumerate(lines, start=1):
        section = _SECTION_RE.search(line)
        if section:
            if current is not None:
                logger.warning(
                    "Dropping incomplete submodule section %r before line %d",
                    current.name,
                    lineno,
                )
            current = _SectionBuilder(name=section.group(1))
            logger.debug('Detected submodule "%s"', current.name)
            continue

        if current is None:
            continue

        assignment = _ASSIGNMENT_RE.match(line)
        if not assignment:
            continue

        current.assign(assignment.group(1), assignment.group(2).strip())
        if current.complete:
            records.append(current.build())
            current = None

    if current is not None:
        logger.warning(
            "Dropping incomplete submodule section %r at end of manifest",
            current.name,
        )

    return records


def parse_submodule_manifest(manifest: Union[str, Path]) -> List[SubmoduleRecord]:
    """Parse a ``.gitmodules`` file into submodule records without versions.

    Args:
        manifest: Path to the manifest file.

    Returns:
        List of records in file order.

    Raises:
        ManifestNotFound: If the path is missing or not named ``.gitmodules``.
        ManifestUnreadable: If the file cannot be read or is not UTF-8.
    """
    manifest_path = validate_manifest_path(manifest)
    logger.info("Processing manifest file %s", manifest_path)

    try:
        text = manifest_path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as exc:
        raise ManifestUnreadable(f"Cannot read manifest {manifest_path}: {exc}") from exc
    records = parse_manifest_lines(text.splitlines())

    logger.info("Found %d submodule(s) in %s", len(records), manifest_path)
    return records


class ManifestParser:
    """Object wrapper around :func:`parse_submodule_manifest`."""

    FILENAME = MANIFEST_FILENAME

    def __init__(self, manifest: Union[str, Path]) -> None:
        self.manifest = manifest

    @property
    def root(self) -> Path:
        """Directory that submodule paths in the manifest are relative to."""
        return Path(os.path.normpath(str(self.manifest))).parent

    def parse(self) -> List[SubmoduleRecord]:
        return parse_submodule_manifest(self.manifest)
