"""Manifest parsers."""

from submodule_snapshot.parsers.gitmodules import (
    MANIFEST_FILENAME,
    ManifestParser,
    parse_manifest_lines,
    parse_submodule_manifest,
    validate_manifest_path,
)

__all__ = [
    "MANIFEST_FILENAME",
    "ManifestParser",
    "parse_manifest_lines",
    "parse_submodule_manifest",
    "validate_manifest_path",
]
