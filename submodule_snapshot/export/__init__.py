"""Snapshot exporters."""

from submodule_snapshot.export.json import export_json

__all__ = ["export_json"]
