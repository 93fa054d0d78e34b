"""Command implementations for the submodule-snapshot CLI."""
