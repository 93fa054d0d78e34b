"""Git submodule dependency snapshots for the GitHub dependency graph."""

__version__ = "0.1.0"

__all__ = ["__version__"]
