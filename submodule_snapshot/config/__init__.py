"""Configuration schema and loading for submodule-snapshot."""

from .loader import load_config, load_config_file
from .schema import SubmissionConfig, split_names

__all__ = [
    "SubmissionConfig",
    "load_config",
    "load_config_file",
    "split_names",
]
