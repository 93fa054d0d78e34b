"""Helpers for loading a SubmissionConfig from files and the environment.

`load_config` is the single entry point used by the CLI:

* None -> defaults
* dict -> SubmissionConfig.from_dict
* Path / path-like string -> load a .toml or .json file

The Actions environment and explicit overrides are layered on top.
"""

from __future__ import annotations

import json
import logging
import os
import tomllib
from pathlib import Path
from typing import Any, Dict, Mapping, Optional, Union

from submodule_snapshot.config.schema import SubmissionConfig
from submodule_snapshot.errors import ConfigurationError

logger = logging.getLogger("submodule_snapshot.config.loader")

ConfigSource = Union[str, Path, Dict[str, Any], None]


def load_config_file(path: Union[str, Path]) -> Dict[str, Any]:
    """Read a TOML or JSON configuration file into a dict.

    A TOML file may keep its settings under a ``[submodule_snapshot]`` table.

    Raises:
        ConfigurationError: If the file is missing, unreadable, malformed or
            has an unsupported suffix.
    """
    config_path = Path(path).expanduser()
    if not config_path.is_file():
        raise ConfigurationError(f"Configuration file not found: {config_path}")

    suffix = config_path.suffix.lower()
    try:
        text = config_path.read_text(encoding="utf-8")
        if suffix == ".toml":
            data = tomllib.loads(text)
            data = data.get("submodule_snapshot", data)
        elif suffix == ".json":
            data = json.loads(text)
        else:
            raise ConfigurationError(
                f"Unsupported configuration format {suffix!r} (expected .toml or .json)"
            )
    except (OSError, UnicodeDecodeError, tomllib.TOMLDecodeError, json.JSONDecodeError) as exc:
        raise ConfigurationError(f"Failed to read {config_path}: {exc}") from exc

    if not isinstance(data, dict):
        raise ConfigurationError(f"{config_path} must contain a table/object at top level")

    logger.debug("Loaded configuration from %s", config_path)
    return data


def load_config(
    source: ConfigSource = None,
    environ: Optional[Mapping[str, str]] = None,
    overrides: Optional[Mapping[str, Any]] = None,
) -> SubmissionConfig:
    """Build the effective configuration for a run.

    Args:
        source: Optional config file path or already-parsed mapping.
        environ: Environment to read Actions inputs from; ``os.environ`` when None.
        overrides: Explicit values (e.g. CLI flags); None values are skipped.

    Returns:
        SubmissionConfig instance.

    Raises:
        ConfigurationError: If any layer is invalid.
    """
    if source is None:
        config = SubmissionConfig()
    elif isinstance(source, dict):
        config = SubmissionConfig.from_dict(source)
    else:
        config = SubmissionConfig.from_dict(load_config_file(source))

    config = SubmissionConfig.from_env(os.environ if environ is None else environ, config)
    if overrides:
        config = config.merged(overrides)
    return config
