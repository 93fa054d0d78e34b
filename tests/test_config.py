"""Tests for configuration loading."""

from __future__ import annotations

import json
from pathlib import Path

import pytest

from submodule_snapshot.config import SubmissionConfig, load_config, load_config_file, split_names
from submodule_snapshot.errors import ConfigurationError


def test_defaults() -> None:
    config = SubmissionConfig()

    assert config.manifest == ".gitmodules"
    assert config.development_deps == []
    assert config.api_url == "https://api.github.com"
    assert config.max_workers == 8


def test_development_deps_are_split_and_trimmed() -> None:
    config = SubmissionConfig(development_deps=" dep-a, dep-b ,,")

    assert config.development_deps == ["dep-a", "dep-b"]


def test_split_names() -> None:
    assert split_names(None) == []
    assert split_names("") == []
    assert split_names(["a ", " b"]) == ["a", "b"]


def test_from_env_reads_action_inputs() -> None:
    environ = {
        "INPUT_MANIFEST": "sub/.gitmodules",
        "INPUT_DEVELOPMENT-DEPS": "tools,docs",
        "INPUT_TOKEN": "",
        "GITHUB_TOKEN": "ghs_token",
        "GITHUB_REPOSITORY": "owner/repo",
        "GITHUB_SHA": "abc",
        "GITHUB_REF": "refs/heads/main",
        "GITHUB_WORKFLOW": "CI",
        "GITHUB_JOB": "submit",
        "GITHUB_RUN_ID": "7",
        "GITHUB_API_URL": "https://ghe.example.com/api/v3/",
    }

    config = SubmissionConfig.from_env(environ)

    assert config.manifest == "sub/.gitmodules"
    assert config.development_deps == ["tools", "docs"]
    assert config.token == "ghs_token"
    assert config.repository == "owner/repo"
    assert config.api_url == "https://ghe.example.com/api/v3"
    assert config.correlator == "CI submit"


def test_empty_env_values_keep_defaults() -> None:
    config = SubmissionConfig.from_env({"INPUT_MANIFEST": "", "INPUT_DEVELOPMENT_DEPS": " "})

    assert config.manifest == ".gitmodules"
    assert config.development_deps == []


def test_invalid_values_raise_configuration_error() -> None:
    with pytest.raises(ConfigurationError):
        SubmissionConfig.from_dict({"repository": "no-slash"})
    with pytest.raises(ConfigurationError):
        SubmissionConfig.from_dict({"max_workers": 0})
    with pytest.raises(ConfigurationError):
        SubmissionConfig.from_dict({"unknown": 1})


def test_load_config_layers(tmp_path: Path) -> None:
    config_file = tmp_path / "config.toml"
    config_file.write_text(
        '[submodule_snapshot]\nmanifest = "from-file/.gitmodules"\n'
        'development_deps = ["a"]\nmax_workers = 2\n',
        encoding="utf-8",
    )

    config = load_config(
        config_file,
        environ={"INPUT_DEVELOPMENT-DEPS": "b"},
        overrides={"max_workers": 4, "token": None},
    )

    assert config.manifest == "from-file/.gitmodules"
    assert config.development_deps == ["b"]
    assert config.max_workers == 4
    assert config.token is None


def test_load_config_file_json(tmp_path: Path) -> None:
    config_file = tmp_path / "config.json"
    config_file.write_text(json.dumps({"development_deps": "x,y"}), encoding="utf-8")

    assert load_config(config_file, environ={}).development_deps == ["x", "y"]


def test_load_config_file_errors(tmp_path: Path) -> None:
    with pytest.raises(ConfigurationError):
        load_config_file(tmp_path / "missing.toml")

    bad = tmp_path / "bad.toml"
    bad.write_text("manifest = [", encoding="utf-8")
    with pytest.raises(ConfigurationError):
        load_config_file(bad)

    yaml_file = tmp_path / "config.yaml"
    yaml_file.write_text("manifest: x", encoding="utf-8")
    with pytest.raises(ConfigurationError):
        load_config_file(yaml_file)


def test_require_submission_fields() -> None:
    with pytest.raises(ConfigurationError) as excinfo:
        SubmissionConfig(token="t").require_submission_fields()

    assert "repository" in str(excinfo.value)
    SubmissionConfig(
        token="t", repository="o/r", sha="s", ref="refs/heads/main"
    ).require_submission_fields()
