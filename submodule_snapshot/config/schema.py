"""Configuration schema for snapshot runs, validated with Pydantic.

A run is configured from, in increasing precedence: built-in defaults, an
optional TOML/JSON file, the GitHub Actions environment, and CLI flags.
"""

from typing import Any, Dict, List, Mapping, Optional

from pydantic import BaseModel, Field, ValidationError, field_validator

from submodule_snapshot import __version__
from submodule_snapshot.errors import ConfigurationError

DEFAULT_DETECTOR_NAME = "submodule-snapshot"
DEFAULT_DETECTOR_URL = (
    "https://github.com/TF-RMM/arm-git-submodule-dependency-submission"
)
DEFAULT_API_URL = "https://api.github.com"
DEFAULT_SERVER_URL = "https://github.com"

# Environment variable -> config field. Earlier names win when several are set.
ENV_FIELDS: Dict[str, tuple] = {
    "manifest": ("INPUT_MANIFEST",),
    "development_deps": ("INPUT_DEVELOPMENT-DEPS", "INPUT_DEVELOPMENT_DEPS"),
    "token": ("INPUT_TOKEN", "GITHUB_TOKEN"),
    "repository": ("GITHUB_REPOSITORY",),
    "sha": ("GITHUB_SHA",),
    "ref": ("GITHUB_REF",),
    "workflow": ("GITHUB_WORKFLOW",),
    "job": ("GITHUB_JOB",),
    "run_id": ("GITHUB_RUN_ID",),
    "api_url": ("GITHUB_API_URL",),
    "server_url": ("GITHUB_SERVER_URL",),
}


def split_names(value: Any) -> List[str]:
    """Split a comma-separated string (or list) into stripped, non-empty names."""
    if value is None:
        return []
    if isinstance(value, str):
        items = value.split(",")
    else:
        items = list(value)
    return [str(item).strip() for item in items if str(item).strip()]


class SubmissionConfig(BaseModel):
    """Settings for building and submitting one snapshot.

    Attributes:
        manifest: Path of the ``.gitmodules`` file.
        development_deps: Names whose dependencies get the development scope.
        token: Token used to authenticate the submission.
        repository: Target repository as ``owner/name``.
        sha: Commit the snapshot describes.
        ref: Git ref the snapshot describes.
        workflow: Workflow name, part of the job correlator.
        job: Job name, part of the job correlator.
        run_id: Workflow run identifier, used as the job id.
        api_url: Base URL of the GitHub REST API.
        server_url: Base URL of the GitHub web UI.
        detector_name: Tool name recorded in the snapshot.
        detector_url: Tool URL recorded in the snapshot.
        detector_version: Tool version recorded in the snapshot.
        max_workers: Maximum concurrent git invocations.
        timeout: HTTP timeout for the submission (seconds).
    """

    manifest: str = ".gitmodules"
    development_deps: List[str] = Field(default_factory=list)
    token: Optional[str] = None
    repository: Optional[str] = None
    sha: Optional[str] = None
    ref: Optional[str] = None
    workflow: Optional[str] = None
    job: Optional[str] = None
    run_id: Optional[str] = None
    api_url: str = DEFAULT_API_URL
    server_url: str = DEFAULT_SERVER_URL
    detector_name: str = DEFAULT_DETECTOR_NAME
    detector_url: str = DEFAULT_DETECTOR_URL
    detector_version: str = __version__
    max_workers: int = Field(default=8, ge=1, le=64)
    timeout: float = Field(default=30.0, gt=0, le=600.0)

    model_config = {"extra": "forbid"}

    @field_validator("development_deps", mode="before")
    @classmethod
    def split_development_deps(cls, v: Any) -> List[str]:
        """Accept the comma-separated action input as well as a list."""
        return split_names(v)

    @field_validator("manifest")
    @classmethod
    def validate_manifest(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("manifest path must not be empty")
        return v.strip()

    @field_validator("repository")
    @classmethod
    def validate_repository(cls, v: Optional[str]) -> Optional[str]:
        if v is None:
            return v
        owner, _, name = v.strip().partition("/")
        if not owner or not name or "/" in name:
            raise ValueError(f"repository must look like 'owner/name', got {v!r}")
        return v.strip()

    @field_validator("api_url", "server_url")
    @classmethod
    def strip_trailing_slash(cls, v: str) -> str:
        return v.rstrip("/")

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "SubmissionConfig":
        """Create a configuration from a mapping.

        Raises:
            ConfigurationError: If a value is invalid or a key is unknown.
        """
        try:
            return cls.model_validate(dict(data))
        except ValidationError as exc:
            raise ConfigurationError(f"Invalid configuration: {exc}") from exc

    @classmethod
    def from_env(
        cls,
        environ: Mapping[str, str],
        base: Optional["SubmissionConfig"] = None,
    ) -> "SubmissionConfig":
        """Overlay values from the Actions environment on ``base``.

        Empty variables are ignored, so an unset optional action input keeps
        the default.
        """
        return (base or cls()).merged(env_overrides(environ))

    def merged(self, overrides: Mapping[str, Any]) -> "SubmissionConfig":
        """Return a new config with non-None ``overrides`` applied and validated."""
        data = self.model_dump()
        data.update({k: v for k, v in overrides.items() if v is not None})
        return self.from_dict(data)

    @property
    def correlator(self) -> str:
        parts = [part for part in (self.workflow, self.job) if part]
        return " ".join(parts) or self.detector_name

    def require_submission_fields(self) -> None:
        """Raise ConfigurationError unless everything needed to POST is set."""
        missing = [
            field
            for field in ("token", "repository", "sha", "ref")
            if not getattr(self, field)
        ]
        if missing:
            raise ConfigurationError(
                "Missing configuration for submission: " + ", ".join(missing)
            )


def env_overrides(environ: Mapping[str, str]) -> Dict[str, str]:
    """Collect config values from environment variables (see ENV_FIELDS)."""
    overrides: Dict[str, str] = {}
    for field, names in ENV_FIELDS.items():
        for name in names:
            value = environ.get(name, "").strip()
            if value:
                overrides[field] = value
                break
    return overrides
