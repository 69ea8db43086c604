"""Provenance configuration models and loading helpers."""

from __future__ import annotations

import json
from collections.abc import Mapping
from pathlib import Path

import yaml
from pydantic import BaseModel, ConfigDict, Field, ValidationError

from provchain.errors import ProvenanceError, ProvenanceErrorCode

# Environment variable -> config field.
ENV_OVERRIDES: dict[str, str] = {
    "NODE_URL": "node_url",
    "EXPLORER_URL": "explorer_url",
    "INITIAL_BLOCK_ID": "initial_block_id",
    "START_TRANSPORTATION_CID": "start_transportation_file_ref",
    "DELIVER_TRANSPORTATION_CID": "deliver_transportation_file_ref",
    "SAMPLING_BUDGET_SECONDS": "sampling_budget_seconds",
}


class ProvenanceConfig(BaseModel):
    """Root configuration passed into a transportation session."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    node_url: str | None = None
    explorer_url: str | None = None
    initial_block_id: str | None = None
    start_transportation_file_ref: str | None = None
    deliver_transportation_file_ref: str | None = None
    sampling_budget_seconds: float = Field(default=120.0, ge=0)
    sampling_interval_seconds: float = Field(default=0.0, ge=0)
    request_timeout_seconds: float = Field(default=30.0, gt=0)

    def require_node_url(self) -> str:
        """Return the node URL.

        Raises:
            ProvenanceError: With CONFIGURATION_MISSING when it is unset.
        """
        if not self.node_url:
            raise ProvenanceError(
                ProvenanceErrorCode.CONFIGURATION_MISSING,
                "NODE_URL is not configured",
                data={"setting": "node_url"},
            )
        return self.node_url

    def explorer_link(self, block_id: str) -> str | None:
        """Return the human-readable explorer URL for a block, if configured."""
        if not self.explorer_url:
            return None
        return f"{self.explorer_url.rstrip('/')}/block/{block_id}"


class ConfigError(RuntimeError):
    """Raised when config cannot be decoded or validated."""


def _decode_config_payload(path: Path) -> dict[str, object]:
    """Decode config payload from JSON or YAML.

    Args:
        path: Config file path.

    Returns:
        Parsed mapping payload.

    Raises:
        ConfigError: If decode fails or payload is not an object.
    """
    raw = path.read_text(encoding="utf-8")
    if path.suffix.lower() == ".json":
        try:
            payload = json.loads(raw)
        except json.JSONDecodeError as exc:
            raise ConfigError(f"Invalid config JSON: {exc}") from exc
    else:
        try:
            payload = yaml.safe_load(raw)
        except yaml.YAMLError as exc:
            raise ConfigError(f"Invalid config YAML: {exc}") from exc
    if payload is None:
        return {}
    if not isinstance(payload, dict):
        raise ConfigError("Invalid config payload: root must be an object")
    return payload


def read_env_file(path: Path) -> dict[str, str]:
    """Read `KEY=VALUE` lines from a dotenv file; a missing file reads as empty.

    Blank lines and `#` comments are skipped. An `export ` prefix and one pair
    of matching surrounding quotes are removed.
    """
    values: dict[str, str] = {}
    if not path.exists():
        return values
    for raw_line in path.read_text(encoding="utf-8").splitlines():
        line = raw_line.strip()
        if not line or line.startswith("#") or "=" not in line:
            continue
        key, _, value = line.removeprefix("export ").partition("=")
        value = value.strip()
        if len(value) >= 2 and value[0] == value[-1] and value[0] in "'\"":
            value = value[1:-1]
        values[key.strip()] = value
    return values


def load_config(
    path: Path | None = None,
    *,
    environ: Mapping[str, str] | None = None,
    env_file: Path | None = None,
) -> ProvenanceConfig:
    """Load config from an optional file, then apply environment overrides.

    Args:
        path: Optional config file path; a missing file yields defaults.
        environ: Environment mapping; empty values are ignored.
        env_file: Optional dotenv file consulted for variables the environment
            does not set.

    Returns:
        Validated configuration.

    Raises:
        ConfigError: If payload decode or validation fails.
    """
    payload: dict[str, object] = {}
    if path is not None and path.exists():
        payload = _decode_config_payload(path)
    environ = environ or {}
    dotenv = read_env_file(env_file) if env_file is not None else {}
    for env_name, field in ENV_OVERRIDES.items():
        value = environ.get(env_name) or dotenv.get(env_name)
        if value:
            payload[field] = value
    try:
        return ProvenanceConfig.model_validate(payload)
    except ValidationError as exc:
        raise ConfigError(f"Invalid config payload: {exc}") from exc
