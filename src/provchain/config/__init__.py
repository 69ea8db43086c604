"""Provenance configuration loading."""

from provchain.config.settings import (
    ENV_OVERRIDES,
    ConfigError,
    ProvenanceConfig,
    load_config,
    read_env_file,
)

__all__ = [
    "ENV_OVERRIDES",
    "ConfigError",
    "ProvenanceConfig",
    "load_config",
    "read_env_file",
]
