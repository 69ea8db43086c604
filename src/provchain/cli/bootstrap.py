"""CLI bootstrap helpers: logging, config, gateway, prompts."""

from __future__ import annotations

import logging
import os
from pathlib import Path

import typer
from rich.logging import RichHandler

from provchain.config import ProvenanceConfig, load_config
from provchain.gateway.node import NodeLedgerGateway

_LOGGING_CONFIGURED = False


def configure_logging(level: int = logging.INFO) -> None:
    """Configure Rich-backed logging once for CLI commands."""
    global _LOGGING_CONFIGURED  # noqa: PLW0603
    if _LOGGING_CONFIGURED:
        return
    logging.basicConfig(
        level=level,
        format="%(message)s",
        handlers=[RichHandler(show_path=False, rich_tracebacks=True)],
    )
    _LOGGING_CONFIGURED = True


def default_config_file() -> Path:
    """Return the config file looked up when none is given.

    Returns:
        `provchain.yaml` in the working directory, or `provchain.json` when
        only that one exists.
    """
    yaml_path = Path.cwd() / "provchain.yaml"
    json_path = Path.cwd() / "provchain.json"
    if not yaml_path.exists() and json_path.exists():
        return json_path
    return yaml_path


def load_cli_config(config_file: Path | None) -> ProvenanceConfig:
    """Load config from file plus process environment and a local `.env`.

    Raises:
        ConfigError: If the config payload is invalid.
    """
    return load_config(
        config_file or default_config_file(),
        environ=os.environ,
        env_file=Path.cwd() / ".env",
    )


def build_node_gateway(config: ProvenanceConfig) -> NodeLedgerGateway:
    """Build the node gateway for configured endpoint.

    Raises:
        ProvenanceError: With CONFIGURATION_MISSING when no node URL is set.
    """
    return NodeLedgerGateway(
        config.require_node_url(), timeout=config.request_timeout_seconds
    )


def prompt_block_id() -> str:
    """Ask the operator for the block id to track."""
    return typer.prompt("Enter BlockId")
