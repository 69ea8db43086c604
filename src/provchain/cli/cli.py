"""Typer CLI entrypoint for provchain."""

from __future__ import annotations

from pathlib import Path
from typing import Annotated

import typer
from rich.console import Console
from rich.markup import escape

from provchain.chain.block_id import validate_block_id
from provchain.chain.linkage import decode_record
from provchain.cli.bootstrap import (
    build_node_gateway,
    configure_logging,
    load_cli_config,
    prompt_block_id,
)
from provchain.cli.rendering import render_envelope, render_report
from provchain.config import ConfigError, ProvenanceConfig
from provchain.errors import ProvenanceError
from provchain.payload.codec import decode_tagged
from provchain.payload.tags import default_tag_registry
from provchain.session.orchestrator import TransportationSession

app = typer.Typer(help="Supply-chain provenance CLI")
_CONSOLE = Console()

_ConfigFileOption = Annotated[
    Path | None,
    typer.Option(
        file_okay=True,
        dir_okay=False,
        help="Path to provchain config YAML/JSON file.",
    ),
]


def _fail(exc: Exception) -> typer.Exit:
    """Print a failure line and build the matching exit.

    Args:
        exc: Provenance or config failure.

    Returns:
        Exit with status 1.
    """
    code = getattr(exc, "code", "config_invalid")
    _CONSOLE.print(f"[bold red]{escape(f'Error [{code}]: {exc}')}[/bold red]")
    return typer.Exit(code=1)


def _load(config_file: Path | None) -> ProvenanceConfig:
    try:
        return load_cli_config(config_file)
    except ConfigError as exc:
        raise _fail(exc) from exc


@app.command("track")
def track_command(
    config_file: _ConfigFileOption = None,
    block_id: Annotated[
        str | None,
        typer.Option(help="Id of the block the transportation leg starts from."),
    ] = None,
    budget: Annotated[
        float | None,
        typer.Option(min=0, help="Sampling budget in seconds."),
    ] = None,
    interval: Annotated[
        float | None,
        typer.Option(min=0, help="Pause between sampling iterations in seconds."),
    ] = None,
) -> None:
    """Start a transportation leg, sample metrics, and post the delivery.

    Args:
        config_file: Optional config file path override.
        block_id: Optional root block id override.
        budget: Optional sampling budget override.
        interval: Optional sampling interval override.

    Raises:
        Exit: With status 1 when the session fails.
    """
    configure_logging()
    config = _load(config_file)
    overrides: dict[str, object] = {}
    if block_id is not None:
        overrides["initial_block_id"] = block_id
    if budget is not None:
        overrides["sampling_budget_seconds"] = budget
    if interval is not None:
        overrides["sampling_interval_seconds"] = interval
    config = config.model_copy(update=overrides)
    try:
        with build_node_gateway(config) as gateway:
            session = TransportationSession(
                config=config, gateway=gateway, prompt=prompt_block_id
            )
            report = session.run()
    except ProvenanceError as exc:
        raise _fail(exc) from exc
    render_report(_CONSOLE, report)


@app.command("show")
def show_command(
    block_id: Annotated[str, typer.Argument(help="Block id to fetch.")],
    config_file: _ConfigFileOption = None,
) -> None:
    """Fetch a block from the node and print its decoded payload.

    Args:
        block_id: Block id to fetch.
        config_file: Optional config file path override.

    Raises:
        Exit: With status 1 when fetching or decoding fails.
    """
    configure_logging()
    config = _load(config_file)
    try:
        checked_id = validate_block_id(block_id)
        with build_node_gateway(config) as gateway:
            record = gateway.fetch_record(checked_id)
        envelope = decode_record(record, default_tag_registry())
    except ProvenanceError as exc:
        raise _fail(exc) from exc
    render_envelope(_CONSOLE, envelope)


@app.command("decode")
def decode_command(
    body_file: Annotated[
        Path,
        typer.Argument(
            exists=True, file_okay=True, dir_okay=False, help="Record body file."
        ),
    ],
) -> None:
    """Decode a record body stored in a local file.

    Args:
        body_file: File holding the raw record body.

    Raises:
        Exit: With status 1 when the body does not decode.
    """
    configure_logging()
    try:
        envelope = decode_tagged(body_file.read_bytes(), default_tag_registry())
    except ProvenanceError as exc:
        raise _fail(exc) from exc
    render_envelope(_CONSOLE, envelope)


def main() -> None:
    """Console script entrypoint."""
    app()
