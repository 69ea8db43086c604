"""Rich views for session reports and decoded records."""

from __future__ import annotations

from rich.console import Console
from rich.json import JSON
from rich.markup import escape
from rich.panel import Panel
from rich.table import Table

from provchain.payload.envelope import TaggedEnvelope
from provchain.session.models import SessionReport


def render_report(console: Console, report: SessionReport) -> None:
    """Render a finished session as a chain table plus summary panel.

    Args:
        console: Rich console used for output.
        report: Session outcome.
    """
    table = Table(title="Metric Chains", show_header=True, header_style="bold cyan")
    table.add_column("Metric", style="bold")
    table.add_column("Linked", justify="right")
    table.add_column("Dropped", justify="right", style="yellow")
    table.add_column("Tip", style="green")
    for chain in report.chains:
        table.add_row(
            chain.metric_type,
            str(len(chain.linked_block_ids)),
            str(chain.failed_posts),
            chain.tip,
        )
    console.print(table)
    console.print(
        Panel(
            (
                f"Root: {report.root_block_id}\n"
                f"Start: {report.start_block_id}\n"
                f"Delivered: {report.delivered_block_id}\n"
                f"Iterations: {report.iterations}\n"
                f"Wallet: {report.payment_info.wallet_address} "
                f"(cost {report.payment_info.cost})"
            ),
            title="Transportation Delivered",
            border_style="green",
            expand=True,
        )
    )


def render_envelope(console: Console, envelope: TaggedEnvelope) -> None:
    """Render a decoded envelope with its resolved variant.

    Args:
        console: Rich console used for output.
        envelope: Decoded record envelope.
    """
    console.print(
        Panel(
            JSON.from_data(envelope.model_dump(mode="json", by_alias=True)),
            title=escape(f"{envelope.block_type} [{envelope.data.variant}]"),
            border_style="cyan",
            expand=True,
        )
    )
