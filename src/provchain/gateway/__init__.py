"""Ledger gateway contract and adapters."""

from provchain.gateway.base import (
    LedgerGateway,
    LedgerRecord,
    TransportKind,
    TransportPayload,
)
from provchain.gateway.memory import InMemoryLedgerGateway
from provchain.gateway.node import NodeLedgerGateway

__all__ = [
    "InMemoryLedgerGateway",
    "LedgerGateway",
    "LedgerRecord",
    "NodeLedgerGateway",
    "TransportKind",
    "TransportPayload",
]
