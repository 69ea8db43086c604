"""Ledger gateway contract: fetch and post raw records."""

from __future__ import annotations

from dataclasses import dataclass
from enum import IntEnum
from typing import Protocol


class TransportKind(IntEnum):
    """Node protocol payload type codes."""

    TREASURY_TRANSACTION = 4
    TAGGED_DATA = 5
    TRANSACTION = 6
    MILESTONE = 7


@dataclass(frozen=True)
class TransportPayload:
    """Outer transport payload of a ledger record."""

    kind: int
    tag: bytes = b""
    data: bytes = b""


@dataclass(frozen=True)
class LedgerRecord:
    """Record as fetched from the ledger; payload may be absent."""

    block_id: str
    payload: TransportPayload | None = None


class LedgerGateway(Protocol):
    """Minimal ledger access used by transportation sessions.

    Adapters report failures as `ProvenanceError`. Sessions wrap any other
    exception raised here as GATEWAY_FAILURE.
    """

    def fetch_record(self, block_id: str) -> LedgerRecord:
        """Fetch one record by id.

        Args:
            block_id: Record identifier.

        Raises:
            ProvenanceError: With GATEWAY_FAILURE when the ledger cannot serve it.
        """

    def post_record(self, tag: bytes, data: bytes) -> str:
        """Post a tagged-data record and return its id.

        Args:
            tag: Tag buffer.
            data: Body buffer.

        Raises:
            ProvenanceError: With GATEWAY_FAILURE when submission fails.
        """
