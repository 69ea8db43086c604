"""Dict-backed ledger gateway for dry runs and tests."""

from __future__ import annotations

import hashlib

from provchain.errors import ProvenanceError, ProvenanceErrorCode
from provchain.gateway.base import LedgerRecord, TransportKind, TransportPayload


class InMemoryLedgerGateway:
    """Keeps records in process memory; ids are `0x` + sha256 hex."""

    def __init__(self) -> None:
        """Initialize empty ledger."""
        self._records: dict[str, LedgerRecord] = {}
        self._sequence = 0

    def seed(self, record: LedgerRecord) -> None:
        """Store a prebuilt record (e.g. a chain root posted elsewhere)."""
        self._records[record.block_id] = record

    def fetch_record(self, block_id: str) -> LedgerRecord:
        """Return the stored record.

        Raises:
            ProvenanceError: With GATEWAY_FAILURE for unknown ids.
        """
        record = self._records.get(block_id)
        if record is None:
            raise ProvenanceError(
                ProvenanceErrorCode.GATEWAY_FAILURE,
                f"Block not found: {block_id}",
                data={"block_id": block_id},
            )
        return record

    def post_record(self, tag: bytes, data: bytes) -> str:
        """Store a tagged-data record under a fresh deterministic id."""
        self._sequence += 1
        digest = hashlib.sha256()
        digest.update(self._sequence.to_bytes(8, "big"))
        digest.update(tag)
        digest.update(data)
        block_id = f"0x{digest.hexdigest()}"
        self._records[block_id] = LedgerRecord(
            block_id=block_id,
            payload=TransportPayload(
                kind=TransportKind.TAGGED_DATA, tag=tag, data=data
            ),
        )
        return block_id

    def records(self) -> list[LedgerRecord]:
        """Return stored records in insertion order."""
        return list(self._records.values())
