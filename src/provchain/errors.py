"""Deterministic provenance error contracts."""

from __future__ import annotations

from enum import StrEnum


class ProvenanceErrorCode(StrEnum):
    """Stable provenance error codes."""

    CONFIGURATION_MISSING = "configuration_missing"
    INVALID_BLOCK_ID_FORMAT = "invalid_block_id_format"
    MISSING_PAYLOAD = "missing_payload"
    UNEXPECTED_TRANSPORT_TYPE = "unexpected_transport_type"
    MALFORMED_PAYLOAD = "malformed_payload"
    UNSUPPORTED_PAYLOAD_FOR_PAYMENT_EXTRACTION = (
        "unsupported_payload_for_payment_extraction"
    )
    GATEWAY_FAILURE = "gateway_failure"


class ProvenanceError(RuntimeError):
    """Provenance failure with stable deterministic code."""

    def __init__(
        self,
        code: ProvenanceErrorCode,
        message: str,
        *,
        data: dict[str, object] | None = None,
    ) -> None:
        """Create provenance failure.

        Args:
            code: Stable provenance error code.
            message: Human-readable error message.
            data: Optional structured payload for diagnostics.
        """
        super().__init__(message)
        self.code = code
        self.data = data or {}
