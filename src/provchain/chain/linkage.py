"""Chain linkage rules and payment extraction from fetched records."""

from __future__ import annotations

from provchain.errors import ProvenanceError, ProvenanceErrorCode
from provchain.gateway.base import LedgerRecord, TransportKind
from provchain.payload.codec import decode_envelope, decode_tagged
from provchain.payload.envelope import TaggedEnvelope
from provchain.payload.tags import TagRegistry
from provchain.payload.models import (
    PAYMENT_BEARING_VARIANTS,
    BasicPayload,
    ChainLink,
    ConsumerPayload,
    DeliveredTransportationPayload,
    DistributorPayload,
    ManufacturerPayload,
    MetricPayload,
    Payload,
    PaymentInfo,
    RawMaterialsProducerPayload,
    RetailerPayload,
    StartTransportationPayload,
    SupplierPayload,
)

_ROOT_VARIANTS = (BasicPayload, RawMaterialsProducerPayload)
_SINGLE_PREDECESSOR_VARIANTS = (
    DistributorPayload,
    RetailerPayload,
    ConsumerPayload,
    StartTransportationPayload,
    MetricPayload,
)
_MULTI_PREDECESSOR_VARIANTS = (
    SupplierPayload,
    ManufacturerPayload,
    DeliveredTransportationPayload,
)


def predecessors_of(payload: Payload) -> tuple[ChainLink, ...]:
    """Return the ordered predecessor links of a payload."""
    return payload.predecessors()


def validate_linkage(payload: Payload) -> tuple[ChainLink, ...]:
    """Check the predecessor count a variant must carry.

    Roots carry none, single-predecessor variants exactly one, and
    aggregating variants at least one.

    Args:
        payload: Typed payload.

    Returns:
        The validated predecessor links.

    Raises:
        ProvenanceError: With MALFORMED_PAYLOAD when the count is wrong.
    """
    links = payload.predecessors()
    if isinstance(payload, _ROOT_VARIANTS):
        expected_ok = not links
    elif isinstance(payload, _SINGLE_PREDECESSOR_VARIANTS):
        expected_ok = len(links) == 1
    elif isinstance(payload, _MULTI_PREDECESSOR_VARIANTS):
        expected_ok = len(links) >= 1
    else:  # pragma: no cover - closed variant set
        expected_ok = False
    if not expected_ok:
        raise ProvenanceError(
            ProvenanceErrorCode.MALFORMED_PAYLOAD,
            f"{payload.variant} payload has {len(links)} predecessor link(s)",
            data={"variant": str(payload.variant), "links": len(links)},
        )
    return links


def decode_record(
    record: LedgerRecord, registry: TagRegistry | None = None
) -> TaggedEnvelope:
    """Decode the tagged-data body of a fetched record.

    Args:
        record: Fetched ledger record.
        registry: When given, a registered tag must agree with the decoded
            variant.

    Returns:
        Decoded envelope.

    Raises:
        ProvenanceError: MISSING_PAYLOAD when the record has no payload,
            UNEXPECTED_TRANSPORT_TYPE when it is not tagged data, and
            MALFORMED_PAYLOAD when the body does not decode or contradicts
            its tag.
    """
    if record.payload is None:
        raise ProvenanceError(
            ProvenanceErrorCode.MISSING_PAYLOAD,
            "Block has no payload",
            data={"block_id": record.block_id},
        )
    if record.payload.kind != TransportKind.TAGGED_DATA:
        raise ProvenanceError(
            ProvenanceErrorCode.UNEXPECTED_TRANSPORT_TYPE,
            "Block payload is not tagged data",
            data={"block_id": record.block_id, "kind": record.payload.kind},
        )
    if registry is None:
        return decode_envelope(record.payload.data)
    return decode_tagged(record.payload.data, registry)


def payment_info_of(payload: Payload) -> PaymentInfo:
    """Return the payment info embedded in a payment-bearing payload.

    Raises:
        ProvenanceError: With UNSUPPORTED_PAYLOAD_FOR_PAYMENT_EXTRACTION for
            variants that carry no payment info for the next leg.
    """
    if not isinstance(payload, PAYMENT_BEARING_VARIANTS):
        raise ProvenanceError(
            ProvenanceErrorCode.UNSUPPORTED_PAYLOAD_FOR_PAYMENT_EXTRACTION,
            "Block payload does not contain payment info data",
            data={"variant": str(payload.variant)},
        )
    return payload.payment_info


def extract_payment_info(record: LedgerRecord) -> PaymentInfo:
    """Decode a fetched record and return its payment info.

    Only raw materials producer, supplier, manufacturer, distributor and
    retailer records are accepted as the start of a transportation leg.
    """
    return payment_info_of(decode_record(record).data)
