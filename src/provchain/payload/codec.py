"""Payload codec: envelopes to wire bytes and back."""

from __future__ import annotations

import json

from pydantic import ValidationError

from provchain.errors import ProvenanceError, ProvenanceErrorCode
from provchain.payload.canonical import canonical_json_bytes
from provchain.payload.envelope import Envelope, TaggedEnvelope
from provchain.payload.models import (
    PAYLOAD_VARIANTS,
    Payload,
    first_matching_payload,
    try_variant,
)
from provchain.payload.tags import TagRegistry


def _malformed(message: str, **data: object) -> ProvenanceError:
    return ProvenanceError(ProvenanceErrorCode.MALFORMED_PAYLOAD, message, data=data)


def encode_tag(tag: str) -> bytes:
    """Encode a record tag as UTF-8 bytes for the transport tag buffer."""
    return tag.encode("utf-8")


def encode_envelope(envelope: Envelope) -> bytes:
    """Encode an envelope as canonical JSON bytes for the transport data buffer.

    Args:
        envelope: Outbound envelope.

    Returns:
        Canonical UTF-8 JSON body.

    Raises:
        ProvenanceError: If the payload holds values JSON cannot carry.
    """
    try:
        return canonical_json_bytes(envelope)
    except (TypeError, ValueError) as exc:
        raise _malformed(f"Cannot encode envelope: {exc}", tag=envelope.tag) from exc


def encode_record(envelope: Envelope) -> tuple[bytes, bytes]:
    """Return `(tag_bytes, body_bytes)` ready for posting."""
    return encode_tag(envelope.tag), encode_envelope(envelope)


def resolve_payload(obj: object) -> Payload:
    """Resolve a decoded JSON value to the first structurally matching variant.

    Args:
        obj: Decoded JSON value of an envelope's `data` field.

    Returns:
        Typed payload.

    Raises:
        ProvenanceError: With MALFORMED_PAYLOAD when no variant matches.
    """
    payload = first_matching_payload(obj)
    if payload is None:
        raise _malformed("Payload does not match any known variant")
    return payload


def matching_variants(obj: object) -> list[type[Payload]]:
    """Return every variant that accepts obj, in trial order."""
    return [model for model in PAYLOAD_VARIANTS if try_variant(model, obj) is not None]


def decode_envelope(body: bytes) -> TaggedEnvelope:
    """Decode a record body into a TaggedEnvelope.

    Args:
        body: Raw record data buffer.

    Returns:
        Decoded envelope with a typed payload.

    Raises:
        ProvenanceError: With MALFORMED_PAYLOAD on invalid UTF-8, invalid JSON,
            wrong envelope shape, or a payload that matches no variant.
    """
    try:
        text = body.decode("utf-8")
    except UnicodeDecodeError as exc:
        raise _malformed(f"Record body is not valid UTF-8: {exc}") from exc
    try:
        raw = json.loads(text)
    except json.JSONDecodeError as exc:
        raise _malformed(f"Record body is not valid JSON: {exc}") from exc
    if not isinstance(raw, dict):
        raise _malformed("Record body must be a JSON object")
    try:
        return TaggedEnvelope.model_validate(raw)
    except ValidationError as exc:
        raise _malformed(f"Invalid record envelope: {exc}") from exc


def decode_tagged(body: bytes, registry: TagRegistry) -> TaggedEnvelope:
    """Decode a body and check a registered tag agrees with the decoded variant.

    Unregistered tags are accepted as-is.

    Args:
        body: Raw record data buffer.
        registry: Tag registry to consult.

    Returns:
        Decoded envelope.

    Raises:
        ProvenanceError: With MALFORMED_PAYLOAD on decode failure or when the
            payload variant disagrees with the registered tag.
    """
    envelope = decode_envelope(body)
    if not registry.accepts(envelope.block_type, envelope.data):
        expected = registry.resolve(envelope.block_type)
        raise _malformed(
            f"Tag {envelope.block_type!r} expects {expected.variant} payload, "
            f"got {envelope.data.variant}",
            tag=envelope.block_type,
            variant=str(envelope.data.variant),
        )
    return envelope
