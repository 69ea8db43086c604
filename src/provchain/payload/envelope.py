"""Envelope and TaggedEnvelope: outer wrappers around a typed payload."""

from __future__ import annotations

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, field_validator

from provchain.payload.models import Payload, first_matching_payload


def _resolve_data(value: object) -> object:
    payload = first_matching_payload(value)
    if payload is None:
        raise ValueError("data does not match any payload variant")
    return payload


class Envelope(BaseModel):
    """Outbound wrapper: `{tag, data}`."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    tag: str
    data: Payload

    @field_validator("data", mode="before")
    @classmethod
    def _resolve_payload(cls, value: object) -> object:
        return _resolve_data(value)


class TaggedEnvelope(BaseModel):
    """Inbound wrapper: `{blockType, data}` as read back from a posted record.

    The `tag` spelling is accepted on input so envelopes this package encodes
    decode into the same shape.
    """

    model_config = ConfigDict(extra="forbid", frozen=True, populate_by_name=True)

    block_type: str = Field(
        validation_alias=AliasChoices("blockType", "tag", "block_type"),
        serialization_alias="blockType",
    )
    data: Payload

    @field_validator("data", mode="before")
    @classmethod
    def _resolve_payload(cls, value: object) -> object:
        return _resolve_data(value)
