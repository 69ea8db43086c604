"""Payload codec: envelope models, variants, and wire encoding."""

from provchain.payload.codec import (
    decode_envelope,
    decode_tagged,
    encode_envelope,
    encode_record,
    encode_tag,
    matching_variants,
    resolve_payload,
)
from provchain.payload.envelope import Envelope, TaggedEnvelope
from provchain.payload.models import (
    PAYLOAD_VARIANTS,
    PAYMENT_BEARING_VARIANTS,
    BasicPayload,
    ChainLink,
    ConsumerPayload,
    DeliveredTransportationPayload,
    DistributorPayload,
    ExportLocation,
    ManufacturerPayload,
    MetricPayload,
    Payload,
    PaymentInfo,
    PayloadVariant,
    ProductInfo,
    RawMaterialsProducerPayload,
    Resource,
    Resources,
    RetailerPayload,
    StartTransportationPayload,
    SupplierPayload,
)
from provchain.payload.tags import (
    BlockTag,
    TagRegistry,
    TagRegistryError,
    default_tag_registry,
)

__all__ = [
    "PAYLOAD_VARIANTS",
    "PAYMENT_BEARING_VARIANTS",
    "BasicPayload",
    "BlockTag",
    "ChainLink",
    "ConsumerPayload",
    "DeliveredTransportationPayload",
    "DistributorPayload",
    "Envelope",
    "ExportLocation",
    "ManufacturerPayload",
    "MetricPayload",
    "Payload",
    "PaymentInfo",
    "PayloadVariant",
    "ProductInfo",
    "RawMaterialsProducerPayload",
    "Resource",
    "Resources",
    "RetailerPayload",
    "StartTransportationPayload",
    "SupplierPayload",
    "TagRegistry",
    "TagRegistryError",
    "TaggedEnvelope",
    "decode_envelope",
    "decode_tagged",
    "default_tag_registry",
    "encode_envelope",
    "encode_record",
    "encode_tag",
    "matching_variants",
    "resolve_payload",
]
