"""Payload variant models for supply-chain ledger records (pure data, no IO)."""

from __future__ import annotations

from dataclasses import dataclass
from enum import StrEnum
from typing import ClassVar

from pydantic import (
    BaseModel,
    ConfigDict,
    RootModel,
    StrictFloat,
    StrictStr,
    ValidationError,
    model_validator,
)
from pydantic.alias_generators import to_camel


class PayloadVariant(StrEnum):
    """Closed set of payload variant names, in decode trial order."""

    BASIC = "basic"
    RAW_MATERIALS_PRODUCER = "raw_materials_producer"
    SUPPLIER = "supplier"
    MANUFACTURER = "manufacturer"
    DISTRIBUTOR = "distributor"
    RETAILER = "retailer"
    CONSUMER = "consumer"
    START_TRANSPORTATION = "start_transportation"
    DELIVERED_TRANSPORTATION = "delivered_transportation"
    METRIC = "metric"


@dataclass(frozen=True)
class ChainLink:
    """One predecessor reference: block id plus optional transaction receipt."""

    block_id: str
    receipt: str | None = None


class WireModel(BaseModel):
    """Base for camelCase wire models.

    Unknown fields are rejected and numbers are `StrictFloat`, so a body whose
    field types differ from a variant's signature does not match it.
    """

    model_config = ConfigDict(
        extra="forbid",
        frozen=True,
        alias_generator=to_camel,
        populate_by_name=True,
        allow_inf_nan=False,
    )


class ProductInfo(WireModel):
    """Free-text product description with optional external content pointer."""

    info: str
    file_reference: str | None = None


class PaymentInfo(WireModel):
    """Wallet that receives payment and the amount owed."""

    wallet_address: str
    cost: StrictFloat


class ExportLocation(WireModel):
    """Geographic export point."""

    longitude: StrictFloat
    latitude: StrictFloat


class Resource(WireModel):
    """Single predecessor link."""

    previous_block: str
    transaction_receipt: str

    def link(self) -> ChainLink:
        """Return the uniform chain link for this resource."""
        return ChainLink(self.previous_block, self.transaction_receipt)


class Resources(WireModel):
    """Parallel predecessor and receipt lists; index i of both belong together."""

    previous_blocks: list[str]
    transaction_receipts: list[str]

    @model_validator(mode="after")
    def _check_parallel_lengths(self) -> Resources:
        if len(self.previous_blocks) != len(self.transaction_receipts):
            raise ValueError(
                "previousBlocks and transactionReceipts must have equal length "
                f"({len(self.previous_blocks)} != {len(self.transaction_receipts)})"
            )
        return self

    def links(self) -> tuple[ChainLink, ...]:
        """Return chain links in declared order."""
        return tuple(
            ChainLink(block_id, receipt)
            for block_id, receipt in zip(
                self.previous_blocks, self.transaction_receipts, strict=True
            )
        )


class BasicPayload(RootModel[StrictStr]):
    """Plain-text fallback payload."""

    model_config = ConfigDict(frozen=True)

    variant: ClassVar[PayloadVariant] = PayloadVariant.BASIC

    def predecessors(self) -> tuple[ChainLink, ...]:
        """Plain text carries no linkage."""
        return ()


class RawMaterialsProducerPayload(WireModel):
    """Chain root: raw material export by a provider."""

    variant: ClassVar[PayloadVariant] = PayloadVariant.RAW_MATERIALS_PRODUCER

    provider_info: str
    material_info: ProductInfo
    export_timestamp: str
    export_location: ExportLocation
    payment_info: PaymentInfo

    def predecessors(self) -> tuple[ChainLink, ...]:
        """Roots have no predecessor."""
        return ()


class SupplierPayload(WireModel):
    """Processed material aggregated from several predecessors."""

    variant: ClassVar[PayloadVariant] = PayloadVariant.SUPPLIER

    supplier_info: str
    processed_material_info: ProductInfo
    resources: Resources
    payment_info: PaymentInfo

    def predecessors(self) -> tuple[ChainLink, ...]:
        return self.resources.links()


class ManufacturerPayload(WireModel):
    """Manufactured product aggregated from several predecessors."""

    variant: ClassVar[PayloadVariant] = PayloadVariant.MANUFACTURER

    manufacturer_info: str
    product_info: ProductInfo
    resources: Resources
    payment_info: PaymentInfo

    def predecessors(self) -> tuple[ChainLink, ...]:
        return self.resources.links()


class DistributorPayload(WireModel):
    """Distribution step with a single predecessor."""

    variant: ClassVar[PayloadVariant] = PayloadVariant.DISTRIBUTOR

    distributor_info: str
    product_distribution_info: ProductInfo
    resource: Resource
    payment_info: PaymentInfo

    def predecessors(self) -> tuple[ChainLink, ...]:
        return (self.resource.link(),)


class RetailerPayload(WireModel):
    """Retail step with a single predecessor."""

    variant: ClassVar[PayloadVariant] = PayloadVariant.RETAILER

    retailer_info: str
    product_retail_info: ProductInfo
    payment_info: PaymentInfo
    resource: Resource

    def predecessors(self) -> tuple[ChainLink, ...]:
        return (self.resource.link(),)


class ConsumerPayload(WireModel):
    """Terminal purchase; carries no payment info."""

    variant: ClassVar[PayloadVariant] = PayloadVariant.CONSUMER

    consumer_info: str
    resource: Resource

    def predecessors(self) -> tuple[ChainLink, ...]:
        return (self.resource.link(),)


class StartTransportationPayload(WireModel):
    """Transportation leg opened against the tracked block."""

    variant: ClassVar[PayloadVariant] = PayloadVariant.START_TRANSPORTATION

    transportation_company_info: str
    transportation_info: ProductInfo
    start_timestamp: str
    previous_block: str

    def predecessors(self) -> tuple[ChainLink, ...]:
        return (ChainLink(self.previous_block),)


class DeliveredTransportationPayload(WireModel):
    """Transportation leg closed; `metrics` holds metric sub-chain tips."""

    variant: ClassVar[PayloadVariant] = PayloadVariant.DELIVERED_TRANSPORTATION

    product_delivery_info: ProductInfo
    delivery_timestamp: str
    payment_info: PaymentInfo
    metrics: list[str]

    def predecessors(self) -> tuple[ChainLink, ...]:
        return tuple(ChainLink(block_id) for block_id in self.metrics)


class MetricPayload(WireModel):
    """One sensor reading linked onto its metric sub-chain."""

    variant: ClassVar[PayloadVariant] = PayloadVariant.METRIC

    metric_type: str
    metric_value: StrictFloat
    measurement_unit: str
    timestamp: str
    previous_block: str

    def predecessors(self) -> tuple[ChainLink, ...]:
        return (ChainLink(self.previous_block),)


Payload = (
    BasicPayload
    | RawMaterialsProducerPayload
    | SupplierPayload
    | ManufacturerPayload
    | DistributorPayload
    | RetailerPayload
    | ConsumerPayload
    | StartTransportationPayload
    | DeliveredTransportationPayload
    | MetricPayload
)

# Decode trial order. Do not reorder: first structural match wins.
PAYLOAD_VARIANTS: tuple[type[Payload], ...] = (
    BasicPayload,
    RawMaterialsProducerPayload,
    SupplierPayload,
    ManufacturerPayload,
    DistributorPayload,
    RetailerPayload,
    ConsumerPayload,
    StartTransportationPayload,
    DeliveredTransportationPayload,
    MetricPayload,
)

PAYMENT_BEARING_VARIANTS: tuple[type[Payload], ...] = (
    RawMaterialsProducerPayload,
    SupplierPayload,
    ManufacturerPayload,
    DistributorPayload,
    RetailerPayload,
)


def try_variant(model: type[Payload], obj: object) -> Payload | None:
    """Validate obj against one variant; return None when it does not fit.

    Args:
        model: Variant model class.
        obj: Decoded JSON value.

    Returns:
        Typed payload, or None on structural mismatch.
    """
    try:
        return model.model_validate(obj)
    except ValidationError:
        return None


def first_matching_payload(obj: object) -> Payload | None:
    """Run the ordered trial and return the first variant that accepts obj."""
    if isinstance(obj, PAYLOAD_VARIANTS):
        return obj
    for model in PAYLOAD_VARIANTS:
        payload = try_variant(model, obj)
        if payload is not None:
            return payload
    return None
