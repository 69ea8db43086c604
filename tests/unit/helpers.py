"""Test-only helpers for unit tests. Not part of the provchain API."""

from __future__ import annotations

from collections.abc import Iterable

from provchain.errors import ProvenanceError, ProvenanceErrorCode
from provchain.gateway.base import LedgerRecord, TransportKind, TransportPayload
from provchain.payload import (
    BasicPayload,
    ConsumerPayload,
    DeliveredTransportationPayload,
    DistributorPayload,
    Envelope,
    ExportLocation,
    ManufacturerPayload,
    MetricPayload,
    Payload,
    PaymentInfo,
    ProductInfo,
    RawMaterialsProducerPayload,
    Resource,
    Resources,
    RetailerPayload,
    StartTransportationPayload,
    SupplierPayload,
    encode_envelope,
)

ROOT_ID = "0x" + "a" * 64
OTHER_ID = "0x" + "b" * 64
PAYMENT = PaymentInfo(wallet_address="abc", cost=12.5)


def block_id(n: int) -> str:
    """Deterministic 66-char block id for index n."""
    return f"0x{n:064x}"


def sample_payloads() -> dict[str, Payload]:
    """One fully populated payload per variant, keyed by variant name."""
    product = ProductInfo(info="Steel coil", file_reference="bafy-steel")
    resource = Resource(previous_block=ROOT_ID, transaction_receipt="receipt-1")
    resources = Resources(
        previous_blocks=[ROOT_ID, OTHER_ID],
        transaction_receipts=["receipt-1", "receipt-2"],
    )
    return {
        "basic": BasicPayload("plain note"),
        "raw_materials_producer": RawMaterialsProducerPayload(
            provider_info="Mine Co",
            material_info=product,
            export_timestamp="2024-03-01T10:00:00+00:00",
            export_location=ExportLocation(longitude=-8.61, latitude=41.15),
            payment_info=PAYMENT,
        ),
        "supplier": SupplierPayload(
            supplier_info="Supplier Co",
            processed_material_info=ProductInfo(info="Rolled steel"),
            resources=resources,
            payment_info=PAYMENT,
        ),
        "manufacturer": ManufacturerPayload(
            manufacturer_info="Factory Co",
            product_info=ProductInfo(info="Bicycle frame"),
            resources=resources,
            payment_info=PAYMENT,
        ),
        "distributor": DistributorPayload(
            distributor_info="Distribution Co",
            product_distribution_info=ProductInfo(info="Pallet 7"),
            resource=resource,
            payment_info=PAYMENT,
        ),
        "retailer": RetailerPayload(
            retailer_info="Shop Co",
            product_retail_info=ProductInfo(info="Shelf 3"),
            payment_info=PAYMENT,
            resource=resource,
        ),
        "consumer": ConsumerPayload(consumer_info="Jane", resource=resource),
        "start_transportation": StartTransportationPayload(
            transportation_company_info="Trucks Co",
            transportation_info=ProductInfo(info="Truck 12"),
            start_timestamp="2024-03-02T08:00:00+00:00",
            previous_block=ROOT_ID,
        ),
        "delivered_transportation": DeliveredTransportationPayload(
            product_delivery_info=ProductInfo(info="Delivered to dock 4"),
            delivery_timestamp="2024-03-02T18:00:00+00:00",
            payment_info=PAYMENT,
            metrics=[ROOT_ID, OTHER_ID],
        ),
        "metric": MetricPayload(
            metric_type="Temperature",
            metric_value=21.37,
            measurement_unit="Celsius",
            timestamp="2024-03-02T09:00:00+00:00",
            previous_block=ROOT_ID,
        ),
    }


def tagged_record(
    record_id: str, payload: Payload, *, tag: str = "Test Tag"
) -> LedgerRecord:
    """Build a fetched tagged-data record wrapping payload."""
    body = encode_envelope(Envelope(tag=tag, data=payload))
    return LedgerRecord(
        block_id=record_id,
        payload=TransportPayload(
            kind=TransportKind.TAGGED_DATA, tag=tag.encode("utf-8"), data=body
        ),
    )


class ScriptedGateway:
    """Gateway fake: serves seeded records and fails chosen post attempts."""

    def __init__(
        self,
        records: Iterable[LedgerRecord] = (),
        *,
        failing_posts: Iterable[int] = (),
    ) -> None:
        """Store records and the 1-based post attempt numbers that fail."""
        self._records = {record.block_id: record for record in records}
        self._failing_posts = set(failing_posts)
        self.fetched: list[str] = []
        self.posts: list[tuple[bytes, bytes]] = []
        self.posted_ids: list[str] = []
        self.attempts = 0

    def fetch_record(self, record_id: str) -> LedgerRecord:
        self.fetched.append(record_id)
        if record_id not in self._records:
            raise ProvenanceError(
                ProvenanceErrorCode.GATEWAY_FAILURE, f"unknown {record_id}"
            )
        return self._records[record_id]

    def post_record(self, tag: bytes, data: bytes) -> str:
        self.attempts += 1
        if self.attempts in self._failing_posts:
            raise ProvenanceError(
                ProvenanceErrorCode.GATEWAY_FAILURE,
                f"post {self.attempts} rejected",
            )
        new_id = block_id(1000 + self.attempts)
        self.posts.append((tag, data))
        self.posted_ids.append(new_id)
        return new_id


class ScriptedClock:
    """Monotonic clock fake returning queued readings, then repeating the last."""

    def __init__(self, readings: Iterable[float]) -> None:
        self._readings = list(readings)
        self._last = 0.0

    def __call__(self) -> float:
        if self._readings:
            self._last = self._readings.pop(0)
        return self._last


def iterations_clock(iterations: int, budget: float = 10.0) -> ScriptedClock:
    """Clock that lets the sampling loop run exactly `iterations` times."""
    return ScriptedClock([0.0] + [0.0] * iterations + [budget])
