"""Unit tests for the node REST gateway using httpx mock transports."""

from __future__ import annotations

import json
from collections.abc import Callable

import httpx
import pytest

from provchain.errors import ProvenanceError, ProvenanceErrorCode
from provchain.gateway import NodeLedgerGateway, TransportKind
from tests.unit.helpers import ROOT_ID

_NODE = "https://node.example"


def _gateway(handler: Callable[[httpx.Request], httpx.Response]) -> NodeLedgerGateway:
    client = httpx.Client(transport=httpx.MockTransport(handler))
    return NodeLedgerGateway(f"{_NODE}/", client=client)


@pytest.mark.unit
def test_fetch_record_decodes_hex_tagged_data() -> None:
    """Tagged-data blocks expose tag and data as raw bytes."""
    seen: list[httpx.Request] = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(request)
        return httpx.Response(
            200,
            json={
                "protocolVersion": 2,
                "parents": [],
                "payload": {
                    "type": 5,
                    "tag": "0x" + b"tag".hex(),
                    "data": "0x" + b'{"a":1}'.hex(),
                },
                "nonce": "0",
            },
        )

    record = _gateway(handler).fetch_record(ROOT_ID)

    assert str(seen[0].url) == f"{_NODE}/api/core/v2/blocks/{ROOT_ID}"
    assert record.block_id == ROOT_ID
    assert record.payload is not None
    assert record.payload.kind == TransportKind.TAGGED_DATA
    assert record.payload.tag == b"tag"
    assert record.payload.data == b'{"a":1}'


@pytest.mark.unit
def test_fetch_record_without_payload() -> None:
    """Blocks without payload map to a record with payload None."""
    gateway = _gateway(lambda request: httpx.Response(200, json={"parents": []}))

    assert gateway.fetch_record(ROOT_ID).payload is None


@pytest.mark.unit
def test_fetch_record_keeps_foreign_payload_kind() -> None:
    """Non tagged-data payloads keep their kind and no buffers."""
    gateway = _gateway(
        lambda request: httpx.Response(200, json={"payload": {"type": 6}})
    )

    record = gateway.fetch_record(ROOT_ID)

    assert record.payload is not None
    assert record.payload.kind == TransportKind.TRANSACTION
    assert record.payload.data == b""


@pytest.mark.unit
def test_post_record_sends_hex_tagged_data_block() -> None:
    """Posting sends a tagged-data block and returns the node's block id."""
    bodies: list[dict[str, object]] = []

    def handler(request: httpx.Request) -> httpx.Response:
        assert request.method == "POST"
        bodies.append(json.loads(request.content))
        return httpx.Response(201, json={"blockId": ROOT_ID})

    block_id = _gateway(handler).post_record(b"t", b"d")

    assert block_id == ROOT_ID
    assert bodies == [
        {
            "protocolVersion": 2,
            "payload": {"type": 5, "tag": "0x74", "data": "0x64"},
        }
    ]


@pytest.mark.unit
@pytest.mark.parametrize(
    "handler",
    [
        lambda request: httpx.Response(404, json={"error": "not found"}),
        lambda request: httpx.Response(200, content=b"not json"),
        lambda request: httpx.Response(200, json=["list"]),
        lambda request: httpx.Response(200, json={"payload": {"type": 5, "data": "zz"}}),
        lambda request: httpx.Response(200, json={"payload": "oops"}),
    ],
    ids=["http_404", "invalid_json", "non_object", "bad_hex", "bad_payload"],
)
def test_fetch_failures_are_gateway_failures(
    handler: Callable[[httpx.Request], httpx.Response],
) -> None:
    """Every node-side problem surfaces as GATEWAY_FAILURE."""
    with pytest.raises(ProvenanceError) as exc_info:
        _gateway(handler).fetch_record(ROOT_ID)

    assert exc_info.value.code == ProvenanceErrorCode.GATEWAY_FAILURE


@pytest.mark.unit
def test_transport_errors_are_gateway_failures() -> None:
    """Connection problems surface as GATEWAY_FAILURE."""

    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("refused", request=request)

    with pytest.raises(ProvenanceError) as exc_info:
        _gateway(handler).post_record(b"t", b"d")

    assert exc_info.value.code == ProvenanceErrorCode.GATEWAY_FAILURE


@pytest.mark.unit
def test_post_record_requires_block_id_in_response() -> None:
    """A 2xx without blockId is still a failure."""
    gateway = _gateway(lambda request: httpx.Response(201, json={}))

    with pytest.raises(ProvenanceError, match="missing blockId"):
        gateway.post_record(b"t", b"d")


@pytest.mark.unit
def test_post_record_rejects_malformed_block_id() -> None:
    """A blockId that is not 0x + 64 hex is a gateway failure."""
    gateway = _gateway(lambda request: httpx.Response(201, json={"blockId": "0x12"}))

    with pytest.raises(ProvenanceError, match="malformed blockId") as exc_info:
        gateway.post_record(b"t", b"d")

    assert exc_info.value.code == ProvenanceErrorCode.GATEWAY_FAILURE
    assert exc_info.value.data == {"block_id": "0x12"}
