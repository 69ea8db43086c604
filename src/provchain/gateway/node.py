"""Ledger gateway backed by a node's core REST API over httpx."""

from __future__ import annotations

import logging
from typing import Any

import httpx

from provchain.chain.block_id import is_block_id
from provchain.errors import ProvenanceError, ProvenanceErrorCode
from provchain.gateway.base import LedgerRecord, TransportKind, TransportPayload

_LOGGER = logging.getLogger(__name__)

_BLOCKS_PATH = "/api/core/v2/blocks"
_PROTOCOL_VERSION = 2


def _gateway_failure(message: str, **data: object) -> ProvenanceError:
    return ProvenanceError(ProvenanceErrorCode.GATEWAY_FAILURE, message, data=data)


def _hex_to_bytes(value: object, field: str) -> bytes:
    if value is None:
        return b""
    if not isinstance(value, str) or not value.startswith("0x"):
        raise _gateway_failure(f"Node returned non-hex {field}", field=field)
    try:
        return bytes.fromhex(value[2:])
    except ValueError as exc:
        raise _gateway_failure(f"Node returned invalid hex {field}", field=field) from exc


def _bytes_to_hex(value: bytes) -> str:
    return f"0x{value.hex()}"


class NodeLedgerGateway:
    """Fetch and post tagged-data blocks through a node.

    Parent selection and proof-of-work are left to the node.
    """

    def __init__(
        self,
        node_url: str,
        *,
        timeout: float = 30.0,
        client: httpx.Client | None = None,
    ) -> None:
        """Store node endpoint and HTTP client.

        Args:
            node_url: Node base URL.
            timeout: Request timeout in seconds for the owned client.
            client: Optional preconfigured client (tests, custom transports).
        """
        self._node_url = node_url.rstrip("/")
        self._owns_client = client is None
        self._client = client or httpx.Client(timeout=timeout)

    def close(self) -> None:
        """Close the HTTP client when this gateway created it."""
        if self._owns_client:
            self._client.close()

    def __enter__(self) -> NodeLedgerGateway:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()

    def fetch_record(self, block_id: str) -> LedgerRecord:
        """Fetch a block and expose its outer payload.

        Args:
            block_id: Block identifier.

        Returns:
            Ledger record; payload is None when the block carries none.

        Raises:
            ProvenanceError: With GATEWAY_FAILURE on transport errors, non-2xx
                responses, or malformed node JSON.
        """
        body = self._request("GET", f"{_BLOCKS_PATH}/{block_id}")
        payload = body.get("payload")
        if payload is None:
            return LedgerRecord(block_id=block_id)
        if not isinstance(payload, dict) or not isinstance(payload.get("type"), int):
            raise _gateway_failure("Node returned malformed payload", block_id=block_id)
        kind = payload["type"]
        if kind != TransportKind.TAGGED_DATA:
            return LedgerRecord(block_id=block_id, payload=TransportPayload(kind=kind))
        return LedgerRecord(
            block_id=block_id,
            payload=TransportPayload(
                kind=kind,
                tag=_hex_to_bytes(payload.get("tag"), "tag"),
                data=_hex_to_bytes(payload.get("data"), "data"),
            ),
        )

    def post_record(self, tag: bytes, data: bytes) -> str:
        """Submit a tagged-data block and return the id the node assigned.

        Raises:
            ProvenanceError: With GATEWAY_FAILURE on transport errors, non-2xx
                responses, or a response without a well-formed block id.
        """
        block = {
            "protocolVersion": _PROTOCOL_VERSION,
            "payload": {
                "type": int(TransportKind.TAGGED_DATA),
                "tag": _bytes_to_hex(tag),
                "data": _bytes_to_hex(data),
            },
        }
        body = self._request("POST", _BLOCKS_PATH, json=block)
        block_id = body.get("blockId")
        if not isinstance(block_id, str):
            raise _gateway_failure("Node response is missing blockId")
        if not is_block_id(block_id):
            raise _gateway_failure(
                f"Node returned malformed blockId {block_id!r}", block_id=block_id
            )
        return block_id

    def _request(self, method: str, path: str, **kwargs: Any) -> dict[str, Any]:
        url = f"{self._node_url}{path}"
        _LOGGER.debug("%s %s", method, url)
        try:
            response = self._client.request(method, url, **kwargs)
            response.raise_for_status()
            body = response.json()
        except httpx.HTTPStatusError as exc:
            raise _gateway_failure(
                f"Node rejected {method} {path}: HTTP {exc.response.status_code}",
                status_code=exc.response.status_code,
            ) from exc
        except httpx.HTTPError as exc:
            raise _gateway_failure(f"Node request failed: {exc}") from exc
        except ValueError as exc:
            raise _gateway_failure(f"Node returned invalid JSON: {exc}") from exc
        if not isinstance(body, dict):
            raise _gateway_failure("Node response must be a JSON object")
        return body
