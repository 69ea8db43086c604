"""Canonical byte form of record bodies."""

from __future__ import annotations

import json
from collections.abc import Mapping
from typing import Any

from pydantic import BaseModel

_CANONICAL_DUMPS: dict[str, Any] = {
    "sort_keys": True,
    "separators": (",", ":"),
    "ensure_ascii": False,
    "allow_nan": False,
}


def wire_dict(model: BaseModel) -> dict[str, Any]:
    """Return the JSON-mode dump of a model under its camelCase wire aliases."""
    return model.model_dump(mode="json", by_alias=True)


def canonical_json_bytes(obj: BaseModel | Mapping[str, Any]) -> bytes:
    """Serialize a record body to canonical JSON bytes.

    Record bodies are JSON objects. Keys are sorted at every level and no
    whitespace is emitted, so equal envelopes always encode to equal bytes.
    Non-ASCII text stays UTF-8.

    Args:
        obj: Wire model or already-built JSON object.

    Returns:
        UTF-8 encoded canonical JSON.

    Raises:
        TypeError: When obj is not a model or mapping, or holds a value JSON
            cannot carry.
        ValueError: On NaN or Infinity.
    """
    if isinstance(obj, BaseModel):
        data = wire_dict(obj)
    elif isinstance(obj, Mapping):
        data = dict(obj)
    else:
        raise TypeError(
            f"Record bodies must be JSON objects, got {type(obj).__name__}"
        )
    return json.dumps(data, **_CANONICAL_DUMPS).encode("utf-8")
