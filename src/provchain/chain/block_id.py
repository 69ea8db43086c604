"""Block identifier shape check."""

from __future__ import annotations

import re

from provchain.errors import ProvenanceError, ProvenanceErrorCode

BLOCK_ID_PREFIX = "0x"
BLOCK_ID_LENGTH = 66

_HEX_BODY = re.compile(r"[0-9a-fA-F]{64}")


def validate_block_id(raw: str) -> str:
    """Return the trimmed block id or raise when its shape is wrong.

    Args:
        raw: Candidate identifier, e.g. from configuration or a prompt.

    Returns:
        Identifier without surrounding whitespace.

    Raises:
        ProvenanceError: With INVALID_BLOCK_ID_FORMAT when the id does not
            start with `0x` followed by 64 hex digits.
    """
    block_id = raw.strip()
    if not block_id.startswith(BLOCK_ID_PREFIX):
        raise ProvenanceError(
            ProvenanceErrorCode.INVALID_BLOCK_ID_FORMAT,
            f"BlockId must start with {BLOCK_ID_PREFIX}",
            data={"block_id": block_id},
        )
    if len(block_id) != BLOCK_ID_LENGTH:
        raise ProvenanceError(
            ProvenanceErrorCode.INVALID_BLOCK_ID_FORMAT,
            f"BlockId must be {BLOCK_ID_LENGTH} characters long",
            data={"block_id": block_id, "length": len(block_id)},
        )
    if _HEX_BODY.fullmatch(block_id[len(BLOCK_ID_PREFIX) :]) is None:
        raise ProvenanceError(
            ProvenanceErrorCode.INVALID_BLOCK_ID_FORMAT,
            "BlockId must be hex after the prefix",
            data={"block_id": block_id},
        )
    return block_id


def is_block_id(raw: str) -> bool:
    """Return whether raw has the block id shape."""
    try:
        validate_block_id(raw)
    except ProvenanceError:
        return False
    return True
