"""Chain identifiers, linkage rules, and payment extraction."""

from provchain.chain.block_id import (
    BLOCK_ID_LENGTH,
    BLOCK_ID_PREFIX,
    is_block_id,
    validate_block_id,
)
from provchain.chain.linkage import (
    decode_record,
    extract_payment_info,
    payment_info_of,
    predecessors_of,
    validate_linkage,
)

__all__ = [
    "BLOCK_ID_LENGTH",
    "BLOCK_ID_PREFIX",
    "decode_record",
    "extract_payment_info",
    "is_block_id",
    "payment_info_of",
    "predecessors_of",
    "validate_block_id",
    "validate_linkage",
]
