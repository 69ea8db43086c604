"""Transportation session state and report models."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import StrEnum

from pydantic import BaseModel, ConfigDict

from provchain.payload.models import PaymentInfo
from provchain.sampling.sampler import SamplingProfile


class SessionState(StrEnum):
    """Transportation session lifecycle states."""

    INIT = "init"
    AWAITING_START_BLOCK = "awaiting_start_block"
    TRANSPORTATION_STARTED = "transportation_started"
    SAMPLING = "sampling"
    DELIVERING = "delivering"
    DONE = "done"
    FAILED = "failed"


@dataclass
class MetricChain:
    """Mutable tip pointer for one metric sub-chain, owned by the session."""

    profile: SamplingProfile
    tip: str
    linked: list[str] = field(default_factory=list)
    failed_posts: int = 0

    def advance(self, block_id: str) -> None:
        """Link a successfully posted record onto the chain."""
        self.linked.append(block_id)
        self.tip = block_id

    def summary(self) -> ChainSummary:
        """Freeze the chain into a report entry."""
        return ChainSummary(
            metric_type=self.profile.metric_type,
            tip=self.tip,
            linked_block_ids=list(self.linked),
            failed_posts=self.failed_posts,
        )


class ChainSummary(BaseModel):
    """Final state of one metric sub-chain."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    metric_type: str
    tip: str
    linked_block_ids: list[str]
    failed_posts: int


class SessionReport(BaseModel):
    """Outcome of a completed transportation session."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    root_block_id: str
    payment_info: PaymentInfo
    start_block_id: str
    iterations: int
    chains: list[ChainSummary]
    metrics: list[str]
    delivered_block_id: str
