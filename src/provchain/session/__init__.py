"""Transportation session orchestration."""

from provchain.session.models import (
    ChainSummary,
    MetricChain,
    SessionReport,
    SessionState,
)
from provchain.session.orchestrator import TransportationSession

__all__ = [
    "ChainSummary",
    "MetricChain",
    "SessionReport",
    "SessionState",
    "TransportationSession",
]
