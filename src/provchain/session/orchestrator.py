"""Transportation session: start a leg, sample metric chains, deliver."""

from __future__ import annotations

import logging
import time
from collections.abc import Callable
from datetime import datetime

from provchain.chain.block_id import validate_block_id
from provchain.chain.linkage import extract_payment_info
from provchain.config.settings import ProvenanceConfig
from provchain.errors import ProvenanceError, ProvenanceErrorCode
from provchain.gateway.base import LedgerGateway
from provchain.payload.codec import encode_record
from provchain.payload.envelope import Envelope
from provchain.payload.models import (
    DeliveredTransportationPayload,
    PaymentInfo,
    ProductInfo,
    StartTransportationPayload,
)
from provchain.payload.tags import BlockTag
from provchain.sampling.sampler import HUMIDITY, TEMPERATURE, MetricSampler
from provchain.session.models import MetricChain, SessionReport, SessionState

_LOGGER = logging.getLogger(__name__)

TRANSPORTATION_COMPANY_INFO = "Transportation Company Information Data"
TRANSPORTATION_INFO = "Transportation Information Data"
PRODUCT_DELIVERY_INFO = "Product Delivery Information"


def local_timestamp() -> str:
    """Return the current local time with UTC offset."""
    return datetime.now().astimezone().isoformat()


def _gateway_failure(action: str, exc: Exception) -> ProvenanceError:
    return ProvenanceError(
        ProvenanceErrorCode.GATEWAY_FAILURE,
        f"Gateway {action} failed: {exc}",
        data={"action": action, "error_type": type(exc).__name__},
    )


class TransportationSession:
    """Drive one transportation leg against a ledger gateway.

    The session owns the two metric chain tips and the delivered `metrics`
    list; nothing else is shared.
    """

    def __init__(  # noqa: PLR0913
        self,
        *,
        config: ProvenanceConfig,
        gateway: LedgerGateway,
        sampler: MetricSampler | None = None,
        clock: Callable[[], float] = time.monotonic,
        sleep: Callable[[float], None] = time.sleep,
        now: Callable[[], str] = local_timestamp,
        prompt: Callable[[], str] | None = None,
    ) -> None:
        """Store session dependencies.

        Args:
            config: Session configuration.
            gateway: Ledger access.
            sampler: Metric sampler; defaults to an unseeded one.
            clock: Monotonic seconds source bounding the sampling loop.
            sleep: Pause between sampling iterations.
            now: Timestamp text source for posted records.
            prompt: Asked for the root block id when config has none.
        """
        self._config = config
        self._gateway = gateway
        self._sampler = sampler or MetricSampler()
        self._clock = clock
        self._sleep = sleep
        self._now = now
        self._prompt = prompt
        self._state = SessionState.INIT
        self.history: list[SessionState] = [SessionState.INIT]

    @property
    def state(self) -> SessionState:
        """Current lifecycle state."""
        return self._state

    def run(self) -> SessionReport:
        """Run the whole leg and return its report.

        Returns:
            Report with chain tips and posted ids.

        Raises:
            ProvenanceError: On any failure outside the sampling loop; the
                session ends in FAILED.
        """
        try:
            root_block_id = self.resolve_root_block_id()
            self._transition(SessionState.AWAITING_START_BLOCK)
            payment_info = self.fetch_payment_info(root_block_id)
            self._transition(SessionState.TRANSPORTATION_STARTED)
            start_block_id = self.start_transportation(root_block_id)
            self._transition(SessionState.SAMPLING)
            chains, iterations = self.sample_metrics(start_block_id)
            metrics = [chain.tip for chain in chains]
            self._transition(SessionState.DELIVERING)
            delivered_block_id = self.deliver(payment_info, metrics)
        except ProvenanceError as exc:
            _LOGGER.error("Session failed in %s: %s", self._state, exc)
            self._transition(SessionState.FAILED)
            raise
        self._transition(SessionState.DONE)
        return SessionReport(
            root_block_id=root_block_id,
            payment_info=payment_info,
            start_block_id=start_block_id,
            iterations=iterations,
            chains=[chain.summary() for chain in chains],
            metrics=metrics,
            delivered_block_id=delivered_block_id,
        )

    def resolve_root_block_id(self) -> str:
        """Return the validated id of the record the leg starts from.

        Raises:
            ProvenanceError: CONFIGURATION_MISSING when neither config nor a
                prompt supplies an id; INVALID_BLOCK_ID_FORMAT on bad shape.
        """
        raw = self._config.initial_block_id
        if raw is None:
            if self._prompt is None:
                raise ProvenanceError(
                    ProvenanceErrorCode.CONFIGURATION_MISSING,
                    "INITIAL_BLOCK_ID is not configured",
                    data={"setting": "initial_block_id"},
                )
            raw = self._prompt()
        return validate_block_id(raw)

    def fetch_payment_info(self, root_block_id: str) -> PaymentInfo:
        """Fetch the root record and extract the payment info it carries."""
        try:
            record = self._gateway.fetch_record(root_block_id)
        except ProvenanceError:
            raise
        except Exception as exc:  # gateway adapter boundary
            raise _gateway_failure("fetch", exc) from exc
        payment_info = extract_payment_info(record)
        _LOGGER.info("Payment info found for %s", root_block_id)
        return payment_info

    def start_transportation(self, root_block_id: str) -> str:
        """Post the record that opens the transportation leg."""
        payload = StartTransportationPayload(
            transportation_company_info=TRANSPORTATION_COMPANY_INFO,
            transportation_info=ProductInfo(
                info=TRANSPORTATION_INFO,
                file_reference=self._config.start_transportation_file_ref,
            ),
            start_timestamp=self._now(),
            previous_block=root_block_id,
        )
        return self._post(Envelope(tag=BlockTag.START_TRANSPORTATION, data=payload))

    def sample_metrics(self, start_block_id: str) -> tuple[list[MetricChain], int]:
        """Extend temperature and humidity chains until the budget runs out.

        Failed posts are logged and dropped: the chain tip stays put and the
        next iteration links onto the last successful record.

        Args:
            start_block_id: Id both chains start from.

        Returns:
            Final chains (temperature first) and the iteration count.
        """
        chains = [
            MetricChain(profile=TEMPERATURE, tip=start_block_id),
            MetricChain(profile=HUMIDITY, tip=start_block_id),
        ]
        budget = self._config.sampling_budget_seconds
        interval = self._config.sampling_interval_seconds
        started = self._clock()
        iterations = 0
        while self._clock() - started < budget:
            for chain in chains:
                self._extend_chain(chain)
            iterations += 1
            if interval > 0:
                self._sleep(interval)
        _LOGGER.info(
            "Sampling finished after %d iteration(s); tips: %s",
            iterations,
            ", ".join(f"{c.profile.metric_type}={c.tip}" for c in chains),
        )
        return chains, iterations

    def deliver(self, payment_info: PaymentInfo, metrics: list[str]) -> str:
        """Post the record that closes the leg with the metric chain tips."""
        payload = DeliveredTransportationPayload(
            product_delivery_info=ProductInfo(
                info=PRODUCT_DELIVERY_INFO,
                file_reference=self._config.deliver_transportation_file_ref,
            ),
            delivery_timestamp=self._now(),
            payment_info=payment_info,
            metrics=metrics,
        )
        return self._post(
            Envelope(tag=BlockTag.DELIVERED_TRANSPORTATION, data=payload)
        )

    def _extend_chain(self, chain: MetricChain) -> None:
        payload = self._sampler.build_metric(
            chain.profile, previous_block=chain.tip, timestamp=self._now()
        )
        try:
            block_id = self._post(Envelope(tag=chain.profile.tag, data=payload))
        except ProvenanceError as exc:
            chain.failed_posts += 1
            _LOGGER.warning(
                "%s metric not linked (%s): %s",
                chain.profile.metric_type,
                exc.code,
                exc,
            )
            return
        chain.advance(block_id)

    def _post(self, envelope: Envelope) -> str:
        tag, body = encode_record(envelope)
        started = time.perf_counter()
        try:
            block_id = self._gateway.post_record(tag, body)
        except ProvenanceError:
            raise
        except Exception as exc:  # gateway adapter boundary
            raise _gateway_failure("post", exc) from exc
        _LOGGER.info(
            "%s posted in %.2fs: %s",
            envelope.tag,
            time.perf_counter() - started,
            block_id,
        )
        link = self._config.explorer_link(block_id)
        if link is not None:
            _LOGGER.info("Block posted on: %s", link)
        return block_id

    def _transition(self, state: SessionState) -> None:
        _LOGGER.debug("Session state %s -> %s", self._state, state)
        self._state = state
        self.history.append(state)
