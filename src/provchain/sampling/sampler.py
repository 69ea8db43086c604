"""Bounded synthetic sensor readings."""

from __future__ import annotations

import random
from dataclasses import dataclass

from provchain.payload.models import MetricPayload
from provchain.payload.tags import BlockTag


@dataclass(frozen=True)
class SamplingProfile:
    """Named metric with its unit, value range, and record tag."""

    metric_type: str
    measurement_unit: str
    minimum: float
    maximum: float
    tag: str


TEMPERATURE = SamplingProfile(
    metric_type="Temperature",
    measurement_unit="Celsius",
    minimum=-5.0,
    maximum=30.0,
    tag=BlockTag.TEMPERATURE_METRIC,
)
HUMIDITY = SamplingProfile(
    metric_type="Humidity",
    measurement_unit="%",
    minimum=0.0,
    maximum=100.0,
    tag=BlockTag.HUMIDITY_METRIC,
)


class MetricSampler:
    """Uniform readings rounded to two decimals.

    Rounding is `round(raw * 100) / 100` with Python's round-half-to-even;
    the result is clamped back into the requested range.
    """

    def __init__(self, rng: random.Random | None = None) -> None:
        """Store random source.

        Args:
            rng: Random source; seed it for reproducible readings.
        """
        self._rng = rng or random.Random()

    def sample(self, minimum: float, maximum: float) -> float:
        """Return a reading in `[minimum, maximum]` with at most 2 decimals.

        Raises:
            ValueError: If minimum is greater than maximum.
        """
        if minimum > maximum:
            raise ValueError(f"minimum {minimum} is greater than maximum {maximum}")
        raw = minimum + (maximum - minimum) * self._rng.random()
        value = round(raw * 100) / 100
        return min(max(value, minimum), maximum)

    def sample_profile(self, profile: SamplingProfile) -> float:
        """Return a reading within the profile's range."""
        return self.sample(profile.minimum, profile.maximum)

    def build_metric(
        self,
        profile: SamplingProfile,
        *,
        previous_block: str,
        timestamp: str,
    ) -> MetricPayload:
        """Sample once and wrap the reading as a linked metric payload.

        Args:
            profile: Metric to sample.
            previous_block: Current tip of the profile's metric chain.
            timestamp: Measurement timestamp text.

        Returns:
            Metric payload linked to previous_block.
        """
        return MetricPayload(
            metric_type=profile.metric_type,
            metric_value=self.sample_profile(profile),
            measurement_unit=profile.measurement_unit,
            timestamp=timestamp,
            previous_block=previous_block,
        )
