"""Metric sampling profiles and sampler."""

from provchain.sampling.sampler import (
    HUMIDITY,
    TEMPERATURE,
    MetricSampler,
    SamplingProfile,
)

__all__ = ["HUMIDITY", "TEMPERATURE", "MetricSampler", "SamplingProfile"]
