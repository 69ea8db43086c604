"""Record tags and the payload variant each tag promises."""

from __future__ import annotations

from collections.abc import Mapping
from enum import StrEnum

from provchain.payload.models import (
    DeliveredTransportationPayload,
    MetricPayload,
    Payload,
    StartTransportationPayload,
)


class BlockTag(StrEnum):
    """Tags attached to records emitted by a transportation session."""

    START_TRANSPORTATION = "Start Transportation Tag"
    TEMPERATURE_METRIC = "Temperature Metric Tag"
    HUMIDITY_METRIC = "Humidity Metric Tag"
    DELIVERED_TRANSPORTATION = "Delivered Transportation Tag"


SESSION_TAG_VARIANTS: Mapping[str, type[Payload]] = {
    BlockTag.START_TRANSPORTATION: StartTransportationPayload,
    BlockTag.TEMPERATURE_METRIC: MetricPayload,
    BlockTag.HUMIDITY_METRIC: MetricPayload,
    BlockTag.DELIVERED_TRANSPORTATION: DeliveredTransportationPayload,
}


class TagRegistryError(LookupError):
    """Raised when a tag has no registered variant."""


class TagRegistry:
    """Wire tag -> payload variant that records under that tag must carry.

    Tags from other producers on the ledger are free text, so an unregistered
    tag constrains nothing.
    """

    def __init__(self, variants: Mapping[str, type[Payload]] | None = None) -> None:
        self._variants: dict[str, type[Payload]] = dict(variants or {})

    def register(
        self, tag: str, model: type[Payload], *, override: bool = False
    ) -> None:
        """Bind tag to a variant.

        Re-binding a tag to the variant it already has is a no-op.

        Raises:
            ValueError: If tag is bound to another variant and override is False.
        """
        bound = self._variants.get(tag)
        if bound is not None and bound is not model and not override:
            raise ValueError(f"Tag {tag!r} already maps to {bound.variant}")
        self._variants[tag] = model

    def resolve(self, tag: str) -> type[Payload]:
        """Return the variant bound to tag.

        Raises:
            TagRegistryError: If tag is not registered.
        """
        try:
            return self._variants[tag]
        except KeyError:
            raise TagRegistryError(f"Unknown tag: {tag!r}") from None

    def knows(self, tag: str) -> bool:
        return tag in self._variants

    def accepts(self, tag: str, payload: Payload) -> bool:
        """Return whether payload may travel under tag."""
        bound = self._variants.get(tag)
        return bound is None or isinstance(payload, bound)


def default_tag_registry() -> TagRegistry:
    """Build a registry holding the tags a transportation session emits."""
    return TagRegistry(SESSION_TAG_VARIANTS)
