"""Nutritional-trait inference."""

from __future__ import annotations

from datetime import date

from .. import modifiers
from ..models import ExpiryEstimate, ItemDescriptor
from . import PartialStrategy


class NutritionalInference(PartialStrategy):
    """Compose every matching trait factor onto a fixed base."""

    name = "Nutritional Inference"
    confidence = 0.7

    async def estimate(
        self, item: ItemDescriptor, today: date
    ) -> ExpiryEstimate | None:
        traits = modifiers.match_nutritional(item.text, self._tables)
        if not traits:
            return None

        days = modifiers.apply(self._tables.nutritional_base_days, traits)
        return ExpiryEstimate.from_days(
            today,
            days,
            confidence=self.confidence,
            method=self.name,
            category="inferred",
        )
