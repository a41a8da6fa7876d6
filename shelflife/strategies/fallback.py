"""Terminal fallback: always produces an estimate."""

from __future__ import annotations

from datetime import date

from ..models import ExpiryEstimate, ItemDescriptor
from . import TotalStrategy


class EnhancedFallback(TotalStrategy):
    name = "Enhanced Category Fallback"
    confidence = 0.5

    default_method = "Default Fallback"
    default_confidence = 0.3

    async def estimate(self, item: ItemDescriptor, today: date) -> ExpiryEstimate:
        text = item.text
        for entry in self._tables.fallback_categories:
            if entry.matches(text):
                return ExpiryEstimate.from_days(
                    today,
                    entry.days,
                    confidence=self.confidence,
                    method=self.name,
                    category=entry.category,
                )

        return ExpiryEstimate.from_days(
            today,
            self._tables.fallback_default_days,
            confidence=self.default_confidence,
            method=self.default_method,
            category="unknown",
        )
