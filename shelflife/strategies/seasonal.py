"""Season-adjusted shelf life."""

from __future__ import annotations

from datetime import date

from .. import modifiers
from ..models import ExpiryEstimate, ItemDescriptor
from . import PartialStrategy


class SeasonalAdjustment(PartialStrategy):
    """Nudge a coarse category base by the current season.

    Only this strategy applies seasonal factors. Items with no base
    category are left to the terminal fallback.
    """

    name = "Seasonal Adjustment"
    confidence = 0.6

    async def estimate(
        self, item: ItemDescriptor, today: date
    ) -> ExpiryEstimate | None:
        text = item.text
        base = next(
            (b for b in self._tables.seasonal_base if b.pattern.search(text)), None
        )
        if base is None:
            return None

        season = modifiers.seasonal_modifier(today, self._tables)
        days = modifiers.apply(base.days, [season])
        return ExpiryEstimate.from_days(
            today,
            days,
            confidence=self.confidence,
            method=f"{self.name} ({season.name})",
            category="seasonal",
        )
