"""Brand-adjusted shelf life."""

from __future__ import annotations

from datetime import date

from .. import modifiers
from ..models import ExpiryEstimate, ItemDescriptor
from . import PartialStrategy


class BrandSpecificAnalysis(PartialStrategy):
    """Scale a small category base table by a known brand's factor.

    Declines when no brand matches, or when a brand matches but the name
    carries no recognisable food keyword. Runs after the keyword strategy,
    so a brand only decides for names that strategy declined.
    """

    name = "Brand-Specific"
    confidence = 0.85

    async def estimate(
        self, item: ItemDescriptor, today: date
    ) -> ExpiryEstimate | None:
        text = item.text
        brand = self._tables.match_brand(text)
        if brand is None:
            return None

        base = next(
            (b for b in self._tables.brand_base_categories if b.matches(text)), None
        )
        if base is None:
            return None

        days = modifiers.apply(
            base.days, [modifiers.Modifier(brand.name, brand.factor)]
        )
        return ExpiryEstimate.from_days(
            today,
            days,
            confidence=self.confidence,
            method=f"{self.name} ({brand.name})",
            category=base.category,
        )
