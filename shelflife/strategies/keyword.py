"""Keyword-category strategy with packaging modifiers."""

from __future__ import annotations

from datetime import date

from .. import modifiers
from ..models import ExpiryEstimate, ItemDescriptor
from . import PartialStrategy


class AdvancedKeywordAnalysis(PartialStrategy):
    """Match the item against category regexes, then adjust for packaging.

    A specific item override (e.g. "ground beef" → 2 days) replaces the
    category default; packaging factors such as frozen or canned are
    composed on top of whichever base was chosen.
    """

    name = "Advanced Keyword Analysis"
    confidence = 0.8

    async def estimate(
        self, item: ItemDescriptor, today: date
    ) -> ExpiryEstimate | None:
        text = item.text
        category = self._tables.match_keyword_category(text)
        if category is None:
            return None

        base = modifiers.match_override(text, self._tables)
        if base is None:
            base = category.default_days

        packaging = modifiers.match_packaging(text, self._tables)
        days = modifiers.apply(base, packaging)

        return ExpiryEstimate.from_days(
            today,
            days,
            confidence=self.confidence,
            method=self.name,
            category=category.name,
        )
