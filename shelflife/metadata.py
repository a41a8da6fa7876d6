"""Expiry date extraction from rich product metadata.

Layers, first applicable wins:

1. explicit ``expiration_date`` / ``best_before_date`` / ``use_by_date``
2. a printed date in the name or brand (``03/10/2025``, ``best before 3-10-25``)
3. a relative phrase ("expires in 2 weeks")
4. the first category tag against the food table
5. the product name against the same table, else the table default

No confidence is produced; callers that need one should use the resolver.
"""

from __future__ import annotations

import logging
from datetime import date, timedelta
from typing import Any, Callable

from .models import ProductMetadata
from .normalize import normalize_descriptor, normalize_text, parse_date
from .tables import ShelfLifeTables

logger = logging.getLogger(__name__)


class ExpiryDateExtractor:
    def __init__(
        self,
        tables: ShelfLifeTables | None = None,
        clock: Callable[[], date] = date.today,
    ) -> None:
        self._tables = tables or ShelfLifeTables.default()
        self._clock = clock

    def estimate(self, metadata: ProductMetadata | dict[str, Any]) -> date:
        """Return a best-effort expiry date. Never raises for bad data."""
        if not isinstance(metadata, ProductMetadata):
            metadata = ProductMetadata.from_dict(metadata)
        today = self._clock()

        explicit = self._explicit_date(metadata)
        if explicit is not None:
            return explicit

        text = normalize_descriptor(metadata.product_name, metadata.brands)

        printed = self._printed_date(text)
        if printed is not None:
            return printed

        relative = self._relative_days(text)
        if relative is not None:
            try:
                return today + timedelta(days=relative)
            except OverflowError:
                logger.debug("Relative phrase of %d days is out of range", relative)

        if metadata.categories_tags:
            days = self._table_days(metadata.categories_tags[0])
            logger.debug("Category tag %r → %d days", metadata.categories_tags[0], days)
            return today + timedelta(days=days)

        return today + timedelta(days=self._table_days(metadata.product_name))

    @staticmethod
    def _explicit_date(metadata: ProductMetadata) -> date | None:
        for value in (
            metadata.expiration_date,
            metadata.best_before_date,
            metadata.use_by_date,
        ):
            parsed = parse_date(value)
            if parsed is not None:
                return parsed
        return None

    def _printed_date(self, text: str) -> date | None:
        for name, pattern in self._tables.date_patterns:
            match = pattern.search(text)
            if not match:
                continue
            month, day, year = match.group(1), match.group(2), match.group(3)
            if len(year) == 2:
                year = f"20{year}"
            try:
                return date(int(year), int(month), int(day))
            except ValueError:
                logger.debug("Pattern %s matched an invalid date: %s", name, match.group(0))
        return None

    def _relative_days(self, text: str) -> int | None:
        for rule in self._tables.relative_patterns:
            match = rule.pattern.search(text)
            if match:
                return int(match.group(1)) * rule.unit_days
        return None

    def _table_days(self, value: str) -> int:
        text = normalize_text(value).replace("-", " ").replace("_", " ")
        table = self._tables.food_expiry_estimates
        for key, days in table.items():
            if key == "default":
                continue
            if key.replace("_", " ") in text:
                return days
        return table.get("default", self._tables.fallback_default_days)


def estimate_from_metadata(metadata: ProductMetadata | dict[str, Any]) -> date:
    """Convenience wrapper using the shipped tables and today's date."""
    return ExpiryDateExtractor().estimate(metadata)
