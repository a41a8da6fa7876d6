"""Remote product database lookup."""

from __future__ import annotations

import logging
from datetime import date
from typing import Any

from ..errors import LookupFailed
from ..models import ExpiryEstimate, ItemDescriptor
from ..normalize import parse_date
from ..openfoodfacts import OpenFoodFactsClient
from ..tables import ShelfLifeTables
from . import PartialStrategy

logger = logging.getLogger(__name__)

_EXPIRY_FIELDS = ("expiration_date", "best_before_date", "use_by_date")


class ProductDatabaseLookup(PartialStrategy):
    """Search the product database and read shelf life off the best hit.

    Only the first product is considered. An explicit future date on the
    product wins; otherwise its category tags are mapped to a typical
    shelf life.
    """

    name = "Product Database"
    confidence = 0.9

    def __init__(
        self,
        client: OpenFoodFactsClient | None = None,
        tables: ShelfLifeTables | None = None,
    ) -> None:
        super().__init__(tables)
        self._client = client or OpenFoodFactsClient()

    @property
    def timeout(self) -> float:
        return self._client.timeout

    async def estimate(
        self, item: ItemDescriptor, today: date
    ) -> ExpiryEstimate | None:
        try:
            products = await self._client.search_async(item.name)
        except LookupFailed as e:
            logger.warning("Product database unavailable: %s", e)
            return None
        if not products:
            return None

        product = products[0]
        tags = _category_tags(product)
        days = self._days_from_dates(product, today)
        if days is None:
            days = self._days_from_categories(tags)
        if days is None:
            return None

        return ExpiryEstimate.from_days(
            today,
            days,
            confidence=self.confidence,
            method=self.name,
            category=tags[0] if tags else "unknown",
        )

    @staticmethod
    def _days_from_dates(product: dict[str, Any], today: date) -> int | None:
        for field_name in _EXPIRY_FIELDS:
            expiry = parse_date(product.get(field_name))
            if expiry is None:
                continue
            days = (expiry - today).days
            if days > 0:
                return days
        return None

    def _days_from_categories(self, tags: list[str]) -> int | None:
        for tag in tags:
            tag_lower = tag.lower()
            for key, days in self._tables.product_categories.items():
                if key in tag_lower:
                    return days
        return None


def _category_tags(product: dict[str, Any]) -> list[str]:
    tags = product.get("categories_tags") or []
    if not isinstance(tags, list):
        return []
    return [t for t in tags if isinstance(t, str)]
