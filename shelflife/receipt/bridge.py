"""Receipt bridge: expiry prediction anchored to a purchase date."""

from __future__ import annotations

import logging
from datetime import date, timedelta
from typing import Callable

from ..models import ReceiptPrediction
from ..normalize import normalize_text, parse_date
from ..resolver import ExpiryResolver
from ..tables import ShelfLifeTables

logger = logging.getLogger(__name__)

_AGREEMENT_BOOST = 0.1
_CONFIDENCE_CAP = 0.95
_MATCHED_CONFIDENCE = 0.95
_UNMATCHED_CONFIDENCE = 0.85


class ReceiptBridge:
    """Predict expiry for items that already have a purchase date.

    The resolver supplies the shelf life; the expiry is projected from the
    purchase date rather than from today. If the resolver breaks, a simple
    category table keeps the bridge answering.
    """

    def __init__(
        self,
        resolver: ExpiryResolver | None = None,
        tables: ShelfLifeTables | None = None,
        clock: Callable[[], date] = date.today,
    ) -> None:
        self._tables = tables or ShelfLifeTables.default()
        self._resolver = resolver or ExpiryResolver(tables=self._tables, clock=clock)
        self._clock = clock

    async def predict(
        self,
        item_name: str,
        purchase_date: str | date | None,
        suggested_category: str | None = None,
    ) -> ReceiptPrediction:
        """Predict expiry for ``item_name`` bought on ``purchase_date``.

        Raises:
            ValueError: If ``purchase_date`` is given but not an ISO date.
        """
        purchased = self._purchase_date(purchase_date)

        try:
            result = await self._resolver.resolve(item_name)
        except Exception:
            logger.exception(
                "Expiry resolution failed for %r, using receipt category table",
                item_name,
            )
            return self._fallback(item_name, purchased, suggested_category)

        if suggested_category and suggested_category != "unknown":
            category = suggested_category
        else:
            category = result.category

        confidence = result.confidence
        if suggested_category and suggested_category == result.category:
            confidence = min(_CONFIDENCE_CAP, confidence + _AGREEMENT_BOOST)

        logger.info(
            "Receipt prediction for %r: %d days via %s (confidence %.2f)",
            item_name,
            result.shelf_life_days,
            result.method,
            confidence,
        )
        return ReceiptPrediction(
            expiry_date=purchased + timedelta(days=result.shelf_life_days),
            confidence=confidence,
            category=category,
        )

    def _purchase_date(self, value: str | date | None) -> date:
        if value is None or value == "":
            return self._clock()
        parsed = parse_date(value)
        if parsed is None:
            raise ValueError(f"invalid purchase date: {value!r}")
        return parsed

    def _fallback(
        self,
        item_name: str,
        purchased: date,
        suggested_category: str | None,
    ) -> ReceiptPrediction:
        other = self._tables.receipt_category("other")
        category = suggested_category or "other"
        days = other.days if other else 30
        confidence = _UNMATCHED_CONFIDENCE

        suggested = (
            self._tables.receipt_category(suggested_category)
            if suggested_category
            else None
        )
        if suggested is not None:
            category, days, confidence = suggested.category, suggested.days, _MATCHED_CONFIDENCE
        else:
            name = normalize_text(item_name)
            for entry in self._tables.receipt_categories:
                if entry.matches(name):
                    category, days, confidence = entry.category, entry.days, _MATCHED_CONFIDENCE
                    break

        logger.info(
            "Fallback prediction for %r: %d days (confidence %.2f)",
            item_name,
            days,
            confidence,
        )
        return ReceiptPrediction(
            expiry_date=purchased + timedelta(days=days),
            confidence=confidence,
            category=category,
        )
