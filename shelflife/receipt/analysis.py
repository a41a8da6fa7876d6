"""Turn a receipt-analysis response into items with predicted expiry."""

from __future__ import annotations

import asyncio
import json
import re
from datetime import date
from typing import Any, Callable

from ..errors import ReceiptParseError
from ..normalize import parse_date
from .bridge import ReceiptBridge
from .models import ReceiptAnalysis, ReceiptItem

_JSON_OBJECT = re.compile(r"\{[\s\S]*\}")


def parse_response(text: str) -> dict[str, Any]:
    """Extract the JSON object from a model's receipt response.

    The response is expected to look like::

        {"purchaseDate": "YYYY-MM-DD",
         "items": [{"name": "...", "quantity": 1, "category": "dairy"}]}

    Markdown fences and surrounding prose are ignored.
    """
    match = _JSON_OBJECT.search(text or "")
    if not match:
        raise ReceiptParseError("no JSON object found in receipt response")
    try:
        parsed = json.loads(match.group(0))
    except json.JSONDecodeError as e:
        raise ReceiptParseError(f"failed to parse receipt response: {e}") from e
    if not isinstance(parsed, dict):
        raise ReceiptParseError("receipt response is not a JSON object")
    return parsed


class ReceiptAnalyzer:
    """Predict expiry for every item of a parsed receipt."""

    def __init__(
        self,
        bridge: ReceiptBridge | None = None,
        clock: Callable[[], date] = date.today,
    ) -> None:
        self._bridge = bridge or ReceiptBridge(clock=clock)
        self._clock = clock

    async def analyze_text(self, text: str) -> ReceiptAnalysis:
        return await self.analyze(parse_response(text))

    async def analyze(self, parsed: dict[str, Any]) -> ReceiptAnalysis:
        raw_items = [
            i for i in parsed.get("items") or [] if isinstance(i, dict) and i.get("name")
        ]
        if not raw_items:
            raise ReceiptParseError("no food items found in the receipt")

        purchased = parse_date(parsed.get("purchaseDate")) or self._clock()
        purchase_date = purchased.isoformat()

        predictions = await asyncio.gather(
            *(
                self._bridge.predict(
                    item["name"], purchased, item.get("category") or None
                )
                for item in raw_items
            )
        )

        items = [
            ReceiptItem(
                id=f"item-{index}",
                name=item["name"],
                purchase_date=purchase_date,
                estimated_expiry=prediction.expiry_date_iso,
                confidence=prediction.confidence,
                category=prediction.category,
                quantity=item.get("quantity") or 1,
            )
            for index, (item, prediction) in enumerate(zip(raw_items, predictions))
        ]
        return ReceiptAnalysis(purchase_date=purchase_date, items=items)
