"""Estimation strategy interfaces.

A strategy looks at an item descriptor and either produces an estimate or
declines. ``PartialStrategy`` may decline (return ``None``);
``TotalStrategy`` must always answer and closes the resolver chain.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from datetime import date
from typing import TYPE_CHECKING

from ..tables import ShelfLifeTables

if TYPE_CHECKING:
    from ..models import ExpiryEstimate, ItemDescriptor


class _TableBacked:
    name: str = ""

    def __init__(self, tables: ShelfLifeTables | None = None) -> None:
        self._tables = tables or ShelfLifeTables.default()

    def __repr__(self) -> str:
        return f"<{type(self).__name__} {self.name!r}>"


class PartialStrategy(_TableBacked, ABC):
    """A strategy that may have no opinion about an item."""

    @abstractmethod
    async def estimate(
        self, item: ItemDescriptor, today: date
    ) -> ExpiryEstimate | None:
        """Return an estimate anchored at ``today``, or None to decline."""
        ...


class TotalStrategy(_TableBacked, ABC):
    """A strategy that answers for every item."""

    @abstractmethod
    async def estimate(self, item: ItemDescriptor, today: date) -> ExpiryEstimate:
        ...


from .brand import BrandSpecificAnalysis  # noqa: E402
from .fallback import EnhancedFallback  # noqa: E402
from .keyword import AdvancedKeywordAnalysis  # noqa: E402
from .nutrition import NutritionalInference  # noqa: E402
from .product_lookup import ProductDatabaseLookup  # noqa: E402
from .seasonal import SeasonalAdjustment  # noqa: E402

__all__ = [
    "PartialStrategy",
    "TotalStrategy",
    "ProductDatabaseLookup",
    "AdvancedKeywordAnalysis",
    "BrandSpecificAnalysis",
    "NutritionalInference",
    "SeasonalAdjustment",
    "EnhancedFallback",
]
