"""Strategy chain resolver.

Strategies run in a fixed priority order and the first one with an opinion
wins, even if a later strategy would have been more confident. The order
encodes trust: external product data, keyword rules, brand adjustments,
nutritional inference, seasonal nudges, and finally a universal default.
"""

from __future__ import annotations

import asyncio
import logging
from datetime import date
from typing import TYPE_CHECKING, Callable, Iterable, Sequence

from .errors import ResolutionError
from .models import ExpiryEstimate, ItemDescriptor
from .openfoodfacts import OpenFoodFactsClient
from .strategies import (
    AdvancedKeywordAnalysis,
    BrandSpecificAnalysis,
    EnhancedFallback,
    NutritionalInference,
    PartialStrategy,
    ProductDatabaseLookup,
    SeasonalAdjustment,
    TotalStrategy,
)
from .tables import ShelfLifeTables

if TYPE_CHECKING:
    from .config import EstimatorConfig

logger = logging.getLogger(__name__)

DEFAULT_LOOKUP_TIMEOUT = 4.0


def default_strategies(
    tables: ShelfLifeTables | None = None,
    client: OpenFoodFactsClient | None = None,
    *,
    include_lookup: bool = True,
) -> list[PartialStrategy]:
    """Build the standard partial-strategy chain in priority order."""
    tables = tables or ShelfLifeTables.default()
    chain: list[PartialStrategy] = []
    if include_lookup:
        chain.append(ProductDatabaseLookup(client=client, tables=tables))
    chain.extend(
        [
            AdvancedKeywordAnalysis(tables),
            BrandSpecificAnalysis(tables),
            NutritionalInference(tables),
            SeasonalAdjustment(tables),
        ]
    )
    return chain


class ExpiryResolver:
    """Resolve an item name to an ``ExpiryEstimate`` via the strategy chain.

    Usage:
        resolver = ExpiryResolver()
        estimate = await resolver.resolve("frozen chicken breast")
    """

    def __init__(
        self,
        strategies: Sequence[PartialStrategy] | None = None,
        fallback: TotalStrategy | None = None,
        *,
        tables: ShelfLifeTables | None = None,
        timeout: float = DEFAULT_LOOKUP_TIMEOUT,
        review_threshold: float = 0.5,
        clock: Callable[[], date] = date.today,
    ) -> None:
        self._tables = tables or ShelfLifeTables.default()
        if strategies is None:
            strategies = default_strategies(self._tables)
        self._strategies = tuple(strategies)
        self._fallback = fallback or EnhancedFallback(self._tables)
        self._timeout = timeout
        self._review_threshold = review_threshold
        self._clock = clock

    @classmethod
    def from_config(
        cls,
        config: EstimatorConfig,
        *,
        clock: Callable[[], date] = date.today,
    ) -> ExpiryResolver:
        """Build the default chain from an ``EstimatorConfig``."""
        tables = (
            ShelfLifeTables.load(config.tables.path)
            if config.tables.path
            else ShelfLifeTables.default()
        )
        client = None
        if config.lookup.enabled:
            client = OpenFoodFactsClient(
                base_url=config.lookup.base_url,
                timeout=config.lookup.timeout,
                user_agent=config.lookup.user_agent,
                page_size=config.lookup.page_size,
            )
        strategies = default_strategies(
            tables, client, include_lookup=config.lookup.enabled
        )
        return cls(
            strategies,
            tables=tables,
            timeout=config.lookup.timeout,
            review_threshold=config.review.low_confidence_threshold,
            clock=clock,
        )

    @property
    def strategies(self) -> tuple[PartialStrategy, ...]:
        return self._strategies

    @property
    def tables(self) -> ShelfLifeTables:
        return self._tables

    def needs_review(self, estimate: ExpiryEstimate) -> bool:
        """True when ``estimate`` should be confirmed by the user."""
        return estimate.needs_review(self._review_threshold)

    async def resolve(self, item: str | ItemDescriptor) -> ExpiryEstimate:
        """Return the estimate of the first strategy that has an opinion."""
        descriptor = ItemDescriptor.coerce(item)
        today = self._clock()
        logger.debug("Resolving expiry for %r", descriptor.name)

        for strategy in self._strategies:
            result = await self._try(strategy, descriptor, today)
            if result is not None:
                logger.info(
                    "%r: %d days via %s (confidence %.2f)",
                    descriptor.name,
                    result.shelf_life_days,
                    result.method,
                    result.confidence,
                )
                return result

        try:
            result = await self._fallback.estimate(descriptor, today)
        except Exception as e:
            logger.critical(
                "Terminal strategy %s failed for %r",
                self._fallback.name,
                descriptor.name,
                exc_info=True,
            )
            raise ResolutionError(
                f"terminal strategy {self._fallback.name!r} raised for "
                f"{descriptor.name!r}"
            ) from e
        if result is None:
            logger.critical(
                "Terminal strategy %s returned no estimate for %r",
                self._fallback.name,
                descriptor.name,
            )
            raise ResolutionError(
                f"terminal strategy {self._fallback.name!r} returned nothing "
                f"for {descriptor.name!r}"
            )
        logger.info(
            "%r: %d days via %s (confidence %.2f)",
            descriptor.name,
            result.shelf_life_days,
            result.method,
            result.confidence,
        )
        return result

    async def resolve_all(self, item: str | ItemDescriptor) -> list[ExpiryEstimate]:
        """Run every partial strategy and collect the ones that answered.

        The terminal fallback is not consulted. Order follows priority.
        """
        descriptor = ItemDescriptor.coerce(item)
        today = self._clock()
        results: list[ExpiryEstimate] = []
        for strategy in self._strategies:
            result = await self._try(strategy, descriptor, today)
            if result is not None:
                results.append(result)
        return results

    async def resolve_many(
        self, items: Iterable[str | ItemDescriptor]
    ) -> list[ExpiryEstimate]:
        """Resolve independent items concurrently, preserving input order."""
        return list(await asyncio.gather(*(self.resolve(i) for i in items)))

    async def _try(
        self, strategy: PartialStrategy, item: ItemDescriptor, today: date
    ) -> ExpiryEstimate | None:
        logger.debug("Trying %s", strategy.name)
        try:
            return await asyncio.wait_for(
                strategy.estimate(item, today), timeout=self._timeout
            )
        except asyncio.TimeoutError:
            logger.warning(
                "%s timed out after %.1fs for %r",
                strategy.name,
                self._timeout,
                item.name,
            )
        except Exception:
            logger.warning(
                "%s failed for %r", strategy.name, item.name, exc_info=True
            )
        return None
