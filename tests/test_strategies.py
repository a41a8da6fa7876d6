"""Tests for the individual estimation strategies and modifiers."""

from datetime import date, timedelta
from unittest.mock import AsyncMock, MagicMock

import pytest

from shelflife import modifiers
from shelflife.errors import LookupFailed
from shelflife.models import ItemDescriptor
from shelflife.strategies import (
    AdvancedKeywordAnalysis,
    BrandSpecificAnalysis,
    EnhancedFallback,
    NutritionalInference,
    ProductDatabaseLookup,
    SeasonalAdjustment,
)

WINTER = date(2024, 1, 15)
SPRING = date(2024, 4, 15)
SUMMER = date(2024, 7, 15)
FALL = date(2024, 10, 15)


def _item(name, brand=None):
    return ItemDescriptor(name=name, brand=brand)


class TestModifiers:
    def test_compose_empty(self):
        assert modifiers.compose([]) == 1.0

    def test_compose_multiplies(self):
        mods = [modifiers.Modifier("a", 2.0), modifiers.Modifier("b", 0.5)]
        assert modifiers.compose(mods) == pytest.approx(1.0)

    def test_order_independent(self):
        a = modifiers.Modifier("frozen", 6.0)
        b = modifiers.Modifier("organic", 0.8)
        assert modifiers.apply(3, [a, b]) == modifiers.apply(3, [b, a]) == 14

    def test_round_half_up(self):
        assert modifiers.round_half_up(10.5) == 11
        assert modifiers.round_half_up(2.5) == 3
        assert modifiers.round_half_up(2.49) == 2
        assert modifiers.round_half_up(0.0) == 0

    def test_match_packaging(self, tables):
        names = [m.name for m in modifiers.match_packaging("frozen organic peas", tables)]
        assert names == ["frozen", "organic"]

    def test_packaging_needs_whole_word(self, tables):
        assert modifiers.match_packaging("packaged candy", tables) == []

    def test_match_override(self, tables):
        assert modifiers.match_override("lean ground beef", tables) == 2
        assert modifiers.match_override("kale", tables) is None

    @pytest.mark.parametrize(
        "today, season, factor",
        [(WINTER, "winter", 1.1), (SPRING, "spring", 1.0), (SUMMER, "summer", 0.8), (FALL, "fall", 1.0)],
    )
    def test_seasonal_modifier(self, tables, today, season, factor):
        mod = modifiers.seasonal_modifier(today, tables)
        assert mod.name == season
        assert mod.factor == factor


class TestAdvancedKeywordAnalysis:
    @pytest.mark.asyncio
    async def test_category_default(self, tables):
        result = await AdvancedKeywordAnalysis(tables).estimate(_item("Greek Yogurt"), WINTER)
        assert result.category == "dairy"
        assert result.shelf_life_days == 7
        assert result.confidence == 0.8

    @pytest.mark.asyncio
    async def test_override(self, tables):
        result = await AdvancedKeywordAnalysis(tables).estimate(_item("ground beef"), WINTER)
        assert result.shelf_life_days == 2

    @pytest.mark.asyncio
    async def test_canned(self, tables):
        result = await AdvancedKeywordAnalysis(tables).estimate(
            _item("canned tomato soup"), WINTER
        )
        assert result.category == "produce"
        assert result.shelf_life_days == 140  # 7 × 20

    @pytest.mark.asyncio
    async def test_vacuum_sealed_override(self, tables):
        result = await AdvancedKeywordAnalysis(tables).estimate(
            _item("vacuum sealed salmon"), WINTER
        )
        assert result.category == "meat"
        assert result.shelf_life_days == 4  # salmon 2 × vacuum 2

    @pytest.mark.asyncio
    async def test_first_category_wins(self, tables):
        # "cheese" (dairy) is declared before "chips" (packaged)
        result = await AdvancedKeywordAnalysis(tables).estimate(
            _item("cheese chips"), WINTER
        )
        assert result.category == "dairy"

    @pytest.mark.asyncio
    async def test_no_match(self, tables):
        assert await AdvancedKeywordAnalysis(tables).estimate(_item("zzqx"), WINTER) is None


class TestBrandSpecificAnalysis:
    @pytest.mark.asyncio
    async def test_brand_factor(self, tables):
        result = await BrandSpecificAnalysis(tables).estimate(
            _item("Horizon milkshake"), WINTER
        )
        assert result.method == "Brand-Specific (horizon)"
        assert result.category == "dairy"
        assert result.shelf_life_days == 11  # 7 × 1.5 = 10.5
        assert result.confidence == 0.85

    @pytest.mark.asyncio
    async def test_brand_from_descriptor_brand_field(self, tables):
        result = await BrandSpecificAnalysis(tables).estimate(
            _item("corn flakes cereal", brand="Kelloggs"), WINTER
        )
        assert result.category == "packaged"
        assert result.shelf_life_days == 117  # 90 × 1.3

    @pytest.mark.asyncio
    async def test_brand_without_food_keyword(self, tables):
        assert await BrandSpecificAnalysis(tables).estimate(
            _item("Tyson nuggets"), WINTER
        ) is None

    @pytest.mark.asyncio
    async def test_no_brand(self, tables):
        assert await BrandSpecificAnalysis(tables).estimate(_item("milk"), WINTER) is None


class TestNutritionalInference:
    @pytest.mark.asyncio
    async def test_single_trait(self, tables):
        result = await NutritionalInference(tables).estimate(_item("dill pickles"), WINTER)
        assert result.method == "Nutritional Inference"
        assert result.category == "inferred"
        assert result.shelf_life_days == 9  # 7 × 1.3 = 9.1

    @pytest.mark.asyncio
    async def test_traits_compose(self, tables):
        result = await NutritionalInference(tables).estimate(
            _item("watermelon juice"), WINTER
        )
        assert result.shelf_life_days == 4  # 7 × 0.7 × 0.9 = 4.41

    @pytest.mark.asyncio
    async def test_no_trait(self, tables):
        assert await NutritionalInference(tables).estimate(_item("zzqx"), WINTER) is None


class TestSeasonalAdjustment:
    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        "today, days, season",
        [(WINTER, 8, "winter"), (SPRING, 7, "spring"), (SUMMER, 6, "summer"), (FALL, 7, "fall")],
    )
    async def test_season_factor(self, tables, today, days, season):
        result = await SeasonalAdjustment(tables).estimate(_item("vegetable medley"), today)
        assert result.shelf_life_days == days
        assert result.method == f"Seasonal Adjustment ({season})"
        assert result.category == "seasonal"
        assert result.confidence == 0.6

    @pytest.mark.asyncio
    async def test_no_base_category(self, tables):
        assert await SeasonalAdjustment(tables).estimate(_item("zzqx"), WINTER) is None


class TestEnhancedFallback:
    @pytest.mark.asyncio
    async def test_category_match(self, tables):
        result = await EnhancedFallback(tables).estimate(_item("birthday cake"), WINTER)
        assert result.method == "Enhanced Category Fallback"
        assert result.category == "bakery"
        assert result.shelf_life_days == 5
        assert result.confidence == 0.5

    @pytest.mark.asyncio
    async def test_default(self, tables):
        result = await EnhancedFallback(tables).estimate(_item("zzqx unknown item"), WINTER)
        assert result.method == "Default Fallback"
        assert result.category == "unknown"
        assert result.shelf_life_days == 14
        assert result.confidence == 0.3
        assert result.expiry_date == WINTER + timedelta(days=14)


class TestProductDatabaseLookup:
    def _client(self, products=None, error=None):
        client = MagicMock()
        if error is not None:
            client.search_async = AsyncMock(side_effect=error)
        else:
            client.search_async = AsyncMock(return_value=products or [])
        return client

    @pytest.mark.asyncio
    async def test_explicit_date(self, tables):
        expiry = (WINTER + timedelta(days=20)).isoformat()
        client = self._client([
            {"product_name": "Milk", "best_before_date": expiry, "categories_tags": ["en:dairies"]}
        ])
        result = await ProductDatabaseLookup(client, tables).estimate(_item("milk"), WINTER)
        assert result.shelf_life_days == 20
        assert result.method == "Product Database"
        assert result.category == "en:dairies"
        assert result.confidence == 0.9
        client.search_async.assert_awaited_once_with("milk")

    @pytest.mark.asyncio
    async def test_past_date_falls_back_to_tags(self, tables):
        client = self._client([
            {
                "product_name": "Peas",
                "expiration_date": "2020-01-01",
                "categories_tags": ["en:frozen-foods", "en:vegetables"],
            }
        ])
        result = await ProductDatabaseLookup(client, tables).estimate(_item("peas"), WINTER)
        assert result.shelf_life_days == 180
        assert result.category == "en:frozen-foods"

    @pytest.mark.asyncio
    async def test_only_first_product(self, tables):
        client = self._client([
            {"product_name": "Mystery"},
            {"product_name": "Beans", "categories_tags": ["en:canned-beans"]},
        ])
        assert await ProductDatabaseLookup(client, tables).estimate(
            _item("beans"), WINTER
        ) is None

    @pytest.mark.asyncio
    async def test_no_products(self, tables):
        client = self._client([])
        assert await ProductDatabaseLookup(client, tables).estimate(_item("x"), WINTER) is None

    @pytest.mark.asyncio
    async def test_lookup_failure(self, tables):
        client = self._client(error=LookupFailed("timeout"))
        assert await ProductDatabaseLookup(client, tables).estimate(_item("x"), WINTER) is None
