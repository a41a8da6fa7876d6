"""Keyword, pattern and modifier tables shipped with the engine.

The tables are plain configuration data kept in
``data/shelf_life_tables.json`` so they can be versioned separately from
the estimation code. ``ShelfLifeTables.default()`` returns the shipped
version; tests and callers may load or build their own.

Usage:
    tables = ShelfLifeTables.default()
    category = tables.match_keyword_category("greek yogurt")
"""

from __future__ import annotations

import json
import re
from dataclasses import dataclass
from pathlib import Path
from types import MappingProxyType
from typing import Any, ClassVar, Mapping

from .errors import TableError

_DATA_PATH = Path(__file__).parent / "data" / "shelf_life_tables.json"


@dataclass(frozen=True)
class KeywordCategory:
    name: str
    patterns: tuple[re.Pattern[str], ...]
    default_days: int

    def matches(self, text: str) -> bool:
        return any(p.search(text) for p in self.patterns)


@dataclass(frozen=True)
class PatternFactor:
    """A named multiplicative factor triggered by a regex."""

    name: str
    pattern: re.Pattern[str]
    factor: float


@dataclass(frozen=True)
class BrandRule:
    name: str
    factor: float
    note: str = ""


@dataclass(frozen=True)
class KeywordDays:
    """Category with a keyword list and a fixed number of days."""

    category: str
    keywords: tuple[str, ...]
    days: int

    def matches(self, text: str) -> bool:
        return any(keyword in text for keyword in self.keywords)


@dataclass(frozen=True)
class KeywordFactor:
    name: str
    keywords: tuple[str, ...]
    factor: float
    note: str = ""

    def matches(self, text: str) -> bool:
        return any(keyword in text for keyword in self.keywords)


@dataclass(frozen=True)
class PatternDays:
    category: str
    pattern: re.Pattern[str]
    days: int


@dataclass(frozen=True)
class RelativePattern:
    pattern: re.Pattern[str]
    unit_days: int


@dataclass(frozen=True)
class ShelfLifeTables:
    version: int
    keyword_categories: tuple[KeywordCategory, ...]
    packaging_modifiers: tuple[PatternFactor, ...]
    item_overrides: Mapping[str, int]
    brands: tuple[BrandRule, ...]
    brand_base_categories: tuple[KeywordDays, ...]
    nutritional_base_days: int
    nutritional_traits: tuple[KeywordFactor, ...]
    season_months: Mapping[int, str]
    season_factors: Mapping[str, float]
    seasonal_base: tuple[PatternDays, ...]
    fallback_categories: tuple[KeywordDays, ...]
    fallback_default_days: int
    product_categories: Mapping[str, int]
    food_expiry_estimates: Mapping[str, int]
    date_patterns: tuple[tuple[str, re.Pattern[str]], ...]
    relative_patterns: tuple[RelativePattern, ...]
    receipt_categories: tuple[KeywordDays, ...]

    _cache: ClassVar[ShelfLifeTables | None] = None

    # -- loading ---------------------------------------------------------

    @classmethod
    def default(cls) -> ShelfLifeTables:
        """Return the shipped tables, loading them once per process."""
        if cls._cache is None:
            cls._cache = cls.load(_DATA_PATH)
        return cls._cache

    @classmethod
    def reset(cls) -> None:
        """Drop the cached default tables (for testing)."""
        cls._cache = None

    @classmethod
    def load(cls, path: str | Path) -> ShelfLifeTables:
        p = Path(path)
        try:
            with open(p, encoding="utf-8") as f:
                raw = json.load(f)
        except (OSError, json.JSONDecodeError) as e:
            raise TableError(f"cannot read shelf-life tables from {p}: {e}") from e
        return cls.from_dict(raw)

    @classmethod
    def from_dict(cls, raw: dict[str, Any]) -> ShelfLifeTables:
        try:
            return cls._build(raw)
        except (KeyError, TypeError, ValueError, re.error) as e:
            raise TableError(f"malformed shelf-life tables: {e!r}") from e

    @classmethod
    def _build(cls, raw: dict[str, Any]) -> ShelfLifeTables:
        nutrition = raw["nutritional_traits"]
        seasonal = raw["seasonal"]
        fallback = raw["fallback_categories"]

        season_months: dict[int, str] = {}
        for season, months in seasonal["months"].items():
            for month in months:
                season_months[int(month)] = season
        if sorted(season_months) != list(range(1, 13)):
            raise ValueError("seasonal months must cover 1..12 exactly once")

        return cls(
            version=int(raw.get("version", 1)),
            keyword_categories=tuple(
                KeywordCategory(
                    name=name,
                    patterns=tuple(_compile(p) for p in entry["patterns"]),
                    default_days=int(entry["default_days"]),
                )
                for name, entry in raw["keyword_categories"].items()
            ),
            packaging_modifiers=tuple(
                PatternFactor(
                    name=entry["name"],
                    pattern=_compile(entry["pattern"]),
                    factor=float(entry["factor"]),
                )
                for entry in raw["packaging_modifiers"]
            ),
            item_overrides=MappingProxyType(
                {k: int(v) for k, v in raw["item_overrides"].items()}
            ),
            brands=tuple(
                BrandRule(name=name, factor=float(e["factor"]), note=e.get("note", ""))
                for name, e in raw["brands"].items()
            ),
            brand_base_categories=tuple(
                KeywordDays(
                    category=e["category"],
                    keywords=tuple(e["keywords"]),
                    days=int(e["days"]),
                )
                for e in raw["brand_base_categories"]
            ),
            nutritional_base_days=int(nutrition["base_days"]),
            nutritional_traits=tuple(
                KeywordFactor(
                    name=e["name"],
                    keywords=tuple(e["keywords"]),
                    factor=float(e["factor"]),
                    note=e.get("note", ""),
                )
                for e in nutrition["traits"]
            ),
            season_months=MappingProxyType(season_months),
            season_factors=MappingProxyType(
                {k: float(v) for k, v in seasonal["factors"].items()}
            ),
            seasonal_base=tuple(
                PatternDays(
                    category=e["category"],
                    pattern=_compile(e["pattern"]),
                    days=int(e["days"]),
                )
                for e in seasonal["base"]
            ),
            fallback_categories=_keyword_days(fallback["categories"]),
            fallback_default_days=int(fallback["default_days"]),
            product_categories=MappingProxyType(
                {k: int(v) for k, v in raw["product_categories"].items()}
            ),
            food_expiry_estimates=MappingProxyType(
                {k: int(v) for k, v in raw["food_expiry_estimates"].items()}
            ),
            date_patterns=tuple(
                (name, _compile(p)) for name, p in raw["date_patterns"].items()
            ),
            relative_patterns=tuple(
                RelativePattern(
                    pattern=_compile(e["pattern"]), unit_days=int(e["unit_days"])
                )
                for e in raw["relative_patterns"]
            ),
            receipt_categories=_keyword_days(raw["receipt_categories"]),
        )

    # -- lookups ---------------------------------------------------------

    def match_keyword_category(self, text: str) -> KeywordCategory | None:
        """First category in declared order whose patterns match ``text``."""
        for category in self.keyword_categories:
            if category.matches(text):
                return category
        return None

    def match_brand(self, text: str) -> BrandRule | None:
        for brand in self.brands:
            if brand.name in text:
                return brand
        return None

    def season_for(self, month: int) -> str:
        return self.season_months[month]

    def receipt_category(self, name: str) -> KeywordDays | None:
        for entry in self.receipt_categories:
            if entry.category == name:
                return entry
        return None


def _compile(pattern: str) -> re.Pattern[str]:
    return re.compile(pattern, re.IGNORECASE)


def _keyword_days(entries: dict[str, Any]) -> tuple[KeywordDays, ...]:
    return tuple(
        KeywordDays(category=name, keywords=tuple(e["keywords"]), days=int(e["days"]))
        for name, e in entries.items()
    )
