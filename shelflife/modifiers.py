"""Multiplicative shelf-life modifiers (packaging, nutrition, season)."""

from __future__ import annotations

import math
from dataclasses import dataclass
from datetime import date
from typing import Iterable

from .tables import ShelfLifeTables


@dataclass(frozen=True)
class Modifier:
    name: str
    factor: float


def compose(modifiers: Iterable[Modifier]) -> float:
    """Combine factors by multiplication. No modifiers means 1.0."""
    total = 1.0
    for modifier in modifiers:
        total *= modifier.factor
    return total


def round_half_up(value: float) -> int:
    """Round to the nearest whole day, .5 rounding up."""
    return int(math.floor(value + 0.5))


def apply(base_days: float, modifiers: Iterable[Modifier]) -> int:
    """Scale ``base_days`` by the composed modifiers and round."""
    return round_half_up(base_days * compose(modifiers))


def match_packaging(text: str, tables: ShelfLifeTables) -> list[Modifier]:
    return [
        Modifier(rule.name, rule.factor)
        for rule in tables.packaging_modifiers
        if rule.pattern.search(text)
    ]


def match_nutritional(text: str, tables: ShelfLifeTables) -> list[Modifier]:
    return [
        Modifier(trait.name, trait.factor)
        for trait in tables.nutritional_traits
        if trait.matches(text)
    ]


def seasonal_modifier(today: date, tables: ShelfLifeTables) -> Modifier:
    season = tables.season_for(today.month)
    return Modifier(season, tables.season_factors.get(season, 1.0))


def match_override(text: str, tables: ShelfLifeTables) -> int | None:
    """Fixed shelf life for a specific item named in ``text``, if any."""
    for item, days in tables.item_overrides.items():
        if item in text:
            return days
    return None
