"""Data models shared by every estimation component."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date, timedelta
from typing import Any

from .normalize import normalize_descriptor


@dataclass(frozen=True)
class ItemDescriptor:
    """Textual description of a food item; the only input to estimation.

    ``category_hint`` is carried through for callers and is not used for
    matching; only ``name`` and ``brand`` feed ``text``.
    """

    name: str
    brand: str | None = None
    category_hint: str | None = None

    def __post_init__(self) -> None:
        if not self.name or not self.name.strip():
            raise ValueError("item name must not be empty")

    @property
    def text(self) -> str:
        """Normalized ``name + brand`` used for all keyword matching."""
        return normalize_descriptor(self.name, self.brand)

    @classmethod
    def coerce(cls, item: str | ItemDescriptor) -> ItemDescriptor:
        if isinstance(item, ItemDescriptor):
            return item
        return cls(name=item)


@dataclass(frozen=True)
class ExpiryEstimate:
    """A shelf-life estimate together with how much it can be trusted."""

    expiry_date: date
    confidence: float  # 0.0〜1.0, heuristic
    method: str  # label of the strategy that produced it
    category: str
    shelf_life_days: int

    def __post_init__(self) -> None:
        if not 0.0 <= self.confidence <= 1.0:
            raise ValueError(f"confidence out of range: {self.confidence!r}")
        if self.shelf_life_days < 0:
            raise ValueError(
                f"shelf_life_days must be non-negative: {self.shelf_life_days!r}"
            )

    @classmethod
    def from_days(
        cls,
        reference: date,
        days: int,
        *,
        confidence: float,
        method: str,
        category: str,
    ) -> ExpiryEstimate:
        """Build an estimate whose expiry is ``reference + days``."""
        return cls(
            expiry_date=reference + timedelta(days=days),
            confidence=confidence,
            method=method,
            category=category,
            shelf_life_days=days,
        )

    @property
    def expiry_date_iso(self) -> str:
        return self.expiry_date.isoformat()

    def needs_review(self, threshold: float = 0.5) -> bool:
        """True when the estimate is weak enough to ask the user to check it."""
        return self.confidence < threshold

    def to_dict(self) -> dict[str, Any]:
        return {
            "expiry_date": self.expiry_date_iso,
            "confidence": self.confidence,
            "method": self.method,
            "category": self.category,
            "shelf_life_days": self.shelf_life_days,
        }


@dataclass
class ProductMetadata:
    """Product record as returned by the product database."""

    product_name: str
    brands: str = ""
    categories_tags: list[str] = field(default_factory=list)
    expiration_date: str = ""
    best_before_date: str = ""
    use_by_date: str = ""

    @classmethod
    def from_dict(cls, raw: dict[str, Any]) -> ProductMetadata:
        """Build from a raw product record, dropping values of the wrong type."""
        tags = raw.get("categories_tags") or []
        if isinstance(tags, str):
            tags = tags.split(",")
        if not isinstance(tags, (list, tuple)):
            tags = []
        return cls(
            product_name=_text(raw.get("product_name")),
            brands=_text(raw.get("brands")),
            categories_tags=[t.strip() for t in tags if isinstance(t, str) and t.strip()],
            expiration_date=_text(raw.get("expiration_date")),
            best_before_date=_text(raw.get("best_before_date")),
            use_by_date=_text(raw.get("use_by_date")),
        )


def _text(value: Any) -> str:
    if isinstance(value, str):
        return value
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        return str(value)
    return ""


@dataclass(frozen=True)
class ReceiptPrediction:
    """Expiry prediction for an item bought on a known date."""

    expiry_date: date
    confidence: float
    category: str

    @property
    def expiry_date_iso(self) -> str:
        return self.expiry_date.isoformat()

    def to_dict(self) -> dict[str, Any]:
        return {
            "expiry_date": self.expiry_date_iso,
            "confidence": self.confidence,
            "category": self.category,
        }
