"""Data models for receipt-derived items."""

from __future__ import annotations

from dataclasses import dataclass, field


@dataclass
class ReceiptItem:
    """A food line from a receipt with its predicted expiry."""

    id: str                # "item-<index>"
    name: str
    purchase_date: str     # YYYY-MM-DD
    estimated_expiry: str  # YYYY-MM-DD
    confidence: float
    category: str
    quantity: float = 1


@dataclass
class ReceiptAnalysis:
    purchase_date: str
    items: list[ReceiptItem] = field(default_factory=list)
