"""Receipt integration: purchase-date anchored expiry prediction."""

from .analysis import ReceiptAnalyzer, parse_response
from .bridge import ReceiptBridge
from .models import ReceiptAnalysis, ReceiptItem

__all__ = [
    "ReceiptBridge",
    "ReceiptAnalyzer",
    "ReceiptAnalysis",
    "ReceiptItem",
    "parse_response",
]
