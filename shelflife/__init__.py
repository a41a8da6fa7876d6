"""Food expiry estimation from item descriptions."""

from .config import EstimatorConfig, load_config
from .errors import (
    LookupFailed,
    ReceiptParseError,
    ResolutionError,
    ShelfLifeError,
    TableError,
)
from .metadata import ExpiryDateExtractor, estimate_from_metadata
from .models import ExpiryEstimate, ItemDescriptor, ProductMetadata, ReceiptPrediction
from .openfoodfacts import OpenFoodFactsClient
from .receipt import ReceiptAnalyzer, ReceiptBridge
from .resolver import ExpiryResolver, default_strategies
from .strategies import PartialStrategy, TotalStrategy
from .tables import ShelfLifeTables

__all__ = [
    "ExpiryResolver",
    "default_strategies",
    "PartialStrategy",
    "TotalStrategy",
    "ExpiryDateExtractor",
    "estimate_from_metadata",
    "ReceiptBridge",
    "ReceiptAnalyzer",
    "OpenFoodFactsClient",
    "ShelfLifeTables",
    "ItemDescriptor",
    "ExpiryEstimate",
    "ProductMetadata",
    "ReceiptPrediction",
    "EstimatorConfig",
    "load_config",
    "ShelfLifeError",
    "TableError",
    "LookupFailed",
    "ResolutionError",
    "ReceiptParseError",
]
