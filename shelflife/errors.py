"""Exception types raised by the expiry estimation engine."""

from __future__ import annotations


class ShelfLifeError(Exception):
    """Base class for all shelflife errors."""


class TableError(ShelfLifeError):
    """Keyword/pattern table data is missing or malformed."""


class LookupFailed(ShelfLifeError):
    """The remote product database could not be queried or parsed."""


class ResolutionError(ShelfLifeError):
    """The terminal strategy failed to produce an estimate.

    This is a defect in the engine, not a runtime condition callers
    are expected to recover from.
    """


class ReceiptParseError(ShelfLifeError):
    """A receipt analysis response could not be turned into items."""
