"""Shared fixtures: fixed clock and an offline product database."""

from datetime import date
from unittest.mock import AsyncMock, MagicMock

import pytest

from shelflife.resolver import ExpiryResolver, default_strategies
from shelflife.tables import ShelfLifeTables

FIXED_TODAY = date(2024, 1, 15)  # winter


@pytest.fixture
def today():
    return FIXED_TODAY


@pytest.fixture
def tables():
    return ShelfLifeTables.default()


@pytest.fixture
def offline_client():
    """Product database client that never finds anything."""
    client = MagicMock()
    client.search_async = AsyncMock(return_value=[])
    client.timeout = 4.0
    return client


@pytest.fixture
def resolver(tables, offline_client):
    return ExpiryResolver(
        default_strategies(tables, offline_client),
        tables=tables,
        clock=lambda: FIXED_TODAY,
    )
