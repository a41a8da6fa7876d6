"""Minimal Open Food Facts search client."""

from __future__ import annotations

import asyncio
import logging
import threading
from typing import Any

import requests

from .errors import LookupFailed

logger = logging.getLogger(__name__)

DEFAULT_SEARCH_URL = "https://world.openfoodfacts.org/cgi/search.pl"
DEFAULT_USER_AGENT = "shelflife/0.1 (+https://world.openfoodfacts.org)"


class OpenFoodFactsClient:
    """Free-text product search against the Open Food Facts database.

    The service is best-effort: every failure surfaces as ``LookupFailed``
    so callers can treat it as "no data".
    """

    def __init__(
        self,
        base_url: str = DEFAULT_SEARCH_URL,
        timeout: float = 4.0,
        user_agent: str = DEFAULT_USER_AGENT,
        page_size: int = 5,
        session: requests.Session | None = None,
    ) -> None:
        self._base_url = base_url
        self._timeout = timeout
        self._page_size = page_size
        self._user_agent = user_agent
        # An injected session is used as-is from every thread; otherwise each
        # worker thread of search_async gets its own.
        self._session = session
        if session is not None:
            session.headers.setdefault("User-Agent", user_agent)
        self._local = threading.local()
        self._owned: list[requests.Session] = []
        self._lock = threading.Lock()

    @property
    def timeout(self) -> float:
        return self._timeout

    def _get_session(self) -> requests.Session:
        if self._session is not None:
            return self._session
        session = getattr(self._local, "session", None)
        if session is None:
            session = requests.Session()
            session.headers["User-Agent"] = self._user_agent
            self._local.session = session
            with self._lock:
                self._owned.append(session)
        return session

    def search(self, name: str) -> list[dict[str, Any]]:
        """Return candidate products for ``name`` (possibly empty)."""
        params = {
            "search_terms": name,
            "search_simple": 1,
            "action": "process",
            "json": 1,
            "page_size": self._page_size,
        }
        try:
            resp = self._get_session().get(
                self._base_url, params=params, timeout=self._timeout
            )
            resp.raise_for_status()
            data = resp.json()
        except requests.RequestException as e:
            raise LookupFailed(f"product search failed for {name!r}: {e}") from e
        except ValueError as e:
            raise LookupFailed(f"invalid JSON from product search: {e}") from e

        if not isinstance(data, dict):
            raise LookupFailed("unexpected product search response shape")
        products = data.get("products")
        if not isinstance(products, list):
            return []
        logger.debug("Open Food Facts: %d products for %r", len(products), name)
        return [p for p in products if isinstance(p, dict)]

    async def search_async(self, name: str) -> list[dict[str, Any]]:
        return await asyncio.to_thread(self.search, name)

    def close(self) -> None:
        """Close the sessions this client created. An injected one is left open."""
        with self._lock:
            owned, self._owned = self._owned, []
        for session in owned:
            session.close()
