"""Ticker to CIK resolution backed by SEC's public ticker table."""

import asyncio
import logging
import time
from collections.abc import Callable, Mapping
from dataclasses import dataclass
from types import MappingProxyType

import httpx

from debtstack_chat.agents.chat.research.exceptions import ResearchError

logger = logging.getLogger(__name__)

COMPANY_TICKERS_URL = "https://www.sec.gov/files/company_tickers.json"


@dataclass(frozen=True)
class _Snapshot:
    mapping: Mapping[str, str]
    fetched_at: float


class TickerCache:
    """Process-wide ticker to CIK table with a fixed time-to-live.

    The table is fetched lazily on first use and re-fetched on the first
    access after it expires. A refresh replaces the whole snapshot in a single
    assignment, so readers never observe a partially built table.
    """

    def __init__(
        self,
        http_client: httpx.AsyncClient,
        user_agent: str,
        ttl_seconds: float = 24 * 60 * 60,
        url: str = COMPANY_TICKERS_URL,
        clock: Callable[[], float] = time.monotonic,
    ):
        self._http_client = http_client
        self._user_agent = user_agent
        self._ttl_seconds = ttl_seconds
        self._url = url
        self._clock = clock
        self._snapshot: _Snapshot | None = None
        self._refresh_lock = asyncio.Lock()

    def _is_fresh(self, snapshot: _Snapshot | None) -> bool:
        return snapshot is not None and self._clock() - snapshot.fetched_at < self._ttl_seconds

    async def get_mapping(self) -> Mapping[str, str]:
        """Return the current ticker to CIK table, refreshing it if expired."""
        snapshot = self._snapshot
        if self._is_fresh(snapshot):
            return snapshot.mapping  # type: ignore[union-attr]

        async with self._refresh_lock:
            # Another request may have refreshed while this one waited
            snapshot = self._snapshot
            if self._is_fresh(snapshot):
                return snapshot.mapping  # type: ignore[union-attr]
            return await self._refresh()

    async def _refresh(self) -> Mapping[str, str]:
        response = await self._http_client.get(self._url, headers={"User-Agent": self._user_agent})
        if response.status_code != 200:
            raise ResearchError(f"Failed to fetch SEC company tickers: {response.status_code}")

        mapping = {
            str(entry["ticker"]).upper(): str(entry["cik_str"])
            for entry in response.json().values()
        }
        self._snapshot = _Snapshot(MappingProxyType(mapping), self._clock())
        logger.info(f"Loaded {len(mapping)} SEC tickers")
        return self._snapshot.mapping

    async def resolve_cik(self, ticker: str) -> str | None:
        """Look up the CIK for a ticker, or None if SEC does not list it."""
        mapping = await self.get_mapping()
        return mapping.get(ticker.upper().strip())
