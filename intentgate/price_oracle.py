"""
Price oracle aggregator.

Resolves a price for an asset pair from ranked sources with a TTL cache and
bounded-time fallback. The cache is the only shared mutable state; it is
read and written without locks and never across an await, so concurrent
refreshes of the same pair are last-writer-wins.
"""

import asyncio
import math
from collections.abc import Callable, Sequence
from datetime import datetime, timezone

from intentgate.exceptions import (
    PriceUnavailableError,
    SourceTimeoutError,
    UpstreamError,
)
from intentgate.logging import get_logger
from intentgate.sources.base import PriceSource
from intentgate.types.prices import CacheStats, PriceQuote

logger = get_logger("oracle")

DEFAULT_CACHE_TTL = 60.0
DEFAULT_TIMEOUT = 5.0


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


def cache_key(base: str, quote: str) -> str:
    return f"{base.upper()}/{quote.upper()}"


class PriceOracle:
    """
    Multi-source price aggregator.

    Sources are tried in rank order; the first one that answers is cached
    and returned. A source failure never escapes on its own, only the
    aggregate ``PriceUnavailableError`` when every source failed.

    Example:
        ```python
        oracle = PriceOracle([CryptoComMCPSource(mcp), CoinGeckoSource(gecko)])
        quote = await oracle.fetch_price("CRO", "USD")
        print(quote.price, quote.source)
        ```
    """

    def __init__(
        self,
        sources: Sequence[PriceSource],
        ttl: float = DEFAULT_CACHE_TTL,
        timeout: float = DEFAULT_TIMEOUT,
        clock: Callable[[], datetime] = _utcnow,
    ) -> None:
        """
        Initialize the oracle.

        Args:
            sources: Price sources in rank order (primary first)
            ttl: Seconds a cached quote stays valid
            timeout: Per-source time limit in seconds
            clock: Returns the current time (injectable for tests)
        """
        if ttl <= 0:
            raise ValueError(f"ttl must be positive, got {ttl}")
        if timeout <= 0:
            raise ValueError(f"timeout must be positive, got {timeout}")

        self.sources = list(sources)
        self.ttl = ttl
        self.timeout = timeout
        self._clock = clock
        self._cache: dict[str, PriceQuote] = {}

    async def fetch_price(self, base: str, quote: str) -> PriceQuote:
        """
        Resolve the current price of ``base`` in ``quote``.

        Returns:
            A cached or freshly fetched PriceQuote tagged with its source

        Raises:
            PriceUnavailableError: If every configured source failed
        """
        key = cache_key(base, quote)

        cached = self.get_cached(base, quote)
        if cached is not None:
            logger.debug("Cache hit for %s: %s (%s)", key, cached.price, cached.source)
            return cached

        causes: list[UpstreamError] = []
        for source in self.sources:
            try:
                price = await self._fetch_from(source, base, quote)
            except SourceTimeoutError as e:
                logger.warning("%s timed out for %s after %ss, falling back", source.name, key, e.timeout)
                causes.append(e)
                continue
            except UpstreamError as e:
                logger.warning("%s failed for %s, falling back: %s", source.name, key, e.message)
                causes.append(e)
                continue

            quote_obj = PriceQuote.create(key, price, source.name, self.ttl, self._clock())
            self._cache[key] = quote_obj
            logger.debug("Price cached for %s: %s (%s)", key, price, source.name)
            return quote_obj

        error = PriceUnavailableError(key, causes)
        logger.error("All price sources failed: %s", error.message)
        raise error

    async def _fetch_from(self, source: PriceSource, base: str, quote: str) -> float:
        try:
            price = await asyncio.wait_for(source.fetch(base, quote), timeout=self.timeout)
        except asyncio.TimeoutError as e:
            raise SourceTimeoutError(source.name, self.timeout) from e
        except UpstreamError:
            raise
        except Exception as e:
            # A misbehaving source must not break the cascade
            raise UpstreamError("SOURCE_ERROR", f"{type(e).__name__}: {e}", source.name) from e

        if isinstance(price, bool) or not isinstance(price, (int, float)) or not (math.isfinite(price) and price > 0):
            raise UpstreamError("INVALID_PRICE", f"non-positive price {price!r}", source.name)
        return float(price)

    def get_cached(self, base: str, quote: str) -> PriceQuote | None:
        """Return the cached quote for a pair if it is still valid."""
        cached = self._cache.get(cache_key(base, quote))
        if cached is not None and cached.is_valid(self._clock()):
            return cached
        return None

    def invalidate(self, base: str, quote: str) -> None:
        """Drop the cached quote for one pair."""
        self._cache.pop(cache_key(base, quote), None)

    def get_cache_stats(self) -> CacheStats:
        """Cache statistics for debugging and monitoring."""
        return CacheStats(size=len(self._cache), entries=list(self._cache.keys()))

    def clear_cache(self) -> None:
        self._cache.clear()
        logger.info("Price cache cleared")

    async def close(self) -> None:
        """Close every source."""
        for source in self.sources:
            await source.close()
