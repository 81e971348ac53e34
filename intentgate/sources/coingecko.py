"""CoinGecko simple-price source."""

import math
from typing import Any

from intentgate.exceptions import PriceNotFoundError, PriceParseError
from intentgate.logging import get_logger
from intentgate.sources.base import PriceSource
from intentgate.sources.symbols import coingecko_id
from intentgate.transport import AsyncHTTPTransport

logger = get_logger("sources.coingecko")

SOURCE_NAME = "coingecko"
DEFAULT_COINGECKO_URL = "https://api.coingecko.com/api/v3"


class CoinGeckoSource(PriceSource):
    """Secondary price source: keyed lookup of ``coin-id -> {currency: price}``."""

    name = SOURCE_NAME

    def __init__(self, transport: AsyncHTTPTransport) -> None:
        """
        Initialize the source.

        Args:
            transport: Async HTTP transport pointed at the CoinGecko API root
        """
        self.transport = transport

    async def fetch(self, base: str, quote: str) -> float:
        coin_id = coingecko_id(base)
        vs_quote = quote.lower()
        logger.debug("Fetching %s/%s from CoinGecko (coin_id=%s)", base, quote, coin_id)

        # 429 surfaces from the transport as RateLimitedError
        data: Any = await self.transport.request(
            "GET",
            "/simple/price",
            params={"ids": coin_id, "vs_currencies": vs_quote},
        )

        prices = data.get(coin_id) if isinstance(data, dict) else None
        price = prices.get(vs_quote) if isinstance(prices, dict) else None
        if price is None:
            raise PriceNotFoundError(
                f"Price not found for {base}/{quote} in CoinGecko response", SOURCE_NAME
            )

        if isinstance(price, bool):
            raise PriceParseError(f"Non-numeric CoinGecko price: {price!r}", SOURCE_NAME)
        try:
            value = float(price)
        except (TypeError, ValueError) as e:
            raise PriceParseError(f"Non-numeric CoinGecko price: {price!r}", SOURCE_NAME) from e
        if not math.isfinite(value) or value <= 0:
            raise PriceParseError(f"Invalid CoinGecko price: {value}", SOURCE_NAME)

        logger.info("CoinGecko price fetched for %s/%s: %s", base, quote, value)
        return value

    async def close(self) -> None:
        await self.transport.close()
