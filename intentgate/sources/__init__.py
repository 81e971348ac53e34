"""Ranked price sources consumed by the price oracle."""

from intentgate.sources.base import PriceSource
from intentgate.sources.coingecko import CoinGeckoSource
from intentgate.sources.cryptocom import CryptoComMCPSource, extract_price_from_text, parse_mcp_price
from intentgate.sources.fixed import FixedPriceSource

__all__ = [
    "PriceSource",
    "CryptoComMCPSource",
    "CoinGeckoSource",
    "FixedPriceSource",
    "parse_mcp_price",
    "extract_price_from_text",
]
