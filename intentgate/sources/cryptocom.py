"""
Crypto.com Market Data MCP price source.

The MCP server speaks JSON-RPC 2.0; prices come back as tool-result text that
is usually JSON but sometimes prose, so parsing degrades from structured
content to JSON text to a numeric pattern match.
"""

import json
import math
import re
import time
from typing import Any

from intentgate.exceptions import PriceParseError, UpstreamAPIError
from intentgate.logging import get_logger
from intentgate.sources.base import PriceSource
from intentgate.sources.symbols import cryptocom_symbol
from intentgate.transport import AsyncHTTPTransport

logger = get_logger("sources.cryptocom")

SOURCE_NAME = "crypto.com-mcp"
DEFAULT_MCP_URL = "https://mcp.crypto.com/market-data/mcp"

# Extracted values above this are treated as misparses (e.g. a volume or timestamp)
MAX_PLAUSIBLE_PRICE = 10_000_000.0

_NUMBER = r"(\d{1,3}(?:,\d{3})+(?:\.\d+)?|\d+(?:\.\d+)?)"
_DOLLAR_PATTERN = re.compile(r"\$\s*" + _NUMBER)
_STANDALONE = r"(?<![\w.,-])"
_ANY_NUMBER_PATTERN = re.compile(_STANDALONE + _NUMBER)


def _to_price(value: Any) -> float | None:
    try:
        price = float(str(value).replace(",", ""))
    except (TypeError, ValueError):
        return None
    if not math.isfinite(price) or price <= 0 or price > MAX_PLAUSIBLE_PRICE:
        return None
    return price


def _price_from_structured(data: Any, symbol: str, quote: str) -> float | None:
    if not isinstance(data, dict):
        return None
    if "price" in data:
        return _to_price(data["price"])
    by_symbol = data.get(symbol)
    if isinstance(by_symbol, dict) and quote.lower() in by_symbol:
        return _to_price(by_symbol[quote.lower()])
    return None


def extract_price_from_text(text: str, quote: str = "USD") -> float | None:
    """
    Best-effort numeric extraction from free text.

    Prefers "$0.12" style amounts, then "0.12 USD" style amounts, then any
    standalone number. Candidates are tried in order and only finite,
    strictly positive and plausible values are accepted.
    """
    quote_pattern = re.compile(_STANDALONE + _NUMBER + r"\s*" + re.escape(quote), re.IGNORECASE)
    for pattern in (_DOLLAR_PATTERN, quote_pattern, _ANY_NUMBER_PATTERN):
        for match in pattern.finditer(text):
            price = _to_price(match.group(1))
            if price is not None:
                return price
    return None


def parse_mcp_price(response: Any, symbol: str, quote: str) -> float:
    """
    Parse a price out of an MCP ``tools/call`` response.

    Raises:
        UpstreamAPIError: If the response carries a JSON-RPC error member
        PriceParseError: If no positive price can be recovered
    """
    if not isinstance(response, dict):
        raise PriceParseError("Invalid MCP response format: not an object", SOURCE_NAME)

    error = response.get("error")
    if error:
        message = error.get("message", "unknown error") if isinstance(error, dict) else str(error)
        raise UpstreamAPIError(f"Crypto.com MCP error: {message}", SOURCE_NAME)

    result = response.get("result") or {}
    if not isinstance(result, dict):
        raise PriceParseError("Invalid MCP response format: result is not an object", SOURCE_NAME)

    price = _price_from_structured(result.get("structuredContent"), symbol, quote)
    if price is not None:
        return price

    content = result.get("content")
    if not isinstance(content, list):
        raise PriceParseError("Invalid MCP response format: missing content", SOURCE_NAME)

    text = next(
        (c.get("text") for c in content if isinstance(c, dict) and c.get("type") == "text" and c.get("text")),
        None,
    )
    if not text:
        raise PriceParseError("Invalid MCP response format: missing text content", SOURCE_NAME)

    try:
        payload = json.loads(text)
    except ValueError:
        payload = None

    if isinstance(payload, dict) and ("price" in payload or symbol in payload):
        price = _price_from_structured(payload, symbol, quote)
        if price is None:
            raise PriceParseError("MCP price payload has no positive price", SOURCE_NAME)
        return price

    price = extract_price_from_text(text, quote)
    if price is not None:
        logger.debug("Recovered %s price from free text", symbol)
        return price

    raise PriceParseError(
        f"Could not parse price from MCP response: {text[:100]}", SOURCE_NAME
    )


class CryptoComMCPSource(PriceSource):
    """Primary price source backed by the Crypto.com Market Data MCP server."""

    name = SOURCE_NAME

    def __init__(self, transport: AsyncHTTPTransport) -> None:
        """
        Initialize the source.

        Args:
            transport: Async HTTP transport pointed at the MCP endpoint
        """
        self.transport = transport

    async def fetch(self, base: str, quote: str) -> float:
        symbol = cryptocom_symbol(base)
        logger.debug("Fetching %s/%s from Crypto.com MCP (symbol=%s)", base, quote, symbol)

        response = await self.transport.request(
            "POST",
            json={
                "jsonrpc": "2.0",
                "method": "tools/call",
                "params": {
                    "name": "get_price",
                    "arguments": {"symbol": symbol},
                },
                "id": int(time.time() * 1000),
            },
        )

        price = parse_mcp_price(response, symbol, quote)
        logger.info("Crypto.com MCP price fetched for %s/%s: %s", base, quote, price)
        return price

    async def close(self) -> None:
        await self.transport.close()
