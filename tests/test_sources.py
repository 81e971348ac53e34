"""
Tests for the price sources and the async HTTP transport they share.

Wire-level tests run against ``httpx.MockTransport``.
"""

import json
from collections.abc import Callable

import httpx
import pytest
from hypothesis import given, settings
from hypothesis import strategies as st

from intentgate.exceptions import (
    PriceNotFoundError,
    PriceParseError,
    RateLimitedError,
    SourceTimeoutError,
    UpstreamAPIError,
    UpstreamError,
    UpstreamNotFoundError,
)
from intentgate.sources import coingecko, cryptocom
from intentgate.sources.coingecko import CoinGeckoSource
from intentgate.sources.cryptocom import (
    MAX_PLAUSIBLE_PRICE,
    CryptoComMCPSource,
    extract_price_from_text,
    parse_mcp_price,
)
from intentgate.sources.fixed import FixedPriceSource
from intentgate.sources.symbols import coingecko_id, cryptocom_symbol
from intentgate.transport import AsyncHTTPTransport


def make_transport(
    handler: Callable[[httpx.Request], httpx.Response],
    base_url: str = "https://upstream.test",
    source: str = "test-source",
) -> AsyncHTTPTransport:
    client = httpx.AsyncClient(transport=httpx.MockTransport(handler))
    return AsyncHTTPTransport(base_url=base_url, source=source, client=client)


def mcp_text_response(text: str) -> dict:
    return {"jsonrpc": "2.0", "id": 1, "result": {"content": [{"type": "text", "text": text}]}}


class TestSymbols:
    def test_known_assets(self) -> None:
        assert coingecko_id("CRO") == "cronos"
        assert coingecko_id("usdc") == "usd-coin"
        assert cryptocom_symbol("eth") == "ETH"

    def test_unknown_assets_fall_back(self) -> None:
        assert coingecko_id("DOGE") == "doge"
        assert cryptocom_symbol("doge") == "DOGE"


class TestTransport:
    """Tests for AsyncHTTPTransport error mapping."""

    async def test_returns_parsed_json(self) -> None:
        transport = make_transport(lambda request: httpx.Response(200, json={"ok": True}))
        assert await transport.request("GET", "/ping") == {"ok": True}

    async def test_joins_base_url_and_path(self) -> None:
        seen: list[str] = []

        def handler(request: httpx.Request) -> httpx.Response:
            seen.append(str(request.url))
            return httpx.Response(200, json={})

        transport = make_transport(handler, base_url="https://upstream.test/api/")
        await transport.request("GET", "/simple/price")
        await transport.request("POST")

        assert seen == ["https://upstream.test/api/simple/price", "https://upstream.test/api"]

    async def test_404_maps_to_not_found(self) -> None:
        transport = make_transport(lambda request: httpx.Response(404))

        with pytest.raises(UpstreamNotFoundError) as exc_info:
            await transport.request("GET", "/missing")

        assert exc_info.value.status_code == 404
        assert exc_info.value.source == "test-source"

    async def test_429_maps_to_rate_limited_with_retry_after(self) -> None:
        transport = make_transport(
            lambda request: httpx.Response(429, headers={"Retry-After": "30"})
        )

        with pytest.raises(RateLimitedError) as exc_info:
            await transport.request("GET")

        assert exc_info.value.retry_after == 30

    async def test_429_without_retry_after_defaults(self) -> None:
        transport = make_transport(lambda request: httpx.Response(429))

        with pytest.raises(RateLimitedError) as exc_info:
            await transport.request("GET")

        assert exc_info.value.retry_after == 60

    async def test_server_error_maps_to_api_error(self) -> None:
        transport = make_transport(lambda request: httpx.Response(503))

        with pytest.raises(UpstreamAPIError) as exc_info:
            await transport.request("GET")

        assert exc_info.value.status_code == 503

    async def test_invalid_json_is_an_api_error(self) -> None:
        transport = make_transport(lambda request: httpx.Response(200, text="<html>"))

        with pytest.raises(UpstreamAPIError, match="not valid JSON"):
            await transport.request("GET")

    async def test_timeout_maps_to_source_timeout(self) -> None:
        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ReadTimeout("timed out", request=request)

        transport = make_transport(handler)

        with pytest.raises(SourceTimeoutError):
            await transport.request("GET")

    async def test_connection_failure_maps_to_upstream_error(self) -> None:
        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ConnectError("refused", request=request)

        transport = make_transport(handler)

        with pytest.raises(UpstreamError) as exc_info:
            await transport.request("GET")

        assert exc_info.value.code == "CONNECTION_ERROR"

    async def test_shared_client_is_not_closed(self) -> None:
        client = httpx.AsyncClient(transport=httpx.MockTransport(lambda r: httpx.Response(200, json={})))
        transport = AsyncHTTPTransport("https://upstream.test", "shared", client=client)

        await transport.close()

        assert not client.is_closed
        await client.aclose()


class TestParseMcpPrice:
    """Tests for MCP response parsing."""

    def test_json_text_with_price(self) -> None:
        response = mcp_text_response(json.dumps({"price": 0.0812}))
        assert parse_mcp_price(response, "CRO", "USD") == 0.0812

    def test_json_text_with_symbol_map(self) -> None:
        response = mcp_text_response(json.dumps({"CRO": {"usd": 0.09}}))
        assert parse_mcp_price(response, "CRO", "USD") == 0.09

    def test_structured_content_wins(self) -> None:
        response = {
            "result": {
                "structuredContent": {"price": "0.07"},
                "content": [{"type": "text", "text": "price is $5"}],
            }
        }
        assert parse_mcp_price(response, "CRO", "USD") == 0.07

    def test_free_text_with_dollar_amount(self) -> None:
        response = mcp_text_response("The current price of CRO is $0.0823 (24h volume 12,000,000)")
        assert parse_mcp_price(response, "CRO", "USD") == 0.0823

    def test_free_text_with_quote_suffix(self) -> None:
        response = mcp_text_response("CRO trades at 0.0811 USD")
        assert parse_mcp_price(response, "CRO", "USD") == 0.0811

    def test_error_member_raises_api_error(self) -> None:
        response = {"jsonrpc": "2.0", "error": {"code": -32601, "message": "Method not found"}}

        with pytest.raises(UpstreamAPIError, match="Method not found"):
            parse_mcp_price(response, "CRO", "USD")

    def test_missing_content_raises_parse_error(self) -> None:
        with pytest.raises(PriceParseError):
            parse_mcp_price({"result": {}}, "CRO", "USD")

    def test_text_without_a_number_raises_parse_error(self) -> None:
        with pytest.raises(PriceParseError):
            parse_mcp_price(mcp_text_response("price unavailable"), "CRO", "USD")

    @pytest.mark.parametrize("payload", [{"price": -1}, {"price": 0}, {"price": "abc"}, {"CRO": {"usd": -2}}])
    def test_structured_non_positive_price_is_rejected(self, payload: dict) -> None:
        with pytest.raises(PriceParseError):
            parse_mcp_price(mcp_text_response(json.dumps(payload)), "CRO", "USD")

    def test_non_object_response_is_rejected(self) -> None:
        with pytest.raises(PriceParseError):
            parse_mcp_price(["not", "an", "object"], "CRO", "USD")

    @pytest.mark.parametrize("result", ["oops", 42, ["content"]])
    def test_non_object_result_is_a_parse_error(self, result: object) -> None:
        with pytest.raises(PriceParseError, match="result is not an object"):
            parse_mcp_price({"jsonrpc": "2.0", "result": result}, "CRO", "USD")

    @pytest.mark.parametrize(
        "text, expected",
        [
            ("CRO is trading at 0.0812 USD (24h vol $12,345,678,901)", 0.0812),
            ("Volume $99,999,999 price 0.08 USD", 0.08),
        ],
    )
    def test_large_dollar_volume_does_not_hide_the_price(self, text: str, expected: float) -> None:
        assert parse_mcp_price(mcp_text_response(text), "CRO", "USD") == expected


class TestExtractPriceFromText:
    def test_prefers_dollar_amount(self) -> None:
        assert extract_price_from_text("rank 12, price $0.08") == 0.08

    def test_thousands_separators(self) -> None:
        assert extract_price_from_text("BTC is $43,250.50 today") == 43250.50

    def test_negative_number_is_not_read_as_positive(self) -> None:
        assert extract_price_from_text("change -1.5") is None

    def test_implausible_value_is_rejected(self) -> None:
        assert extract_price_from_text(f"{int(MAX_PLAUSIBLE_PRICE * 10)}") is None

    def test_later_candidate_after_implausible_one(self) -> None:
        assert extract_price_from_text("mcap $25,000,000,000, last $0.0815") == 0.0815

    def test_no_number(self) -> None:
        assert extract_price_from_text("no data") is None


@given(price=st.decimals(min_value="0.0001", max_value="99999", places=4))
@settings(max_examples=100)
def test_property_dollar_amounts_are_recovered(price) -> None:
    """
    Property: Any positive "$<price>" embedded in prose is recovered exactly.
    """
    text = f"Latest CRO quote: ${price} as of now"
    assert extract_price_from_text(text) == float(price)


class TestCryptoComMCPSource:
    async def test_sends_json_rpc_tools_call(self) -> None:
        requests: list[dict] = []

        def handler(request: httpx.Request) -> httpx.Response:
            requests.append(json.loads(request.content))
            return httpx.Response(200, json=mcp_text_response('{"price": 0.0812}'))

        source = CryptoComMCPSource(make_transport(handler, source=cryptocom.SOURCE_NAME))
        price = await source.fetch("cro", "USD")

        assert price == 0.0812
        body = requests[0]
        assert body["jsonrpc"] == "2.0"
        assert body["method"] == "tools/call"
        assert body["params"] == {"name": "get_price", "arguments": {"symbol": "CRO"}}

    async def test_http_error_propagates(self) -> None:
        source = CryptoComMCPSource(make_transport(lambda request: httpx.Response(500)))

        with pytest.raises(UpstreamAPIError):
            await source.fetch("CRO", "USD")


class TestCoinGeckoSource:
    async def test_simple_price_lookup(self) -> None:
        seen: list[httpx.Request] = []

        def handler(request: httpx.Request) -> httpx.Response:
            seen.append(request)
            return httpx.Response(200, json={"cronos": {"usd": 0.0805}})

        source = CoinGeckoSource(make_transport(handler, source=coingecko.SOURCE_NAME))
        price = await source.fetch("CRO", "USD")

        assert price == 0.0805
        assert seen[0].url.path.endswith("/simple/price")
        assert seen[0].url.params["ids"] == "cronos"
        assert seen[0].url.params["vs_currencies"] == "usd"

    async def test_missing_coin_raises_not_found(self) -> None:
        source = CoinGeckoSource(make_transport(lambda request: httpx.Response(200, json={})))

        with pytest.raises(PriceNotFoundError):
            await source.fetch("CRO", "USD")

    async def test_missing_currency_raises_not_found(self) -> None:
        source = CoinGeckoSource(
            make_transport(lambda request: httpx.Response(200, json={"cronos": {"eur": 0.07}}))
        )

        with pytest.raises(PriceNotFoundError):
            await source.fetch("CRO", "USD")

    @pytest.mark.parametrize("value", [0, -1, "n/a", True, False, "inf"])
    async def test_bad_value_raises_parse_error(self, value: object) -> None:
        source = CoinGeckoSource(
            make_transport(lambda request: httpx.Response(200, json={"cronos": {"usd": value}}))
        )

        with pytest.raises(PriceParseError):
            await source.fetch("CRO", "USD")

    async def test_rate_limit_surfaces(self) -> None:
        source = CoinGeckoSource(make_transport(lambda request: httpx.Response(429)))

        with pytest.raises(RateLimitedError):
            await source.fetch("CRO", "USD")


class TestFixedPriceSource:
    async def test_answers_configured_price(self) -> None:
        assert await FixedPriceSource(0.12).fetch("ETH", "USD") == 0.12

    def test_rejects_non_positive_price(self) -> None:
        with pytest.raises(ValueError):
            FixedPriceSource(0)
