"""
Async HTTP transport for intentgate upstreams.

Handles async HTTP communication with price sources, the verification API and
remote provers using httpx, with per-call timeouts, request/response logging
and error-response parsing into typed exceptions.
"""

import time
from typing import Any

import httpx

from intentgate.exceptions import (
    RateLimitedError,
    SourceTimeoutError,
    UpstreamAPIError,
    UpstreamError,
    UpstreamNotFoundError,
)
from intentgate.logging import log_http_request, log_http_response

DEFAULT_USER_AGENT = "intentgate/0.1"


class AsyncHTTPTransport:
    """
    Async HTTP transport bound to one upstream.

    Handles:
    - Explicit per-call timeouts (timeouts surface as SourceTimeoutError)
    - Transport failures surfaced as UpstreamError tagged with the upstream name
    - Error response parsing into typed exceptions (404, 429, other non-2xx)

    Several transports may share one ``httpx.AsyncClient``; a transport only
    closes the client it created itself.
    """

    def __init__(
        self,
        base_url: str,
        source: str,
        timeout: float = 5.0,
        headers: dict[str, str] | None = None,
        client: httpx.AsyncClient | None = None,
    ) -> None:
        """
        Initialize async HTTP transport.

        Args:
            base_url: Base URL for requests (e.g., "https://api.coingecko.com/api/v3")
            source: Name of the upstream, used to tag errors and logs
            timeout: Per-call timeout in seconds
            headers: Default headers sent with every request
            client: Shared httpx client (optional; one is created if omitted)
        """
        self.base_url = base_url.rstrip("/")
        self.source = source
        self.timeout = timeout
        self.headers = {"User-Agent": DEFAULT_USER_AGENT, **(headers or {})}

        self._owns_client = client is None
        self._client = client or httpx.AsyncClient(timeout=timeout)

    async def close(self) -> None:
        """Close the HTTP client if this transport created it."""
        if self._owns_client:
            await self._client.aclose()

    async def __aenter__(self) -> "AsyncHTTPTransport":
        return self

    async def __aexit__(self, *args: Any) -> None:
        await self.close()

    def url_for(self, path: str) -> str:
        if not path:
            return self.base_url
        return f"{self.base_url}/{path.lstrip('/')}"

    async def request(
        self,
        method: str,
        path: str = "",
        params: dict[str, Any] | None = None,
        json: dict[str, Any] | None = None,
        headers: dict[str, str] | None = None,
        log_body: bool = True,
    ) -> Any:
        """
        Make a request and return the parsed JSON body.

        Args:
            method: HTTP method
            path: Path relative to the base URL
            params: Query parameters
            json: JSON request body
            headers: Extra headers for this request
            log_body: Whether the request body may be logged (masked) at DEBUG

        Returns:
            Parsed JSON response

        Raises:
            SourceTimeoutError: If the call exceeds the timeout
            UpstreamError: On transport failures, error statuses or invalid JSON
        """
        url = self.url_for(path)
        request_headers = {**self.headers, **(headers or {})}

        log_http_request(
            method, url, params=params, headers=request_headers,
            body=json if log_body else None,
        )

        started = time.perf_counter()
        try:
            response = await self._client.request(
                method,
                url,
                params=params,
                json=json,
                headers=request_headers,
                timeout=self.timeout,
            )
        except httpx.TimeoutException as e:
            raise SourceTimeoutError(self.source, self.timeout) from e
        except httpx.RequestError as e:
            raise UpstreamError("CONNECTION_ERROR", str(e) or type(e).__name__, self.source) from e

        elapsed_ms = (time.perf_counter() - started) * 1000

        if response.status_code >= 400:
            log_http_response(response.status_code, url, elapsed_ms=elapsed_ms)
            raise self._parse_error_response(response)

        try:
            data = response.json()
        except ValueError as e:
            log_http_response(response.status_code, url, body=response.text, elapsed_ms=elapsed_ms)
            raise UpstreamAPIError(
                "Response body is not valid JSON", self.source, response.status_code
            ) from e

        log_http_response(response.status_code, url, body=data, elapsed_ms=elapsed_ms)
        return data

    def _parse_error_response(self, response: httpx.Response) -> UpstreamError:
        """
        Parse an error response into a typed exception.

        Args:
            response: HTTP response with error status

        Returns:
            Appropriate UpstreamError subclass
        """
        status_code = response.status_code
        reason = response.reason_phrase or "error"
        message = f"{self.source} API error: {status_code} {reason}"

        if status_code == 404:
            return UpstreamNotFoundError(message, self.source)
        elif status_code == 429:
            retry_after_str = response.headers.get("Retry-After", "60")
            try:
                retry_after = int(retry_after_str)
            except ValueError:
                retry_after = 60
            return RateLimitedError(
                f"{self.source} API rate limit exceeded (429)", self.source, retry_after
            )
        return UpstreamAPIError(message, self.source, status_code)
