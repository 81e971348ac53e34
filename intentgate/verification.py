"""
Recipient verification.

Providers answer "is this address verified?"; the gate turns their answers,
errors and absence into a VerificationStatus and never raises.
"""

import time
from abc import ABC, abstractmethod
from collections.abc import Callable, Iterable
from typing import Any

from intentgate.exceptions import UpstreamError, UpstreamNotFoundError, VerificationCheckError
from intentgate.logging import get_logger
from intentgate.transport import AsyncHTTPTransport
from intentgate.types.decisions import VerificationStatus

logger = get_logger("verification")

DEFAULT_VERIFY_API_URL = "https://verify.cronos.org/api/v1"
DEFAULT_VERIFICATION_CACHE_TTL = 300.0


class VerifyProvider(ABC):
    """Abstract base class for recipient trust providers."""

    name: str = "unknown"

    @abstractmethod
    async def is_verified(self, address: str) -> bool:
        """Return whether ``address`` is verified. May raise on failure."""

    async def health_check(self) -> bool:
        return True

    async def close(self) -> None:
        """Release resources held by the provider."""


class MockVerifyProvider(VerifyProvider):
    """In-memory allow-list, for development and tests."""

    name = "mock-verify"

    def __init__(self, initial_verified: Iterable[str] = ()) -> None:
        self._verified = {address.lower() for address in initial_verified}

    async def is_verified(self, address: str) -> bool:
        return address.lower() in self._verified

    def add_verified(self, address: str) -> None:
        self._verified.add(address.lower())

    def remove_verified(self, address: str) -> None:
        self._verified.discard(address.lower())

    def clear(self) -> None:
        self._verified.clear()

    @property
    def verified_count(self) -> int:
        return len(self._verified)


class HTTPVerifyProvider(VerifyProvider):
    """Cronos Verify style wallet-status API."""

    name = "cronos-verify"

    def __init__(self, transport: AsyncHTTPTransport, api_key: str = "") -> None:
        """
        Initialize the provider.

        Args:
            transport: Async HTTP transport pointed at the verification API root
            api_key: Bearer token for the API (never logged)
        """
        self.transport = transport
        self._api_key = api_key

    def _headers(self) -> dict[str, str]:
        return {"Authorization": f"Bearer {self._api_key}"} if self._api_key else {}

    async def is_verified(self, address: str) -> bool:
        try:
            data: Any = await self.transport.request(
                "GET",
                f"/wallets/{address.lower()}/status",
                headers=self._headers(),
            )
        except UpstreamNotFoundError:
            # Unknown wallet means not verified, not an error
            return False
        except UpstreamError as e:
            raise VerificationCheckError(e.message, self.name) from e

        if not isinstance(data, dict) or not isinstance(data.get("verified"), bool):
            raise VerificationCheckError("Malformed verification response", self.name)
        return data["verified"]

    async def health_check(self) -> bool:
        try:
            await self.transport.request("GET", "/health")
        except UpstreamError:
            return False
        return True

    async def close(self) -> None:
        await self.transport.close()


class VerificationGate:
    """
    Turns provider answers into a VerificationStatus.

    - No provider: ``checked=False``, ``verified=fail_open``
    - Provider answers: ``checked=True``, ``verified=<answer>``
    - Provider raises: ``checked=True``, ``verified=False``

    Successful answers are cached per address for ``cache_ttl`` seconds;
    errors are never cached.
    """

    def __init__(
        self,
        provider: VerifyProvider | None,
        fail_open: bool = True,
        cache_ttl: float = DEFAULT_VERIFICATION_CACHE_TTL,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self.provider = provider
        self.fail_open = fail_open
        self.cache_ttl = cache_ttl
        self._clock = clock
        self._cache: dict[str, tuple[bool, float]] = {}

        if provider is None:
            logger.warning(
                "No verification provider configured; recipients are treated as %s",
                "verified" if fail_open else "unverified",
            )

    @property
    def configured(self) -> bool:
        return self.provider is not None

    async def check(self, address: str) -> VerificationStatus:
        if not self.configured:
            return VerificationStatus(checked=False, verified=self.fail_open)

        key = address.lower()
        cached = self._cache.get(key)
        if cached is not None and cached[1] > self._clock():
            logger.debug("Verification cache hit for %s", key)
            return VerificationStatus(checked=True, verified=cached[0])

        try:
            verified = await self.provider.is_verified(key)
        except Exception as e:
            logger.error(
                "Verification check via %s failed, treating %s as unverified: %s",
                self.provider.name, key, e,
            )
            return VerificationStatus(checked=True, verified=False)

        if not isinstance(verified, bool):
            logger.error("Verification provider %s returned a non-boolean answer", self.provider.name)
            return VerificationStatus(checked=True, verified=False)

        if self.cache_ttl > 0:
            self._cache[key] = (verified, self._clock() + self.cache_ttl)
        logger.info("Verification checked for %s via %s: %s", key, self.provider.name, verified)
        return VerificationStatus(checked=True, verified=verified)

    def clear_cache(self) -> None:
        self._cache.clear()
        logger.info("Verification cache cleared")
