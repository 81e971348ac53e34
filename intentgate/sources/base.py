"""Price source interface."""

from abc import ABC, abstractmethod


class PriceSource(ABC):
    """Abstract base class for a single ranked price provider."""

    #: Identifier recorded on quotes answered by this source
    name: str = "unknown"

    @abstractmethod
    async def fetch(self, base: str, quote: str) -> float:
        """
        Fetch the current price of ``base`` in ``quote``.

        Returns:
            A strictly positive price

        Raises:
            UpstreamError: On any failure (timeout, transport, status, parsing)
        """

    async def close(self) -> None:
        """Release resources held by the source."""
