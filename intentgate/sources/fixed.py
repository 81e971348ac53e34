"""Fixed price source for deterministic runs."""

from intentgate.sources.base import PriceSource

DEFAULT_MOCK_PRICE = 0.08


class FixedPriceSource(PriceSource):
    """Answers every pair with one configured price, without network access."""

    name = "mock"

    def __init__(self, price: float = DEFAULT_MOCK_PRICE) -> None:
        if price <= 0:
            raise ValueError(f"mock price must be positive, got {price}")
        self.price = price

    async def fetch(self, base: str, quote: str) -> float:
        return self.price
