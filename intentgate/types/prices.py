"""Price quote data models."""

import math
from dataclasses import dataclass
from datetime import datetime, timedelta


@dataclass(frozen=True)
class PriceQuote:
    """A point-in-time price snapshot owned by the oracle cache."""

    pair: str  # "BASE/QUOTE"
    price: float
    source: str
    fetched_at: datetime
    expires_at: datetime

    @classmethod
    def create(
        cls,
        pair: str,
        price: float,
        source: str,
        ttl: float,
        now: datetime,
    ) -> "PriceQuote":
        """Create a quote that expires ``ttl`` seconds after ``now``."""
        if not math.isfinite(price) or price <= 0:
            raise ValueError(f"price must be a positive finite number, got {price!r}")
        return cls(
            pair=pair,
            price=price,
            source=source,
            fetched_at=now,
            expires_at=now + timedelta(seconds=ttl),
        )

    def is_valid(self, now: datetime) -> bool:
        """A quote is valid only while ``now < expires_at``."""
        return now < self.expires_at


@dataclass(frozen=True)
class CacheStats:
    """Snapshot of the oracle cache for debugging and monitoring."""

    size: int
    entries: list[str]
