"""Asset symbol mappings for the supported price sources."""

from dataclasses import dataclass


@dataclass(frozen=True)
class CoinIds:
    coingecko: str
    cryptocom: str


COIN_IDS: dict[str, CoinIds] = {
    "CRO": CoinIds(coingecko="cronos", cryptocom="CRO"),
    "ETH": CoinIds(coingecko="ethereum", cryptocom="ETH"),
    "BTC": CoinIds(coingecko="bitcoin", cryptocom="BTC"),
    "USDC": CoinIds(coingecko="usd-coin", cryptocom="USDC"),
    "USDT": CoinIds(coingecko="tether", cryptocom="USDT"),
}


def coingecko_id(base: str) -> str:
    """CoinGecko coin id for ``base``; unknown assets fall back to the lower-cased symbol."""
    ids = COIN_IDS.get(base.upper())
    return ids.coingecko if ids else base.lower()


def cryptocom_symbol(base: str) -> str:
    """Crypto.com symbol for ``base``; unknown assets fall back to the upper-cased symbol."""
    ids = COIN_IDS.get(base.upper())
    return ids.cryptocom if ids else base.upper()
