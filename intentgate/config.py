"""
Agent configuration.

Every capability is resolved once at startup from an AgentConfig, built
directly or from environment variables.
"""

import os
from dataclasses import dataclass
from typing import Any

from intentgate.exceptions import ConfigurationError
from intentgate.sources.coingecko import DEFAULT_COINGECKO_URL
from intentgate.sources.cryptocom import DEFAULT_MCP_URL
from intentgate.sources.fixed import DEFAULT_MOCK_PRICE
from intentgate.verification import DEFAULT_VERIFY_API_URL

ENV_PREFIX = "INTENTGATE_"

VERIFY_PROVIDERS = ("mock", "http", "none")
PROOF_PROVIDERS = ("mock", "remote")

_TRUE = {"1", "true", "yes", "on"}
_FALSE = {"0", "false", "no", "off"}

# Cronos testnet
DEFAULT_CHAIN_ID = 338


@dataclass
class AgentConfig:
    """Configuration for the decision agent."""

    use_real_price_api: bool = False
    privacy_mode: bool = False
    strict_verification: bool = False
    # Policy when no verification provider is configured. True keeps the
    # permissive behavior: an absent capability does not block execution.
    verification_fail_open: bool = True
    chain_id: int = DEFAULT_CHAIN_ID
    price_cache_ttl: float = 60.0
    request_timeout: float = 5.0
    mock_price: float = DEFAULT_MOCK_PRICE
    base_asset: str = "CRO"
    quote_asset: str = "USD"
    cryptocom_mcp_url: str = DEFAULT_MCP_URL
    coingecko_url: str = DEFAULT_COINGECKO_URL
    verify_provider: str = "mock"
    verify_api_url: str = DEFAULT_VERIFY_API_URL
    verify_api_key: str = ""
    verification_cache_ttl: float = 300.0
    # Seed list for the mock verification provider
    verified_addresses: tuple[str, ...] = ()
    proof_provider: str = "mock"
    prover_url: str | None = None

    def __post_init__(self) -> None:
        self.validate()

    def validate(self) -> None:
        """
        Check field values.

        Raises:
            ConfigurationError: If any value is out of range
        """
        for name in ("price_cache_ttl", "request_timeout", "mock_price"):
            if getattr(self, name) <= 0:
                raise ConfigurationError(f"{name} must be positive, got {getattr(self, name)}")
        if self.verification_cache_ttl < 0:
            raise ConfigurationError("verification_cache_ttl must not be negative")
        if self.chain_id <= 0:
            raise ConfigurationError(f"chain_id must be positive, got {self.chain_id}")
        if self.verify_provider not in VERIFY_PROVIDERS:
            raise ConfigurationError(
                f"Invalid verify provider: {self.verify_provider}. Must be one of {', '.join(VERIFY_PROVIDERS)}"
            )
        if self.proof_provider not in PROOF_PROVIDERS:
            raise ConfigurationError(
                f"Invalid proof provider: {self.proof_provider}. Must be one of {', '.join(PROOF_PROVIDERS)}"
            )
        if self.proof_provider == "remote" and not self.prover_url:
            raise ConfigurationError("prover_url is required for the remote proof provider")

    @classmethod
    def from_env(cls, environ: dict[str, str] | None = None) -> "AgentConfig":
        """
        Create a configuration from environment variables.

        Environment variables (all optional):
            INTENTGATE_USE_REAL_PRICE_API: Query live price sources instead of the mock price
            INTENTGATE_PRIVACY_MODE: Generate threshold-hiding proofs
            INTENTGATE_STRICT_VERIFICATION: SKIP intents with unverified recipients
            INTENTGATE_VERIFICATION_FAIL_OPEN: Treat recipients as verified when no provider exists
            INTENTGATE_CHAIN_ID: Chain id used for intent-hash domain separation
            INTENTGATE_PRICE_CACHE_TTL: Price cache TTL in seconds
            INTENTGATE_REQUEST_TIMEOUT: Per-call timeout in seconds
            INTENTGATE_MOCK_PRICE: Price answered when live sources are disabled
            INTENTGATE_BASE_ASSET / INTENTGATE_QUOTE_ASSET: Pair conditions are evaluated on
            INTENTGATE_CRYPTOCOM_MCP_URL / INTENTGATE_COINGECKO_URL: Price source endpoints
            INTENTGATE_VERIFY_PROVIDER: "mock", "http" or "none"
            INTENTGATE_VERIFY_API_URL / INTENTGATE_VERIFY_API_KEY: Verification API
            INTENTGATE_VERIFICATION_CACHE_TTL: Verification cache TTL in seconds
            INTENTGATE_VERIFIED_ADDRESSES: Comma-separated allow-list for the mock verifier
            INTENTGATE_PROOF_PROVIDER: "mock" or "remote"
            INTENTGATE_PROVER_URL: Remote prover root URL

        Args:
            environ: Mapping to read instead of ``os.environ``

        Raises:
            ConfigurationError: If a variable holds an invalid value
        """
        env = os.environ if environ is None else environ
        kwargs: dict[str, Any] = {}

        for field_name, field_type in (
            ("use_real_price_api", bool),
            ("privacy_mode", bool),
            ("strict_verification", bool),
            ("verification_fail_open", bool),
            ("chain_id", int),
            ("price_cache_ttl", float),
            ("request_timeout", float),
            ("mock_price", float),
            ("verification_cache_ttl", float),
            ("base_asset", str),
            ("quote_asset", str),
            ("cryptocom_mcp_url", str),
            ("coingecko_url", str),
            ("verify_provider", str),
            ("verify_api_url", str),
            ("verify_api_key", str),
            ("proof_provider", str),
            ("prover_url", str),
        ):
            var = ENV_PREFIX + field_name.upper()
            raw = env.get(var)
            if raw is None or raw == "":
                continue
            kwargs[field_name] = _coerce(var, raw, field_type)

        addresses = env.get(ENV_PREFIX + "VERIFIED_ADDRESSES", "")
        if addresses.strip():
            kwargs["verified_addresses"] = tuple(
                a.strip() for a in addresses.split(",") if a.strip()
            )

        for name in ("verify_provider", "proof_provider"):
            if name in kwargs:
                kwargs[name] = kwargs[name].lower()
        for name in ("base_asset", "quote_asset"):
            if name in kwargs:
                kwargs[name] = kwargs[name].upper()

        return cls(**kwargs)


def _coerce(var: str, raw: str, field_type: type) -> Any:
    value = raw.strip()
    if field_type is bool:
        if value.lower() in _TRUE:
            return True
        if value.lower() in _FALSE:
            return False
        raise ConfigurationError(f"{var} must be a boolean, got {raw!r}")
    if field_type in (int, float):
        try:
            return field_type(value)
        except ValueError:
            raise ConfigurationError(f"{var} must be a number, got {raw!r}") from None
    return value
