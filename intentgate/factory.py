"""
Capability wiring.

Resolves the configured price sources, verification provider and proof
provider once, from a closed set of variants, into a Capabilities value
that is injected into the agent.
"""

from dataclasses import dataclass

import httpx

from intentgate.config import AgentConfig
from intentgate.exceptions import ConfigurationError
from intentgate.logging import get_logger
from intentgate.proofs.attestation import AttestationKey
from intentgate.proofs.providers import MockProofProvider, ProofProvider, RemoteProofProvider
from intentgate.sources import coingecko, cryptocom
from intentgate.sources.base import PriceSource
from intentgate.sources.coingecko import CoinGeckoSource
from intentgate.sources.cryptocom import CryptoComMCPSource
from intentgate.sources.fixed import FixedPriceSource
from intentgate.transport import AsyncHTTPTransport
from intentgate.verification import HTTPVerifyProvider, MockVerifyProvider, VerifyProvider

logger = get_logger()


@dataclass
class Capabilities:
    """The external collaborators available to one agent."""

    sources: list[PriceSource]
    verify_provider: VerifyProvider | None = None
    proof_provider: ProofProvider | None = None


def create_price_sources(
    config: AgentConfig, client: httpx.AsyncClient | None = None
) -> list[PriceSource]:
    """Ranked price sources: live primary + secondary, or the fixed mock price."""
    if not config.use_real_price_api:
        return [FixedPriceSource(config.mock_price)]

    mcp = AsyncHTTPTransport(
        base_url=config.cryptocom_mcp_url,
        source=cryptocom.SOURCE_NAME,
        timeout=config.request_timeout,
        headers={"Content-Type": "application/json"},
        client=client,
    )
    gecko = AsyncHTTPTransport(
        base_url=config.coingecko_url,
        source=coingecko.SOURCE_NAME,
        timeout=config.request_timeout,
        client=client,
    )
    return [CryptoComMCPSource(mcp), CoinGeckoSource(gecko)]


def create_verify_provider(
    config: AgentConfig, client: httpx.AsyncClient | None = None
) -> VerifyProvider | None:
    """
    Create the configured verification provider.

    Returns None for "none"; the gate then applies the fail-open policy.
    """
    if config.verify_provider == "none":
        return None
    if config.verify_provider == "mock":
        return MockVerifyProvider(config.verified_addresses)
    if config.verify_provider == "http":
        transport = AsyncHTTPTransport(
            base_url=config.verify_api_url,
            source=HTTPVerifyProvider.name,
            timeout=config.request_timeout,
            client=client,
        )
        return HTTPVerifyProvider(transport, api_key=config.verify_api_key)
    raise ConfigurationError(f"Unknown verify provider: {config.verify_provider}")


def create_proof_provider(
    config: AgentConfig,
    client: httpx.AsyncClient | None = None,
    key: AttestationKey | None = None,
) -> ProofProvider:
    """Create the configured proof provider."""
    if config.proof_provider == "mock":
        return MockProofProvider(key)
    if config.proof_provider == "remote":
        if not config.prover_url:
            raise ConfigurationError("prover_url is required for the remote proof provider")
        transport = AsyncHTTPTransport(
            base_url=config.prover_url,
            source=RemoteProofProvider.name,
            timeout=config.request_timeout,
            client=client,
        )
        return RemoteProofProvider(transport)
    raise ConfigurationError(f"Unknown proof provider: {config.proof_provider}")


def build_capabilities(
    config: AgentConfig, client: httpx.AsyncClient | None = None
) -> Capabilities:
    """Resolve every capability for ``config``. Proofs are only wired in privacy mode."""
    capabilities = Capabilities(
        sources=create_price_sources(config, client),
        verify_provider=create_verify_provider(config, client),
        proof_provider=create_proof_provider(config, client) if config.privacy_mode else None,
    )

    logger.info(
        "Capabilities resolved: sources=%s verify=%s proof=%s strict=%s",
        [s.name for s in capabilities.sources],
        capabilities.verify_provider.name if capabilities.verify_provider else None,
        capabilities.proof_provider.name if capabilities.proof_provider else None,
        config.strict_verification,
    )
    return capabilities
