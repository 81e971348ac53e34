"""
intentgate decision agent.

Provides the async entry point that turns payment intents into auditable
EXECUTE/SKIP decisions.
"""

import asyncio
from collections.abc import Iterable, Mapping
from typing import Any

import httpx

from intentgate.config import AgentConfig
from intentgate.evaluator import ConditionEvaluator
from intentgate.factory import Capabilities, build_capabilities
from intentgate.logging import get_logger
from intentgate.orchestrator import INVALID_INTENT_REASON, DecisionOrchestrator
from intentgate.price_oracle import PriceOracle
from intentgate.proofs.gateway import ProofGateway
from intentgate.types.decisions import AgentDecision, Decision
from intentgate.types.intents import PaymentIntent
from intentgate.verification import VerificationGate

logger = get_logger()


class IntentAgent:
    """
    Async decision agent for conditional payment intents.

    Wires the price oracle, condition evaluator, verification gate and proof
    gateway from one AgentConfig. All upstream HTTP traffic shares a single
    httpx client.

    Example:
        ```python
        import asyncio
        from intentgate import AgentConfig, IntentAgent

        async def main():
            async with IntentAgent(AgentConfig(privacy_mode=True)) as agent:
                decision = await agent.evaluate({
                    "intentId": "intent-1",
                    "amount": "100",
                    "currency": "USDC",
                    "recipient": "0xabc",
                    "condition": {"type": "price-below", "value": "0.10"},
                })
                print(decision.to_dict())

        asyncio.run(main())
        ```
    """

    def __init__(
        self,
        config: AgentConfig | None = None,
        capabilities: Capabilities | None = None,
        http_client: httpx.AsyncClient | None = None,
    ) -> None:
        """
        Initialize the agent.

        Args:
            config: Agent configuration (default: AgentConfig())
            capabilities: Pre-resolved collaborators (default: built from config)
            http_client: Shared httpx client for upstream calls (optional; one
                is created and owned by the agent if omitted)
        """
        self.config = config or AgentConfig()

        self._owns_client = http_client is None and capabilities is None
        self._client = http_client
        if capabilities is None:
            if self._client is None:
                self._client = httpx.AsyncClient(timeout=self.config.request_timeout)
            capabilities = build_capabilities(self.config, self._client)
        self.capabilities = capabilities

        self._oracle = PriceOracle(
            capabilities.sources,
            ttl=self.config.price_cache_ttl,
            timeout=self.config.request_timeout,
        )
        self._verification_gate = VerificationGate(
            capabilities.verify_provider,
            fail_open=self.config.verification_fail_open,
            cache_ttl=self.config.verification_cache_ttl,
        )
        self._proof_gateway = (
            ProofGateway(capabilities.proof_provider, self.config.chain_id)
            if capabilities.proof_provider is not None
            else None
        )
        self._evaluator = ConditionEvaluator(
            self._oracle,
            base=self.config.base_asset,
            quote=self.config.quote_asset,
            privacy_mode=self.config.privacy_mode,
        )
        self._orchestrator = DecisionOrchestrator(
            self._evaluator,
            self._verification_gate,
            proof_gateway=self._proof_gateway,
            privacy_mode=self.config.privacy_mode,
            strict_verification=self.config.strict_verification,
        )

    @classmethod
    def from_env(cls, http_client: httpx.AsyncClient | None = None) -> "IntentAgent":
        """
        Create an agent from ``INTENTGATE_*`` environment variables.

        Raises:
            ConfigurationError: If a variable holds an invalid value
        """
        return cls(AgentConfig.from_env(), http_client=http_client)

    @property
    def oracle(self) -> PriceOracle:
        return self._oracle

    @property
    def verification_gate(self) -> VerificationGate:
        return self._verification_gate

    @property
    def proof_gateway(self) -> ProofGateway | None:
        return self._proof_gateway

    async def evaluate(self, intent: PaymentIntent | Mapping[str, Any]) -> AgentDecision:
        """
        Decide whether to execute one intent.

        Never raises: component failures and malformed intent mappings
        come back as SKIP decisions.
        """
        if not isinstance(intent, PaymentIntent):
            try:
                intent = PaymentIntent.from_dict(dict(intent))
            except (AttributeError, KeyError, TypeError, ValueError) as e:
                logger.warning("Rejected malformed intent: %s", type(e).__name__)
                return AgentDecision(Decision.SKIP, INVALID_INTENT_REASON)
        return await self._orchestrator.decide(intent)

    async def evaluate_many(
        self, intents: Iterable[PaymentIntent | Mapping[str, Any]]
    ) -> list[AgentDecision]:
        """
        Decide several intents concurrently; results keep the input order.

        Each intent is decided independently, so one malformed or failing
        intent only affects its own decision.
        """
        return list(await asyncio.gather(*(self.evaluate(intent) for intent in intents)))

    async def close(self) -> None:
        """Close every collaborator and the shared HTTP client if the agent created it."""
        await self._oracle.close()
        if self.capabilities.verify_provider is not None:
            await self.capabilities.verify_provider.close()
        if self.capabilities.proof_provider is not None:
            await self.capabilities.proof_provider.close()
        if self._owns_client and self._client is not None:
            await self._client.aclose()
        logger.debug("Agent closed")

    async def __aenter__(self) -> "IntentAgent":
        return self

    async def __aexit__(self, *args: Any) -> None:
        await self.close()
