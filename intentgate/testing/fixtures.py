"""
Pytest fixtures for intentgate testing.

Provides intents, collaborators and wired components for tests of
applications that use intentgate.
"""

from collections.abc import AsyncGenerator
from datetime import datetime, timezone
from typing import Any

import pytest

from intentgate.agent import IntentAgent
from intentgate.config import AgentConfig
from intentgate.evaluator import ConditionEvaluator
from intentgate.factory import Capabilities
from intentgate.price_oracle import PriceOracle
from intentgate.proofs.attestation import AttestationKey
from intentgate.proofs.providers import MockProofProvider
from intentgate.testing.mock import MockPriceSource, StubProofProvider, StubVerifyProvider
from intentgate.types.intents import ConditionType, PaymentCondition, PaymentIntent
from intentgate.types.prices import PriceQuote

VERIFIED_RECIPIENT = "0x1111111111111111111111111111111111111111"
UNVERIFIED_RECIPIENT = "0x2222222222222222222222222222222222222222"


def create_intent(
    intent_id: str = "intent-1",
    condition_type: str = ConditionType.PRICE_BELOW.value,
    value: str = "0.10",
    recipient: str = VERIFIED_RECIPIENT,
    amount: str = "100",
    currency: str = "USDC",
    **kwargs: Any,
) -> PaymentIntent:
    """
    Create a PaymentIntent with customizable fields.

    Args:
        intent_id: Intent ID
        condition_type: Raw condition type string
        value: Condition value (threshold for price conditions)
        recipient: Recipient address
        amount: Payment amount
        currency: Payment currency
        **kwargs: Additional fields to override
    """
    return PaymentIntent(
        intent_id=intent_id,
        amount=amount,
        currency=currency,
        recipient=recipient,
        condition=PaymentCondition(type=condition_type, value=value),
        **kwargs,
    )


def create_quote(
    price: float = 0.08,
    source: str = "mock",
    pair: str = "CRO/USD",
    ttl: float = 60.0,
    now: datetime | None = None,
) -> PriceQuote:
    """Create a PriceQuote fetched at ``now`` (default: current UTC time)."""
    return PriceQuote.create(pair, price, source, ttl, now or datetime.now(timezone.utc))


# ============================================================================
# Intent Fixtures
# ============================================================================


@pytest.fixture
def price_below_intent() -> PaymentIntent:
    """A price-below intent with threshold 0.10 to a verified recipient."""
    return create_intent()


@pytest.fixture
def manual_intent() -> PaymentIntent:
    """A manual intent, which always executes."""
    return create_intent(intent_id="intent-manual", condition_type=ConditionType.MANUAL.value, value="")


@pytest.fixture
def intent_payload() -> dict[str, Any]:
    """A price-below intent in the camelCase wire shape."""
    return {
        "intentId": "intent-wire",
        "amount": "250",
        "currency": "USDC",
        "recipient": VERIFIED_RECIPIENT,
        "condition": {"type": "price-below", "value": "0.10"},
        "status": "funded",
    }


# ============================================================================
# Collaborator Fixtures
# ============================================================================


@pytest.fixture
def mock_price_source() -> MockPriceSource:
    """A price source answering 0.08."""
    return MockPriceSource(price=0.08)


@pytest.fixture
def stub_verify_provider() -> StubVerifyProvider:
    """A verification provider that knows only VERIFIED_RECIPIENT."""
    return StubVerifyProvider({VERIFIED_RECIPIENT: True})


@pytest.fixture
def attestation_key() -> AttestationKey:
    """A freshly generated Ed25519 attestation key."""
    return AttestationKey.generate()


@pytest.fixture
def mock_proof_provider(attestation_key: AttestationKey) -> MockProofProvider:
    return MockProofProvider(attestation_key)


@pytest.fixture
def stub_proof_provider(attestation_key: AttestationKey) -> StubProofProvider:
    """A recording proof provider backed by MockProofProvider."""
    return StubProofProvider(attestation_key)


# ============================================================================
# Component Fixtures
# ============================================================================


@pytest.fixture
def oracle(mock_price_source: MockPriceSource) -> PriceOracle:
    return PriceOracle([mock_price_source])


@pytest.fixture
def evaluator(oracle: PriceOracle) -> ConditionEvaluator:
    return ConditionEvaluator(oracle)


@pytest.fixture
async def private_agent(
    mock_price_source: MockPriceSource,
    stub_verify_provider: StubVerifyProvider,
    stub_proof_provider: StubProofProvider,
) -> AsyncGenerator[IntentAgent, None]:
    """
    An agent in privacy mode with strict verification, wired to stubs.

    Example:
        ```python
        async def test_my_feature(private_agent, price_below_intent):
            decision = await private_agent.evaluate(price_below_intent)
            assert decision.proof is not None
        ```
    """
    agent = IntentAgent(
        AgentConfig(privacy_mode=True, strict_verification=True),
        capabilities=Capabilities(
            sources=[mock_price_source],
            verify_provider=stub_verify_provider,
            proof_provider=stub_proof_provider,
        ),
    )
    yield agent
    await agent.close()
