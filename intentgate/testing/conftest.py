"""
Pytest plugin for intentgate testing fixtures.

This module re-exports all fixtures from fixtures.py so they can be
automatically discovered by pytest when this package is installed.

To use these fixtures in your tests, add this to your conftest.py:

    pytest_plugins = ["intentgate.testing.conftest"]

Or import the fixtures directly:

    from intentgate.testing.fixtures import price_below_intent, private_agent
"""

# Re-export all fixtures for pytest auto-discovery
from intentgate.testing.fixtures import (
    attestation_key,
    evaluator,
    intent_payload,
    manual_intent,
    mock_price_source,
    mock_proof_provider,
    oracle,
    price_below_intent,
    private_agent,
    stub_proof_provider,
    stub_verify_provider,
)

__all__ = [
    "price_below_intent",
    "manual_intent",
    "intent_payload",
    "mock_price_source",
    "stub_verify_provider",
    "attestation_key",
    "mock_proof_provider",
    "stub_proof_provider",
    "oracle",
    "evaluator",
    "private_agent",
]
