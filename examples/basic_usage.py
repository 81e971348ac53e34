#!/usr/bin/env python3
"""
Basic intentgate usage example.

Evaluates a few payment intents against the mock price (0.08 CRO/USD), first
in the open mode and then in privacy mode with proofs and strict recipient
verification. No network access is needed.

Run with: python examples/basic_usage.py
"""

import asyncio
import json
import logging

from intentgate import AgentConfig, ConfigurationError, IntentAgent, configure_logging
from intentgate.proofs import MockProofProvider

RECIPIENT = "0x1111111111111111111111111111111111111111"

INTENTS = [
    {
        "intentId": "intent-001",
        "amount": "100",
        "currency": "USDC",
        "recipient": RECIPIENT,
        "condition": {"type": "price-below", "value": "0.10"},
    },
    {
        "intentId": "intent-002",
        "amount": "50",
        "currency": "USDC",
        "recipient": RECIPIENT,
        "condition": {"type": "price-below", "value": "0.05"},
    },
    {
        "intentId": "intent-003",
        "amount": "10",
        "currency": "USDC",
        "recipient": "0x2222222222222222222222222222222222222222",
        "condition": {"type": "manual"},
    },
]


async def main() -> None:
    configure_logging(level=logging.WARNING)

    print("=== intentgate Basic Usage Example ===\n")

    # 1. Configuration errors are raised up front
    print("1. Validating configuration...")
    try:
        AgentConfig(proof_provider="remote")
    except ConfigurationError as e:
        print(f"   Caught ConfigurationError: {e}")
        print(f"   Code: {e.code}")

    # 2. Open mode: reasons carry the price
    print("\n2. Open mode...")
    async with IntentAgent(AgentConfig(verified_addresses=(RECIPIENT,))) as agent:
        for decision in await agent.evaluate_many(INTENTS):
            print(f"   {json.dumps(decision.to_dict())}")

    # 3. Privacy mode: generic reasons, proofs, unverified recipients skipped
    print("\n3. Privacy mode with strict verification...")
    config = AgentConfig(
        privacy_mode=True,
        strict_verification=True,
        verified_addresses=(RECIPIENT,),
    )
    async with IntentAgent(config) as agent:
        decisions = await agent.evaluate_many(INTENTS)
        for decision in decisions:
            print(f"   {decision.decision.value}: {decision.reason}")

        proof = decisions[0].proof
        provider = agent.capabilities.proof_provider
        if proof is not None and isinstance(provider, MockProofProvider):
            verification = await provider.verify_proof(proof)
            print(f"\n   Proof public inputs: {proof.public_inputs}")
            print(f"   Proof verifies off-chain: {verification.is_valid}")

    print("\n=== Done ===")


if __name__ == "__main__":
    asyncio.run(main())
