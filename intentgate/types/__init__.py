"""intentgate type definitions.

This module exports all data model types used by the package.
"""

from intentgate.types.decisions import (
    AgentDecision,
    ConditionEvaluation,
    Decision,
    OutcomeKind,
    ProofOutcome,
    VerificationStatus,
)
from intentgate.types.intents import (
    ConditionType,
    IntentStatus,
    PaymentCondition,
    PaymentIntent,
)
from intentgate.types.prices import CacheStats, PriceQuote
from intentgate.types.proofs import ProofInput, ProofVerification, ZKProof

__all__ = [
    # Intent types
    "ConditionType",
    "IntentStatus",
    "PaymentCondition",
    "PaymentIntent",
    # Price types
    "PriceQuote",
    "CacheStats",
    # Proof types
    "ProofInput",
    "ProofVerification",
    "ZKProof",
    # Decision types
    "Decision",
    "OutcomeKind",
    "VerificationStatus",
    "ConditionEvaluation",
    "ProofOutcome",
    "AgentDecision",
]
