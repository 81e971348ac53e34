"""Decision data models."""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any

from intentgate.types.proofs import ZKProof


class Decision(str, Enum):
    """Outcome of evaluating an intent."""

    EXECUTE = "EXECUTE"
    SKIP = "SKIP"


class OutcomeKind(str, Enum):
    """Why an evaluation ended the way it did."""

    CONDITION_MET = "condition_met"
    CONDITION_NOT_MET = "condition_not_met"
    INVALID_CONDITION = "invalid_condition"
    UNKNOWN_CONDITION_TYPE = "unknown_condition_type"
    PRICE_UNAVAILABLE = "price_unavailable"
    INTERNAL_ERROR = "internal_error"


@dataclass(frozen=True)
class VerificationStatus:
    """Recipient verification outcome.

    ``checked`` says whether a provider was consulted, ``verified`` is the
    outcome (or the configured policy when no provider exists).
    """

    checked: bool
    verified: bool

    def to_dict(self) -> dict[str, bool]:
        return {"checked": self.checked, "verified": self.verified}


@dataclass(frozen=True)
class ConditionEvaluation:
    """Typed outcome of the condition evaluator.

    ``threshold`` is the parsed private threshold, kept only so the
    orchestrator can hand it to the proof gateway. It never reaches
    ``AgentDecision``.
    """

    decision: Decision
    reason: str
    condition_type: str
    kind: OutcomeKind
    current_price: float | None = None
    price_source: str | None = None
    threshold: float | None = field(default=None, repr=False, compare=False)

    @property
    def executes(self) -> bool:
        return self.decision is Decision.EXECUTE


@dataclass(frozen=True)
class ProofOutcome:
    """Typed outcome of the proof gateway: a proof, or the reason there is none."""

    proof: ZKProof | None = None
    error: str | None = None

    @property
    def ok(self) -> bool:
        return self.proof is not None


@dataclass(frozen=True)
class AgentDecision:
    """The terminal, caller-owned decision for one intent."""

    decision: Decision
    reason: str
    proof: ZKProof | None = None
    verification_status: VerificationStatus | None = None

    def to_dict(self) -> dict[str, Any]:
        """Convert to the camelCase wire shape."""
        result: dict[str, Any] = {
            "decision": self.decision.value,
            "reason": self.reason,
        }
        if self.proof is not None:
            result["zkProof"] = self.proof.to_dict()
        if self.verification_status is not None:
            result["verificationStatus"] = self.verification_status.to_dict()
        return result
