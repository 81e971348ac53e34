"""
Decision orchestrator.

Composes recipient verification, condition evaluation and (optionally)
proof generation into one AgentDecision per intent:

    START -> VERIFY -> EVALUATE -> PROVE (optional) -> DONE

This is the only place that catches otherwise-unexpected failures from the
components; ``decide`` never lets an exception reach its caller.
"""

from enum import Enum

from intentgate.evaluator import ConditionEvaluator, error_reason
from intentgate.logging import get_logger
from intentgate.proofs.gateway import ProofGateway
from intentgate.types.decisions import (
    AgentDecision,
    ConditionEvaluation,
    Decision,
    VerificationStatus,
)
from intentgate.types.intents import ConditionType, PaymentIntent
from intentgate.verification import VerificationGate

logger = get_logger("orchestrator")

UNVERIFIED_REASON = "Recipient not verified"
PROVEN_MET_REASON = "Price condition met (verified with ZK proof - threshold private)"
INVALID_INTENT_REASON = "Invalid intent"


class Stage(str, Enum):
    START = "start"
    VERIFY = "verify"
    EVALUATE = "evaluate"
    PROVE = "prove"
    DONE = "done"


class DecisionOrchestrator:
    """Produces one auditable decision per intent."""

    def __init__(
        self,
        evaluator: ConditionEvaluator,
        verification_gate: VerificationGate,
        proof_gateway: ProofGateway | None = None,
        privacy_mode: bool = False,
        strict_verification: bool = False,
    ) -> None:
        """
        Initialize the orchestrator.

        Args:
            evaluator: Condition evaluator
            verification_gate: Recipient verification gate
            proof_gateway: Proof gateway (None disables proofs)
            privacy_mode: Generate threshold-hiding proofs for passed price conditions
            strict_verification: SKIP unverified recipients before any price or proof call
        """
        self.evaluator = evaluator
        self.verification_gate = verification_gate
        self.proof_gateway = proof_gateway
        self.privacy_mode = privacy_mode
        self.strict_verification = strict_verification

        if privacy_mode and proof_gateway is None:
            logger.warning("Privacy mode enabled without a proof gateway; decisions carry no proofs")

    async def decide(self, intent: PaymentIntent) -> AgentDecision:
        stage = Stage.START
        verification: VerificationStatus | None = None
        try:
            stage = Stage.VERIFY
            verification = await self.verification_gate.check(intent.recipient)
            if self.strict_verification and not verification.verified:
                logger.info("Intent %s skipped: recipient not verified", intent.intent_id)
                return AgentDecision(Decision.SKIP, UNVERIFIED_REASON, verification_status=verification)

            stage = Stage.EVALUATE
            evaluation = await self.evaluator.evaluate(intent)

            if not self._should_prove(evaluation):
                return self._finish(intent, AgentDecision(
                    evaluation.decision, evaluation.reason, verification_status=verification
                ))

            stage = Stage.PROVE
            assert self.proof_gateway is not None
            assert evaluation.current_price is not None and evaluation.threshold is not None
            outcome = await self.proof_gateway.prove(
                intent, evaluation.current_price, evaluation.threshold
            )
            if outcome.proof is None:
                return self._finish(intent, AgentDecision(
                    evaluation.decision, evaluation.reason, verification_status=verification
                ))
            return self._finish(intent, AgentDecision(
                evaluation.decision,
                PROVEN_MET_REASON,
                proof=outcome.proof,
                verification_status=verification,
            ))
        except Exception as e:
            logger.exception("Unexpected failure deciding intent %s at stage %s", intent.intent_id, stage.value)
            return AgentDecision(Decision.SKIP, error_reason(e), verification_status=verification)

    def _should_prove(self, evaluation: ConditionEvaluation) -> bool:
        return (
            self.privacy_mode
            and self.proof_gateway is not None
            and evaluation.executes
            and evaluation.condition_type == ConditionType.PRICE_BELOW.value
        )

    def _finish(self, intent: PaymentIntent, decision: AgentDecision) -> AgentDecision:
        logger.info(
            "Decision for intent %s: %s (proof=%s)",
            intent.intent_id, decision.decision.value, decision.proof is not None,
        )
        return decision
