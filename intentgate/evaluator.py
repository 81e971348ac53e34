"""
Condition evaluator.

Interprets an intent's condition against a resolved price and produces a
ConditionEvaluation. Expected failures (bad thresholds, unknown types, no
price) come back as SKIP outcomes; ``evaluate`` never raises.
"""

import math

from intentgate.exceptions import IntentGateError, PriceUnavailableError
from intentgate.logging import get_logger
from intentgate.price_oracle import PriceOracle
from intentgate.types.decisions import ConditionEvaluation, Decision, OutcomeKind
from intentgate.types.intents import ConditionType, PaymentIntent

logger = get_logger("evaluator")

MANUAL_REASON = "manual condition - always execute"
INVALID_THRESHOLD_REASON = "Invalid price threshold"
PRICE_UNAVAILABLE_REASON = "Price unavailable - evaluation skipped"
PRIVATE_MET_REASON = "Price condition met (threshold private)"
PRIVATE_NOT_MET_REASON = "Price condition not met (threshold private)"


def parse_threshold(value: str) -> float | None:
    """Parse a threshold string; returns None unless it is a finite positive number."""
    try:
        threshold = float(str(value).strip())
    except (TypeError, ValueError):
        return None
    if not math.isfinite(threshold) or threshold <= 0:
        return None
    return threshold


def error_reason(error: BaseException) -> str:
    """User-facing reason for an unexpected error. Carries no error message text."""
    code = error.code if isinstance(error, IntentGateError) else type(error).__name__
    return f"Evaluation error: {code}"


class ConditionEvaluator:
    """
    Evaluates intent conditions.

    - ``manual``: always EXECUTE
    - ``price-below``: EXECUTE iff current price < threshold (strict)
    - anything else: SKIP
    """

    def __init__(
        self,
        oracle: PriceOracle,
        base: str = "CRO",
        quote: str = "USD",
        privacy_mode: bool = False,
    ) -> None:
        """
        Initialize the evaluator.

        Args:
            oracle: Price oracle consulted for price conditions
            base: Base asset of the pair conditions are evaluated against
            quote: Quote asset of the pair
            privacy_mode: When set, price reasons carry no numbers at all
        """
        self.oracle = oracle
        self.base = base
        self.quote = quote
        self.privacy_mode = privacy_mode

    async def evaluate(self, intent: PaymentIntent) -> ConditionEvaluation:
        condition_type = intent.condition.type
        # The condition value is never logged
        logger.info(
            "Evaluating intent %s (condition=%s, privacy=%s)",
            intent.intent_id, condition_type, self.privacy_mode,
        )

        try:
            if condition_type == ConditionType.MANUAL.value:
                return ConditionEvaluation(
                    Decision.EXECUTE, MANUAL_REASON, condition_type, OutcomeKind.CONDITION_MET
                )
            if condition_type == ConditionType.PRICE_BELOW.value:
                return await self._evaluate_price_below(intent)
        except PriceUnavailableError as e:
            logger.error("Price unavailable for intent %s: %s", intent.intent_id, e.message)
            return ConditionEvaluation(
                Decision.SKIP, PRICE_UNAVAILABLE_REASON, condition_type, OutcomeKind.PRICE_UNAVAILABLE
            )
        except Exception as e:
            logger.exception("Evaluation error for intent %s", intent.intent_id)
            return ConditionEvaluation(
                Decision.SKIP, error_reason(e), condition_type, OutcomeKind.INTERNAL_ERROR
            )

        logger.warning("Intent %s has unknown condition type %r", intent.intent_id, condition_type)
        return ConditionEvaluation(
            Decision.SKIP,
            f"Unknown condition type: {condition_type}",
            condition_type,
            OutcomeKind.UNKNOWN_CONDITION_TYPE,
        )

    async def _evaluate_price_below(self, intent: PaymentIntent) -> ConditionEvaluation:
        condition_type = ConditionType.PRICE_BELOW.value

        threshold = parse_threshold(intent.condition.value)
        if threshold is None:
            logger.warning("Invalid price threshold provided for intent %s", intent.intent_id)
            return ConditionEvaluation(
                Decision.SKIP, INVALID_THRESHOLD_REASON, condition_type, OutcomeKind.INVALID_CONDITION
            )

        quote = await self.oracle.fetch_price(self.base, self.quote)
        condition_met = quote.price < threshold

        logger.info(
            "Price evaluation complete for intent %s: price=%s source=%s met=%s (threshold hidden)",
            intent.intent_id, quote.price, quote.source, condition_met,
        )

        return ConditionEvaluation(
            decision=Decision.EXECUTE if condition_met else Decision.SKIP,
            reason=self._price_reason(quote.price, condition_met),
            condition_type=condition_type,
            kind=OutcomeKind.CONDITION_MET if condition_met else OutcomeKind.CONDITION_NOT_MET,
            current_price=quote.price,
            price_source=quote.source,
            threshold=threshold,
        )

    def _price_reason(self, price: float, condition_met: bool) -> str:
        if self.privacy_mode:
            return PRIVATE_MET_REASON if condition_met else PRIVATE_NOT_MET_REASON
        if condition_met:
            return f"Price {price} meets condition"
        return f"Price {price} does not meet condition"
