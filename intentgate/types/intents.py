"""Payment intent data models."""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any


class ConditionType(str, Enum):
    """Condition types understood by the evaluator."""

    MANUAL = "manual"
    PRICE_BELOW = "price-below"


class IntentStatus(str, Enum):
    """Lifecycle status of an intent (owned by the intent store)."""

    PENDING = "pending"
    FUNDED = "funded"
    EXECUTED = "executed"
    FAILED = "failed"


@dataclass(frozen=True)
class PaymentCondition:
    """Predicate gating execution of an intent.

    ``type`` is kept as the raw string so unrecognized types survive parsing
    and can be reported by the evaluator. ``value`` is the string-encoded
    threshold for price conditions and is private in privacy mode.
    """

    type: str
    value: str = field(default="", repr=False)


@dataclass(frozen=True)
class PaymentIntent:
    """A conditional payment request."""

    intent_id: str
    amount: str
    currency: str
    recipient: str
    condition: PaymentCondition
    status: IntentStatus = IntentStatus.PENDING

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "PaymentIntent":
        """Build an intent from the camelCase wire shape."""
        condition = data.get("condition") or {}
        status = data.get("status", IntentStatus.PENDING.value)
        return cls(
            intent_id=data["intentId"],
            amount=str(data["amount"]),
            currency=data.get("currency", ""),
            recipient=data["recipient"],
            condition=PaymentCondition(
                type=condition.get("type", ""),
                value=str(condition.get("value", "")),
            ),
            status=IntentStatus(status),
        )
