"""
ZK proof gateway.

Builds the price-condition proof request for an intent whose condition
passed and hands it to the configured provider. The threshold is only ever
a private input; failures degrade to "no proof" and are never raised.
"""

from intentgate.exceptions import IntentGateError
from intentgate.logging import get_logger, mask_sensitive_data
from intentgate.proofs.intent_hash import compute_intent_hash, to_field_price
from intentgate.proofs.providers import PRICE_CONDITION_CIRCUIT, ProofProvider
from intentgate.types.decisions import ProofOutcome
from intentgate.types.intents import PaymentIntent
from intentgate.types.proofs import ProofInput

logger = get_logger("proof")


class ProofGateway:
    """Requests price-condition proofs that keep the threshold private."""

    def __init__(self, provider: ProofProvider, chain_id: int) -> None:
        self.provider = provider
        self.chain_id = chain_id

    def build_input(
        self, intent: PaymentIntent, current_price: float, threshold: float
    ) -> ProofInput:
        """
        Build the proof request.

        Public inputs are the fixed-point current price, the intent hash and
        the comparison flag; the threshold is the only private input.
        """
        return ProofInput(
            circuit_id=PRICE_CONDITION_CIRCUIT,
            public_inputs={
                "current_price": to_field_price(current_price),
                "intent_id_hash": compute_intent_hash(
                    intent.intent_id, intent.amount, intent.recipient, self.chain_id
                ),
                "condition_met": "1" if current_price < threshold else "0",
            },
            private_inputs={"threshold": to_field_price(threshold)},
        )

    async def prove(
        self, intent: PaymentIntent, current_price: float, threshold: float
    ) -> ProofOutcome:
        logger.info(
            "Generating price condition proof for intent %s (threshold hidden)", intent.intent_id
        )
        try:
            proof_input = self.build_input(intent, current_price, threshold)
            proof = await self.provider.generate_proof(proof_input)
        except Exception as e:
            code = e.code if isinstance(e, IntentGateError) else type(e).__name__
            logger.error(
                "Proof generation failed for intent %s via %s, continuing without proof: %s",
                intent.intent_id, self.provider.name, mask_sensitive_data(str(e)),
            )
            return ProofOutcome(error=code)

        logger.info("Proof generated for intent %s (circuit=%s)", intent.intent_id, proof.circuit_id)
        return ProofOutcome(proof=proof)
