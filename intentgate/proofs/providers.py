"""
Proof providers.

A provider turns a ProofInput (public + private inputs) into a ZKProof and
can check proofs off-chain. Private inputs never leave ``generate_proof``.
"""

from abc import ABC, abstractmethod
from datetime import datetime, timezone
from typing import Any

from intentgate.exceptions import ProofGenerationError, UpstreamError
from intentgate.logging import get_logger, log_proof_operation
from intentgate.proofs.attestation import AttestationKey
from intentgate.proofs.intent_hash import proof_transcript
from intentgate.transport import AsyncHTTPTransport
from intentgate.types.proofs import ProofInput, ProofVerification, ZKProof

logger = get_logger("proof")

PRICE_CONDITION_CIRCUIT = "price-condition"


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class ProofProvider(ABC):
    """Abstract base class for proof backends."""

    name: str = "unknown"
    circuits: tuple[str, ...] = ()

    @abstractmethod
    async def generate_proof(self, proof_input: ProofInput) -> ZKProof:
        """
        Generate a proof.

        Raises:
            ProofGenerationError: If the proof cannot be produced
        """

    @abstractmethod
    async def verify_proof(self, proof: ZKProof) -> ProofVerification:
        """Check a proof off-chain."""

    async def health_check(self) -> bool:
        return True

    async def close(self) -> None:
        """Release resources held by the provider."""

    def supports(self, circuit_id: str) -> bool:
        return circuit_id in self.circuits


def _satisfies_price_condition(proof_input: ProofInput) -> bool:
    """Witness check for the price-condition circuit: ``(price < threshold) == condition_met``."""
    try:
        current_price = int(proof_input.public_inputs["current_price"])
        threshold = int(proof_input.private_inputs["threshold"])
        condition_met = proof_input.public_inputs["condition_met"]
    except (KeyError, ValueError):
        return False
    return (current_price < threshold) == (condition_met == "1")


class MockProofProvider(ProofProvider):
    """
    Deterministic, attestation-backed stand-in for a real prover.

    It runs the circuit's constraint check against the witness, then signs
    the public statement with an Ed25519 key. Proof bytes depend only on the
    public inputs, so nothing about the private inputs is encoded in them.
    """

    name = "mock-zk"
    circuits = (PRICE_CONDITION_CIRCUIT,)

    def __init__(self, key: AttestationKey | None = None) -> None:
        self.key = key or AttestationKey.generate()

    async def generate_proof(self, proof_input: ProofInput) -> ZKProof:
        if not self.supports(proof_input.circuit_id):
            raise ProofGenerationError(
                f"Circuit {proof_input.circuit_id} not supported by {self.name}", self.name
            )
        if not _satisfies_price_condition(proof_input):
            raise ProofGenerationError("Witness does not satisfy circuit constraints", self.name)

        signature = self.key.sign(proof_transcript(proof_input.circuit_id, proof_input.public_inputs))
        log_proof_operation("generate_proof", proof_input.circuit_id, provider=self.name)

        return ZKProof(
            circuit_id=proof_input.circuit_id,
            public_inputs=dict(proof_input.public_inputs),
            proof="0x" + signature.hex(),
            provider=self.name,
            generated_at=_utcnow(),
        )

    async def verify_proof(self, proof: ZKProof) -> ProofVerification:
        verified_at = _utcnow()
        try:
            signature = bytes.fromhex(proof.proof.removeprefix("0x"))
        except ValueError:
            return ProofVerification(False, proof.circuit_id, verified_at, "Proof is not hex encoded")

        is_valid = self.key.verify(signature, proof_transcript(proof.circuit_id, proof.public_inputs))
        return ProofVerification(
            is_valid=is_valid,
            circuit_id=proof.circuit_id,
            verified_at=verified_at,
            error=None if is_valid else "Attestation signature mismatch",
        )


class RemoteProofProvider(ProofProvider):
    """Client for an external prover service exposing ``/prove`` and ``/verify``."""

    name = "remote-zk"
    circuits = (PRICE_CONDITION_CIRCUIT,)

    def __init__(self, transport: AsyncHTTPTransport) -> None:
        """
        Initialize the provider.

        Args:
            transport: Async HTTP transport pointed at the prover root
        """
        self.transport = transport

    async def generate_proof(self, proof_input: ProofInput) -> ZKProof:
        log_proof_operation("generate_proof", proof_input.circuit_id, provider=self.name)
        try:
            data: Any = await self.transport.request(
                "POST",
                "/prove",
                json={
                    "circuitId": proof_input.circuit_id,
                    "publicInputs": proof_input.public_inputs,
                    "privateInputs": proof_input.private_inputs,
                },
                log_body=False,
            )
        except UpstreamError as e:
            raise ProofGenerationError(f"Prover request failed: {e.message}", self.name) from e

        proof = data.get("proof") if isinstance(data, dict) else None
        if not isinstance(proof, str) or not proof:
            raise ProofGenerationError("Prover response has no proof", self.name)

        return ZKProof(
            circuit_id=data.get("circuitId", proof_input.circuit_id),
            public_inputs=dict(proof_input.public_inputs),
            proof=proof,
            provider=self.name,
            generated_at=_utcnow(),
        )

    async def verify_proof(self, proof: ZKProof) -> ProofVerification:
        verified_at = _utcnow()
        try:
            data: Any = await self.transport.request(
                "POST",
                "/verify",
                json={
                    "circuitId": proof.circuit_id,
                    "publicInputs": proof.public_inputs,
                    "proof": proof.proof,
                },
            )
        except UpstreamError as e:
            return ProofVerification(False, proof.circuit_id, verified_at, e.message)

        is_valid = isinstance(data, dict) and data.get("isValid") is True
        error = None if is_valid else (data.get("error") if isinstance(data, dict) else None)
        return ProofVerification(is_valid, proof.circuit_id, verified_at, error or None)

    async def health_check(self) -> bool:
        try:
            await self.transport.request("GET", "/health")
        except UpstreamError:
            return False
        return True

    async def close(self) -> None:
        await self.transport.close()
