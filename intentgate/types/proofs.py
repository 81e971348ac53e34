"""Zero-knowledge proof data models."""

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any


@dataclass(frozen=True)
class ProofInput:
    """Inputs handed to a proof provider.

    ``private_inputs`` is consumed by proof generation only and is excluded
    from ``repr`` so it cannot leak through logging or tracebacks.
    """

    circuit_id: str
    public_inputs: dict[str, str]
    private_inputs: dict[str, str] = field(repr=False)


@dataclass(frozen=True)
class ZKProof:
    """A proof artifact. It carries public inputs only."""

    circuit_id: str
    public_inputs: dict[str, str]
    proof: str  # hex-encoded opaque proof bytes
    provider: str
    generated_at: datetime

    def to_dict(self) -> dict[str, Any]:
        return {
            "circuitId": self.circuit_id,
            "publicInputs": dict(self.public_inputs),
            "proof": self.proof,
            "provider": self.provider,
            "generatedAt": self.generated_at.isoformat(),
        }


@dataclass(frozen=True)
class ProofVerification:
    """Result of an off-chain proof check."""

    is_valid: bool
    circuit_id: str
    verified_at: datetime
    error: str | None = None
