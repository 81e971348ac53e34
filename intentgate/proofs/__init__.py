"""Privacy-preserving proof generation for price conditions."""

from intentgate.proofs.attestation import AttestationKey
from intentgate.proofs.gateway import ProofGateway
from intentgate.proofs.intent_hash import (
    BN254_FIELD_MODULUS,
    compute_intent_hash,
    to_field_price,
)
from intentgate.proofs.providers import (
    PRICE_CONDITION_CIRCUIT,
    MockProofProvider,
    ProofProvider,
    RemoteProofProvider,
)

__all__ = [
    "AttestationKey",
    "ProofGateway",
    "ProofProvider",
    "MockProofProvider",
    "RemoteProofProvider",
    "PRICE_CONDITION_CIRCUIT",
    "BN254_FIELD_MODULUS",
    "compute_intent_hash",
    "to_field_price",
]
