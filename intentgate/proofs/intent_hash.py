"""
Public-input encoding for price-condition proofs.

Implements the intent hash (domain-separated, reduced into the BN254 scalar
field) and the fixed-point encoding of prices used as circuit inputs.
"""

import hashlib
import json
from decimal import ROUND_FLOOR, Decimal, InvalidOperation
from typing import Any

# Scalar field of the BN254 curve used by the price-condition circuit
BN254_FIELD_MODULUS = int(
    "21888242871839275222246405745257275088548364400416034343698204186575808495617"
)

INTENT_HASH_DOMAIN = "intentgate/intent-hash/v1"

PRICE_DECIMALS = 8


def canonical_json(value: Any) -> str:
    """Deterministic JSON: sorted keys, no whitespace."""
    return json.dumps(value, sort_keys=True, separators=(",", ":"), ensure_ascii=False)


def compute_intent_hash(
    intent_id: str, amount: str, recipient: str, chain_id: int
) -> str:
    """
    Compute the domain-separated intent hash used as a public proof input.

    The hash is SHA256 over the canonical JSON of the domain tag and the
    intent fields, reduced modulo the BN254 field so it fits one circuit
    field element. The recipient is lower-cased so checksum casing does not
    change the hash.

    Args:
        intent_id: The intent's identifier
        amount: The payment amount as given on the intent
        recipient: The recipient chain address
        chain_id: The chain the settlement targets

    Returns:
        "0x" followed by 64 hex digits
    """
    document = {
        "domain": INTENT_HASH_DOMAIN,
        "intentId": intent_id,
        "amount": str(amount),
        "recipient": recipient.lower(),
        "chainId": int(chain_id),
    }
    digest = hashlib.sha256(canonical_json(document).encode("utf-8")).digest()
    field_element = int.from_bytes(digest, "big") % BN254_FIELD_MODULUS
    return f"0x{field_element:064x}"


def to_field_price(value: float | str) -> str:
    """
    Encode a price as a fixed-point integer string with 8 decimals.

    Rounds toward negative infinity. ``str()`` of a float is used so that
    0.08 encodes as 8000000 rather than picking up binary noise.

    Raises:
        ValueError: If the value is not a finite number
    """
    try:
        scaled = Decimal(str(value)).scaleb(PRICE_DECIMALS)
        return str(int(scaled.to_integral_value(rounding=ROUND_FLOOR)))
    except (InvalidOperation, ValueError, OverflowError) as e:
        raise ValueError(f"cannot encode {type(value).__name__} as a field price") from e


def proof_transcript(circuit_id: str, public_inputs: dict[str, str]) -> bytes:
    """SHA256 of the public statement a proof attests to."""
    statement = {"circuitId": circuit_id, "publicInputs": public_inputs}
    return hashlib.sha256(canonical_json(statement).encode("utf-8")).digest()
