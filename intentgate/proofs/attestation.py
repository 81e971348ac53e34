"""
Ed25519 attestation keys.

The mock proof provider signs the public statement of every proof it
produces, so proofs are verifiable off-chain without a real prover.
"""

from cryptography.exceptions import InvalidSignature
from cryptography.hazmat.primitives import serialization
from cryptography.hazmat.primitives.asymmetric import ed25519


class AttestationKey:
    """Ed25519 key pair used to attest proof statements."""

    def __init__(self, private_key: ed25519.Ed25519PrivateKey) -> None:
        self._private_key = private_key
        self._public_key = private_key.public_key()

    @classmethod
    def generate(cls) -> "AttestationKey":
        return cls(ed25519.Ed25519PrivateKey.generate())

    @classmethod
    def from_bytes(cls, key_bytes: bytes) -> "AttestationKey":
        """
        Load from a raw 32-byte Ed25519 seed.

        Raises:
            ValueError: If the seed is not 32 bytes
        """
        if len(key_bytes) != 32:
            raise ValueError(f"Ed25519 private key must be 32 bytes, got {len(key_bytes)}")
        return cls(ed25519.Ed25519PrivateKey.from_private_bytes(key_bytes))

    @classmethod
    def from_pem(cls, pem: str | bytes) -> "AttestationKey":
        data = pem.encode() if isinstance(pem, str) else pem
        private_key = serialization.load_pem_private_key(data, password=None)
        if not isinstance(private_key, ed25519.Ed25519PrivateKey):
            raise TypeError(f"Expected Ed25519 private key, got {type(private_key).__name__}")
        return cls(private_key)

    def sign(self, message: bytes) -> bytes:
        """Sign ``message``; returns the 64-byte signature."""
        return self._private_key.sign(message)

    def verify(self, signature: bytes, message: bytes) -> bool:
        try:
            self._public_key.verify(signature, message)
        except InvalidSignature:
            return False
        return True

    def public_key_hex(self) -> str:
        raw = self._public_key.public_bytes(
            encoding=serialization.Encoding.Raw,
            format=serialization.PublicFormat.Raw,
        )
        return raw.hex()

    def private_key_pem(self) -> str:
        """Return the private key in PEM format (for storage)."""
        return self._private_key.private_bytes(
            encoding=serialization.Encoding.PEM,
            format=serialization.PrivateFormat.PKCS8,
            encryption_algorithm=serialization.NoEncryption(),
        ).decode()
