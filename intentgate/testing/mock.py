"""
Mock collaborators for testing.

Provides price sources, verification providers and proof providers that
mimic the real interfaces without network access, with configurable
answers, failures and latency, and call tracking.
"""

import asyncio
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any

from intentgate.exceptions import ProofGenerationError
from intentgate.proofs.attestation import AttestationKey
from intentgate.proofs.providers import MockProofProvider, ProofProvider
from intentgate.sources.base import PriceSource
from intentgate.types.proofs import ProofInput, ProofVerification, ZKProof
from intentgate.verification import VerifyProvider


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


@dataclass
class MockCall:
    """Record of a method call."""

    method: str
    args: tuple[Any, ...]
    kwargs: dict[str, Any]
    timestamp: datetime = field(default_factory=_utcnow)


class _CallRecorder:
    def __init__(self) -> None:
        self._calls: list[MockCall] = []

    def _record_call(self, method: str, *args: Any, **kwargs: Any) -> None:
        self._calls.append(MockCall(method=method, args=args, kwargs=kwargs))

    def was_called(self, method: str) -> bool:
        """True if ``method`` was called at least once."""
        return any(call.method == method for call in self._calls)

    def call_count(self, method: str | None = None) -> int:
        """Number of recorded calls, optionally filtered by method name."""
        return len(self.get_calls(method))

    def get_calls(self, method: str | None = None) -> list[MockCall]:
        if method is None:
            return list(self._calls)
        return [call for call in self._calls if call.method == method]

    def reset(self) -> None:
        self._calls.clear()


class MockPriceSource(_CallRecorder, PriceSource):
    """
    Price source with a configurable answer.

    Example:
        ```python
        primary = MockPriceSource("primary", error=UpstreamAPIError("boom", "primary"))
        secondary = MockPriceSource("secondary", price=0.09)
        oracle = PriceOracle([primary, secondary])

        quote = await oracle.fetch_price("CRO", "USD")
        assert quote.source == "secondary"
        assert primary.call_count("fetch") == 1
        ```
    """

    def __init__(
        self,
        name: str = "mock-source",
        price: Any = 0.08,
        error: Exception | None = None,
        delay: float = 0.0,
    ) -> None:
        """
        Initialize the source.

        Args:
            name: Source name recorded on quotes
            price: Value returned by ``fetch`` (not validated, so tests can
                return junk)
            error: Exception raised by ``fetch`` instead of answering
            delay: Seconds to sleep before answering
        """
        super().__init__()
        self.name = name
        self.price = price
        self.error = error
        self.delay = delay
        self.closed = False

    def configure(
        self,
        price: Any = None,
        error: Exception | None = None,
        delay: float | None = None,
    ) -> None:
        """Change the answer. ``error`` is always replaced, so passing none clears it."""
        if price is not None:
            self.price = price
        self.error = error
        if delay is not None:
            self.delay = delay

    async def fetch(self, base: str, quote: str) -> float:
        self._record_call("fetch", base, quote)
        if self.delay:
            await asyncio.sleep(self.delay)
        if self.error is not None:
            raise self.error
        return self.price

    async def close(self) -> None:
        self.closed = True


class StubVerifyProvider(_CallRecorder, VerifyProvider):
    """Verification provider answering from a fixed table, or failing."""

    name = "stub-verify"

    def __init__(
        self,
        answers: dict[str, Any] | None = None,
        default: Any = False,
        error: Exception | None = None,
    ) -> None:
        super().__init__()
        self.answers = {address.lower(): value for address, value in (answers or {}).items()}
        self.default = default
        self.error = error
        self.closed = False

    async def is_verified(self, address: str) -> bool:
        self._record_call("is_verified", address)
        if self.error is not None:
            raise self.error
        return self.answers.get(address.lower(), self.default)

    async def close(self) -> None:
        self.closed = True


class StubProofProvider(_CallRecorder, ProofProvider):
    """
    Proof provider that delegates to MockProofProvider unless told to fail.

    Records every ProofInput it receives so tests can inspect what was sent.
    """

    name = "stub-zk"

    def __init__(self, key: AttestationKey | None = None, error: Exception | None = None) -> None:
        super().__init__()
        self._delegate = MockProofProvider(key)
        self.circuits = self._delegate.circuits
        self.error = error
        self.inputs: list[ProofInput] = []
        self.closed = False

    async def generate_proof(self, proof_input: ProofInput) -> ZKProof:
        self._record_call("generate_proof", proof_input.circuit_id)
        self.inputs.append(proof_input)
        if self.error is not None:
            raise self.error
        return await self._delegate.generate_proof(proof_input)

    async def verify_proof(self, proof: ZKProof) -> ProofVerification:
        self._record_call("verify_proof", proof.circuit_id)
        return await self._delegate.verify_proof(proof)

    async def close(self) -> None:
        self.closed = True


def failing_proof_provider(message: str = "prover offline") -> StubProofProvider:
    """A proof provider whose every ``generate_proof`` call fails."""
    return StubProofProvider(error=ProofGenerationError(message, StubProofProvider.name))


__all__ = [
    "MockCall",
    "MockPriceSource",
    "StubVerifyProvider",
    "StubProofProvider",
    "failing_proof_provider",
]
