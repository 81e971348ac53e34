"""intentgate testing utilities.

Provides mock collaborators and fixtures for testing applications that use
intentgate.
"""

from intentgate.testing.fixtures import (
    UNVERIFIED_RECIPIENT,
    VERIFIED_RECIPIENT,
    create_intent,
    create_quote,
)
from intentgate.testing.mock import (
    MockCall,
    MockPriceSource,
    StubProofProvider,
    StubVerifyProvider,
    failing_proof_provider,
)

__all__ = [
    # Mock collaborators
    "MockCall",
    "MockPriceSource",
    "StubVerifyProvider",
    "StubProofProvider",
    "failing_proof_provider",
    # Helper functions
    "create_intent",
    "create_quote",
    "VERIFIED_RECIPIENT",
    "UNVERIFIED_RECIPIENT",
]
