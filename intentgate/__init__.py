"""intentgate - decision agent for conditional payment intents."""

from intentgate.agent import IntentAgent
from intentgate.config import AgentConfig
from intentgate.evaluator import ConditionEvaluator
from intentgate.exceptions import (
    ConfigurationError,
    IntentGateError,
    PriceNotFoundError,
    PriceParseError,
    PriceUnavailableError,
    ProofGenerationError,
    RateLimitedError,
    SourceTimeoutError,
    UpstreamAPIError,
    UpstreamError,
    UpstreamNotFoundError,
    VerificationCheckError,
)
from intentgate.factory import Capabilities, build_capabilities
from intentgate.logging import configure_logging, get_logger
from intentgate.orchestrator import DecisionOrchestrator
from intentgate.price_oracle import PriceOracle
from intentgate.proofs import MockProofProvider, ProofGateway, ProofProvider, RemoteProofProvider
from intentgate.sources import CoinGeckoSource, CryptoComMCPSource, FixedPriceSource, PriceSource
from intentgate.types import (
    AgentDecision,
    ConditionType,
    Decision,
    PaymentCondition,
    PaymentIntent,
    PriceQuote,
    VerificationStatus,
    ZKProof,
)
from intentgate.verification import (
    HTTPVerifyProvider,
    MockVerifyProvider,
    VerificationGate,
    VerifyProvider,
)

__version__ = "0.1.0"

__all__ = [
    "__version__",
    # Agent
    "IntentAgent",
    "AgentConfig",
    "Capabilities",
    "build_capabilities",
    # Components
    "PriceOracle",
    "ConditionEvaluator",
    "VerificationGate",
    "DecisionOrchestrator",
    "ProofGateway",
    # Price sources
    "PriceSource",
    "CryptoComMCPSource",
    "CoinGeckoSource",
    "FixedPriceSource",
    # Providers
    "VerifyProvider",
    "MockVerifyProvider",
    "HTTPVerifyProvider",
    "ProofProvider",
    "MockProofProvider",
    "RemoteProofProvider",
    # Types
    "PaymentIntent",
    "PaymentCondition",
    "ConditionType",
    "PriceQuote",
    "Decision",
    "AgentDecision",
    "VerificationStatus",
    "ZKProof",
    # Exceptions
    "IntentGateError",
    "ConfigurationError",
    "UpstreamError",
    "SourceTimeoutError",
    "UpstreamAPIError",
    "UpstreamNotFoundError",
    "RateLimitedError",
    "PriceParseError",
    "PriceNotFoundError",
    "PriceUnavailableError",
    "ProofGenerationError",
    "VerificationCheckError",
    # Logging
    "configure_logging",
    "get_logger",
]
