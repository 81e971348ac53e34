"""intentgate exception classes."""


class IntentGateError(Exception):
    """Base exception for all intentgate errors."""

    def __init__(self, code: str, message: str) -> None:
        self.code = code
        self.message = message
        super().__init__(f"[{code}] {message}")


class ConfigurationError(IntentGateError):
    """Raised when agent configuration is invalid or missing."""

    def __init__(self, message: str) -> None:
        super().__init__("CONFIGURATION_ERROR", message)


class UpstreamError(IntentGateError):
    """Raised when an external collaborator (price source, verifier, prover) fails."""

    def __init__(self, code: str, message: str, source: str) -> None:
        super().__init__(code, message)
        self.source = source


class SourceTimeoutError(UpstreamError):
    """Raised when an upstream call exceeds its time limit."""

    def __init__(self, source: str, timeout: float) -> None:
        super().__init__("SOURCE_TIMEOUT", f"{source} timed out after {timeout}s", source)
        self.timeout = timeout


class UpstreamAPIError(UpstreamError):
    """Raised on non-success responses or explicit error members in a response."""

    def __init__(
        self, message: str, source: str, status_code: int | None = None
    ) -> None:
        super().__init__("UPSTREAM_API_ERROR", message, source)
        self.status_code = status_code


class UpstreamNotFoundError(UpstreamAPIError):
    """Raised when an upstream resource does not exist (404)."""

    def __init__(self, message: str, source: str) -> None:
        super().__init__(message, source, status_code=404)
        self.code = "UPSTREAM_NOT_FOUND"


class RateLimitedError(UpstreamError):
    """Raised when an upstream source rate limits us (429)."""

    def __init__(self, message: str, source: str, retry_after: int) -> None:
        super().__init__("RATE_LIMITED", message, source)
        self.retry_after = retry_after


class PriceParseError(UpstreamError):
    """Raised when a price response cannot be parsed into a positive number."""

    def __init__(self, message: str, source: str) -> None:
        super().__init__("PRICE_PARSE_ERROR", message, source)


class PriceNotFoundError(UpstreamError):
    """Raised when a source answers but has no price for the requested pair."""

    def __init__(self, message: str, source: str) -> None:
        super().__init__("PRICE_NOT_FOUND", message, source)


class PriceUnavailableError(IntentGateError):
    """Raised when every configured price source failed."""

    def __init__(self, pair: str, causes: list[UpstreamError]) -> None:
        detail = "; ".join(f"{c.source}: {c.message}" for c in causes) or "no sources configured"
        super().__init__(
            "PRICE_UNAVAILABLE",
            f"Failed to fetch price for {pair} from all sources ({detail})",
        )
        self.pair = pair
        self.causes = causes


class ProofGenerationError(IntentGateError):
    """Raised when a proof provider cannot produce a proof."""

    def __init__(self, message: str, provider: str | None = None) -> None:
        super().__init__("PROOF_GENERATION_FAILED", message)
        self.provider = provider


class VerificationCheckError(IntentGateError):
    """Raised when a verification provider cannot answer."""

    def __init__(self, message: str, provider: str | None = None) -> None:
        super().__init__("VERIFICATION_CHECK_FAILED", message)
        self.provider = provider
