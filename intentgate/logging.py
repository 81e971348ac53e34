"""
intentgate logging utilities.

Provides configurable logging for price-source HTTP traffic, decisions and
proof operations. Ensures no private condition data (thresholds, proof
private inputs) and no credentials are logged.
"""

import logging
import re
from typing import Any

_sdk_logger = logging.getLogger("intentgate")
_http_logger = logging.getLogger("intentgate.http")
_proof_logger = logging.getLogger("intentgate.proof")

_REDACTED = "[REDACTED]"

# Keys whose values are never logged, matched as substrings of the lower-cased key
_SENSITIVE_KEYS = frozenset({
    "threshold",
    "private_inputs",
    "privateinputs",
    "private",
    "secret",
    "token",
    "password",
    "api_key",
    "apikey",
    "authorization",
})

_SENSITIVE_PATTERNS = [
    (re.compile(r"-----BEGIN[^-]*PRIVATE KEY-----.*?-----END[^-]*PRIVATE KEY-----", re.DOTALL), "[PRIVATE_KEY_REDACTED]"),
    (re.compile(r"(Bearer)\s+[A-Za-z0-9._~+/=-]+", re.IGNORECASE), r"\1 [REDACTED]"),
    (re.compile(r"""(["']?threshold["']?\s*[:=]\s*)["']?[-+]?[\d.,eE]+["']?""", re.IGNORECASE), r"\1[REDACTED]"),
    (re.compile(r"""(["']?privateInputs["']?\s*[:=]\s*)\{[^}]*\}""", re.IGNORECASE), r"\1[REDACTED]"),
    (re.compile(r"""(secret|token|password|api_key)["']?\s*[:=]\s*["'][^"']+["']""", re.IGNORECASE), r"\1: [REDACTED]"),
]


def configure_logging(
    level: int = logging.INFO,
    http_level: int | None = None,
    proof_level: int | None = None,
    handler: logging.Handler | None = None,
    format_string: str | None = None,
) -> None:
    """
    Configure intentgate logging.

    Args:
        level: Default log level for all intentgate loggers (default: INFO)
        http_level: Log level for price-source HTTP logging (default: same as level)
        proof_level: Log level for proof operations (default: same as level)
        handler: Custom handler to use (default: StreamHandler to stderr)
        format_string: Custom format string (default: timestamp, logger name, level)

    Example:
        ```python
        import logging
        from intentgate.logging import configure_logging

        configure_logging(level=logging.INFO, http_level=logging.DEBUG)
        ```
    """
    if format_string is None:
        format_string = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

    formatter = logging.Formatter(format_string)

    if handler is None:
        handler = logging.StreamHandler()

    handler.setFormatter(formatter)

    _sdk_logger.setLevel(level)
    _sdk_logger.addHandler(handler)

    _http_logger.setLevel(http_level if http_level is not None else level)
    _proof_logger.setLevel(proof_level if proof_level is not None else level)


def get_logger(name: str | None = None) -> logging.Logger:
    """
    Get an intentgate logger.

    Args:
        name: Logger name suffix (e.g., "http", "oracle"). If None, returns the root
            intentgate logger.
    """
    if name is None:
        return _sdk_logger
    return logging.getLogger(f"intentgate.{name}")


def mask_sensitive_data(text: str) -> str:
    """
    Mask sensitive data in a string.

    Replaces private keys, bearer tokens, threshold assignments and other
    secrets with redacted placeholders.
    """
    result = text
    for pattern, replacement in _SENSITIVE_PATTERNS:
        result = pattern.sub(replacement, result)
    return result


def _is_sensitive(key: str, sensitive_keys: frozenset[str] | set[str]) -> bool:
    key_lower = key.lower()
    return any(sk in key_lower for sk in sensitive_keys)


def safe_log_dict(
    data: dict[str, Any], sensitive_keys: set[str] | None = None
) -> dict[str, Any]:
    """
    Create a copy of a dictionary with sensitive values masked.

    Args:
        data: Dictionary that may contain sensitive values
        sensitive_keys: Key fragments to mask (default: thresholds, private inputs,
            credentials)

    Returns:
        Dictionary with sensitive values replaced with "[REDACTED]"
    """
    keys = sensitive_keys if sensitive_keys is not None else _SENSITIVE_KEYS

    result: dict[str, Any] = {}
    for key, value in data.items():
        if _is_sensitive(str(key), keys):
            result[key] = _REDACTED
        elif isinstance(value, dict):
            result[key] = safe_log_dict(value, sensitive_keys)
        elif isinstance(value, list):
            result[key] = [
                safe_log_dict(item, sensitive_keys) if isinstance(item, dict) else item
                for item in value
            ]
        else:
            result[key] = value

    return result


def log_http_request(
    method: str,
    url: str,
    params: dict[str, Any] | None = None,
    headers: dict[str, str] | None = None,
    body: dict[str, Any] | None = None,
) -> None:
    """Log an outgoing HTTP request at DEBUG level with sensitive data masked."""
    if not _http_logger.isEnabledFor(logging.DEBUG):
        return

    log_parts = [f"{method} {url}"]

    if params:
        log_parts.append(f"params={safe_log_dict(params)}")

    if headers:
        log_parts.append(f"headers={safe_log_dict(headers)}")

    if body:
        log_parts.append(f"body={safe_log_dict(body)}")

    _http_logger.debug(" | ".join(log_parts))


def log_http_response(
    status_code: int,
    url: str,
    body: Any = None,
    elapsed_ms: float | None = None,
) -> None:
    """Log an HTTP response at DEBUG level with sensitive data masked."""
    if not _http_logger.isEnabledFor(logging.DEBUG):
        return

    log_parts = [f"Response {status_code} from {url}"]

    if elapsed_ms is not None:
        log_parts.append(f"elapsed={elapsed_ms:.2f}ms")

    if isinstance(body, dict):
        log_parts.append(f"body={safe_log_dict(body)}")
    elif body is not None:
        log_parts.append(f"body={mask_sensitive_data(str(body))[:200]}")

    _http_logger.debug(" | ".join(log_parts))


def log_proof_operation(
    operation: str,
    circuit_id: str,
    intent_id: str | None = None,
    provider: str | None = None,
) -> None:
    """
    Log a proof operation at INFO level.

    Only identifiers are accepted here; private inputs cannot be passed in.
    """
    log_parts = [f"{operation}: circuit={circuit_id}"]

    if intent_id:
        log_parts.append(f"intent_id={intent_id}")

    if provider:
        log_parts.append(f"provider={provider}")

    _proof_logger.info(" | ".join(log_parts))


__all__ = [
    "configure_logging",
    "get_logger",
    "mask_sensitive_data",
    "safe_log_dict",
    "log_http_request",
    "log_http_response",
    "log_proof_operation",
]
