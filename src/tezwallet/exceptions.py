"""Unified exception hierarchy for tezwallet.

All tezwallet exceptions inherit from TezWalletError, enabling:
- Consistent error handling for callers of the SDK
- Structured error payloads with machine-readable codes
- Catching input errors as the matching builtin (ValueError, ZeroDivisionError)

Usage:
    from tezwallet.exceptions import MalformedAmountError, TezWalletError

    try:
        amount = TokenAmount.parse(user_input, 6)
    except MalformedAmountError as e:
        show_error(e.message)

All exceptions have:
- error_code: Machine-readable error code (e.g., "MALFORMED_AMOUNT")
- message: Human-readable error message
- details: Optional additional context dictionary
- to_dict(): Convert to a serializable error payload
"""
from __future__ import annotations

from typing import Any, Optional


class TezWalletError(Exception):
    """Base exception for all tezwallet errors.

    Attributes:
        message: Human-readable error message
        error_code: Machine-readable error code
        details: Optional additional context
    """

    error_code: str = "TEZWALLET_ERROR"

    def __init__(
        self,
        message: str,
        error_code: Optional[str] = None,
        details: Optional[dict[str, Any]] = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        if error_code:
            self.error_code = error_code
        self.details = details or {}

    def __str__(self) -> str:
        return f"[{self.error_code}] {self.message}"

    def to_dict(self) -> dict[str, Any]:
        """Convert exception to an error payload."""
        result: dict[str, Any] = {
            "error": self.error_code,
            "message": self.message,
        }
        if self.details:
            result["details"] = self.details
        return result


# =============================================================================
# Amount Errors
# =============================================================================

class MalformedAmountError(TezWalletError, ValueError):
    """Decimal string cannot be represented exactly at the requested scale."""

    error_code = "MALFORMED_AMOUNT"

    def __init__(
        self,
        message: str,
        value: Optional[str] = None,
        decimal_places: Optional[int] = None,
    ) -> None:
        details: dict[str, Any] = {}
        if value is not None:
            details["value"] = value
        if decimal_places is not None:
            details["decimal_places"] = decimal_places
        super().__init__(message, details=details)
        self.value = value
        self.decimal_places = decimal_places


class DivisionByZeroError(TezWalletError, ZeroDivisionError):
    """Scalar division of an amount by zero."""

    error_code = "DIVISION_BY_ZERO"


# =============================================================================
# Configuration Errors
# =============================================================================

class InvalidTokenConfigurationError(TezWalletError, ValueError):
    """Token fields violate the kind / contract address / items invariants."""

    error_code = "INVALID_TOKEN_CONFIGURATION"

    def __init__(self, message: str, field: Optional[str] = None) -> None:
        super().__init__(message, details={"field": field} if field else None)
        self.field = field


class InvalidNetworkConfigError(TezWalletError, ValueError):
    """NetworkConfig is structurally invalid (e.g. unparseable endpoint)."""

    error_code = "INVALID_NETWORK_CONFIG"

    def __init__(
        self,
        message: str,
        field: Optional[str] = None,
        value: Optional[str] = None,
    ) -> None:
        details: dict[str, Any] = {}
        if field:
            details["field"] = field
        if value is not None:
            details["value"] = value
        super().__init__(message, details=details)
        self.field = field
        self.value = value


# =============================================================================
# Service Errors (raised by backend clients, never by the core types)
# =============================================================================

class APIError(TezWalletError):
    """Error response from a node, indexer or metadata service."""

    error_code = "API_ERROR"

    def __init__(
        self,
        message: str,
        status_code: int,
        error_code: Optional[str] = None,
        details: Optional[dict[str, Any]] = None,
    ) -> None:
        super().__init__(message, error_code, details)
        self.status_code = status_code

    @classmethod
    def from_response(cls, status_code: int, body: Any) -> "APIError":
        """Create APIError from an HTTP error body.

        Tezos nodes answer errors with a JSON list of ``{"kind", "id"}``
        objects, indexers with ``{"code", "message"}`` or plain text.
        """
        if isinstance(body, list):
            return cls(
                message="RPC error",
                status_code=status_code,
                error_code="RPC_ERROR",
                details={"errors": body},
            )
        if isinstance(body, dict):
            error_data = body.get("error", body.get("detail", body))
            if isinstance(error_data, str):
                return cls(message=error_data, status_code=status_code)
            if not isinstance(error_data, dict):
                return cls(message=str(body), status_code=status_code)
            return cls(
                message=error_data.get("message") or "Unknown error",
                status_code=status_code,
                error_code=error_data.get("code"),
                details=error_data.get("details"),
            )
        return cls(message=str(body), status_code=status_code)


class RateLimitError(APIError):
    """Rate limit exceeded on a backend service."""

    error_code = "RATE_LIMIT_EXCEEDED"

    def __init__(self, message: str, retry_after: Optional[int] = None) -> None:
        super().__init__(message, status_code=429)
        self.retry_after = retry_after


__all__ = [
    "TezWalletError",
    "MalformedAmountError",
    "DivisionByZeroError",
    "InvalidTokenConfigurationError",
    "InvalidNetworkConfigError",
    "APIError",
    "RateLimitError",
]
