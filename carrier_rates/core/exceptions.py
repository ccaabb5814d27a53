"""
Carrier Integration Exception Hierarchy

Every failure surfaced by a carrier adapter is one of four kinds. Each error
carries a machine-readable code, the carrier it came from, and the underlying
cause (an exception or the raw response body) for audit and debugging.

Exception Hierarchy:
    CarrierIntegrationError
    ├── AuthenticationError   (credentials missing or rejected)
    ├── RateLimitError        (carrier throttling, optional retry-after)
    ├── NetworkError          (transport failure or non-specific HTTP status)
    └── InvalidResponseError  (response fails structural validation)

No retries happen inside the adapters. Callers decide whether to retry on
RateLimitError and NetworkError.
"""
import logging
from enum import Enum
from typing import Any, Dict, Optional

logger = logging.getLogger(__name__)


class CarrierErrorKind(str, Enum):
    """Discriminant for the four failure kinds."""
    AUTHENTICATION = "authentication"
    RATE_LIMIT = "rate_limit"
    NETWORK = "network"
    INVALID_RESPONSE = "invalid_response"


class CarrierIntegrationError(Exception):
    """
    Base exception for carrier integration failures.

    Attributes:
        message: Human-readable error description
        code: Machine-readable error code for programmatic handling
        carrier_id: Carrier that produced the failure (e.g. "ups")
        cause: Underlying exception or response payload, if any
        details: Additional context for logging
        kind: Which of the four failure kinds this is
    """

    default_code: str = "CARRIER_ERROR"
    default_message: str = "Carrier integration failed"
    kind: CarrierErrorKind

    def __init__(
        self,
        message: Optional[str] = None,
        carrier_id: Optional[str] = None,
        cause: Any = None,
        code: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None,
    ):
        self.message = message or self.default_message
        self.carrier_id = carrier_id
        self.cause = cause
        self.code = code or self.default_code
        self.details = details or {}
        super().__init__(self.message)

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for logging/serialization."""
        return {
            "error_type": self.__class__.__name__,
            "kind": self.kind.value,
            "code": self.code,
            "message": self.message,
            "carrier_id": self.carrier_id,
            "cause": repr(self.cause) if self.cause is not None else None,
            "details": self.details,
        }

    def __repr__(self) -> str:
        return (
            f"{self.__class__.__name__}(code={self.code!r}, "
            f"carrier_id={self.carrier_id!r}, message={self.message!r})"
        )


class AuthenticationError(CarrierIntegrationError):
    """Carrier rejected the credentials, or no credentials were configured."""
    kind = CarrierErrorKind.AUTHENTICATION
    default_code = "CARRIER_AUTH_FAILED"
    default_message = "Carrier authentication failed"


class RateLimitError(CarrierIntegrationError):
    """Carrier signaled throttling (HTTP 429)."""
    kind = CarrierErrorKind.RATE_LIMIT
    default_code = "CARRIER_RATE_LIMITED"
    default_message = "Carrier rate limit exceeded"

    def __init__(
        self,
        message: Optional[str] = None,
        carrier_id: Optional[str] = None,
        retry_after_seconds: Optional[float] = None,
        cause: Any = None,
        **kwargs,
    ):
        details = kwargs.pop("details", None) or {}
        details["retry_after_seconds"] = retry_after_seconds
        super().__init__(message, carrier_id, cause, details=details, **kwargs)
        self.retry_after_seconds = retry_after_seconds


class NetworkError(CarrierIntegrationError):
    """Transport failure (timeout, DNS, reset) or a non-specific HTTP error status."""
    kind = CarrierErrorKind.NETWORK
    default_code = "CARRIER_NETWORK_ERROR"
    default_message = "Network error during carrier request"


class InvalidResponseError(CarrierIntegrationError):
    """Carrier response is malformed, has the wrong shape, or lacks required fields."""
    kind = CarrierErrorKind.INVALID_RESPONSE
    default_code = "CARRIER_INVALID_RESPONSE"
    default_message = "Invalid response from carrier"
