"""
Custom exceptions for the Mediamine API with structured error context.

Every error raised by the service layer derives from MediamineException so the
HTTP layer can map it to a plain-text response in one place. Each exception
carries a context dictionary for logging.

Exception Hierarchy:
    MediamineException (base)
    ├── ConfigurationError
    ├── AuthenticationError
    ├── InvalidRequestError
    ├── StoreError
    │   └── ResourceNotFoundError
    └── EmailValidationError
        ├── NetworkError
        ├── RateLimitError
        └── ValidationServiceAuthError
"""

from typing import Optional, Dict, Any
from datetime import datetime, timezone


class MediamineException(Exception):
    """
    Base exception for all Mediamine API errors.

    Attributes:
        message: Human-readable error message
        context: Additional context information (store, entity, ids, etc.)
        original_exception: The original exception that was caught (if any)
    """

    def __init__(
        self,
        message: str,
        context: Optional[Dict[str, Any]] = None,
        original_exception: Optional[Exception] = None
    ):
        self.message = message
        self.context = context or {}
        self.original_exception = original_exception
        self.timestamp = datetime.now(timezone.utc)

        super().__init__(message)
        if original_exception:
            self.__cause__ = original_exception

    def __str__(self) -> str:
        """Plain message, which is what clients see in the response body."""
        if self.original_exception:
            return f"{self.message}: {self.original_exception}"
        return self.message

    def to_dict(self) -> Dict[str, Any]:
        """Convert exception to dictionary for logging."""
        return {
            "error_type": self.__class__.__name__,
            "message": self.message,
            "context": self.context,
            "timestamp": self.timestamp.isoformat(),
            "original_error": str(self.original_exception) if self.original_exception else None
        }


class ConfigurationError(MediamineException):
    """Raised at startup when required settings are missing."""
    pass


class AuthenticationError(MediamineException):
    """Missing, malformed or rejected credentials. Maps to HTTP 401."""
    pass


class InvalidRequestError(MediamineException):
    """
    Request payload is missing required data or references unknown rows.
    Maps to HTTP 400.
    """
    pass


# ============================================================================
# Store Errors
# ============================================================================

class StoreError(MediamineException):
    """
    Base exception for database failures in either store.

    Context should include:
        - store: "core" or "mediamine"
        - entity: Table or model name
    """
    pass


class ResourceNotFoundError(StoreError):
    """
    Lookup by id or uuid matched no row.

    Context should include:
        - entity: Model name
        - lookup: The id or uuid that was requested
    """
    pass


# ============================================================================
# Email Validation Errors
# ============================================================================

class EmailValidationError(MediamineException):
    """
    Base exception for ZeroBounce failures.

    Context should include:
        - url: The endpoint that failed
        - status_code: HTTP status code (if applicable)
        - batch_size: Number of emails in the request (batch calls)
    """
    pass


class NetworkError(EmailValidationError):
    """Connection, timeout or 5xx failures talking to ZeroBounce."""
    pass


class RateLimitError(EmailValidationError):
    """ZeroBounce answered HTTP 429."""

    def __init__(
        self,
        message: str,
        context: Optional[Dict[str, Any]] = None,
        original_exception: Optional[Exception] = None,
        retry_after: Optional[int] = None
    ):
        super().__init__(message, context, original_exception)
        self.retry_after = retry_after
        if retry_after:
            self.context["retry_after"] = retry_after


class ValidationServiceAuthError(EmailValidationError):
    """ZeroBounce rejected the API key (HTTP 401/403)."""
    pass
