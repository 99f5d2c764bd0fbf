"""Exception hierarchy for the LinkedIn Ads request pipeline.

Every failure the pipeline surfaces is one of these classes, so callers can
tell a transport problem from a provider rejection or a malformed payload:

- SerializationError: request body could not be encoded (never retried)
- TransportError: connection/timeout/cancellation after retries ran out
- RequestFailedError: repository-level wrapper around a transport failure
- ProviderError: non-2xx response from LinkedIn
- DecodeError: malformed response envelope or analytics element
"""

from typing import Any, Dict, Optional

from linkedin_ads.core.constants import MAX_LOGGED_BODY_CHARS


class LinkedInAdsError(Exception):
    """Base exception for all pipeline errors."""

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        """Initialize the exception.

        Args:
            message: Human-readable error message
            details: Optional dictionary with additional error context
        """
        super().__init__(message)
        self.message = message
        self.details = details or {}

    def __str__(self) -> str:
        """Return string representation of the error."""
        if self.details:
            return f"{self.message} | Details: {self.details}"
        return self.message


class ConfigurationError(LinkedInAdsError):
    """Raised when configuration is invalid or missing.

    Examples:
        - LINKEDIN_ACCESS_TOKEN not set
        - Non-numeric retry count in the YAML file
    """

    pass


class SerializationError(LinkedInAdsError):
    """Raised when a request body cannot be encoded as JSON.

    This is the only transport failure that bypasses the retry loop.
    """

    pass


class TransportError(LinkedInAdsError):
    """Raised when the HTTP request could not complete.

    Covers connection failures, timeouts and caller cancellation once the
    retry budget is exhausted.
    """

    def __init__(
        self,
        message: str,
        last_error: Optional[BaseException] = None,
        attempts: int = 0,
        details: Optional[Dict[str, Any]] = None,
    ):
        """Initialize transport error.

        Args:
            message: Human-readable error message
            last_error: Underlying exception of the final attempt
            attempts: Number of attempts that were made
            details: Optional additional context
        """
        super().__init__(message, details)
        self.last_error = last_error
        self.attempts = attempts


class RequestFailedError(LinkedInAdsError):
    """Raised by repositories when the transport could not deliver a response."""

    pass


class ProviderError(LinkedInAdsError):
    """Raised when LinkedIn answers with a non-2xx status.

    Attributes:
        status_code: HTTP status code of the final response
        response_body: Trimmed raw body (may be empty)
        parsed_body: Body decoded as JSON, when it was valid JSON
    """

    def __init__(
        self,
        message: str,
        status_code: int,
        response_body: str = "",
        parsed_body: Any = None,
        details: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message, details)
        self.status_code = status_code
        self.response_body = response_body
        self.parsed_body = parsed_body

    def __str__(self) -> str:
        """Return the message, truncated to keep logs readable."""
        base = self.message
        if len(base) > MAX_LOGGED_BODY_CHARS:
            base = f"{base[:MAX_LOGGED_BODY_CHARS]}..."
        if self.details:
            base = f"{base}\nDetails: {self.details}"
        return base


class DecodeError(LinkedInAdsError):
    """Raised when a 2xx response cannot be decoded.

    Attributes:
        index: Position of the offending analytics element, or None when the
            envelope itself was malformed
    """

    def __init__(
        self,
        message: str,
        index: Optional[int] = None,
        details: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message, details)
        self.index = index
