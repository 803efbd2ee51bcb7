"""
Custom exception classes.

Represent errors raised by the webhook job handlers. HTTP responses with a
non-success status are not errors; they are returned as ``http_error`` results.
"""

import httpx


class WebhookJobError(Exception):
    """Base exception class for the webhook job."""

    pass


class ValidationError(WebhookJobError):
    """Raised when a required parameter is missing or malformed."""

    pass


class InvalidJsonError(WebhookJobError):
    """Raised when requestBody / requestHeaders is not valid JSON."""

    def __init__(self, parameter: str, detail: str):
        self.parameter = parameter
        self.detail = detail
        super().__init__(f"Invalid JSON in {parameter}: {detail}")


# Substrings that identify a name resolution failure in socket error text.
_DNS_FAILURE_MARKERS = (
    "Name or service not known",
    "nodename nor servname",
    "getaddrinfo",
    "Temporary failure in name resolution",
    "No address associated",
)


class TransportError(WebhookJobError):
    """
    Raised when the HTTP request could not complete at all.

    The message keeps the original error text and adds a searchable tag
    ("timeout", "DNS ... ENOTFOUND") for the error recovery handler.
    """

    def __init__(self, cause: Exception):
        self.cause = cause
        self.kind, detail = _describe_transport_failure(cause)
        super().__init__(f"HTTP request failed: {detail}")


def _describe_transport_failure(exc: Exception):
    original = f"{type(exc).__name__}: {exc}"
    if isinstance(exc, httpx.TimeoutException):
        return "timeout", f"request timeout ({original})"
    if isinstance(exc, httpx.ConnectError) and any(m in str(exc) for m in _DNS_FAILURE_MARKERS):
        return "dns", f"DNS resolution failed - ENOTFOUND ({original})"
    return "connection", original


class RetryFailedError(WebhookJobError):
    """Raised when the single retry after a rate-limit backoff fails."""

    def __init__(self, cause: Exception):
        self.cause = cause
        super().__init__(f"Retry failed after rate limit backoff: {cause}")


class UnrecoverableError(WebhookJobError):
    """Raised when the error handler cannot recover from an error."""

    def __init__(self, message: str):
        self.original_message = message
        super().__init__(f"Unrecoverable webhook error: {message}")
