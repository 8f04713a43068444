"""
Custom exceptions for PrintOrderMail.

Exception Hierarchy:
    PrintOrderMailError (base)
    ├── ValidationError      - Bad form field or upload (client error, 4xx)
    └── DeliveryError        - Mail transport failed (server error, 500)
        └── MailTimeoutError - Transport did not answer in time

Usage:
    ValidationError is raised (or returned inside an UploadCheck) before any
    side effect happens; the router renders it as a 400 page.
    DeliveryError is raised by the mail transport; the router renders it as a
    500 page with the underlying message. Neither is retried.
"""

from typing import Any, Dict, Iterable, Optional


class PrintOrderMailError(Exception):
    """
    Base exception for all PrintOrderMail errors.

    All custom exceptions inherit from this class, allowing callers to catch
    all application-specific errors with a single except clause if needed.
    """

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        """
        Initialize the exception.

        Args:
            message: Human-readable error message
            details: Optional dictionary with additional context for debugging
        """
        super().__init__(message)
        self.message = message
        self.details = details or {}

    def __str__(self) -> str:
        if self.details:
            return f"{self.message} | Details: {self.details}"
        return self.message


# =============================================================================
# CLIENT ERRORS - Request is rejected, nothing is sent
# =============================================================================

class ValidationError(PrintOrderMailError):
    """
    A submitted field or uploaded file is missing or unacceptable.

    Typical causes:
    - Required file (document, payment) not attached
    - File larger than the configured limit
    - Document MIME type not in the allowlist
    - Required text field empty, or page count not a whole number

    The message is shown to the submitter as-is, so it always names the
    offending field.
    """

    def __init__(
        self,
        field: str,
        message: str,
        allowed: Optional[Iterable[str]] = None,
    ):
        details: Dict[str, Any] = {"field": field}
        if allowed:
            details["allowed"] = list(allowed)
        super().__init__(message, details)
        self.field = field
        self.allowed = list(allowed) if allowed else []


# =============================================================================
# DELIVERY ERRORS - Order was valid but the email could not be handed over
# =============================================================================

class DeliveryError(PrintOrderMailError):
    """
    The mail transport rejected the message or could not reach the server.

    Every delivery failure is terminal for the request: it is logged,
    rendered back to the submitter, and never queued or retried.
    """

    def __init__(
        self,
        message: str,
        recipient: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None,
    ):
        error_details = details or {}
        if recipient:
            error_details["recipient"] = recipient
        super().__init__(message, error_details)
        self.recipient = recipient


class MailTimeoutError(DeliveryError):
    """
    The mail server did not answer within the configured timeout.

    The message may or may not have been accepted by the server; the
    submitter is told the order was not sent.
    """

    def __init__(
        self,
        timeout_seconds: float,
        recipient: Optional[str] = None,
    ):
        message = f"Mail server did not respond within {timeout_seconds:.0f}s"
        details = {
            "timeout_seconds": timeout_seconds,
            "resolution": "Check SMTP_HOST/SMTP_PORT or try again later",
        }
        super().__init__(message, recipient, details)
        self.timeout_seconds = timeout_seconds
