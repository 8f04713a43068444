"""
Core module for PrintOrderMail.

Contains fundamental infrastructure components:
- exceptions: Custom exception hierarchy
- mail_transport: SMTP transport with bounded timeouts
"""

from .exceptions import (
    PrintOrderMailError,
    ValidationError,
    DeliveryError,
    MailTimeoutError,
)
from .mail_transport import SMTPTransport

__all__ = [
    "PrintOrderMailError",
    "ValidationError",
    "DeliveryError",
    "MailTimeoutError",
    "SMTPTransport",
]
