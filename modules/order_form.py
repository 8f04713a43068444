"""
Order form parsing.

Turns the text fields of a POST /send request plus an accepted UploadCheck
into an OrderSubmission. Text is stripped of markup before it reaches the
email templates.
"""

from __future__ import annotations

import html
import re
from typing import Mapping, Optional

import bleach

from core.exceptions import ValidationError
from models.order import DeliveryTier, OrderSubmission
from modules.pdf_analyzer import PDFAnalyzer
from modules.upload_handler import UploadCheck
from logging_config import get_logger


# Module logger
logger = get_logger(__name__)

# Constants
MAX_NAME_LENGTH = 200
MAX_PHONE_LENGTH = 40
MAX_EMAIL_LENGTH = 254
MAX_PAGES = 100000

REQUIRED_FIELDS = (
    ("fullname", "full name", MAX_NAME_LENGTH),
    ("phone", "phone number", MAX_PHONE_LENGTH),
    ("email", "email address", MAX_EMAIL_LENGTH),
)

TRUTHY = {"on", "true", "yes", "1"}

# One mailbox, dot-atom local part and a dotted host name: the Reply-To of
# the order email is set from it.
_ATOM = r"[A-Za-z0-9!#$%&'*+/=?^_`{|}~-]+"
_LABEL = r"[A-Za-z0-9](?:[A-Za-z0-9-]*[A-Za-z0-9])?"
EMAIL_PATTERN = re.compile(rf"{_ATOM}(?:\.{_ATOM})*@{_LABEL}(?:\.{_LABEL})+")


def sanitize_text(text: Optional[str], max_length: Optional[int] = None) -> str:
    """
    Sanitize user input text to prevent markup injection in the email.

    Args:
        text: Raw input text
        max_length: Optional maximum length to enforce

    Returns:
        Sanitized text safe for display
    """
    if not text:
        return ""

    text = text.strip()
    # Stored as plain text; templates do the escaping
    text = html.unescape(bleach.clean(text, tags=[], strip=True))

    if max_length and len(text) > max_length:
        text = text[:max_length]

    return text


def parse_pages(raw: Optional[str]) -> int:
    """
    Parse the page count field.

    Raises:
        ValidationError: empty, not a whole number, negative or absurdly large
    """
    value = (raw or "").strip()
    if not value:
        raise ValidationError("pages", "Please enter the number of pages.")
    try:
        pages = int(value)
    except ValueError:
        raise ValidationError("pages", "Number of pages must be a whole number.")
    if pages < 0:
        raise ValidationError("pages", "Number of pages cannot be negative.")
    if pages > MAX_PAGES:
        raise ValidationError("pages", f"Number of pages too large. Maximum is {MAX_PAGES}.")
    return pages


def parse_quoted_price(raw: Optional[str]) -> Optional[int]:
    """Price echoed by the form; informational only, None when unusable."""
    try:
        return round(float((raw or "").strip()))
    except (ValueError, OverflowError):
        return None


def parse_flag(raw: Optional[str]) -> bool:
    return (raw or "").strip().lower() in TRUTHY


def is_valid_email(value: str) -> bool:
    """True when value is exactly one plain address such as asha@example.com."""
    if len(value) > MAX_EMAIL_LENGTH or EMAIL_PATTERN.fullmatch(value) is None:
        return False
    return len(value.rsplit("@", 1)[0]) <= 64


def build_submission(
    form: Mapping[str, str],
    uploads: UploadCheck,
    analyzer: Optional[PDFAnalyzer] = None,
) -> OrderSubmission:
    """
    Build the OrderSubmission for an accepted upload.

    Args:
        form: request.form
        uploads: Successful UploadCheck
        analyzer: Optional PDF analyzer used to read the real page count

    Returns:
        OrderSubmission

    Raises:
        ValidationError: A required field is missing or malformed
    """
    values = {}
    for name, label, max_length in REQUIRED_FIELDS:
        value = sanitize_text(form.get(name), max_length=max_length)
        if not value:
            raise ValidationError(name, f"Please provide your {label} ({name}).")
        values[name] = value

    email = values["email"]
    if not is_valid_email(email):
        raise ValidationError("email", "Please provide a valid email address (email).")

    pages = parse_pages(form.get("pages"))
    delivery = DeliveryTier.parse(form.get("delivery"))

    detected_pages = analyzer.count_pages(uploads.document) if analyzer else None
    if detected_pages is not None and detected_pages != pages:
        logger.info(
            f"Declared page count {pages} differs from PDF page count {detected_pages}"
        )

    return OrderSubmission(
        full_name=values["fullname"],
        phone=values["phone"],
        email=values["email"],
        page_count=pages,
        delivery=delivery,
        ai_check=parse_flag(form.get("aiCheck")),
        document=uploads.document,
        payment=uploads.payment,
        quoted_price=parse_quoted_price(form.get("price")),
        detected_pages=detected_pages,
    )
