"""
Order data models.

An OrderSubmission lives for exactly one POST /send request: it is built
after validation, handed to the notifier, and dropped with the request.
Nothing here is persisted.

Thread Safety:
    All models are frozen dataclasses; each request owns its own instances.
"""

from __future__ import annotations

import uuid
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, Optional


class DeliveryTier(Enum):
    """
    Turnaround speed chosen on the form.

    Values match the form's <select> options.
    """

    STANDARD = "standard"
    ONE_DAY = "1-day"
    INSTANT = "instant"

    @classmethod
    def parse(cls, value: Optional[str]) -> "DeliveryTier":
        """
        Map a submitted form value to a tier.

        Accepts the values of the first form version ("oneday", "immediate").
        Anything unknown or empty is standard delivery.
        """
        if isinstance(value, cls):
            return value
        key = (value or "").strip().lower()
        if key in _LEGACY_TIERS:
            return _LEGACY_TIERS[key]
        for tier in cls:
            if tier.value == key:
                return tier
        return cls.STANDARD

    @property
    def label(self) -> str:
        return _TIER_LABELS[self]

    @property
    def badge_color(self) -> str:
        """Background colour of the tier badge in the HTML email."""
        return _TIER_COLORS[self]


_LEGACY_TIERS = {
    "oneday": DeliveryTier.ONE_DAY,
    "immediate": DeliveryTier.INSTANT,
}

_TIER_LABELS = {
    DeliveryTier.STANDARD: "Standard",
    DeliveryTier.ONE_DAY: "1-Day",
    DeliveryTier.INSTANT: "Instant",
}

_TIER_COLORS = {
    DeliveryTier.STANDARD: "#6c757d",
    DeliveryTier.ONE_DAY: "#fd7e14",
    DeliveryTier.INSTANT: "#dc3545",
}


@dataclass(frozen=True)
class UploadedFile:
    """A file read fully into memory from the multipart body."""

    field: str
    """Form slot the file came from ('document' or 'payment')."""

    filename: str
    """Original file name as sent by the browser."""

    content_type: str
    """MIME type as declared by the browser."""

    data: bytes = field(repr=False)
    """File contents."""

    @property
    def size(self) -> int:
        return len(self.data)

    def _mime_parts(self) -> tuple[str, str]:
        maintype, _, subtype = self.content_type.partition("/")
        # multipart/* cannot be attached as an opaque blob
        if not subtype or maintype == "multipart":
            return "application", "octet-stream"
        return maintype, subtype

    @property
    def maintype(self) -> str:
        return self._mime_parts()[0]

    @property
    def subtype(self) -> str:
        return self._mime_parts()[1]


def new_order_id() -> str:
    """Short reference shown to the customer and in the email subject."""
    return uuid.uuid4().hex[:8]


@dataclass(frozen=True)
class OrderSubmission:
    """
    A validated order, ready for pricing and notification.

    Lifecycle:
        1. Built by modules.order_form.build_submission() from the request
        2. Priced by modules.pricing.quote()
        3. Sent by services.notifier.OrderNotifier
        4. Discarded when the response is rendered
    """

    full_name: str
    phone: str
    email: str
    page_count: int
    delivery: DeliveryTier
    document: UploadedFile
    payment: UploadedFile
    ai_check: bool = False

    quoted_price: Optional[int] = None
    """Price the browser displayed when the form was sent (not trusted)."""

    detected_pages: Optional[int] = None
    """Page count read from the PDF itself, when the document is a PDF."""

    order_id: str = field(default_factory=new_order_id)

    @property
    def attachments(self) -> tuple[UploadedFile, UploadedFile]:
        return (self.document, self.payment)

    def summary(self) -> Dict[str, Any]:
        """Plain fields for templates and log lines (no file contents)."""
        return {
            "order_id": self.order_id,
            "full_name": self.full_name,
            "phone": self.phone,
            "email": self.email,
            "page_count": self.page_count,
            "detected_pages": self.detected_pages,
            "delivery": self.delivery.value,
            "delivery_label": self.delivery.label,
            "ai_check": self.ai_check,
            "quoted_price": self.quoted_price,
            "document_name": self.document.filename,
            "payment_name": self.payment.filename,
        }
