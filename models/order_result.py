"""
Order result data models.

These models describe where a submission ended up in the /send flow and
carry what the confirmation or error page needs to render.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
from typing import Any, Dict, Optional


class OrderStatus(Enum):
    """
    State of a submission inside POST /send.

    Lifecycle:
        AWAITING_SUBMISSION -> VALIDATING -> (NOTIFYING | REJECTED)
        NOTIFYING -> (CONFIRMED | FAILED)
    """

    AWAITING_SUBMISSION = "awaiting_submission"
    """Form shown, nothing received yet."""

    VALIDATING = "validating"
    """Uploads and fields are being checked."""

    REJECTED = "rejected"
    """Validation failed; nothing was sent."""

    NOTIFYING = "notifying"
    """Email handed to the mail transport."""

    CONFIRMED = "confirmed"
    """Email accepted by the mail server."""

    FAILED = "failed"
    """Mail transport failed."""

    @property
    def is_terminal(self) -> bool:
        return self in (OrderStatus.REJECTED, OrderStatus.CONFIRMED, OrderStatus.FAILED)

    @property
    def http_status(self) -> int:
        """Response code for a terminal state."""
        return _HTTP_STATUS.get(self, 200)


_HTTP_STATUS = {
    OrderStatus.REJECTED: 400,
    OrderStatus.CONFIRMED: 200,
    OrderStatus.FAILED: 500,
}


@dataclass(frozen=True)
class OrderResult:
    """
    Outcome of one submission.

    Returned by OrderNotifier.notify() on success and built by the route
    for rejected and failed submissions.
    """

    status: OrderStatus
    order_id: Optional[str] = None
    price: Optional[int] = None
    message: str = ""
    sent_at: str = field(
        default_factory=lambda: datetime.now(timezone.utc).isoformat()
    )

    @property
    def success(self) -> bool:
        return self.status == OrderStatus.CONFIRMED

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for template rendering."""
        return {
            "status": self.status.value,
            "order_id": self.order_id,
            "price": self.price,
            "message": self.message,
            "sent_at": self.sent_at,
            "success": self.success,
        }
