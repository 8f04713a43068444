"""
Order notification service.

Composes the "New Document Order" email for a validated submission and
hands it to the mail transport.

Message layout:
    multipart/mixed
    ├── multipart/alternative
    │   ├── text/plain  (templates/email/order.txt)
    │   └── text/html   (templates/email/order.html)
    ├── document attachment
    └── payment proof attachment

Flow:
    1. Route validates uploads and fields, builds OrderSubmission
    2. Route prices it with modules.pricing.quote()
    3. notifier.notify(submission, quote)
       - builds the message
       - transport.send(message), exactly once
    4. Returns OrderResult(CONFIRMED) or raises DeliveryError

Usage:
    notifier = OrderNotifier(settings, SMTPTransport(settings))
    result = notifier.notify(submission, quote(submission.page_count, submission.delivery))
"""

from __future__ import annotations

from email.message import EmailMessage
from typing import Any, Dict, Optional, Protocol

from jinja2 import Environment, FileSystemLoader, select_autoescape

from config import BASE_DIR, MailSettings
from core.exceptions import DeliveryError
from models.order import OrderSubmission
from models.order_result import OrderResult, OrderStatus
from modules.pricing import PriceQuote
from logging_config import get_logger


# Module logger
logger = get_logger(__name__)

EMAIL_TEMPLATE_DIR = BASE_DIR / "templates" / "email"
SUBJECT_PREFIX = "New Document Order"
AI_CHECK_NOTE = "AI-enhanced check requested (surcharge applies, quoted separately)"


class MailTransport(Protocol):
    """Anything able to deliver a composed message."""

    def send(self, message: EmailMessage) -> None:
        ...


def _create_environment() -> Environment:
    return Environment(
        loader=FileSystemLoader(str(EMAIL_TEMPLATE_DIR)),
        autoescape=select_autoescape(enabled_extensions=("html",), default=False),
        trim_blocks=True,
        lstrip_blocks=True,
    )


class OrderNotifier:
    """
    Builds and sends one notification email per confirmed order.

    The notifier holds no per-order state; a single instance is shared by
    all request threads.
    """

    def __init__(
        self,
        settings: MailSettings,
        transport: MailTransport,
        environment: Optional[Environment] = None,
    ):
        self.settings = settings
        self.transport = transport
        self.env = environment or _create_environment()

    # =========================================================================
    # MESSAGE COMPOSITION
    # =========================================================================

    def _context(self, submission: OrderSubmission, price: PriceQuote) -> Dict[str, Any]:
        """Template variables shared by the text and HTML bodies."""
        quoted = submission.quoted_price
        return {
            "order": submission.summary(),
            "quote": price.to_dict(),
            "price": price.price,
            "currency": self.settings.currency,
            "badge_color": submission.delivery.badge_color,
            "ai_check_note": AI_CHECK_NOTE if submission.ai_check else "",
            "price_mismatch": quoted is not None and quoted != price.price,
        }

    def subject(self, submission: OrderSubmission) -> str:
        return f"{SUBJECT_PREFIX} #{submission.order_id}"

    def build_message(self, submission: OrderSubmission, price: PriceQuote) -> EmailMessage:
        """
        Compose the notification email.

        Args:
            submission: Validated order
            price: Server-side quote for the order

        Returns:
            EmailMessage with text + HTML bodies and both files attached
        """
        context = self._context(submission, price)

        message = EmailMessage()
        message["From"] = self.settings.sender
        message["To"] = self.settings.recipient
        message["Subject"] = self.subject(submission)
        message["Reply-To"] = submission.email

        message.set_content(self.env.get_template("order.txt").render(**context))
        message.add_alternative(
            self.env.get_template("order.html").render(**context), subtype="html"
        )

        for upload in submission.attachments:
            message.add_attachment(
                upload.data,
                maintype=upload.maintype,
                subtype=upload.subtype,
                filename=upload.filename,
            )

        return message

    # =========================================================================
    # DELIVERY
    # =========================================================================

    def notify(self, submission: OrderSubmission, price: PriceQuote) -> OrderResult:
        """
        Send the notification for one order.

        No retry: a failed send is reported to the caller and dropped.

        Returns:
            OrderResult with status CONFIRMED

        Raises:
            DeliveryError: The transport failed
        """
        message = self.build_message(submission, price)

        logger.info(
            f"Sending order to {self.settings.recipient}: {submission.page_count} pages, "
            f"{submission.delivery.value}, {self.settings.currency}{price.price}"
        )

        try:
            self.transport.send(message)
        except DeliveryError as e:
            logger.error(f"Notification failed: {e.message}")
            raise

        logger.info("Order notification sent")
        return OrderResult(
            status=OrderStatus.CONFIRMED,
            order_id=submission.order_id,
            price=price.price,
            message="Order sent successfully.",
        )
