"""
Order submission route.

POST /send walks one submission through:

    AWAITING_SUBMISSION -> VALIDATING -> (NOTIFYING | REJECTED)
    NOTIFYING -> (CONFIRMED | FAILED)

REJECTED renders a 400 page, FAILED a 500 page, CONFIRMED the order summary.
Nothing is stored and nothing is retried.
"""

from flask import (
    Blueprint,
    current_app,
    render_template,
    request,
    url_for,
)

from core.exceptions import DeliveryError, ValidationError
from models.order_result import OrderResult, OrderStatus
from modules.order_form import build_submission
from modules.pricing import quote
from modules.upload_handler import validate_uploads
from logging_config import get_logger, order_context


# Module logger
logger = get_logger(__name__)

order_bp = Blueprint("order", __name__)


def _render_error(result: OrderResult, title: str):
    return (
        render_template(
            "error.html",
            title=title,
            result=result.to_dict(),
            retry_url=url_for("main.order_form"),
        ),
        result.status.http_status,
    )


def _reject(error: ValidationError):
    logger.warning(f"Order rejected ({error.field}): {error.message}")
    result = OrderResult(status=OrderStatus.REJECTED, message=error.message)
    return _render_error(result, "Please check your order")


@order_bp.route("/send", methods=["POST"])
def send():
    """
    Validate, price and relay one order.

    The browser also posts the price it displayed; that value is only echoed
    in the email next to the server-side price, never used for the quote.
    """
    logger.debug(f"{OrderStatus.VALIDATING.value}: {request.content_length} bytes")

    # STEP 1: Uploads (document + payment proof)
    uploads = validate_uploads(request.files, current_app.config["UPLOAD_RULES"])
    if not uploads.ok:
        return _reject(uploads.error)

    # STEP 2: Text fields
    try:
        submission = build_submission(
            request.form, uploads, current_app.config.get("PDF_ANALYZER")
        )
    except ValidationError as e:
        return _reject(e)

    with order_context(submission.order_id):
        return _price_and_notify(submission)


def _price_and_notify(submission):
    # STEP 3: Price on the server
    price = quote(submission.page_count, submission.delivery)
    if submission.quoted_price is not None and submission.quoted_price != price.price:
        logger.warning(
            f"Client price {submission.quoted_price} differs from computed price {price.price}"
        )

    # STEP 4: Notify
    logger.info(OrderStatus.NOTIFYING.value)
    notifier = current_app.config["ORDER_NOTIFIER"]
    try:
        result = notifier.notify(submission, price)
    except DeliveryError as e:
        logger.error(f"Order failed: {e}")
        failed = OrderResult(
            status=OrderStatus.FAILED,
            order_id=submission.order_id,
            price=price.price,
            message=e.message,
        )
        return _render_error(failed, "We could not send your order")

    logger.info(result.status.value)
    return render_template(
        "confirmation.html",
        order=submission.summary(),
        quote=price.to_dict(),
        result=result.to_dict(),
        currency=current_app.config.get("CURRENCY_SYMBOL", "₹"),
    )
