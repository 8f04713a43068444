"""
Main routes (landing page, order form).

Static pages with no side effects.
"""

from flask import Blueprint, current_app, render_template

from models.order import DeliveryTier
from modules.pricing import INDICATIVE_PAGES, indicative_price
from modules.upload_handler import format_size

main_bp = Blueprint("main", __name__)


@main_bp.route("/", methods=["GET"])
def index():
    """Landing page."""
    return render_template("index.html")


@main_bp.route("/form", methods=["GET"])
def order_form():
    """
    Order form, seeded with the indicative price for a small standard job.

    The price shown is recomputed in the browser as the customer edits the
    form (see /api/price) and recomputed again on the server at /send.
    """
    return render_template(
        "form.html",
        price=indicative_price(),
        pages=INDICATIVE_PAGES,
        tiers=list(DeliveryTier),
        currency=current_app.config.get("CURRENCY_SYMBOL", "₹"),
        upload_rules=current_app.config["UPLOAD_RULES"],
        max_upload=format_size(current_app.config["UPLOAD_RULES"].max_bytes),
    )
