"""
API routes for AJAX requests.

Provides JSON endpoints for:
- Live price preview while the order form is being filled in
"""

from flask import Blueprint, jsonify, request

from core.exceptions import ValidationError
from modules.order_form import parse_pages
from modules.pricing import quote

api_bp = Blueprint("api", __name__, url_prefix="/api")


@api_bp.route("/price", methods=["GET"])
def price():
    """
    Price preview.

    Query args:
        pages: number of pages (required, whole number >= 0)
        delivery: standard | 1-day | instant (default standard)

    Returns:
        JSON breakdown {pages, delivery, rate, base, multiplier, price},
        or {error, field} with status 400
    """
    try:
        pages = parse_pages(request.args.get("pages"))
    except ValidationError as e:
        return jsonify({"error": e.message, "field": e.field}), 400

    return jsonify(quote(pages, request.args.get("delivery")).to_dict())
