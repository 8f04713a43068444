"""
Data models for PrintOrderMail.

This module contains immutable dataclasses for:
- OrderSubmission: one validated order, alive for a single request
- UploadedFile: an in-memory upload (document or payment proof)
- DeliveryTier: standard / 1-day / instant
- OrderResult / OrderStatus: where a submission ended up
"""

from .order import DeliveryTier, OrderSubmission, UploadedFile
from .order_result import OrderResult, OrderStatus

__all__ = [
    # Order models
    "DeliveryTier",
    "OrderSubmission",
    "UploadedFile",
    # Result models
    "OrderResult",
    "OrderStatus",
]
