"""
Services layer for PrintOrderMail.

- OrderNotifier: composes the order email and sends it through the
  mail transport (one message per confirmed order, never retried)
"""

from .notifier import OrderNotifier, MailTransport

__all__ = [
    "OrderNotifier",
    "MailTransport",
]
