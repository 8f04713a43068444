"""Helper modules for the PrintOrderMail application."""

__all__ = [
    "order_form",
    "pdf_analyzer",
    "pricing",
    "upload_handler",
]
