"""Shared fixtures for PrintOrderMail tests."""

from io import BytesIO

import pytest
from pypdf import PdfWriter

from app import create_app
from config import TestingConfig
from core.exceptions import DeliveryError


class RecordingTransport:
    """Mail transport that keeps sent messages instead of talking SMTP."""

    def __init__(self, error=None):
        self.sent = []
        self.error = error

    def send(self, message):
        self.sent.append(message)
        if self.error is not None:
            raise self.error


def make_pdf(pages: int = 3) -> bytes:
    """Build a small valid PDF with blank pages."""
    writer = PdfWriter()
    for _ in range(pages):
        writer.add_blank_page(width=595, height=842)
    buffer = BytesIO()
    writer.write(buffer)
    return buffer.getvalue()


@pytest.fixture
def transport():
    return RecordingTransport()


@pytest.fixture
def failing_transport():
    return RecordingTransport(error=DeliveryError("Connection refused by smtp.example.com"))


@pytest.fixture
def app(transport):
    return create_app(TestingConfig, transport=transport)


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def form_data():
    """A complete, valid submission (files as BytesIO so each test gets fresh streams)."""
    return {
        "fullname": "Asha Rao",
        "phone": "+91 98765 43210",
        "email": "asha@example.com",
        "pages": "120",
        "delivery": "1-day",
        "price": "216",
        "document": (BytesIO(b"\x89PNG\r\n\x1a\nfake-image"), "thesis.png", "image/png"),
        "payment": (BytesIO(b"payment screenshot"), "upi.jpg", "image/jpeg"),
    }
