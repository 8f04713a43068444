"""
Integration tests for the HTTP routes, using the Flask test client and a
recording mail transport.
"""

from io import BytesIO

import pytest

from app import create_app
from config import TestingConfig

from conftest import RecordingTransport, make_pdf


def _post(client, data):
    return client.post("/send", data=data, content_type="multipart/form-data")


class TestPages:

    def test_index(self, client):
        response = client.get("/")

        assert response.status_code == 200
        assert b"Start an order" in response.data

    def test_form_has_indicative_price(self, client):
        response = client.get("/form")
        html = response.get_data(as_text=True)

        assert response.status_code == 200
        assert 'name="price"' in html
        assert 'value="100"' in html
        assert 'value="1-day"' in html
        assert 'enctype="multipart/form-data"' in html

    def test_unknown_page(self, client):
        response = client.get("/nope")

        assert response.status_code == 404
        assert b"Page not found" in response.data

    def test_send_requires_post(self, client):
        assert client.get("/send").status_code == 405


class TestSendConfirmed:

    def test_valid_order(self, client, transport, form_data):
        response = _post(client, form_data)
        html = response.get_data(as_text=True)

        assert response.status_code == 200
        assert "Asha Rao" in html
        assert "+91 98765 43210" in html
        assert "216" in html
        assert len(transport.sent) == 1
        assert len(list(transport.sent[0].iter_attachments())) == 2

    def test_server_price_wins_over_client_price(self, client, transport, form_data):
        form_data["price"] = "1"

        response = _post(client, form_data)
        html = response.get_data(as_text=True)

        assert response.status_code == 200
        assert "₹216" in html
        text = transport.sent[0].get_body(preferencelist=("plain",)).get_content()
        assert "Price: ₹216" in text
        assert "Price shown to customer: ₹1" in text

    def test_pdf_page_count_in_email(self, client, transport, form_data):
        form_data["document"] = (BytesIO(make_pdf(2)), "doc.pdf", "application/pdf")
        form_data["pages"] = "2"

        response = _post(client, form_data)

        assert response.status_code == 200
        text = transport.sent[0].get_body(preferencelist=("plain",)).get_content()
        assert "Pages in PDF: 2" in text


class TestSendRejected:

    def test_missing_document(self, client, transport, form_data):
        del form_data["document"]

        response = _post(client, form_data)

        assert response.status_code == 400
        assert b"document" in response.data
        assert transport.sent == []

    def test_missing_payment(self, client, transport, form_data):
        del form_data["payment"]

        response = _post(client, form_data)

        assert response.status_code == 400
        assert b"payment" in response.data
        assert transport.sent == []

    def test_oversized_document(self, client, transport, form_data):
        form_data["document"] = (BytesIO(b"x" * 2048), "big.png", "image/png")

        response = _post(client, form_data)

        assert response.status_code == 400
        assert b"1 KB" in response.data
        assert transport.sent == []

    def test_disallowed_type(self, client, transport, form_data):
        form_data["document"] = (BytesIO(b"MZ"), "setup.exe", "application/x-msdownload")

        response = _post(client, form_data)
        html = response.get_data(as_text=True)

        assert response.status_code == 400
        assert "PDF, DOCX, JPEG, PNG" in html
        assert transport.sent == []

    def test_missing_name(self, client, transport, form_data):
        form_data["fullname"] = ""

        response = _post(client, form_data)

        assert response.status_code == 400
        assert b"fullname" in response.data
        assert transport.sent == []

    @pytest.mark.parametrize("email", ["asha@[example", "asha@example.com,other@example.com"])
    def test_malformed_email(self, client, transport, form_data, email):
        form_data["email"] = email

        response = _post(client, form_data)

        assert response.status_code == 400
        assert b"valid email address" in response.data
        assert transport.sent == []

    def test_bad_pages(self, client, transport, form_data):
        form_data["pages"] = "many"

        response = _post(client, form_data)

        assert response.status_code == 400
        assert b"whole number" in response.data
        assert transport.sent == []

    def test_rejection_links_back_to_form(self, client, form_data):
        del form_data["document"]

        response = _post(client, form_data)

        assert b'href="/form"' in response.data

    def test_request_body_over_limit(self, transport, form_data):
        class TinyBodyConfig(TestingConfig):
            MAX_CONTENT_LENGTH = 512

        client = create_app(TinyBodyConfig, transport=transport).test_client()
        form_data["document"] = (BytesIO(b"x" * 1000), "doc.png", "image/png")

        response = _post(client, form_data)

        assert response.status_code == 413
        assert b"512 bytes" in response.data
        assert transport.sent == []


class TestSendFailed:

    def test_transport_failure(self, failing_transport, form_data):
        client = create_app(TestingConfig, transport=failing_transport).test_client()

        response = _post(client, form_data)
        html = response.get_data(as_text=True)

        assert response.status_code == 500
        assert "Connection refused by smtp.example.com" in html
        assert 'href="/form"' in html
        assert len(failing_transport.sent) == 1


class TestPriceApi:

    def test_price_preview(self, client):
        response = client.get("/api/price?pages=120&delivery=1-day")

        assert response.status_code == 200
        assert response.get_json()["price"] == 216
        assert response.get_json()["rate"] == 1.5

    def test_default_delivery(self, client):
        response = client.get("/api/price?pages=10")

        assert response.get_json()["price"] == 20
        assert response.get_json()["delivery"] == "standard"

    @pytest.mark.parametrize("pages", ["", "abc", "-1"])
    def test_bad_pages(self, client, pages):
        response = client.get(f"/api/price?pages={pages}")

        assert response.status_code == 400
        assert response.get_json()["field"] == "pages"
