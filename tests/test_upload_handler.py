"""
Unit tests for upload validation.
"""

from io import BytesIO

import pytest
from werkzeug.datastructures import FileStorage, MultiDict

from config import UploadRules
from modules.upload_handler import format_size, validate_uploads


def _file(name, content_type, data=b"data", field="document"):
    return FileStorage(stream=BytesIO(data), filename=name, name=field, content_type=content_type)


@pytest.fixture
def rules():
    return UploadRules(max_bytes=1024)


@pytest.fixture
def files():
    return MultiDict([
        ("document", _file("report.pdf", "application/pdf", b"%PDF-1.4")),
        ("payment", _file("proof.png", "image/png", b"png", field="payment")),
    ])


class TestValidateUploads:

    def test_accepts_both_files(self, files, rules):
        check = validate_uploads(files, rules)

        assert check.ok
        assert check.error is None
        assert check.document.filename == "report.pdf"
        assert check.document.data == b"%PDF-1.4"
        assert check.payment.content_type == "image/png"

    def test_missing_document(self, rules):
        files = MultiDict([("payment", _file("proof.png", "image/png", field="payment"))])

        check = validate_uploads(files, rules)

        assert not check.ok
        assert check.error.field == "document"
        assert "document" in check.error.message

    def test_empty_file_input_counts_as_missing(self, rules):
        files = MultiDict([
            ("document", _file("", "application/octet-stream", b"")),
            ("payment", _file("proof.png", "image/png", field="payment")),
        ])

        check = validate_uploads(files, rules)

        assert check.error.field == "document"

    def test_missing_payment(self, rules):
        files = MultiDict([("document", _file("report.pdf", "application/pdf"))])

        check = validate_uploads(files, rules)

        assert check.error.field == "payment"
        assert "payment" in check.error.message

    def test_document_too_large(self, rules):
        files = MultiDict([
            ("document", _file("big.pdf", "application/pdf", b"x" * 1025)),
            ("payment", _file("proof.png", "image/png", field="payment")),
        ])

        check = validate_uploads(files, rules)

        assert check.error.field == "document"
        assert "1 KB" in check.error.message

    def test_document_at_limit_is_accepted(self, rules):
        files = MultiDict([
            ("document", _file("exact.pdf", "application/pdf", b"x" * 1024)),
            ("payment", _file("proof.png", "image/png", field="payment")),
        ])

        assert validate_uploads(files, rules).ok

    def test_payment_too_large(self, rules):
        files = MultiDict([
            ("document", _file("report.pdf", "application/pdf")),
            ("payment", _file("proof.png", "image/png", b"x" * 2048, field="payment")),
        ])

        check = validate_uploads(files, rules)

        assert check.error.field == "payment"

    def test_disallowed_document_type(self, rules):
        files = MultiDict([
            ("document", _file("script.exe", "application/x-msdownload")),
            ("payment", _file("proof.png", "image/png", field="payment")),
        ])

        check = validate_uploads(files, rules)

        assert check.error.field == "document"
        for label in ("PDF", "DOCX", "JPEG", "PNG"):
            assert label in check.error.message
        assert check.error.allowed == ["PDF", "DOCX", "JPEG", "PNG"]

    def test_docx_is_allowed(self, rules):
        docx = "application/vnd.openxmlformats-officedocument.wordprocessingml.document"
        files = MultiDict([
            ("document", _file("letter.docx", docx)),
            ("payment", _file("proof.png", "image/png", field="payment")),
        ])

        assert validate_uploads(files, rules).ok

    def test_payment_type_is_not_restricted(self, rules):
        files = MultiDict([
            ("document", _file("report.pdf", "application/pdf")),
            ("payment", _file("receipt.heic", "image/heic", field="payment")),
        ])

        assert validate_uploads(files, rules).ok

    def test_two_documents_rejected(self, rules):
        files = MultiDict([
            ("document", _file("a.pdf", "application/pdf")),
            ("document", _file("b.pdf", "application/pdf")),
            ("payment", _file("proof.png", "image/png", field="payment")),
        ])

        check = validate_uploads(files, rules)

        assert check.error.field == "document"
        assert "Only one" in check.error.message


class TestFormatSize:

    @pytest.mark.parametrize("size,expected", [
        (10 * 1024 * 1024, "10 MB"),
        (25 * 1024 * 1024, "25 MB"),
        (1024, "1 KB"),
        (1536, "1.5 KB"),
        (512, "512 bytes"),
    ])
    def test_format(self, size, expected):
        assert format_size(size) == expected

    def test_default_limit_message(self):
        files = MultiDict([
            ("document", _file("big.pdf", "application/pdf", b"x" * (10 * 1024 * 1024 + 1))),
            ("payment", _file("proof.png", "image/png", field="payment")),
        ])

        check = validate_uploads(files, UploadRules())

        assert "10 MB" in check.error.message
