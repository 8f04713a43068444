"""Page counting for PDF uploads, resilient to malformed files."""

from __future__ import annotations

from io import BytesIO
from typing import Optional

from pypdf import PdfReader

from models.order import UploadedFile
from logging_config import get_logger

logger = get_logger(__name__)

PDF_MIME_TYPE = "application/pdf"


class PDFAnalyzer:
    """Reads the page count of uploaded PDFs for the order email."""

    def count_pages(self, upload: UploadedFile) -> Optional[int]:
        """Page count of a PDF upload, or None for other types and unreadable files."""
        if upload.content_type != PDF_MIME_TYPE:
            return None

        try:
            return len(PdfReader(BytesIO(upload.data)).pages)
        except Exception as exc:  # pypdf raises a variety of errors on malformed input
            logger.warning(f"Could not read {upload.filename} as PDF: {exc}")
            return None
