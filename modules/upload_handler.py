"""
Upload validation for the order form.

The form carries two file slots:
    document - the file to print (PDF, DOCX, JPEG or PNG)
    payment  - a screenshot or scan of the payment (any type)

validate_uploads() never raises for a bad upload; it returns an UploadCheck
holding either both files or the ValidationError to show the submitter.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import List, Optional

from werkzeug.datastructures import FileStorage, MultiDict

from config import UploadRules
from core.exceptions import ValidationError
from models.order import UploadedFile
from logging_config import get_logger


# Module logger
logger = get_logger(__name__)

DOCUMENT_FIELD = "document"
PAYMENT_FIELD = "payment"


@dataclass(frozen=True)
class UploadCheck:
    """Result of validate_uploads(): both files, or the reason for rejection."""

    document: Optional[UploadedFile] = None
    payment: Optional[UploadedFile] = None
    error: Optional[ValidationError] = None

    @property
    def ok(self) -> bool:
        return self.error is None

    @classmethod
    def rejected(cls, error: ValidationError) -> "UploadCheck":
        return cls(error=error)


def format_size(num_bytes: int) -> str:
    """Human-readable size, e.g. '10 MB', '1 KB', '512 bytes'."""
    for unit, factor in (("MB", 1024 * 1024), ("KB", 1024)):
        if num_bytes >= factor:
            return f"{num_bytes / factor:g} {unit}"
    return f"{num_bytes} bytes"


def _present(files: MultiDict, field: str) -> List[FileStorage]:
    """Files actually chosen for a slot (browsers send an empty part otherwise)."""
    return [f for f in files.getlist(field) if f and f.filename]


def _read_single(
    files: MultiDict,
    field: str,
    rules: UploadRules,
    allowed_types: Optional[frozenset] = None,
) -> UploadedFile:
    """
    Read and check the one file in a slot.

    Raises:
        ValidationError: missing file, more than one file, too large,
            or MIME type not allowed
    """
    chosen = _present(files, field)

    if not chosen:
        raise ValidationError(field, f"Missing required file: {field}.")

    if len(chosen) > 1:
        raise ValidationError(field, f"Only one file may be uploaded as {field}.")

    storage = chosen[0]
    content_type = storage.mimetype or "application/octet-stream"

    if allowed_types is not None and content_type not in allowed_types:
        allowed = rules.allowed_labels
        raise ValidationError(
            field,
            f"Unsupported file type for {field} ({content_type}). "
            f"Allowed types: {', '.join(allowed)}.",
            allowed=allowed,
        )

    # Read one byte past the limit so oversized files are detected without
    # trusting the declared Content-Length.
    data = storage.stream.read(rules.max_bytes + 1)
    if len(data) > rules.max_bytes:
        raise ValidationError(
            field,
            f"File {field} is too large. Maximum size is {format_size(rules.max_bytes)}.",
        )

    return UploadedFile(
        field=field,
        filename=storage.filename,
        content_type=content_type,
        data=data,
    )


def validate_uploads(files: MultiDict, rules: UploadRules) -> UploadCheck:
    """
    Validate the document and payment uploads of one request.

    Args:
        files: request.files
        rules: Size limit and document type allowlist

    Returns:
        UploadCheck with both files on success, or with error set
    """
    try:
        document = _read_single(files, DOCUMENT_FIELD, rules, rules.document_types)
        payment = _read_single(files, PAYMENT_FIELD, rules)
    except ValidationError as e:
        logger.warning(f"Upload rejected ({e.field}): {e.message}")
        return UploadCheck.rejected(e)

    logger.debug(
        f"Uploads accepted: {document.filename} ({document.size} bytes), "
        f"{payment.filename} ({payment.size} bytes)"
    )
    return UploadCheck(document=document, payment=payment)
