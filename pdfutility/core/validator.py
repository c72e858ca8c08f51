"""Validation helpers shared by pdfutility tools."""

from __future__ import annotations

from pathlib import PurePath

from .exceptions import EmptyInputError, PayloadTooLargeError, ValidationError

PDF_MEDIA_TYPE = "application/pdf"
PDF_HEADER = b"%PDF-"
PDF_EOF_MARKER = b"%%EOF"


def looks_like_pdf(data: bytes | None) -> bool:
    """Cheap signature check: a ``%PDF-`` header and an ``%%EOF`` marker."""

    if not data or len(data) < 8:
        return False
    return data.startswith(PDF_HEADER) and PDF_EOF_MARKER in data


def ensure_size_acceptable(data: bytes, max_bytes: int) -> bytes:
    if len(data) > max_bytes:
        raise PayloadTooLargeError(len(data), max_bytes)
    return data


def validate_upload(
    filename: str | None,
    content_type: str | None,
    data: bytes | None,
    *,
    max_bytes: int | None = None,
) -> bytes:
    """Validate an uploaded document before it reaches the pipeline.

    The filename extension and declared media type are only checked when the
    client sent them. The payload must be non-empty, within ``max_bytes`` and
    carry a PDF signature.
    """

    label = filename or "upload"
    if not data:
        raise EmptyInputError(f"File '{label}' is empty.")
    if content_type and content_type.split(";")[0].strip() not in (PDF_MEDIA_TYPE, "application/octet-stream"):
        raise ValidationError(f"Invalid content type for '{label}': {content_type}")
    if filename and PurePath(filename).suffix.lower() != ".pdf":
        raise ValidationError(f"Invalid file extension: {filename}")
    if max_bytes is not None:
        ensure_size_acceptable(data, max_bytes)
    if not looks_like_pdf(data):
        raise ValidationError(f"Invalid PDF found for file: {label}")
    return data


__all__ = [
    "PDF_MEDIA_TYPE",
    "looks_like_pdf",
    "ensure_size_acceptable",
    "validate_upload",
]
