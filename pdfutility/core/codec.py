"""Thin document codec boundary built on :mod:`pypdf`.

Every operation opens its own :class:`PdfDocument` from raw bytes and closes
it before returning. Password failures are classified from pypdf's
:class:`~pypdf.PasswordType` result rather than from exception messages.
"""

from __future__ import annotations

from io import BytesIO
from typing import Any

from pypdf import PasswordType, PdfReader, PdfWriter
from pypdf.errors import WrongPasswordError

from .exceptions import (
    DocumentCorruptError,
    EmptyInputError,
    InvalidPasswordError,
    PasswordRequiredError,
)
from .utils import get_logger

LOGGER = get_logger("pdfutility.codec")


class PdfDocument:
    """A parsed PDF owned by a single operation call."""

    def __init__(self, reader: PdfReader, stream: BytesIO, source: bytes) -> None:
        self.reader = reader
        self.source = source
        self._stream = stream

    @property
    def is_encrypted(self) -> bool:
        return bool(self.reader.is_encrypted)

    @property
    def pages(self):
        return self.reader.pages

    @property
    def page_count(self) -> int:
        try:
            return len(self.reader.pages)
        except Exception as exc:  # pypdf exceptions vary
            raise DocumentCorruptError(f"Unable to read page tree: {exc}") from exc

    def metadata(self) -> dict[str, str]:
        """Return the document information dictionary as plain strings."""

        metadata = self.reader.metadata
        if not metadata:
            return {}
        return {
            key: str(value)
            for key, value in metadata.items()
            if isinstance(key, str) and value is not None
        }

    def close(self) -> None:
        self._stream.close()

    def __enter__(self) -> "PdfDocument":
        return self

    def __exit__(self, *exc_info: Any) -> None:
        self.close()


def open_document(
    data: bytes,
    password: str | None = None,
    *,
    decrypt: bool = True,
) -> PdfDocument:
    """Parse ``data`` into a :class:`PdfDocument`.

    Encrypted documents are decrypted with ``password`` (or the empty user
    password when none is given) unless ``decrypt`` is ``False``, in which
    case only the encryption state can be inspected.

    Raises:
        EmptyInputError: ``data`` is empty.
        DocumentCorruptError: pypdf cannot parse the bytes.
        InvalidPasswordError: ``password`` was given and rejected.
        PasswordRequiredError: no password was given and the empty one failed.
    """

    if not data:
        raise EmptyInputError("Document cannot be empty")

    stream = BytesIO(data)
    try:
        reader = PdfReader(stream)
    except WrongPasswordError as exc:  # pragma: no cover - no password passed here
        stream.close()
        raise InvalidPasswordError("Invalid password provided for PDF") from exc
    except Exception as exc:  # pypdf exceptions vary
        stream.close()
        raise DocumentCorruptError(f"Unable to read PDF: {exc}") from exc

    document = PdfDocument(reader, stream, data)
    if decrypt and document.is_encrypted:
        try:
            status = reader.decrypt(password or "")
        except Exception as exc:  # decrypt errors vary
            document.close()
            raise DocumentCorruptError(f"Unable to decrypt PDF: {exc}") from exc
        if status == PasswordType.NOT_DECRYPTED:
            document.close()
            if password:
                raise InvalidPasswordError("Invalid password provided for PDF")
            raise PasswordRequiredError("PDF is password protected")
        LOGGER.debug("Decrypted PDF with %s password", status.name.lower())
    return document


def is_pdf_encrypted(data: bytes) -> bool:
    """Return ``True`` when ``data`` is an encrypted PDF document."""

    with open_document(data, decrypt=False) as document:
        return document.is_encrypted


def serialize(writer: PdfWriter) -> bytes:
    """Write ``writer`` into a fresh byte string."""

    buffer = BytesIO()
    try:
        writer.write(buffer)
        return buffer.getvalue()
    finally:
        buffer.close()


def copy_metadata(writer: PdfWriter, metadata: dict[str, str]) -> None:
    if metadata:
        writer.add_metadata(metadata)


__all__ = [
    "PdfDocument",
    "open_document",
    "is_pdf_encrypted",
    "serialize",
    "copy_metadata",
]
