"""Exception hierarchy shared by every pdfutility operation.

The hierarchy is split by failure class so callers can react without
inspecting messages:

* :class:`ValidationError` - the caller supplied something unusable.
* :class:`CredentialError` - a password was missing or wrong.
* :class:`StateError` - the document is not in the state the operation needs.
* :class:`StructuralError` - the bytes could not be parsed as a document.
* :class:`CapacityError` - the caller was rejected before any work started.
* :class:`ProcessingError` - an operation failed while producing output.
"""

from __future__ import annotations


class PdfUtilityError(Exception):
    """Base exception for all errors raised by :mod:`pdfutility`."""


class ValidationError(PdfUtilityError, ValueError):
    """Raised when user supplied input or parameters are invalid."""


class EmptyInputError(ValidationError):
    """Raised when a required document, password or expression is empty."""


class PayloadTooLargeError(ValidationError):
    """Raised when an upload exceeds the configured size limit."""

    def __init__(self, size: int, limit: int) -> None:
        self.size = size
        self.limit = limit
        super().__init__(f"Payload of {size} bytes exceeds the limit of {limit} bytes")


class NoPagesError(ValidationError):
    """Raised when an operation would produce no pages or images."""


class UnsupportedFormatError(ValidationError):
    """Raised when an output image format is not supported."""

    def __init__(self, value: object) -> None:
        self.value = value
        super().__init__(f"Unsupported image format: {value!r}. Use PNG, JPEG, JPG, GIF or BMP")


class CredentialError(PdfUtilityError):
    """Base class for password related failures."""


class InvalidPasswordError(CredentialError):
    """Raised when the supplied password does not open the document."""


class PasswordRequiredError(CredentialError):
    """Raised when a document needs a password that was not supplied."""


class StateError(PdfUtilityError):
    """Raised when the document encryption state does not suit the operation."""


class StructuralError(PdfUtilityError):
    """Raised when the codec cannot interpret the input bytes."""


class DocumentCorruptError(StructuralError):
    """Raised when the input is not a readable PDF document."""


class CapacityError(PdfUtilityError):
    """Raised when a caller is rejected by admission control."""


class RateLimitExceededError(CapacityError):
    """Raised when a client exhausted the token bucket for an endpoint."""

    def __init__(self, client_key: str, endpoint: str) -> None:
        self.client_key = client_key
        self.endpoint = endpoint
        super().__init__(f"Too many requests to {endpoint}. Please try again later.")


class ProcessingError(PdfUtilityError):
    """Raised when an operation fails while building its output."""


__all__ = [
    "PdfUtilityError",
    "ValidationError",
    "EmptyInputError",
    "PayloadTooLargeError",
    "NoPagesError",
    "UnsupportedFormatError",
    "CredentialError",
    "InvalidPasswordError",
    "PasswordRequiredError",
    "StateError",
    "StructuralError",
    "DocumentCorruptError",
    "CapacityError",
    "RateLimitExceededError",
    "ProcessingError",
]
