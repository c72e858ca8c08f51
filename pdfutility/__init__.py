"""In-memory PDF utility toolkit exposing modular pdfutility tools."""

from __future__ import annotations

from typing import Iterable, Sequence

from .admission import Admission, AdmissionController, BucketLimit
from .core.codec import PdfDocument, is_pdf_encrypted, open_document
from .core.config import Settings
from .core.encoding import decode_base64, encode_base64
from .core.exceptions import (
    CapacityError,
    CredentialError,
    DocumentCorruptError,
    EmptyInputError,
    InvalidPasswordError,
    NoPagesError,
    PasswordRequiredError,
    PayloadTooLargeError,
    PdfUtilityError,
    ProcessingError,
    RateLimitExceededError,
    StateError,
    StructuralError,
    UnsupportedFormatError,
    ValidationError,
)
from .core.model import ArchiveScheme, CompressionReport, RasterFormat
from .core.validator import looks_like_pdf, validate_upload
from .security import (
    STANDARD_PERMISSIONS,
    AlreadyEncryptedError,
    InvariantViolation,
    PermissionProfile,
    lock_pdf,
    unlock_pdf,
)
from .tools import load_builtin_plugins
from .tools.common.interfaces import OperationContext
from .tools.common.pipeline import ToolRegistry, register_tool, registry
from .tools.compressor import CompressionError, QualityRangeError, recompress_pdf
from .tools.merger import InsufficientInputsError, InvalidInputError, merge_pdfs
from .tools.packager import PackagingError, create_archive
from .tools.rasterizer import DpiRangeError, RenderError, rasterize_pdf
from .tools.splitter import PageRange, RangeBoundsError, RangeError, RangeParseError, parse_page_ranges, split_pdf

load_builtin_plugins()

__all__ = [
    "unlock_document",
    "lock_document",
    "split_document",
    "merge_documents",
    "rasterize_document",
    "recompress_document",
    "pack_outputs",
    "is_document_encrypted",
    "unlock_pdf",
    "lock_pdf",
    "split_pdf",
    "merge_pdfs",
    "rasterize_pdf",
    "recompress_pdf",
    "create_archive",
    "parse_page_ranges",
    "is_pdf_encrypted",
    "open_document",
    "looks_like_pdf",
    "validate_upload",
    "encode_base64",
    "decode_base64",
    "PdfDocument",
    "PageRange",
    "PermissionProfile",
    "STANDARD_PERMISSIONS",
    "RasterFormat",
    "ArchiveScheme",
    "CompressionReport",
    "Settings",
    "Admission",
    "AdmissionController",
    "BucketLimit",
    "OperationContext",
    "ToolRegistry",
    "registry",
    "register_tool",
    "PdfUtilityError",
    "ValidationError",
    "EmptyInputError",
    "PayloadTooLargeError",
    "NoPagesError",
    "UnsupportedFormatError",
    "RangeError",
    "RangeParseError",
    "RangeBoundsError",
    "DpiRangeError",
    "QualityRangeError",
    "InsufficientInputsError",
    "InvalidInputError",
    "CredentialError",
    "InvalidPasswordError",
    "PasswordRequiredError",
    "StateError",
    "AlreadyEncryptedError",
    "InvariantViolation",
    "StructuralError",
    "DocumentCorruptError",
    "CapacityError",
    "RateLimitExceededError",
    "ProcessingError",
    "PackagingError",
    "RenderError",
    "CompressionError",
]


def unlock_document(data: bytes, password: str) -> bytes:
    """Convenience wrapper around the unlock plugin."""

    context = OperationContext(data=data, config={"password": password})
    return registry.run("unlock", context)


def lock_document(
    data: bytes,
    password: str,
    *,
    owner_password: str | None = None,
    permissions: PermissionProfile | None = None,
) -> bytes:
    """Convenience wrapper around the lock plugin."""

    context = OperationContext(
        data=data,
        config={"password": password, "owner_password": owner_password, "permissions": permissions},
    )
    return registry.run("lock", context)


def split_document(data: bytes, ranges: str | Sequence[PageRange]) -> list[bytes]:
    """Convenience wrapper around the split plugin."""

    context = OperationContext(data=data, config={"ranges": ranges})
    return registry.run("split", context)


def merge_documents(inputs: Iterable[bytes], **config) -> bytes:
    """Convenience wrapper around the merge plugin."""

    context = OperationContext(inputs=list(inputs), config=config)
    return registry.run("merge", context)


def rasterize_document(
    data: bytes,
    image_format: str | RasterFormat = RasterFormat.PNG,
    dpi: int = 300,
) -> list[bytes]:
    """Convenience wrapper around the rasterize plugin."""

    context = OperationContext(data=data, config={"format": image_format, "dpi": dpi})
    return registry.run("rasterize", context)


def recompress_document(data: bytes, quality: float = 0.5) -> bytes:
    """Convenience wrapper around the compression plugin."""

    context = OperationContext(data=data, config={"quality": quality})
    return registry.run("compress", context)


def pack_outputs(
    buffers: Sequence[bytes],
    scheme: ArchiveScheme | str = ArchiveScheme.SPLIT,
    *,
    extension: str | None = None,
) -> bytes:
    """Convenience wrapper around the package plugin."""

    context = OperationContext(inputs=list(buffers), config={"scheme": scheme, "extension": extension})
    return registry.run("package", context)


def is_document_encrypted(data: bytes) -> bool:
    """Convenience wrapper around :func:`core.codec.is_pdf_encrypted`."""

    return is_pdf_encrypted(data)
