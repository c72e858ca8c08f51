"""Custom exception types for :mod:`pdfutility.tools.compressor`."""

from __future__ import annotations

from ...core.exceptions import ProcessingError, ValidationError


class QualityRangeError(ValidationError):
    """Raised when the requested quality factor is outside ``[0.1, 1.0]``."""

    def __init__(self, quality: object, minimum: float, maximum: float) -> None:
        self.quality = quality
        super().__init__(f"Quality must be between {minimum} and {maximum}, got {quality!r}")


class CompressionError(ProcessingError):
    """Raised when an embedded image cannot be decoded or re-encoded."""


__all__ = ["QualityRangeError", "CompressionError"]
