"""Compression utilities exposed through the pdfutility tools namespace."""

from __future__ import annotations

from ...core.model import CompressionReport
from .compress import MAX_QUALITY, MIN_QUALITY, CompressTool, flatten_to_rgb, recompress_pdf, validate_quality
from .exceptions import CompressionError, QualityRangeError

__all__ = [
    "recompress_pdf",
    "validate_quality",
    "flatten_to_rgb",
    "CompressTool",
    "CompressionReport",
    "MIN_QUALITY",
    "MAX_QUALITY",
    "CompressionError",
    "QualityRangeError",
]
