"""Page rendering exposed through the pdfutility tools namespace."""

from __future__ import annotations

from .exceptions import DpiRangeError, RenderError
from .rasterize import MAX_DPI, MIN_DPI, RasterizeTool, rasterize_pdf, validate_dpi

__all__ = [
    "rasterize_pdf",
    "validate_dpi",
    "RasterizeTool",
    "MIN_DPI",
    "MAX_DPI",
    "DpiRangeError",
    "RenderError",
]
