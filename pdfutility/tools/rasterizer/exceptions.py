"""Custom exceptions for :mod:`pdfutility.tools.rasterizer`."""

from __future__ import annotations

from ...core.exceptions import ProcessingError, ValidationError


class DpiRangeError(ValidationError):
    """Raised when the requested resolution is outside the supported range."""

    def __init__(self, dpi: object, minimum: int, maximum: int) -> None:
        self.dpi = dpi
        super().__init__(f"DPI must be between {minimum} and {maximum}, got {dpi!r}")


class RenderError(ProcessingError):
    """Raised when a page cannot be rendered or encoded."""


__all__ = ["DpiRangeError", "RenderError"]
