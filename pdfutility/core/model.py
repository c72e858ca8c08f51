"""Shared domain models used across pdfutility tools."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from .exceptions import UnsupportedFormatError, ValidationError


class RasterFormat(str, Enum):
    """Image formats a page can be rasterized to."""

    PNG = "PNG"
    JPEG = "JPEG"
    JPG = "JPG"
    GIF = "GIF"
    BMP = "BMP"

    @classmethod
    def parse(cls, value: "str | RasterFormat") -> "RasterFormat":
        if isinstance(value, RasterFormat):
            return value
        try:
            return cls(str(value).strip().upper())
        except ValueError:
            raise UnsupportedFormatError(value) from None

    @property
    def pil_format(self) -> str:
        """Name of the Pillow encoder for this format."""

        return "JPEG" if self is RasterFormat.JPG else self.value

    @property
    def extension(self) -> str:
        return self.value.lower()


class ArchiveScheme(str, Enum):
    """Entry naming used when several outputs are bundled into one archive."""

    SPLIT = "split_page_{index}.pdf"
    IMAGES = "page_{index}.{extension}"

    def entry_name(self, index: int, extension: str | None = None) -> str:
        if self is ArchiveScheme.IMAGES and not extension:
            raise ValidationError("Image archives need a file extension")
        return self.value.format(index=index, extension=(extension or "").lower())


@dataclass(frozen=True, slots=True)
class CompressionReport:
    """Before/after sizes of a recompression run."""

    original_size: int
    compressed_size: int

    @property
    def bytes_saved(self) -> int:
        return self.original_size - self.compressed_size

    @property
    def reduction_percent(self) -> float:
        if self.original_size == 0:
            return 0.0
        return round(self.bytes_saved * 100.0 / self.original_size, 2)


__all__ = ["RasterFormat", "ArchiveScheme", "CompressionReport"]
