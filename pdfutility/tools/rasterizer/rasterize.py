"""Render PDF pages to encoded images."""

from __future__ import annotations

from io import BytesIO

import pypdfium2 as pdfium
import pypdfium2.raw as pdfium_c
from PIL import Image

from ...core.codec import open_document
from ...core.exceptions import DocumentCorruptError, EmptyInputError, NoPagesError, PasswordRequiredError
from ...core.model import RasterFormat
from ...core.utils import get_logger
from ..common.interfaces import BaseTool
from ..common.pipeline import register_tool
from .exceptions import DpiRangeError, RenderError

LOGGER = get_logger("pdfutility.tools.rasterize")

MIN_DPI = 72
MAX_DPI = 600
POINTS_PER_INCH = 72.0


def validate_dpi(dpi: object) -> int:
    if isinstance(dpi, bool) or not isinstance(dpi, int):
        raise DpiRangeError(dpi, MIN_DPI, MAX_DPI)
    if dpi < MIN_DPI or dpi > MAX_DPI:
        raise DpiRangeError(dpi, MIN_DPI, MAX_DPI)
    return dpi


def _open_pdfium(data: bytes) -> pdfium.PdfDocument:
    try:
        return pdfium.PdfDocument(data)
    except pdfium.PdfiumError as exc:
        if getattr(exc, "err_code", None) == pdfium_c.FPDF_ERR_PASSWORD:
            raise PasswordRequiredError("PDF is password protected") from exc
        raise DocumentCorruptError(f"Unable to read PDF: {exc}") from exc


def encode_image(image: Image.Image, image_format: RasterFormat, dpi: int) -> bytes:
    buffer = BytesIO()
    try:
        image.save(buffer, format=image_format.pil_format, dpi=(dpi, dpi))
    except (OSError, ValueError) as exc:
        raise RenderError(f"Unable to encode page as {image_format.value}: {exc}") from exc
    return buffer.getvalue()


def rasterize_pdf(data: bytes, image_format: str | RasterFormat, dpi: int) -> list[bytes]:
    """Render every page of ``data`` at ``dpi`` and encode it as ``image_format``.

    Parameters are validated before the document is opened. Pages are
    rendered in full colour, one encoded buffer per page, in page order.
    """

    fmt = RasterFormat.parse(image_format)
    dpi = validate_dpi(dpi)
    if not data:
        raise EmptyInputError("Document cannot be empty")
    # Classifies password and parse failures before pdfium sees the bytes.
    open_document(data).close()

    scale = dpi / POINTS_PER_INCH
    images: list[bytes] = []
    document = _open_pdfium(data)
    try:
        for index in range(len(document)):
            page = document[index]
            try:
                bitmap = page.render(scale=scale)
                image = bitmap.to_pil().convert("RGB")
            except pdfium.PdfiumError as exc:
                raise RenderError(f"Unable to render page {index + 1}: {exc}") from exc
            finally:
                page.close()
            images.append(encode_image(image, fmt, dpi))
            LOGGER.debug("Converted page %d to %s image", index + 1, fmt.value)
    finally:
        document.close()

    LOGGER.info("PDF to image conversion completed. Generated %d images", len(images))
    return images


@register_tool("rasterize")
class RasterizeTool(BaseTool):
    name = "rasterize"

    def run(self) -> list[bytes]:
        context = self.context
        data = context.require_data()
        image_format = RasterFormat.parse(context.config.get("format", RasterFormat.PNG))
        dpi = context.config.get("dpi", 300)

        LOGGER.debug("Rasterizing %d byte PDF to %s at %s DPI", len(data), image_format.value, dpi)
        images = rasterize_pdf(data, image_format, dpi)
        if not images:
            raise NoPagesError("No pages found in PDF")

        context.resources["format"] = image_format
        context.resources["result"] = images
        return images


__all__ = ["MIN_DPI", "MAX_DPI", "validate_dpi", "encode_image", "rasterize_pdf", "RasterizeTool"]
