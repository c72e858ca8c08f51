"""Lossy recompression of the raster images embedded in a PDF."""

from __future__ import annotations

from pypdf import PdfWriter
from PIL import Image

from ...core.codec import open_document, serialize
from ...core.model import CompressionReport
from ...core.utils import format_size, get_logger
from ..common.interfaces import BaseTool
from ..common.pipeline import register_tool
from .exceptions import CompressionError, QualityRangeError

LOGGER = get_logger("pdfutility.tools.compress")

MIN_QUALITY = 0.1
MAX_QUALITY = 1.0
BACKGROUND = (255, 255, 255)


def validate_quality(quality: object) -> float:
    if isinstance(quality, bool) or not isinstance(quality, (int, float)):
        raise QualityRangeError(quality, MIN_QUALITY, MAX_QUALITY)
    if quality < MIN_QUALITY or quality > MAX_QUALITY:
        raise QualityRangeError(quality, MIN_QUALITY, MAX_QUALITY)
    return float(quality)


def flatten_to_rgb(image: Image.Image) -> Image.Image:
    """Return ``image`` as opaque RGB, compositing transparency onto white."""

    if image.mode == "RGB":
        return image
    has_alpha = image.mode in ("RGBA", "LA", "PA", "La", "RGBa") or (
        image.mode == "P" and "transparency" in image.info
    )
    if not has_alpha:
        return image.convert("RGB")

    rgba = image.convert("RGBA")
    background = Image.new("RGB", rgba.size, BACKGROUND)
    background.paste(rgba, mask=rgba.getchannel("A"))
    return background


def _is_recompressible(image) -> bool:
    # Inline images live in the content stream and have no object to replace.
    return image.indirect_reference is not None


def _recompress_image(image, jpeg_quality: int) -> None:
    try:
        decoded = image.image
    except Exception as exc:  # pypdf/Pillow decode errors vary
        raise CompressionError(f"Unable to decode image {image.name}: {exc}") from exc
    if decoded is None:
        LOGGER.debug("Skipping image %s without decodable data", image.name)
        return

    try:
        image.replace(flatten_to_rgb(decoded), quality=jpeg_quality)
    except Exception as exc:  # Pillow encoder errors vary
        raise CompressionError(f"Unable to re-encode image {image.name}: {exc}") from exc


def recompress_pdf(data: bytes, quality: float) -> bytes:
    """Re-encode every embedded image of ``data`` as JPEG at ``quality``.

    Images are replaced in place under their original resource names; an
    image object shared by several pages is re-encoded once. All page
    annotations are removed as part of the run. The result is not guaranteed
    to be smaller than the input.
    """

    quality = validate_quality(quality)
    jpeg_quality = max(1, round(quality * 100))

    with open_document(data) as source:
        writer = PdfWriter(clone_from=source.reader)

        recoded: set[int] = set()
        for page_number, page in enumerate(writer.pages, start=1):
            for image in page.images:
                if not _is_recompressible(image):
                    LOGGER.debug("Skipping inline image %s on page %d", image.name, page_number)
                    continue
                object_id = image.indirect_reference.idnum
                if object_id in recoded:
                    continue
                _recompress_image(image, jpeg_quality)
                recoded.add(object_id)

        writer.remove_annotations(subtypes=None)
        compressed = serialize(writer)

    report = CompressionReport(len(data), len(compressed))
    LOGGER.info(
        "PDF compression completed. Original size: %s, compressed size: %s, reduction: %.2f%%",
        format_size(report.original_size),
        format_size(report.compressed_size),
        report.reduction_percent,
    )
    return compressed


@register_tool("compress")
class CompressTool(BaseTool):
    name = "compress"

    def run(self) -> bytes:
        context = self.context
        data = context.require_data()
        quality = context.config.get("quality", 0.5)

        LOGGER.debug("Compressing %d byte PDF with quality %s", len(data), quality)
        result = recompress_pdf(data, quality)
        context.resources["report"] = CompressionReport(len(data), len(result))
        context.resources["result"] = result
        return result


__all__ = [
    "MIN_QUALITY",
    "MAX_QUALITY",
    "validate_quality",
    "flatten_to_rgb",
    "recompress_pdf",
    "CompressTool",
]
