"""Split a PDF into one document per page range."""

from __future__ import annotations

from typing import Sequence

from pypdf import PdfWriter

from ...core.codec import copy_metadata, open_document, serialize
from ...core.exceptions import EmptyInputError, NoPagesError
from ...core.utils import get_logger
from ..common.interfaces import BaseTool
from ..common.pipeline import register_tool
from .exceptions import RangeBoundsError
from .ranges import PageRange, parse_page_ranges

LOGGER = get_logger("pdfutility.tools.split")


def split_pdf(data: bytes, ranges: str | Sequence[PageRange]) -> list[bytes]:
    """Build one serialized document per range of ``ranges``.

    ``ranges`` is either a range expression, resolved against the source page
    count, or already resolved :class:`PageRange` values. Output order follows
    range order; pages inside a range are ascending.
    """

    results: list[bytes] = []
    with open_document(data) as source:
        total_pages = source.page_count
        if isinstance(ranges, str):
            page_ranges = parse_page_ranges(ranges, total_pages=total_pages)
        else:
            page_ranges = list(ranges)
            for page_range in page_ranges:
                if page_range.end > total_pages:
                    token = f"{page_range.start}-{page_range.end}"
                    raise RangeBoundsError(token, page_range.start, page_range.end, total_pages)
        metadata = source.metadata()

        for page_range in page_ranges:
            writer = PdfWriter()
            for index in page_range.page_indices():
                writer.add_page(source.pages[index])
            copy_metadata(writer, metadata)
            results.append(serialize(writer))
            LOGGER.debug("Created split PDF for pages %s-%s", page_range.start, page_range.end)

    LOGGER.info("Split %d-page PDF into %d file(s)", total_pages, len(results))
    return results


@register_tool("split")
class SplitTool(BaseTool):
    name = "split"

    def run(self) -> list[bytes]:
        context = self.context
        data = context.require_data()
        ranges = context.config.get("ranges")
        if ranges is None or (isinstance(ranges, str) and not ranges.strip()):
            raise EmptyInputError("Page ranges cannot be empty")

        LOGGER.debug("Splitting %d byte PDF with ranges %r", len(data), ranges)
        results = split_pdf(data, ranges)
        if not results:
            raise NoPagesError("No pages matched the requested ranges")

        context.resources["result"] = results
        return results


__all__ = ["split_pdf", "SplitTool"]
