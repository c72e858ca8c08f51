"""Merge functionality for the :mod:`pdfutility.tools.merger` package."""

from __future__ import annotations

from typing import Iterable

from pypdf import PdfWriter

from ...core.codec import PdfDocument, copy_metadata, open_document, serialize
from ...core.exceptions import PdfUtilityError
from ...core.utils import get_logger
from ..common.interfaces import BaseTool
from ..common.pipeline import register_tool
from .exceptions import InsufficientInputsError, InvalidInputError

LOGGER = get_logger("pdfutility.tools.merge")

MIN_INPUTS = 2


def _load_input(index: int, data: bytes) -> PdfDocument:
    try:
        document = open_document(data)
    except PdfUtilityError as exc:
        LOGGER.error("Merge input %d is not a valid PDF: %s", index + 1, exc)
        raise InvalidInputError(index, str(exc)) from exc

    try:
        page_count = document.page_count
    except PdfUtilityError as exc:
        document.close()
        raise InvalidInputError(index, str(exc)) from exc

    if page_count == 0:
        document.close()
        raise InvalidInputError(index, "PDF contains no pages")
    return document


def merge_pdfs(inputs: Iterable[bytes], *, metadata: bool = True) -> bytes:
    """Concatenate ``inputs`` into a single PDF and return its bytes.

    Every input is validated before any page is copied, so one bad input
    aborts the merge without partial output. Pages keep input order: all of
    the first document, then all of the second, and so on.

    Args:
        inputs: Serialized PDF documents, at least two.
        metadata: When ``True`` the document information of the first input
            is copied into the merged document.

    Raises:
        InsufficientInputsError: Fewer than two inputs were given.
        InvalidInputError: An input could not be opened or has no pages.
    """

    sources = list(inputs)
    if len(sources) < MIN_INPUTS:
        raise InsufficientInputsError(len(sources))

    documents: list[PdfDocument] = []
    try:
        for index, data in enumerate(sources):
            documents.append(_load_input(index, data))

        writer = PdfWriter()
        for index, document in enumerate(documents):
            for page_index, page in enumerate(document.pages):
                LOGGER.debug("Adding page %s from input %s", page_index + 1, index + 1)
                writer.add_page(page)

        if metadata:
            copy_metadata(writer, documents[0].metadata())

        merged = serialize(writer)
    finally:
        for document in documents:
            document.close()

    LOGGER.info("Merged %d PDFs into %d bytes", len(sources), len(merged))
    return merged


@register_tool("merge")
class MergeTool(BaseTool):
    name = "merge"

    def run(self) -> bytes:
        context = self.context
        inputs = list(context.inputs)
        if not inputs and context.data:
            inputs = [context.data]

        LOGGER.debug("Merging %d input(s)", len(inputs))
        result = merge_pdfs(inputs, metadata=context.config.get("metadata", True))
        context.resources["result"] = result
        return result


__all__ = ["merge_pdfs", "MergeTool"]
