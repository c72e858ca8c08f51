from __future__ import annotations

from io import BytesIO

import pytest
from pypdf import PdfReader

from pdfutility.core.exceptions import DocumentCorruptError, ValidationError
from pdfutility.tools import load_builtin_plugins
from pdfutility.tools.common.interfaces import OperationContext
from pdfutility.tools.common.pipeline import registry
from pdfutility.tools.merger import InsufficientInputsError, InvalidInputError, merge_pdfs


def setup_module(module):
    load_builtin_plugins()


def test_merge_concatenates_in_input_order(pdf_factory, page_widths) -> None:
    first = pdf_factory([101, 102])
    second = pdf_factory([201, 202, 203])

    merged = merge_pdfs([first, second])

    assert page_widths(merged) == [101, 102, 201, 202, 203]


def test_merge_copies_first_document_information(pdf_factory) -> None:
    merged = merge_pdfs([pdf_factory([72], title="First"), pdf_factory([72], title="Second")])

    reader = PdfReader(BytesIO(merged))
    assert reader.metadata is not None
    assert reader.metadata.get("/Title") == "First"


def test_merge_can_skip_metadata(pdf_factory) -> None:
    merged = merge_pdfs([pdf_factory([72], title="First"), pdf_factory([72])], metadata=False)

    reader = PdfReader(BytesIO(merged))
    assert reader.metadata is None or reader.metadata.get("/Title") is None


@pytest.mark.parametrize("count", [0, 1])
def test_merge_requires_two_inputs(sample_pdf: bytes, count: int) -> None:
    with pytest.raises(InsufficientInputsError) as excinfo:
        merge_pdfs([sample_pdf] * count)

    assert excinfo.value.count == count


def test_merge_reports_position_of_corrupt_input(sample_pdf: bytes) -> None:
    with pytest.raises(InvalidInputError) as excinfo:
        merge_pdfs([sample_pdf, sample_pdf, b"this is not a pdf at all"])

    assert excinfo.value.index == 2
    assert "position 3" in str(excinfo.value)
    assert isinstance(excinfo.value.__cause__, DocumentCorruptError)


def test_merge_rejects_document_without_pages(sample_pdf: bytes, empty_pdf: bytes) -> None:
    with pytest.raises(InvalidInputError) as excinfo:
        merge_pdfs([empty_pdf, sample_pdf])

    assert excinfo.value.index == 0
    assert isinstance(excinfo.value, ValidationError)


def test_merge_plugin_uses_inputs(pdf_factory, page_widths) -> None:
    context = OperationContext(inputs=[pdf_factory([110]), pdf_factory([120]), pdf_factory([130])])

    merged = registry.create("merge", context).run()

    assert page_widths(merged) == [110, 120, 130]
    assert context.resources["result"] == merged
