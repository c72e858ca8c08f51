from __future__ import annotations

import sys
import zlib
from io import BytesIO
from pathlib import Path
from typing import Callable, Sequence

import pytest
from pypdf import PdfReader, PdfWriter
from pypdf.generic import DictionaryObject, NameObject, NumberObject, StreamObject

PROJECT_ROOT = Path(__file__).resolve().parents[1]
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))


def _to_bytes(writer: PdfWriter) -> bytes:
    buffer = BytesIO()
    writer.write(buffer)
    return buffer.getvalue()


def _page_widths(data: bytes) -> list[float]:
    reader = PdfReader(BytesIO(data))
    return [float(page.mediabox.width) for page in reader.pages]


@pytest.fixture()
def page_widths() -> Callable[[bytes], list[float]]:
    return _page_widths


@pytest.fixture()
def sample_pdf() -> bytes:
    writer = PdfWriter()
    for _ in range(5):
        writer.add_blank_page(width=200, height=200)
    writer.add_metadata({"/Producer": "pdfutility-tests", "/Title": "Sample"})
    return _to_bytes(writer)


@pytest.fixture()
def empty_pdf() -> bytes:
    return _to_bytes(PdfWriter())


@pytest.fixture()
def pdf_factory() -> Callable[..., bytes]:
    """Build a PDF whose pages are told apart by their widths."""

    def _create(widths: Sequence[int], title: str | None = None, height: int = 72) -> bytes:
        writer = PdfWriter()
        for width in widths:
            writer.add_blank_page(width=width, height=height)
        if title is not None:
            writer.add_metadata({"/Title": title})
        return _to_bytes(writer)

    return _create


@pytest.fixture()
def numbered_pdf(pdf_factory: Callable[..., bytes]) -> bytes:
    """Ten pages, page ``n`` being ``100 + n`` points wide."""

    return pdf_factory([100 + number for number in range(1, 11)], title="Numbered")


@pytest.fixture()
def image_pdf() -> Callable[..., bytes]:
    """Build a PDF whose pages draw a Flate encoded RGB image XObject."""

    def _create(pages: int = 1, shared: bool = False, size: int = 16, transparent: bool = False) -> bytes:
        writer = PdfWriter()

        def _soft_mask():
            mask = StreamObject()
            mask.update(
                {
                    NameObject("/Type"): NameObject("/XObject"),
                    NameObject("/Subtype"): NameObject("/Image"),
                    NameObject("/Width"): NumberObject(size),
                    NameObject("/Height"): NumberObject(size),
                    NameObject("/ColorSpace"): NameObject("/DeviceGray"),
                    NameObject("/BitsPerComponent"): NumberObject(8),
                    NameObject("/Filter"): NameObject("/FlateDecode"),
                }
            )
            mask._data = zlib.compress(bytes(size * size))
            return writer._add_object(mask)

        def _image_ref(color: tuple[int, int, int]):
            image_stream = StreamObject()
            image_stream.update(
                {
                    NameObject("/Type"): NameObject("/XObject"),
                    NameObject("/Subtype"): NameObject("/Image"),
                    NameObject("/Width"): NumberObject(size),
                    NameObject("/Height"): NumberObject(size),
                    NameObject("/ColorSpace"): NameObject("/DeviceRGB"),
                    NameObject("/BitsPerComponent"): NumberObject(8),
                    NameObject("/Filter"): NameObject("/FlateDecode"),
                }
            )
            image_stream._data = zlib.compress(bytes(color) * (size * size))
            if transparent:
                image_stream[NameObject("/SMask")] = _soft_mask()
            return writer._add_object(image_stream)

        shared_ref = _image_ref((200, 30, 30)) if shared else None
        for index in range(pages):
            page = writer.add_blank_page(width=200, height=200)
            image_ref = shared_ref or _image_ref((30, 30 * index % 255, 200))
            page[NameObject("/Resources")] = DictionaryObject(
                {NameObject("/XObject"): DictionaryObject({NameObject("/Im1"): image_ref})}
            )
            content = StreamObject()
            content._data = b"q 100 0 0 100 50 50 cm /Im1 Do Q"
            content[NameObject("/Length")] = NumberObject(len(content._data))
            page[NameObject("/Contents")] = writer._add_object(content)
        return _to_bytes(writer)

    return _create
