"""Split utilities exposed through the pdfutility tools namespace."""

from __future__ import annotations

from .exceptions import RangeBoundsError, RangeError, RangeParseError
from .ranges import PageRange, parse_page_ranges
from .split import SplitTool, split_pdf

__all__ = [
    "split_pdf",
    "SplitTool",
    "PageRange",
    "parse_page_ranges",
    "RangeError",
    "RangeParseError",
    "RangeBoundsError",
]
