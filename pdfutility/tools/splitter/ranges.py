"""Page range expressions for :mod:`pdfutility.tools.splitter`."""

from __future__ import annotations

from dataclasses import dataclass
from typing import List

from .exceptions import RangeBoundsError, RangeParseError


@dataclass(frozen=True)
class PageRange:
    """Represents an inclusive, 1-based page range."""

    start: int
    end: int

    def __post_init__(self) -> None:
        if self.start < 1 or self.end < 1:
            raise ValueError("Page numbers must be positive integers")
        if self.start > self.end:
            raise ValueError("Page range start must be less than or equal to end")

    def __len__(self) -> int:
        return self.end - self.start + 1

    def page_indices(self) -> range:
        """Zero-based indices of the pages covered, in ascending order."""

        return range(self.start - 1, self.end)


def _parse_int(value: str, token: str) -> int:
    digits = value.strip()
    if not (digits.isascii() and digits.isdigit()):
        raise RangeParseError(token)
    return int(digits)


def parse_page_ranges(expression: str, *, total_pages: int) -> List[PageRange]:
    """Parse ``expression`` into a list of :class:`PageRange` instances.

    Args:
        expression: Comma-separated tokens, each ``N`` or ``N-M``.
        total_pages: Page count of the source document.

    Raises:
        RangeParseError: A token is not made of integers.
        RangeBoundsError: A range starts below 1, ends past ``total_pages``
            or starts after it ends.

    Returns:
        The ranges in the order they were written. Overlapping and repeated
        ranges are kept, since each one becomes its own output document.
    """

    parsed: List[PageRange] = []
    for raw_token in expression.split(","):
        token = raw_token.strip()
        if "-" in token:
            start_str, end_str = token.split("-", 1)
            start = _parse_int(start_str, token)
            end = _parse_int(end_str, token)
        else:
            start = end = _parse_int(token, token)

        if start < 1 or end > total_pages or start > end:
            raise RangeBoundsError(token, start, end, total_pages)
        parsed.append(PageRange(start, end))

    return parsed


__all__ = ["PageRange", "parse_page_ranges"]
