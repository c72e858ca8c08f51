"""Custom exceptions raised by :mod:`pdfutility.tools.splitter`."""

from __future__ import annotations

from ...core.exceptions import ValidationError


class RangeError(ValidationError):
    """Base exception for page range expressions that cannot be used."""

    def __init__(self, token: str, reason: str) -> None:
        self.token = token
        self.reason = reason
        super().__init__(f"Invalid page range {token!r}: {reason}")


class RangeParseError(RangeError):
    """Raised when a range token is not made of integers."""

    def __init__(self, token: str) -> None:
        super().__init__(token, "expected 'N' or 'N-M' with integer page numbers")


class RangeBoundsError(RangeError):
    """Raised when a range falls outside ``1..total_pages`` or is reversed."""

    def __init__(self, token: str, start: int, end: int, total_pages: int) -> None:
        self.start = start
        self.end = end
        self.total_pages = total_pages
        if start > end:
            reason = f"start {start} is greater than end {end}"
        else:
            reason = f"pages must be between 1 and {total_pages}"
        super().__init__(token, reason)


__all__ = ["RangeError", "RangeParseError", "RangeBoundsError"]
