"""Custom exceptions for the :mod:`pdfutility.tools.merger` package."""

from __future__ import annotations

from ...core.exceptions import ValidationError


class InsufficientInputsError(ValidationError):
    """Raised when fewer than two documents are given to merge."""

    def __init__(self, count: int) -> None:
        self.count = count
        super().__init__(f"At least 2 files required for merging, got {count}")


class InvalidInputError(ValidationError):
    """Raised when one of the merge inputs fails validation.

    ``index`` is the 0-based position of the offending input; the underlying
    error is chained as ``__cause__``.
    """

    def __init__(self, index: int, reason: str) -> None:
        self.index = index
        self.reason = reason
        super().__init__(f"Invalid PDF file at position {index + 1}: {reason}")


__all__ = ["InsufficientInputsError", "InvalidInputError"]
