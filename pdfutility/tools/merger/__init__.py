"""Merge utilities exposed through the pdfutility tools namespace."""

from __future__ import annotations

from .exceptions import InsufficientInputsError, InvalidInputError
from .merge import MergeTool, merge_pdfs

__all__ = ["merge_pdfs", "MergeTool", "InsufficientInputsError", "InvalidInputError"]
