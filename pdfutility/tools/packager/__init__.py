"""Archive packaging exposed through the pdfutility tools namespace."""

from __future__ import annotations

from ...core.model import ArchiveScheme
from .package import PackageTool, PackagingError, create_archive

__all__ = ["ArchiveScheme", "create_archive", "PackageTool", "PackagingError"]
