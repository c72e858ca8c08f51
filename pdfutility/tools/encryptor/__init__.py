"""Password protection helpers exposed through the pdfutility tools namespace."""

from __future__ import annotations

from ...security import (
    STANDARD_PERMISSIONS,
    AlreadyEncryptedError,
    InvariantViolation,
    PermissionProfile,
    lock_pdf,
    unlock_pdf,
)
from .encrypt import LockTool, UnlockTool

__all__ = [
    "AlreadyEncryptedError",
    "InvariantViolation",
    "PermissionProfile",
    "STANDARD_PERMISSIONS",
    "lock_pdf",
    "unlock_pdf",
    "LockTool",
    "UnlockTool",
]
