"""Admission control guarding every pdfutility entry point."""

from __future__ import annotations

from .limiter import (
    LOCK_ENDPOINT,
    UNLOCK_ENDPOINT,
    Admission,
    AdmissionController,
    BucketLimit,
    TokenBucket,
)

__all__ = [
    "Admission",
    "AdmissionController",
    "BucketLimit",
    "TokenBucket",
    "UNLOCK_ENDPOINT",
    "LOCK_ENDPOINT",
]
