"""Environment driven configuration for pdfutility services."""

from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Callable, TypeVar

ENV_PREFIX = "PDFUTILITY_"

T = TypeVar("T")


def _read_env(name: str, default: T, cast: Callable[[str], T]) -> T:
    raw = os.getenv(ENV_PREFIX + name)
    if raw is None or not raw.strip():
        return default
    try:
        return cast(raw.strip())
    except ValueError as exc:
        raise RuntimeError(f"{ENV_PREFIX}{name} must be a valid {cast.__name__}, got {raw!r}.") from exc


@dataclass(frozen=True)
class Settings:
    """Runtime settings shared by the CLI and the HTTP backend."""

    max_upload_mb: int = 50
    rate_limit_capacity: int = 10
    rate_limit_window: float = 60.0
    sensitive_rate_limit_capacity: int = 5
    rate_limit_idle_ttl: float = 600.0
    rate_limit_max_keys: int = 10_000
    default_dpi: int = 300
    default_quality: float = 0.5

    def __post_init__(self) -> None:
        if self.max_upload_mb < 1:
            raise RuntimeError("PDFUTILITY_MAX_UPLOAD_MB must be at least 1.")
        if self.rate_limit_capacity < 1 or self.sensitive_rate_limit_capacity < 1:
            raise RuntimeError("Rate limit capacities must be at least 1.")
        if self.rate_limit_window <= 0 or self.rate_limit_idle_ttl <= 0:
            raise RuntimeError("Rate limit durations must be positive.")

    @property
    def max_upload_bytes(self) -> int:
        return self.max_upload_mb * 1024 * 1024

    @classmethod
    def from_env(cls) -> "Settings":
        """Build settings from ``PDFUTILITY_*`` environment variables."""

        return cls(
            max_upload_mb=_read_env("MAX_UPLOAD_MB", cls.max_upload_mb, int),
            rate_limit_capacity=_read_env("RATE_LIMIT_CAPACITY", cls.rate_limit_capacity, int),
            rate_limit_window=_read_env("RATE_LIMIT_WINDOW", cls.rate_limit_window, float),
            sensitive_rate_limit_capacity=_read_env(
                "SENSITIVE_RATE_LIMIT_CAPACITY", cls.sensitive_rate_limit_capacity, int
            ),
            rate_limit_idle_ttl=_read_env("RATE_LIMIT_IDLE_TTL", cls.rate_limit_idle_ttl, float),
            rate_limit_max_keys=_read_env("RATE_LIMIT_MAX_KEYS", cls.rate_limit_max_keys, int),
            default_dpi=_read_env("DEFAULT_DPI", cls.default_dpi, int),
            default_quality=_read_env("DEFAULT_QUALITY", cls.default_quality, float),
        )


__all__ = ["Settings", "ENV_PREFIX"]
