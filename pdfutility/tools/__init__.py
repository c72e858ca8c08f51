"""Namespace for pluggable pdfutility tools."""

from __future__ import annotations

from .common.pipeline import registry


def load_builtin_plugins() -> None:
    from .splitter import split  # noqa: F401
    from .merger import merge  # noqa: F401
    from .encryptor import encrypt  # noqa: F401  # registers lock and unlock
    from .rasterizer import rasterize  # noqa: F401
    from .compressor import compress  # noqa: F401
    from .packager import package  # noqa: F401


__all__ = ["registry", "load_builtin_plugins"]
