"""Base64 helpers used to ship documents through JSON transports."""

from __future__ import annotations

import base64
import binascii

from .exceptions import EmptyInputError, ValidationError
from .utils import get_logger

LOGGER = get_logger("pdfutility.encoding")


def encode_base64(data: bytes) -> str:
    if not data:
        raise EmptyInputError("File cannot be empty")
    encoded = base64.b64encode(data).decode("ascii")
    LOGGER.debug("Encoded %d bytes into %d base64 characters", len(data), len(encoded))
    return encoded


def decode_base64(text: str) -> bytes:
    """Decode ``text`` strictly, rejecting characters outside the alphabet.

    A leading data URL prefix such as ``data:application/pdf;base64,`` is
    dropped before decoding.
    """

    if text is None or not text.strip():
        raise EmptyInputError("Base64 string cannot be null or empty")
    payload = text.strip()
    if payload.startswith("data:") and "," in payload:
        payload = payload.split(",", 1)[1]
    try:
        decoded = base64.b64decode(payload, validate=True)
    except (binascii.Error, ValueError) as exc:
        raise ValidationError(f"Invalid Base64 format: {exc}") from exc
    LOGGER.debug("Decoded %d base64 characters into %d bytes", len(text), len(decoded))
    return decoded


__all__ = ["encode_base64", "decode_base64"]
