"""Plugin exposing PDF lock and unlock utilities."""

from __future__ import annotations

from ...core.codec import is_pdf_encrypted
from ...core.utils import get_logger
from ...security import STANDARD_PERMISSIONS, AlreadyEncryptedError, lock_pdf, unlock_pdf
from ..common.interfaces import BaseTool
from ..common.pipeline import register_tool

LOGGER = get_logger("pdfutility.tools.encrypt")


@register_tool("lock")
class LockTool(BaseTool):
    name = "lock"

    def run(self) -> bytes:
        context = self.context
        data = context.require_data()
        password = context.config.get("password")
        owner_password = context.config.get("owner_password")
        permissions = context.config.get("permissions") or STANDARD_PERMISSIONS

        encrypted = is_pdf_encrypted(data)
        if encrypted:
            raise AlreadyEncryptedError("PDF is already password protected")

        LOGGER.debug(
            "Locking %d byte PDF with owner password %s",
            len(data),
            "<provided>" if owner_password else "<shared>",
        )
        result = lock_pdf(
            data,
            password,
            owner_password=owner_password,
            permissions=permissions,
            precheck=encrypted,
        )
        context.resources["result"] = result
        return result


@register_tool("unlock")
class UnlockTool(BaseTool):
    name = "unlock"

    def run(self) -> bytes:
        context = self.context
        data = context.require_data()
        password = context.config.get("password")

        LOGGER.debug("Unlocking %d byte PDF", len(data))
        result = unlock_pdf(data, password)
        context.resources["result"] = result
        return result
