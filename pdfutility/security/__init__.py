"""Password protection helpers for the :mod:`pdfutility` toolkit."""

from __future__ import annotations

from dataclasses import dataclass

from pypdf import PdfReader, PdfWriter
from pypdf.constants import UserAccessPermissions

from ..core.codec import open_document, serialize
from ..core.exceptions import EmptyInputError, ProcessingError, StateError
from ..core.utils import get_logger

LOGGER = get_logger("pdfutility.security")

ENCRYPTION_ALGORITHM = "AES-128"


class AlreadyEncryptedError(StateError):
    """Raised when a lock is requested for an already encrypted PDF."""


class InvariantViolation(StateError):
    """Raised when the caller's encryption pre-check disagrees with the document."""


@dataclass(frozen=True)
class PermissionProfile:
    """Allow/deny flags applied to a document when it is locked."""

    can_print: bool = True
    can_extract_content: bool = True
    can_modify: bool = True
    can_modify_annotations: bool = True
    can_fill_form: bool = True
    can_extract_for_accessibility: bool = True

    def to_flags(self) -> UserAccessPermissions:
        """Return the ``/P`` permission bits for this profile."""

        flags = UserAccessPermissions.all()
        denied = {
            UserAccessPermissions.PRINT: not self.can_print,
            UserAccessPermissions.EXTRACT: not self.can_extract_content,
            UserAccessPermissions.MODIFY: not self.can_modify,
            UserAccessPermissions.ADD_OR_MODIFY: not self.can_modify_annotations,
            UserAccessPermissions.FILL_FORM_FIELDS: not self.can_fill_form,
            UserAccessPermissions.EXTRACT_TEXT_AND_GRAPHICS: not self.can_extract_for_accessibility,
        }
        for flag, deny in denied.items():
            if deny:
                flags &= ~flag
        return flags


STANDARD_PERMISSIONS = PermissionProfile(
    can_print=True,
    can_extract_content=True,
    can_modify=False,
    can_modify_annotations=False,
    can_fill_form=True,
    can_extract_for_accessibility=True,
)


def _copy_reader_contents(reader: PdfReader) -> PdfWriter:
    writer = PdfWriter()
    writer.clone_reader_document_root(reader)

    metadata = reader.metadata
    if metadata:
        writer.add_metadata(
            {
                key: str(value)
                for key, value in metadata.items()
                if isinstance(key, str) and value is not None
            }
        )

    return writer


def _require_password(password: str | None) -> str:
    if password is None or not password.strip():
        raise EmptyInputError("Password cannot be null or empty")
    return password


def unlock_pdf(data: bytes, password: str) -> bytes:
    """Remove every security restriction from ``data`` using ``password``.

    A document that is not encrypted is returned unchanged, byte for byte.

    Raises:
        EmptyInputError: ``data`` or ``password`` is empty.
        InvalidPasswordError: ``password`` does not open the document.
        DocumentCorruptError: ``data`` is not a readable PDF.
    """

    password = _require_password(password)
    with open_document(data, password) as document:
        if not document.is_encrypted:
            LOGGER.info("PDF is not encrypted, returning original file")
            return data

        writer = _copy_reader_contents(document.reader)
        unlocked = serialize(writer)

    LOGGER.info("PDF successfully unlocked, output size: %d bytes", len(unlocked))
    return unlocked


def lock_pdf(
    data: bytes,
    password: str,
    *,
    owner_password: str | None = None,
    permissions: PermissionProfile = STANDARD_PERMISSIONS,
    precheck: bool | None = None,
) -> bytes:
    """Encrypt ``data`` with AES-128 and return the protected bytes.

    ``owner_password`` defaults to ``password``, so one secret opens the
    document and lifts its restrictions. ``precheck`` is the encryption state
    a caller observed before dispatching; it must match the document.

    Raises:
        EmptyInputError: ``data`` or ``password`` is empty.
        AlreadyEncryptedError: the document is already encrypted.
        InvariantViolation: ``precheck`` disagrees with the document.
    """

    password = _require_password(password)
    with open_document(data, decrypt=False) as document:
        encrypted = document.is_encrypted
        if precheck is not None and precheck != encrypted:
            raise InvariantViolation(
                f"Encryption pre-check reported {precheck} but the document reports {encrypted}"
            )
        if encrypted:
            raise AlreadyEncryptedError("Input PDF is already encrypted")

        writer = _copy_reader_contents(document.reader)
        try:
            writer.encrypt(
                user_password=password,
                owner_password=owner_password or password,
                permissions_flag=permissions.to_flags(),
                algorithm=ENCRYPTION_ALGORITHM,
            )
        except Exception as exc:  # encryption errors vary
            raise ProcessingError("Failed to encrypt PDF") from exc
        locked = serialize(writer)

    LOGGER.info("PDF successfully locked, output size: %d bytes", len(locked))
    return locked


__all__ = [
    "AlreadyEncryptedError",
    "InvariantViolation",
    "PermissionProfile",
    "STANDARD_PERMISSIONS",
    "ENCRYPTION_ALGORITHM",
    "lock_pdf",
    "unlock_pdf",
]
