from __future__ import annotations

from io import BytesIO

import pytest
from pypdf import PdfReader
from pypdf.constants import UserAccessPermissions

from pdfutility.core.codec import is_pdf_encrypted
from pdfutility.core.exceptions import (
    CredentialError,
    EmptyInputError,
    InvalidPasswordError,
    StateError,
)
from pdfutility.security import (
    STANDARD_PERMISSIONS,
    AlreadyEncryptedError,
    InvariantViolation,
    PermissionProfile,
    lock_pdf,
    unlock_pdf,
)
from pdfutility.tools import load_builtin_plugins
from pdfutility.tools.common.interfaces import OperationContext
from pdfutility.tools.common.pipeline import registry


def setup_module(module):
    load_builtin_plugins()


def test_lock_pdf_encrypts_with_aes(sample_pdf: bytes) -> None:
    locked = lock_pdf(sample_pdf, "secret")

    reader = PdfReader(BytesIO(locked))
    assert reader.is_encrypted is True
    encrypt = reader.trailer["/Encrypt"].get_object()
    assert encrypt["/V"] == 4
    assert reader.decrypt("secret") != 0
    assert len(reader.pages) == 5


def test_lock_pdf_applies_standard_permissions(sample_pdf: bytes) -> None:
    locked = lock_pdf(sample_pdf, "secret")

    reader = PdfReader(BytesIO(locked))
    flags = int(reader.trailer["/Encrypt"].get_object()["/P"])
    assert flags & UserAccessPermissions.PRINT
    assert flags & UserAccessPermissions.EXTRACT
    assert flags & UserAccessPermissions.FILL_FORM_FIELDS
    assert not flags & UserAccessPermissions.MODIFY
    assert not flags & UserAccessPermissions.ADD_OR_MODIFY


def test_permission_profile_denies_requested_flags() -> None:
    flags = PermissionProfile(can_print=False, can_extract_content=False).to_flags()

    assert not flags & UserAccessPermissions.PRINT
    assert not flags & UserAccessPermissions.EXTRACT
    assert flags & UserAccessPermissions.MODIFY
    assert STANDARD_PERMISSIONS.can_modify is False


def test_lock_then_unlock_round_trip(sample_pdf: bytes) -> None:
    locked = lock_pdf(sample_pdf, "secret")

    unlocked = unlock_pdf(locked, "secret")

    reader = PdfReader(BytesIO(unlocked))
    assert reader.is_encrypted is False
    assert len(reader.pages) == 5
    assert reader.metadata is not None
    assert reader.metadata.get("/Title") == "Sample"


def test_unlock_accepts_separate_owner_password(sample_pdf: bytes) -> None:
    locked = lock_pdf(sample_pdf, "reader", owner_password="owner")

    assert is_pdf_encrypted(unlock_pdf(locked, "owner")) is False
    assert is_pdf_encrypted(unlock_pdf(locked, "reader")) is False


def test_unlock_rejects_wrong_password(sample_pdf: bytes) -> None:
    locked = lock_pdf(sample_pdf, "secret")

    with pytest.raises(CredentialError) as excinfo:
        unlock_pdf(locked, "wrong")

    assert isinstance(excinfo.value, InvalidPasswordError)


def test_unlock_returns_unencrypted_input_unchanged(sample_pdf: bytes) -> None:
    assert unlock_pdf(sample_pdf, "anything") == sample_pdf


def test_lock_refuses_already_encrypted(sample_pdf: bytes) -> None:
    locked = lock_pdf(sample_pdf, "secret")

    with pytest.raises(AlreadyEncryptedError):
        lock_pdf(locked, "another")


def test_lock_detects_precheck_disagreement(sample_pdf: bytes) -> None:
    with pytest.raises(InvariantViolation):
        lock_pdf(sample_pdf, "secret", precheck=True)

    assert issubclass(InvariantViolation, StateError)


@pytest.mark.parametrize("password", [None, "", "   "])
def test_passwords_must_not_be_blank(sample_pdf: bytes, password) -> None:
    with pytest.raises(EmptyInputError):
        lock_pdf(sample_pdf, password)
    with pytest.raises(EmptyInputError):
        unlock_pdf(sample_pdf, password)


def test_lock_and_unlock_plugins(sample_pdf: bytes) -> None:
    lock_context = OperationContext(data=sample_pdf, config={"password": "secret"})
    locked = registry.create("lock", lock_context).run()
    assert is_pdf_encrypted(locked) is True

    unlock_context = OperationContext(data=locked, config={"password": "secret"})
    unlocked = registry.create("unlock", unlock_context).run()
    assert is_pdf_encrypted(unlocked) is False
    assert unlock_context.resources["result"] == unlocked


def test_lock_plugin_rejects_encrypted_input(sample_pdf: bytes) -> None:
    locked = lock_pdf(sample_pdf, "secret")

    with pytest.raises(AlreadyEncryptedError):
        registry.run("lock", OperationContext(data=locked, config={"password": "secret"}))
