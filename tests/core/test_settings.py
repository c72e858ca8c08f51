from __future__ import annotations

import pytest

from pdfutility.core.config import Settings


def test_defaults_without_environment(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.delenv("PDFUTILITY_MAX_UPLOAD_MB", raising=False)
    monkeypatch.delenv("PDFUTILITY_RATE_LIMIT_CAPACITY", raising=False)

    settings = Settings.from_env()

    assert settings.max_upload_mb == 50
    assert settings.rate_limit_capacity == 10
    assert settings.sensitive_rate_limit_capacity == 5
    assert settings.rate_limit_window == 60.0
    assert settings.max_upload_bytes == 50 * 1024 * 1024


def test_environment_overrides(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("PDFUTILITY_MAX_UPLOAD_MB", "5")
    monkeypatch.setenv("PDFUTILITY_RATE_LIMIT_WINDOW", "30.5")
    monkeypatch.setenv("PDFUTILITY_DEFAULT_DPI", "150")

    settings = Settings.from_env()

    assert settings.max_upload_mb == 5
    assert settings.rate_limit_window == 30.5
    assert settings.default_dpi == 150


def test_invalid_value_raises_runtime_error(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("PDFUTILITY_RATE_LIMIT_CAPACITY", "many")

    with pytest.raises(RuntimeError, match="PDFUTILITY_RATE_LIMIT_CAPACITY"):
        Settings.from_env()


def test_out_of_range_value_raises_runtime_error(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("PDFUTILITY_MAX_UPLOAD_MB", "0")

    with pytest.raises(RuntimeError):
        Settings.from_env()
