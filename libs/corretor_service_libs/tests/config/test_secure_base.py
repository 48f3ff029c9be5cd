"""Tests for the shared service settings base."""

from __future__ import annotations

import pytest
from corretor_core.config_enums import Environment

from corretor_service_libs.config import SecureServiceSettings


def test_environment_is_read_from_unprefixed_variable(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("ENVIRONMENT", "production")

    settings = SecureServiceSettings()

    assert settings.ENVIRONMENT is Environment.PRODUCTION
    assert settings.is_production()
    assert not settings.is_development()


def test_defaults_to_development(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.delenv("ENVIRONMENT", raising=False)

    assert SecureServiceSettings().is_development()
