"""Unit tests for ConfiguredIdentityProvider."""

from __future__ import annotations

import pytest

from services.essay_scoring_service.implementations.identity_provider_impl import (
    ConfiguredIdentityProvider,
)


@pytest.mark.parametrize("requested", [None, "1", "999", "abc", ""])
def test_default_mode_always_returns_configured_user(requested: str | None) -> None:
    provider = ConfiguredIdentityProvider(default_user_id=1)

    assert provider.resolve_user_id(requested) == 1


@pytest.mark.parametrize(
    ("requested", "expected"),
    [
        ("42", 42),
        (" 7 ", 7),
        (None, 3),
        ("0", 3),
        ("-5", 3),
        ("abc", 3),
        ("4.2", 3),
    ],
)
def test_trusted_mode_uses_valid_requested_id(requested: str | None, expected: int) -> None:
    provider = ConfiguredIdentityProvider(default_user_id=3, trust_requested_id=True)

    assert provider.resolve_user_id(requested) == expected
