"""Unit tests for password hashing."""

from __future__ import annotations

import pytest

from task_api.security import hash_password, verify_password

pytestmark = pytest.mark.unit


def test_hash_is_salted_and_not_plaintext(app):
    """Test that hashing twice yields different digests, neither the password."""
    with app.app_context():
        first = hash_password("StrongPass123!")
        second = hash_password("StrongPass123!")

    assert first != "StrongPass123!"
    assert first != second


def test_verify_password_matches_only_original(app):
    """Test that only the original password verifies against its hash."""
    # Arrange
    with app.app_context():
        password_hash = hash_password("StrongPass123!")

    # Act & Assert
    assert verify_password(password_hash, "StrongPass123!") is True
    assert verify_password(password_hash, "wrong-password") is False


def test_hash_uses_configured_method(app):
    with app.app_context():
        password_hash = hash_password("StrongPass123!")
    assert password_hash.startswith(app.config["PASSWORD_HASH_METHOD"].split(":")[0])
