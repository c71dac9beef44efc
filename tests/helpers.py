"""Test helper functions shared across the test suites."""

from __future__ import annotations

from datetime import datetime, timedelta, timezone
from typing import Any

import jwt

DEFAULT_TEST_USER_ID = 1
DEFAULT_TEST_EMAIL = "test_user@example.com"
TEST_JWT_SECRET = "test-jwt-secret-key-for-local-tests-123456"
DEFAULT_PASSWORD = "StrongPass123!"


def create_test_token(
    user_id: int = DEFAULT_TEST_USER_ID,
    email: str = DEFAULT_TEST_EMAIL,
    secret: str = TEST_JWT_SECRET,
    expired: bool = False,
    **extra_claims: Any,
) -> str:
    """Create a signed HS256 test token with the standard claims."""
    now = datetime.now(timezone.utc)
    expiry_time = now - timedelta(hours=1) if expired else now + timedelta(hours=1)

    payload: dict[str, Any] = {
        "sub": str(int(user_id)),
        "email": str(email),
        "iat": int(now.timestamp()),
        "exp": int(expiry_time.timestamp()),
    }
    payload.update(extra_claims)
    return jwt.encode(payload, secret, algorithm="HS256")


def auth_headers(token: str) -> dict[str, str]:
    """Build common JSON API headers with bearer token auth."""
    return {
        "Authorization": f"Bearer {token}",
        "Content-Type": "application/json",
        "Accept": "application/json",
    }
