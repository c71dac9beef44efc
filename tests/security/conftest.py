"""
Shared fixtures for the security test suite.

Provides a factory fixture that creates a real user and mints a token for it
with the application's own signing path, so security tests exercise exactly
what a logged-in client would send.

Key Concepts Demonstrated:
- Factory fixture pattern (``token_for_user``) for on-demand identities
- Tokens minted through ``create_token`` rather than hand-built claims
"""

from __future__ import annotations

import pytest

from task_api.jwt import create_token


@pytest.fixture
def token_for_user(app, user_factory):
    """
    Factory returning ``(token, user)`` for a freshly created user.

    Each call creates a new user with a unique email.
    """

    def _create() -> tuple[str, dict]:
        user = user_factory()
        token = create_token(
            user_id=user.id,
            email=user.email,
            secret=app.config["JWT_SECRET_KEY"],
        )
        return token, user.to_summary()

    return _create
