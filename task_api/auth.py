"""
Authentication: credential checks, login and the bearer-token guard.

``validate_credentials`` and ``login`` implement the login flow against the
users table.  ``require_auth`` is the decorator that protects API endpoints:
it verifies the ``Authorization: Bearer <token>`` header and stores the
caller's identity on ``flask.g``.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from functools import wraps
from typing import Any

from flask import current_app, g, request
from sqlalchemy import select

from . import db
from .errors import NotFound, Unauthorized
from .jwt import TokenError, create_token, verify_token
from .models import User
from .security import verify_password

logger = logging.getLogger(__name__)


def validate_credentials(email: str, password: str) -> User:
    """
    Look up a user by exact email and check the password.

    Returns the stored ``User`` row, password hash included; callers must
    strip it before exposing the record.

    Raises:
        NotFound: If no user has this email.
        Unauthorized: If the password does not match the stored hash.
    """
    user = db.session.scalar(select(User).where(User.email == email))
    if user is None:
        logger.warning("Login attempt for unknown email")
        raise NotFound("Email not found")

    if not verify_password(user.password_hash, password):
        logger.warning("Invalid password for user %s", user.id)
        raise Unauthorized("Invalid password")
    return user


def login(email: str, password: str) -> dict[str, Any]:
    """
    Authenticate a user and issue an access token.

    Errors from ``validate_credentials`` propagate unchanged.

    Returns:
        ``{"access_token": <jwt>, "user": {id, name, email}}``.
    """
    user = validate_credentials(email, password)
    token = create_token(
        user_id=user.id,
        email=user.email,
        secret=current_app.config["JWT_SECRET_KEY"],
        expiry_hours=current_app.config["JWT_EXPIRY_HOURS"],
    )
    logger.info("Issued access token for user %s", user.id)
    return {"access_token": token, "user": user.to_summary()}


def _extract_bearer_token() -> str | None:
    """Return the token from ``Authorization: Bearer <token>``, or ``None``."""
    auth_header = request.headers.get("Authorization", "")
    if not auth_header.startswith("Bearer "):
        return None
    token = auth_header[7:].strip()
    return token or None


def require_auth(view_func: Callable[..., Any]) -> Callable[..., Any]:
    """
    Decorator that enforces Bearer-token authentication.

    On success ``g.user_id`` and ``g.email`` hold the token's identity.  A
    missing header or a token that fails verification raises
    ``Unauthorized`` before the view runs.
    """

    @wraps(view_func)
    def wrapper(*args, **kwargs):
        token = _extract_bearer_token()
        if token is None:
            raise Unauthorized("Missing or invalid Authorization header")

        result = verify_token(
            token,
            current_app.config["JWT_SECRET_KEY"],
            leeway=int(current_app.config.get("JWT_CLOCK_SKEW_SECONDS", 30)),
        )
        if isinstance(result, TokenError):
            logger.warning("Rejected bearer token: %s", result.reason)
            raise Unauthorized("Invalid or expired token")

        g.user_id = result.subject
        g.email = result.email
        return view_func(*args, **kwargs)

    return wrapper
