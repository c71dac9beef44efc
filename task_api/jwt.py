"""
JWT issuance and verification.

Tokens are HS256-signed with the server secret and carry:
    - ``sub``   -- user id, encoded as a string (RFC 7519 StringOrURI).
    - ``email`` -- the user's email at login time.
    - ``iat``   -- issued-at timestamp (UTC epoch seconds).
    - ``exp``   -- expiration timestamp (UTC epoch seconds).

Verification is a typed decode step: ``verify_token`` returns either a
``TokenPayload`` or a ``TokenError`` describing why the token was rejected,
so callers branch on the result type instead of poking at a raw claims dict.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from typing import Any

import jwt

ALGORITHM = "HS256"
REQUIRED_TOKEN_CLAIMS = ["sub", "email", "iat", "exp"]


@dataclass(frozen=True)
class TokenPayload:
    """Identity claims of a verified token."""

    subject: int
    email: str


@dataclass(frozen=True)
class TokenError:
    """Reason a token failed verification."""

    reason: str


def create_token(
    user_id: int,
    email: str,
    secret: str,
    expiry_hours: int = 1,
) -> str:
    """
    Create an HS256-signed JWT for an authenticated user.

    Args:
        user_id: Primary key of the user.  Must be positive.
        email: Email of the user.  Must be a non-empty string.
        secret: HMAC signing secret.
        expiry_hours: Hours from now until the token expires.

    Returns:
        A compact JWS string usable as a Bearer token.

    Raises:
        ValueError: If *user_id* is not positive or *email* is blank.
    """
    if int(user_id) <= 0:
        raise ValueError("user_id must be a positive integer")
    if not isinstance(email, str) or not email.strip():
        raise ValueError("email must be a non-empty string")

    now = datetime.now(timezone.utc)
    expires_at = now + timedelta(hours=int(expiry_hours))

    payload: dict[str, Any] = {
        "sub": str(int(user_id)),
        "email": email,
        "iat": int(now.timestamp()),
        "exp": int(expires_at.timestamp()),
    }
    return jwt.encode(payload, secret, algorithm=ALGORITHM)


def verify_token(token: str, secret: str, leeway: int = 0) -> TokenPayload | TokenError:
    """
    Decode and validate a bearer token.

    Checks the signature, expiry and presence of every required claim, then
    validates the identity claims themselves: ``sub`` must hold a positive
    integer id and ``email`` a non-blank string.  A correctly signed token
    lacking either is still rejected.

    Args:
        token: The encoded JWT.
        secret: HMAC secret the token must be signed with.
        leeway: Seconds of tolerated clock skew on ``exp``/``iat``.

    Returns:
        ``TokenPayload`` for a valid token, otherwise ``TokenError``.
    """
    try:
        decoded = jwt.decode(
            token,
            secret,
            algorithms=[ALGORITHM],
            options={"require": REQUIRED_TOKEN_CLAIMS},
            leeway=leeway,
        )
    except jwt.ExpiredSignatureError:
        return TokenError("Token has expired")
    except jwt.MissingRequiredClaimError as exc:
        return TokenError(f"Missing claim: {exc.claim}")
    except jwt.InvalidTokenError as exc:
        return TokenError(f"Invalid token: {exc}")

    subject = decoded.get("sub")
    email = decoded.get("email")

    if not isinstance(subject, str) or not subject.isdigit() or int(subject) <= 0:
        return TokenError("Invalid sub claim")
    if not isinstance(email, str) or not email.strip():
        return TokenError("Invalid email claim")
    return TokenPayload(subject=int(subject), email=email)
