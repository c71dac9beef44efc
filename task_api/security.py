"""
Password hashing helpers.

Thin wrappers around Werkzeug's ``generate_password_hash`` /
``check_password_hash`` so the hashing method is read from configuration in
one place.  Hashes are salted and one-way; plain-text passwords are never
stored.
"""

from __future__ import annotations

from flask import current_app
from werkzeug.security import check_password_hash, generate_password_hash


def hash_password(password: str) -> str:
    """Return a salted hash of *password* using the configured method."""
    method = current_app.config.get("PASSWORD_HASH_METHOD", "scrypt")
    return generate_password_hash(password, method=method)


def verify_password(password_hash: str, password: str) -> bool:
    """Return ``True`` if *password* matches *password_hash*."""
    return check_password_hash(password_hash, password)
