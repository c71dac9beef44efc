"""
User component: registration and CRUD over user records.

Functions run inside an application context and operate on the shared
``db.session``.  They return the public ``{id, name, email}`` summary and
never expose the password hash.

Email uniqueness is pre-checked for a readable error, but the unique index on
``users.email`` is the final authority: an ``IntegrityError`` raised by a
concurrent insert is rolled back and reported as ``Conflict``.
"""

from __future__ import annotations

import logging
from typing import Any

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError

from . import db
from .errors import Conflict, NotFound
from .models import MAX_INTEGER, User
from .security import hash_password

logger = logging.getLogger(__name__)

EMAIL_EXISTS_MESSAGE = "Email already exists"
USER_NOT_FOUND_MESSAGE = "User not found"


def _get_user_or_404(user_id: int) -> User:
    user = db.session.get(User, user_id) if 0 < user_id <= MAX_INTEGER else None
    if user is None:
        raise NotFound(USER_NOT_FOUND_MESSAGE)
    return user


def _email_taken(email: str, exclude_id: int | None = None) -> bool:
    stmt = select(User.id).where(User.email == email)
    if exclude_id is not None:
        stmt = stmt.where(User.id != exclude_id)
    return db.session.scalar(stmt) is not None


def _commit_or_conflict() -> None:
    """Commit the session, translating a unique-email violation to ``Conflict``."""
    try:
        db.session.commit()
    except IntegrityError as exc:
        db.session.rollback()
        logger.warning("User write rejected by store constraint: %s", exc.orig)
        raise Conflict(EMAIL_EXISTS_MESSAGE) from exc


def create_user(name: str, email: str, password: str) -> dict[str, Any]:
    """
    Register a new user.

    Raises:
        Conflict: If *email* is already registered.
    """
    if _email_taken(email):
        raise Conflict(EMAIL_EXISTS_MESSAGE)

    user = User(name=name, email=email, password_hash=hash_password(password))
    db.session.add(user)
    _commit_or_conflict()

    logger.info("Created user %s", user.id)
    return user.to_summary()


def find_user(user_id: int) -> dict[str, Any]:
    """Return the summary of one user, or raise ``NotFound``."""
    return _get_user_or_404(user_id).to_summary()


def list_users() -> list[dict[str, Any]]:
    """Return every user's summary in primary-key order."""
    users = db.session.scalars(select(User).order_by(User.id)).all()
    return [user.to_summary() for user in users]


def update_user(user_id: int, fields: dict[str, Any]) -> dict[str, Any]:
    """
    Apply a partial update to a user.

    A supplied ``password`` is hashed before it is stored; ``name`` and
    ``email`` pass through as given.

    Raises:
        NotFound: If the user does not exist.
        Conflict: If the new email belongs to another user.
    """
    user = _get_user_or_404(user_id)

    if "email" in fields and _email_taken(fields["email"], exclude_id=user_id):
        raise Conflict(EMAIL_EXISTS_MESSAGE)

    if "name" in fields:
        user.name = fields["name"]
    if "email" in fields:
        user.email = fields["email"]
    if "password" in fields:
        user.password_hash = hash_password(fields["password"])

    _commit_or_conflict()
    logger.info("Updated user %s (fields: %s)", user_id, sorted(fields))
    return user.to_summary()


def delete_user(user_id: int) -> dict[str, str]:
    """
    Delete a user.

    Tasks assigned to the user keep existing; the ``ON DELETE SET NULL``
    foreign key clears their ``assignee_id``.

    Raises:
        NotFound: If the user does not exist.
    """
    user = _get_user_or_404(user_id)
    db.session.delete(user)
    db.session.commit()

    logger.info("Deleted user %s", user_id)
    return {"message": "User deleted successfully"}
