"""
Database models for the Task Manager API.

Defines the ``User`` and ``Task`` SQLAlchemy models and the ``TaskStatus``
enumeration.  A task optionally references its assignee through
``assignee_id``; the foreign key uses ``ON DELETE SET NULL`` so deleting a
user unassigns their tasks instead of removing them.
"""

from __future__ import annotations

from datetime import datetime, timezone
from enum import Enum
from typing import Any

from . import db

# Largest value an INTEGER column can hold (signed 64-bit)
MAX_INTEGER = 2**63 - 1


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


def ensure_utc(value: datetime) -> datetime:
    """
    Normalise a datetime to UTC.

    Naive datetimes are assumed to already be UTC; aware ones are converted.
    """
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


def to_utc_iso(value: datetime | None) -> str | None:
    """
    Serialize a datetime to an ISO-8601 UTC string.

    SQLite does not store timezone information, so values read back may be
    naive even though they were written in UTC.  Naive values are assumed to
    be UTC; aware values are converted.
    """
    if value is None:
        return None
    return ensure_utc(value).isoformat()


class TaskStatus(str, Enum):
    """Lifecycle status of a task."""

    PENDING = "pending"
    IN_PROGRESS = "in_progress"
    COMPLETED = "completed"


class User(db.Model):
    """
    Registered user.

    Attributes:
        id: Auto-incrementing primary key.
        name: Display name.
        email: Unique email address, indexed for login lookups.
        password_hash: One-way hash of the password.  Never serialised.
        created_at: Creation timestamp (UTC).
        updated_at: Last modification timestamp (UTC).
    """

    __tablename__ = "users"

    id: int = db.Column(db.Integer, primary_key=True)
    name: str = db.Column(db.String(255), nullable=False)
    email: str = db.Column(db.String(255), unique=True, nullable=False, index=True)
    password_hash: str = db.Column(db.String(256), nullable=False)
    created_at: datetime = db.Column(
        db.DateTime(timezone=True), nullable=False, default=_utcnow
    )
    updated_at: datetime = db.Column(
        db.DateTime(timezone=True), nullable=False, default=_utcnow, onupdate=_utcnow
    )

    def to_summary(self) -> dict[str, Any]:
        """Return the public ``{id, name, email}`` view of the user."""
        return {"id": self.id, "name": self.name, "email": self.email}

    def __repr__(self) -> str:
        return f"<User {self.id}: {self.email}>"


class Task(db.Model):
    """
    Task optionally delegated to a user.

    Attributes:
        id: Auto-incrementing primary key.
        title: Short summary.
        description: Longer text describing the work.
        status: Lifecycle status (see ``TaskStatus``).
        assignee_id: Optional reference to ``users.id``; nulled when the user
            is deleted.
        due_date: Deadline, stored in UTC.
        created_at: Creation timestamp (UTC).
        updated_at: Last modification timestamp (UTC).
    """

    __tablename__ = "tasks"

    id: int = db.Column(db.Integer, primary_key=True)
    title: str = db.Column(db.String(255), nullable=False)
    description: str = db.Column(db.Text, nullable=False)
    status: str = db.Column(
        db.String(20), nullable=False, default=TaskStatus.PENDING.value
    )
    assignee_id: int | None = db.Column(
        db.Integer,
        db.ForeignKey("users.id", ondelete="SET NULL"),
        nullable=True,
        index=True,
    )
    # Indexed because listings and the due-soon window sort and filter on it
    due_date: datetime = db.Column(db.DateTime(timezone=True), nullable=False, index=True)
    created_at: datetime = db.Column(
        db.DateTime(timezone=True), nullable=False, default=_utcnow
    )
    updated_at: datetime = db.Column(
        db.DateTime(timezone=True), nullable=False, default=_utcnow, onupdate=_utcnow
    )

    def to_dict(self) -> dict[str, Any]:
        """
        Serialise the task to a JSON-safe dictionary.

        Returns:
            All task columns, with datetimes as UTC ISO-8601 strings.
        """
        return {
            "id": self.id,
            "title": self.title,
            "description": self.description,
            "status": self.status,
            "assignee_id": self.assignee_id,
            "due_date": to_utc_iso(self.due_date),
            "created_at": to_utc_iso(self.created_at),
            "updated_at": to_utc_iso(self.updated_at),
        }

    def __repr__(self) -> str:
        return f"<Task {self.id}: {self.title}>"
