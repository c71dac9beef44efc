"""
Unit tests for the User and Task models.

Covers column defaults, serialisation, the unique email constraint and the
``ON DELETE SET NULL`` behaviour of ``tasks.assignee_id``.
"""

from __future__ import annotations

from datetime import datetime, timezone

import pytest
from sqlalchemy.exc import IntegrityError

from task_api.models import Task, TaskStatus, User, to_utc_iso

pytestmark = pytest.mark.unit


def test_task_defaults_and_to_dict(db_session):
    """Test that a task without a status is stored as pending."""
    # Arrange
    task = Task(
        title="Test Task",
        description="Details",
        due_date=datetime(2030, 1, 1, tzinfo=timezone.utc),
    )
    db_session.session.add(task)
    db_session.session.commit()

    # Act
    data = task.to_dict()

    # Assert
    assert data["status"] == TaskStatus.PENDING.value
    assert data["assignee_id"] is None
    assert data["created_at"] is not None
    assert data["updated_at"] is not None


def test_task_due_date_serialised_as_utc(db_session):
    """Test that due_date comes back as an ISO-8601 UTC string."""
    # Arrange
    due_date = datetime(2030, 1, 1, 12, 30, tzinfo=timezone.utc)
    task = Task(title="Due", description="Date", due_date=due_date)
    db_session.session.add(task)
    db_session.session.commit()
    db_session.session.expire_all()

    # Act
    data = db_session.session.get(Task, task.id).to_dict()

    # Assert
    assert datetime.fromisoformat(data["due_date"]) == due_date


def test_to_utc_iso_treats_naive_values_as_utc():
    """Test that naive datetimes are labelled UTC rather than shifted."""
    assert to_utc_iso(datetime(2030, 5, 1, 8, 0)) == "2030-05-01T08:00:00+00:00"
    assert to_utc_iso(None) is None


def test_user_summary_excludes_password_hash(db_session, user_factory):
    """Test that the public summary carries only id, name and email."""
    # Arrange
    user = user_factory(name="Carol", email="carol@example.com")

    # Act
    summary = user.to_summary()

    # Assert
    assert summary == {"id": user.id, "name": "Carol", "email": "carol@example.com"}


def test_unique_email_constraint(db_session, user_factory):
    """Test that the database rejects a duplicate email address."""
    # Arrange
    user_factory(email="dupe@example.com")
    duplicate = User(name="Second", email="dupe@example.com", password_hash="x")
    db_session.session.add(duplicate)

    # Act & Assert
    with pytest.raises(IntegrityError):
        db_session.session.commit()
    db_session.session.rollback()


def test_deleting_user_nulls_assignee(db_session, user_factory, task_factory):
    """Test that removing a user unassigns their tasks instead of deleting them."""
    # Arrange
    user = user_factory()
    task = task_factory(assignee_id=user.id)

    # Act
    db_session.session.delete(user)
    db_session.session.commit()

    # Assert
    reloaded = db_session.session.get(Task, task.id)
    assert reloaded is not None
    assert reloaded.assignee_id is None
