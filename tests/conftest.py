"""
Shared pytest fixtures for the Task Manager API test suite.

Provides the Flask application, test client, database session, bearer-token
headers and Faker-backed factories for users and tasks.

Key Concepts Demonstrated:
- Session-scoped app vs function-scoped client/database for isolation
- Factory fixtures (user_factory, task_factory) for flexible test data
- Teardown that drops every table so no state leaks between tests
"""

from __future__ import annotations

import os
from collections.abc import Callable
from datetime import datetime, timedelta, timezone
from typing import Any

import pytest
from faker import Faker

os.environ["FLASK_ENV"] = "testing"

from task_api import create_app, db
from task_api.models import Task, TaskStatus, User
from task_api.security import hash_password
from tests.helpers import DEFAULT_PASSWORD, auth_headers, create_test_token

fake = Faker()


# -----------------------------------------------------------------------------
# Application Fixtures
# -----------------------------------------------------------------------------


@pytest.fixture(scope="session")
def app():
    """
    Provide the Flask application for the whole test session.

    Built once with the 'testing' configuration to avoid repeated startup.
    """
    application = create_app("testing")
    yield application


@pytest.fixture(scope="function")
def client(app):
    """Provide a Flask test client scoped to a single test."""
    with app.test_client() as test_client:
        yield test_client


@pytest.fixture(scope="function")
def db_session(app):
    """
    Provide a clean database for each test.

    Creates all tables before the test, then rolls back anything pending and
    drops every table afterwards.
    """
    with app.app_context():
        db.create_all()
        yield db
        db.session.rollback()
        db.drop_all()


# -----------------------------------------------------------------------------
# Authentication Fixtures
# -----------------------------------------------------------------------------


@pytest.fixture
def test_token(app) -> str:
    """A valid bearer token for user_id=1, signed with the app secret."""
    return create_test_token(
        user_id=1,
        email="user_one@example.com",
        secret=app.config["JWT_SECRET_KEY"],
    )


@pytest.fixture
def api_headers(test_token) -> dict[str, str]:
    """Authorization and JSON content-type headers for user_id=1."""
    return auth_headers(test_token)


# -----------------------------------------------------------------------------
# Test Data Factory Fixtures
# -----------------------------------------------------------------------------


@pytest.fixture
def user_factory(db_session) -> Callable[..., User]:
    """
    Factory that creates and persists User rows.

    Name and email default to unique Faker values; the password defaults to
    ``DEFAULT_PASSWORD`` and is stored hashed.
    """

    def _create_user(
        name: str | None = None,
        email: str | None = None,
        password: str = DEFAULT_PASSWORD,
    ) -> User:
        user = User(
            name=name or fake.name(),
            email=email or fake.unique.email(),
            password_hash=hash_password(password),
        )
        db_session.session.add(user)
        db_session.session.commit()
        return user

    return _create_user


@pytest.fixture
def task_factory(db_session) -> Callable[..., Task]:
    """
    Factory that creates and persists Task rows.

    Defaults: Faker title and description, pending status, no assignee and
    a due date seven days from now.
    """

    def _create_task(
        *,
        title: str | None = None,
        description: str | None = None,
        status: str = TaskStatus.PENDING.value,
        assignee_id: int | None = None,
        due_date: datetime | None = None,
    ) -> Task:
        task = Task(
            title=title or fake.sentence(nb_words=4),
            description=description or fake.paragraph(),
            status=status,
            assignee_id=assignee_id,
            due_date=due_date or datetime.now(timezone.utc) + timedelta(days=7),
        )
        db_session.session.add(task)
        db_session.session.commit()
        return task

    return _create_task


@pytest.fixture
def sample_user(user_factory) -> User:
    """A single user with predictable values."""
    return user_factory(name="Alice", email="alice@example.com")


@pytest.fixture
def sample_task(task_factory, sample_user) -> Task:
    """A single pending task assigned to ``sample_user``."""
    return task_factory(
        title="Sample Task",
        description="This is a sample task for testing",
        assignee_id=sample_user.id,
    )


@pytest.fixture
def valid_task_data() -> dict[str, Any]:
    """A complete, valid task creation payload without an assignee."""
    return {
        "title": "Test Task",
        "description": "This is a test task description",
        "status": TaskStatus.PENDING.value,
        "due_date": (datetime.now(timezone.utc) + timedelta(days=7)).isoformat(),
    }
