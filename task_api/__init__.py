"""
Task Manager API Flask application factory.

Provides the ``create_app`` factory that assembles the service: configuration,
the SQLAlchemy extension, the JSON error handlers and the API blueprints.
The factory pattern lets the WSGI server and the test suite build isolated
application instances from different configuration profiles.

Blueprints (all mounted under ``/api``):
  * **health_bp** -- liveness probe
  * **auth_bp**   -- login / token issuance
  * **users_bp**  -- user registration and CRUD
  * **tasks_bp**  -- task CRUD, filtered listing and statistics
"""

from __future__ import annotations

import logging
import os
import sqlite3
from pathlib import Path

from flask import Flask
from flask_sqlalchemy import SQLAlchemy
from sqlalchemy import event
from sqlalchemy.engine import Engine

from config import get_config

db = SQLAlchemy()

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)


@event.listens_for(Engine, "connect")
def _enable_sqlite_foreign_keys(dbapi_connection, connection_record) -> None:
    """
    Turn on foreign-key enforcement for SQLite connections.

    SQLite ignores ``ON DELETE SET NULL`` unless the pragma is set on every
    new connection.
    """
    if isinstance(dbapi_connection, sqlite3.Connection):
        cursor = dbapi_connection.cursor()
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.close()


def _ensure_sqlite_db_parent_exists(database_uri: str) -> None:
    """Create parent directories for file-based SQLite URIs when missing."""
    sqlite_prefix = "sqlite:///"
    if not database_uri.startswith(sqlite_prefix):
        return

    sqlite_path = database_uri[len(sqlite_prefix) :].split("?", 1)[0]
    if not sqlite_path or sqlite_path == ":memory:":
        return

    Path(sqlite_path).parent.mkdir(parents=True, exist_ok=True)


def create_app(config_name: str | None = None) -> Flask:
    """
    Create and configure the Task Manager API application.

    Args:
        config_name: Configuration environment name (``"development"``,
            ``"testing"``, ``"production"``).  When ``None``, the value is
            read from the ``FLASK_ENV`` environment variable.

    Returns:
        A configured Flask application with tables created.
    """
    app = Flask(__name__, instance_relative_config=True)
    config_class = get_config(config_name)
    app.config.from_object(config_class)

    logger.info("Creating task API app with config: %s", config_class.__name__)

    os.makedirs(app.instance_path, exist_ok=True)
    _ensure_sqlite_db_parent_exists(app.config.get("SQLALCHEMY_DATABASE_URI", ""))

    db.init_app(app)

    # Imported here to avoid circular imports: these modules reference ``db``.
    from .errors import register_error_handlers
    from .routes.auth import auth_bp
    from .routes.health import health_bp
    from .routes.tasks import tasks_bp
    from .routes.users import users_bp

    register_error_handlers(app)

    app.register_blueprint(health_bp, url_prefix="/api")
    app.register_blueprint(auth_bp, url_prefix="/api/auth")
    app.register_blueprint(users_bp, url_prefix="/api/users")
    app.register_blueprint(tasks_bp, url_prefix="/api/tasks")

    with app.app_context():
        db.create_all()
        logger.info("Database tables created")

    return app
