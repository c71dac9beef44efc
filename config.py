"""
Configuration for the Task Manager API.

Provides environment-aware configuration classes: a shared ``Config`` base
class holds defaults, and environment-specific subclasses
(``DevelopmentConfig``, ``TestingConfig``, ``ProductionConfig``) override only
what differs.  ``get_config`` resolves the class at runtime from an explicit
argument or the ``FLASK_ENV`` environment variable.

Every value can be overridden through an environment variable so the same
code base serves any deployment.
"""

from __future__ import annotations

import os
from pathlib import Path

BASE_DIR = Path(__file__).resolve().parent


class Config:
    """
    Base configuration shared by all environments.

    Attributes:
        SECRET_KEY: Flask signing key.
        SQLALCHEMY_DATABASE_URI: Database connection string (default: local
            SQLite file).
        JWT_SECRET_KEY: HMAC secret used to sign and verify bearer tokens.
        JWT_EXPIRY_HOURS: Lifetime of an issued token.
        JWT_CLOCK_SKEW_SECONDS: Allowed clock drift when checking ``exp``.
        PASSWORD_HASH_METHOD: Werkzeug hashing method string.
        DEFAULT_PAGE_LIMIT: Page size used when a listing omits ``limit``.
    """

    SECRET_KEY: str = os.environ.get("SECRET_KEY", "dev-secret-key-change-in-production")
    SQLALCHEMY_TRACK_MODIFICATIONS: bool = False
    SQLALCHEMY_DATABASE_URI: str = os.environ.get(
        "DATABASE_URL",
        f"sqlite:///{BASE_DIR / 'instance' / 'task_api.db'}",
    )

    JWT_SECRET_KEY: str = os.environ.get(
        "JWT_SECRET_KEY", "dev-jwt-secret-change-in-production-0123456789"
    )
    JWT_EXPIRY_HOURS: int = int(os.environ.get("JWT_EXPIRY_HOURS", "1"))
    # Seconds of tolerance for clock differences between issuer and verifier
    JWT_CLOCK_SKEW_SECONDS: int = int(os.environ.get("JWT_CLOCK_SKEW_SECONDS", "30"))

    PASSWORD_HASH_METHOD: str = os.environ.get("PASSWORD_HASH_METHOD", "scrypt")
    DEFAULT_PAGE_LIMIT: int = int(os.environ.get("DEFAULT_PAGE_LIMIT", "20"))


class DevelopmentConfig(Config):
    """Development environment configuration."""

    DEBUG: bool = True
    TESTING: bool = False


class TestingConfig(Config):
    """
    Configuration for the automated test suite.

    Uses a separate SQLite database (``test_task_api.db``) so test runs never
    touch development data.  ``check_same_thread=False`` lets the Flask test
    client use connections opened on another thread.
    PBKDF2 with a low iteration count keeps hashing fast in tests.
    """

    DEBUG: bool = True
    TESTING: bool = True
    SQLALCHEMY_DATABASE_URI: str = os.environ.get(
        "TEST_DATABASE_URL",
        f"sqlite:///{BASE_DIR / 'instance' / 'test_task_api.db'}?check_same_thread=False",
    )
    SQLALCHEMY_ENGINE_OPTIONS: dict = {"pool_pre_ping": True}
    JWT_SECRET_KEY: str = os.environ.get(
        "TEST_JWT_SECRET_KEY", "test-jwt-secret-key-for-local-tests-123456"
    )
    PASSWORD_HASH_METHOD: str = "pbkdf2:sha256:1000"


class ProductionConfig(Config):
    """
    Configuration for production deployments.

    All secrets must be supplied through environment variables; the defaults
    in ``Config`` are insecure on purpose.
    """

    DEBUG: bool = False
    TESTING: bool = False


config = {
    "development": DevelopmentConfig,
    "testing": TestingConfig,
    "production": ProductionConfig,
    "default": DevelopmentConfig,
}


def get_config(env: str | None = None) -> type[Config]:
    """
    Resolve a configuration class by environment name.

    Args:
        env: One of ``"development"``, ``"testing"`` or ``"production"``.
            When ``None``, the ``FLASK_ENV`` environment variable is
            consulted, falling back to ``"development"``.

    Returns:
        The configuration class (not an instance).  Unknown names resolve to
        ``DevelopmentConfig``.
    """
    if env is None:
        env = os.environ.get("FLASK_ENV", "development")
    return config.get(env, config["default"])
