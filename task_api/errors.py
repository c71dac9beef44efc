"""
Error taxonomy and JSON error handlers.

Component functions raise the typed ``ApiError`` subclasses below; the
handlers registered by ``register_error_handlers`` turn them into the
``{"error": "<message>"}`` envelope with the matching status code, so route
functions never build error responses by hand.
"""

from __future__ import annotations

import logging

from flask import Flask, Response, jsonify
from werkzeug.exceptions import HTTPException

logger = logging.getLogger(__name__)


class ApiError(Exception):
    """Base class for errors that map to a fixed HTTP status code."""

    status_code: int = 500
    default_message: str = "Internal server error"

    def __init__(self, message: str | None = None) -> None:
        self.message = message or self.default_message
        super().__init__(self.message)


class BadRequest(ApiError):
    """Malformed input or a reference to a missing entity."""

    status_code = 400
    default_message = "Bad request"


class Unauthorized(ApiError):
    """Bad credentials or a missing/invalid bearer token."""

    status_code = 401
    default_message = "Unauthorized"


class NotFound(ApiError):
    status_code = 404
    default_message = "Resource not found"


class Conflict(ApiError):
    """Uniqueness violation."""

    status_code = 409
    default_message = "Conflict"


def _json_error(message: str, status_code: int) -> tuple[Response, int]:
    """Build the standard ``{"error": ...}`` response tuple."""
    return jsonify({"error": message}), status_code


def register_error_handlers(app: Flask) -> None:
    """
    Attach JSON error handlers to *app*.

    ``ApiError`` subclasses render their own message and status.  Werkzeug
    HTTP errors (unknown route, wrong method, unparsable body) keep their
    status code but use the same envelope.  Anything else is logged and
    reported as a 500 without leaking details.
    """

    @app.errorhandler(ApiError)
    def handle_api_error(error: ApiError) -> tuple[Response, int]:
        return _json_error(error.message, error.status_code)

    @app.errorhandler(HTTPException)
    def handle_http_exception(error: HTTPException) -> tuple[Response, int]:
        messages = {
            400: "Bad request",
            404: "Resource not found",
            405: "Method not allowed",
        }
        code = error.code or 500
        return _json_error(messages.get(code, error.name), code)

    @app.errorhandler(Exception)
    def handle_unexpected_error(error: Exception) -> tuple[Response, int]:
        logger.exception("Internal server error: %s", error)
        return _json_error("Internal server error", 500)
