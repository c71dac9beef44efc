"""
Authentication endpoints.

Endpoints:
    POST /api/auth/login  - Exchange email/password for an access token
"""

from __future__ import annotations

from flask import Blueprint, Response, jsonify

from ..auth import login
from ..validation import get_json_body, validate_login

auth_bp = Blueprint("auth_api", __name__)


def login_response() -> tuple[Response, int]:
    """
    Validate the login body and issue a token.

    Shared by ``/api/auth/login`` and its ``/api/users/login`` alias.

    Returns:
        201 with ``access_token`` and the user summary.
        400 if fields are missing, 404 for an unknown email, 401 for a wrong
        password.
    """
    email, password = validate_login(get_json_body())
    return jsonify(login(email, password)), 201


@auth_bp.route("/login", methods=["POST"])
def login_endpoint() -> tuple[Response, int]:
    """Authenticate a user and return a signed bearer token."""
    return login_response()
