"""
User endpoints.

Endpoints:
    POST   /api/users/register  - Create an account (public)
    POST   /api/users/login     - Alias of /api/auth/login (public)
    GET    /api/users           - List users
    GET    /api/users/me        - Identity carried by the bearer token
    GET    /api/users/<id>      - Retrieve one user
    PUT    /api/users/<id>      - Partial update
    DELETE /api/users/<id>      - Delete a user (their tasks become unassigned)

Every endpoint except register and login requires a bearer token.
"""

from __future__ import annotations

import logging

from flask import Blueprint, Response, g, jsonify

from .. import users
from ..auth import require_auth
from ..validation import get_json_body, validate_registration, validate_user_update
from .auth import login_response

logger = logging.getLogger(__name__)

users_bp = Blueprint("users_api", __name__)


@users_bp.route("/register", methods=["POST"])
def register() -> tuple[Response, int]:
    """
    Register a new user.

    Returns:
        201 with ``{id, name, email}``.
        400 if a field is missing or invalid.
        409 if the email is already registered.
    """
    data = validate_registration(get_json_body())
    summary = users.create_user(data["name"], data["email"], data["password"])
    return jsonify(summary), 201


@users_bp.route("/login", methods=["POST"])
def login_alias() -> tuple[Response, int]:
    """Same contract as ``POST /api/auth/login``."""
    return login_response()


@users_bp.route("", methods=["GET"])
@require_auth
def list_users() -> tuple[Response, int]:
    """Return all users as ``{id, name, email}`` summaries."""
    return jsonify(users.list_users()), 200


@users_bp.route("/me", methods=["GET"])
@require_auth
def current_user() -> tuple[Response, int]:
    """Return the identity claims of the presented token."""
    return jsonify({"user_id": g.user_id, "email": g.email}), 200


@users_bp.route("/<int:user_id>", methods=["GET"])
@require_auth
def get_user(user_id: int) -> tuple[Response, int]:
    """Return one user's summary, or 404."""
    return jsonify(users.find_user(user_id)), 200


@users_bp.route("/<int:user_id>", methods=["PUT"])
@require_auth
def update_user(user_id: int) -> tuple[Response, int]:
    """
    Partially update a user.

    Accepts any of ``name``, ``email``, ``password``; a new password is
    hashed before it is stored.
    """
    fields = validate_user_update(get_json_body())
    logger.info("PUT /api/users/%s by user_id=%s", user_id, g.user_id)
    return jsonify(users.update_user(user_id, fields)), 200


@users_bp.route("/<int:user_id>", methods=["DELETE"])
@require_auth
def delete_user(user_id: int) -> tuple[Response, int]:
    """Delete a user and return a confirmation message."""
    logger.info("DELETE /api/users/%s by user_id=%s", user_id, g.user_id)
    return jsonify(users.delete_user(user_id)), 200
