"""
Request payload validation.

Each ``validate_*`` helper takes the parsed JSON body (or query-string
mapping) and returns a cleaned dictionary containing only the whitelisted
fields that were supplied.  Unknown fields are dropped.  Any rule violation
raises ``BadRequest`` with a message naming the offending field.

For update payloads a key that is absent means "leave unchanged" while a key
mapped to ``None`` means "set to null", which matters for ``assignee_id``.
"""

from __future__ import annotations

import re
from collections.abc import Mapping
from datetime import datetime
from typing import Any

from flask import request

from .errors import BadRequest
from .models import MAX_INTEGER, TaskStatus, ensure_utc

EMAIL_PATTERN = re.compile(r"^[^@\s]+@[^@\s]+\.[^@\s]+$")
MIN_PASSWORD_LENGTH = 6
VALID_STATUSES = [s.value for s in TaskStatus]


# =====================================================================
# Primitive helpers
# =====================================================================


def get_json_body() -> dict[str, Any]:
    """Return the request JSON object, or raise ``BadRequest``."""
    data = request.get_json(silent=True)
    if not isinstance(data, dict):
        raise BadRequest("Request body must be JSON")
    return data


def parse_datetime(value: Any, field: str) -> datetime:
    """Parse an ISO-8601 string into an aware UTC datetime."""
    if not isinstance(value, str) or not value.strip():
        raise BadRequest(f"'{field}' must be an ISO-8601 date string")
    try:
        parsed = datetime.fromisoformat(value.strip().replace("Z", "+00:00"))
    except ValueError:
        raise BadRequest(
            f"Invalid {field} format. Use ISO format (YYYY-MM-DDTHH:MM:SS)"
        ) from None
    return ensure_utc(parsed)


def parse_int(
    value: Any,
    field: str,
    minimum: int | None = None,
    maximum: int = MAX_INTEGER,
) -> int:
    """
    Coerce an int or a numeric string to ``int``.

    *minimum* is optional; *maximum* defaults to the largest value an
    INTEGER column can store.  Values outside the signed 64-bit range are
    rejected so the result is always safe to bind.
    """
    if isinstance(value, bool):
        raise BadRequest(f"'{field}' must be an integer")
    if isinstance(value, int):
        number = value
    elif isinstance(value, str) and re.fullmatch(r"-?\d+", value.strip()):
        number = int(value.strip())
    else:
        raise BadRequest(f"'{field}' must be an integer")
    if minimum is not None and number < minimum:
        raise BadRequest(f"'{field}' must not be less than {minimum}")
    if number > maximum or number < -MAX_INTEGER - 1:
        raise BadRequest(f"'{field}' is out of range")
    return number


def _required_string(data: Mapping[str, Any], field: str) -> str:
    value = data.get(field)
    if not isinstance(value, str) or not value.strip():
        raise BadRequest(f"'{field}' is required")
    return value


def _email(value: Any) -> str:
    if not isinstance(value, str) or not EMAIL_PATTERN.match(value.strip()):
        raise BadRequest("'email' must be a valid email address")
    return value.strip()


def _password(value: Any) -> str:
    if not isinstance(value, str) or len(value) < MIN_PASSWORD_LENGTH:
        raise BadRequest(
            f"'password' must be at least {MIN_PASSWORD_LENGTH} characters long"
        )
    return value


def _status(value: Any) -> str:
    if value not in VALID_STATUSES:
        raise BadRequest(f"Invalid status. Must be one of: {VALID_STATUSES}")
    return value


# =====================================================================
# User payloads
# =====================================================================


def validate_registration(data: Mapping[str, Any]) -> dict[str, str]:
    """Validate a registration body: ``name``, ``email``, ``password``."""
    name = _required_string(data, "name").strip()
    return {
        "name": name,
        "email": _email(data.get("email")),
        "password": _password(data.get("password")),
    }


def validate_login(data: Mapping[str, Any]) -> tuple[str, str]:
    """
    Validate a login body and return ``(email, password)``.

    No length rule is applied to the password here: a wrong password of any
    length must reach the credential check.
    """
    email = _required_string(data, "email").strip()
    password = _required_string(data, "password")
    return email, password


def validate_user_update(data: Mapping[str, Any]) -> dict[str, str]:
    """Validate a partial user update; every field is optional."""
    cleaned: dict[str, str] = {}
    if "name" in data:
        cleaned["name"] = _required_string(data, "name").strip()
    if "email" in data:
        cleaned["email"] = _email(data["email"])
    if "password" in data:
        cleaned["password"] = _password(data["password"])
    return cleaned


# =====================================================================
# Task payloads
# =====================================================================


def validate_task_create(data: Mapping[str, Any]) -> dict[str, Any]:
    """
    Validate a task creation body.

    ``title``, ``description`` and ``due_date`` are required; ``status``
    and ``assignee_id`` are optional.
    """
    cleaned: dict[str, Any] = {
        "title": _required_string(data, "title").strip(),
        "description": _required_string(data, "description").strip(),
        "due_date": parse_datetime(data.get("due_date"), "due_date"),
    }
    if data.get("status") is not None:
        cleaned["status"] = _status(data["status"])
    if data.get("assignee_id") is not None:
        cleaned["assignee_id"] = parse_int(data["assignee_id"], "assignee_id")
    return cleaned


def validate_task_update(data: Mapping[str, Any]) -> dict[str, Any]:
    """
    Validate a partial task update.

    Only supplied keys are returned.  ``assignee_id`` may be ``null`` to
    unassign the task; the other fields cannot be nulled.
    """
    cleaned: dict[str, Any] = {}
    if "title" in data:
        cleaned["title"] = _required_string(data, "title").strip()
    if "description" in data:
        cleaned["description"] = _required_string(data, "description").strip()
    if "due_date" in data:
        cleaned["due_date"] = parse_datetime(data["due_date"], "due_date")
    if "status" in data:
        cleaned["status"] = _status(data["status"])
    if "assignee_id" in data:
        value = data["assignee_id"]
        cleaned["assignee_id"] = (
            None if value is None else parse_int(value, "assignee_id")
        )
    return cleaned


def validate_task_query(args: Mapping[str, Any]) -> dict[str, Any]:
    """
    Validate listing query-string parameters.

    Returns a dict with keys ``status``, ``assignee_id``, ``due_from``,
    ``due_to`` (``None`` when omitted), and ``page`` / ``limit`` (``None``
    when omitted so the caller applies its defaults).
    """
    status = args.get("status") or None
    assignee_id = args.get("assignee_id")
    due_from = args.get("due_from")
    due_to = args.get("due_to")
    page = args.get("page")
    limit = args.get("limit")

    return {
        "status": _status(status) if status is not None else None,
        "assignee_id": (
            parse_int(assignee_id, "assignee_id") if assignee_id not in (None, "") else None
        ),
        "due_from": parse_datetime(due_from, "due_from") if due_from else None,
        "due_to": parse_datetime(due_to, "due_to") if due_to else None,
        "page": parse_int(page, "page", minimum=1) if page not in (None, "") else None,
        "limit": parse_int(limit, "limit", minimum=1) if limit not in (None, "") else None,
    }
