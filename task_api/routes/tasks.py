"""
Task endpoints.

Endpoints:
    POST   /api/tasks               - Create a task
    GET    /api/tasks               - Filtered, paginated listing
    GET    /api/tasks/due-soon      - Unfinished tasks due within 24 hours
    GET    /api/tasks/stats/status  - Counts per status and completion rate
    GET    /api/tasks/stats/user    - Counts per assignee
    GET    /api/tasks/<id>          - Retrieve one task
    PUT    /api/tasks/<id>          - Partial update
    DELETE /api/tasks/<id>          - Delete a task

All endpoints require a bearer token.

Listing query parameters:
    status       pending | in_progress | completed
    assignee_id  integer
    due_from     ISO-8601 lower bound on due_date (inclusive)
    due_to       ISO-8601 upper bound on due_date (inclusive)
    page         1-based page number (default 1)
    limit        page size (default DEFAULT_PAGE_LIMIT, 20)
"""

from __future__ import annotations

import logging

from flask import Blueprint, Response, current_app, g, jsonify, request

from .. import tasks
from ..auth import require_auth
from ..validation import (
    get_json_body,
    validate_task_create,
    validate_task_query,
    validate_task_update,
)

logger = logging.getLogger(__name__)

tasks_bp = Blueprint("tasks_api", __name__)


@tasks_bp.route("", methods=["POST"])
@require_auth
def create_task() -> tuple[Response, int]:
    """
    Create a task.

    Request Body (JSON):
        title: required
        description: required
        due_date: required, ISO-8601
        status: optional, defaults to pending
        assignee_id: optional, must reference an existing user

    Returns:
        201 with the stored task; 400 on invalid input or unknown assignee.
    """
    data = validate_task_create(get_json_body())
    logger.info("POST /api/tasks by user_id=%s", g.user_id)
    return jsonify(tasks.create_task(data)), 201


@tasks_bp.route("", methods=["GET"])
@require_auth
def list_tasks() -> tuple[Response, int]:
    """Return ``{data, meta}`` for the requested page of matching tasks."""
    params = validate_task_query(request.args)
    query = tasks.TaskQuery(
        status=params["status"],
        assignee_id=params["assignee_id"],
        due_from=params["due_from"],
        due_to=params["due_to"],
        page=params["page"] or tasks.DEFAULT_PAGE,
        limit=params["limit"] or current_app.config.get("DEFAULT_PAGE_LIMIT", tasks.DEFAULT_LIMIT),
    )
    return jsonify(tasks.list_tasks(query)), 200


@tasks_bp.route("/due-soon", methods=["GET"])
@require_auth
def due_soon() -> tuple[Response, int]:
    """Return unfinished tasks due within the next 24 hours."""
    return jsonify(tasks.tasks_due_soon()), 200


@tasks_bp.route("/stats/status", methods=["GET"])
@require_auth
def stats_by_status() -> tuple[Response, int]:
    return jsonify(tasks.stats_by_status()), 200


@tasks_bp.route("/stats/user", methods=["GET"])
@require_auth
def stats_by_user() -> tuple[Response, int]:
    return jsonify(tasks.stats_by_user()), 200


@tasks_bp.route("/<int:task_id>", methods=["GET"])
@require_auth
def get_task(task_id: int) -> tuple[Response, int]:
    """Return one task, or 404."""
    return jsonify(tasks.get_task(task_id)), 200


@tasks_bp.route("/<int:task_id>", methods=["PUT"])
@require_auth
def update_task(task_id: int) -> tuple[Response, int]:
    """
    Partially update a task.

    Only the fields present in the body change; ``assignee_id: null``
    unassigns the task.
    """
    fields = validate_task_update(get_json_body())
    logger.info("PUT /api/tasks/%s by user_id=%s", task_id, g.user_id)
    return jsonify(tasks.update_task(task_id, fields)), 200


@tasks_bp.route("/<int:task_id>", methods=["DELETE"])
@require_auth
def delete_task(task_id: int) -> tuple[Response, int]:
    logger.info("DELETE /api/tasks/%s by user_id=%s", task_id, g.user_id)
    return jsonify(tasks.delete_task(task_id)), 200
