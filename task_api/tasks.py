"""
Task component: CRUD, filtered listing, the due-soon window and statistics.

All functions run inside an application context against ``db.session`` and
return JSON-ready dictionaries.  Listings are enriched with the assignee's
name through a left join so unassigned tasks (or tasks whose assignee was
deleted) carry ``assignee_name: null``.

Assignee existence is checked before every write that sets ``assignee_id``;
the foreign key on ``tasks.assignee_id`` is the final authority and a
violation surfacing at commit time is reported as ``BadRequest`` too.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from typing import Any

from sqlalchemy import func, select
from sqlalchemy.exc import IntegrityError

from . import db
from .errors import BadRequest, NotFound
from .models import MAX_INTEGER, Task, TaskStatus, User, ensure_utc

logger = logging.getLogger(__name__)

DEFAULT_PAGE = 1
DEFAULT_LIMIT = 20
DUE_SOON_WINDOW = timedelta(hours=24)

ASSIGNEE_NOT_FOUND_MESSAGE = "Assignee not found"
TASK_NOT_FOUND_MESSAGE = "Task not found"
TASK_CONSTRAINT_MESSAGE = "Task violates a data constraint"


@dataclass
class TaskQuery:
    """
    Filters and pagination for ``list_tasks``.

    ``due_from`` and ``due_to`` bound ``due_date`` inclusively.  ``page`` and
    ``limit`` are 1-based and must be at least 1.
    """

    status: str | None = None
    assignee_id: int | None = None
    due_from: datetime | None = None
    due_to: datetime | None = None
    page: int = DEFAULT_PAGE
    limit: int = DEFAULT_LIMIT

    @property
    def offset(self) -> int:
        return (self.page - 1) * self.limit


# =====================================================================
# Helpers
# =====================================================================


def _get_task_or_404(task_id: int) -> Task:
    # Ids outside the INTEGER range cannot exist and cannot be bound
    task = db.session.get(Task, task_id) if 0 < task_id <= MAX_INTEGER else None
    if task is None:
        raise NotFound(TASK_NOT_FOUND_MESSAGE)
    return task


def _ensure_assignee_exists(assignee_id: int) -> None:
    if not 0 < assignee_id <= MAX_INTEGER:
        raise BadRequest(ASSIGNEE_NOT_FOUND_MESSAGE)
    if db.session.get(User, assignee_id) is None:
        raise BadRequest(ASSIGNEE_NOT_FOUND_MESSAGE)


def _commit_task() -> None:
    """
    Commit the session, translating store constraint violations to ``BadRequest``.

    A foreign-key failure can only come from ``assignee_id`` and is reported
    as a missing assignee; any other violation gets a neutral message.
    """
    try:
        db.session.commit()
    except IntegrityError as exc:
        db.session.rollback()
        logger.warning("Task write rejected by store constraint: %s", exc.orig)
        if "FOREIGN KEY" in str(exc.orig).upper():
            raise BadRequest(ASSIGNEE_NOT_FOUND_MESSAGE) from exc
        raise BadRequest(TASK_CONSTRAINT_MESSAGE) from exc


def _filter_predicates(query: TaskQuery) -> list:
    """
    Build the WHERE predicates for a listing.

    Shared by the count and the page query so ``meta.total`` always
    describes exactly the rows being paginated.
    """
    predicates = []
    if query.status is not None:
        predicates.append(Task.status == query.status)
    if query.assignee_id is not None:
        predicates.append(Task.assignee_id == query.assignee_id)
    if query.due_from is not None:
        predicates.append(Task.due_date >= query.due_from)
    if query.due_to is not None:
        predicates.append(Task.due_date <= query.due_to)
    return predicates


def _with_assignee_name():
    """Select tasks left-joined to their assignee's name."""
    return select(Task, User.name.label("assignee_name")).outerjoin(
        User, Task.assignee_id == User.id
    )


def _serialize_rows(rows) -> list[dict[str, Any]]:
    return [{**task.to_dict(), "assignee_name": assignee_name} for task, assignee_name in rows]


# =====================================================================
# CRUD
# =====================================================================


def create_task(data: dict[str, Any]) -> dict[str, Any]:
    """
    Create a task from a validated payload.

    ``status`` defaults to pending and ``assignee_id`` to null.

    Raises:
        BadRequest: If ``assignee_id`` references a missing user.
    """
    assignee_id = data.get("assignee_id")
    if assignee_id is not None:
        _ensure_assignee_exists(assignee_id)

    task = Task(
        title=data["title"],
        description=data["description"],
        status=data.get("status") or TaskStatus.PENDING.value,
        assignee_id=assignee_id,
        due_date=data["due_date"],
    )
    db.session.add(task)
    _commit_task()

    logger.info("Created task %s", task.id)
    return task.to_dict()


def get_task(task_id: int) -> dict[str, Any]:
    """Return one task, or raise ``NotFound``."""
    return _get_task_or_404(task_id).to_dict()


def update_task(task_id: int, fields: dict[str, Any]) -> dict[str, Any]:
    """
    Apply a partial update.

    Only keys present in *fields* are written.  ``assignee_id: None``
    unassigns the task.

    Raises:
        NotFound: If the task does not exist.
        BadRequest: If a non-null ``assignee_id`` references a missing user.
    """
    task = _get_task_or_404(task_id)

    if fields.get("assignee_id") is not None:
        _ensure_assignee_exists(fields["assignee_id"])

    for field in ("title", "description", "status", "assignee_id", "due_date"):
        if field in fields:
            setattr(task, field, fields[field])

    _commit_task()
    logger.info("Updated task %s (fields: %s)", task_id, sorted(fields))
    return task.to_dict()


def delete_task(task_id: int) -> dict[str, str]:
    """Delete a task, or raise ``NotFound``."""
    task = _get_task_or_404(task_id)
    db.session.delete(task)
    db.session.commit()

    logger.info("Deleted task %s", task_id)
    return {"message": "Task removed successfully"}


# =====================================================================
# Queries
# =====================================================================


def list_tasks(query: TaskQuery) -> dict[str, Any]:
    """
    Return one page of tasks matching the filters.

    Rows are ordered by ``due_date`` ascending, ties broken by id.

    Returns:
        ``{"data": [...], "meta": {"total", "page", "limit"}}`` where
        ``total`` counts every matching row regardless of the page.
    """
    if query.page < 1 or query.limit < 1:
        raise BadRequest("'page' and 'limit' must be at least 1")

    predicates = _filter_predicates(query)

    total = db.session.scalar(
        select(func.count()).select_from(Task).where(*predicates)
    )
    meta = {"total": int(total or 0), "page": query.page, "limit": query.limit}

    # An offset past the INTEGER range is necessarily past the last row
    if query.offset > MAX_INTEGER:
        return {"data": [], "meta": meta}

    rows = db.session.execute(
        _with_assignee_name()
        .where(*predicates)
        .order_by(Task.due_date.asc(), Task.id.asc())
        .limit(query.limit)
        .offset(query.offset)
    ).all()

    return {
        "data": _serialize_rows(rows),
        "meta": meta,
    }


def tasks_due_soon(now: datetime | None = None) -> list[dict[str, Any]]:
    """
    Return unfinished tasks due within the next 24 hours.

    The window ``[now, now + 24h]`` is inclusive on both ends; completed
    tasks are excluded whatever their due date.

    Args:
        now: Reference time, defaulting to the current UTC time.
    """
    now = ensure_utc(now) if now is not None else datetime.now(timezone.utc)
    rows = db.session.execute(
        _with_assignee_name()
        .where(Task.due_date.between(now, now + DUE_SOON_WINDOW))
        .where(Task.status != TaskStatus.COMPLETED.value)
        .order_by(Task.due_date.asc(), Task.id.asc())
    ).all()
    return _serialize_rows(rows)


def completion_percentage(completed: int, total: int) -> int:
    """Percentage of completed tasks rounded half up; 0 when there are none."""
    if total == 0:
        return 0
    return int(completed * 100 / total + 0.5)


def stats_by_status() -> dict[str, int]:
    """
    Count tasks per status.

    Every status key is present, zero when no task has it.  ``total`` is the
    sum of the counts and ``percent_completed`` the rounded share of
    completed tasks.
    """
    rows = db.session.execute(
        select(Task.status, func.count(Task.id)).group_by(Task.status)
    ).all()

    stats = {status.value: 0 for status in TaskStatus}
    for status, count in rows:
        stats[status] = int(count)

    total = sum(stats.values())
    stats["total"] = total
    stats["percent_completed"] = completion_percentage(
        stats[TaskStatus.COMPLETED.value], total
    )
    return stats


def stats_by_user() -> list[dict[str, Any]]:
    """
    Count tasks per assignee.

    Unassigned tasks are grouped under ``user_id: null``.  Users without
    tasks do not appear.
    """
    rows = db.session.execute(
        select(
            User.id.label("user_id"),
            User.name.label("user_name"),
            func.count(Task.id).label("count"),
        )
        .select_from(Task)
        .outerjoin(User, Task.assignee_id == User.id)
        .group_by(User.id, User.name)
        .order_by(User.id)
    ).all()

    return [
        {"user_id": user_id, "user_name": user_name, "count": int(count)}
        for user_id, user_name, count in rows
    ]
