"""Health-check endpoint used by load balancers and orchestrator probes."""

from __future__ import annotations

import os

from flask import Blueprint, Response, jsonify

health_bp = Blueprint("health", __name__)


@health_bp.route("/health", methods=["GET"])
def health_check() -> tuple[Response, int]:
    """Return service status; public, no authentication required."""
    return (
        jsonify(
            {
                "status": "healthy",
                "service": "task-api",
                "environment": os.getenv("ENVIRONMENT", "unknown"),
            }
        ),
        200,
    )
