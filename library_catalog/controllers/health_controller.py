"""
Health controller - health check endpoint for monitoring.
"""

import logging

from flask import Blueprint, jsonify
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError

from ..db.session import SessionLocal

logger = logging.getLogger(__name__)

health_bp = Blueprint("health", __name__)


def check_database_connection() -> bool:
    """Run ``SELECT 1`` against the configured database."""
    try:
        with SessionLocal() as db:
            db.execute(text("SELECT 1"))
        return True
    except SQLAlchemyError as e:
        logger.error(
            "Database connection failed",
            extra={"context": {"error": str(e)}},
            exc_info=True,
        )
        return False


@health_bp.route("/health", methods=["GET"])
def health_check():
    """
    Liveness plus database reachability.

    Returns:
        200 {"status": "healthy", "database": "connected"}
        503 {"status": "unhealthy", "database": "disconnected"}
    """
    db_status = check_database_connection()
    return jsonify(
        {
            "status": "healthy" if db_status else "unhealthy",
            "database": "connected" if db_status else "disconnected",
        }
    ), (200 if db_status else 503)
