"""
Common API utilities for consistent response formatting across all controllers.
"""

from datetime import datetime, timezone
from typing import Any, Dict, Optional

from flask import jsonify


def error_response(
    message: str, status_code: int, errors: Optional[Dict[str, str]] = None
) -> tuple:
    """
    Standardized error format for all endpoints.

    Args:
        message: Human-readable message about the failure
        status_code: HTTP status code
        errors: Optional field name -> message map for validation failures

    Returns:
        Tuple of (json_response, status_code)
    """
    response: Dict[str, Any] = {
        "success": False,
        "message": message,
        "status": status_code,
        "timestamp": datetime.now(timezone.utc).isoformat(),
    }

    if errors:
        response["errors"] = errors

    return jsonify(response), status_code
