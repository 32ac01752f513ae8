"""
Common API utilities for consistent response formatting across all controllers.
"""

from datetime import date, datetime
from typing import Any, Optional

from flask import current_app, jsonify, request

from clinic.core.exceptions import ValidationError


def api_response(
    success: bool, message: str, data: Optional[Any] = None, status_code: int = 200
) -> tuple:
    """
    Standardized API response format for all endpoints.

    Returns:
        Tuple of (json_response, status_code)
    """
    response = {"success": success, "message": message}

    if data is not None:
        response["data"] = data

    return jsonify(response), status_code


def get_json_body() -> dict:
    """Return the request JSON object or raise a validation error."""
    data = request.get_json(silent=True)
    if not isinstance(data, dict):
        raise ValidationError("invalid JSON body")
    return data


def parse_date(value: Any, field_name: str = "date") -> Optional[date]:
    """Parse a YYYY-MM-DD (or full ISO datetime) string into a date.

    Empty values yield None so required-field checks stay in the services.
    """
    if value is None or value == "":
        return None
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if isinstance(value, str):
        text = value.strip()
        try:
            if len(text) == 10:
                return datetime.strptime(text, "%Y-%m-%d").date()
            if len(text) > 10 and text[10] in "T ":
                datetime.strptime(text[:10], "%Y-%m-%d")
                return datetime.fromisoformat(text.replace("Z", "+00:00")).date()
        except ValueError:
            pass
    raise ValidationError(f"invalid {field_name} format, use YYYY-MM-DD", field_name)


def parse_number(value: Any, field_name: str, cast=float):
    """Parse a numeric JSON field; missing values become zero.

    Integer fields reject fractional values instead of truncating them.
    """
    if value is None or value == "":
        return cast(0)
    try:
        number = float(value)
    except (TypeError, ValueError):
        raise ValidationError(f"invalid {field_name} value", field_name)
    if cast is int:
        if not number.is_integer():
            raise ValidationError(f"invalid {field_name} value", field_name)
        return int(number)
    return cast(number)


def isoformat(value: Optional[Any]) -> Optional[str]:
    return value.isoformat() if value else None


def get_services():
    """Return the service container wired by ``create_app``."""
    return current_app.extensions["clinic"]
