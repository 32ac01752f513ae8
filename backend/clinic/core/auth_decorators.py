"""
Authentication helpers for the JSON API.

Doctors log in through ``POST /api/auth`` and receive a JWT. Protected routes
use ``@jwt_required``, which expects ``Authorization: Bearer <token>`` and
stores the decoded identity on ``g.current_doctor``.

When ``LOGIN_DISABLED`` is set in the app config (tests, local tooling) the
decorator lets requests through with an anonymous admin identity.

Examples:
    @patient_bp.route("", methods=["POST"])
    @jwt_required
    def create_patient():
        ...
"""

from functools import wraps
from typing import Any, Dict, Optional

from flask import current_app, g, jsonify, request

from clinic.core.security import get_doctor_from_token


def get_current_doctor() -> Optional[Dict[str, Any]]:
    """Return the identity set by ``jwt_required`` for this request."""
    return getattr(g, "current_doctor", None)


def jwt_required(f):
    """Decorator to require JWT authentication for API endpoints.

    Extracts JWT from Authorization header and sets the current doctor.
    If no valid JWT, returns 401.
    """

    @wraps(f)
    def decorated_function(*args, **kwargs):
        if current_app.config.get("LOGIN_DISABLED", False):
            g.current_doctor = {"doctor_id": None, "login": "anonymous", "is_admin": True}
            return f(*args, **kwargs)

        auth_header = request.headers.get("Authorization")
        if not auth_header or not auth_header.startswith("Bearer "):
            return (
                jsonify(
                    {
                        "success": False,
                        "error": "unauthorized",
                        "message": "Missing or invalid Authorization header",
                    }
                ),
                401,
            )

        token = auth_header.split(" ", 1)[1]
        doctor = get_doctor_from_token(token)
        if not doctor:
            return (
                jsonify(
                    {
                        "success": False,
                        "error": "unauthorized",
                        "message": "Invalid or expired token",
                    }
                ),
                401,
            )

        g.current_doctor = doctor
        g.doctor_id = doctor["doctor_id"]
        return f(*args, **kwargs)

    return decorated_function


def admin_required(f):
    """Decorator restricting an endpoint to doctors with the admin flag.

    Must be stacked below ``@jwt_required``.
    """

    @wraps(f)
    def decorated_function(*args, **kwargs):
        doctor = get_current_doctor()
        if not doctor or not doctor.get("is_admin"):
            return (
                jsonify(
                    {
                        "success": False,
                        "error": "forbidden",
                        "message": "Administrator access required",
                    }
                ),
                403,
            )
        return f(*args, **kwargs)

    return decorated_function
