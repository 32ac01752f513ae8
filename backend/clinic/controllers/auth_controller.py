"""
Authentication controller: exchanges doctor credentials for a JWT.
"""

from flask import Blueprint

from clinic.core.api_utils import api_response, get_json_body, get_services
from clinic.core.limiter_config import limiter
from clinic.core.security import create_doctor_token
from clinic.schemas.dtos import DoctorResponse, LoginRequest, LoginResponse

auth_bp = Blueprint("auth", __name__, url_prefix="/api/auth")


@auth_bp.route("", methods=["POST"])
@limiter.limit("10 per minute")
def login():
    credentials = LoginRequest.from_json(get_json_body())
    doctor = get_services().doctors.authenticate_doctor(
        credentials.login, credentials.password
    )
    token = create_doctor_token(doctor.id, doctor.login, doctor.is_admin)
    payload = LoginResponse(
        doctor=DoctorResponse.from_domain(doctor).to_dict(), access_token=token
    )
    return api_response(True, "Login successful", payload.to_dict())
