"""
Doctor controller. Reads need a valid token; writes need an admin token.
"""

from flask import Blueprint

from clinic.core.api_utils import api_response, get_json_body, get_services
from clinic.core.auth_decorators import admin_required, jwt_required
from clinic.schemas.dtos import DoctorRequest, DoctorResponse

doctor_bp = Blueprint("doctors", __name__, url_prefix="/api/doctors")


@doctor_bp.route("", methods=["GET"])
@jwt_required
def list_doctors():
    doctors = get_services().doctors.get_all_doctors()
    return api_response(
        True,
        "Doctors retrieved",
        [DoctorResponse.from_domain(d).to_dict() for d in doctors],
    )


@doctor_bp.route("", methods=["POST"])
@jwt_required
@admin_required
def create_doctor():
    doctor = DoctorRequest.from_json(get_json_body()).to_domain()
    created = get_services().doctors.create_doctor(doctor)
    return api_response(
        True, "Doctor created", DoctorResponse.from_domain(created).to_dict(), 201
    )


@doctor_bp.route("/<int:doctor_id>", methods=["GET"])
@jwt_required
def get_doctor(doctor_id: int):
    doctor = get_services().doctors.get_doctor(doctor_id)
    return api_response(
        True, "Doctor retrieved", DoctorResponse.from_domain(doctor).to_dict()
    )


@doctor_bp.route("/<int:doctor_id>", methods=["PUT"])
@jwt_required
@admin_required
def update_doctor(doctor_id: int):
    doctor = DoctorRequest.from_json(get_json_body()).to_domain(doctor_id)
    updated = get_services().doctors.update_doctor(doctor)
    return api_response(
        True, "Doctor updated", DoctorResponse.from_domain(updated).to_dict()
    )


@doctor_bp.route("/<int:doctor_id>", methods=["DELETE"])
@jwt_required
@admin_required
def delete_doctor(doctor_id: int):
    get_services().doctors.delete_doctor(doctor_id)
    return api_response(True, "Doctor deleted")
