"""
Patient controller: JSON endpoints for patient cards.

HTTP concerns only; rules live in PatientService. Errors propagate as
ClinicError and are rendered by the application error handler.
"""

from flask import Blueprint, request

from clinic.core.api_utils import api_response, get_json_body, get_services
from clinic.core.auth_decorators import jwt_required
from clinic.schemas.dtos import AppointmentResponse, PatientRequest, PatientResponse

patient_bp = Blueprint("patients", __name__, url_prefix="/api/patients")


@patient_bp.route("", methods=["GET"])
@jwt_required
def list_patients():
    """List patients, optionally filtered by ``?query=``."""
    query = request.args.get("query", "")
    patients = get_services().patients.search_patients(query)
    return api_response(
        True,
        "Patients retrieved",
        [PatientResponse.from_domain(p).to_dict() for p in patients],
    )


@patient_bp.route("", methods=["POST"])
@jwt_required
def create_patient():
    patient = PatientRequest.from_json(get_json_body()).to_domain()
    created = get_services().patients.create_patient(patient)
    return api_response(
        True, "Patient created", PatientResponse.from_domain(created).to_dict(), 201
    )


@patient_bp.route("/<int:patient_id>", methods=["GET"])
@jwt_required
def get_patient(patient_id: int):
    patient = get_services().patients.get_patient(patient_id)
    return api_response(
        True, "Patient retrieved", PatientResponse.from_domain(patient).to_dict()
    )


@patient_bp.route("/<int:patient_id>", methods=["PUT"])
@jwt_required
def update_patient(patient_id: int):
    patient = PatientRequest.from_json(get_json_body()).to_domain(patient_id)
    updated = get_services().patients.update_patient(patient)
    return api_response(
        True, "Patient updated", PatientResponse.from_domain(updated).to_dict()
    )


@patient_bp.route("/<int:patient_id>", methods=["DELETE"])
@jwt_required
def delete_patient(patient_id: int):
    get_services().patients.delete_patient(patient_id)
    return api_response(True, "Patient deleted")


@patient_bp.route("/<int:patient_id>/appointments", methods=["GET"])
@jwt_required
def list_patient_appointments(patient_id: int):
    appointments = get_services().appointments.get_appointments_by_patient(patient_id)
    return api_response(
        True,
        "Appointments retrieved",
        [AppointmentResponse.from_domain(a).to_dict() for a in appointments],
    )
