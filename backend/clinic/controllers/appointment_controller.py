"""
Appointment controller: scheduling and lifecycle endpoints.
"""

from flask import Blueprint, request

from clinic.core.api_utils import (
    api_response,
    get_json_body,
    get_services,
    parse_date,
    parse_number,
)
from clinic.core.auth_decorators import jwt_required
from clinic.schemas.dtos import AppointmentRequest, AppointmentResponse

appointment_bp = Blueprint("appointments", __name__, url_prefix="/api/appointments")


def _many(appointments, message: str = "Appointments retrieved"):
    return api_response(
        True, message, [AppointmentResponse.from_domain(a).to_dict() for a in appointments]
    )


def _one(appointment, message: str, status_code: int = 200):
    return api_response(
        True, message, AppointmentResponse.from_domain(appointment).to_dict(), status_code
    )


@appointment_bp.route("", methods=["GET"])
@jwt_required
def list_appointments():
    """List appointments.

    Filters (first match wins): ``?patient_id=``, ``?date=YYYY-MM-DD``,
    ``?start=&end=`` inclusive range.
    """
    appointments = get_services().appointments
    args = request.args

    if "patient_id" in args:
        patient_id = parse_number(args.get("patient_id"), "patient_id", int)
        return _many(appointments.get_appointments_by_patient(patient_id))
    if "date" in args:
        return _many(appointments.get_appointments_by_date(parse_date(args.get("date"))))
    if "start" in args or "end" in args:
        return _many(
            appointments.get_appointments_by_date_range(
                parse_date(args.get("start"), "start"),
                parse_date(args.get("end"), "end"),
            )
        )
    return _many(appointments.get_all_appointments())


@appointment_bp.route("", methods=["POST"])
@jwt_required
def create_appointment():
    appointment = AppointmentRequest.from_json(get_json_body()).to_domain()
    created = get_services().appointments.create_appointment(appointment)
    return _one(created, "Appointment created", 201)


@appointment_bp.route("/<int:appointment_id>", methods=["GET"])
@jwt_required
def get_appointment(appointment_id: int):
    return _one(
        get_services().appointments.get_appointment(appointment_id),
        "Appointment retrieved",
    )


@appointment_bp.route("/<int:appointment_id>", methods=["PUT"])
@jwt_required
def update_appointment(appointment_id: int):
    appointment = AppointmentRequest.from_json(get_json_body()).to_domain(
        appointment_id
    )
    updated = get_services().appointments.update_appointment(appointment)
    return _one(updated, "Appointment updated")


@appointment_bp.route("/<int:appointment_id>", methods=["DELETE"])
@jwt_required
def delete_appointment(appointment_id: int):
    get_services().appointments.delete_appointment(appointment_id)
    return api_response(True, "Appointment deleted")


@appointment_bp.route("/<int:appointment_id>/complete", methods=["POST"])
@jwt_required
def complete_appointment(appointment_id: int):
    completed = get_services().appointments.complete_appointment(appointment_id)
    return _one(completed, "Appointment completed")


@appointment_bp.route("/<int:appointment_id>/cancel", methods=["POST"])
@jwt_required
def cancel_appointment(appointment_id: int):
    cancelled = get_services().appointments.cancel_appointment(appointment_id)
    return _one(cancelled, "Appointment cancelled")
