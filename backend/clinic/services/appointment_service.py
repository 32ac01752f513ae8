"""
Appointment service following SOLID principles.
"""

import logging
from datetime import date, datetime
from typing import List, Optional

from clinic.core.config import now
from clinic.core.exceptions import ConflictError, NotFoundError, ValidationError
from clinic.domain.entities import Appointment, AppointmentStatus
from clinic.domain.interfaces import IAppointmentRepository, IPatientRepository

logger = logging.getLogger(__name__)

SLOT_OCCUPIED = "time slot is already occupied"


def _as_date(value) -> date:
    return value.date() if isinstance(value, datetime) else value


class AppointmentService:
    """Application service for appointment scheduling.

    Business Rules:
    - The patient must exist; its name is cached on the appointment
    - No two active appointments share the same (date, time) slot
    - New appointments always start as scheduled
    - Only scheduled appointments can be completed or cancelled
    """

    def __init__(
        self,
        appointment_repo: IAppointmentRepository,
        patient_repo: IPatientRepository,
    ):
        self.appointment_repo = appointment_repo
        self.patient_repo = patient_repo

    def get_appointment(self, appointment_id: int) -> Appointment:
        if appointment_id <= 0:
            raise ValidationError("invalid appointment ID")
        return self.appointment_repo.get_by_id(appointment_id)

    def get_all_appointments(self) -> List[Appointment]:
        return self.appointment_repo.get_all()

    def create_appointment(self, appointment: Appointment) -> Appointment:
        """Schedule a new appointment.

        Any caller-supplied status is discarded.
        """
        self.validate_appointment(appointment)
        self._attach_patient(appointment)

        if self.appointment_repo.check_time_conflict(appointment.date, appointment.time):
            self._log_conflict(appointment)
            raise ConflictError(SLOT_OCCUPIED)

        appointment.status = AppointmentStatus.SCHEDULED
        timestamp = now()
        appointment.created_at = timestamp
        appointment.updated_at = timestamp

        created = self.appointment_repo.create(appointment)
        logger.info(
            "Appointment scheduled",
            extra={
                "context": {
                    "appointment_id": created.id,
                    "patient_id": created.patient_id,
                    "date": str(created.date),
                    "time": created.time,
                }
            },
        )
        return created

    def update_appointment(self, appointment: Appointment) -> Appointment:
        """Reschedule or edit an appointment.

        Status is not editable here; the stored status and creation time are
        kept. Use complete_appointment / cancel_appointment for transitions.
        """
        self.validate_appointment(appointment)
        self._attach_patient(appointment)

        if self.appointment_repo.check_time_conflict(
            appointment.date, appointment.time, appointment.id
        ):
            self._log_conflict(appointment)
            raise ConflictError(SLOT_OCCUPIED)

        existing = self.appointment_repo.get_by_id(appointment.id)
        appointment.status = existing.status
        appointment.created_at = existing.created_at
        appointment.updated_at = now()

        updated = self.appointment_repo.update(appointment)
        logger.info(
            "Appointment updated",
            extra={"context": {"appointment_id": updated.id}},
        )
        return updated

    def delete_appointment(self, appointment_id: int) -> None:
        if appointment_id <= 0:
            raise ValidationError("invalid appointment ID")
        self.appointment_repo.delete(appointment_id)
        logger.info(
            "Appointment deleted",
            extra={"context": {"appointment_id": appointment_id}},
        )

    def get_appointments_by_patient(self, patient_id: int) -> List[Appointment]:
        if patient_id <= 0:
            raise ValidationError("invalid patient ID")
        return self.appointment_repo.get_by_patient_id(patient_id)

    def get_appointments_by_date(self, day) -> List[Appointment]:
        """Appointments on the calendar day of ``day`` (time of day ignored)."""
        if day is None:
            raise ValidationError("date is required")
        return self.appointment_repo.get_by_date(_as_date(day))

    def get_appointments_by_date_range(self, start, end) -> List[Appointment]:
        """Appointments with start <= date <= end."""
        if start is None or end is None:
            raise ValidationError("start and end dates are required")
        start, end = _as_date(start), _as_date(end)
        if start > end:
            raise ValidationError("start date must not be after end date")
        return self.appointment_repo.get_by_date_range(start, end)

    def complete_appointment(self, appointment_id: int) -> Appointment:
        return self._transition(appointment_id, AppointmentStatus.COMPLETED, "complete")

    def cancel_appointment(self, appointment_id: int) -> Appointment:
        return self._transition(appointment_id, AppointmentStatus.CANCELLED, "cancel")

    def validate_appointment(self, appointment: Optional[Appointment]) -> None:
        """Check required fields only; slot conflicts are checked separately."""
        if appointment is None:
            raise ValidationError("appointment cannot be empty")

        if not appointment.patient_id or appointment.patient_id <= 0:
            raise ValidationError("patient ID is required", "patient_id")

        if appointment.date is None:
            raise ValidationError("date is required", "date")

        if not appointment.service or not appointment.service.strip():
            raise ValidationError("service is required", "service")

    def _attach_patient(self, appointment: Appointment) -> None:
        try:
            patient = self.patient_repo.get_by_id(appointment.patient_id)
        except NotFoundError:
            raise NotFoundError("patient not found", "patient_id")
        appointment.patient_name = patient.name

    def _transition(
        self, appointment_id: int, target: AppointmentStatus, verb: str
    ) -> Appointment:
        appointment = self.appointment_repo.get_by_id(appointment_id)

        if appointment.status is target:
            raise ConflictError(f"appointment is already {target.value}")
        if appointment.status.is_terminal:
            raise ConflictError(
                f"cannot {verb} a {appointment.status.value} appointment"
            )

        appointment.status = target
        appointment.updated_at = now()

        updated = self.appointment_repo.update(appointment)
        logger.info(
            f"Appointment {target.value}",
            extra={"context": {"appointment_id": appointment_id}},
        )
        return updated

    @staticmethod
    def _log_conflict(appointment: Appointment) -> None:
        logger.warning(
            "Appointment slot conflict",
            extra={
                "context": {
                    "appointment_id": appointment.id,
                    "date": str(appointment.date),
                    "time": appointment.time,
                }
            },
        )
