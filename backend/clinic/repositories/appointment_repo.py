"""
Appointment repository backed by SQLAlchemy.
"""

from datetime import date
from decimal import Decimal
from typing import List, Optional

from clinic.core.exceptions import ConflictError
from clinic.db.base import Appointment as DbAppointment
from clinic.domain.entities import Appointment as DomainAppointment
from clinic.domain.interfaces import IAppointmentRepository

from .sql_base import SqlRepository, translate_errors


class AppointmentRepository(SqlRepository, IAppointmentRepository):
    """Repository for Appointment persistence operations.

    Slot uniqueness is backed by the ``uq_appointments_active_slot`` partial
    index; a violation surfaces as ConflictError.
    """

    model = DbAppointment
    entity_name = "appointment"

    @translate_errors
    def get_by_patient_id(self, patient_id: int) -> List[DomainAppointment]:
        rows = (
            self._active()
            .filter(DbAppointment.patient_id == patient_id)
            .order_by(DbAppointment.appointment_date, DbAppointment.appointment_time)
            .all()
        )
        return [self._to_domain(row) for row in rows]

    @translate_errors
    def get_by_date(self, day: date) -> List[DomainAppointment]:
        rows = (
            self._active()
            .filter(DbAppointment.appointment_date == day)
            .order_by(DbAppointment.appointment_time)
            .all()
        )
        return [self._to_domain(row) for row in rows]

    @translate_errors
    def get_by_date_range(self, start: date, end: date) -> List[DomainAppointment]:
        rows = (
            self._active()
            .filter(DbAppointment.appointment_date.between(start, end))
            .order_by(DbAppointment.appointment_date, DbAppointment.appointment_time)
            .all()
        )
        return [self._to_domain(row) for row in rows]

    @translate_errors
    def check_time_conflict(
        self, day: date, time: str, exclude_id: Optional[int] = None
    ) -> bool:
        query = self._active().filter(
            DbAppointment.appointment_date == day,
            DbAppointment.appointment_time == time,
        )
        if exclude_id is not None:
            query = query.filter(DbAppointment.id != exclude_id)
        return query.first() is not None

    def _integrity_error(self, exc) -> Exception:
        return ConflictError("time slot is already occupied")

    def _apply(self, row: DbAppointment, appointment: DomainAppointment) -> None:
        row.patient_id = appointment.patient_id
        row.patient_name = appointment.patient_name or None
        row.appointment_date = appointment.date
        row.appointment_time = appointment.time
        row.service = appointment.service
        row.doctor = appointment.doctor or None
        row.status = appointment.status.value
        row.price = Decimal(str(appointment.price))
        row.duration = appointment.duration
        row.notes = appointment.notes or None
        if appointment.updated_at is not None:
            row.updated_at = appointment.updated_at

    def _to_domain(self, row: DbAppointment) -> DomainAppointment:
        return DomainAppointment(
            id=row.id,
            patient_id=row.patient_id,
            patient_name=row.patient_name or "",
            date=row.appointment_date,
            time=row.appointment_time,
            service=row.service,
            doctor=row.doctor or "",
            status=row.status,
            price=float(row.price or 0),
            duration=row.duration or 0,
            notes=row.notes or "",
            created_at=row.created_at,
            updated_at=row.updated_at,
        )
