"""Patient repository backed by SQLAlchemy."""

from typing import List

from sqlalchemy import or_

from clinic.core.exceptions import NotFoundError
from clinic.db.base import Patient as DbPatient
from clinic.domain.entities import Patient as DomainPatient
from clinic.domain.interfaces import IPatientRepository

from .sql_base import SqlRepository, translate_errors


class PatientRepository(SqlRepository, IPatientRepository):
    """Repository for Patient persistence operations."""

    model = DbPatient
    entity_name = "patient"

    @translate_errors
    def get_by_phone(self, phone: str) -> DomainPatient:
        row = self._active().filter(DbPatient.phone == phone).first()
        if row is None:
            raise NotFoundError("patient not found")
        return self._to_domain(row)

    @translate_errors
    def get_by_national_id(self, national_id: str) -> DomainPatient:
        row = self._active().filter(DbPatient.national_id == national_id).first()
        if row is None:
            raise NotFoundError("patient not found")
        return self._to_domain(row)

    @translate_errors
    def search(self, query: str) -> List[DomainPatient]:
        pattern = f"%{query}%"
        rows = (
            self._active()
            .filter(
                or_(
                    DbPatient.name.ilike(pattern),
                    DbPatient.phone.ilike(pattern),
                    DbPatient.email.ilike(pattern),
                    DbPatient.national_id.ilike(pattern),
                )
            )
            .order_by(DbPatient.name)
            .all()
        )
        return [self._to_domain(row) for row in rows]

    def _apply(self, row: DbPatient, patient: DomainPatient) -> None:
        row.name = patient.name
        # Empty optional fields are stored as NULL so they never collide
        row.phone = patient.phone or None
        row.national_id = patient.national_id or None
        row.email = patient.email or None
        row.birth_date = patient.birth_date
        row.address = patient.address or None
        row.notes = patient.notes or None
        if patient.updated_at is not None:
            row.updated_at = patient.updated_at

    def _to_domain(self, row: DbPatient) -> DomainPatient:
        return DomainPatient(
            id=row.id,
            name=row.name,
            phone=row.phone or "",
            national_id=row.national_id or "",
            email=row.email or "",
            birth_date=row.birth_date,
            address=row.address or "",
            notes=row.notes or "",
            created_at=row.created_at,
            updated_at=row.updated_at,
        )
