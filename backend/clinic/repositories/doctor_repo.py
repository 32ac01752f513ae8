"""Doctor repository backed by SQLAlchemy."""

from clinic.core.exceptions import NotFoundError, StorageError
from clinic.db.base import Doctor as DbDoctor
from clinic.domain.entities import Doctor as DomainDoctor
from clinic.domain.interfaces import IDoctorRepository

from .sql_base import SqlRepository, translate_errors


class DoctorRepository(SqlRepository, IDoctorRepository):
    """Repository for Doctor persistence operations.

    ``password`` on the domain entity maps to the ``password_hash`` column;
    hashing happens in DoctorService before anything reaches this layer.
    """

    model = DbDoctor
    entity_name = "doctor"

    @translate_errors
    def get_by_login(self, login: str) -> DomainDoctor:
        row = self._active().filter(DbDoctor.login == login).first()
        if row is None:
            raise NotFoundError("doctor not found")
        return self._to_domain(row)

    def _integrity_error(self, exc) -> Exception:
        return StorageError("login is already taken")

    def _apply(self, row: DbDoctor, doctor: DomainDoctor) -> None:
        row.name = doctor.name
        row.email = doctor.email or None
        row.login = doctor.login
        row.password_hash = doctor.password
        row.is_admin = bool(doctor.is_admin)
        if doctor.updated_at is not None:
            row.updated_at = doctor.updated_at

    def _to_domain(self, row: DbDoctor) -> DomainDoctor:
        return DomainDoctor(
            id=row.id,
            name=row.name,
            email=row.email or "",
            login=row.login,
            password=row.password_hash,
            is_admin=bool(row.is_admin),
            created_at=row.created_at,
            updated_at=row.updated_at,
        )
