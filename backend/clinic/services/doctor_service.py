"""
Doctor account management and authentication.
"""

import logging
from dataclasses import replace
from typing import List, Optional

from clinic.core.config import now
from clinic.core.exceptions import NotFoundError, UnauthorizedError, ValidationError
from clinic.core.security import PasswordHasher, get_password_hasher
from clinic.domain.entities import Doctor
from clinic.domain.interfaces import IDoctorRepository

logger = logging.getLogger(__name__)

INVALID_CREDENTIALS = "invalid login or password"


def _public(doctor: Doctor) -> Doctor:
    """Copy of ``doctor`` that is safe to hand to callers."""
    return replace(doctor, password="")


class DoctorService:
    """Application service for doctor accounts.

    Login uniqueness is enforced by the storage layer; a duplicate surfaces as
    the repository's StorageError rather than a conflict raised here.
    """

    def __init__(
        self,
        doctor_repo: IDoctorRepository,
        password_hasher: Optional[PasswordHasher] = None,
    ) -> None:
        self.doctor_repo = doctor_repo
        self.password_hasher = password_hasher or get_password_hasher()

    def create_doctor(self, doctor: Doctor) -> Doctor:
        self.validate_doctor(doctor)

        timestamp = now()
        stored = replace(
            doctor,
            password=self.password_hasher.hash(doctor.password),
            created_at=timestamp,
            updated_at=timestamp,
        )
        created = self.doctor_repo.create(stored)
        logger.info("Doctor created", extra={"context": {"doctor_id": created.id}})
        return _public(created)

    def get_doctor(self, doctor_id: int) -> Doctor:
        if doctor_id <= 0:
            raise ValidationError("invalid doctor ID")
        return _public(self.doctor_repo.get_by_id(doctor_id))

    def get_all_doctors(self) -> List[Doctor]:
        return [_public(doctor) for doctor in self.doctor_repo.get_all()]

    def update_doctor(self, doctor: Doctor) -> Doctor:
        self.validate_doctor(doctor)

        stored = replace(
            doctor,
            password=self.password_hasher.hash(doctor.password),
            updated_at=now(),
        )
        updated = self.doctor_repo.update(stored)
        logger.info("Doctor updated", extra={"context": {"doctor_id": updated.id}})
        return _public(updated)

    def delete_doctor(self, doctor_id: int) -> None:
        if doctor_id <= 0:
            raise ValidationError("invalid doctor ID")
        self.doctor_repo.delete(doctor_id)
        logger.info("Doctor deleted", extra={"context": {"doctor_id": doctor_id}})

    def authenticate_doctor(self, login: str, password: str) -> Doctor:
        """Return the doctor matching the credentials, password cleared.

        Unknown logins and wrong passwords fail identically.
        """
        if not login or not login.strip() or not password:
            raise ValidationError("login and password are required")

        try:
            doctor = self.doctor_repo.get_by_login(login)
        except NotFoundError:
            doctor = None

        if doctor is None:
            self.password_hasher.dummy_verify()
            logger.warning("Authentication failed", extra={"context": {"login": login}})
            raise UnauthorizedError(INVALID_CREDENTIALS)

        if not self.password_hasher.verify(password, doctor.password):
            logger.warning("Authentication failed", extra={"context": {"login": login}})
            raise UnauthorizedError(INVALID_CREDENTIALS)

        logger.info("Doctor authenticated", extra={"context": {"doctor_id": doctor.id}})
        return _public(doctor)

    def validate_doctor(self, doctor: Optional[Doctor]) -> None:
        if doctor is None:
            raise ValidationError("doctor cannot be empty")

        name = doctor.name or ""
        if not name.strip():
            raise ValidationError("doctor name is required", "name")
        if len(name) > 255:
            raise ValidationError("doctor name is too long", "name")

        login = doctor.login or ""
        if not login.strip():
            raise ValidationError("doctor login is required", "login")
        if len(login) > 100:
            raise ValidationError("doctor login is too long", "login")

        if not doctor.password:
            raise ValidationError("doctor password is required", "password")
        if len(doctor.password) < 4:
            raise ValidationError("doctor password is too short", "password")
