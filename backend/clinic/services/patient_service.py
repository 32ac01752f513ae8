"""
Patient service following SOLID principles.
"""

import logging
from typing import List, Optional

from clinic.core.config import now
from clinic.core.exceptions import ConflictError, NotFoundError, ValidationError
from clinic.domain.entities import Patient
from clinic.domain.interfaces import IPatientRepository

logger = logging.getLogger(__name__)

NATIONAL_ID_LENGTH = 12


class PatientService:
    """Application service for patient-related use-cases.

    Business Rules:
    - Name is required; contact fields are length-limited
    - National ID, when given, is exactly 12 characters
    - Phone and national ID are unique among active patients
    """

    def __init__(self, patient_repo: IPatientRepository) -> None:
        self.patient_repo = patient_repo

    def get_patient(self, patient_id: int) -> Patient:
        if patient_id <= 0:
            raise ValidationError("invalid patient ID")
        return self.patient_repo.get_by_id(patient_id)

    def get_all_patients(self) -> List[Patient]:
        return self.patient_repo.get_all()

    def create_patient(self, patient: Patient) -> Patient:
        """Validate, check uniqueness and persist a new patient."""
        self.validate_patient(patient)
        self._ensure_unique(patient)

        timestamp = now()
        patient.created_at = timestamp
        patient.updated_at = timestamp

        created = self.patient_repo.create(patient)
        logger.info(
            "Patient created",
            extra={"context": {"patient_id": created.id}},
        )
        return created

    def update_patient(self, patient: Patient) -> Patient:
        """Validate and persist changes; duplicates are checked excluding self."""
        self.validate_patient(patient)
        self._ensure_unique(patient, exclude_id=patient.id)

        patient.updated_at = now()

        updated = self.patient_repo.update(patient)
        logger.info(
            "Patient updated",
            extra={"context": {"patient_id": updated.id}},
        )
        return updated

    def delete_patient(self, patient_id: int) -> None:
        if patient_id <= 0:
            raise ValidationError("invalid patient ID")
        self.patient_repo.delete(patient_id)
        logger.info("Patient deleted", extra={"context": {"patient_id": patient_id}})

    def search_patients(self, query: Optional[str]) -> List[Patient]:
        if not query or not query.strip():
            return self.patient_repo.get_all()
        return self.patient_repo.search(query.strip())

    def validate_patient(self, patient: Optional[Patient]) -> None:
        """Raise ValidationError describing the first rule ``patient`` breaks."""
        if patient is None:
            raise ValidationError("patient cannot be empty")

        name = patient.name or ""
        if not name.strip():
            raise ValidationError("patient name is required", "name")
        if len(name) > 100:
            raise ValidationError("patient name is too long", "name")

        if patient.national_id and len(patient.national_id) != NATIONAL_ID_LENGTH:
            raise ValidationError(
                "national ID must be exactly 12 characters", "national_id"
            )

        if patient.phone and len(patient.phone) > 20:
            raise ValidationError("phone number is too long", "phone")

        if patient.email:
            if len(patient.email) > 100:
                raise ValidationError("email is too long", "email")
            if "@" not in patient.email:
                raise ValidationError("invalid email format", "email")

        if patient.address and len(patient.address) > 200:
            raise ValidationError("address is too long", "address")

        if patient.notes and len(patient.notes) > 500:
            raise ValidationError("notes are too long", "notes")

    def _ensure_unique(self, patient: Patient, exclude_id: Optional[int] = None) -> None:
        if patient.national_id:
            existing = self._find(self.patient_repo.get_by_national_id, patient.national_id)
            if existing is not None and existing.id != exclude_id:
                logger.warning(
                    "Duplicate national ID rejected",
                    extra={"context": {"existing_patient_id": existing.id}},
                )
                raise ConflictError("duplicate national ID", "national_id")

        if patient.phone:
            existing = self._find(self.patient_repo.get_by_phone, patient.phone)
            if existing is not None and existing.id != exclude_id:
                logger.warning(
                    "Duplicate phone rejected",
                    extra={"context": {"existing_patient_id": existing.id}},
                )
                raise ConflictError("duplicate phone", "phone")

    @staticmethod
    def _find(lookup, value: str) -> Optional[Patient]:
        """Run a unique lookup; absence is not an error, storage failures are."""
        try:
            return lookup(value)
        except NotFoundError:
            return None
