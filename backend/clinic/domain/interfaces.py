"""
Abstract interfaces for repositories following Interface Segregation Principle.

These interfaces define the storage capabilities the services depend on.
Implementations raise ``NotFoundError`` when a requested row is absent (or
soft-deleted) and ``StorageError`` for backend failures, so services can tell
"no such patient" apart from "the database is down".
"""

from abc import ABC, abstractmethod
from datetime import date
from typing import List, Optional

from .entities import Appointment, Doctor, Patient, Service


class IPatientReader(ABC):
    """Interface for patient read operations."""

    @abstractmethod
    def get_by_id(self, patient_id: int) -> Patient:
        """Get patient by ID. Raises NotFoundError."""
        pass

    @abstractmethod
    def get_all(self) -> List[Patient]:
        """Get all active patients."""
        pass

    @abstractmethod
    def get_by_phone(self, phone: str) -> Patient:
        """Get patient by phone. Raises NotFoundError."""
        pass

    @abstractmethod
    def get_by_national_id(self, national_id: str) -> Patient:
        """Get patient by national ID. Raises NotFoundError."""
        pass

    @abstractmethod
    def search(self, query: str) -> List[Patient]:
        """Case-insensitive search over name, phone, email and national ID."""
        pass


class IPatientWriter(ABC):
    """Interface for patient write operations."""

    @abstractmethod
    def create(self, patient: Patient) -> Patient:
        """Persist a new patient and return it with its assigned ID."""
        pass

    @abstractmethod
    def update(self, patient: Patient) -> Patient:
        """Update an existing patient. Raises NotFoundError."""
        pass

    @abstractmethod
    def delete(self, patient_id: int) -> None:
        """Soft-delete a patient. Raises NotFoundError."""
        pass


class IPatientRepository(IPatientReader, IPatientWriter):
    """Complete patient repository interface combining read/write operations."""

    pass


class IServiceReader(ABC):
    """Interface for service catalog read operations."""

    @abstractmethod
    def get_by_id(self, service_id: int) -> Service:
        """Get service by ID. Raises NotFoundError."""
        pass

    @abstractmethod
    def get_all(self) -> List[Service]:
        """Get all services."""
        pass

    @abstractmethod
    def get_by_category(self, category: str) -> List[Service]:
        """Get services in a category (case-insensitive match)."""
        pass

    @abstractmethod
    def search(self, query: str) -> List[Service]:
        """Case-insensitive search over name, category and description."""
        pass


class IServiceWriter(ABC):
    """Interface for service catalog write operations."""

    @abstractmethod
    def create(self, service: Service) -> Service:
        pass

    @abstractmethod
    def update(self, service: Service) -> Service:
        pass

    @abstractmethod
    def delete(self, service_id: int) -> None:
        pass


class IServiceRepository(IServiceReader, IServiceWriter):
    """Complete service catalog repository interface."""

    pass


class IDoctorReader(ABC):
    """Interface for doctor read operations."""

    @abstractmethod
    def get_by_id(self, doctor_id: int) -> Doctor:
        """Get doctor by ID. Raises NotFoundError."""
        pass

    @abstractmethod
    def get_all(self) -> List[Doctor]:
        pass

    @abstractmethod
    def get_by_login(self, login: str) -> Optional[Doctor]:
        """Get doctor by login. Raises NotFoundError (None is tolerated too)."""
        pass


class IDoctorWriter(ABC):
    """Interface for doctor write operations."""

    @abstractmethod
    def create(self, doctor: Doctor) -> Doctor:
        """Persist a doctor. Duplicate logins raise StorageError."""
        pass

    @abstractmethod
    def update(self, doctor: Doctor) -> Doctor:
        pass

    @abstractmethod
    def delete(self, doctor_id: int) -> None:
        pass


class IDoctorRepository(IDoctorReader, IDoctorWriter):
    """Complete doctor repository interface."""

    pass


class IAppointmentReader(ABC):
    """Interface for appointment read operations."""

    @abstractmethod
    def get_by_id(self, appointment_id: int) -> Appointment:
        """Get appointment by ID. Raises NotFoundError."""
        pass

    @abstractmethod
    def get_all(self) -> List[Appointment]:
        pass

    @abstractmethod
    def get_by_patient_id(self, patient_id: int) -> List[Appointment]:
        """Get all appointments for a patient."""
        pass

    @abstractmethod
    def get_by_date(self, day: date) -> List[Appointment]:
        """Get appointments on a calendar day."""
        pass

    @abstractmethod
    def get_by_date_range(self, start: date, end: date) -> List[Appointment]:
        """Get appointments with start <= date <= end."""
        pass

    @abstractmethod
    def check_time_conflict(
        self, day: date, time: str, exclude_id: Optional[int] = None
    ) -> bool:
        """True if another non-deleted appointment occupies (day, time)."""
        pass


class IAppointmentWriter(ABC):
    """Interface for appointment write operations."""

    @abstractmethod
    def create(self, appointment: Appointment) -> Appointment:
        """Persist an appointment. An occupied slot raises ConflictError."""
        pass

    @abstractmethod
    def update(self, appointment: Appointment) -> Appointment:
        pass

    @abstractmethod
    def delete(self, appointment_id: int) -> None:
        pass


class IAppointmentRepository(IAppointmentReader, IAppointmentWriter):
    """Complete appointment repository interface."""

    pass
