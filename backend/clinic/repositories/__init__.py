from .appointment_repo import AppointmentRepository
from .doctor_repo import DoctorRepository
from .memory import (
    InMemoryAppointmentRepository,
    InMemoryDoctorRepository,
    InMemoryPatientRepository,
    InMemoryServiceRepository,
)
from .patient_repo import PatientRepository
from .service_repo import ServiceRepository

__all__ = [
    "AppointmentRepository",
    "DoctorRepository",
    "PatientRepository",
    "ServiceRepository",
    "InMemoryAppointmentRepository",
    "InMemoryDoctorRepository",
    "InMemoryPatientRepository",
    "InMemoryServiceRepository",
]
