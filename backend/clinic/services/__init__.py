# Services package initialization
# Use-case layer: business rules between controllers and repositories

from .appointment_service import AppointmentService
from .catalog_service import CatalogService
from .dashboard_service import DashboardService
from .doctor_service import DoctorService
from .patient_service import PatientService

__all__ = [
    "AppointmentService",
    "CatalogService",
    "DashboardService",
    "DoctorService",
    "PatientService",
]
