"""
Domain package - Pure business logic layer.

This package contains:
- entities.py: Domain entities
- interfaces.py: Repository contracts consumed by the services
"""

from .entities import (
    Appointment,
    AppointmentStatus,
    DashboardStats,
    DayIncome,
    Doctor,
    FinanceReport,
    Patient,
    Service,
    WeekIncome,
)
from .interfaces import (
    IAppointmentReader,
    IAppointmentRepository,
    IAppointmentWriter,
    IDoctorReader,
    IDoctorRepository,
    IDoctorWriter,
    IPatientReader,
    IPatientRepository,
    IPatientWriter,
    IServiceReader,
    IServiceRepository,
    IServiceWriter,
)

__all__ = [
    # Domain entities
    "Patient",
    "Service",
    "Doctor",
    "Appointment",
    "AppointmentStatus",
    "DashboardStats",
    "FinanceReport",
    "DayIncome",
    "WeekIncome",
    # Repository interfaces
    "IPatientRepository",
    "IServiceRepository",
    "IDoctorRepository",
    "IAppointmentRepository",
    # Segregated interfaces
    "IPatientReader",
    "IPatientWriter",
    "IServiceReader",
    "IServiceWriter",
    "IDoctorReader",
    "IDoctorWriter",
    "IAppointmentReader",
    "IAppointmentWriter",
]
