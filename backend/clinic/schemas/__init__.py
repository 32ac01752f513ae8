"""
Schemas package - Data Transfer Objects for the JSON API.
"""

from .dtos import (
    AppointmentRequest,
    AppointmentResponse,
    DashboardStatsResponse,
    DoctorRequest,
    DoctorResponse,
    ErrorResponse,
    FinanceReportResponse,
    LoginRequest,
    LoginResponse,
    PatientRequest,
    PatientResponse,
    ServiceRequest,
    ServiceResponse,
)

__all__ = [
    "AppointmentRequest",
    "AppointmentResponse",
    "DashboardStatsResponse",
    "DoctorRequest",
    "DoctorResponse",
    "ErrorResponse",
    "FinanceReportResponse",
    "LoginRequest",
    "LoginResponse",
    "PatientRequest",
    "PatientResponse",
    "ServiceRequest",
    "ServiceResponse",
]
