"""
Data Transfer Objects (DTOs) for the JSON API.

Request DTOs parse raw JSON into domain entities; they only coerce types.
Business validation stays in the services so every entry point reports the
same messages. Response DTOs flatten entities into JSON-safe dicts.
"""

from dataclasses import asdict, dataclass, field
from typing import Any, Dict, List, Optional

from clinic.core.api_utils import isoformat, parse_date, parse_number
from clinic.core.exceptions import ClinicError, ValidationError
from clinic.domain.entities import (
    Appointment,
    DashboardStats,
    Doctor,
    FinanceReport,
    Patient,
    Service,
)


def _text(data: Dict[str, Any], key: str) -> str:
    value = data.get(key)
    if value is None:
        return ""
    if not isinstance(value, str):
        raise ValidationError(f"{key} must be a string", key)
    return value


# ---------------------------------------------------------------------------
# Requests
# ---------------------------------------------------------------------------


@dataclass
class PatientRequest:
    """DTO for patient create/update requests."""

    name: str = ""
    phone: str = ""
    national_id: str = ""
    email: str = ""
    birth_date: Optional[Any] = None
    address: str = ""
    notes: str = ""

    @classmethod
    def from_json(cls, data: Dict[str, Any]) -> "PatientRequest":
        return cls(
            name=_text(data, "name"),
            phone=_text(data, "phone"),
            national_id=_text(data, "national_id"),
            email=_text(data, "email"),
            birth_date=parse_date(data.get("birth_date"), "birth_date"),
            address=_text(data, "address"),
            notes=_text(data, "notes"),
        )

    def to_domain(self, patient_id: Optional[int] = None) -> Patient:
        return Patient(id=patient_id, **asdict(self))


@dataclass
class ServiceRequest:
    """DTO for service catalog create/update requests."""

    name: str = ""
    category: str = ""
    description: str = ""
    notes: str = ""
    price: float = 0.0
    duration: int = 0

    @classmethod
    def from_json(cls, data: Dict[str, Any]) -> "ServiceRequest":
        return cls(
            name=_text(data, "name"),
            category=_text(data, "category"),
            description=_text(data, "description"),
            notes=_text(data, "notes"),
            price=parse_number(data.get("price"), "price"),
            duration=parse_number(data.get("duration"), "duration", int),
        )

    def to_domain(self, service_id: Optional[int] = None) -> Service:
        return Service(id=service_id, **asdict(self))


@dataclass
class DoctorRequest:
    """DTO for doctor create/update requests."""

    name: str = ""
    email: str = ""
    login: str = ""
    password: str = ""
    is_admin: bool = False

    @classmethod
    def from_json(cls, data: Dict[str, Any]) -> "DoctorRequest":
        return cls(
            name=_text(data, "name"),
            email=_text(data, "email"),
            login=_text(data, "login"),
            password=_text(data, "password"),
            is_admin=bool(data.get("is_admin", False)),
        )

    def to_domain(self, doctor_id: Optional[int] = None) -> Doctor:
        return Doctor(id=doctor_id, **asdict(self))


@dataclass
class AppointmentRequest:
    """DTO for appointment create/update requests.

    ``status`` is not accepted: new appointments start as scheduled and
    transitions go through the complete/cancel endpoints.
    """

    patient_id: int = 0
    date: Optional[Any] = None
    time: str = ""
    service: str = ""
    doctor: str = ""
    price: float = 0.0
    duration: int = 0
    notes: str = ""

    @classmethod
    def from_json(cls, data: Dict[str, Any]) -> "AppointmentRequest":
        return cls(
            patient_id=parse_number(data.get("patient_id"), "patient_id", int),
            date=parse_date(data.get("date")),
            time=_text(data, "time"),
            service=_text(data, "service"),
            doctor=_text(data, "doctor"),
            price=parse_number(data.get("price"), "price"),
            duration=parse_number(data.get("duration"), "duration", int),
            notes=_text(data, "notes"),
        )

    def to_domain(self, appointment_id: Optional[int] = None) -> Appointment:
        return Appointment(id=appointment_id, **asdict(self))


@dataclass
class LoginRequest:
    login: str = ""
    password: str = ""

    @classmethod
    def from_json(cls, data: Dict[str, Any]) -> "LoginRequest":
        return cls(login=_text(data, "login"), password=_text(data, "password"))


# ---------------------------------------------------------------------------
# Responses
# ---------------------------------------------------------------------------


@dataclass
class PatientResponse:
    """DTO for patient API responses."""

    id: int
    name: str
    phone: str
    national_id: str
    email: str
    birth_date: Optional[str]
    address: str
    notes: str
    created_at: Optional[str]
    updated_at: Optional[str]

    @classmethod
    def from_domain(cls, patient: Patient) -> "PatientResponse":
        return cls(
            id=patient.id,
            name=patient.name,
            phone=patient.phone,
            national_id=patient.national_id,
            email=patient.email,
            birth_date=isoformat(patient.birth_date),
            address=patient.address,
            notes=patient.notes,
            created_at=isoformat(patient.created_at),
            updated_at=isoformat(patient.updated_at),
        )

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


@dataclass
class ServiceResponse:
    """DTO for service catalog API responses."""

    id: int
    name: str
    category: str
    description: str
    notes: str
    price: float
    duration: int
    created_at: Optional[str]
    updated_at: Optional[str]

    @classmethod
    def from_domain(cls, service: Service) -> "ServiceResponse":
        return cls(
            id=service.id,
            name=service.name,
            category=service.category,
            description=service.description,
            notes=service.notes,
            price=service.price,
            duration=service.duration,
            created_at=isoformat(service.created_at),
            updated_at=isoformat(service.updated_at),
        )

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


@dataclass
class DoctorResponse:
    """DTO for doctor API responses. Never carries the password hash."""

    id: int
    name: str
    email: str
    login: str
    is_admin: bool
    created_at: Optional[str]
    updated_at: Optional[str]

    @classmethod
    def from_domain(cls, doctor: Doctor) -> "DoctorResponse":
        return cls(
            id=doctor.id,
            name=doctor.name,
            email=doctor.email,
            login=doctor.login,
            is_admin=doctor.is_admin,
            created_at=isoformat(doctor.created_at),
            updated_at=isoformat(doctor.updated_at),
        )

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


@dataclass
class AppointmentResponse:
    """DTO for appointment API responses."""

    id: int
    patient_id: int
    patient_name: str
    date: Optional[str]
    time: str
    service: str
    doctor: str
    status: str
    price: float
    duration: int
    notes: str
    created_at: Optional[str]
    updated_at: Optional[str]

    @classmethod
    def from_domain(cls, appointment: Appointment) -> "AppointmentResponse":
        return cls(
            id=appointment.id,
            patient_id=appointment.patient_id,
            patient_name=appointment.patient_name,
            date=isoformat(appointment.date),
            time=appointment.time,
            service=appointment.service,
            doctor=appointment.doctor,
            status=appointment.status.value,
            price=appointment.price,
            duration=appointment.duration,
            notes=appointment.notes,
            created_at=isoformat(appointment.created_at),
            updated_at=isoformat(appointment.updated_at),
        )

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


@dataclass
class DashboardStatsResponse:
    total_patients: int
    total_appointments: int
    completed_appointments: int
    pending_appointments: int
    today_appointments: int
    total_revenue: float
    today_revenue: float

    @classmethod
    def from_domain(cls, stats: DashboardStats) -> "DashboardStatsResponse":
        return cls(**asdict(stats))

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


@dataclass
class FinanceReportResponse:
    total_income: float
    by_day: List[Dict[str, Any]] = field(default_factory=list)
    by_week: List[Dict[str, Any]] = field(default_factory=list)

    @classmethod
    def from_domain(cls, report: FinanceReport) -> "FinanceReportResponse":
        return cls(
            total_income=report.total_income,
            by_day=[asdict(bucket) for bucket in report.by_day],
            by_week=[asdict(bucket) for bucket in report.by_week],
        )

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


@dataclass
class LoginResponse:
    doctor: Dict[str, Any]
    access_token: str
    token_type: str = "Bearer"

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


@dataclass
class ErrorResponse:
    """DTO for error responses."""

    error: str
    message: str
    field: Optional[str] = None

    @classmethod
    def from_exception(cls, exc: ClinicError) -> "ErrorResponse":
        return cls(error=exc.error, message=exc.message, field=exc.field)

    def to_dict(self) -> Dict[str, Any]:
        payload = {"success": False, "error": self.error, "message": self.message}
        if self.field:
            payload["field"] = self.field
        return payload
