"""
Domain entities - Pure business logic, no framework dependencies.

Entities are plain data holders. Business validation lives in the services
so that it can run standalone and report the exact reason for a rejection.
"""

from dataclasses import dataclass, field
from datetime import date, datetime
from enum import Enum
from typing import List, Optional


class AppointmentStatus(str, Enum):
    """Appointment lifecycle: scheduled -> completed | cancelled."""

    SCHEDULED = "scheduled"
    COMPLETED = "completed"
    CANCELLED = "cancelled"

    @property
    def is_terminal(self) -> bool:
        return self is not AppointmentStatus.SCHEDULED


@dataclass
class Patient:
    """Domain entity representing a clinic patient."""

    id: Optional[int] = None
    name: str = ""
    phone: str = ""
    national_id: str = ""
    email: str = ""
    birth_date: Optional[date] = None
    address: str = ""
    notes: str = ""
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


@dataclass
class Service:
    """Domain entity for an offering in the service catalog."""

    id: Optional[int] = None
    name: str = ""
    category: str = ""
    description: str = ""
    notes: str = ""
    price: float = 0.0
    duration: int = 0  # minutes
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


@dataclass
class Doctor:
    """Domain entity for a doctor account.

    ``password`` holds the bcrypt hash once stored; services clear it before
    handing a doctor back to callers.
    """

    id: Optional[int] = None
    name: str = ""
    email: str = ""
    login: str = ""
    password: str = ""
    is_admin: bool = False
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


@dataclass
class Appointment:
    """Domain entity for Appointment business logic."""

    id: Optional[int] = None
    patient_id: int = 0
    patient_name: str = ""
    date: Optional[date] = None
    time: str = ""
    service: str = ""
    doctor: str = ""
    status: AppointmentStatus = AppointmentStatus.SCHEDULED
    price: float = 0.0
    duration: int = 0  # minutes
    notes: str = ""
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    def __post_init__(self):
        if isinstance(self.status, str) and not isinstance(
            self.status, AppointmentStatus
        ):
            self.status = AppointmentStatus(self.status)
        if isinstance(self.date, datetime):
            self.date = self.date.date()

    @property
    def slot(self) -> tuple:
        """The (calendar date, time-of-day) pair two appointments may not share."""
        return (self.date, self.time)


@dataclass
class DashboardStats:
    total_patients: int = 0
    total_appointments: int = 0
    completed_appointments: int = 0
    pending_appointments: int = 0
    today_appointments: int = 0
    total_revenue: float = 0.0
    today_revenue: float = 0.0


@dataclass
class DayIncome:
    date: str
    income: float


@dataclass
class WeekIncome:
    week: str
    income: float


@dataclass
class FinanceReport:
    total_income: float = 0.0
    by_day: List[DayIncome] = field(default_factory=list)
    by_week: List[WeekIncome] = field(default_factory=list)
