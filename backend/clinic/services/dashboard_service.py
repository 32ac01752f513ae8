"""
Dashboard and finance aggregation over the appointment book.

Read-only: nothing here mutates repositories. Revenue only ever counts
completed appointments. "Today" is the current date in the application
timezone (``TZ``, UTC by default).
"""

import logging
from collections import defaultdict
from datetime import date
from typing import Dict, Iterable, Optional

from clinic.core import config
from clinic.core.exceptions import ValidationError
from clinic.domain.entities import (
    Appointment,
    AppointmentStatus,
    DashboardStats,
    DayIncome,
    FinanceReport,
    WeekIncome,
)
from clinic.domain.interfaces import IAppointmentRepository, IPatientRepository

logger = logging.getLogger(__name__)


def iso_week_key(day: date) -> str:
    """ISO-8601 week bucket for ``day``, e.g. ``2025-W03``."""
    year, week, _ = day.isocalendar()
    return f"{year}-W{week:02d}"


class DashboardService:
    """Application service computing summary statistics and revenue reports."""

    def __init__(
        self,
        patient_repo: IPatientRepository,
        appointment_repo: IAppointmentRepository,
    ) -> None:
        self.patient_repo = patient_repo
        self.appointment_repo = appointment_repo

    def get_dashboard_stats(self) -> DashboardStats:
        patients = self.patient_repo.get_all()
        appointments = self.appointment_repo.get_all()
        today = config.today()

        stats = DashboardStats(
            total_patients=len(patients),
            total_appointments=len(appointments),
        )

        for appointment in appointments:
            is_today = appointment.date == today
            if is_today:
                stats.today_appointments += 1

            if appointment.status is AppointmentStatus.COMPLETED:
                stats.completed_appointments += 1
                stats.total_revenue += appointment.price
                if is_today:
                    stats.today_revenue += appointment.price
            elif appointment.status is AppointmentStatus.SCHEDULED:
                stats.pending_appointments += 1

        return stats

    def get_finance_report(
        self, start: Optional[date] = None, end: Optional[date] = None
    ) -> FinanceReport:
        """Completed-appointment income, in total and bucketed by day and ISO week.

        With ``start``/``end`` the report covers that inclusive date range
        (an open end defaults to the other bound or today).
        """
        if start is None and end is None:
            appointments = self.appointment_repo.get_all()
        else:
            start = start or end
            end = end or config.today()
            if start > end:
                raise ValidationError("start date must not be after end date")
            appointments = self.appointment_repo.get_by_date_range(start, end)

        return self._build_report(appointments)

    @staticmethod
    def _build_report(appointments: Iterable[Appointment]) -> FinanceReport:
        day_income: Dict[str, float] = defaultdict(float)
        week_income: Dict[str, float] = defaultdict(float)
        total = 0.0

        for appointment in appointments:
            if appointment.status is not AppointmentStatus.COMPLETED:
                continue
            if appointment.date is None:
                continue

            total += appointment.price
            day_income[appointment.date.isoformat()] += appointment.price
            week_income[iso_week_key(appointment.date)] += appointment.price

        report = FinanceReport(
            total_income=total,
            by_day=[DayIncome(date=k, income=v) for k, v in sorted(day_income.items())],
            by_week=[
                WeekIncome(week=k, income=v) for k, v in sorted(week_income.items())
            ],
        )
        logger.debug(
            "Finance report built",
            extra={"context": {"total_income": total, "days": len(report.by_day)}},
        )
        return report
