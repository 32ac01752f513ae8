"""
Unit tests for DashboardService: statistics and finance reports.
"""

from datetime import date

import pytest

from clinic.core import config
from clinic.core.exceptions import ValidationError
from clinic.domain.entities import AppointmentStatus
from clinic.services.dashboard_service import DashboardService, iso_week_key
from tests.factories.repository_factories import (
    AppointmentRepositoryFactory,
    PatientRepositoryFactory,
)
from tests.fixtures.domain_fixtures import make_appointment, make_patient

TODAY = date(2025, 3, 10)


@pytest.fixture
def mock_patient_repo():
    return PatientRepositoryFactory.create_mock_full()


@pytest.fixture
def mock_appointment_repo():
    return AppointmentRepositoryFactory.create_mock_full()


@pytest.fixture
def dashboard(mock_patient_repo, mock_appointment_repo, monkeypatch):
    monkeypatch.setattr(config, "today", lambda: TODAY)
    return DashboardService(mock_patient_repo, mock_appointment_repo)


@pytest.mark.services
@pytest.mark.dashboard
class TestDashboardStats:
    def test_only_completed_appointments_earn_revenue(
        self, dashboard, mock_patient_repo, mock_appointment_repo
    ):
        mock_patient_repo.get_all.return_value = [make_patient(id=1)]
        mock_appointment_repo.get_all.return_value = [
            make_appointment(id=1, date=TODAY, status=AppointmentStatus.COMPLETED, price=2000),
            make_appointment(id=2, date=TODAY, status=AppointmentStatus.SCHEDULED, price=1000),
            make_appointment(id=3, date=TODAY, status=AppointmentStatus.CANCELLED, price=500),
        ]

        stats = dashboard.get_dashboard_stats()

        assert stats.total_revenue == 2000
        assert stats.pending_appointments == 1
        assert stats.completed_appointments == 1
        assert stats.today_appointments == 3
        assert stats.today_revenue == 2000
        assert stats.total_appointments == 3
        assert stats.total_patients == 1

    def test_today_revenue_excludes_other_days(self, dashboard, mock_appointment_repo):
        mock_appointment_repo.get_all.return_value = [
            make_appointment(id=1, date=TODAY, status=AppointmentStatus.COMPLETED, price=700),
            make_appointment(
                id=2, date=date(2025, 3, 9), status=AppointmentStatus.COMPLETED, price=300
            ),
        ]

        stats = dashboard.get_dashboard_stats()

        assert stats.total_revenue == 1000
        assert stats.today_revenue == 700
        assert stats.today_appointments == 1

    def test_empty_clinic(self, dashboard):
        stats = dashboard.get_dashboard_stats()

        assert stats.total_patients == 0
        assert stats.total_revenue == 0


@pytest.mark.services
@pytest.mark.dashboard
class TestFinanceReport:
    def test_days_in_one_iso_week_share_a_bucket(self, dashboard, mock_appointment_repo):
        mock_appointment_repo.get_all.return_value = [
            make_appointment(
                id=1, date=date(2025, 1, 15), status=AppointmentStatus.COMPLETED, price=1000
            ),
            make_appointment(
                id=2, date=date(2025, 1, 16), status=AppointmentStatus.COMPLETED, price=2000
            ),
        ]

        report = dashboard.get_finance_report()

        assert report.total_income == 3000
        assert {(d.date, d.income) for d in report.by_day} == {
            ("2025-01-15", 1000),
            ("2025-01-16", 2000),
        }
        assert len(report.by_week) == 1
        assert report.by_week[0].week == "2025-W03"
        assert report.by_week[0].income == 3000

    def test_non_completed_appointments_are_ignored(
        self, dashboard, mock_appointment_repo
    ):
        mock_appointment_repo.get_all.return_value = [
            make_appointment(id=1, status=AppointmentStatus.SCHEDULED, price=1000),
            make_appointment(id=2, status=AppointmentStatus.CANCELLED, price=1000),
        ]

        report = dashboard.get_finance_report()

        assert report.total_income == 0
        assert report.by_day == []
        assert report.by_week == []

    def test_range_uses_date_range_lookup(self, dashboard, mock_appointment_repo):
        dashboard.get_finance_report(date(2025, 1, 1), date(2025, 1, 31))

        mock_appointment_repo.get_by_date_range.assert_called_once_with(
            date(2025, 1, 1), date(2025, 1, 31)
        )
        mock_appointment_repo.get_all.assert_not_called()

    def test_open_ended_range_runs_until_today(self, dashboard, mock_appointment_repo):
        dashboard.get_finance_report(start=date(2025, 3, 1))

        mock_appointment_repo.get_by_date_range.assert_called_once_with(
            date(2025, 3, 1), TODAY
        )

    def test_inverted_range_is_rejected(self, dashboard):
        with pytest.raises(ValidationError, match="start date must not be after end date"):
            dashboard.get_finance_report(date(2025, 2, 1), date(2025, 1, 1))


@pytest.mark.dashboard
class TestIsoWeekKey:
    @pytest.mark.parametrize(
        "day, key",
        [
            (date(2025, 1, 15), "2025-W03"),
            (date(2024, 12, 30), "2025-W01"),  # ISO year differs from calendar year
            (date(2021, 1, 3), "2020-W53"),
        ],
    )
    def test_iso_week_key(self, day, key):
        assert iso_week_key(day) == key
