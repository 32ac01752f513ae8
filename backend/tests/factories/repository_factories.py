"""
Repository test factories following Interface Segregation Principle.

This module provides mock factories for repository interfaces, ensuring
tests only depend on the specific interfaces they need. Lookups that
raise NotFoundError in real repositories do the same by default here.
"""

from unittest.mock import Mock

from clinic.core.exceptions import NotFoundError
from clinic.domain.interfaces import (
    IAppointmentReader,
    IAppointmentRepository,
    IDoctorRepository,
    IPatientReader,
    IPatientRepository,
    IServiceRepository,
)


class PatientRepositoryFactory:
    """Factory for creating Patient repository mocks."""

    @staticmethod
    def create_mock_reader() -> Mock:
        """Create mock that only implements IPatientReader operations."""
        mock_reader = Mock(spec=IPatientReader)

        mock_reader.get_by_id.side_effect = NotFoundError("patient not found")
        mock_reader.get_all.return_value = []
        mock_reader.get_by_phone.side_effect = NotFoundError("patient not found")
        mock_reader.get_by_national_id.side_effect = NotFoundError("patient not found")
        mock_reader.search.return_value = []

        return mock_reader

    @staticmethod
    def create_mock_full() -> Mock:
        """Create full repository mock implementing IPatientRepository."""
        mock_repo = Mock(spec=IPatientRepository)

        # Read operations
        mock_repo.get_by_id.side_effect = NotFoundError("patient not found")
        mock_repo.get_all.return_value = []
        mock_repo.get_by_phone.side_effect = NotFoundError("patient not found")
        mock_repo.get_by_national_id.side_effect = NotFoundError("patient not found")
        mock_repo.search.return_value = []

        # Write operations echo their input
        mock_repo.create.side_effect = lambda patient: patient
        mock_repo.update.side_effect = lambda patient: patient
        mock_repo.delete.return_value = None

        return mock_repo


class ServiceRepositoryFactory:
    """Factory for creating service catalog repository mocks."""

    @staticmethod
    def create_mock_full() -> Mock:
        mock_repo = Mock(spec=IServiceRepository)

        mock_repo.get_by_id.side_effect = NotFoundError("service not found")
        mock_repo.get_all.return_value = []
        mock_repo.get_by_category.return_value = []
        mock_repo.search.return_value = []

        mock_repo.create.side_effect = lambda service: service
        mock_repo.update.side_effect = lambda service: service
        mock_repo.delete.return_value = None

        return mock_repo


class DoctorRepositoryFactory:
    """Factory for creating Doctor repository mocks."""

    @staticmethod
    def create_mock_full() -> Mock:
        mock_repo = Mock(spec=IDoctorRepository)

        mock_repo.get_by_id.side_effect = NotFoundError("doctor not found")
        mock_repo.get_all.return_value = []
        mock_repo.get_by_login.side_effect = NotFoundError("doctor not found")

        mock_repo.create.side_effect = lambda doctor: doctor
        mock_repo.update.side_effect = lambda doctor: doctor
        mock_repo.delete.return_value = None

        return mock_repo


class AppointmentRepositoryFactory:
    """Factory for creating Appointment repository mocks."""

    @staticmethod
    def create_mock_reader() -> Mock:
        """Create mock that only implements IAppointmentReader operations."""
        mock_reader = Mock(spec=IAppointmentReader)

        mock_reader.get_by_id.side_effect = NotFoundError("appointment not found")
        mock_reader.get_all.return_value = []
        mock_reader.get_by_patient_id.return_value = []
        mock_reader.get_by_date.return_value = []
        mock_reader.get_by_date_range.return_value = []
        mock_reader.check_time_conflict.return_value = False

        return mock_reader

    @staticmethod
    def create_mock_full() -> Mock:
        """Create full repository mock implementing IAppointmentRepository."""
        mock_repo = Mock(spec=IAppointmentRepository)

        mock_repo.get_by_id.side_effect = NotFoundError("appointment not found")
        mock_repo.get_all.return_value = []
        mock_repo.get_by_patient_id.return_value = []
        mock_repo.get_by_date.return_value = []
        mock_repo.get_by_date_range.return_value = []
        mock_repo.check_time_conflict.return_value = False

        mock_repo.create.side_effect = lambda appointment: appointment
        mock_repo.update.side_effect = lambda appointment: appointment
        mock_repo.delete.return_value = None

        return mock_repo
