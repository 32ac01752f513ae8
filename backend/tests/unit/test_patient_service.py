"""
Unit tests for PatientService.

This module tests:
- Field validation and its exact messages
- Duplicate detection by national ID and phone
- Update uniqueness excluding the patient itself
- Error propagation from the repository
"""

from dataclasses import replace
from unittest.mock import Mock

import pytest

from clinic.core.exceptions import (
    ConflictError,
    NotFoundError,
    StorageError,
    ValidationError,
)
from clinic.services.patient_service import PatientService
from tests.factories.repository_factories import PatientRepositoryFactory
from tests.fixtures.domain_fixtures import make_patient


@pytest.fixture
def mock_patient_repo() -> Mock:
    """Create a mock patient repository."""
    return PatientRepositoryFactory.create_mock_full()


@pytest.fixture
def service(mock_patient_repo) -> PatientService:
    """Initialize PatientService with a mocked repository."""
    return PatientService(mock_patient_repo)


@pytest.mark.services
@pytest.mark.patient
class TestPatientValidation:
    """Test validate_patient rules."""

    @pytest.mark.parametrize("name", ["", "   ", "\t\n"])
    def test_blank_name_is_rejected_on_create(self, service, mock_patient_repo, name):
        with pytest.raises(ValidationError, match="name is required"):
            service.create_patient(make_patient(name=name))

        mock_patient_repo.create.assert_not_called()

    def test_none_patient_is_rejected(self, service):
        with pytest.raises(ValidationError, match="patient cannot be empty"):
            service.validate_patient(None)

    @pytest.mark.parametrize(
        "overrides, message",
        [
            ({"name": "x" * 101}, "patient name is too long"),
            ({"national_id": "12345"}, "national ID must be exactly 12 characters"),
            ({"national_id": "1234567890123"}, "national ID must be exactly 12 characters"),
            ({"phone": "1" * 21}, "phone number is too long"),
            ({"email": "a" * 95 + "@x.com"}, "email is too long"),
            ({"email": "not-an-email"}, "invalid email format"),
            ({"address": "a" * 201}, "address is too long"),
            ({"notes": "n" * 501}, "notes are too long"),
        ],
    )
    def test_field_rules(self, service, overrides, message):
        with pytest.raises(ValidationError) as exc_info:
            service.validate_patient(make_patient(**overrides))

        assert exc_info.value.message == message

    def test_optional_fields_may_be_empty(self, service):
        service.validate_patient(
            make_patient(phone="", national_id="", email="", address="", notes="")
        )

    def test_validation_is_idempotent_and_does_not_mutate(self, service):
        patient = make_patient(email="broken")
        snapshot = replace(patient)

        outcomes = []
        for _ in range(2):
            with pytest.raises(ValidationError) as exc_info:
                service.validate_patient(patient)
            outcomes.append(exc_info.value.message)

        assert outcomes[0] == outcomes[1]
        assert patient == snapshot

    def test_validation_makes_no_repository_calls(self, service, mock_patient_repo):
        service.validate_patient(make_patient())

        assert mock_patient_repo.method_calls == []


@pytest.mark.services
@pytest.mark.patient
class TestPatientCreation:
    """Test create_patient uniqueness and persistence."""

    def test_create_patient_success(self, service, mock_patient_repo):
        mock_patient_repo.create.side_effect = lambda p: replace(p, id=7)

        result = service.create_patient(make_patient())

        assert result.id == 7
        assert result.created_at is not None
        assert result.created_at == result.updated_at
        mock_patient_repo.get_by_national_id.assert_called_once_with("900101300123")
        mock_patient_repo.get_by_phone.assert_called_once_with("+77010000001")

    def test_duplicate_national_id_is_a_conflict(self, service, mock_patient_repo):
        mock_patient_repo.get_by_national_id.side_effect = None
        mock_patient_repo.get_by_national_id.return_value = make_patient(id=3)

        with pytest.raises(ConflictError, match="duplicate national ID"):
            service.create_patient(make_patient())

        mock_patient_repo.create.assert_not_called()

    def test_duplicate_phone_is_a_conflict(self, service, mock_patient_repo):
        mock_patient_repo.get_by_phone.side_effect = None
        mock_patient_repo.get_by_phone.return_value = make_patient(id=3)

        with pytest.raises(ConflictError, match="duplicate phone"):
            service.create_patient(make_patient())

    def test_empty_identity_fields_skip_uniqueness_lookups(
        self, service, mock_patient_repo
    ):
        service.create_patient(make_patient(phone="", national_id=""))

        mock_patient_repo.get_by_phone.assert_not_called()
        mock_patient_repo.get_by_national_id.assert_not_called()

    def test_storage_failure_during_lookup_propagates(self, service, mock_patient_repo):
        mock_patient_repo.get_by_national_id.side_effect = StorageError("db down")

        with pytest.raises(StorageError):
            service.create_patient(make_patient())

        mock_patient_repo.create.assert_not_called()


@pytest.mark.services
@pytest.mark.patient
class TestPatientUpdates:
    """Test update_patient and the remaining operations."""

    def test_update_keeping_own_phone_is_allowed(self, service, mock_patient_repo):
        patient = make_patient(id=5)
        mock_patient_repo.get_by_phone.side_effect = None
        mock_patient_repo.get_by_phone.return_value = make_patient(id=5)

        result = service.update_patient(patient)

        assert result.updated_at is not None
        mock_patient_repo.update.assert_called_once()

    def test_update_to_someone_elses_national_id_conflicts(
        self, service, mock_patient_repo
    ):
        mock_patient_repo.get_by_national_id.side_effect = None
        mock_patient_repo.get_by_national_id.return_value = make_patient(id=9)

        with pytest.raises(ConflictError, match="duplicate national ID"):
            service.update_patient(make_patient(id=5))

    def test_update_missing_patient_propagates_not_found(
        self, service, mock_patient_repo
    ):
        mock_patient_repo.update.side_effect = NotFoundError("patient with ID 5 not found")

        with pytest.raises(NotFoundError):
            service.update_patient(make_patient(id=5))

    @pytest.mark.parametrize("patient_id", [0, -1])
    def test_id_guards(self, service, mock_patient_repo, patient_id):
        with pytest.raises(ValidationError, match="invalid patient ID"):
            service.get_patient(patient_id)
        with pytest.raises(ValidationError, match="invalid patient ID"):
            service.delete_patient(patient_id)

        mock_patient_repo.get_by_id.assert_not_called()
        mock_patient_repo.delete.assert_not_called()

    def test_delete_patient_delegates(self, service, mock_patient_repo):
        service.delete_patient(4)

        mock_patient_repo.delete.assert_called_once_with(4)

    @pytest.mark.parametrize("query", ["", "   ", None])
    def test_blank_search_returns_everyone(self, service, mock_patient_repo, query):
        mock_patient_repo.get_all.return_value = [make_patient(id=1)]

        assert len(service.search_patients(query)) == 1
        mock_patient_repo.search.assert_not_called()

    def test_search_trims_query(self, service, mock_patient_repo):
        service.search_patients("  aigerim ")

        mock_patient_repo.search.assert_called_once_with("aigerim")
