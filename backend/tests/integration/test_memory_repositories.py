"""
Integration tests for the in-memory repositories, alone and wired into the
services.
"""

import threading
from datetime import date, datetime

import pytest

from clinic.core.exceptions import ConflictError, NotFoundError, StorageError
from clinic.domain.entities import AppointmentStatus
from clinic.repositories.memory import (
    InMemoryAppointmentRepository,
    InMemoryDoctorRepository,
    InMemoryPatientRepository,
    InMemoryServiceRepository,
)
from clinic.services import AppointmentService, CatalogService, PatientService
from tests.fixtures.domain_fixtures import (
    make_appointment,
    make_doctor,
    make_patient,
    make_service,
)


@pytest.mark.repositories
class TestInMemoryStore:
    def test_constructor_fixtures_keep_their_ids(self):
        repo = InMemoryPatientRepository([make_patient(id=10, name="Seeded")])

        assert repo.get_by_id(10).name == "Seeded"
        assert repo.create(make_patient(phone="", national_id="")).id == 11

    def test_returned_entities_are_copies(self):
        repo = InMemoryPatientRepository()
        created = repo.create(make_patient())

        created.name = "Mutated outside"

        assert repo.get_by_id(created.id).name == "Aigerim Sadykova"

    def test_create_ignores_caller_id(self):
        repo = InMemoryServiceRepository()

        first = repo.create(make_service(id=99))

        assert first.id == 1

    def test_missing_rows_raise_not_found(self):
        repo = InMemoryServiceRepository()

        with pytest.raises(NotFoundError, match="service with ID 5 not found"):
            repo.get_by_id(5)
        with pytest.raises(NotFoundError):
            repo.update(make_service(id=5))
        with pytest.raises(NotFoundError):
            repo.delete(5)

    def test_update_keeps_created_at(self):
        created_at = datetime(2025, 1, 1, 9, 0)
        repo = InMemoryPatientRepository([make_patient(id=1, created_at=created_at)])

        updated = repo.update(make_patient(id=1, name="Renamed"))

        assert updated.name == "Renamed"
        assert updated.created_at == created_at
        assert repo.get_by_id(1).created_at == created_at

    def test_deleted_rows_disappear(self):
        repo = InMemoryPatientRepository()
        patient = repo.create(make_patient())

        repo.delete(patient.id)

        assert repo.get_all() == []
        with pytest.raises(NotFoundError):
            repo.get_by_phone(patient.phone)


@pytest.mark.repositories
@pytest.mark.patient
class TestInMemoryPatientRepository:
    def test_lookups(self):
        repo = InMemoryPatientRepository()
        stored = repo.create(make_patient())

        assert repo.get_by_phone("+77010000001").id == stored.id
        assert repo.get_by_national_id("900101300123").id == stored.id
        with pytest.raises(NotFoundError, match="patient not found"):
            repo.get_by_phone("+70000000000")

    def test_search_is_case_insensitive_over_identity_fields(self):
        repo = InMemoryPatientRepository(
            [
                make_patient(id=1, name="Zarina Omarova", email="zarina@clinic.kz"),
                make_patient(id=2, name="Aigerim Sadykova", phone="+77770001122"),
            ]
        )

        assert [p.id for p in repo.search("OMAROVA")] == [1]
        assert [p.id for p in repo.search("0001122")] == [2]
        assert [p.id for p in repo.search("@")] == [2, 1]  # ordered by name
        assert repo.search("nobody") == []


@pytest.mark.repositories
class TestInMemoryServiceRepository:
    def test_category_and_search(self):
        repo = InMemoryServiceRepository(
            [
                make_service(id=1, name="ECG", category="Diagnostics"),
                make_service(id=2, name="Blood test", category="Laboratory"),
            ]
        )

        assert [s.id for s in repo.get_by_category("diagnostics")] == [1]
        assert [s.id for s in repo.search("blood")] == [2]
        assert [s.id for s in repo.search("general practitioner")] == [1, 2]


@pytest.mark.repositories
@pytest.mark.doctor
class TestInMemoryDoctorRepository:
    def test_duplicate_login_is_a_storage_error(self):
        repo = InMemoryDoctorRepository()
        repo.create(make_doctor())

        with pytest.raises(StorageError):
            repo.create(make_doctor(name="Another"))

    def test_get_by_login(self):
        repo = InMemoryDoctorRepository([make_doctor(id=4)])

        assert repo.get_by_login("abenov").id == 4
        with pytest.raises(NotFoundError):
            repo.get_by_login("nobody")


@pytest.mark.repositories
@pytest.mark.appointment
class TestInMemoryAppointmentRepository:
    def test_slot_is_unique(self):
        repo = InMemoryAppointmentRepository()
        repo.create(make_appointment())

        with pytest.raises(ConflictError, match="time slot is already occupied"):
            repo.create(make_appointment(patient_id=2))

    def test_cancelled_appointments_still_hold_their_slot(self):
        repo = InMemoryAppointmentRepository(
            [make_appointment(id=1, status=AppointmentStatus.CANCELLED)]
        )

        assert repo.check_time_conflict(date(2025, 1, 25), "10:00")
        assert not repo.check_time_conflict(date(2025, 1, 25), "10:00", exclude_id=1)
        assert not repo.check_time_conflict(date(2025, 1, 25), "11:00")

    def test_updating_in_place_is_not_a_conflict(self):
        repo = InMemoryAppointmentRepository()
        stored = repo.create(make_appointment())
        stored.notes = "bring test results"

        assert repo.update(stored).notes == "bring test results"

    def test_date_filters(self):
        repo = InMemoryAppointmentRepository(
            [
                make_appointment(id=1, date=date(2025, 1, 10), time="12:00"),
                make_appointment(id=2, date=date(2025, 1, 10), time="09:00"),
                make_appointment(id=3, date=date(2025, 1, 20), patient_id=2),
                make_appointment(id=4, date=date(2025, 2, 1)),
            ]
        )

        assert [a.id for a in repo.get_by_date(date(2025, 1, 10))] == [2, 1]
        assert [a.id for a in repo.get_by_date_range(date(2025, 1, 10), date(2025, 1, 20))] == [
            2,
            1,
            3,
        ]
        assert [a.id for a in repo.get_by_patient_id(2)] == [3]

    def test_concurrent_bookings_of_one_slot(self):
        repo = InMemoryAppointmentRepository()
        outcomes = []

        def book(patient_id):
            try:
                repo.create(make_appointment(patient_id=patient_id))
                outcomes.append("ok")
            except ConflictError:
                outcomes.append("conflict")

        threads = [threading.Thread(target=book, args=(i,)) for i in range(1, 9)]
        for thread in threads:
            thread.start()
        for thread in threads:
            thread.join()

        assert outcomes.count("ok") == 1
        assert outcomes.count("conflict") == 7


@pytest.mark.services
class TestServicesOverMemoryRepositories:
    def test_national_id_duplicate_round_trip(self):
        service = PatientService(InMemoryPatientRepository())

        service.create_patient(
            make_patient(national_id="123456789012", phone="+77010000001")
        )
        with pytest.raises(ConflictError, match="duplicate national ID"):
            service.create_patient(
                make_patient(national_id="123456789012", phone="+77010000002")
            )
        third = service.create_patient(
            make_patient(national_id="123456789013", phone="+77010000003")
        )

        assert third.id == 2

    def test_appointment_conflict_scenario(self):
        patients = InMemoryPatientRepository([make_patient(id=1)])
        appointments = InMemoryAppointmentRepository()
        service = AppointmentService(appointments, patients)

        first = service.create_appointment(make_appointment(id=None))
        second = service.create_appointment(make_appointment(time="11:00"))

        with pytest.raises(ConflictError, match="time slot is already occupied"):
            service.update_appointment(make_appointment(id=second.id, time="10:00"))

        same_slot = service.update_appointment(
            make_appointment(id=first.id, notes="self update")
        )
        assert same_slot.notes == "self update"
        assert same_slot.patient_name == "Aigerim Sadykova"

    def test_updates_keep_creation_timestamps(self):
        patients = PatientService(InMemoryPatientRepository())
        catalog = CatalogService(InMemoryServiceRepository())
        patient = patients.create_patient(make_patient())
        service = catalog.create_service(make_service())

        patients.update_patient(make_patient(id=patient.id, name="Aigerim S."))
        catalog.update_service(make_service(id=service.id, price=9000.0))

        stored_patient = patients.get_patient(patient.id)
        stored_service = catalog.get_service(service.id)
        assert stored_patient.created_at == patient.created_at
        assert stored_patient.updated_at >= patient.updated_at
        assert stored_service.created_at == service.created_at
        assert stored_service.price == 9000.0
