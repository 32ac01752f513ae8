"""
In-memory repository implementations.

Used for local development, demos and tests. Each repository owns a dict of
entities guarded by a lock and hands out copies, so callers can never mutate
stored state behind the repository's back. Initial data is injected through
the constructor.
"""

import threading
from copy import deepcopy
from datetime import date
from typing import Callable, Dict, Generic, Iterable, List, Optional, TypeVar

from clinic.core.exceptions import ConflictError, NotFoundError, StorageError
from clinic.domain.entities import Appointment, Doctor, Patient, Service
from clinic.domain.interfaces import (
    IAppointmentRepository,
    IDoctorRepository,
    IPatientRepository,
    IServiceRepository,
)

T = TypeVar("T")


def _contains(value: Optional[str], needle: str) -> bool:
    return bool(value) and needle in value.lower()


class _InMemoryStore(Generic[T]):
    """Shared CRUD plumbing: id assignment, copying and locking."""

    entity_name = "entity"

    def __init__(self, items: Iterable[T] = ()) -> None:
        self._lock = threading.Lock()
        self._items: Dict[int, T] = {}
        self._next_id = 1
        for item in items:
            self._insert(deepcopy(item))

    def _insert(self, item: T) -> T:
        if getattr(item, "id", None):
            self._next_id = max(self._next_id, item.id + 1)
        else:
            item.id = self._next_id
            self._next_id += 1
        self._items[item.id] = item
        return item

    def _not_found(self, item_id) -> NotFoundError:
        return NotFoundError(f"{self.entity_name} with ID {item_id} not found")

    def _select(self, predicate: Callable[[T], bool]) -> List[T]:
        with self._lock:
            return [deepcopy(item) for item in self._items.values() if predicate(item)]

    def _first(self, predicate: Callable[[T], bool], missing: str) -> T:
        with self._lock:
            for item in self._items.values():
                if predicate(item):
                    return deepcopy(item)
        raise NotFoundError(missing)

    def get_by_id(self, item_id: int) -> T:
        with self._lock:
            item = self._items.get(item_id)
            if item is None:
                raise self._not_found(item_id)
            return deepcopy(item)

    def get_all(self) -> List[T]:
        return self._select(lambda item: True)

    def create(self, item: T) -> T:
        with self._lock:
            stored = deepcopy(item)
            stored.id = None
            self._check_constraints(stored)
            self._insert(stored)
            return deepcopy(stored)

    def update(self, item: T) -> T:
        with self._lock:
            current = self._items.get(item.id)
            if current is None:
                raise self._not_found(item.id)
            self._check_constraints(item)
            stored = deepcopy(item)
            # created_at is set once, on create
            stored.created_at = current.created_at
            self._items[item.id] = stored
            return deepcopy(stored)

    def delete(self, item_id: int) -> None:
        with self._lock:
            if self._items.pop(item_id, None) is None:
                raise self._not_found(item_id)

    def _check_constraints(self, item: T) -> None:
        """Hook for storage-level uniqueness rules. Called with the lock held."""


class InMemoryPatientRepository(_InMemoryStore[Patient], IPatientRepository):
    entity_name = "patient"

    def get_by_phone(self, phone: str) -> Patient:
        return self._first(lambda p: p.phone == phone, "patient not found")

    def get_by_national_id(self, national_id: str) -> Patient:
        return self._first(lambda p: p.national_id == national_id, "patient not found")

    def search(self, query: str) -> List[Patient]:
        needle = query.lower()
        return sorted(
            self._select(
                lambda p: _contains(p.name, needle)
                or _contains(p.phone, needle)
                or _contains(p.email, needle)
                or _contains(p.national_id, needle)
            ),
            key=lambda p: p.name,
        )


class InMemoryServiceRepository(_InMemoryStore[Service], IServiceRepository):
    entity_name = "service"

    def get_by_category(self, category: str) -> List[Service]:
        wanted = category.lower()
        return self._select(lambda s: (s.category or "").lower() == wanted)

    def search(self, query: str) -> List[Service]:
        needle = query.lower()
        return self._select(
            lambda s: _contains(s.name, needle)
            or _contains(s.category, needle)
            or _contains(s.description, needle)
        )


class InMemoryDoctorRepository(_InMemoryStore[Doctor], IDoctorRepository):
    entity_name = "doctor"

    def get_by_login(self, login: str) -> Doctor:
        return self._first(lambda d: d.login == login, "doctor not found")

    def _check_constraints(self, item: Doctor) -> None:
        for other in self._items.values():
            if other.login == item.login and other.id != item.id:
                raise StorageError(f"login '{item.login}' is already taken")


class InMemoryAppointmentRepository(
    _InMemoryStore[Appointment], IAppointmentRepository
):
    entity_name = "appointment"

    def get_by_patient_id(self, patient_id: int) -> List[Appointment]:
        return self._select(lambda a: a.patient_id == patient_id)

    def get_by_date(self, day: date) -> List[Appointment]:
        return sorted(self._select(lambda a: a.date == day), key=lambda a: a.time)

    def get_by_date_range(self, start: date, end: date) -> List[Appointment]:
        return sorted(
            self._select(lambda a: a.date is not None and start <= a.date <= end),
            key=lambda a: (a.date, a.time),
        )

    def check_time_conflict(
        self, day: date, time: str, exclude_id: Optional[int] = None
    ) -> bool:
        with self._lock:
            return self._slot_taken(day, time, exclude_id)

    def _slot_taken(self, day: date, time: str, exclude_id: Optional[int]) -> bool:
        return any(
            a.slot == (day, time) and a.id != exclude_id
            for a in self._items.values()
        )

    def _check_constraints(self, item: Appointment) -> None:
        if self._slot_taken(item.date, item.time, item.id):
            raise ConflictError("time slot is already occupied")
