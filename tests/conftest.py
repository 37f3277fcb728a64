from __future__ import annotations

from dataclasses import replace
from datetime import datetime, timedelta
from itertools import count
from typing import Any, Mapping, Optional, Sequence

import pytest

from congregation_attendance.attendance.model import AttendanceRecord
from congregation_attendance.attendance.service import AttendanceService
from congregation_attendance.auth.identity import Identity
from congregation_attendance.core.enums import Cohort
from congregation_attendance.core.exceptions import ConflictError
from congregation_attendance.imports.service import ImportService
from congregation_attendance.people.model import NewPerson, Person
from congregation_attendance.people.service import PersonService
from congregation_attendance.reports.service import AttendanceReportService

_EPOCH = datetime(2026, 1, 1, 9, 0, 0)


class InMemoryPeople:
    def __init__(self, attendance: "InMemoryAttendance"):
        self.rows: dict[str, Person] = {}
        self._attendance = attendance
        self._seq = count(1)

    def get_by_id(self, person_id: str, *, cohort: Optional[Cohort] = None) -> Optional[Person]:
        p = self.rows.get(person_id)
        if p is None or (cohort is not None and p.cohort != cohort):
            return None
        return p

    def get_by_contact(self, *, cohort: Cohort, contact: str) -> Optional[Person]:
        for p in self.rows.values():
            if p.cohort == cohort and p.contact == contact:
                return p
        return None

    def list_people(self, *, cohort: Cohort, active: Optional[bool] = None) -> Sequence[Person]:
        items = [p for p in self.rows.values() if p.cohort == cohort]
        if active is None:
            return sorted(items, key=lambda p: p.created_at, reverse=True)
        return sorted((p for p in items if p.active == active), key=lambda p: p.created_at)

    def get_names(self, person_ids: Sequence[str]) -> dict[str, str]:
        return {pid: self.rows[pid].name for pid in person_ids if pid in self.rows}

    def insert(self, person: NewPerson) -> str:
        if person.contact and self.get_by_contact(cohort=person.cohort, contact=person.contact):
            raise ConflictError("duplicate contact")
        n = next(self._seq)
        person_id = f"p{n:04d}"
        self.rows[person_id] = Person(
            person_id=person_id,
            cohort=person.cohort,
            name=person.name,
            contact=person.contact,
            residence=person.residence,
            active=person.active,
            created_by=person.created_by,
            gender=person.gender,
            department=person.department,
            status=person.status,
            created_at=_EPOCH + timedelta(seconds=n),
        )
        return person_id

    def patch(self, *, cohort: Cohort, person_id: str, changes: Mapping[str, Any]) -> bool:
        p = self.get_by_id(person_id, cohort=cohort)
        if p is None:
            return False
        contact = changes.get("contact")
        if contact:
            other = self.get_by_contact(cohort=cohort, contact=contact)
            if other and other.person_id != person_id:
                raise ConflictError("duplicate contact")
        self.rows[person_id] = replace(p, **changes)
        return True

    def delete(self, *, cohort: Cohort, person_id: str) -> int:
        if self.get_by_id(person_id, cohort=cohort) is None:
            return 0
        ids = [i for i, r in self._attendance.rows.items() if r.person_id == person_id]
        for i in ids:
            del self._attendance.rows[i]
        del self.rows[person_id]
        return len(ids)


class InMemoryAttendance:
    def __init__(self):
        self.rows: dict[int, AttendanceRecord] = {}
        self._seq = count(1)

    def get_for_person_and_date(self, person_id: str, date: str) -> Optional[AttendanceRecord]:
        for r in self.rows.values():
            if r.person_id == person_id and r.date == date:
                return r
        return None

    def upsert(self, *, person_id: str, date: str, present: bool, marked_by: str) -> int:
        existing = self.get_for_person_and_date(person_id, date)
        if existing:
            self.set_present(attendance_id=existing.attendance_id, present=present, marked_by=marked_by)
            return existing.attendance_id
        attendance_id = next(self._seq)
        created = _EPOCH + timedelta(minutes=attendance_id)
        self.rows[attendance_id] = AttendanceRecord(
            attendance_id=attendance_id,
            person_id=person_id,
            date=date,
            present=present,
            marked_by=marked_by,
            created_at=created,
            updated_at=created,
        )
        return attendance_id

    def set_present(self, *, attendance_id: int, present: bool, marked_by: str) -> bool:
        r = self.rows.get(attendance_id)
        if r is None:
            return False
        self.rows[attendance_id] = replace(r, present=present, marked_by=marked_by)
        return True

    def list_for_date(self, date: str) -> Sequence[AttendanceRecord]:
        return [r for _, r in sorted(self.rows.items()) if r.date == date]

    def list_for_person(self, person_id: str) -> Sequence[AttendanceRecord]:
        return [r for r in self.rows.values() if r.person_id == person_id]

    def list_for_people(self, person_ids: Sequence[str]) -> Sequence[AttendanceRecord]:
        wanted = set(person_ids)
        return [r for r in self.rows.values() if r.person_id in wanted]

    def list_recent(self, limit: int) -> Sequence[AttendanceRecord]:
        return [r for _, r in sorted(self.rows.items(), reverse=True)][:limit]


@pytest.fixture
def people_repo(attendance_repo):
    return InMemoryPeople(attendance_repo)


@pytest.fixture
def attendance_repo():
    return InMemoryAttendance()


@pytest.fixture
def admin():
    return Identity(subject="user_admin", claims={"sub": "user_admin", "publicMetadata": {"role": "admin"}})


@pytest.fixture
def usher():
    return Identity(subject="user_usher", claims={"sub": "user_usher"})


@pytest.fixture
def person_service(people_repo):
    return PersonService(people_repo)


@pytest.fixture
def attendance_service(people_repo, attendance_repo):
    return AttendanceService(attendance_repo, people_repo)


@pytest.fixture
def report_service(people_repo, attendance_repo):
    return AttendanceReportService(attendance_repo, people_repo)


@pytest.fixture
def import_service(people_repo):
    return ImportService(people_repo)
