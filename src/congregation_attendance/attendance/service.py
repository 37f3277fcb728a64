from __future__ import annotations

from typing import Optional, Sequence

from ..auth.identity import Identity, require_identity
from ..common.datetime_utils import is_iso_date
from ..core.exceptions import NotFoundError, ValidationError
from ..people.repository import PersonRepository
from .model import AttendanceRecord
from .repository import AttendanceRepository


def require_iso_date(value: str) -> str:
    value = (value or "").strip()
    if not is_iso_date(value):
        raise ValidationError("Date must be YYYY-MM-DD")
    return value


class AttendanceService:
    """Roll-call toggling for one (person, date) cell.

    A cell is PRESENT when a record with present=True exists, ABSENT otherwise
    (no record, or present=False). Both transitions are idempotent upserts.
    """

    def __init__(self, attendance: AttendanceRepository, people: PersonRepository):
        self._attendance = attendance
        self._people = people

    def mark_present(self, *, caller: Optional[Identity], person_id: str, date: str) -> int:
        caller = require_identity(caller)
        date = require_iso_date(date)

        if not self._people.get_by_id(person_id):
            raise NotFoundError("Person not found")

        return self._attendance.upsert(person_id=person_id, date=date, present=True, marked_by=caller.subject)

    def unmark_present(self, *, caller: Optional[Identity], person_id: str, date: str) -> Optional[int]:
        """Returns None when there is nothing to unmark; no absent record is created."""

        caller = require_identity(caller)
        date = require_iso_date(date)

        existing = self._attendance.get_for_person_and_date(person_id, date)
        if not existing:
            return None

        self._attendance.set_present(attendance_id=existing.attendance_id, present=False, marked_by=caller.subject)
        return existing.attendance_id

    def attendance_by_date(self, *, caller: Optional[Identity], date: str) -> Sequence[AttendanceRecord]:
        require_identity(caller)
        return self._attendance.list_for_date(require_iso_date(date))

    def history_for_member(self, *, caller: Optional[Identity], person_id: str) -> list[AttendanceRecord]:
        require_identity(caller)
        records = list(self._attendance.list_for_person(person_id))
        records.sort(key=lambda r: r.date, reverse=True)
        return records
