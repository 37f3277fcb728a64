from __future__ import annotations

from typing import Optional, Protocol, Sequence

from .model import AttendanceRecord


class AttendanceRepository(Protocol):
    def get_for_person_and_date(self, person_id: str, date: str) -> Optional[AttendanceRecord]:
        raise NotImplementedError

    def upsert(self, *, person_id: str, date: str, present: bool, marked_by: str) -> int:
        """Create or overwrite the (person_id, date) record in one statement; returns its id."""

        raise NotImplementedError

    def set_present(self, *, attendance_id: int, present: bool, marked_by: str) -> bool:
        raise NotImplementedError

    def list_for_date(self, date: str) -> Sequence[AttendanceRecord]:
        raise NotImplementedError

    def list_for_person(self, person_id: str) -> Sequence[AttendanceRecord]:
        raise NotImplementedError

    def list_for_people(self, person_ids: Sequence[str]) -> Sequence[AttendanceRecord]:
        raise NotImplementedError

    def list_recent(self, limit: int) -> Sequence[AttendanceRecord]:
        """Newest first by creation order."""

        raise NotImplementedError
