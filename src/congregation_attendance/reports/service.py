from __future__ import annotations

import math
from typing import Optional

from ..attendance.model import AttendanceRecord
from ..attendance.repository import AttendanceRepository
from ..attendance.service import require_iso_date
from ..auth.identity import Identity, require_identity
from ..common.datetime_utils import format_iso_date, today_iso
from ..common.validators import clamp_limit
from ..core.constants import (
    DEFAULT_ACTIVITY_LIMIT,
    DEFAULT_ROLL_CALL_LIMIT,
    MAX_ACTIVITY_LIMIT,
    MAX_ROLL_CALL_LIMIT,
    ROLL_CALL_SCAN_LIMIT,
    ROSTER_PAGE_SIZES,
    UNKNOWN_PERSON_NAME,
)
from ..core.enums import Cohort, Gender, GenderTab
from ..core.exceptions import ValidationError
from ..people.repository import PersonRepository
from .model import (
    ActivityItem,
    DashboardData,
    LastAttendance,
    RollCallDetail,
    RollCallSummary,
    RosterEntry,
    RosterPage,
)


def _percent(part: int, whole: int) -> int:
    if whole <= 0:
        return 0
    return int(math.floor(part * 100 / whole + 0.5))


class AttendanceReportService:
    """Read-side aggregation: rosters, activity feed, roll-call history."""

    def __init__(
        self,
        attendance: AttendanceRepository,
        people: PersonRepository,
        *,
        roll_call_scan_limit: int = ROLL_CALL_SCAN_LIMIT,
    ):
        self._attendance = attendance
        self._people = people
        self._scan_limit = int(roll_call_scan_limit)

    def _roster(self, date: str) -> list[RosterEntry]:
        people = [
            *self._people.list_people(cohort=Cohort.MEMBERS, active=True),
            *self._people.list_people(cohort=Cohort.KIDS, active=True),
        ]
        if not people:
            return []

        present_ids = {r.person_id for r in self._attendance.list_for_date(date) if r.present}

        latest: dict[str, AttendanceRecord] = {}
        for r in self._attendance.list_for_people([p.person_id for p in people]):
            current = latest.get(r.person_id)
            # Same-date ties keep the later-created record.
            if current is None or (r.date, r.attendance_id) > (current.date, current.attendance_id):
                latest[r.person_id] = r

        out: list[RosterEntry] = []
        for p in people:
            last = latest.get(p.person_id)
            out.append(
                RosterEntry(
                    person_id=p.person_id,
                    cohort=p.cohort.value,
                    name=p.name,
                    contact=p.contact,
                    residence=p.residence,
                    gender=p.gender,
                    department=p.department,
                    status=p.status,
                    present_today=p.person_id in present_ids,
                    last_attendance=LastAttendance(date=last.date, present=last.present) if last else None,
                )
            )
        return out

    def roster_for_date(self, *, caller: Optional[Identity], date: str) -> list[RosterEntry]:
        require_identity(caller)
        return self._roster(require_iso_date(date))

    def status_for_date(self, *, caller: Optional[Identity], date: str) -> list[dict]:
        require_identity(caller)
        return [
            {"person_id": e.person_id, "present": e.present_today}
            for e in self._roster(require_iso_date(date))
        ]

    def _recent_activity(self, limit: Optional[int]) -> list[ActivityItem]:
        limit = clamp_limit(limit, default=DEFAULT_ACTIVITY_LIMIT, maximum=MAX_ACTIVITY_LIMIT)
        records = list(self._attendance.list_recent(limit))
        names = self._people.get_names([r.person_id for r in records])
        return [
            ActivityItem(
                attendance_id=r.attendance_id,
                date=r.date,
                present=r.present,
                person_id=r.person_id,
                person_name=names.get(r.person_id, UNKNOWN_PERSON_NAME),
                created_at=r.created_at,
            )
            for r in records
        ]

    def recent_activity(self, *, caller: Optional[Identity], limit: Optional[int] = None) -> list[ActivityItem]:
        require_identity(caller)
        return self._recent_activity(limit)

    def recent_roll_calls(self, *, caller: Optional[Identity], limit: Optional[int] = None) -> list[RollCallSummary]:
        """Newest roll-call dates with present/absent counts.

        Only the most recent `roll_call_scan_limit` records are scanned to find
        dates, so a date whose records all fall outside that window is not listed.
        """
        require_identity(caller)
        limit = clamp_limit(limit, default=DEFAULT_ROLL_CALL_LIMIT, maximum=MAX_ROLL_CALL_LIMIT)

        dates = {r.date for r in self._attendance.list_recent(self._scan_limit)}
        out: list[RollCallSummary] = []
        for d in sorted(dates, reverse=True)[:limit]:
            records = self._attendance.list_for_date(d)
            total = len(records)
            present = sum(1 for r in records if r.present)
            out.append(RollCallSummary(date=d, total=total, present=present, absent=total - present))
        return out

    def roll_call_detail(self, *, caller: Optional[Identity], date: str) -> RollCallDetail:
        require_identity(caller)
        date = require_iso_date(date)
        roster = self._roster(date)

        present = [e for e in roster if e.present_today]
        male = [e for e in present if (e.gender or "").lower() == Gender.MALE.value]
        female = [e for e in present if (e.gender or "").lower() == Gender.FEMALE.value]
        unknown = [e for e in present if (e.gender or "").lower() not in {Gender.MALE.value, Gender.FEMALE.value}]

        return RollCallDetail(
            date=date,
            label=format_iso_date(date),
            total=len(roster),
            present=len(present),
            absent=max(0, len(roster) - len(present)),
            present_male=male,
            present_female=female,
            present_unknown=unknown,
        )

    def dashboard(self, *, caller: Optional[Identity], date: Optional[str] = None) -> DashboardData:
        require_identity(caller)
        date = require_iso_date(date) if date else today_iso()
        roster = self._roster(date)
        total = len(roster)
        present = sum(1 for e in roster if e.present_today)

        return DashboardData(
            date=date,
            label=format_iso_date(date),
            total=total,
            present=present,
            absent=max(total - present, 0),
            rate=_percent(present, total),
            recent=self._recent_activity(None),
        )

    def search_roster(
        self,
        *,
        caller: Optional[Identity],
        date: str,
        query: str = "",
        gender_tab: str = GenderTab.ALL.value,
        page: int = 1,
        page_size: int = 20,
    ) -> RosterPage:
        require_identity(caller)
        date = require_iso_date(date)
        try:
            tab = GenderTab((gender_tab or GenderTab.ALL.value).lower())
        except ValueError:
            raise ValidationError("Gender filter must be all, male or female")
        if int(page_size) not in ROSTER_PAGE_SIZES:
            raise ValidationError(f"Page size must be one of {ROSTER_PAGE_SIZES}")
        page_size = int(page_size)

        entries = self._roster(date)
        if tab != GenderTab.ALL:
            entries = [e for e in entries if (e.gender or "").lower() == tab.value]

        terms = (query or "").strip().lower().split()
        if terms:
            def haystack(e: RosterEntry) -> str:
                parts = (e.name, e.contact, e.residence, e.department, e.status)
                return " ".join(p or "" for p in parts).lower()

            entries = [e for e in entries if all(t in haystack(e) for t in terms)]

        total_pages = max(1, math.ceil(len(entries) / page_size))
        current = min(max(1, int(page)), total_pages)
        start = (current - 1) * page_size
        return RosterPage(
            items=entries[start:start + page_size],
            page=current,
            page_size=page_size,
            total_pages=total_pages,
            total_matches=len(entries),
        )
