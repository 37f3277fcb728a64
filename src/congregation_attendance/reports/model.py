from __future__ import annotations

from dataclasses import asdict, dataclass, field
from datetime import datetime
from typing import Optional


@dataclass(frozen=True)
class LastAttendance:
    date: str
    present: bool


@dataclass(frozen=True)
class RosterEntry:
    """Read-model: one active person annotated with presence for a date."""

    person_id: str
    cohort: str
    name: str
    contact: Optional[str]
    residence: Optional[str]
    gender: Optional[str]
    department: Optional[str]
    status: Optional[str]
    present_today: bool
    last_attendance: Optional[LastAttendance]

    def to_dict(self) -> dict:
        return asdict(self)


@dataclass(frozen=True)
class ActivityItem:
    attendance_id: int
    date: str
    present: bool
    person_id: str
    person_name: str
    created_at: Optional[datetime]

    def to_dict(self) -> dict:
        out = asdict(self)
        out["created_at"] = self.created_at.isoformat() if self.created_at else None
        return out


@dataclass(frozen=True)
class RollCallSummary:
    date: str
    total: int
    present: int
    absent: int

    def to_dict(self) -> dict:
        return asdict(self)


@dataclass(frozen=True)
class RollCallDetail:
    date: str
    label: str
    total: int
    present: int
    absent: int
    present_male: list[RosterEntry] = field(default_factory=list)
    present_female: list[RosterEntry] = field(default_factory=list)
    present_unknown: list[RosterEntry] = field(default_factory=list)

    def to_dict(self) -> dict:
        return asdict(self)


@dataclass(frozen=True)
class DashboardData:
    date: str
    label: str
    total: int
    present: int
    absent: int
    rate: int
    recent: list[ActivityItem] = field(default_factory=list)

    def to_dict(self) -> dict:
        out = asdict(self)
        out["recent"] = [r.to_dict() for r in self.recent]
        return out


@dataclass(frozen=True)
class RosterPage:
    items: list[RosterEntry]
    page: int
    page_size: int
    total_pages: int
    total_matches: int

    def to_dict(self) -> dict:
        return asdict(self)
