from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Optional


@dataclass(frozen=True)
class AttendanceRecord:
    """Domain entity: presence of one person on one date.

    `date` is YYYY-MM-DD and is compared as a string.
    """

    attendance_id: int
    person_id: str
    date: str
    present: bool
    marked_by: str
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    def to_dict(self) -> dict:
        return {
            "attendance_id": self.attendance_id,
            "person_id": self.person_id,
            "date": self.date,
            "present": self.present,
            "marked_by": self.marked_by,
            "created_at": self.created_at.isoformat() if self.created_at else None,
        }
