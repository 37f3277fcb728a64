from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Optional

from ..core.enums import Cohort

MEMBER_ONLY_FIELDS = ("gender", "department", "status")

# Fields a partial update may touch, per cohort.
UPDATABLE_FIELDS = {
    Cohort.MEMBERS: ("name", "contact", "residence", "gender", "department", "status", "active"),
    Cohort.KIDS: ("name", "contact", "residence", "active"),
}


@dataclass(frozen=True)
class Person:
    """Domain entity: a member or a kid.

    Member-only fields stay None for kids.
    """

    person_id: str
    cohort: Cohort
    name: str
    contact: Optional[str]
    residence: Optional[str]
    active: bool
    created_by: str
    gender: Optional[str] = None
    department: Optional[str] = None
    status: Optional[str] = None
    created_at: Optional[datetime] = None

    def to_dict(self) -> dict:
        out = {
            "person_id": self.person_id,
            "cohort": self.cohort.value,
            "name": self.name,
            "contact": self.contact,
            "residence": self.residence,
            "active": self.active,
            "created_by": self.created_by,
        }
        if self.cohort == Cohort.MEMBERS:
            out.update(gender=self.gender, department=self.department, status=self.status)
        return out


@dataclass(frozen=True)
class NewPerson:
    """Insert payload; the repository assigns person_id and created_at."""

    cohort: Cohort
    name: str
    contact: Optional[str]
    residence: Optional[str]
    created_by: str
    active: bool = True
    gender: Optional[str] = None
    department: Optional[str] = None
    status: Optional[str] = None
