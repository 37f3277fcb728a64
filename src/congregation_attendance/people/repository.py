from __future__ import annotations

from typing import Any, Mapping, Optional, Protocol, Sequence

from ..core.enums import Cohort
from .model import NewPerson, Person


class PersonRepository(Protocol):
    """Repository interface for members and kids.

    Note: each cohort lives in its own table; contact uniqueness is per cohort.
    """

    def get_by_id(self, person_id: str, *, cohort: Optional[Cohort] = None) -> Optional[Person]:
        """Look up a person; without `cohort` both tables are searched."""

        raise NotImplementedError

    def get_by_contact(self, *, cohort: Cohort, contact: str) -> Optional[Person]:
        raise NotImplementedError

    def list_people(self, *, cohort: Cohort, active: Optional[bool] = None) -> Sequence[Person]:
        raise NotImplementedError

    def get_names(self, person_ids: Sequence[str]) -> dict[str, str]:
        """Map of person_id -> name for the ids that still exist."""

        raise NotImplementedError

    def insert(self, person: NewPerson) -> str:
        """Insert and return the new person_id. Raises ConflictError on duplicate contact."""

        raise NotImplementedError

    def patch(self, *, cohort: Cohort, person_id: str, changes: Mapping[str, Any]) -> bool:
        raise NotImplementedError

    def delete(self, *, cohort: Cohort, person_id: str) -> int:
        """Hard-delete the person and their attendance records in one transaction.

        Returns the number of attendance records removed.
        """

        raise NotImplementedError
