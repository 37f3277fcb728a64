from __future__ import annotations

from typing import Any, Mapping, Optional, Sequence

from ..auth.identity import Identity, require_admin, require_identity
from ..common.logging import get_logger
from ..common.validators import require_bool, require_non_empty, to_null
from ..core.enums import Cohort
from ..core.exceptions import ConflictError, NotFoundError, ValidationError
from .gender import normalize_gender
from .model import MEMBER_ONLY_FIELDS, UPDATABLE_FIELDS, NewPerson, Person
from .repository import PersonRepository

logger = get_logger(__name__)

_LABELS = {Cohort.MEMBERS: "Member", Cohort.KIDS: "Kid"}


class PersonService:
    """Use cases: create, edit and remove members and kids."""

    def __init__(self, people: PersonRepository):
        self._people = people

    def _ensure_contact_free(self, cohort: Cohort, contact: Optional[str]) -> None:
        if contact and self._people.get_by_contact(cohort=cohort, contact=contact):
            raise ConflictError(f"{_LABELS[cohort]} with this contact already exists")

    def _get(self, cohort: Cohort, person_id: str) -> Person:
        person = self._people.get_by_id(person_id, cohort=cohort)
        if not person:
            raise NotFoundError(f"{_LABELS[cohort]} not found")
        return person

    @staticmethod
    def _check_member_only(cohort: Cohort, fields: Mapping[str, Any]) -> None:
        if cohort == Cohort.KIDS:
            extra = [k for k in MEMBER_ONLY_FIELDS if fields.get(k) is not None]
            if extra:
                raise ValidationError(f"Kids do not have: {', '.join(extra)}")

    def list_people(self, *, caller: Optional[Identity], cohort: Cohort, active: Optional[bool] = None) -> Sequence[Person]:
        require_identity(caller)
        return self._people.list_people(cohort=cohort, active=active)

    def get_person(self, *, caller: Optional[Identity], cohort: Cohort, person_id: str) -> Person:
        require_identity(caller)
        return self._get(cohort, person_id)

    def quick_add(
        self,
        *,
        caller: Optional[Identity],
        cohort: Cohort,
        name: str,
        contact: Optional[str] = None,
        residence: Optional[str] = None,
        gender: Optional[str] = None,
        department: Optional[str] = None,
        status: Optional[str] = None,
    ) -> str:
        """Fast-path creation used while taking the roll.

        Placeholders ("", "-", "n/a") become None and the person is always active.
        """
        caller = require_identity(caller)
        name = require_non_empty(name, "Name")
        self._check_member_only(cohort, {"gender": gender, "department": department, "status": status})

        contact = to_null(contact, "Contact")
        self._ensure_contact_free(cohort, contact)

        return self._people.insert(
            NewPerson(
                cohort=cohort,
                name=name,
                contact=contact,
                residence=to_null(residence, "Residence"),
                created_by=caller.subject,
                active=True,
                gender=normalize_gender(to_null(gender, "Gender")),
                department=to_null(department, "Department"),
                status=to_null(status, "Status"),
            )
        )

    def add(
        self,
        *,
        caller: Optional[Identity],
        cohort: Cohort,
        name: str,
        contact: str,
        residence: str,
        gender: Optional[str] = None,
        active: Optional[bool] = None,
    ) -> str:
        caller = require_identity(caller)
        name = require_non_empty(name, "Name")
        contact = require_non_empty(contact, "Contact")
        residence = require_non_empty(residence, "Residence")
        if cohort == Cohort.MEMBERS:
            gender = normalize_gender(require_non_empty(gender, "Gender"))
        else:
            self._check_member_only(cohort, {"gender": gender})

        self._ensure_contact_free(cohort, contact)

        return self._people.insert(
            NewPerson(
                cohort=cohort,
                name=name,
                contact=contact,
                residence=residence,
                created_by=caller.subject,
                active=True if active is None else require_bool(active, "Active"),
                gender=gender,
            )
        )

    def update(
        self,
        *,
        caller: Optional[Identity],
        cohort: Cohort,
        person_id: str,
        changes: Mapping[str, Any],
    ) -> None:
        """Partial patch: only keys present in `changes` are written."""

        require_identity(caller)
        allowed = UPDATABLE_FIELDS[cohort]
        unknown = [k for k in changes if k not in allowed]
        if unknown:
            raise ValidationError(f"Unknown fields: {', '.join(sorted(unknown))}")

        person = self._get(cohort, person_id)

        patch: dict[str, Any] = {}
        for key, value in changes.items():
            if key == "name":
                patch[key] = require_non_empty(value, "Name")
            elif key == "active":
                patch[key] = require_bool(value, "Active")
            elif key == "gender":
                patch[key] = normalize_gender(to_null(value, "Gender"))
            else:
                patch[key] = to_null(value, key.capitalize())

        new_contact = patch.get("contact")
        if new_contact and new_contact != person.contact:
            self._ensure_contact_free(cohort, new_contact)

        self._people.patch(cohort=cohort, person_id=person_id, changes=patch)

    def remove(self, *, caller: Optional[Identity], cohort: Cohort, person_id: str) -> None:
        """Admin-only hard delete of the person together with their attendance."""

        caller = require_admin(caller)
        self._get(cohort, person_id)

        removed = self._people.delete(cohort=cohort, person_id=person_id)
        logger.info(
            "Deleted %s %s and %d attendance records (by %s)",
            cohort.value, person_id, removed, caller.subject,
        )
