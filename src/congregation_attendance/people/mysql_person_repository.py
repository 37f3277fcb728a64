from __future__ import annotations

import uuid
from typing import Any, Mapping, Optional, Sequence

import mysql.connector

from ..core.enums import Cohort
from ..core.exceptions import ConflictError, ValidationError
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone, in_clause
from .model import UPDATABLE_FIELDS, NewPerson, Person
from .repository import PersonRepository

_COLUMNS = {
    Cohort.MEMBERS: "person_id, name, contact, residence, gender, department, status, active, created_by, created_at",
    Cohort.KIDS: "person_id, name, contact, residence, active, created_by, created_at",
}


def _table(cohort: Cohort) -> str:
    # Table names come from the enum only, never from request input.
    return Cohort(cohort).value


def _to_person(cohort: Cohort, r: dict) -> Person:
    return Person(
        person_id=r["person_id"],
        cohort=cohort,
        name=r["name"],
        contact=r.get("contact"),
        residence=r.get("residence"),
        active=bool(r.get("active", True)),
        created_by=r["created_by"],
        gender=r.get("gender"),
        department=r.get("department"),
        status=r.get("status"),
        created_at=r.get("created_at"),
    )


class MySQLPersonRepository(PersonRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_by_id(self, person_id: str, *, cohort: Optional[Cohort] = None) -> Optional[Person]:
        cohorts = [cohort] if cohort else list(Cohort)
        with db_cursor(self._conn_factory) as (_, cur):
            for c in cohorts:
                cur.execute(
                    f"SELECT {_COLUMNS[c]} FROM {_table(c)} WHERE person_id=%s",
                    (person_id,),
                )
                r = fetchone(cur)
                if r:
                    return _to_person(c, r)
        return None

    def get_by_contact(self, *, cohort: Cohort, contact: str) -> Optional[Person]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"SELECT {_COLUMNS[cohort]} FROM {_table(cohort)} WHERE contact=%s LIMIT 1",
                (contact,),
            )
            r = fetchone(cur)
            return _to_person(cohort, r) if r else None

    def list_people(self, *, cohort: Cohort, active: Optional[bool] = None) -> Sequence[Person]:
        with db_cursor(self._conn_factory) as (_, cur):
            if active is None:
                cur.execute(f"SELECT {_COLUMNS[cohort]} FROM {_table(cohort)} ORDER BY created_at DESC")
            else:
                cur.execute(
                    f"SELECT {_COLUMNS[cohort]} FROM {_table(cohort)} WHERE active=%s ORDER BY created_at ASC",
                    (1 if active else 0,),
                )
            return [_to_person(cohort, r) for r in fetchall(cur)]

    def get_names(self, person_ids: Sequence[str]) -> dict[str, str]:
        ids = list(dict.fromkeys(person_ids))
        if not ids:
            return {}
        out: dict[str, str] = {}
        with db_cursor(self._conn_factory) as (_, cur):
            for c in Cohort:
                cur.execute(
                    f"SELECT person_id, name FROM {_table(c)} WHERE person_id IN ({in_clause(ids)})",
                    tuple(ids),
                )
                for r in fetchall(cur):
                    out[r["person_id"]] = r["name"]
        return out

    def insert(self, person: NewPerson) -> str:
        person_id = uuid.uuid4().hex
        try:
            with db_cursor(self._conn_factory) as (_, cur):
                if person.cohort == Cohort.MEMBERS:
                    cur.execute(
                        """
                        INSERT INTO members(person_id, name, contact, residence, gender, department, status, active, created_by)
                        VALUES(%s,%s,%s,%s,%s,%s,%s,%s,%s)
                        """,
                        (
                            person_id,
                            person.name,
                            person.contact,
                            person.residence,
                            person.gender,
                            person.department,
                            person.status,
                            1 if person.active else 0,
                            person.created_by,
                        ),
                    )
                else:
                    cur.execute(
                        """
                        INSERT INTO kids(person_id, name, contact, residence, active, created_by)
                        VALUES(%s,%s,%s,%s,%s,%s)
                        """,
                        (
                            person_id,
                            person.name,
                            person.contact,
                            person.residence,
                            1 if person.active else 0,
                            person.created_by,
                        ),
                    )
        except mysql.connector.IntegrityError as e:
            raise ConflictError(f"{person.cohort.value}: contact already exists") from e
        return person_id

    def patch(self, *, cohort: Cohort, person_id: str, changes: Mapping[str, Any]) -> bool:
        allowed = UPDATABLE_FIELDS[cohort]
        unknown = [k for k in changes if k not in allowed]
        if unknown:
            raise ValidationError(f"Unknown fields: {', '.join(sorted(unknown))}")
        if not changes:
            return True

        assignments = ", ".join(f"{k}=%s" for k in changes)
        params = [(1 if v else 0) if k == "active" else v for k, v in changes.items()]
        params.append(person_id)
        try:
            with db_cursor(self._conn_factory) as (_, cur):
                cur.execute(
                    f"UPDATE {_table(cohort)} SET {assignments} WHERE person_id=%s",
                    tuple(params),
                )
                return cur.rowcount > 0
        except mysql.connector.IntegrityError as e:
            raise ConflictError(f"{cohort.value}: contact already exists") from e

    def delete(self, *, cohort: Cohort, person_id: str) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("DELETE FROM attendance WHERE person_id=%s", (person_id,))
            removed = int(cur.rowcount)
            cur.execute(f"DELETE FROM {_table(cohort)} WHERE person_id=%s", (person_id,))
            return removed
