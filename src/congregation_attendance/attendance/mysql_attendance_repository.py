from __future__ import annotations

from typing import Optional, Sequence

from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone, in_clause
from .model import AttendanceRecord
from .repository import AttendanceRepository

_SELECT = """
    SELECT attendance_id, person_id, date, present, marked_by, created_at, updated_at
    FROM attendance
"""


def _to_record(r: dict) -> AttendanceRecord:
    return AttendanceRecord(
        attendance_id=int(r["attendance_id"]),
        person_id=r["person_id"],
        date=r["date"],
        present=bool(r["present"]),
        marked_by=r["marked_by"],
        created_at=r.get("created_at"),
        updated_at=r.get("updated_at"),
    )


class MySQLAttendanceRepository(AttendanceRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_for_person_and_date(self, person_id: str, date: str) -> Optional[AttendanceRecord]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(_SELECT + " WHERE person_id=%s AND date=%s", (person_id, date))
            r = fetchone(cur)
            return _to_record(r) if r else None

    def upsert(self, *, person_id: str, date: str, present: bool, marked_by: str) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO attendance(person_id, date, present, marked_by)
                VALUES(%s,%s,%s,%s)
                ON DUPLICATE KEY UPDATE present=VALUES(present), marked_by=VALUES(marked_by)
                """,
                (person_id, date, 1 if present else 0, marked_by),
            )
            cur.execute(
                "SELECT attendance_id FROM attendance WHERE person_id=%s AND date=%s",
                (person_id, date),
            )
            return int(fetchone(cur)["attendance_id"])

    def set_present(self, *, attendance_id: int, present: bool, marked_by: str) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "UPDATE attendance SET present=%s, marked_by=%s WHERE attendance_id=%s",
                (1 if present else 0, marked_by, int(attendance_id)),
            )
            return cur.rowcount > 0

    def list_for_date(self, date: str) -> Sequence[AttendanceRecord]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(_SELECT + " WHERE date=%s ORDER BY attendance_id ASC", (date,))
            return [_to_record(r) for r in fetchall(cur)]

    def list_for_person(self, person_id: str) -> Sequence[AttendanceRecord]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(_SELECT + " WHERE person_id=%s", (person_id,))
            return [_to_record(r) for r in fetchall(cur)]

    def list_for_people(self, person_ids: Sequence[str]) -> Sequence[AttendanceRecord]:
        ids = list(dict.fromkeys(person_ids))
        if not ids:
            return []
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(_SELECT + f" WHERE person_id IN ({in_clause(ids)})", tuple(ids))
            return [_to_record(r) for r in fetchall(cur)]

    def list_recent(self, limit: int) -> Sequence[AttendanceRecord]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(_SELECT + " ORDER BY attendance_id DESC LIMIT %s", (int(limit),))
            return [_to_record(r) for r in fetchall(cur)]

