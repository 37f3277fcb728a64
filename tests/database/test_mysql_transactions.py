from congregation_attendance.attendance.mysql_attendance_repository import MySQLAttendanceRepository
from congregation_attendance.core.enums import Cohort
from congregation_attendance.people.mysql_person_repository import MySQLPersonRepository


class RecordingCursor:
    def __init__(self, log, rows):
        self._log = log
        self._rows = rows
        self.rowcount = 0

    def execute(self, sql, params=()):
        self._log.append(("execute", " ".join(sql.split()), params))
        self.rowcount = 2

    def fetchone(self):
        return self._rows.pop(0) if self._rows else None

    def fetchall(self):
        return []

    def close(self):
        pass


class RecordingConnection:
    def __init__(self, log, rows):
        self._log = log
        self._rows = rows

    def cursor(self, dictionary=True):
        return RecordingCursor(self._log, self._rows)

    def commit(self):
        self._log.append(("commit",))

    def rollback(self):
        self._log.append(("rollback",))

    def close(self):
        self._log.append(("close",))


class RecordingFactory:
    def __init__(self, rows=None):
        self.log = []
        self.rows = list(rows or [])
        self.connections = 0

    def connect(self):
        self.connections += 1
        return RecordingConnection(self.log, self.rows)


def test_person_delete_removes_attendance_in_same_transaction():
    factory = RecordingFactory()

    removed = MySQLPersonRepository(factory).delete(cohort=Cohort.KIDS, person_id="abc")

    assert removed == 2
    assert factory.connections == 1
    statements = [entry[1] for entry in factory.log if entry[0] == "execute"]
    assert statements == [
        "DELETE FROM attendance WHERE person_id=%s",
        "DELETE FROM kids WHERE person_id=%s",
    ]
    assert [e[0] for e in factory.log[-2:]] == ["commit", "close"]


def test_attendance_upsert_is_a_single_insert_on_duplicate_key():
    factory = RecordingFactory(rows=[{"attendance_id": 7}])

    attendance_id = MySQLAttendanceRepository(factory).upsert(
        person_id="abc", date="2026-01-04", present=True, marked_by="user_usher"
    )

    assert attendance_id == 7
    assert factory.connections == 1
    insert = factory.log[0][1]
    assert insert.startswith("INSERT INTO attendance")
    assert "ON DUPLICATE KEY UPDATE present=VALUES(present), marked_by=VALUES(marked_by)" in insert
    assert factory.log[0][2] == ("abc", "2026-01-04", 1, "user_usher")
    assert ("commit",) in factory.log
