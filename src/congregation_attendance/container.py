from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from .attendance.mysql_attendance_repository import MySQLAttendanceRepository
from .attendance.repository import AttendanceRepository
from .attendance.service import AttendanceService
from .auth.tokens import TokenDecoder, TokenSettings
from .core.constants import ROLL_CALL_SCAN_LIMIT
from .database.connection import DBConfig, DatabaseConnection
from .imports.service import ImportService
from .people.mysql_person_repository import MySQLPersonRepository
from .people.repository import PersonRepository
from .people.service import PersonService
from .reports.service import AttendanceReportService


@dataclass(frozen=True)
class Container:
    conn: Optional[DatabaseConnection]

    people_repo: PersonRepository
    attendance_repo: AttendanceRepository

    token_decoder: TokenDecoder

    person_service: PersonService
    attendance_service: AttendanceService
    report_service: AttendanceReportService
    import_service: ImportService


def assemble(
    *,
    people_repo: PersonRepository,
    attendance_repo: AttendanceRepository,
    token_settings: TokenSettings,
    roll_call_scan_limit: int = ROLL_CALL_SCAN_LIMIT,
    conn: Optional[DatabaseConnection] = None,
) -> Container:
    """Wire services over any repository implementation."""

    return Container(
        conn=conn,
        people_repo=people_repo,
        attendance_repo=attendance_repo,
        token_decoder=TokenDecoder(token_settings),
        person_service=PersonService(people_repo),
        attendance_service=AttendanceService(attendance_repo, people_repo),
        report_service=AttendanceReportService(
            attendance_repo,
            people_repo,
            roll_call_scan_limit=roll_call_scan_limit,
        ),
        import_service=ImportService(people_repo),
    )


def build_container(
    *,
    db_config: dict,
    token_settings: TokenSettings,
    roll_call_scan_limit: int = ROLL_CALL_SCAN_LIMIT,
) -> Container:
    conn = DatabaseConnection.get_instance(DBConfig.from_dict(db_config))
    return assemble(
        people_repo=MySQLPersonRepository(conn),
        attendance_repo=MySQLAttendanceRepository(conn),
        token_settings=token_settings,
        roll_call_scan_limit=roll_call_scan_limit,
        conn=conn,
    )
