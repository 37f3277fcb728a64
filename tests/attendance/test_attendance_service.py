import pytest

from congregation_attendance.core.enums import Cohort
from congregation_attendance.core.exceptions import NotFoundError, UnauthorizedError, ValidationError


@pytest.fixture
def member_id(person_service, usher):
    return person_service.quick_add(caller=usher, cohort=Cohort.MEMBERS, name="A")


def test_mark_present_is_idempotent(attendance_service, attendance_repo, member_id, usher):
    first = attendance_service.mark_present(caller=usher, person_id=member_id, date="2026-01-04")
    second = attendance_service.mark_present(caller=usher, person_id=member_id, date="2026-01-04")

    assert first == second
    assert len(attendance_repo.rows) == 1
    assert attendance_repo.rows[first].present is True


def test_unmark_flips_existing_record(attendance_service, attendance_repo, member_id, usher):
    aid = attendance_service.mark_present(caller=usher, person_id=member_id, date="2026-01-04")

    assert attendance_service.unmark_present(caller=usher, person_id=member_id, date="2026-01-04") == aid
    assert attendance_service.unmark_present(caller=usher, person_id=member_id, date="2026-01-04") == aid
    assert attendance_repo.rows[aid].present is False

    # Marking again reuses the same record.
    assert attendance_service.mark_present(caller=usher, person_id=member_id, date="2026-01-04") == aid
    assert attendance_repo.rows[aid].present is True


def test_unmark_without_record_creates_nothing(attendance_service, attendance_repo, member_id, usher):
    assert attendance_service.unmark_present(caller=usher, person_id=member_id, date="2026-01-04") is None
    assert attendance_repo.rows == {}


def test_mark_present_unknown_person(attendance_service, usher):
    with pytest.raises(NotFoundError):
        attendance_service.mark_present(caller=usher, person_id="ghost", date="2026-01-04")


@pytest.mark.parametrize("bad", ["", "2026-1-4", "04/01/2026", "2026-02-30"])
def test_dates_must_be_iso(attendance_service, member_id, usher, bad):
    with pytest.raises(ValidationError):
        attendance_service.mark_present(caller=usher, person_id=member_id, date=bad)


def test_history_is_newest_first(attendance_service, member_id, usher):
    for d in ("2026-01-11", "2026-01-04", "2026-01-18"):
        attendance_service.mark_present(caller=usher, person_id=member_id, date=d)

    history = attendance_service.history_for_member(caller=usher, person_id=member_id)
    assert [r.date for r in history] == ["2026-01-18", "2026-01-11", "2026-01-04"]


def test_attendance_by_date_includes_unmarked(attendance_service, member_id, usher):
    attendance_service.mark_present(caller=usher, person_id=member_id, date="2026-01-04")
    attendance_service.unmark_present(caller=usher, person_id=member_id, date="2026-01-04")

    records = attendance_service.attendance_by_date(caller=usher, date="2026-01-04")
    assert [(r.person_id, r.present) for r in records] == [(member_id, False)]


def test_requires_identity(attendance_service, member_id):
    with pytest.raises(UnauthorizedError):
        attendance_service.mark_present(caller=None, person_id=member_id, date="2026-01-04")


def test_mark_present_over_existing_absent_record_keeps_one_row(attendance_service, attendance_repo, member_id, usher):
    aid = attendance_repo.upsert(person_id=member_id, date="2026-01-04", present=False, marked_by="other")

    assert attendance_service.mark_present(caller=usher, person_id=member_id, date="2026-01-04") == aid

    assert len(attendance_repo.rows) == 1
    assert attendance_repo.rows[aid].present is True
    assert attendance_repo.rows[aid].marked_by == "user_usher"
