import pytest

from congregation_attendance.core.enums import Cohort
from congregation_attendance.core.exceptions import UnauthorizedError

MEMBERS_CSV = (
    "Name,Contact,Residence,Department,Status\n"
    "John Doe,0712345678,Town,Usher,Youth\n"
    ",0700000000,X,Y,Z\n"
    "Jane,-,-,-,-"
)


def test_members_import_counts(import_service, people_repo, usher):
    result = import_service.bulk_import(caller=usher, cohort=Cohort.MEMBERS, csv_text=MEMBERS_CSV)

    assert result.to_dict() == {"inserted": 2, "skipped": 1, "errors": 0}

    jane = next(p for p in people_repo.rows.values() if p.name == "Jane")
    assert (jane.contact, jane.residence, jane.department, jane.status) == (None, None, None, None)
    assert jane.active is True
    assert jane.created_by == "user_usher"


def test_members_import_skips_existing_contact(import_service, usher):
    import_service.bulk_import(caller=usher, cohort=Cohort.MEMBERS, csv_text=MEMBERS_CSV)

    again = import_service.bulk_import(caller=usher, cohort=Cohort.MEMBERS, csv_text=MEMBERS_CSV)

    # John's contact exists; Jane has no contact so she is inserted again.
    assert again.to_dict() == {"inserted": 1, "skipped": 2, "errors": 0}


def test_short_rows_are_errors_not_failures(import_service, usher):
    text = "John,0711,Town\nAnn,0722,Town,Choir,Member\r\n\r\n"

    result = import_service.bulk_import(caller=usher, cohort=Cohort.MEMBERS, csv_text=text)

    assert result.to_dict() == {"inserted": 1, "skipped": 0, "errors": 1}


def test_member_gender_column_or_inference(import_service, people_repo, usher):
    text = (
        "Mrs Jane Doe,01,Town,Choir,Member\n"
        "John Smith,02,Town,Men's Fellowship,Member\n"
        "Alex Lee,03,Town,Choir,Member\n"
        "Sam Lee,04,Town,Choir,Member,F\n"
    )

    import_service.bulk_import(caller=usher, cohort=Cohort.MEMBERS, csv_text=text)

    genders = {p.name: p.gender for p in people_repo.rows.values()}
    assert genders == {"Mrs Jane Doe": "female", "John Smith": "male", "Alex Lee": None, "Sam Lee": "female"}


def test_kids_import_ignores_number_column(import_service, people_repo, usher):
    text = "No,Name,Contact,Residence\n1,Tim,0711,Town\n2,Ann,-\n3,,0733,Town\n4,Bob,0711,Village\n"

    result = import_service.bulk_import(caller=usher, cohort=Cohort.KIDS, csv_text=text)

    # Bob reuses Tim's contact and is rejected by the store.
    assert result.to_dict() == {"inserted": 2, "skipped": 1, "errors": 1}
    kids = {p.name: p for p in people_repo.rows.values()}
    assert kids["Tim"].residence == "Town"
    assert kids["Ann"].contact is None
    assert kids["Ann"].residence is None
    assert all(p.cohort == Cohort.KIDS for p in kids.values())


def test_empty_input(import_service, usher):
    result = import_service.bulk_import(caller=usher, cohort=Cohort.KIDS, csv_text="\n \n")
    assert result.to_dict() == {"inserted": 0, "skipped": 0, "errors": 0}


def test_import_requires_identity(import_service):
    with pytest.raises(UnauthorizedError):
        import_service.bulk_import(caller=None, cohort=Cohort.MEMBERS, csv_text=MEMBERS_CSV)
