from __future__ import annotations

from typing import Optional

from ..auth.identity import Identity, require_identity
from ..common.logging import get_logger
from ..core.enums import Cohort
from ..core.exceptions import ValidationError
from ..people.model import NewPerson
from ..people.repository import PersonRepository
from .csv_text import is_header, split_lines, split_row
from .factory import RowParserFactory
from .model import ImportResult
from .parsers.base import RowSkipped

logger = get_logger(__name__)


class ImportService:
    """Use case: bulk-create members or kids from pasted CSV text.

    Row problems are counted, never raised; only a missing identity fails the call.
    """

    def __init__(self, people: PersonRepository, *, parser_factory: RowParserFactory | None = None):
        self._people = people
        self._factory = parser_factory or RowParserFactory()

    def bulk_import(self, *, caller: Optional[Identity], cohort: Cohort, csv_text: str) -> ImportResult:
        caller = require_identity(caller)
        cohort = Cohort(cohort)
        parser = self._factory.for_cohort(cohort)

        lines = split_lines(csv_text)
        if lines and is_header(lines[0]):
            lines = lines[1:]

        inserted = skipped = errors = 0
        for line_no, line in enumerate(lines, start=1):
            try:
                row = parser.parse(split_row(line))
            except RowSkipped:
                skipped += 1
                continue
            except ValidationError as e:
                logger.warning("Import %s row %d rejected: %s", cohort.value, line_no, e)
                errors += 1
                continue

            try:
                # Members with a known contact are skipped; kids rely on the store's unique key.
                if cohort == Cohort.MEMBERS and row.contact:
                    if self._people.get_by_contact(cohort=cohort, contact=row.contact):
                        skipped += 1
                        continue

                self._people.insert(
                    NewPerson(
                        cohort=cohort,
                        name=row.name,
                        contact=row.contact,
                        residence=row.residence,
                        created_by=caller.subject,
                        active=True,
                        gender=row.gender,
                        department=row.department,
                        status=row.status,
                    )
                )
                inserted += 1
            except Exception:
                logger.warning("Import %s row %d failed to insert", cohort.value, line_no, exc_info=True)
                errors += 1

        result = ImportResult(inserted=inserted, skipped=skipped, errors=errors)
        logger.info("Imported %s by %s: %s", cohort.value, caller.subject, result.to_dict())
        return result
