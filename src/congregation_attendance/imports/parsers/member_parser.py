from __future__ import annotations

from typing import Sequence

from ...common.validators import to_null
from ...core.constants import MEMBER_IMPORT_MIN_FIELDS
from ...core.enums import Cohort
from ...people.gender import infer_gender, normalize_gender
from ..model import ParsedRow
from .base import RowParser, RowSkipped


class MemberRowParser(RowParser):
    """Name,Contact,Residence,Department,Status[,Gender]"""

    cohort = Cohort.MEMBERS
    min_fields = MEMBER_IMPORT_MIN_FIELDS

    def _parse(self, parts: Sequence[str]) -> ParsedRow:
        name = parts[0].strip()
        if not name:
            raise RowSkipped("blank name")

        department = to_null(parts[3])
        status = to_null(parts[4])
        explicit = normalize_gender(to_null(parts[5])) if len(parts) > 5 else None

        return ParsedRow(
            name=name,
            contact=to_null(parts[1]),
            residence=to_null(parts[2]),
            gender=explicit or infer_gender(name, department, status),
            department=department,
            status=status,
        )
