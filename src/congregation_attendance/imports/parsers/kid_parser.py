from __future__ import annotations

from typing import Sequence

from ...common.validators import to_null
from ...core.constants import KID_IMPORT_MIN_FIELDS
from ...core.enums import Cohort
from ..model import ParsedRow
from .base import RowParser, RowSkipped


class KidRowParser(RowParser):
    """Number,Name,Contact,Residence (the number column is ignored)."""

    cohort = Cohort.KIDS
    min_fields = KID_IMPORT_MIN_FIELDS

    def _parse(self, parts: Sequence[str]) -> ParsedRow:
        name = parts[1].strip()
        if not name:
            raise RowSkipped("blank name")

        return ParsedRow(
            name=name,
            contact=to_null(parts[2]),
            residence=to_null(parts[3]) if len(parts) > 3 else None,
        )
