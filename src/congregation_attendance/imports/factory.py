from __future__ import annotations

from dataclasses import dataclass

from ..core.enums import Cohort
from .parsers.base import RowParser
from .parsers.kid_parser import KidRowParser
from .parsers.member_parser import MemberRowParser


@dataclass
class RowParserFactory:
    """Factory Pattern: pick the row parser for a cohort."""

    def for_cohort(self, cohort: Cohort) -> RowParser:
        if Cohort(cohort) == Cohort.MEMBERS:
            return MemberRowParser()
        return KidRowParser()
