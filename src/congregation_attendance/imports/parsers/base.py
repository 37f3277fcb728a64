from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Sequence

from ...core.enums import Cohort
from ...core.exceptions import ValidationError
from ..model import ParsedRow


class RowSkipped(Exception):
    """A row that is well-formed but carries nothing to insert (e.g. blank name)."""


class RowParser(ABC):
    """Strategy Pattern: how one cohort's CSV row maps onto a person."""

    cohort: Cohort
    min_fields: int

    def parse(self, parts: Sequence[str]) -> ParsedRow:
        if len(parts) < self.min_fields:
            raise ValidationError(f"Expected at least {self.min_fields} fields, got {len(parts)}")
        return self._parse(parts)

    @abstractmethod
    def _parse(self, parts: Sequence[str]) -> ParsedRow:
        raise NotImplementedError
