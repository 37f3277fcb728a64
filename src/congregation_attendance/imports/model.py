from __future__ import annotations

from dataclasses import asdict, dataclass
from typing import Optional


@dataclass(frozen=True)
class ParsedRow:
    name: str
    contact: Optional[str]
    residence: Optional[str]
    gender: Optional[str] = None
    department: Optional[str] = None
    status: Optional[str] = None


@dataclass(frozen=True)
class ImportResult:
    inserted: int = 0
    skipped: int = 0
    errors: int = 0

    def to_dict(self) -> dict:
        return asdict(self)
