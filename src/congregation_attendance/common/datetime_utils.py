from __future__ import annotations

import re
from datetime import date, datetime

_ISO_DATE_RE = re.compile(r"^([0-9]{4})-([0-9]{2})-([0-9]{2})$")


def parse_iso_date(value: str) -> date:
    """Parse YYYY-MM-DD string into date."""
    return datetime.strptime(value, "%Y-%m-%d").date()


def is_iso_date(value: str) -> bool:
    if not value or not _ISO_DATE_RE.match(value):
        return False
    try:
        parse_iso_date(value)
    except ValueError:
        return False
    return True


def today_iso() -> str:
    """Current local date as YYYY-MM-DD.

    Note: Wrapped so tests can patch it.
    """
    return date.today().strftime("%Y-%m-%d")


def _ordinal(n: int) -> str:
    if 11 <= n % 100 <= 13:
        return f"{n}th"
    return f"{n}" + {1: "st", 2: "nd", 3: "rd"}.get(n % 10, "th")


def format_iso_date(value: str) -> str:
    """Human label for an ISO date, e.g. '2026-01-10' -> '10th Jan 2026'.

    Strings that are not ISO dates are returned unchanged.
    """
    m = _ISO_DATE_RE.match(value or "")
    if not m:
        return value
    try:
        d = parse_iso_date(value)
    except ValueError:
        return value
    return f"{_ordinal(d.day)} {d.strftime('%b')} {d.year}"
