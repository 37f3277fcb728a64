"""Gender normalization and the best-effort inference used by imports.

The inference is a heuristic over honorifics and department/status text,
not an authoritative source; unknown stays None.
"""

from __future__ import annotations

from typing import Optional

from ..core.enums import Gender


def normalize_gender(value: Optional[str]) -> Optional[str]:
    """First-letter match: 'm...' -> male, 'f...' -> female, else None."""

    if not value:
        return None
    g = value.strip().lower()
    if g.startswith("m"):
        return Gender.MALE.value
    if g.startswith("f"):
        return Gender.FEMALE.value
    return None


def infer_gender(name: str, department: Optional[str], status: Optional[str]) -> Optional[str]:
    n = name.lower()
    if n.startswith("mr "):
        return Gender.MALE.value
    if n.startswith("mrs") or n.startswith("ms") or n.startswith("miss"):
        return Gender.FEMALE.value

    d = (department or "").lower()
    s = (status or "").lower()
    # "women" contains "men", so it has to be checked first.
    if "women" in d:
        return Gender.FEMALE.value
    if "men" in d:
        return Gender.MALE.value
    if "women" in s or "mother" in s:
        return Gender.FEMALE.value
    return None
