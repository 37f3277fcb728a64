from __future__ import annotations

from enum import Enum


class Role(str, Enum):
    """Role claim values used for authorization."""

    ADMIN = "admin"


class Cohort(str, Enum):
    """The two person categories tracked by the system."""

    MEMBERS = "members"
    KIDS = "kids"


class Gender(str, Enum):
    MALE = "male"
    FEMALE = "female"


class GenderTab(str, Enum):
    """Roster filter tabs on the roll-call screen."""

    ALL = "all"
    MALE = "male"
    FEMALE = "female"
