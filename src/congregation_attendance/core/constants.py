"""Constants and defaults.

Note: Keep constants here to avoid magic numbers spread across code.
"""

DEFAULT_ACTIVITY_LIMIT = 10
MAX_ACTIVITY_LIMIT = 50

DEFAULT_ROLL_CALL_LIMIT = 20
MAX_ROLL_CALL_LIMIT = 60

# Distinct roll-call dates are discovered from this many most recent records only.
ROLL_CALL_SCAN_LIMIT = 2000

UNKNOWN_PERSON_NAME = "Unknown"

MEMBER_IMPORT_MIN_FIELDS = 5
KID_IMPORT_MIN_FIELDS = 3

PLACEHOLDER_VALUES = frozenset({"", "-", "n/a"})

ROSTER_PAGE_SIZES = (10, 20)
