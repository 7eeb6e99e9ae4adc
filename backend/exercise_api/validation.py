"""
Exercise API Backend: Validation Layer
=======================================

Pure field and format checks applied to a request payload before any
Record Store call. Nothing here touches I/O or raises; callers decide what a
non-empty violation list means.

Field rules:
    name    non-empty string
    reps    integer > 0
    weight  integer > 0
    unit    one of "lbs", "kgs"
    date    DD-DD-DD, digits only, shape checked separately by is_date_valid()
"""

import re
from typing import Any, List

VALID_UNITS = ("lbs", "kgs")

# Exactly MM-DD-YY. [0-9] rather than \d, which also matches non-ASCII digits.
DATE_PATTERN = re.compile(r"[0-9]{2}-[0-9]{2}-[0-9]{2}")

# Optional sign followed by decimal digits, leading zeroes allowed.
# No surrounding whitespace: " 5 " is not an integer.
_INT_PATTERN = re.compile(r"([+-]?)0*([0-9]*)")

# Longest digit run (after leading zeroes) accepted as an integer string.
# Anything longer could not be stored in an INTEGER column anyway.
MAX_INT_DIGITS = 18


def is_date_valid(date: Any) -> bool:
    """
    Return True if `date` is a string shaped MM-DD-YY.

    Only the shape is checked: "13-40-99" is valid, "1-01-01" and
    "01-01-2001" are not.
    """
    if not isinstance(date, str):
        return False
    return DATE_PATTERN.fullmatch(date) is not None


def is_positive_int(value: Any) -> bool:
    """
    True for an integer greater than zero.

    Accepts JSON integers, floats with an integral value (5.0) and integer
    strings ("5"). Booleans are rejected even though bool subclasses int.
    """
    if isinstance(value, bool):
        return False
    if isinstance(value, int):
        return value > 0
    if isinstance(value, float):
        return value.is_integer() and value > 0
    if isinstance(value, str):
        return _positive_int_string(value)
    return False


def _positive_int_string(value: str) -> bool:
    """Decide the sign from the digits alone; int() is never run on unbounded input."""
    if not value:
        return False
    match = _INT_PATTERN.fullmatch(value)
    if match is None:
        return False
    sign, digits = match.groups()
    if not digits:
        # All zeroes (or a bare sign)
        return False
    return sign != "-" and len(digits) <= MAX_INT_DIGITS


def coerce_int(value: Any) -> int:
    """
    Convert an already-validated integer field to the int that gets stored.

    Only call after is_positive_int(): that bounds the significant digits.
    Leading zeroes are dropped before int(), which counts them toward the
    interpreter's digit limit.
    """
    if isinstance(value, str):
        sign, digits = _INT_PATTERN.fullmatch(value).groups()
        return int(sign + digits)
    return int(value)


def validate_exercise_payload(payload: Any, require_date: bool = False) -> List[str]:
    """
    Check the create/replace field rules and return the violated fields.

    Args:
        payload:      Decoded JSON body. Anything other than a dict fails
                      every field.
        require_date: Replace requires `date` to be present. Create leaves
                      the date entirely to is_date_valid().

    Returns:
        Field names in check order. Empty means the payload is valid.
    """
    if not isinstance(payload, dict):
        payload = {}

    violations: List[str] = []

    name = payload.get("name")
    if not isinstance(name, str) or len(name) < 1:
        violations.append("name")

    for field in ("reps", "weight"):
        if not is_positive_int(payload.get(field)):
            violations.append(field)

    if payload.get("unit") not in VALID_UNITS:
        violations.append("unit")

    if require_date and payload.get("date") is None:
        violations.append("date")

    return violations
