# minijira/core/ids.py
import re

from minijira.core.errors import ValidationFailed

# Primary keys are signed 64-bit integers in every backend we target
MAX_ID = 2**63 - 1

_DIGITS = re.compile(r"\s*-?[0-9]+\s*")


def fits_id(value: int) -> bool:
    return -MAX_ID - 1 <= value <= MAX_ID


def parse_id(value, field: str) -> int:
    """Accept ints and plain decimal strings within the key range, reject everything else."""
    if isinstance(value, bool):
        raise ValidationFailed(f"{field} is invalid")
    if isinstance(value, int):
        number = value
    elif isinstance(value, str) and _DIGITS.fullmatch(value):
        number = int(value)
    else:
        raise ValidationFailed(f"{field} is invalid")
    if not fits_id(number):
        raise ValidationFailed(f"{field} is invalid")
    return number
