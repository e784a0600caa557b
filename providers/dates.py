"""
Stay date arithmetic shared by every provider.
"""

import math
from datetime import datetime, timedelta

from config import ErrorCode, ValidationError
from models import DateRange

_SECONDS_PER_DAY = 86400


def _parse(value: str, field_name: str) -> datetime:
    try:
        parsed = datetime.fromisoformat(value)
    except (TypeError, ValueError):
        raise ValidationError(
            f"Invalid {field_name}: {value!r}",
            error_code=ErrorCode.INVALID_DATES
        )
    # Compare aware and naive values on the same footing.
    if parsed.tzinfo is not None:
        parsed = parsed.replace(tzinfo=None) - parsed.utcoffset()
    return parsed


def calculate_nights(check_in: str, check_out: str) -> int:
    """Number of nights between two dates or datetimes.

    Elapsed time is rounded up to whole days, so any time past a 24h boundary
    counts as another night. Zero or negative stays are rejected.
    """
    start = _parse(check_in, "check_in")
    end = _parse(check_out, "check_out")
    nights = math.ceil((end - start).total_seconds() / _SECONDS_PER_DAY)
    if nights <= 0:
        raise ValidationError(
            "Check-out date must be after check-in date",
            error_code=ErrorCode.INVALID_DATES,
            details={"check_in": check_in, "check_out": check_out}
        )
    return nights


def date_range(check_in: str, check_out: str) -> DateRange:
    return DateRange(check_in=check_in, check_out=check_out, nights=calculate_nights(check_in, check_out))


def day_before(check_in: str) -> str:
    """ISO timestamp 24 hours before check-in, used as a free-cancellation deadline."""
    return (_parse(check_in, "check_in") - timedelta(days=1)).isoformat() + "Z"
