"""
Conversion between "HH:mm" strings and decimal hours.

This is the single place where time strings are parsed. Everything else in
the domain layer works on decimal hours (e.g. 9.5 == "09:30").
"""

import math
import re
from numbers import Real

from .exceptions import InvalidHourError, InvalidTimeFormatError

TIME_PATTERN = re.compile(r"([01][0-9]|2[0-3]):([0-5][0-9])")

HOURS_PER_DAY = 24


def is_valid_time(value: object) -> bool:
    """Check whether a value is a strict HH:mm time string."""
    return isinstance(value, str) and TIME_PATTERN.fullmatch(value) is not None


def parse_time(value: str) -> float:
    """
    Parse a strict "HH:mm" string into decimal hours.

    Args:
        value: Time string, two-digit hour 00-23 and two-digit minute 00-59

    Returns:
        Decimal hours, e.g. "09:30" -> 9.5

    Raises:
        InvalidTimeFormatError: If the value is not a strict HH:mm string
    """
    if not isinstance(value, str):
        raise InvalidTimeFormatError(value)

    match = TIME_PATTERN.fullmatch(value)
    if match is None:
        raise InvalidTimeFormatError(value)

    hours, minutes = match.groups()
    return int(hours) + int(minutes) / 60


def format_time(hours: float) -> str:
    """
    Format decimal hours as a zero-padded "HH:mm" string.

    Values of 24 and above wrap around midnight. Minutes are rounded to the
    nearest whole minute, carrying a rounded 60 into the next hour.

    Raises:
        InvalidHourError: If hours is negative, not finite or not a number
    """
    if isinstance(hours, bool) or not isinstance(hours, Real):
        raise InvalidHourError(f"Hours must be a number, got {hours!r}")
    if not math.isfinite(hours) or hours < 0:
        raise InvalidHourError(f"Hours must be a finite number >= 0, got {hours!r}")

    whole = math.floor(hours)
    # Half-up rounding
    minutes = math.floor((hours - whole) * 60 + 0.5)
    whole %= HOURS_PER_DAY

    if minutes >= 60:
        whole = (whole + 1) % HOURS_PER_DAY
        minutes = 0

    return f"{whole:02d}:{minutes:02d}"
