"""
Domain layer - Pure time-range arithmetic without external dependencies.
"""

from .exceptions import (
    InvalidHourError,
    InvalidTimeFormatError,
    MissingTimeError,
    TimetableDocumentError,
    TimetableError,
)
from .hourly_range import HourlyRange
from .length_options import LengthOptions
from .time_codec import format_time, is_valid_time, parse_time
from .time_column import TimeColumn
from .time_slot import DEFAULT_TIMETABLE_START_TIME, TimeSlot

__all__ = [
    "DEFAULT_TIMETABLE_START_TIME",
    "HourlyRange",
    "InvalidHourError",
    "InvalidTimeFormatError",
    "LengthOptions",
    "MissingTimeError",
    "TimeColumn",
    "TimeSlot",
    "TimetableDocumentError",
    "TimetableError",
    "format_time",
    "is_valid_time",
    "parse_time",
]
