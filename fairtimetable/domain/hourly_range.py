"""
Hourly range model: a start/end pair on a 24-hour clock.

A range whose end is numerically smaller than its start crosses midnight and
ends on the following day. Equal start and end means zero duration.
"""

import logging
import math
from numbers import Real
from typing import Any, Dict, Mapping, Optional, Tuple

from .exceptions import InvalidHourError, InvalidTimeFormatError, MissingTimeError
from .time_codec import HOURS_PER_DAY, format_time, parse_time

logger = logging.getLogger(__name__)

RANGE_SEPARATOR = "—"  # em dash


def _is_duration(value: object) -> bool:
    return (
        isinstance(value, Real)
        and not isinstance(value, bool)
        and math.isfinite(value)
        and value >= 0
    )


def time_fields(data: Mapping[str, Any]) -> Tuple[Optional[str], Optional[str]]:
    """Read start and end from editor (camelCase) or Python (snake_case) data."""
    start = data["startTime"] if "startTime" in data else data.get("start_time")
    end = data["endTime"] if "endTime" in data else data.get("end_time")
    return start, end


class HourlyRange:
    """
    Time range with HH:mm string input and decimal hour output.

    Invariant: start_hour and end_hour are in [0, 24). Duration is derived
    from them and never stored.
    """

    def __init__(self, start_time: str, end_time: str):
        if not start_time or not end_time:
            raise MissingTimeError("HourlyRange requires both startTime and endTime")

        self._start_hour = parse_time(start_time)
        self._end_hour = parse_time(end_time)

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "HourlyRange":
        """Build a range from a {"startTime", "endTime"} mapping."""
        start_time, end_time = time_fields(data)
        return cls(start_time=start_time, end_time=end_time)

    @property
    def start_hour(self) -> float:
        return self._start_hour

    @property
    def end_hour(self) -> float:
        return self._end_hour

    def get_duration(self) -> float:
        """Return the duration in decimal hours, wrapping past midnight."""
        duration = self._end_hour - self._start_hour
        if duration < 0:
            duration += HOURS_PER_DAY
        return duration

    def get_start_time(self) -> str:
        return format_time(self._start_hour)

    def get_end_time(self) -> str:
        return format_time(self._end_hour)

    def get_time_range_string(self) -> str:
        """Return the range as "HH:mm—HH:mm"."""
        return f"{self.get_start_time()}{RANGE_SEPARATOR}{self.get_end_time()}"

    def overlaps_with(self, other: Any) -> bool:
        """
        Check whether two ranges share any time.

        Both ranges are laid out on a linear timeline as [start, start + duration)
        and the other range is also tried one day earlier and one day later,
        so ranges crossing midnight compare correctly. Touching endpoints do
        not overlap, and a zero-length range overlaps nothing.
        """
        other_range = _coerce_range(other)

        duration = self.get_duration()
        other_duration = other_range.get_duration()
        if duration == 0 or other_duration == 0:
            return False

        start = self._start_hour
        end = start + duration
        for shift in (0, HOURS_PER_DAY, -HOURS_PER_DAY):
            other_start = other_range.start_hour + shift
            other_end = other_start + other_duration
            if start < other_end and other_start < end:
                return True
        return False

    def is_before(self, other: Any) -> bool:
        """Compare start hours only; midnight wraparound is not considered."""
        return self._start_hour < _coerce_range(other).start_hour

    def is_after(self, other: Any) -> bool:
        """Compare start hours only; midnight wraparound is not considered."""
        return self._start_hour > _coerce_range(other).start_hour

    def set_start_time(self, new_start_time: str) -> None:
        """Move the range to a new start, keeping its duration."""
        new_start_hour = parse_time(new_start_time)
        duration = self.get_duration()

        self._start_hour = new_start_hour
        self._end_hour = (new_start_hour + duration) % HOURS_PER_DAY

    def set_duration(self, hours: float) -> None:
        """Change the duration, keeping the start."""
        if not _is_duration(hours):
            raise InvalidHourError(f"Duration must be a finite number >= 0, got {hours!r}")

        self._end_hour = (self._start_hour + hours) % HOURS_PER_DAY

    def set_end_time(self, new_end_time: str) -> None:
        """Change the end, keeping the start. The duration follows."""
        self._end_hour = parse_time(new_end_time)

    @staticmethod
    def calculate_end_time(start_time: Any, duration_hours: Any) -> Any:
        """
        Calculate the HH:mm end of a range from its start and duration.

        Used while a user is still typing, so it never raises:
        an empty start gives "00:00", and an invalid duration or an
        unparsable start (including a non-string one) gives back the start
        unchanged.
        """
        if start_time is None or start_time == "":
            return "00:00"

        if not _is_duration(duration_hours):
            logger.debug("Ignoring invalid duration %r for start %r", duration_hours, start_time)
            return start_time

        try:
            start_hour = parse_time(start_time)
        except InvalidTimeFormatError:
            logger.warning("Could not calculate end time for start %r", start_time)
            return start_time

        return format_time((start_hour + duration_hours) % HOURS_PER_DAY)

    def to_dict(self) -> Dict[str, float]:
        return {
            "start_hour": self._start_hour,
            "end_hour": self._end_hour,
            "duration": self.get_duration(),
        }

    def get_debug_info(self) -> Dict[str, Any]:
        return {
            "time_range": self.get_time_range_string(),
            "start_hour": self._start_hour,
            "end_hour": self._end_hour,
            "duration": self.get_duration(),
        }

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, HourlyRange):
            return NotImplemented
        return (self._start_hour, self._end_hour) == (other._start_hour, other._end_hour)

    # Mutable through the setters, so not usable as a dict key or set member
    __hash__ = None

    def __repr__(self) -> str:
        return f"HourlyRange(start_time={self.get_start_time()!r}, end_time={self.get_end_time()!r})"

    def __str__(self) -> str:
        return self.get_time_range_string()


def _coerce_range(other: Any) -> HourlyRange:
    """Accept an HourlyRange or anything carrying one as ``time_range``."""
    if isinstance(other, HourlyRange):
        return other

    time_range = getattr(other, "time_range", None)
    if isinstance(time_range, HourlyRange):
        return time_range

    raise TypeError(f"Expected an HourlyRange or TimeSlot, got {type(other).__name__}")
