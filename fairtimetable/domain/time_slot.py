"""
Time slot model: an hourly range placed inside a timetable.
"""

import logging
from typing import Any, Dict, Mapping, Optional

from .exceptions import InvalidTimeFormatError
from .hourly_range import HourlyRange, time_fields
from .time_codec import HOURS_PER_DAY, parse_time

logger = logging.getLogger(__name__)

DEFAULT_TIMETABLE_START_TIME = "09:00"


class TimeSlot:
    """
    A slot in a timetable column.

    The slot keeps its own anchor (the timetable start) so it can report how
    far into the timetable it begins. The anchor belongs to the slot and is
    not rewritten when the slot is moved into another column.
    """

    def __init__(
        self,
        start_time: str,
        end_time: str,
        timetable_start_time: str = DEFAULT_TIMETABLE_START_TIME,
    ):
        self.time_range = HourlyRange(start_time=start_time, end_time=end_time)
        self.set_timetable_start_time(timetable_start_time)

    @classmethod
    def from_dict(
        cls,
        data: Mapping[str, Any],
        timetable_start_time: str = DEFAULT_TIMETABLE_START_TIME,
    ) -> "TimeSlot":
        """Build a slot from a {"startTime", "endTime"} mapping."""
        start_time, end_time = time_fields(data)
        return cls(start_time, end_time, timetable_start_time=timetable_start_time)

    @property
    def start_hour(self) -> float:
        return self.time_range.start_hour

    @property
    def end_hour(self) -> float:
        return self.time_range.end_hour

    @property
    def timetable_start_time(self) -> Optional[str]:
        """The anchor exactly as it was last set, even if it did not parse."""
        return self._timetable_start_time

    @property
    def timetable_start_hour(self) -> float:
        return self._timetable_start_hour

    def get_duration(self) -> float:
        return self.time_range.get_duration()

    def get_time_range_string(self) -> str:
        return self.time_range.get_time_range_string()

    def get_start_time(self) -> str:
        return self.time_range.get_start_time()

    def get_end_time(self) -> str:
        return self.time_range.get_end_time()

    def set_start_time(self, new_start_time: str) -> None:
        self.time_range.set_start_time(new_start_time)

    def set_duration(self, hours: float) -> None:
        self.time_range.set_duration(hours)

    def set_end_time(self, new_end_time: str) -> None:
        self.time_range.set_end_time(new_end_time)

    def overlaps_with(self, other: Any) -> bool:
        return self.time_range.overlaps_with(other)

    def get_time_from_timetable_start(self) -> float:
        """
        Hours between the timetable start and the start of this slot.

        A slot starting before the anchor belongs to the next day, so the
        offset wraps into [0, 24).
        """
        offset = self.time_range.start_hour - self._timetable_start_hour
        if offset < 0:
            offset += HOURS_PER_DAY
        return offset

    def set_timetable_start_time(self, new_timetable_start_time: str) -> None:
        """
        Update the anchor.

        The raw value is kept as given. If it is not a valid HH:mm string the
        anchor hour falls back to 0 instead of raising, since the value may
        come straight from a half-typed editor field.
        """
        try:
            hour = parse_time(new_timetable_start_time)
        except InvalidTimeFormatError:
            logger.warning(
                "Invalid timetable start time %r, falling back to 00:00",
                new_timetable_start_time,
            )
            hour = 0.0

        self._timetable_start_time = new_timetable_start_time
        self._timetable_start_hour = hour

    def to_dict(self) -> Dict[str, Any]:
        data: Dict[str, Any] = self.time_range.to_dict()
        data.update(
            {
                "timetable_start_time": self._timetable_start_time,
                "timetable_start_hour": self._timetable_start_hour,
                "offset": self.get_time_from_timetable_start(),
            }
        )
        return data

    def __repr__(self) -> str:
        return (
            f"TimeSlot(start_time={self.get_start_time()!r}, end_time={self.get_end_time()!r}, "
            f"timetable_start_time={self._timetable_start_time!r})"
        )
