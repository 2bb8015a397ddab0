"""
Time column model: operating bounds plus the slots scheduled inside them.
"""

from typing import Any, Iterable, Iterator, List, Mapping, Optional, Tuple, Union

from .hourly_range import HourlyRange, time_fields
from .time_codec import HOURS_PER_DAY, format_time
from .time_slot import TimeSlot

SlotInput = Union[TimeSlot, Mapping[str, Any]]

DEFAULT_SLOT_LENGTH = 1.0
MIN_FREE_HOURS = 0.5


class TimeColumn:
    """
    A column of a timetable.

    Slots may be given as TimeSlot instances, which are kept as they are, or
    as raw {"startTime", "endTime"} mappings, which become slots anchored at
    the column's own start time. Slot order is never assumed to be sorted.
    """

    def __init__(self, start_time: str, end_time: str, time_slots: Iterable[SlotInput] = ()):
        self.time_range = HourlyRange(start_time=start_time, end_time=end_time)
        self._time_slots: List[TimeSlot] = [self._to_slot(entry) for entry in time_slots]

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "TimeColumn":
        """Build a column from {"startTime", "endTime", "timeSlots"} data."""
        start_time, end_time = time_fields(data)
        slots = data.get("timeSlots", data.get("time_slots")) or []
        return cls(start_time, end_time, slots)

    def _to_slot(self, entry: SlotInput) -> TimeSlot:
        if isinstance(entry, TimeSlot):
            return entry
        if isinstance(entry, Mapping):
            return TimeSlot.from_dict(entry, timetable_start_time=self.get_start_time())
        raise TypeError(f"Expected a TimeSlot or a mapping, got {type(entry).__name__}")

    @property
    def time_slots(self) -> Tuple[TimeSlot, ...]:
        return tuple(self._time_slots)

    def __len__(self) -> int:
        return len(self._time_slots)

    def __iter__(self) -> Iterator[TimeSlot]:
        return iter(self._time_slots)

    def get_start_hour(self) -> float:
        return self.time_range.start_hour

    def get_end_hour(self) -> float:
        return self.time_range.end_hour

    def get_duration(self) -> float:
        return self.time_range.get_duration()

    def get_start_time(self) -> str:
        return self.time_range.get_start_time()

    def get_end_time(self) -> str:
        return self.time_range.get_end_time()

    def get_time_range_string(self) -> str:
        return self.time_range.get_time_range_string()

    def add_time_slot(self, entry: SlotInput) -> TimeSlot:
        """Append a slot, applying the same rules as the constructor."""
        slot = self._to_slot(entry)
        self._time_slots.append(slot)
        return slot

    def get_first_available_hour(self) -> float:
        """
        Return the hour after which the column is free.

        This is the column start for an empty column, otherwise the latest
        slot end regardless of slot order or overlaps.
        """
        if not self._time_slots:
            return self.get_start_hour()
        return max(slot.end_hour for slot in self._time_slots)

    def get_used_hours(self) -> float:
        """
        Hours from the column start to the latest slot end, measured along
        the column so slots after midnight count as late, not early.

        A slot starting before the column start only counts with the part
        that runs into the column. Slots entirely outside the column window
        count for nothing.
        """
        start_hour = self.get_start_hour()
        duration = self.get_duration()

        used = 0.0
        for slot in self._time_slots:
            offset = (slot.start_hour - start_hour) % HOURS_PER_DAY
            end = offset + slot.get_duration()
            if offset >= duration:
                end -= HOURS_PER_DAY
            used = max(used, end)
        return used

    def get_remaining_hours(self) -> float:
        """
        Hours left between the latest slot end and the column end.

        Negative when slots run past the column end.
        """
        return self.get_duration() - self.get_used_hours()

    def has_space_for_new_slot(self, min_hours: float = MIN_FREE_HOURS) -> bool:
        return self.get_remaining_hours() >= min_hours

    def get_next_slot_range(self, length: float = DEFAULT_SLOT_LENGTH) -> Tuple[str, str]:
        """
        Suggest start and end for a slot appended after the last one.

        The slot starts where the column's used time ends and is cut off at
        the column end.
        """
        start_hour = self.get_start_hour() + self.get_used_hours()
        span = max(0.0, min(length, self.get_remaining_hours()))
        return format_time(start_hour), format_time(start_hour + span)

    def get_conflicting_slots(
        self,
        candidate: Union[HourlyRange, TimeSlot],
        exclude: Optional[TimeSlot] = None,
    ) -> List[TimeSlot]:
        """
        Return the slots overlapping a candidate range.

        Args:
            candidate: Range or slot to check
            exclude: Another slot to skip, e.g. the one being edited

        Returns:
            Overlapping slots in column order
        """
        return [
            slot
            for slot in self._time_slots
            if slot is not exclude and slot is not candidate and slot.overlaps_with(candidate)
        ]

    def has_conflicts(
        self,
        candidate: Union[HourlyRange, TimeSlot],
        exclude: Optional[TimeSlot] = None,
    ) -> bool:
        return bool(self.get_conflicting_slots(candidate, exclude=exclude))

    def get_earliest_start_time(self) -> Optional[str]:
        if not self._time_slots:
            return None
        return format_time(min(slot.start_hour for slot in self._time_slots))

    def get_latest_end_time(self) -> Optional[str]:
        if not self._time_slots:
            return None
        return format_time(max(slot.end_hour for slot in self._time_slots))

    def __repr__(self) -> str:
        return (
            f"TimeColumn(start_time={self.get_start_time()!r}, end_time={self.get_end_time()!r}, "
            f"time_slots={len(self._time_slots)})"
        )
