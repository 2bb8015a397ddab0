"""
Application service for laying out timetable columns.

The service turns the domain's decimal-hour offsets into the em-based
positions the timetable front end renders: each hour of a column is
``hour_height`` em tall, and a slot is placed at its offset from the
timetable start.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import List

from ..domain.exceptions import InvalidHourError
from ..domain.time_column import TimeColumn
from ..domain.time_slot import TimeSlot

DEFAULT_HOUR_HEIGHT = 2.5


@dataclass(frozen=True)
class SlotPlacement:
    """Position of one slot inside a rendered column."""
    slot: TimeSlot
    offset_hours: float
    top_em: float
    height_em: float

    def css_style(self) -> str:
        """Inline style used by the slot markup."""
        return (
            f"position: absolute; top: {self.top_em:g}em; left: 0; right: 0; "
            f"height: {self.height_em:g}em;"
        )


class TimetableLayoutService:
    """
    Computes slot placements for a column.

    Placement relies on each slot's own anchor, so a slot copied from another
    column is drawn relative to the timetable it was created in.
    """

    def __init__(self, hour_height: float = DEFAULT_HOUR_HEIGHT) -> None:
        if hour_height <= 0:
            raise InvalidHourError(f"hour_height must be greater than zero, got {hour_height}")
        self._hour_height = hour_height

    @property
    def hour_height(self) -> float:
        return self._hour_height

    def place_slot(self, slot: TimeSlot) -> SlotPlacement:
        offset = slot.get_time_from_timetable_start()
        return SlotPlacement(
            slot=slot,
            offset_hours=offset,
            top_em=offset * self._hour_height,
            height_em=slot.get_duration() * self._hour_height,
        )

    def layout_column(self, column: TimeColumn) -> List[SlotPlacement]:
        """Place every slot of a column, ordered top to bottom."""
        placements = [self.place_slot(slot) for slot in column]
        placements.sort(key=lambda placement: placement.offset_hours)
        return placements

    def column_height(self, column: TimeColumn) -> float:
        """Height of the column body in em."""
        return column.get_duration() * self._hour_height
