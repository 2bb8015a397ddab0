"""
Tests for the TimetableLayoutService.
"""

import pytest

from fairtimetable.domain.exceptions import InvalidHourError
from fairtimetable.domain.time_column import TimeColumn
from fairtimetable.domain.time_slot import TimeSlot
from fairtimetable.services.timetable_layout import DEFAULT_HOUR_HEIGHT, TimetableLayoutService


def test_place_slot():
    """Slots are placed at their offset, scaled by the hour height."""
    layout = TimetableLayoutService()
    slot = TimeSlot("10:00", "11:30", timetable_start_time="09:00")

    placement = layout.place_slot(slot)

    assert layout.hour_height == DEFAULT_HOUR_HEIGHT
    assert placement.slot is slot
    assert placement.offset_hours == 1.0
    assert placement.top_em == 2.5
    assert placement.height_em == 3.75
    assert placement.css_style() == "position: absolute; top: 2.5em; left: 0; right: 0; height: 3.75em;"


def test_place_slot_after_midnight():
    """Slots after midnight are drawn below the evening ones."""
    layout = TimetableLayoutService(hour_height=2)
    slot = TimeSlot("00:30", "01:00", timetable_start_time="20:00")

    placement = layout.place_slot(slot)

    assert placement.offset_hours == 4.5
    assert placement.top_em == 9
    assert placement.height_em == 1


def test_layout_column_orders_by_offset():
    column = TimeColumn(
        "18:00",
        "02:00",
        [
            {"startTime": "01:00", "endTime": "02:00"},
            {"startTime": "18:00", "endTime": "19:00"},
            {"startTime": "21:00", "endTime": "22:00"},
        ],
    )

    placements = TimetableLayoutService().layout_column(column)

    assert [placement.offset_hours for placement in placements] == [0, 3, 7]


def test_column_height():
    column = TimeColumn("09:00", "17:00")

    assert TimetableLayoutService(hour_height=3).column_height(column) == 24


@pytest.mark.parametrize("hour_height", [0, -1])
def test_invalid_hour_height_raises(hour_height):
    with pytest.raises(InvalidHourError):
        TimetableLayoutService(hour_height=hour_height)
