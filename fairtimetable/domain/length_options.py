"""
Duration choices for the timetable "Length" selector.
"""

import math
from typing import Dict, List, Optional, Sequence, Union

MATCH_TOLERANCE = 0.01

LengthOption = Dict[str, Union[str, float]]


class LengthOptions:
    """
    Predefined lengths in decimal hours plus the currently selected value.

    A selected value that is not one of the predefined lengths (e.g. a
    timetable spanning 7.5 hours) is shown as an extra option.
    """

    def __init__(self, values: Sequence[float]):
        self.values: List[float] = list(values)
        self.selected_value: Optional[float] = None

    @classmethod
    def hour_range(cls, first: int, last: int) -> "LengthOptions":
        """Whole-hour options from first to last, inclusive."""
        return cls([float(hours) for hours in range(first, last + 1)])

    def set_value(self, value: Optional[float]) -> None:
        self.selected_value = value

    @staticmethod
    def format_length_label(length_in_hours: float) -> str:
        """
        Format a length for display.

        Examples: "2 hours", "30 minutes", "1 hours, 15 minutes".
        """
        hours = math.floor(length_in_hours)
        minutes = math.floor((length_in_hours - hours) * 60 + 0.5)
        if minutes == 60:
            hours += 1
            minutes = 0

        if minutes == 0:
            return f"{hours} hours"
        if hours == 0:
            return f"{minutes} minutes"
        return f"{hours} hours, {minutes} minutes"

    def has_matching_value(self) -> bool:
        if self.selected_value is None:
            return False
        return any(abs(value - self.selected_value) < MATCH_TOLERANCE for value in self.values)

    def get_length_options(self) -> List[LengthOption]:
        options: List[LengthOption] = [
            {"label": self.format_length_label(value), "value": value} for value in self.values
        ]

        if (
            self.selected_value is not None
            and self.selected_value > 0
            and not self.has_matching_value()
        ):
            options.append(
                {
                    "label": self.format_length_label(self.selected_value),
                    "value": self.selected_value,
                }
            )
            options.sort(key=lambda option: option["value"])

        return options
