"""
Application services coordinating domain objects for presentation.
"""

from .timetable_layout import SlotPlacement, TimetableLayoutService

__all__ = ["SlotPlacement", "TimetableLayoutService"]
