"""
fairtimetable - time-range arithmetic for event timetables.
"""

__version__ = "0.1.0"
