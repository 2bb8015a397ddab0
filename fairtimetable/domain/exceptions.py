"""
Domain-specific exception hierarchy for the timetable core.
"""


class TimetableError(Exception):
    """Base class for all application-level errors."""


class InvalidTimeFormatError(TimetableError, ValueError):
    """Raised when a time string is not in strict HH:mm format."""

    def __init__(self, value: object):
        self.value = value
        super().__init__(f"Invalid time format: {value}. Expected HH:mm format.")


class InvalidHourError(TimetableError, ValueError):
    """Raised when a decimal hour or duration is negative or not a number."""


class MissingTimeError(TimetableError, ValueError):
    """Raised when a range is constructed without both of its endpoints."""


class TimetableDocumentError(TimetableError):
    """Raised when a timetable document cannot be read or has the wrong shape."""
