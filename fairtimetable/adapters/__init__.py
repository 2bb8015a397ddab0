"""
Adapters - Reading timetable data from files.
"""

from .timetable_document import ColumnDocument, TimetableDocument, TimetableDocumentLoader

__all__ = ["ColumnDocument", "TimetableDocument", "TimetableDocumentLoader"]
