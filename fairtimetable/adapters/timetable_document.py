"""
Timetable document loader.

Reads the timetable attributes the editor stores (times as "HH:mm" strings)
from a YAML or JSON file and turns them into domain objects:

    title: Main stage
    startTime: "18:00"
    endTime: "02:00"
    hourHeight: 2.5
    columns:
      - title: Friday
        timeSlots:
          - {startTime: "18:00", endTime: "19:30", title: Opening}
          - {startTime: "23:30", endTime: "01:00", title: Headliner}
"""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, List, Mapping, Optional, Tuple

import yaml

from ..domain.exceptions import TimetableDocumentError
from ..domain.time_column import TimeColumn
from ..domain.time_slot import DEFAULT_TIMETABLE_START_TIME, TimeSlot

logger = logging.getLogger(__name__)

DEFAULT_END_TIME = "17:00"


@dataclass
class ColumnDocument:
    """One column of a loaded timetable together with its slot titles."""
    title: str
    column: TimeColumn
    slot_titles: List[str] = field(default_factory=list)

    def titled_slots(self) -> List[Tuple[str, TimeSlot]]:
        """Pair each slot with its title, in column order."""
        return list(zip(self.slot_titles, self.column.time_slots))


@dataclass
class TimetableDocument:
    """A loaded timetable."""
    title: str
    start_time: str
    end_time: str
    hour_height: Optional[float]
    columns: List[ColumnDocument] = field(default_factory=list)


class TimetableDocumentLoader:
    """
    Loads timetable documents from disk.

    Column bounds default to the timetable bounds, and the timetable bounds
    default to the configured start and end times.
    """

    def __init__(
        self,
        default_start_time: str = DEFAULT_TIMETABLE_START_TIME,
        default_end_time: str = DEFAULT_END_TIME,
    ):
        self.default_start_time = default_start_time
        self.default_end_time = default_end_time

    def load(self, path: Path) -> TimetableDocument:
        """
        Load a timetable from a .yaml, .yml or .json file.

        Raises:
            FileNotFoundError: If the file doesn't exist
            TimetableDocumentError: If the file is not a valid timetable document
        """
        if not path.exists():
            raise FileNotFoundError(f"Timetable file not found: {path}")

        data = self._read(path)
        return self.parse(data, source=str(path))

    def _read(self, path: Path) -> Any:
        try:
            with open(path, "r", encoding="utf-8") as f:
                if path.suffix.lower() == ".json":
                    return json.load(f)
                return yaml.safe_load(f)
        except (json.JSONDecodeError, yaml.YAMLError) as exc:
            raise TimetableDocumentError(f"Could not parse {path}: {exc}") from exc

    def parse(self, data: Any, source: str = "<data>") -> TimetableDocument:
        """Build a TimetableDocument from already decoded data."""
        if not isinstance(data, Mapping):
            raise TimetableDocumentError(f"{source}: timetable must be a mapping at the root level")

        start_time = data.get("startTime") or self.default_start_time
        end_time = data.get("endTime") or self.default_end_time
        hour_height = self._read_hour_height(data.get("hourHeight"), source)

        raw_columns = data.get("columns") or []
        if not isinstance(raw_columns, list):
            raise TimetableDocumentError(f"{source}: 'columns' must be a list")

        document = TimetableDocument(
            title=str(data.get("title") or ""),
            start_time=start_time,
            end_time=end_time,
            hour_height=hour_height,
        )

        for index, raw_column in enumerate(raw_columns, 1):
            if not isinstance(raw_column, Mapping):
                raise TimetableDocumentError(f"{source}: column {index} must be a mapping")
            document.columns.append(
                self._parse_column(raw_column, index, start_time, end_time, source)
            )

        logger.debug("Loaded %d column(s) from %s", len(document.columns), source)
        return document

    def _parse_column(
        self,
        raw_column: Mapping[str, Any],
        index: int,
        start_time: str,
        end_time: str,
        source: str,
    ) -> ColumnDocument:
        column = TimeColumn(
            start_time=raw_column.get("startTime") or start_time,
            end_time=raw_column.get("endTime") or end_time,
        )
        column_document = ColumnDocument(
            title=str(raw_column.get("title") or f"Column {index}"),
            column=column,
        )

        raw_slots = raw_column.get("timeSlots") or []
        if not isinstance(raw_slots, list):
            raise TimetableDocumentError(f"{source}: 'timeSlots' of column {index} must be a list")

        for slot_index, raw_slot in enumerate(raw_slots, 1):
            if not isinstance(raw_slot, Mapping):
                logger.warning(
                    "Skipping slot %d of column %d in %s: expected a mapping, got %s",
                    slot_index,
                    index,
                    source,
                    type(raw_slot).__name__,
                )
                continue
            column.add_time_slot(raw_slot)
            column_document.slot_titles.append(str(raw_slot.get("title") or ""))

        return column_document

    @staticmethod
    def _read_hour_height(value: Any, source: str) -> Optional[float]:
        if value is None:
            return None
        try:
            hour_height = float(value)
        except (TypeError, ValueError) as exc:
            raise TimetableDocumentError(f"{source}: invalid hourHeight {value!r}") from exc
        if hour_height <= 0:
            raise TimetableDocumentError(f"{source}: hourHeight must be greater than zero")
        return hour_height
