"""
Tests for loading timetable documents.
"""

import json
import logging
from pathlib import Path

import pytest

from fairtimetable.adapters.timetable_document import TimetableDocumentLoader
from fairtimetable.domain.exceptions import InvalidTimeFormatError, TimetableDocumentError

SAMPLE = Path(__file__).parent.parent / "samples" / "festival.yaml"


@pytest.fixture
def loader():
    return TimetableDocumentLoader(default_start_time="09:00", default_end_time="17:00")


class TestLoad:
    """Tests for reading files."""

    def test_load_sample(self, loader):
        """The bundled sample loads with titles and inherited bounds."""
        document = loader.load(SAMPLE)

        assert document.title == "Main stage"
        assert document.start_time == "18:00"
        assert document.end_time == "02:00"
        assert document.hour_height == 2.5
        assert [column.title for column in document.columns] == ["Friday", "Saturday"]

        friday = document.columns[0]
        assert friday.column.get_time_range_string() == "18:00—02:00"
        assert [title for title, _ in friday.titled_slots()] == ["Opening", "Support act", "Headliner"]

        saturday = document.columns[1].column
        assert saturday.get_time_range_string() == "16:00—02:00"
        assert saturday.has_conflicts(saturday.time_slots[0])

    def test_load_json(self, loader, tmp_path):
        path = tmp_path / "timetable.json"
        path.write_text(
            json.dumps(
                {
                    "startTime": "10:00",
                    "endTime": "12:00",
                    "columns": [{"timeSlots": [{"startTime": "10:00", "endTime": "11:00"}]}],
                }
            ),
            encoding="utf-8",
        )

        document = loader.load(path)

        column = document.columns[0]
        assert column.title == "Column 1"
        assert column.slot_titles == [""]
        assert column.column.time_slots[0].timetable_start_time == "10:00"
        assert document.hour_height is None

    def test_missing_file_raises(self, loader, tmp_path):
        with pytest.raises(FileNotFoundError):
            loader.load(tmp_path / "missing.yaml")

    def test_broken_yaml_raises(self, loader, tmp_path):
        path = tmp_path / "broken.yaml"
        path.write_text("columns: [\n", encoding="utf-8")

        with pytest.raises(TimetableDocumentError, match="Could not parse"):
            loader.load(path)

    def test_broken_json_raises(self, loader, tmp_path):
        path = tmp_path / "broken.json"
        path.write_text("{", encoding="utf-8")

        with pytest.raises(TimetableDocumentError):
            loader.load(path)


class TestParse:
    """Tests for turning decoded data into a document."""

    def test_defaults_apply(self, loader):
        """Timetable bounds fall back to the configured defaults."""
        document = loader.parse({"columns": [{}]})

        assert document.start_time == "09:00"
        assert document.end_time == "17:00"
        assert document.title == ""
        assert len(document.columns[0].column) == 0

    def test_empty_document(self, loader):
        document = loader.parse({})

        assert document.columns == []

    @pytest.mark.parametrize(
        "data",
        [
            ["not", "a", "mapping"],
            {"columns": {"title": "Friday"}},
            {"columns": ["Friday"]},
            {"columns": [{"timeSlots": "18:00"}]},
            {"hourHeight": "tall"},
            {"hourHeight": 0},
        ],
    )
    def test_invalid_documents_raise(self, loader, data):
        with pytest.raises(TimetableDocumentError):
            loader.parse(data)

    def test_invalid_slot_time_raises(self, loader):
        with pytest.raises(InvalidTimeFormatError):
            loader.parse({"columns": [{"timeSlots": [{"startTime": "9:00", "endTime": "10:00"}]}]})

    def test_non_mapping_slot_is_skipped(self, loader, caplog):
        """A stray entry in a slot list is skipped with a warning."""
        data = {
            "columns": [
                {"timeSlots": ["10:00", {"startTime": "10:00", "endTime": "11:00", "title": "Talk"}]}
            ]
        }

        with caplog.at_level(logging.WARNING):
            document = loader.parse(data, source="inline")

        column = document.columns[0]
        assert len(column.column) == 1
        assert column.titled_slots()[0][0] == "Talk"
        assert "Skipping slot 1 of column 1 in inline" in caplog.text
