"""
Tests for configuration loading.
"""

import pytest
from pydantic import ValidationError

from fairtimetable.config import AppConfig, TimetableDefaults


class TestTimetableDefaults:
    """Tests for the defaults model."""

    def test_builtin_defaults(self):
        defaults = TimetableDefaults()

        assert defaults.start_time == "09:00"
        assert defaults.end_time == "17:00"
        assert defaults.hour_height == 2.5
        assert defaults.slot_length == 1.0
        assert defaults.min_free_hours == 0.5
        assert defaults.length_values == [float(hours) for hours in range(4, 17)]

    @pytest.mark.parametrize("field", ["start_time", "end_time"])
    def test_invalid_time_raises(self, field):
        with pytest.raises(ValidationError, match="Invalid time format"):
            TimetableDefaults(**{field: "9:00"})

    def test_empty_window_raises(self):
        with pytest.raises(ValidationError, match="end_time must differ"):
            TimetableDefaults(start_time="10:00", end_time="10:00")

    def test_window_may_cross_midnight(self):
        defaults = TimetableDefaults(start_time="18:00", end_time="02:00")

        assert defaults.end_time == "02:00"

    @pytest.mark.parametrize("field", ["hour_height", "slot_length"])
    def test_sizes_must_be_positive(self, field):
        with pytest.raises(ValidationError):
            TimetableDefaults(**{field: 0})

    def test_min_free_hours_may_be_zero(self):
        assert TimetableDefaults(min_free_hours=0).min_free_hours == 0
        with pytest.raises(ValidationError):
            TimetableDefaults(min_free_hours=-0.5)

    def test_length_values_are_deduplicated(self):
        defaults = TimetableDefaults(length_values=[2, 1.5, 2, 3])

        assert defaults.length_values == [2.0, 1.5, 3.0]

    def test_length_values_must_be_positive(self):
        with pytest.raises(ValidationError):
            TimetableDefaults(length_values=[1, 0])


class TestAppConfig:
    """Tests for YAML loading."""

    def test_load_from_yaml(self, tmp_path):
        path = tmp_path / "config.yaml"
        path.write_text(
            'defaults:\n  start_time: "18:00"\n  end_time: "02:00"\n  hour_height: 3\ntimezone: UTC\n',
            encoding="utf-8",
        )

        config = AppConfig.load_from_yaml(path)

        assert config.defaults.start_time == "18:00"
        assert config.defaults.hour_height == 3.0
        assert config.defaults.slot_length == 1.0
        assert config.timezone == "UTC"

    def test_empty_file_uses_defaults(self, tmp_path):
        path = tmp_path / "config.yaml"
        path.write_text("", encoding="utf-8")

        assert AppConfig.load_from_yaml(path) == AppConfig()

    def test_missing_file_raises(self, tmp_path):
        with pytest.raises(FileNotFoundError, match="config.example.yaml"):
            AppConfig.load_from_yaml(tmp_path / "config.yaml")

    def test_load_or_default_without_file(self, tmp_path):
        config = AppConfig.load_or_default(tmp_path / "config.yaml")

        assert config.timezone == "Europe/Berlin"
        assert config.defaults.start_time == "09:00"

    def test_invalid_yaml_raises(self, tmp_path):
        path = tmp_path / "config.yaml"
        path.write_text("defaults: [\n", encoding="utf-8")

        with pytest.raises(ValueError, match="Invalid YAML"):
            AppConfig.load_from_yaml(path)

    def test_non_mapping_root_raises(self, tmp_path):
        path = tmp_path / "config.yaml"
        path.write_text("- 09:00\n", encoding="utf-8")

        with pytest.raises(ValueError, match="mapping at the root"):
            AppConfig.load_from_yaml(path)
