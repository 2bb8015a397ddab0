"""
Configuration management using Pydantic models loaded from YAML.
"""

from pathlib import Path
from typing import List

import yaml
from pydantic import BaseModel, Field, field_validator, model_validator

from .domain.time_codec import is_valid_time
from .domain.time_slot import DEFAULT_TIMETABLE_START_TIME
from .services.timetable_layout import DEFAULT_HOUR_HEIGHT


class TimetableDefaults(BaseModel):
    """Default settings for new timetables."""
    start_time: str = DEFAULT_TIMETABLE_START_TIME
    end_time: str = "17:00"
    hour_height: float = DEFAULT_HOUR_HEIGHT
    slot_length: float = 1.0
    min_free_hours: float = 0.5
    length_values: List[float] = Field(
        default_factory=lambda: [float(hours) for hours in range(4, 17)]
    )

    @field_validator("start_time", "end_time")
    @classmethod
    def validate_time(cls, value: str) -> str:
        """Validate times are strict HH:mm strings."""
        if not is_valid_time(value):
            raise ValueError(f"Invalid time format: {value}. Expected HH:mm format.")
        return value

    @field_validator("hour_height", "slot_length")
    @classmethod
    def validate_positive(cls, value: float) -> float:
        """Ensure sizes are positive."""
        if value <= 0:
            raise ValueError(f"Value must be greater than zero, got {value}")
        return value

    @field_validator("min_free_hours")
    @classmethod
    def validate_min_free_hours(cls, value: float) -> float:
        if value < 0:
            raise ValueError(f"min_free_hours must not be negative, got {value}")
        return value

    @field_validator("length_values")
    @classmethod
    def validate_length_values(cls, value: List[float]) -> List[float]:
        """Ensure lengths are positive and deduplicated."""
        invalid = [length for length in value if length <= 0]
        if invalid:
            raise ValueError(f"length_values must be greater than zero, got {invalid}")
        # Preserve order while removing duplicates
        seen: set[float] = set()
        deduped: List[float] = []
        for length in value:
            if length not in seen:
                deduped.append(length)
                seen.add(length)
        return deduped

    @model_validator(mode="after")
    def validate_window(self) -> "TimetableDefaults":
        """Ensure the default window is not empty."""
        if self.start_time == self.end_time:
            raise ValueError("end_time must differ from start_time")
        return self


class AppConfig(BaseModel):
    """Application configuration."""
    defaults: TimetableDefaults = Field(default_factory=TimetableDefaults)
    timezone: str = "Europe/Berlin"

    @classmethod
    def load_from_yaml(cls, config_path: Path) -> "AppConfig":
        """
        Load configuration from YAML file.

        Args:
            config_path: Path to the YAML config file

        Returns:
            AppConfig instance

        Raises:
            FileNotFoundError: If config file doesn't exist
            ValueError: If config is invalid
        """
        if not config_path.exists():
            raise FileNotFoundError(
                f"Config file not found: {config_path}\n"
                f"Please create a config.yaml file. See config.example.yaml for reference."
            )

        try:
            with open(config_path, "r", encoding="utf-8") as f:
                data = yaml.safe_load(f) or {}
        except yaml.YAMLError as exc:
            raise ValueError(f"Invalid YAML in {config_path}: {exc}") from exc

        if not isinstance(data, dict):
            raise ValueError("Config file must contain a mapping at the root level.")

        return cls(**data)

    @classmethod
    def load_or_default(cls, config_path: Path) -> "AppConfig":
        """Load configuration, falling back to built-in defaults if the file is missing."""
        if not config_path.exists():
            return cls()
        return cls.load_from_yaml(config_path)


def get_default_config_path() -> Path:
    """Get the default configuration file path."""
    # Look for config.yaml in current directory
    current_dir = Path.cwd()
    config_path = current_dir / "config.yaml"

    if not config_path.exists():
        # Try in the project root (parent of the package)
        project_root = Path(__file__).parent.parent
        config_path = project_root / "config.yaml"

    return config_path
