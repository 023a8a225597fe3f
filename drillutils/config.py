"""Configuration management for typedrill."""

import json
import logging
from typing import Any, Mapping, Optional

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from drillcore.models import Task
from drillcore.session_config import IgnoredInputPolicy, SessionConfig
from drillutils.keyboard_detector import detect_layout_id
from drillutils.keyboard_layouts import LAYOUTS

log = logging.getLogger("typedrill.config")

AUTO_LAYOUT = "auto"


class AppSettings(BaseModel):
    """Application settings with validation."""

    # Keyboard layout
    keyboard_layout: str = Field(
        default=AUTO_LAYOUT,
        description="Keyboard layout identifier, or 'auto' to detect it",
    )

    # Scoring
    ignored_input_policy: IgnoredInputPolicy = Field(
        default=IgnoredInputPolicy.COUNT,
        description="Count presses ignored while paused/complete in true accuracy",
    )
    default_min_accuracy: float = Field(
        default=0.9,
        gt=0,
        le=1,
        description="Pass threshold for tasks that do not set their own",
    )

    model_config = ConfigDict(extra="ignore", use_enum_values=True)

    @field_validator("keyboard_layout")
    @classmethod
    def validate_keyboard_layout(cls, v):
        """Accept a known layout id or 'auto'."""
        if v != AUTO_LAYOUT and v not in LAYOUTS:
            raise ValueError(
                f"keyboard_layout must be 'auto' or one of {sorted(LAYOUTS)}, got '{v}'"
            )
        return v


def _simple_parse(value: str) -> Any:
    """Parse a string setting into a JSON value, number, bool or string."""
    # Try JSON first (for lists/dicts)
    if value.startswith("[") or value.startswith("{"):
        try:
            return json.loads(value)
        except json.JSONDecodeError:
            pass

    try:
        return int(value)
    except ValueError:
        pass

    try:
        return float(value)
    except ValueError:
        pass

    if value.lower() in ("true", "yes", "on"):
        return True
    if value.lower() in ("false", "no", "off"):
        return False

    return value


class Config:
    """In-memory configuration manager with Pydantic validation."""

    def __init__(self, values: Optional[Mapping[str, Any]] = None):
        """Initialize config.

        Args:
            values: Initial setting values; unknown keys are ignored
        """
        self._settings = AppSettings(**dict(values or {}))

    @classmethod
    def from_strings(cls, values: Mapping[str, str]) -> "Config":
        """Build a config from string values (environment, INI files, ...).

        Raises:
            ValueError: If a value fails validation
        """
        parsed = {key: _simple_parse(value) for key, value in values.items()}
        try:
            return cls(parsed)
        except ValidationError as e:
            raise ValueError(f"Invalid settings: {e}") from e

    @property
    def settings(self) -> AppSettings:
        return self._settings

    def get(self, key: str, default: Optional[Any] = None) -> Any:
        """Get configuration value.

        Args:
            key: Setting key
            default: Value returned for unknown keys

        Returns:
            Setting value
        """
        if key in AppSettings.model_fields:
            return getattr(self._settings, key)
        return default

    def set(self, key: str, value: Any) -> None:
        """Set configuration value with pydantic validation.

        Args:
            key: Setting key
            value: Setting value

        Raises:
            KeyError: If key is not a known setting
            ValueError: If value fails validation
        """
        if key not in AppSettings.model_fields:
            raise KeyError(f"Unknown setting: {key}")

        updated = self._settings.model_dump()
        updated[key] = value
        try:
            self._settings = AppSettings(**updated)
        except ValidationError as e:
            raise ValueError(f"Invalid value for {key}: {e}") from e

    def get_all(self) -> dict[str, Any]:
        """Get all settings as dictionary."""
        return self._settings.model_dump()

    def resolve_layout(self) -> str:
        """Concrete layout id, detecting the system layout for 'auto'."""
        layout = self._settings.keyboard_layout
        if layout == AUTO_LAYOUT:
            layout = detect_layout_id()
            log.info(f"Detected keyboard layout: {layout}")
        return layout

    def make_task(self, task_id: str, target_text: str,
                  min_accuracy: Optional[float] = None, instruction: str = "",
                  time_limit: Optional[int] = None) -> Task:
        """Build a Task, using default_min_accuracy when none is given.

        Args:
            task_id: Task identifier
            target_text: Text the user must type
            min_accuracy: Pass threshold (default: the configured default)
            instruction: Instruction shown to the user
            time_limit: Optional time limit in seconds

        Raises:
            ValueError: If a value fails validation
        """
        if min_accuracy is None:
            min_accuracy = self._settings.default_min_accuracy
        return Task(id=task_id, instruction=instruction, target_text=target_text,
                    min_accuracy=min_accuracy, time_limit=time_limit)

    def session_config(self) -> SessionConfig:
        """SessionConfig for a new typing session."""
        return SessionConfig(
            keyboard_layout=self.resolve_layout(),
            ignored_input_policy=self._settings.ignored_input_policy,
        )
