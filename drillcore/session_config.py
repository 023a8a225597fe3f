"""Typing session configuration with Pydantic validation."""

from enum import Enum

from pydantic import BaseModel, ConfigDict, Field, field_validator

from drillutils.keyboard_layouts import LAYOUTS


class IgnoredInputPolicy(str, Enum):
    """Whether presses ignored while paused or complete count against true accuracy.

    Only input made while the session is paused or complete is ignored input.
    A backspace at index 0 is a no-op but still counts under both policies.
    """

    COUNT = "count"
    EXCLUDE = "exclude"


class SessionConfig(BaseModel):
    """Configuration for KeystrokeProcessor with validation."""

    keyboard_layout: str = Field(
        default="qwerty-us",
        description="Layout used for finger attribution in analytics",
    )
    ignored_input_policy: IgnoredInputPolicy = Field(
        default=IgnoredInputPolicy.COUNT,
        description="Count ignored presses in the true accuracy denominator",
    )

    model_config = ConfigDict(extra="ignore", use_enum_values=True)

    @field_validator("keyboard_layout")
    @classmethod
    def validate_layout(cls, v):
        """Only concrete layout ids are valid for a running session."""
        if v not in LAYOUTS:
            raise ValueError(
                f"keyboard_layout must be one of {sorted(LAYOUTS)}, got '{v}'"
            )
        return v


__all__ = ["IgnoredInputPolicy", "SessionConfig"]
