"""Validation helpers for typedrill."""

import logging
from typing import Optional

log = logging.getLogger("typedrill.validation")


def validate_duration_ms(start_ms: Optional[int], end_ms: Optional[int]) -> int:
    """Calculate duration, ensuring non-negative result.

    Args:
        start_ms: Start timestamp in milliseconds (None if never started)
        end_ms: End timestamp in milliseconds (None if not finished)

    Returns:
        Duration in milliseconds (non-negative)
    """
    if start_ms is None or end_ms is None:
        return 0

    duration = end_ms - start_ms
    if duration < 0:
        log.warning(f"Negative duration: {duration}ms (start={start_ms}, end={end_ms})")
        return 0

    return duration


def clamp_fraction(value: float) -> float:
    """Clamp a ratio into [0, 1]; NaN becomes 0."""
    if value != value:
        return 0.0
    return min(1.0, max(0.0, value))


def validate_key(key: str) -> str:
    """Ensure a key press carries exactly one character.

    One character means one code point: a decomposed accented letter (base
    letter plus combining mark) is two code points and is rejected.

    Raises:
        ValueError: If the key is empty or longer than one character
    """
    if not isinstance(key, str) or len(key) != 1:
        raise ValueError(f"Key press must be a single character, got {key!r}")
    return key
