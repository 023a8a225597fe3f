"""WPM calculation utilities."""

import math

CHARS_PER_WORD = 5.0
MS_PER_MINUTE = 60000.0


def round_half_up(value: float, digits: int = 0) -> float:
    """Round with halves going up, e.g. 0.25 -> 0.3 at one digit.

    Args:
        value: Number to round
        digits: Decimal places to keep

    Returns:
        Rounded value
    """
    factor = 10 ** digits
    return math.floor(value * factor + 0.5) / factor


def duration_to_minutes(duration_ms: int) -> float:
    """Convert milliseconds to minutes, treating negative spans as zero."""
    return max(0, duration_ms) / MS_PER_MINUTE


def calculate_wpm(char_count: float, duration_ms: int) -> float:
    """Calculate words per minute.

    Args:
        char_count: Number of characters (5 characters = 1 word)
        duration_ms: Duration in milliseconds

    Returns:
        WPM (words per minute), or 0.0 if duration is zero or negative
    """
    minutes = duration_to_minutes(duration_ms)
    if minutes <= 0:
        return 0.0

    words = char_count / CHARS_PER_WORD
    return words / minutes


def calculate_net_wpm(char_count: int, error_count: int, duration_ms: int) -> float:
    """Calculate error-adjusted words per minute.

    Each uncorrected error removes one whole word:
    (chars / 5 - errors) / minutes, floored at 0.

    Args:
        char_count: Number of characters in the target text
        error_count: Uncorrected errors
        duration_ms: Duration in milliseconds

    Returns:
        Net WPM, never negative
    """
    minutes = duration_to_minutes(duration_ms)
    if minutes <= 0:
        return 0.0

    words = char_count / CHARS_PER_WORD
    return max(0.0, (words - error_count) / minutes)


def wpm_from_delay(avg_delay_ms: float) -> float:
    """Speed implied by typing one character every avg_delay_ms."""
    if avg_delay_ms <= 0:
        return 0.0
    return (1 / CHARS_PER_WORD) / (avg_delay_ms / MS_PER_MINUTE)
