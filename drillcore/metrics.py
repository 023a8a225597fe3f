"""Session metrics: the final task result and live derived values.

Every function here reads a session snapshot and returns a number; none
of them mutate state, so repeated calls on the same snapshot agree.
"""

from typing import TYPE_CHECKING, Optional

from drillcore.models import Task, TaskResult, TrueAccuracyStats
from drillcore.session_config import IgnoredInputPolicy
from drillcore.validation import clamp_fraction, validate_duration_ms
from drillcore.wpm_calculator import (
    calculate_net_wpm,
    calculate_wpm,
    round_half_up,
)

if TYPE_CHECKING:
    from drillcore.keystroke_processor import KeypressCounters, SessionState


def correct_keystrokes(state: "SessionState") -> int:
    """Positions typed so far that hold the right character."""
    return state.current_index - len(state.errors)


def true_accuracy_denominator(
    counters: "KeypressCounters",
    policy: str = IgnoredInputPolicy.COUNT,
) -> int:
    """Key presses that count against true accuracy under the given policy."""
    if policy == IgnoredInputPolicy.EXCLUDE:
        return counters.total_keypresses - counters.ignored_keypresses
    return counters.total_keypresses


def true_accuracy(
    state: "SessionState",
    counters: "KeypressCounters",
    policy: str = IgnoredInputPolicy.COUNT,
) -> float:
    """Correct keystrokes over every key press issued, 1.0 before any press."""
    total = true_accuracy_denominator(counters, policy)
    if total <= 0:
        return 1.0
    return clamp_fraction(correct_keystrokes(state) / total)


def true_accuracy_stats(
    state: "SessionState",
    counters: "KeypressCounters",
    policy: str = IgnoredInputPolicy.COUNT,
) -> TrueAccuracyStats:
    return TrueAccuracyStats(
        total_keypresses=counters.total_keypresses,
        backspaces=counters.backspaces,
        true_accuracy=true_accuracy(state, counters, policy),
    )


def calculate_result(
    task: Optional[Task],
    state: "SessionState",
    counters: "KeypressCounters",
    policy: str = IgnoredInputPolicy.COUNT,
) -> Optional[TaskResult]:
    """Build the TaskResult for a finished session.

    Args:
        task: The task the session was scored against
        state: Session state snapshot
        counters: Raw key press counters of the session
        policy: Ignored input policy for the true accuracy denominator

    Returns:
        TaskResult, or None while the session is not complete
    """
    if task is None or not state.is_complete:
        return None
    if state.start_time is None or state.end_time is None:
        return None

    target_length = len(task.target_text)
    duration = validate_duration_ms(state.start_time, state.end_time)
    error_count = len(state.errors)

    raw_wpm = calculate_wpm(target_length, duration)
    wpm = calculate_net_wpm(target_length, error_count, duration)
    accuracy = max(0.0, (target_length - error_count) / target_length)

    return TaskResult(
        task_id=task.id,
        wpm=round_half_up(wpm, 1),
        raw_wpm=round_half_up(raw_wpm, 1),
        accuracy=round_half_up(accuracy, 3),
        true_accuracy=round_half_up(true_accuracy(state, counters, policy), 3),
        total_keystrokes=counters.total_keypresses,
        backspace_count=counters.backspaces,
        errors=list(state.errors),
        duration=duration,
        completed_at=state.end_time,
        passed=accuracy >= task.min_accuracy,
    )


def progress(state: "SessionState", target_text: str) -> float:
    """Percent of the target text covered by the cursor."""
    if not target_text:
        return 0.0
    return state.current_index / len(target_text) * 100


def live_wpm(state: "SessionState", now_ms: int) -> int:
    """Raw speed so far, rounded to a whole number."""
    if state.start_time is None or state.current_index == 0:
        return 0
    elapsed_ms = validate_duration_ms(state.start_time, now_ms)
    return int(round_half_up(calculate_wpm(state.current_index, elapsed_ms)))


def live_accuracy(state: "SessionState") -> int:
    """Percent of typed positions that are currently correct."""
    if state.current_index == 0:
        return 100
    return int(round_half_up(correct_keystrokes(state) / state.current_index * 100))


def live_true_accuracy(
    state: "SessionState",
    counters: "KeypressCounters",
    policy: str = IgnoredInputPolicy.COUNT,
) -> int:
    """True accuracy so far as a whole percent."""
    if true_accuracy_denominator(counters, policy) <= 0:
        return 100
    return int(round_half_up(true_accuracy(state, counters, policy) * 100))
