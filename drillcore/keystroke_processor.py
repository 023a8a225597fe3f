"""Keystroke-driven typing session state machine."""

import logging
import time
from dataclasses import dataclass, field, replace
from typing import Callable, List, Optional

from drillcore import metrics
from drillcore.analytics import calculate_analytics
from drillcore.finger_map import FingerMap, get_finger_map
from drillcore.models import (
    ErrorInfo,
    KeystrokeEvent,
    Task,
    TaskResult,
    TrueAccuracyStats,
    TypingAnalytics,
)
from drillcore.session_config import SessionConfig
from drillcore.validation import validate_key

log = logging.getLogger("typedrill.keystroke_processor")


def wall_clock_ms() -> int:
    """Current wall clock time in epoch milliseconds."""
    return int(time.time() * 1000)


@dataclass
class SessionState:
    """Content state of one typing session.

    current_index always lies in [0, len(target_text)] and is_complete is
    True exactly when it reaches len(target_text).
    """

    current_index: int = field(default=0)
    typed: str = field(default="")
    errors: List[ErrorInfo] = field(default_factory=list)
    start_time: Optional[int] = field(default=None)
    end_time: Optional[int] = field(default=None)
    is_complete: bool = field(default=False)
    is_paused: bool = field(default=False)


@dataclass
class KeypressCounters:
    """Raw key press counters, kept apart from the content state.

    Every press and backspace is counted, including ones ignored because the
    session is paused or complete; ignored_keypresses tracks that subset.
    """

    total_keypresses: int = field(default=0)
    backspaces: int = field(default=0)
    ignored_keypresses: int = field(default=0)


class KeystrokeProcessor:
    """Turns key presses and backspaces into session state.

    A wrong key still advances the cursor and occupies its slot until it is
    backspaced. The first accepted key press starts the timer and the session
    completes the moment the cursor reaches the end of the target text; after
    that only the raw counters change.
    """

    def __init__(self, task: Optional[Task] = None,
                 config: Optional[SessionConfig] = None,
                 clock: Optional[Callable[[], int]] = None):
        """Initialize keystroke processor.

        Args:
            task: Task to start a session for (can be supplied later via reset)
            config: Session configuration (default: SessionConfig())
            clock: Returns the current time in epoch milliseconds
        """
        self.config = config or SessionConfig()
        self.clock = clock or wall_clock_ms
        self._task: Optional[Task] = None
        self._state = SessionState()
        self._counters = KeypressCounters()
        self._keystrokes: List[KeystrokeEvent] = []

        if task is not None:
            self.reset(task)

    @property
    def task(self) -> Optional[Task]:
        return self._task

    @property
    def target_text(self) -> str:
        return self._task.target_text if self._task else ""

    @property
    def state(self) -> SessionState:
        """Copy of the current session state."""
        return replace(self._state, errors=list(self._state.errors))

    @property
    def counters(self) -> KeypressCounters:
        """Copy of the raw key press counters."""
        return replace(self._counters)

    @property
    def keystrokes(self) -> tuple[KeystrokeEvent, ...]:
        """Snapshot of the append-only keystroke log."""
        return tuple(self._keystrokes)

    @property
    def total_keypresses(self) -> int:
        return self._counters.total_keypresses

    @property
    def backspace_count(self) -> int:
        return self._counters.backspaces

    @property
    def is_complete(self) -> bool:
        return self._state.is_complete

    @property
    def is_paused(self) -> bool:
        return self._state.is_paused

    def reset(self, task: Optional[Task] = None) -> None:
        """Start a fresh session, discarding state, counters and log.

        Args:
            task: New task to type; if None the current task is kept
        """
        if task is not None:
            self._task = task
        self._state = SessionState()
        self._counters = KeypressCounters()
        self._keystrokes = []
        log.debug(f"Session reset for task {self._task.id if self._task else None}")

    def handle_key_press(self, key: str) -> None:
        """Process a typed character.

        Args:
            key: The character produced by the key press (one code point)

        Raises:
            ValueError: If key is not exactly one character
            RuntimeError: If no task has been loaded
        """
        validate_key(key)
        if self._task is None:
            raise RuntimeError("No task loaded; call reset(task) first")

        self._counters.total_keypresses += 1

        state = self._state
        if state.is_complete or state.is_paused:
            self._counters.ignored_keypresses += 1
            return

        now = self.clock()
        target = self._task.target_text
        expected = target[state.current_index]
        is_correct = key == expected

        if state.start_time is None:
            state.start_time = now
            log.debug(f"Session started at {now}")

        self._keystrokes.append(
            KeystrokeEvent(char=key, timestamp=now,
                           index=state.current_index, is_correct=is_correct)
        )

        if not is_correct:
            state.errors.append(
                ErrorInfo(index=state.current_index, expected=expected,
                          typed=key, timestamp=now)
            )

        state.current_index += 1
        state.typed += key

        if state.current_index == len(target):
            state.is_complete = True
            state.end_time = now
            log.debug(
                f"Session complete: {len(target)} chars, "
                f"{len(state.errors)} uncorrected errors, "
                f"{self._counters.total_keypresses} key presses"
            )

    def handle_backspace(self) -> None:
        """Process a backspace, removing the error at the vacated slot."""
        self._counters.total_keypresses += 1
        self._counters.backspaces += 1

        state = self._state
        if state.is_complete or state.is_paused:
            self._counters.ignored_keypresses += 1
            return
        if state.current_index == 0:
            return

        state.current_index -= 1
        state.typed = state.typed[:-1]
        state.errors = [e for e in state.errors if e.index != state.current_index]

    def pause(self) -> None:
        self._state.is_paused = True
        log.debug("Session paused")

    def resume(self) -> None:
        self._state.is_paused = False
        log.debug("Session resumed")

    def get_result(self) -> Optional[TaskResult]:
        """Final result of the session, or None until it is complete."""
        return metrics.calculate_result(
            self._task, self._state, self._counters,
            self.config.ignored_input_policy,
        )

    def true_accuracy_stats(self) -> TrueAccuracyStats:
        return metrics.true_accuracy_stats(
            self._state, self._counters, self.config.ignored_input_policy
        )

    def progress(self) -> float:
        """Percent of the target text typed (0-100)."""
        return metrics.progress(self._state, self.target_text)

    def live_wpm(self, now_ms: Optional[int] = None) -> int:
        return metrics.live_wpm(
            self._state, self.clock() if now_ms is None else now_ms
        )

    def live_accuracy(self) -> int:
        return metrics.live_accuracy(self._state)

    def live_true_accuracy(self) -> int:
        return metrics.live_true_accuracy(
            self._state, self._counters, self.config.ignored_input_policy
        )

    def analytics(self, finger_map: Optional[FingerMap] = None) -> TypingAnalytics:
        """Analyze the keystroke log against the target text.

        Args:
            finger_map: Finger lookup to use (default: the session layout's)

        Returns:
            TypingAnalytics report
        """
        if finger_map is None:
            finger_map = get_finger_map(self.config.keyboard_layout)
        return calculate_analytics(self.keystrokes, self.target_text, finger_map)
