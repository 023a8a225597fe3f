"""Tests for KeystrokeProcessor session state machine."""

import pytest

from drillcore.keystroke_processor import KeystrokeProcessor
from drillcore.models import ErrorInfo
from drillcore.session_config import IgnoredInputPolicy, SessionConfig


class TestReset:
    """Test session initialization and reset."""

    def test_initial_state(self, processor):
        """Test a fresh session starts idle at index 0."""
        state = processor.state
        assert state.current_index == 0
        assert state.typed == ""
        assert state.errors == []
        assert state.start_time is None
        assert state.end_time is None
        assert not state.is_complete
        assert not state.is_paused
        assert processor.keystrokes == ()
        assert processor.total_keypresses == 0
        assert processor.backspace_count == 0

    def test_target_text_from_task(self, processor):
        assert processor.target_text == "hello world"
        assert processor.task.id == "task-1"

    def test_reset_clears_state_log_and_counters(self, processor, clock, make_task, type_text):
        """Test reset discards any prior session."""
        type_text(processor, "hel")
        processor.handle_backspace()

        processor.reset(make_task("abc", task_id="task-2"))

        assert processor.state.current_index == 0
        assert processor.keystrokes == ()
        assert processor.total_keypresses == 0
        assert processor.backspace_count == 0
        assert processor.target_text == "abc"

    def test_reset_without_task_keeps_task(self, processor, type_text):
        type_text(processor, "hello world")
        assert processor.is_complete

        processor.reset()

        assert not processor.is_complete
        assert processor.target_text == "hello world"

    def test_new_task_completes_independently(self, processor, make_task, type_text):
        """Test a completed session does not leak completion into the next task."""
        type_text(processor, "hello world")
        assert processor.get_result() is not None

        processor.reset(make_task("ab", task_id="task-2"))
        assert processor.get_result() is None

        type_text(processor, "ab")
        assert processor.get_result().task_id == "task-2"

    def test_key_press_without_task_raises(self):
        processor = KeystrokeProcessor()
        with pytest.raises(RuntimeError):
            processor.handle_key_press("a")

    @pytest.mark.parametrize("key", ["", "ab", "Shift", "e\u0301"])
    def test_non_character_key_rejected(self, processor, key):
        """Test multi-character or empty keys are rejected before counting."""
        with pytest.raises(ValueError):
            processor.handle_key_press(key)
        assert processor.total_keypresses == 0


class TestHandleKeyPress:
    """Test key press handling."""

    def test_correct_key_advances(self, processor):
        processor.handle_key_press("h")

        state = processor.state
        assert state.current_index == 1
        assert state.typed == "h"
        assert state.errors == []

    def test_first_key_starts_timer(self, processor, clock):
        clock.now_ms = 5000
        processor.handle_key_press("h")
        clock.advance(250)
        processor.handle_key_press("e")

        assert processor.state.start_time == 5000

    def test_wrong_key_records_error_and_still_advances(self, processor, clock):
        """Test a mismatch occupies the slot until it is backspaced."""
        processor.handle_key_press("h")
        clock.advance(100)
        processor.handle_key_press("x")

        state = processor.state
        assert state.current_index == 2
        assert state.typed == "hx"
        assert state.errors == [
            ErrorInfo(index=1, expected="e", typed="x", timestamp=clock.now_ms)
        ]

    def test_keystroke_log_records_every_accepted_press(self, processor, clock):
        processor.handle_key_press("h")
        clock.advance(120)
        processor.handle_key_press("x")

        log = processor.keystrokes
        assert len(log) == 2
        assert log[0].char == "h" and log[0].index == 0 and log[0].is_correct
        assert log[1].char == "x" and log[1].index == 1 and not log[1].is_correct
        assert log[1].timestamp - log[0].timestamp == 120

    def test_completes_at_end_of_text(self, processor, clock, type_text):
        type_text(processor, "hello worl")
        assert not processor.is_complete

        processor.handle_key_press("d")

        state = processor.state
        assert state.is_complete
        assert state.current_index == len("hello world")
        assert state.end_time == clock.now_ms

    def test_completes_with_uncorrected_errors(self, processor, type_text):
        type_text(processor, "hellx world")
        assert processor.is_complete
        assert len(processor.state.errors) == 1

    def test_input_ignored_when_complete(self, processor, type_text):
        """Test content is frozen after completion but raw counters still move."""
        type_text(processor, "hello world")
        before = processor.state

        processor.handle_key_press("x")
        processor.handle_backspace()

        after = processor.state
        assert after.current_index == before.current_index
        assert after.typed == before.typed
        assert after.errors == before.errors
        assert len(processor.keystrokes) == 11
        assert processor.total_keypresses == 13
        assert processor.backspace_count == 1

    def test_index_tracks_accepted_presses(self, make_task, clock):
        """Test current_index equals min(N, len) for N accepted presses."""
        processor = KeystrokeProcessor(make_task("abc"), clock=clock)
        for n, key in enumerate("abzq", start=1):
            processor.handle_key_press(key)
            assert processor.state.current_index == min(n, 3)


class TestHandleBackspace:
    """Test backspace handling."""

    def test_moves_index_back(self, processor):
        processor.handle_key_press("h")
        processor.handle_key_press("e")
        processor.handle_backspace()

        state = processor.state
        assert state.current_index == 1
        assert state.typed == "h"

    def test_removes_error_at_vacated_slot(self, processor):
        processor.handle_key_press("h")
        processor.handle_key_press("x")
        assert len(processor.state.errors) == 1

        processor.handle_backspace()

        assert processor.state.errors == []

    def test_keeps_errors_at_earlier_slots(self, processor):
        processor.handle_key_press("x")
        processor.handle_key_press("e")
        processor.handle_backspace()

        errors = processor.state.errors
        assert [e.index for e in errors] == [0]

    def test_noop_at_index_zero_but_counted(self, processor):
        processor.handle_backspace()

        assert processor.state.current_index == 0
        assert processor.total_keypresses == 1
        assert processor.backspace_count == 1

    def test_log_is_not_rewritten(self, processor):
        """Test backspacing leaves the keystroke log untouched."""
        processor.handle_key_press("h")
        processor.handle_key_press("x")
        processor.handle_backspace()
        processor.handle_key_press("e")

        assert [k.char for k in processor.keystrokes] == ["h", "x", "e"]
        assert [k.index for k in processor.keystrokes] == [0, 1, 1]


class TestPauseResume:
    """Test pause and resume."""

    def test_pause_sets_flag(self, processor):
        processor.pause()
        assert processor.is_paused

    def test_resume_clears_flag(self, processor):
        processor.pause()
        processor.resume()
        assert not processor.is_paused

    def test_paused_input_only_moves_counters(self, processor):
        processor.handle_key_press("h")
        processor.pause()
        processor.handle_key_press("e")
        processor.handle_backspace()

        state = processor.state
        assert state.current_index == 1
        assert state.typed == "h"
        assert len(processor.keystrokes) == 1
        assert processor.total_keypresses == 3
        assert processor.backspace_count == 1

    def test_pause_scenario(self, make_task, clock, type_text):
        """Pause after the first key, two ignored presses, resume and finish.

        Content reflects only non-paused presses; the raw counter includes
        the paused attempts and the duration spans the pause.
        """
        processor = KeystrokeProcessor(make_task("hello"), clock=clock)
        start = clock.now_ms
        processor.handle_key_press("h")
        processor.pause()
        clock.advance(5000)
        processor.handle_key_press("e")
        processor.handle_key_press("e")
        processor.resume()
        type_text(processor, "ello")

        result = processor.get_result()
        assert processor.state.typed == "hello"
        assert processor.state.errors == []
        assert len(processor.keystrokes) == 5
        assert result.total_keystrokes == 7
        # last key typed at start + 5000 + 300
        assert result.duration == 5300
        assert processor.state.start_time == start


class TestIgnoredInputPolicy:
    """Test how ignored presses affect true accuracy."""

    def _run(self, make_task, clock, policy):
        processor = KeystrokeProcessor(
            make_task("ab"),
            config=SessionConfig(ignored_input_policy=policy),
            clock=clock,
        )
        processor.handle_key_press("a")
        processor.pause()
        processor.handle_key_press("b")
        processor.handle_key_press("b")
        processor.resume()
        clock.advance(1000)
        processor.handle_key_press("b")
        return processor.get_result()

    def test_count_policy_penalizes_ignored_presses(self, make_task, clock):
        result = self._run(make_task, clock, IgnoredInputPolicy.COUNT)
        assert result.total_keystrokes == 4
        assert result.true_accuracy == 0.5

    def test_exclude_policy_ignores_them(self, make_task, clock):
        result = self._run(make_task, clock, IgnoredInputPolicy.EXCLUDE)
        assert result.total_keystrokes == 4
        assert result.true_accuracy == 1.0

    @pytest.mark.parametrize("policy", list(IgnoredInputPolicy))
    def test_backspace_at_start_counts_under_both_policies(self, make_task, clock, policy):
        """A no-op backspace at index 0 is not ignored input."""
        processor = KeystrokeProcessor(
            make_task("ab"),
            config=SessionConfig(ignored_input_policy=policy),
            clock=clock,
        )
        processor.handle_backspace()
        processor.handle_backspace()
        processor.handle_key_press("a")
        clock.advance(1000)
        processor.handle_key_press("b")

        result = processor.get_result()
        assert processor.counters.ignored_keypresses == 0
        assert result.total_keystrokes == 4
        assert result.true_accuracy == 0.5


class TestLiveValues:
    """Test derived live values."""

    def test_progress(self, make_task, clock, type_text):
        processor = KeystrokeProcessor(make_task("hello"), clock=clock)
        assert processor.progress() == 0
        type_text(processor, "he")
        assert processor.progress() == 40

    def test_live_accuracy(self, processor):
        assert processor.live_accuracy() == 100
        processor.handle_key_press("h")
        processor.handle_key_press("x")
        assert processor.live_accuracy() == 50

    def test_live_true_accuracy(self, processor):
        assert processor.live_true_accuracy() == 100
        processor.handle_key_press("h")
        processor.handle_key_press("x")
        processor.handle_backspace()
        processor.handle_key_press("e")
        # 2 correct positions over 4 presses
        assert processor.live_true_accuracy() == 50

    def test_live_wpm(self, processor, clock, type_text):
        assert processor.live_wpm() == 0
        type_text(processor, "hello", interval_ms=1000)
        # 5 chars = 1 word; clock is 5 seconds past the first key
        assert processor.live_wpm() == 12

    def test_true_accuracy_stats(self, processor):
        processor.handle_key_press("h")
        processor.handle_key_press("x")
        processor.handle_backspace()

        stats = processor.true_accuracy_stats()
        assert stats.total_keypresses == 3
        assert stats.backspaces == 1
        assert stats.true_accuracy == pytest.approx(1 / 3)


class TestIndependentSessions:
    def test_processors_do_not_share_state(self, make_task, clock):
        first = KeystrokeProcessor(make_task("abc"), clock=clock)
        second = KeystrokeProcessor(make_task("abc"), clock=clock)

        first.handle_key_press("a")
        first.handle_backspace()

        assert second.state.current_index == 0
        assert second.total_keypresses == 0
        assert second.keystrokes == ()
