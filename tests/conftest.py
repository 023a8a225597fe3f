"""Shared test fixtures for typedrill tests."""

import pytest

from drillcore.keystroke_processor import KeystrokeProcessor
from drillcore.models import Task


class FakeClock:
    """Manually advanced millisecond clock."""

    def __init__(self, start_ms: int = 1_000_000):
        self.now_ms = start_ms

    def __call__(self) -> int:
        return self.now_ms

    def advance(self, ms: int) -> None:
        self.now_ms += ms


@pytest.fixture
def clock():
    """Clock starting at a fixed timestamp."""
    return FakeClock()


@pytest.fixture
def make_task():
    """Factory for tasks with sensible defaults."""
    def _make_task(target_text: str = "hello world", min_accuracy: float = 0.9,
                   task_id: str = "task-1") -> Task:
        return Task(id=task_id, instruction="Type the text",
                    target_text=target_text, min_accuracy=min_accuracy)
    return _make_task


@pytest.fixture
def processor(clock, make_task):
    """Processor loaded with 'hello world' and driven by the fake clock."""
    return KeystrokeProcessor(make_task(), clock=clock)


@pytest.fixture
def type_text(clock):
    """Type text one character at a time, advancing the clock after each key."""
    def _type_text(processor: KeystrokeProcessor, text: str, interval_ms: int = 100) -> None:
        for char in text:
            processor.handle_key_press(char)
            clock.advance(interval_ms)
    return _type_text
