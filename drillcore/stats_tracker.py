"""In-memory progress, rolling statistics and activity tracking."""

import logging
from datetime import datetime
from typing import Dict, Optional

from pydantic import BaseModel, Field

from drillcore.models import TaskResult

log = logging.getLogger("typedrill.stats_tracker")


class LessonProgress(BaseModel):
    """Pass/fail and best speed per lesson."""

    lesson_id: str = Field(..., description="Lesson identifier")
    total_tasks: int = Field(default=0, description="Tasks in the lesson")
    completed_tasks: int = Field(default=0, description="Distinct tasks passed")
    passed_task_ids: list[str] = Field(default_factory=list)
    task_results: list[TaskResult] = Field(default_factory=list)
    best_wpm: float = Field(default=0.0, description="Best net WPM")
    average_accuracy: float = Field(default=0.0, description="Mean net accuracy")


class UserStats(BaseModel):
    """Running averages and totals across all sessions."""

    sessions: int = Field(default=0, description="Results recorded")
    total_practice_time: int = Field(default=0, description="Total duration (ms)")
    total_words_typed: int = Field(default=0, description="Words typed")
    average_wpm: float = Field(default=0.0, description="Mean net WPM")
    average_accuracy: float = Field(default=0.0, description="Mean net accuracy")
    average_true_accuracy: float = Field(default=0.0, description="Mean true accuracy")
    total_keystrokes: int = Field(default=0, description="All key presses")
    total_backspaces: int = Field(default=0, description="Backspace presses")
    total_correct_keystrokes: int = Field(default=0, description="Presses that stuck")
    problem_keys: Dict[str, int] = Field(
        default_factory=dict, description="Uncorrected errors per expected key"
    )


class DailyActivity(BaseModel):
    """Practice totals for one day (usage heatmap)."""

    date: str = Field(..., description="Date in YYYY-MM-DD format")
    practice_time: int = Field(default=0, description="Practice time (ms)")
    characters: int = Field(default=0, description="Target characters typed")
    sessions: int = Field(default=0, description="Sessions completed")


def _running_mean(mean: float, count: int, value: float) -> float:
    return (mean * count + value) / (count + 1)


class StatsTracker:
    """Consumes TaskResults and keeps progress, stats and activity."""

    def __init__(self):
        self.lessons: Dict[str, LessonProgress] = {}
        self.user_stats = UserStats()
        self.activity: Dict[str, DailyActivity] = {}

    def record_task_result(self, result: TaskResult, lesson_id: str,
                           total_tasks: int = 0, characters: int = 0,
                           date: Optional[str] = None) -> None:
        """Record a completed task.

        Args:
            result: Result of the finished session
            lesson_id: Lesson the task belongs to
            total_tasks: Number of tasks in the lesson
            characters: Length of the task's target text
            date: Activity date (default: today, YYYY-MM-DD)
        """
        self._update_lesson(result, lesson_id, total_tasks)
        self._update_user_stats(result)
        self.record_activity(result.duration, characters, date)
        log.debug(
            f"Recorded {result.task_id} ({lesson_id}): "
            f"{result.wpm} wpm, passed={result.passed}"
        )

    def _update_lesson(self, result: TaskResult, lesson_id: str, total_tasks: int) -> None:
        progress = self.lessons.get(lesson_id)
        if progress is None:
            progress = LessonProgress(lesson_id=lesson_id, total_tasks=total_tasks)
            self.lessons[lesson_id] = progress
        elif total_tasks:
            progress.total_tasks = total_tasks

        progress.task_results.append(result)
        if result.passed and result.task_id not in progress.passed_task_ids:
            progress.passed_task_ids.append(result.task_id)
        progress.completed_tasks = len(progress.passed_task_ids)
        progress.best_wpm = max(progress.best_wpm, result.wpm)
        progress.average_accuracy = (
            sum(r.accuracy for r in progress.task_results) / len(progress.task_results)
        )

    def _update_user_stats(self, result: TaskResult) -> None:
        stats = self.user_stats
        n = stats.sessions

        for error in result.errors:
            stats.problem_keys[error.expected] = stats.problem_keys.get(error.expected, 0) + 1

        correct = result.total_keystrokes - result.backspace_count - len(result.errors)

        stats.total_practice_time += result.duration
        stats.total_words_typed += int(result.duration / 60000 * result.wpm)
        stats.average_wpm = _running_mean(stats.average_wpm, n, result.wpm)
        stats.average_accuracy = _running_mean(stats.average_accuracy, n, result.accuracy)
        stats.average_true_accuracy = _running_mean(
            stats.average_true_accuracy, n, result.true_accuracy
        )
        stats.total_keystrokes += result.total_keystrokes
        stats.total_backspaces += result.backspace_count
        stats.total_correct_keystrokes += max(0, correct)
        stats.sessions = n + 1

    def record_activity(self, practice_time: int, characters: int,
                        date: Optional[str] = None) -> DailyActivity:
        """Add a session to the activity of a day."""
        date = date or datetime.now().strftime('%Y-%m-%d')
        day = self.activity.setdefault(date, DailyActivity(date=date))
        day.practice_time += practice_time
        day.characters += characters
        day.sessions += 1
        return day

    def get_lesson_progress(self, lesson_id: str) -> Optional[LessonProgress]:
        return self.lessons.get(lesson_id)

    def get_activity(self, date: str) -> Optional[DailyActivity]:
        return self.activity.get(date)

    def is_lesson_complete(self, lesson_id: str) -> bool:
        progress = self.lessons.get(lesson_id)
        if progress is None or progress.total_tasks == 0:
            return False
        return progress.completed_tasks == progress.total_tasks

    def top_problem_keys(self, limit: int = 5) -> list[tuple[str, int]]:
        """Expected keys with the most uncorrected errors, worst first."""
        return sorted(self.user_stats.problem_keys.items(),
                      key=lambda item: item[1], reverse=True)[:limit]
