"""Pydantic models for typedrill data structures."""

from enum import Enum
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


class FingerName(str, Enum):
    """Fingers, numbered 1-5 left pinky to thumb, 6-10 right thumb to pinky."""

    LEFT_PINKY = "left_pinky"
    LEFT_RING = "left_ring"
    LEFT_MIDDLE = "left_middle"
    LEFT_INDEX = "left_index"
    LEFT_THUMB = "left_thumb"
    RIGHT_THUMB = "right_thumb"
    RIGHT_INDEX = "right_index"
    RIGHT_MIDDLE = "right_middle"
    RIGHT_RING = "right_ring"
    RIGHT_PINKY = "right_pinky"


class Hand(str, Enum):
    LEFT = "left"
    RIGHT = "right"


class CharacterType(str, Enum):
    """Character class of an expected character."""

    LOWERCASE = "lowercase"
    UPPERCASE = "uppercase"
    NUMBERS = "numbers"
    PUNCTUATION = "punctuation"
    WHITESPACE = "whitespace"

    @property
    def label(self) -> str:
        return CHARACTER_TYPE_LABELS[self]


CHARACTER_TYPE_LABELS = {
    CharacterType.LOWERCASE: "Lowercase",
    CharacterType.UPPERCASE: "Uppercase",
    CharacterType.NUMBERS: "Numbers",
    CharacterType.PUNCTUATION: "Punctuation & Symbols",
    CharacterType.WHITESPACE: "Whitespace",
}


class Task(BaseModel):
    """A single typing exercise supplied by the lesson catalogue."""

    id: str = Field(..., description="Task identifier")
    instruction: str = Field(default="", description="Instruction shown to the user")
    target_text: str = Field(..., min_length=1, description="Text the user must type")
    min_accuracy: float = Field(
        ..., gt=0, le=1, description="Net accuracy required to pass (0-1]"
    )
    time_limit: Optional[int] = Field(
        default=None, gt=0, description="Optional time limit in seconds"
    )

    model_config = ConfigDict(extra="ignore", frozen=True)


class KeystrokeEvent(BaseModel):
    """One accepted key press in the session log."""

    char: str = Field(..., description="Typed character")
    timestamp: int = Field(..., description="Timestamp in milliseconds")
    index: int = Field(..., ge=0, description="Target position the key was typed at")
    is_correct: bool = Field(..., description="Whether the key matched the target")

    model_config = ConfigDict(extra="ignore", frozen=True)


class ErrorInfo(BaseModel):
    """An uncorrected mismatch at a target position."""

    index: int = Field(..., ge=0, description="Target position of the mistake")
    expected: str = Field(..., description="Expected character")
    typed: str = Field(..., description="Character typed instead")
    timestamp: int = Field(..., description="Timestamp in milliseconds")

    model_config = ConfigDict(extra="ignore", frozen=True)


class TaskResult(BaseModel):
    """Summary of a completed typing session."""

    task_id: str = Field(..., description="Identifier of the completed task")
    wpm: float = Field(..., ge=0, description="Net words per minute (1 decimal)")
    raw_wpm: float = Field(..., ge=0, description="Raw words per minute (1 decimal)")
    accuracy: float = Field(..., ge=0, le=1, description="Net accuracy (3 decimals)")
    true_accuracy: float = Field(
        ..., ge=0, le=1, description="Accuracy over every key press (3 decimals)"
    )
    total_keystrokes: int = Field(..., ge=0, description="All key presses incl. backspace")
    backspace_count: int = Field(..., ge=0, description="Backspace presses")
    errors: list[ErrorInfo] = Field(
        default_factory=list, description="Uncorrected mistakes at completion"
    )
    duration: int = Field(..., ge=0, description="Session duration in milliseconds")
    completed_at: int = Field(..., description="Completion timestamp in milliseconds")
    passed: bool = Field(..., description="Whether accuracy met the task minimum")

    model_config = ConfigDict(extra="ignore")


class TrueAccuracyStats(BaseModel):
    """Live true accuracy inputs."""

    total_keypresses: int = Field(..., ge=0, description="All key presses")
    backspaces: int = Field(..., ge=0, description="Backspace presses")
    true_accuracy: float = Field(..., description="Correct keystrokes / key presses")


class WordAnalysis(BaseModel):
    """Performance for one distinct word of the target text."""

    word: str = Field(..., description="The word")
    count: int = Field(..., description="Occurrences typed")
    avg_time: int = Field(..., description="Mean first-to-last keystroke span (ms)")
    wpm: int = Field(..., description="Words per minute for this word")
    errors: int = Field(..., description="Incorrect keystrokes across occurrences")
    accuracy: float = Field(..., description="Fraction of correct characters (2 decimals)")


class BigramAnalysis(BaseModel):
    bigram: str = Field(..., description="Expected two-character sequence")
    chars: tuple[str, str] = Field(..., description="The two characters")
    count: int = Field(..., description="Consecutive occurrences")
    avg_time: int = Field(..., description="Mean time between the keystrokes (ms)")
    errors: int = Field(..., description="Occurrences with any incorrect keystroke")


class TrigramAnalysis(BaseModel):
    trigram: str = Field(..., description="Expected three-character sequence")
    chars: tuple[str, str, str] = Field(..., description="The three characters")
    count: int = Field(..., description="Consecutive occurrences")
    avg_time: int = Field(..., description="Mean time across the keystrokes (ms)")
    errors: int = Field(..., description="Occurrences with any incorrect keystroke")


class FingerAnalysis(BaseModel):
    """Performance attributed to one finger."""

    finger: FingerName = Field(..., description="Finger name")
    finger_num: int = Field(..., ge=1, le=10, description="Finger id 1-10")
    hand: Hand = Field(..., description="Hand the finger belongs to")
    count: int = Field(..., description="Characters typed with this finger")
    avg_delay: int = Field(..., description="Mean inter-keystroke delay (ms)")
    wpm: int = Field(..., description="Characters / 5 over the whole session time")
    errors: int = Field(..., description="Incorrect keystrokes")
    accuracy: float = Field(..., description="Fraction correct (2 decimals)")


class HandStats(BaseModel):
    count: int = Field(default=0, description="Characters typed with this hand")
    wpm: int = Field(default=0, description="Characters / 5 over the whole session time")
    accuracy: int = Field(default=100, description="Percent correct (0-100)")


class HandAnalysis(BaseModel):
    left: HandStats = Field(default_factory=HandStats)
    right: HandStats = Field(default_factory=HandStats)


class CharacterAnalysis(BaseModel):
    """Performance for one expected character."""

    char: str = Field(..., description="Expected character")
    count: int = Field(..., description="Recorded delays, at least 1")
    avg_delay: int = Field(..., description="Mean inter-keystroke delay (ms)")
    wpm: int = Field(..., description="Speed derived from the mean delay")
    errors: int = Field(..., description="Incorrect keystrokes at this character")
    mistypes: list[str] = Field(
        default_factory=list, description="Distinct characters typed instead"
    )


class CharacterTypeAnalysis(BaseModel):
    """Performance for one character class."""

    type: CharacterType = Field(..., description="Character class")
    label: str = Field(..., description="Display label")
    count: int = Field(..., description="Recorded delays, at least 1")
    avg_delay: int = Field(..., description="Mean inter-keystroke delay (ms)")
    wpm: int = Field(..., description="Speed derived from the mean delay")
    chars: list[str] = Field(default_factory=list, description="Distinct characters seen")


class TypingAnalytics(BaseModel):
    """Full breakdown of one session's keystroke log."""

    keystrokes: list[KeystrokeEvent] = Field(default_factory=list)
    words: list[WordAnalysis] = Field(default_factory=list)
    bigrams: list[BigramAnalysis] = Field(default_factory=list)
    trigrams: list[TrigramAnalysis] = Field(default_factory=list)
    fingers: list[FingerAnalysis] = Field(default_factory=list)
    hands: HandAnalysis = Field(default_factory=HandAnalysis)
    characters: list[CharacterAnalysis] = Field(default_factory=list)
    character_types: list[CharacterTypeAnalysis] = Field(default_factory=list)
    total_time: int = Field(default=0, description="Last minus first timestamp (ms)")
    total_chars: int = Field(default=0, description="Number of keystroke events")
